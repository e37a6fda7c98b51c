"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    selfupdatectl check [--public-key|--pub PATH] [--executable|--exe PATH] [PATH ...] [--json] [--debug]
    selfupdatectl config --init [--path PATH]
    selfupdatectl config --show

Environment Variables:
    SELFUPDATE_PUBLIC_KEY       Default public key file (default: ed25519.pem)
    SELFUPDATE_LOG_LEVEL        Log level (default: INFO)
    SELFUPDATE_LOG_FILE         Also write logs to this file
    SELFUPDATE_OUTPUT_FORMAT    Output format: human, json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from selfupdate_cli import __version__
from selfupdate_cli.commands import check
from selfupdate_cli.commands.check import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from selfupdate_cli.config import load_config, get_default_config_template


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="selfupdatectl",
        description="Check detached ed25519 signatures of self-updating executables.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./selfupdate.json or ~/.config/selfupdate/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- check command ---
    check_parser = subparsers.add_parser(
        "check",
        help="Check that the signature of an executable is correct",
        description=(
            "Verify executables against their <executable>.ed25519 signature files. "
            "--executable is checked first, then every positional path in order; "
            "the first failure stops the run."
        ),
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Executables to check",
    )
    check_parser.add_argument(
        "--public-key", "--pub",
        dest="public_key",
        type=str,
        default=None,
        help="The public key file to use to verify the signature (default: from config or ed25519.pem)",
    )
    check_parser.add_argument(
        "--executable", "--exe",
        dest="executable",
        type=str,
        default=None,
        help="The executable to check the signature for",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log error details and show tracebacks",
    )
    check_parser.set_defaults(func=check.check_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="selfupdate.json",
        help="Path for config file (default: selfupdate.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (SELFUPDATE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: selfupdatectl config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    if getattr(args, "debug", False) and args.log_level is None:
        log_level = "DEBUG"
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
