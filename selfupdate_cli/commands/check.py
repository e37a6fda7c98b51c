"""
CLI Check Command

Check that executables match their detached ed25519 signatures:
- The --executable path is checked first, then every positional path
- Each executable needs a 64-byte ``<executable>.ed25519`` file beside it
- The first failure stops the run; later executables are not checked

Usage:
    selfupdatectl check [--public-key PATH] [--executable PATH] [PATH ...] [--json] [--debug]
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.signatures import Verifier
from core.schemas.errors import ErrorCodes, SelfUpdateException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class CheckSummary:
    """Summary of a check run for CLI output."""
    public_key: str = ""
    verified: list[str] = field(default_factory=list)
    failed: str | None = None
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.failed is None:
            del d["failed"]
        if self.error is None:
            del d["error"]
        return d

    @property
    def all_ok(self) -> bool:
        return self.failed is None


def collect_executables(args: Namespace) -> list[str]:
    """Return the executables to check, --executable first."""
    executables: list[str] = []
    if args.executable:
        executables.append(args.executable)
    executables.extend(args.paths or [])
    return executables


def run_checks(
    verifier: Verifier, executables: list[str]
) -> tuple[CheckSummary, SelfUpdateException | None]:
    """Check executables in order and record where the run stopped.

    Returns the summary and the exception that stopped the run, if any.
    """
    summary = CheckSummary(public_key=str(verifier.public_key_path))

    for executable in executables:
        logger.info(f"Checking signature of {executable}")
        try:
            verifier.check(executable)
        except SelfUpdateException as e:
            summary.failed = executable
            summary.error = e.to_error_model().model_dump()
            return summary, e
        summary.verified.append(executable)

    return summary, None


def print_summary_human(summary: CheckSummary) -> None:
    """Print summary in human-readable format."""
    for executable in summary.verified:
        print(f"✓ {executable}")
    if summary.failed is not None and summary.error is not None:
        print(f"Error: {summary.failed}: {summary.error['message']}", file=sys.stderr)


def print_summary_json(summary: CheckSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def print_error_debug(error: SelfUpdateException) -> None:
    """Print error details and the traceback, including the chained cause."""
    print(f"Error details: {json.dumps(error.details, sort_keys=True)}", file=sys.stderr)
    traceback.print_exception(error, file=sys.stderr)


def check_cmd(args: Namespace) -> int:
    """
    Execute the check command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    public_key = args.public_key or args.cli_config.public_key
    output_json = args.json or args.cli_config.default_output_format == "json"
    debug = args.debug

    executables = collect_executables(args)
    if not executables:
        logger.warning("No executable given, nothing to check")

    verifier = Verifier(public_key)
    summary, error = run_checks(verifier, executables)

    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info(f"Verified {len(summary.verified)} executable(s)")
        return EXIT_SUCCESS

    logger.warning(f"Signature check failed for {summary.failed}")
    if debug and error is not None:
        print_error_debug(error)

    if error is not None and error.code == ErrorCodes.VERIFICATION_FAILED:
        return EXIT_VERIFICATION_FAILED
    return EXIT_RUNTIME_ERROR
