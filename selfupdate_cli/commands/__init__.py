"""
CLI command modules.
"""

from selfupdate_cli.commands import check

__all__ = ["check"]
