"""
Schemas
File: __init__.py

Purpose: Export the error models and exceptions shared by the verifier
and the CLI.
"""

from .errors import (
    ErrorCodes,
    FormatException,
    ReadException,
    SelfUpdateError,
    SelfUpdateException,
    VerificationException,
)

__all__ = [
    "ErrorCodes",
    "FormatException",
    "ReadException",
    "SelfUpdateError",
    "SelfUpdateException",
    "VerificationException",
]
