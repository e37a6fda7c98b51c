"""
Signature Check Errors
File: errors.py

Purpose: Error taxonomy for executable signature checks.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used by the verifier."""

    # File could not be opened or read
    IO_ERROR = "IO_ERROR"

    # Malformed PEM, wrong key type, wrong signature length, short read
    FORMAT_ERROR = "FORMAT_ERROR"

    # Well-formed inputs whose signature does not match
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SelfUpdateError(BaseModel):
    """
    Structured form of a failed check.

    Used for machine-readable CLI output; raised failures travel as
    SelfUpdateException and are converted with to_error_model().
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.FORMAT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "SelfUpdateException":
        """Convert this error model to a raisable exception."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code, SelfUpdateException)
        if exc_type is SelfUpdateException:
            return SelfUpdateException(
                message=self.message,
                code=self.code,
                details=self.details,
            )
        return exc_type(message=self.message, details=self.details)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SelfUpdateException(Exception):
    """
    Base exception for every signature check failure.

    Carries structured error information and can be converted to a
    SelfUpdateError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SELFUPDATE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = dict(details or {})

    def to_error_model(self) -> SelfUpdateError:
        """Convert this exception to a SelfUpdateError model."""
        return SelfUpdateError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ReadException(SelfUpdateException):
    """Raised when a key, executable or signature file cannot be read."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.IO_ERROR,
            details=full_details,
        )

    @classmethod
    def from_os_error(cls, error: OSError, path: str) -> "ReadException":
        """Wrap an OSError, keeping the operating system's text verbatim."""
        details: dict[str, Any] = {}
        if error.errno is not None:
            details["errno"] = error.errno
        return cls(message=str(error), path=path, details=details)


class FormatException(SelfUpdateException):
    """Raised when a public key or signature file is malformed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.FORMAT_ERROR,
            details=full_details,
        )


class VerificationException(SelfUpdateException):
    """Raised when a well-formed signature does not match the executable."""

    def __init__(
        self,
        message: str = "unable to verify signature",
        executable: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if executable:
            full_details["executable"] = executable
        super().__init__(
            message=message,
            code=ErrorCodes.VERIFICATION_FAILED,
            details=full_details,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[SelfUpdateException]] = {
    ErrorCodes.IO_ERROR: ReadException,
    ErrorCodes.FORMAT_ERROR: FormatException,
    ErrorCodes.VERIFICATION_FAILED: VerificationException,
}
