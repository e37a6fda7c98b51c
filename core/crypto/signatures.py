"""
Detached Signature Verification
Checks an executable against the ed25519 signature file shipped beside it.

This module provides:
- Loading an ed25519 public key from a PEM encoded SubjectPublicKeyInfo
- Reading the raw 64-byte signature stored in ``<executable>.ed25519``
- Verifying the executable content against that signature

Security Notes:
- The key is read fresh for every check; nothing is cached between checks
- Signature files are never truncated or padded, any other size is rejected
- The ed25519 primitive comes from ``cryptography``
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from core.schemas.errors import (
    FormatException,
    ReadException,
    VerificationException,
)


logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

SIGNATURE_SUFFIX = ".ed25519"
SIGNATURE_SIZE = 64

# First PEM block in the file; surrounding text is ignored.
_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([^\r\n-]+)-----\r?\n.*?-----END \1-----",
    re.DOTALL,
)


def _read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ReadException.from_os_error(e, path) from e


def signature_path(executable_path: PathLike) -> str:
    """
    Return the path of the signature file belonging to an executable.

    Example:
        >>> signature_path("bin/app")
        'bin/app.ed25519'
    """
    return os.fspath(executable_path) + SIGNATURE_SUFFIX


def load_public_key(path: PathLike) -> Ed25519PublicKey:
    """
    Load an ed25519 public key from a PEM file.

    Args:
        path: File holding a PEM block with a DER SubjectPublicKeyInfo

    Returns:
        The parsed ed25519 public key

    Raises:
        ReadException: If the file cannot be read
        FormatException: If no PEM block is found, the block is not a valid
            public key, or the key is not an ed25519 key
    """
    path = os.fspath(path)
    data = _read_file(path)

    match = _PEM_BLOCK.search(data)
    if match is None:
        raise FormatException("unable to decode PEM public key", path=path)

    try:
        key = serialization.load_pem_public_key(match.group(0))
    except (ValueError, UnsupportedAlgorithm) as e:
        raise FormatException(
            f"unable to parse public key: {e}",
            path=path,
            details={"pem_type": match.group(1).decode("ascii", "replace")},
        ) from e

    if not isinstance(key, Ed25519PublicKey):
        raise FormatException(
            "public key is not an ed25519 key",
            path=path,
            details={"key_type": type(key).__name__},
        )

    logger.debug(f"Loaded ed25519 public key from {path}")
    return key


def read_signature(executable_path: PathLike) -> bytes:
    """
    Read the detached signature of an executable.

    The signature lives in ``<executable_path>.ed25519`` and must be exactly
    64 raw bytes, both by file size and by the number of bytes actually read.

    Args:
        executable_path: Path of the signed executable (not the signature)

    Returns:
        The 64 signature bytes

    Raises:
        ReadException: If the signature file cannot be opened or read
        FormatException: If the file size or the bytes read are not 64
    """
    path = signature_path(executable_path)
    try:
        with open(path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size != SIGNATURE_SIZE:
                raise FormatException(
                    f"ed25519 signature must be {SIGNATURE_SIZE} bytes long and was {size}",
                    path=path,
                    details={"actual_size": size},
                )
            signature = f.read()
    except OSError as e:
        raise ReadException.from_os_error(e, path) from e

    # The file may have changed between stat and read
    if len(signature) != SIGNATURE_SIZE:
        raise FormatException(
            f"ed25519 signature must be {SIGNATURE_SIZE} bytes long and was {len(signature)}",
            path=path,
            details={"actual_size": len(signature)},
        )

    return signature


def read_executable(executable_path: PathLike) -> bytes:
    """Read the full content of an executable."""
    return _read_file(os.fspath(executable_path))


def check_executable(executable_path: PathLike, public_key_path: PathLike) -> None:
    """
    Verify an executable against its detached ed25519 signature.

    Steps, stopping at the first failure:
    1. Load the public key
    2. Read the executable content
    3. Read and size-check the signature
    4. Verify the signature over the content

    Args:
        executable_path: Executable to check
        public_key_path: PEM file with the ed25519 public key

    Raises:
        ReadException: A file cannot be read
        FormatException: The key or the signature file is malformed
        VerificationException: The signature does not match the content
    """
    executable = os.fspath(executable_path)

    public_key = load_public_key(public_key_path)
    content = read_executable(executable)
    signature = read_signature(executable)

    try:
        public_key.verify(signature, content)
    except InvalidSignature as e:
        raise VerificationException(executable=executable) from e

    logger.info(f"Signature verified for {executable}")


class Verifier:
    """
    Checks executables against a public key file.

    The key file is re-read for every executable, so each check is
    independent of the others.
    """

    def __init__(self, public_key_path: PathLike = "ed25519.pem") -> None:
        self.public_key_path = Path(public_key_path)

    def check(self, executable_path: PathLike) -> None:
        """Check a single executable. See check_executable()."""
        check_executable(executable_path, self.public_key_path)


__all__ = [
    "SIGNATURE_SUFFIX",
    "SIGNATURE_SIZE",
    "signature_path",
    "load_public_key",
    "read_signature",
    "read_executable",
    "check_executable",
    "Verifier",
]
