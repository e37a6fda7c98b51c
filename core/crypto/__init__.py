"""
Core cryptographic utilities.

Detached ed25519 signature checks for executables.
"""
from .signatures import (
    SIGNATURE_SIZE,
    SIGNATURE_SUFFIX,
    Verifier,
    check_executable,
    load_public_key,
    read_executable,
    read_signature,
    signature_path,
)

__all__ = [
    "SIGNATURE_SIZE",
    "SIGNATURE_SUFFIX",
    "Verifier",
    "check_executable",
    "load_public_key",
    "read_executable",
    "read_signature",
    "signature_path",
]
