"""
Test fixtures package for selfupdatectl tests.

This package provides factory functions for creating key material and
signed executables on disk.

Usage:
    from fixtures import make_signed_executable

    def test_something(tmp_path):
        signed = make_signed_executable(tmp_path)
"""

from .keys import (
    DEFAULT_CONTENT,
    SignedExecutable,
    flip_bit,
    make_ed25519_private_key,
    make_signed_executable,
    public_key_pem,
    write_public_key,
    write_rsa_public_key,
)

__all__ = [
    "DEFAULT_CONTENT",
    "SignedExecutable",
    "flip_bit",
    "make_ed25519_private_key",
    "make_signed_executable",
    "public_key_pem",
    "write_public_key",
    "write_rsa_public_key",
]
