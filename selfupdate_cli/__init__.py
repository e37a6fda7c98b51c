"""
selfupdatectl CLI

Command-line interface for checking detached ed25519 signatures of
self-updating executables.

Usage:
    python -m selfupdate_cli check --pub ed25519.pem --exe ./myapp
    python -m selfupdate_cli check ./myapp-linux ./myapp-darwin
    python -m selfupdate_cli config --init
"""

__version__ = "0.1.0"
