"""
Pytest configuration and shared fixtures for selfupdatectl tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_keys = importlib.import_module("fixtures.keys")

make_ed25519_private_key = _keys.make_ed25519_private_key
make_signed_executable = _keys.make_signed_executable


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def signed_executable(tmp_path):
    """Provide an executable, its signature and the matching public key."""
    return make_signed_executable(tmp_path)


@pytest.fixture
def ed25519_private_key():
    """Provide a fresh ed25519 private key."""
    return make_ed25519_private_key()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keep user config files and SELFUPDATE_* variables out of tests."""
    for name in ("SELFUPDATE_PUBLIC_KEY", "SELFUPDATE_LOG_LEVEL",
                 "SELFUPDATE_LOG_FILE", "SELFUPDATE_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
