"""
Pytest configuration and shared fixtures for append_merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from append_merkle.crypto.hashing import Hasher  # noqa: E402
from append_merkle.merkle.merkle_tree import MerkleTree  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def hasher():
    """Default SHA-256 hasher."""
    return Hasher("sha256")


@pytest.fixture
def four_tree():
    """Full tree over [1, 2, 3, 4]."""
    return MerkleTree.build([1, 2, 3, 4])


@pytest.fixture
def three_tree():
    """Tree over [1, 2, 3] with one pad leaf."""
    return MerkleTree.build([1, 2, 3])


@pytest.fixture
def empty_tree():
    """Capacity-0 tree."""
    return MerkleTree.build([])


@pytest.fixture
def clean_env(monkeypatch):
    """Remove APPEND_MERKLE_* variables so config tests start from defaults."""
    for var in (
        "APPEND_MERKLE_HASH_ALGORITHM",
        "APPEND_MERKLE_LOG_LEVEL",
        "APPEND_MERKLE_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
