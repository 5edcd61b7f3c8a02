"""
Hashing primitives for the Merkle tree.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    Encoder,
    Hasher,
    default_hasher,
    hash_single,
    hash_pair,
    sha256,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "Encoder",
    "Hasher",
    "default_hasher",
    "hash_single",
    "hash_pair",
    "sha256",
    "to_hex",
    "from_hex",
]
