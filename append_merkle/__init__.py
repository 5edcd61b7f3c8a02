"""
append_merkle - append-only binary Merkle tree.

Build a tree from a sequence of elements, hand out compact membership
proofs, verify candidates against them, and append new elements with
amortized O(log n) rehashing.

Usage:
    from append_merkle import MerkleTree

    tree = MerkleTree.build([1, 2, 3])
    assert tree.get_proof(1).verify(2)

    empty = MerkleTree.build([])
    empty.push(4)
    assert empty.get_proof(0).verify(4)
"""
from append_merkle.crypto import Hasher, hash_pair, hash_single
from append_merkle.merkle import (
    INVALID_PROOF,
    InvalidProof,
    MerkleProof,
    MerkleTree,
    Proof,
    build,
    verify_proof,
)
from append_merkle.schemas import (
    CanonicalizationException,
    ConfigException,
    HashAlgorithmException,
    MerkleException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProof",
    "InvalidProof",
    "INVALID_PROOF",
    "Proof",
    "build",
    "verify_proof",
    "Hasher",
    "hash_single",
    "hash_pair",
    "MerkleException",
    "CanonicalizationException",
    "HashAlgorithmException",
    "ConfigException",
]
