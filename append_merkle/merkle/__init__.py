"""
Append-only Merkle tree with membership proofs.

This package provides:
- MerkleTree: build, get_proof, push
- MerkleProof / InvalidProof: proof variants, both with verify(candidate)
- ancestor_index / sibling_index: index arithmetic shared by all of the above

Usage:
    from append_merkle.merkle import MerkleTree

    tree = MerkleTree.build([1, 2, 3])
    proof = tree.get_proof(1)
    assert proof.verify(2)

    tree.push(4)
    assert tree.get_proof(3).verify(4)
"""
from .indexing import (
    ancestor_index,
    sibling_index,
    is_power_of_two,
    next_power_of_two,
)
from .merkle_proofs import (
    INVALID_PROOF,
    InvalidProof,
    MerkleProof,
    Proof,
    compute_root,
    verify_proof,
)
from .merkle_tree import (
    MerkleTree,
    build,
    generate_tree_levels,
)

__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "InvalidProof",
    "INVALID_PROOF",
    "Proof",
    # Core functions
    "build",
    "generate_tree_levels",
    "compute_root",
    "verify_proof",
    # Index arithmetic
    "ancestor_index",
    "sibling_index",
    "is_power_of_two",
    "next_power_of_two",
]
