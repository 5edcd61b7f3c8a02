"""
Merkle membership proofs.

A proof is either a MerkleProof (the sibling path for one leaf plus the
root it was taken against) or the InvalidProof marker. Both answer
verify(candidate) with a plain bool and never raise, so callers can ask
for proofs speculatively.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

from append_merkle.crypto.hashing import Hasher, to_hex
from append_merkle.merkle.indexing import ancestor_index
from append_merkle.schemas.errors import CanonicalizationException


def compute_root(
    index: int,
    nodes: Sequence[bytes],
    leaf_hash: bytes,
    hasher: Hasher,
) -> bytes:
    """
    Recompute a root from a leaf hash and its sibling path.

    At step n the ancestor of `index` decides the operand order:
    even means the running hash is the left child, odd means right.

    Args:
        index: Leaf position the path was taken for
        nodes: Sibling hashes, leaf to root
        leaf_hash: Hash of the candidate leaf
        hasher: Hasher the tree was built with

    Returns:
        The recomputed root hash
    """
    computed = leaf_hash
    for level, node in enumerate(nodes):
        if ancestor_index(index, level) % 2 == 0:
            computed = hasher.hash_pair(computed, node)
        else:
            computed = hasher.hash_pair(node, computed)
    return computed


@dataclass(frozen=True)
class MerkleProof:
    """
    Sibling path for one leaf, snapshotted at creation time.

    Later pushes to the tree do not change the proof; it keeps checking
    against the root it captured.

    Attributes:
        index: The 0-based leaf index the proof is for
        nodes: Sibling hashes from leaf level up to just below the root
        root: The tree root when the proof was taken
        hasher: The tree's Hasher, used to recompute the path
    """
    index: int
    nodes: tuple[bytes, ...]
    root: bytes
    hasher: Hasher

    is_valid = True

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        if not isinstance(self.nodes, tuple):
            object.__setattr__(self, "nodes", tuple(self.nodes))

    def verify(self, candidate: Any) -> bool:
        """
        Check whether `candidate` is the element this proof was taken for.

        Returns:
            True if the recomputed root equals the captured root.
            False for any candidate the hasher cannot encode.
        """
        try:
            leaf_hash = self.hasher.hash_single(candidate)
        except CanonicalizationException:
            # An element with no encoding was never a leaf
            return False
        return compute_root(self.index, self.nodes, leaf_hash, self.hasher) == self.root

    def __repr__(self) -> str:
        return (
            f"MerkleProof(index={self.index}, nodes={len(self.nodes)}, "
            f"root={to_hex(self.root)})"
        )


@dataclass(frozen=True)
class InvalidProof:
    """Marker for a proof request against an index the tree does not hold."""

    is_valid = False

    def verify(self, candidate: Any) -> bool:
        """Always False."""
        return False


INVALID_PROOF = InvalidProof()

Proof = Union[MerkleProof, InvalidProof]


def verify_proof(proof: Proof, candidate: Any) -> bool:
    """Function form of proof.verify(candidate)."""
    return proof.verify(candidate)


__all__ = [
    "MerkleProof",
    "InvalidProof",
    "INVALID_PROOF",
    "Proof",
    "compute_root",
    "verify_proof",
]
