"""
Append-only Merkle Tree
Tree construction, proof generation, and in-place append.

This module provides:
- MerkleTree.build: hash a sequence of elements into a full level hierarchy
- MerkleTree.get_proof: sibling path for one leaf, or INVALID_PROOF
- MerkleTree.push: append one element, rehashing only its ancestor path
- generate_tree_levels: pairwise reduction shared by build and doubling

Tree Shape Rules (Hard Contracts):
1. capacity is a power of two (or 0 for an empty tree)
2. level 0 holds capacity leaves: element hashes, then pad hashes
3. level i holds capacity / 2^i nodes; the last level is the single root
4. parent = hash_pair(left, right), left child at the even position
5. padding leaves use Hasher.pad_hash, never a copy of a real element

Determinism Notes:
- Leaf order is the order elements were given or pushed
- This module never sorts leaves
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from append_merkle.crypto.hashing import Hasher, default_hasher, to_hex
from append_merkle.merkle.indexing import (
    ancestor_index,
    next_power_of_two,
    sibling_index,
)
from append_merkle.merkle.merkle_proofs import INVALID_PROOF, MerkleProof, Proof

logger = logging.getLogger(__name__)


def generate_tree_levels(leaves: list[bytes], hasher: Hasher) -> list[list[bytes]]:
    """
    Build every level above `leaves` by hashing consecutive pairs.

    Args:
        leaves: Level 0; its length must be a power of two (or zero)
        hasher: Hasher used for the pair hashes

    Returns:
        Levels from leaves to root. Empty leaves give [[]].

    Example:
        >>> levels = generate_tree_levels([a, b, c, d], hasher)
        >>> [len(level) for level in levels]
        [4, 2, 1]
    """
    current = list(leaves)
    levels = [current]

    while len(current) > 1:
        current = [
            hasher.hash_pair(current[i], current[i + 1])
            for i in range(0, len(current), 2)
        ]
        levels.append(current)

    return levels


def _pad_subtree_levels(capacity: int, hasher: Hasher) -> list[list[bytes]]:
    """
    Levels of a subtree made only of `capacity` pad leaves.

    Every node on a level is the same value, so each level costs one hash.
    Equivalent to generate_tree_levels([pad_hash] * capacity, hasher).
    """
    levels = []
    node = hasher.pad_hash
    width = capacity
    while True:
        levels.append([node] * width)
        if width == 1:
            return levels
        node = hasher.hash_pair(node, node)
        width //= 2


class MerkleTree:
    """
    Append-only binary Merkle tree over a sequence of elements.

    The tree owns its levels outright: level 0 is the leaf row, the last
    level is the root. Capacity doubles when a push finds no free leaf.

    Not safe for concurrent mutation. Guard push() with an exclusive lock
    if the tree is shared; get_proof() and verification may run together
    only while no push is in flight.

    Example:
        >>> tree = MerkleTree.build([1, 2, 3])
        >>> tree.get_proof(1).verify(2)
        True
        >>> tree.push(4)
        >>> tree.is_full()
        True
    """

    def __init__(
        self,
        levels: list[list[bytes]],
        capacity: int,
        padding: int,
        hasher: Hasher,
    ) -> None:
        """Use MerkleTree.build(); this constructor trusts its arguments."""
        self._levels = levels
        self._capacity = capacity
        self._padding = padding
        self._hasher = hasher

    @classmethod
    def build(
        cls,
        elements: Iterable[Any],
        hasher: Optional[Hasher] = None,
    ) -> "MerkleTree":
        """
        Construct a tree whose leaves are the hashes of `elements`.

        Empty input is accepted and gives a capacity-0 tree with no root,
        which push() can grow from nothing.

        Args:
            elements: Ordered elements to hash into leaves
            hasher: Hash capability (default: SHA-256 over canonical JSON)

        Returns:
            A new MerkleTree

        Raises:
            CanonicalizationException: If an element cannot be encoded
        """
        hasher = hasher or default_hasher()
        leaves = [hasher.hash_single(element) for element in elements]

        count = len(leaves)
        capacity = next_power_of_two(count)
        padding = capacity - count
        leaves.extend([hasher.pad_hash] * padding)

        levels = generate_tree_levels(leaves, hasher) if capacity else []

        logger.debug(
            "Built Merkle tree: %d elements, capacity %d, height %d",
            count, capacity, len(levels),
        )
        return cls(levels, capacity, padding, hasher)

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------

    def height(self) -> int:
        """Number of levels, leaves and root included. 0 for an empty tree."""
        return len(self._levels)

    def len(self) -> int:
        """Number of real elements (excludes padding)."""
        return self._capacity - self._padding

    def __len__(self) -> int:
        return self.len()

    def capacity(self) -> int:
        """Number of leaf slots allocated; a power of two, or 0."""
        return self._capacity

    @property
    def padding(self) -> int:
        """Free leaf slots: capacity() - len()."""
        return self._padding

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """Snapshot of every level, leaves first."""
        return tuple(tuple(level) for level in self._levels)

    def is_empty(self) -> bool:
        return self.len() == 0

    def is_full(self) -> bool:
        return self._padding == 0

    def root(self) -> Optional[bytes]:
        """The root hash, or None if the tree holds no elements."""
        if self.is_empty():
            return None
        return self._levels[-1][0]

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def get_proof(self, index: int) -> Proof:
        """
        Sibling path for the leaf at `index`.

        Out-of-range requests (negative, >= len(), or any index on an
        empty tree) give INVALID_PROOF rather than raising, so proofs can
        be requested speculatively.

        Args:
            index: 0-based element position

        Returns:
            MerkleProof with height() - 1 nodes, or INVALID_PROOF
        """
        if self.is_empty() or index < 0 or index >= self.len():
            return INVALID_PROOF

        nodes = tuple(
            self._levels[level][sibling_index(ancestor_index(index, level))]
            for level in range(self.height() - 1)
        )

        return MerkleProof(
            index=index,
            nodes=nodes,
            root=self._levels[-1][0],
            hasher=self._hasher,
        )

    # -------------------------------------------------------------------------
    # Append
    # -------------------------------------------------------------------------

    def _double_capacity(self) -> None:
        """
        Double the leaf slots, growing the tree by one level.

        A pad-only subtree of the current height is appended level by
        level, then a new root joins the old root (left) with the pad
        subtree root (right).

        Base case: an empty tree has no old root, so the one-leaf pad
        subtree becomes the whole tree (capacity 0 -> 1).
        """
        width = max(self._capacity, 1)
        pad_levels = _pad_subtree_levels(width, self._hasher)

        if self._levels:
            for level, pad_nodes in zip(self._levels, pad_levels):
                level.extend(pad_nodes)
            top = self._levels[-1]
            self._levels.append([self._hasher.hash_pair(top[0], top[1])])
        else:
            self._levels = pad_levels

        self._padding += width
        self._capacity += width

        logger.debug(
            "Doubled Merkle tree capacity to %d (height %d)",
            self._capacity, self.height(),
        )

    def push(self, value: Any) -> None:
        """
        Append one element.

        Only the new leaf's ancestors are rehashed. If no leaf slot is
        free, capacity is doubled first.

        Args:
            value: Element to append

        Raises:
            CanonicalizationException: If the element cannot be encoded;
                the tree is left unchanged.
        """
        leaf_hash = self._hasher.hash_single(value)

        if self.is_full():
            self._double_capacity()

        index = self.len()
        self._levels[0][index] = leaf_hash

        for level in range(1, self.height()):
            below = self._levels[level - 1]
            node = below[index]
            sibling = below[sibling_index(index)]
            parent = ancestor_index(index, 1)

            if index % 2 == 0:
                self._levels[level][parent] = self._hasher.hash_pair(node, sibling)
            else:
                self._levels[level][parent] = self._hasher.hash_pair(sibling, node)

            index = parent

        self._padding -= 1

        logger.debug("Pushed element at index %d (capacity %d)", self.len() - 1, self._capacity)

    def __repr__(self) -> str:
        root = self.root()
        return (
            f"MerkleTree(len={self.len()}, capacity={self._capacity}, "
            f"height={self.height()}, root={to_hex(root) if root else None})"
        )


def build(elements: Iterable[Any], hasher: Optional[Hasher] = None) -> MerkleTree:
    """Function form of MerkleTree.build()."""
    return MerkleTree.build(elements, hasher)


__all__ = [
    "MerkleTree",
    "build",
    "generate_tree_levels",
]
