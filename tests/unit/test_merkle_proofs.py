"""
Merkle Proof Unit Tests
Tests for append_merkle/merkle/merkle_proofs.py and MerkleTree.get_proof

Covers:
1. Every element verifies against its own proof
2. Wrong values and wrong indices fail
3. Invalid proofs for out-of-range and empty requests
4. Tamper detection on proof fields
5. Proof snapshots survive later pushes unchanged
"""
import dataclasses

import pytest

from append_merkle.crypto.hashing import Hasher, hash_pair, hash_single
from append_merkle.merkle.merkle_proofs import (
    INVALID_PROOF,
    InvalidProof,
    MerkleProof,
    compute_root,
    verify_proof,
)
from append_merkle.merkle.merkle_tree import MerkleTree


class TestProofVerifies:
    """Tests for successful verification."""

    def test_known_scenarios(self):
        assert MerkleTree.build([1, 2, 3, 4]).get_proof(2).verify(3)
        assert MerkleTree.build([1, 2]).get_proof(1).verify(2)
        assert MerkleTree.build([1, 2, 3, 4, 5]).get_proof(4).verify(5)

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 8, 13])
    def test_every_index_verifies(self, count):
        elements = [f"leaf{i}" for i in range(count)]
        tree = MerkleTree.build(elements)

        for i, element in enumerate(elements):
            assert tree.get_proof(i).verify(element), f"Proof failed for index {i}"

    def test_proof_length_is_height_minus_one(self):
        tree = MerkleTree.build(range(13))

        for i in range(13):
            assert len(tree.get_proof(i).nodes) == tree.height() - 1

    def test_proof_captures_root_and_index(self, three_tree):
        proof = three_tree.get_proof(1)

        assert proof.index == 1
        assert proof.root == three_tree.root()
        assert proof.is_valid

    def test_verify_repeatable(self, four_tree):
        proof = four_tree.get_proof(0)
        assert all(proof.verify(1) for _ in range(3))

    def test_function_form(self, four_tree):
        assert verify_proof(four_tree.get_proof(3), 4)
        assert not verify_proof(four_tree.get_proof(3), 5)

    def test_custom_hasher_carried_by_proof(self):
        hasher = Hasher("sha3_256")
        tree = MerkleTree.build(["a", "b", "c"], hasher)
        proof = tree.get_proof(2)

        assert proof.hasher == hasher
        assert proof.verify("c")


class TestProofRejects:
    """Tests for failed verification."""

    def test_known_scenarios(self):
        assert not MerkleTree.build([1, 2, 3, 4]).get_proof(3).verify(2)
        assert not MerkleTree.build([1, 2]).get_proof(1).verify(1)
        assert not MerkleTree.build([1, 2, 3, 4, 5]).get_proof(4).verify(4)

    def test_every_other_element_rejected(self):
        elements = list(range(6))
        tree = MerkleTree.build(elements)

        for i in elements:
            proof = tree.get_proof(i)
            for other in elements:
                if other != i:
                    assert not proof.verify(other)

    def test_pad_position_not_provable(self, three_tree):
        """A pad leaf is never reachable through get_proof."""
        assert three_tree.get_proof(3) is INVALID_PROOF

    def test_unencodable_candidate_is_false(self, three_tree):
        assert three_tree.get_proof(0).verify(object()) is False

    def test_type_confusion_rejected(self, three_tree):
        """1 and "1" are different elements."""
        assert not three_tree.get_proof(0).verify("1")
        assert not three_tree.get_proof(0).verify(1.0)


class TestInvalidProof:
    """Tests for out-of-range requests."""

    @pytest.mark.parametrize("index", [3, 4, 10, 100])
    def test_index_past_len(self, three_tree, index):
        assert three_tree.get_proof(index) is INVALID_PROOF

    def test_negative_index(self, three_tree):
        assert three_tree.get_proof(-1) is INVALID_PROOF

    def test_empty_tree(self, empty_tree):
        assert empty_tree.get_proof(0) is INVALID_PROOF
        assert empty_tree.get_proof(10) is INVALID_PROOF

    def test_invalid_never_verifies(self):
        for candidate in (None, 0, 2, "x", b"", object()):
            assert INVALID_PROOF.verify(candidate) is False

    def test_invalid_flags(self):
        assert not INVALID_PROOF.is_valid
        assert InvalidProof() == INVALID_PROOF

    def test_empty_tree_then_verify_false(self, empty_tree):
        assert not empty_tree.get_proof(10).verify(2)


class TestTamperDetection:
    """Tests that altered proofs fail."""

    def test_tampered_node_fails(self, four_tree):
        proof = four_tree.get_proof(1)
        nodes = list(proof.nodes)
        nodes[0] = hash_single("evil")
        tampered = dataclasses.replace(proof, nodes=tuple(nodes))

        assert not tampered.verify(2)

    def test_tampered_root_fails(self, four_tree):
        proof = four_tree.get_proof(1)
        tampered = dataclasses.replace(proof, root=hash_single("evil"))

        assert not tampered.verify(2)

    def test_moved_index_fails(self, four_tree):
        """Same path at another index flips the operand order."""
        proof = four_tree.get_proof(1)
        moved = dataclasses.replace(proof, index=0)

        assert not moved.verify(2)

    def test_proof_is_frozen(self, four_tree):
        proof = four_tree.get_proof(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            proof.index = 3

    def test_negative_index_rejected_on_construction(self, hasher):
        with pytest.raises(ValueError, match="non-negative"):
            MerkleProof(index=-1, nodes=(), root=b"", hasher=hasher)

    def test_nodes_coerced_to_tuple(self, hasher):
        proof = MerkleProof(index=0, nodes=[b"a"], root=b"", hasher=hasher)
        assert proof.nodes == (b"a",)


class TestComputeRoot:
    """Tests for compute_root()."""

    def test_left_and_right_operands(self, hasher):
        leaf, sibling = hash_single("leaf"), hash_single("sibling")

        assert compute_root(0, [sibling], leaf, hasher) == hash_pair(leaf, sibling)
        assert compute_root(1, [sibling], leaf, hasher) == hash_pair(sibling, leaf)

    def test_no_nodes_returns_leaf(self, hasher):
        leaf = hash_single("leaf")
        assert compute_root(0, [], leaf, hasher) == leaf


class TestProofSnapshot:
    """Proofs keep the root they were taken against."""

    def test_old_proof_keeps_old_root(self, three_tree):
        proof = three_tree.get_proof(0)
        old_root = three_tree.root()

        three_tree.push(4)

        assert proof.root == old_root
        assert proof.root != three_tree.root()
        assert proof.verify(1)

    def test_fresh_proof_after_push(self, three_tree):
        three_tree.push(4)
        assert three_tree.get_proof(0).verify(1)
