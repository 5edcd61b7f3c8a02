"""
Index Arithmetic Unit Tests
Tests for append_merkle/merkle/indexing.py
"""
import pytest

from append_merkle.merkle.indexing import (
    ancestor_index,
    is_power_of_two,
    next_power_of_two,
    sibling_index,
)


class TestAncestorIndex:
    """Tests for ancestor_index()."""

    def test_level_zero_is_identity(self):
        for index in range(10):
            assert ancestor_index(index, 0) == index

    def test_floor_division_by_power_of_two(self):
        for index in range(64):
            for level in range(7):
                assert ancestor_index(index, level) == index // (2 ** level)

    def test_known_path(self):
        assert [ancestor_index(5, level) for level in range(4)] == [5, 2, 1, 0]

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            ancestor_index(-1, 0)
        with pytest.raises(ValueError):
            ancestor_index(1, -1)


class TestSiblingIndex:
    """Tests for sibling_index()."""

    def test_even_goes_right(self):
        assert sibling_index(0) == 1
        assert sibling_index(6) == 7

    def test_odd_goes_left(self):
        assert sibling_index(1) == 0
        assert sibling_index(7) == 6

    def test_involution(self):
        for index in range(32):
            assert sibling_index(sibling_index(index)) == index

    def test_siblings_share_parent(self):
        for index in range(32):
            assert ancestor_index(index, 1) == ancestor_index(sibling_index(index), 1)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            sibling_index(-2)


class TestPowersOfTwo:
    """Tests for next_power_of_two() and is_power_of_two()."""

    @pytest.mark.parametrize(
        "count,expected",
        [(0, 0), (1, 1), (2, 2), (3, 4), (4, 4), (5, 8), (13, 16), (32, 32), (33, 64)],
    )
    def test_next_power_of_two(self, count, expected):
        assert next_power_of_two(count) == expected

    def test_is_power_of_two(self):
        assert [n for n in range(17) if is_power_of_two(n)] == [1, 2, 4, 8, 16]

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            next_power_of_two(-1)
