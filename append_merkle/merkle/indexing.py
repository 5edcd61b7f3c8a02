"""
Index arithmetic over tree levels.

Each level of the tree is a list of nodes; an index for a given level is
the position within that list. These helpers are shared by proof
generation, proof verification and push, so all three agree on shape.
"""
from __future__ import annotations


def _check_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def ancestor_index(index: int, level: int) -> int:
    """
    Position of the ancestor `level` steps above the node at `index`.

    Example:
        >>> ancestor_index(5, 0), ancestor_index(5, 1), ancestor_index(5, 2)
        (5, 2, 1)
    """
    _check_non_negative("index", index)
    _check_non_negative("level", level)
    return index >> level


def sibling_index(index: int) -> int:
    """
    Position of the node sharing a parent with the node at `index`.

    Example:
        >>> sibling_index(4), sibling_index(5)
        (5, 4)
    """
    _check_non_negative("index", index)
    return index + 1 if index % 2 == 0 else index - 1


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and n & (n - 1) == 0


def next_power_of_two(count: int) -> int:
    """
    Least power of two >= count. Zero stays zero (an empty tree has no slots).

    Example:
        >>> [next_power_of_two(n) for n in (0, 1, 3, 4, 5)]
        [0, 1, 4, 4, 8]
    """
    _check_non_negative("count", count)
    if count == 0:
        return 0
    return 1 << (count - 1).bit_length()


__all__ = [
    "ancestor_index",
    "sibling_index",
    "is_power_of_two",
    "next_power_of_two",
]
