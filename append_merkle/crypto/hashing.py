"""
Hashing Utilities
Single-value and ordered-pair hashing primitives for the Merkle tree.

This module provides:
- Hasher: the pluggable hash capability (algorithm + element encoder)
- hash_single / hash_pair: module-level primitives over the default hasher
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix

Hashing Rules:
1. Leaf hashing: leaf = H(encode(value)), encode defaults to canonical JSON
2. Pair hashing: parent = H(left + right), so operand order matters
3. Padding: a fixed all-zero digest, never produced by hashing an element
   except by collision

Security/Determinism Notes:
- Always hash raw bytes exactly as produced by the encoder
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable, Optional

from append_merkle.schemas.canonical import encode_canonical
from append_merkle.schemas.errors import HashAlgorithmException

DEFAULT_ALGORITHM = "sha256"

Encoder = Callable[[Any], bytes]


class Hasher:
    """
    Deterministic hash capability used by every tree operation.

    A tree, and every proof it hands out, carries the Hasher it was built
    with, so verification always recomputes with the same primitives.

    Args:
        algorithm: Any hashlib algorithm with a fixed digest size.
        encoder: Turns an element into bytes before hashing.
            Defaults to canonical JSON (append_merkle.schemas.canonical).

    Raises:
        HashAlgorithmException: If the algorithm is unknown or has a
            variable-length digest (e.g. shake_128).

    Example:
        >>> hasher = Hasher("sha256")
        >>> hasher.hash_pair(b"a", b"b") != hasher.hash_pair(b"b", b"a")
        True
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        encoder: Optional[Encoder] = None,
    ) -> None:
        try:
            probe = hashlib.new(algorithm)
        except (TypeError, ValueError) as e:
            raise HashAlgorithmException(
                f"Unsupported hash algorithm: {algorithm!r}",
                algorithm=str(algorithm),
            ) from e

        if probe.digest_size <= 0:
            raise HashAlgorithmException(
                f"Hash algorithm {algorithm!r} has no fixed digest size",
                algorithm=algorithm,
            )

        self.algorithm = probe.name
        self.encoder: Encoder = encoder or encode_canonical
        self.digest_size: int = probe.digest_size
        self.pad_hash: bytes = bytes(self.digest_size)

    def digest(self, data: bytes) -> bytes:
        """Hash raw bytes."""
        return hashlib.new(self.algorithm, data).digest()

    def hash_single(self, value: Any) -> bytes:
        """
        Hash one element.

        Used for leaves and for the verifier's leaf recomputation.

        Raises:
            CanonicalizationException: If the default encoder cannot
                encode the value.
        """
        return self.digest(self.encoder(value))

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Hash an ordered pair of node hashes.

        The left operand is always the left child; swapping operands
        changes the result.
        """
        return self.digest(left + right)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hasher):
            return NotImplemented
        return self.algorithm == other.algorithm and self.encoder == other.encoder

    def __hash__(self) -> int:
        return hash((self.algorithm, self.encoder))

    def __repr__(self) -> str:
        encoder_name = getattr(self.encoder, "__name__", type(self.encoder).__name__)
        return f"Hasher(algorithm={self.algorithm!r}, encoder={encoder_name})"


_DEFAULT_HASHER = Hasher(DEFAULT_ALGORITHM)


def default_hasher() -> Hasher:
    """Return the process-wide SHA-256 / canonical-JSON hasher."""
    return _DEFAULT_HASHER


def hash_single(value: Any, hasher: Optional[Hasher] = None) -> bytes:
    """
    Hash a single element with `hasher` (default SHA-256).

    Example:
        >>> hash_single(1) == hash_single(1)
        True
    """
    return (hasher or _DEFAULT_HASHER).hash_single(value)


def hash_pair(left: bytes, right: bytes, hasher: Optional[Hasher] = None) -> bytes:
    """
    Hash an ordered pair of node hashes with `hasher` (default SHA-256).

    parent = H(left + right)
    """
    return (hasher or _DEFAULT_HASHER).hash_pair(left, right)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
