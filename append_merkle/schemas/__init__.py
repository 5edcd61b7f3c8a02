"""
Element encoding and error taxonomy.
"""
from .canonical import (
    canonicalize_value,
    dumps_canonical,
    encode_canonical,
)
from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    CanonicalizationException,
    HashAlgorithmException,
    ConfigException,
)

__all__ = [
    "canonicalize_value",
    "dumps_canonical",
    "encode_canonical",
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "CanonicalizationException",
    "HashAlgorithmException",
    "ConfigException",
]
