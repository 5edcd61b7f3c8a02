"""
Canonical element encoding.

Purpose: turn tree elements into deterministic bytes so that leaf hashes
are stable across processes and runs.

Python's built-in hash() is salted per interpreter for str and bytes, so
it cannot back a Merkle leaf. Elements go through canonical JSON instead.

Encoding Rules (Hard Contracts):
1. None, bool, int, float, str and list map to their JSON forms
2. Every other type becomes a single-key object whose key is a "$" tag:
   {"$dict": {...}}, {"$tuple": [...]}, {"$set": [...]}, {"$bytes": "hex"},
   {"$enum": "module.Class.NAME"}, {"$datetime": "...Z"},
   {"$naive_datetime": "..."}, {"$model": ["module.Class", {...}]}
3. Mappings are always wrapped in "$dict", so no user mapping can pose
   as a tagged value
4. Mapping keys must be str; None values are kept

Two elements that are different values never share an encoding. Values
Python already treats as equal across types (set/frozenset, bytes/
bytearray, aware datetimes for the same instant) share one.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Rules:
        - If naive (no tzinfo): treat as UTC
        - If aware: convert to UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Returns:
        ISO-8601 formatted string with Z suffix (e.g., "2026-01-27T21:35:00Z").
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _validate_float(value: float, path: str = "") -> None:
    """
    Validate that a float is finite (not NaN or Infinity).

    Raises:
        CanonicalizationException: If the float is NaN or Infinity.
    """
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: The element (or a part of it) to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value has no canonical form
            (NaN/Infinity floats, non-str mapping keys, or a type with
            no stable encoding).
    """
    if value is None:
        return None

    if isinstance(value, Enum):
        # Before the scalar checks: IntEnum and str-mixin enums are
        # members, not plain ints or strs
        return {"$enum": f"{_qualified_name(type(value))}.{value.name}"}

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        _validate_float(value, path)
        return float(value)

    if isinstance(value, str):
        return str(value)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return {"$naive_datetime": value.isoformat()}
        return {"$datetime": format_datetime_canonical(value)}

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True)
        return {
            "$model": [
                _qualified_name(type(value)),
                canonicalize_value(dumped, path),
            ]
        }

    if isinstance(value, dict):
        items = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Mapping keys must be str, got {type(k).__name__}",
                    details={"path": path, "key": repr(k)},
                )
            items[k] = canonicalize_value(v, f"{path}.{k}" if path else k)
        # Keys will be sorted during JSON serialization
        return {"$dict": items}

    if isinstance(value, list):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, tuple):
        return {
            "$tuple": [
                canonicalize_value(item, f"{path}[{i}]")
                for i, item in enumerate(value)
            ]
        }

    if isinstance(value, (set, frozenset)):
        # Sets have no order of their own; sort by the canonical text
        items = [canonicalize_value(item, f"{path}{{}}") for item in value]
        return {"$set": sorted(items, key=_dumps)}

    if isinstance(value, (bytes, bytearray)):
        return {"$bytes": bytes(value).hex()}

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def _dumps(canonicalized: Any) -> str:
    return json.dumps(
        canonicalized,
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an element to a canonical JSON string.

    The output has:
        - Sorted keys
        - No extra whitespace
        - Non-JSON types tagged (see module docstring)
        - No NaN/Infinity floats

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"$dict":{"a":1,"b":2}}'
        >>> dumps_canonical(b"ab")
        '{"$bytes":"6162"}'
    """
    try:
        return _dumps(canonicalize_value(obj))
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def encode_canonical(obj: Any) -> bytes:
    """UTF-8 bytes of dumps_canonical(obj); the default element encoder."""
    return dumps_canonical(obj).encode("utf-8")
