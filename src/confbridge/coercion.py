"""Scalar coercion helpers shared by format adapters.

Each helper takes raw node data (as produced by a format parser) and
either returns it converted to the requested type or raises
CoercionError. Containers never coerce to scalars.
"""

from __future__ import annotations

import math
from typing import Any

from confbridge.errors import CoercionError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

# Spellings accepted for booleans stored as strings
_TRUE_STRINGS = frozenset({"1", "t", "T", "true", "True", "TRUE"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "false", "False", "FALSE"})


def to_string(data: Any) -> str:
    """Convert scalar data to a string."""
    if isinstance(data, str):
        return data
    if isinstance(data, bool):
        return "true" if data else "false"
    if isinstance(data, (int, float)):
        return str(data)
    if isinstance(data, (bytes, bytearray)):
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CoercionError("string", data, "bytes are not valid UTF-8") from exc
    raise CoercionError("string", data)


def to_string_list(data: Any) -> list[str]:
    """Convert a sequence of scalars to a list of strings."""
    if not isinstance(data, (list, tuple)):
        raise CoercionError("string list", data)
    return [to_string(item) for item in data]


def to_bytes(data: Any) -> bytes:
    """Convert bytes or text data to bytes (text is UTF-8 encoded)."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise CoercionError("bytes", data)


def to_bool(data: Any) -> bool:
    """Convert data to a boolean.

    Integers are true when non-zero. Strings must be one of the usual
    true/false spellings ('true', 'False', '1', 't', ...).
    """
    if isinstance(data, bool):
        return data
    if isinstance(data, int):
        return data != 0
    if isinstance(data, str):
        if data in _TRUE_STRINGS:
            return True
        if data in _FALSE_STRINGS:
            return False
        raise CoercionError("bool", data, f"invalid syntax {data!r}")
    raise CoercionError("bool", data)


def to_float64(data: Any) -> float:
    """Convert numeric or numeric-string data to a float."""
    if isinstance(data, bool):
        raise CoercionError("float64", data)
    if isinstance(data, float):
        return data
    if isinstance(data, int):
        try:
            return float(data)
        except OverflowError as exc:
            raise CoercionError("float64", data, "value out of range") from exc
    if isinstance(data, str):
        try:
            return float(data.strip())
        except ValueError as exc:
            raise CoercionError("float64", data, f"invalid syntax {data!r}") from exc
    raise CoercionError("float64", data)


def _to_integer(data: Any, target: str, low: int, high: int) -> int:
    if isinstance(data, bool):
        raise CoercionError(target, data)
    if isinstance(data, int):
        result = data
    elif isinstance(data, float):
        if not math.isfinite(data) or not data.is_integer():
            raise CoercionError(target, data, "not an integral value")
        result = int(data)
    elif isinstance(data, str):
        text = data.strip()
        try:
            result = int(text, 10)
        except ValueError:
            # Accept integral decimals such as '3.0'
            try:
                as_float = float(text)
            except ValueError as exc:
                raise CoercionError(target, data, f"invalid syntax {data!r}") from exc
            if not math.isfinite(as_float) or not as_float.is_integer():
                raise CoercionError(target, data, "not an integral value") from None
            result = int(as_float)
    else:
        raise CoercionError(target, data)

    if result < low or result > high:
        raise CoercionError(target, data, "value out of range")
    return result


def to_int64(data: Any) -> int:
    """Convert data to an integer within the signed 64-bit range."""
    return _to_integer(data, "int64", INT64_MIN, INT64_MAX)


def to_uint64(data: Any) -> int:
    """Convert data to an integer within the unsigned 64-bit range."""
    return _to_integer(data, "uint64", 0, UINT64_MAX)


def fits_int64_or_uint64(number: int) -> bool:
    """Return True if an integer is representable as int64 or uint64."""
    return INT64_MIN <= number <= UINT64_MAX
