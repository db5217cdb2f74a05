"""Built-in parse, format and coercion rules for the primitive property kinds.

Each kind turns a raw string from the backing map into a typed value and back.
``parse`` raises ValueError for text it does not accept; the store turns that
into a fallback to the caller's default.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


@dataclass(frozen=True)
class PropertyKind:
    """Parse/format/coerce triple for one primitive value type."""

    name: str
    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    coerce: Callable[[Any], Any]
    # string values keep blank raw text; every other kind falls back to the default
    blank_is_value: bool = False


def _parse_string(raw: str) -> str:
    return raw


def _coerce_string(value: Any) -> Any:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"string property requires str, got {type(value).__name__}")
    return value


def _parse_boolean(raw: str) -> bool:
    return raw.strip().lower() == "true"


def _format_boolean(value: bool) -> str:
    return "true" if value else "false"


def _coerce_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"boolean property requires bool, got {type(value).__name__}")
    return value


def _bounded_integer(kind_name: str, lower: int, upper: int):
    def parse(raw: str) -> int:
        if not _INTEGER_PATTERN.fullmatch(raw):
            raise ValueError(f"not an integer: {raw!r}")
        return check(int(raw))

    def check(value: int) -> int:
        if value < lower or value > upper:
            raise ValueError(f"{value} out of range for {kind_name} property")
        return value

    def coerce(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{kind_name} property requires int, got {type(value).__name__}")
        return check(value)

    return parse, coerce


def _parse_float(raw: str) -> float:
    text = raw.strip()
    if "_" in text:
        raise ValueError(f"not a number: {raw!r}")
    return float(text)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(float(value))


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"floating point property requires a number, got {type(value).__name__}")
    return float(value)


def _format_plain(value: Any) -> str:
    return str(value)


_parse_int32, _coerce_int32 = _bounded_integer("integer", INT32_MIN, INT32_MAX)
_parse_int64, _coerce_int64 = _bounded_integer("long", INT64_MIN, INT64_MAX)

STRING = PropertyKind("string", _parse_string, _format_plain, _coerce_string, blank_is_value=True)
BOOLEAN = PropertyKind("boolean", _parse_boolean, _format_boolean, _coerce_boolean)
INTEGER = PropertyKind("integer", _parse_int32, _format_plain, _coerce_int32)
LONG = PropertyKind("long", _parse_int64, _format_plain, _coerce_int64)
FLOAT = PropertyKind("float", _parse_float, _format_float, _coerce_float)
DOUBLE = PropertyKind("double", _parse_float, _format_float, _coerce_float)

PRIMITIVE_KINDS = (STRING, BOOLEAN, INTEGER, LONG, FLOAT, DOUBLE)


__all__ = [
    "BOOLEAN",
    "DOUBLE",
    "FLOAT",
    "INTEGER",
    "LONG",
    "PRIMITIVE_KINDS",
    "PropertyKind",
    "STRING",
]
