"""Typed property key bundling a name with its default value."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PropertyKey(Generic[T]):
    """Name plus default value; two keys are equal when their names are."""

    name: str
    default: T = field(default=None, compare=False, hash=False)  # type: ignore[assignment]


def key_name(name_or_key: "str | PropertyKey") -> str:
    if isinstance(name_or_key, PropertyKey):
        return name_or_key.name
    return name_or_key


__all__ = ["PropertyKey", "key_name"]
