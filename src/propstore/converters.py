"""String converters for object-typed properties and their registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Protocol, TypeVar

from .errors import ConfigurationError
from .kinds import PropertyKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StringConverter(Protocol[T]):
    """Bidirectional conversion between a value and its raw string form."""

    def to_string(self, value: T) -> str:
        ...

    def from_string(self, text: str) -> T:
        ...


@dataclass(frozen=True)
class FunctionConverter(Generic[T]):
    """StringConverter built from a pair of plain callables."""

    to_string: Callable[[T], str]
    from_string: Callable[[str], T]


class ConverterRegistry:
    """Registry for mapping value types to string converters."""

    def __init__(self) -> None:
        """Initialize an empty converter registry."""
        self._converters: Dict[type, StringConverter[Any]] = {}

    def register(self, value_type: type, converter: StringConverter[Any]) -> None:
        """
        Register or replace the converter for a value type.

        Args:
            value_type: Type handled by the converter
            converter: Object exposing ``to_string`` and ``from_string``
        """
        if value_type in self._converters:
            logger.debug("Replacing converter for %s", value_type.__qualname__)
        self._converters[value_type] = converter
        logger.debug("Registered converter for %s", value_type.__qualname__)

    def get(self, value_type: type) -> StringConverter[Any]:
        """
        Get the converter for a value type.

        Raises:
            ConfigurationError: If no converter is registered for the type
        """
        try:
            return self._converters[value_type]
        except KeyError as exc:
            raise ConfigurationError.missing_converter(value_type) from exc

    def has_converter(self, value_type: type) -> bool:
        return value_type in self._converters

    def registered_types(self) -> list[type]:
        return list(self._converters.keys())

    def kind_for(self, value_type: type) -> PropertyKind:
        """Build a property kind that routes parsing and formatting through the converter."""
        converter = self.get(value_type)

        def coerce(value: Any) -> Any:
            if value is not None and not isinstance(value, value_type):
                raise TypeError(f"{value_type.__qualname__} property requires {value_type.__qualname__}, got {type(value).__name__}")
            return value

        return PropertyKind(
            name=f"object[{value_type.__module__}.{value_type.__qualname__}]",
            parse=converter.from_string,
            format=converter.to_string,
            coerce=coerce,
        )


__all__ = ["ConverterRegistry", "FunctionConverter", "StringConverter"]
