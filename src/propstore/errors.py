"""Exception classes for the property store.

All store exceptions inherit from PropertyStoreError. Exception classes support
two patterns:
1. No-argument raise: raise LoadError()
2. Contextual attributes: err = LoadError("...", path=path); raise err
"""

from __future__ import annotations

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class PropertyStoreError(ApplicationError):
    """Property store operation failed."""


class LoadError(PropertyStoreError):
    """Backing source could not be read."""

    @classmethod
    def unreadable(cls, path: object, reason: str = "") -> "LoadError":
        """Create error for a source that cannot be read."""
        msg = f"Failed to load properties from {path}"
        if reason:
            msg += f": {reason}"
        return cls(msg, path=path)


class SaveError(PropertyStoreError):
    """Backing sink could not be written."""

    @classmethod
    def unwritable(cls, path: object) -> "SaveError":
        """Create error for a destination that cannot be written."""
        return cls(f"Failed to save properties to {path}", path=path)


NO_FILE_PATH_MESSAGE = "no file path known"


class ConfigurationError(PropertyStoreError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)

    @classmethod
    def no_file_path(cls) -> "ConfigurationError":
        """Create error for a save without any destination."""
        return cls(f"Cannot save properties: {NO_FILE_PATH_MESSAGE}")

    @classmethod
    def missing_converter(cls, value_type: type) -> "ConfigurationError":
        """Create error for an object type without a registered converter."""
        return cls(
            f"No StringConverter registered for {_type_name(value_type)}",
            value_type=value_type,
        )

    @classmethod
    def conflicting_type(cls, name: str, existing: str, requested: str) -> "ConfigurationError":
        """Create error for a key requested with conflicting type."""
        return cls(
            f"Property {name!r} requested with conflicting type: {requested} (already bound as {existing})",
            name=name,
        )

    @classmethod
    def missing_value_type(cls, name: str) -> "ConfigurationError":
        """Create error for an object property whose type cannot be inferred."""
        return cls(f"Cannot infer value type for property {name!r}; pass value_type explicitly", name=name)

    @classmethod
    def invalid_format(cls, param_name: str, received_value: str, expected_format: str = "") -> "ConfigurationError":
        """Create error for invalid format."""
        msg = f"{param_name} has invalid format (received {received_value!r})"
        if expected_format:
            msg += f". Expected {expected_format}"
        return cls(msg)


def _type_name(value_type: type) -> str:
    module = getattr(value_type, "__module__", "")
    qualname = getattr(value_type, "__qualname__", repr(value_type))
    if module in ("", "builtins"):
        return qualname
    return f"{module}.{qualname}"


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "LoadError",
    "NO_FILE_PATH_MESSAGE",
    "PropertyStoreError",
    "SaveError",
]
