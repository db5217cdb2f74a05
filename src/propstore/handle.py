"""Observable value cell handed out by the property store."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, TypeVar

from .kinds import PropertyKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

ChangeListener = Callable[["PropertyHandle[Any]", Any, Any], None]


class PropertyHandle(Generic[T]):
    """
    Live, typed wrapper around one configuration value.

    Listeners are called synchronously as ``listener(handle, old, new)`` whenever
    an assignment changes the value. Assignments go through the kind's coercion,
    so an integer handle rejects a string and a float handle accepts an int.
    """

    def __init__(self, key: str, default: T, value: T, kind: PropertyKind) -> None:
        self.key = key
        self.default = default
        self.kind = kind
        self.dirty = False
        self._value = value
        self._listeners: List[ChangeListener] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def get(self) -> T:
        return self._value

    def set(self, new_value: T) -> None:
        coerced = self.kind.coerce(new_value)
        old_value = self._value
        self._value = coerced
        self.dirty = True
        if old_value != coerced:
            self._notify(old_value, coerced)

    def reset(self) -> None:
        """Restore the default value."""
        self.set(self.default)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Zero-argument callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def to_raw(self) -> str:
        """Canonical string form written to the backing map."""
        if self._value is None:
            return ""
        return self.kind.format(self._value)

    def _notify(self, old_value: T, new_value: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(self, old_value, new_value)
            except Exception:
                logger.exception("Change listener failed for property %r", self.key)

    def __repr__(self) -> str:
        return f"PropertyHandle(key={self.key!r}, kind={self.kind.name}, value={self._value!r})"


__all__ = ["ChangeListener", "PropertyHandle"]
