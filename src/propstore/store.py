"""
Typed, observable key-value store backed by a properties file.

The store keeps the raw string map read from the backing file and hands out
one cached PropertyHandle per key. Missing, blank or unparseable raw values
resolve to the caller's default instead of raising. ``save`` folds every
cached handle into a snapshot of the raw map and writes that out.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from . import config
from .converters import ConverterRegistry, StringConverter
from .errors import ConfigurationError, LoadError, SaveError
from .formats import FileFormat, resolve_format
from .handle import PropertyHandle
from .key import PropertyKey, key_name
from .kinds import BOOLEAN, DOUBLE, FLOAT, INTEGER, LONG, STRING, PropertyKind

logger = logging.getLogger(__name__)


NameOrKey = Union[str, PropertyKey]
PathLike = Union[str, "os.PathLike[str]"]

_UNSET: Any = object()


class PropertyStore:
    """Flat string-keyed property map with typed, cached, observable accessors."""

    def __init__(self, registry: Optional[ConverterRegistry] = None, *, file_format: Optional[FileFormat] = None) -> None:
        """
        Initialize an empty store.

        Args:
            registry: Converter registry used by ``object_property``; a fresh one by default
            file_format: Fixed backing format; resolved from the file suffix when omitted
        """
        self.registry = registry if registry is not None else ConverterRegistry()
        self._file_format = file_format
        self._raw: Dict[str, str] = {}
        self._handles: Dict[str, PropertyHandle[Any]] = {}
        self._file_path: Optional[Path] = None

    # ------------- Persistence -------------

    @property
    def file_path(self) -> Optional[Path]:
        """Path remembered from the last successful load or save."""
        return self._file_path

    def load(self, path: PathLike) -> None:
        """
        Replace the raw map with the entries of a backing file.

        All cached handles are discarded. On failure the store keeps its
        previous entries, handles and remembered path.

        Raises:
            LoadError: If the file cannot be read or parsed
        """
        source = Path(path)
        file_format = self._format_for(source)
        try:
            text = source.read_text(encoding=config.file_encoding())
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError.unreadable(source, str(exc)) from exc
        try:
            entries = file_format.parse(text)
        except ValueError as exc:
            raise LoadError.unreadable(source, str(exc)) from exc

        self._raw = entries
        self._handles = {}
        self._file_path = source
        logger.info("Loaded %d properties from %s", len(entries), source)

    def save(self, comment: Optional[str] = None, path: Optional[PathLike] = None) -> None:
        """
        Write every entry, including current handle values, to the backing file.

        Args:
            comment: Optional header comment
            path: Destination; defaults to the path of the last load or save

        Raises:
            ConfigurationError: If no destination is known
            SaveError: If the destination cannot be written
        """
        if path is not None:
            target = Path(path)
        elif self._file_path is not None:
            target = self._file_path
        else:
            raise ConfigurationError.no_file_path()

        snapshot = dict(self._raw)
        for name, handle in self._handles.items():
            snapshot[name] = handle.to_raw()

        text = self._format_for(target).render(snapshot, comment)
        _write_atomically(target, text, config.file_encoding())
        self._raw = snapshot
        self._file_path = target
        logger.info("Saved %d properties to %s", len(snapshot), target)

    def _format_for(self, path: Path) -> FileFormat:
        if self._file_format is not None:
            return self._file_format
        return resolve_format(path)

    # ------------- Raw map -------------

    def contains(self, name_or_key: NameOrKey) -> bool:
        return key_name(name_or_key) in self._raw

    def __contains__(self, name_or_key: object) -> bool:
        if not isinstance(name_or_key, (str, PropertyKey)):
            return False
        return self.contains(name_or_key)

    def __len__(self) -> int:
        return len(self._raw)

    def keys(self) -> List[str]:
        return list(self._raw.keys())

    def get_raw(self, name_or_key: NameOrKey, default: Optional[str] = None) -> Optional[str]:
        return self._raw.get(key_name(name_or_key), default)

    def remove(self, name_or_key: NameOrKey) -> bool:
        """Drop the raw entry and any cached handle; return whether anything was removed."""
        name = key_name(name_or_key)
        had_raw = self._raw.pop(name, None) is not None
        had_handle = self._handles.pop(name, None) is not None
        return had_raw or had_handle

    @property
    def is_dirty(self) -> bool:
        """True when any handle has been assigned since it was created."""
        return any(handle.dirty for handle in self._handles.values())

    # ------------- Typed accessors -------------

    def string_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[str]:
        return self._property(name_or_key, default, STRING)

    def boolean_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[bool]:
        return self._property(name_or_key, default, BOOLEAN)

    def integer_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[int]:
        return self._property(name_or_key, default, INTEGER)

    def long_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[int]:
        return self._property(name_or_key, default, LONG)

    def float_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[float]:
        return self._property(name_or_key, default, FLOAT)

    def double_property(self, name_or_key: NameOrKey, default: Any = _UNSET) -> PropertyHandle[float]:
        return self._property(name_or_key, default, DOUBLE)

    def object_property(
        self,
        name_or_key: NameOrKey,
        default: Any = _UNSET,
        value_type: Optional[type] = None,
    ) -> PropertyHandle[Any]:
        """
        Typed accessor for values handled by a registered converter.

        Args:
            name_or_key: Property name or PropertyKey
            default: Value used when the raw entry is missing, blank or unparseable
            value_type: Converter lookup type; ``type(default)`` when omitted

        Raises:
            ConfigurationError: If no converter is registered for the value type
        """
        name, resolved_default = _resolve_key(name_or_key, default)
        if value_type is None:
            if resolved_default is None:
                raise ConfigurationError.missing_value_type(name)
            value_type = type(resolved_default)
        return self._property(name, resolved_default, self.registry.kind_for(value_type))

    def register_converter(self, value_type: type, converter: StringConverter[Any]) -> None:
        self.registry.register(value_type, converter)

    def _property(self, name_or_key: NameOrKey, default: Any, kind: PropertyKind) -> PropertyHandle[Any]:
        name, resolved_default = _resolve_key(name_or_key, default)
        existing = self._handles.get(name)
        if existing is not None:
            if existing.kind.name != kind.name:
                raise ConfigurationError.conflicting_type(name, existing.kind.name, kind.name)
            return existing

        resolved_default = kind.coerce(resolved_default)
        handle = PropertyHandle(name, resolved_default, self._initial_value(name, resolved_default, kind), kind)
        self._handles[name] = handle
        logger.debug("Created %s property %r", kind.name, name)
        return handle

    def _initial_value(self, name: str, default: Any, kind: PropertyKind) -> Any:
        raw = self._raw.get(name)
        if raw is None:
            return default
        if not raw.strip() and not kind.blank_is_value:
            return default
        try:
            return kind.parse(raw)
        except (ValueError, TypeError, LookupError) as exc:
            logger.debug("Using default for %s property %r; raw value %r rejected: %s", kind.name, name, raw, exc)
            return default


def _resolve_key(name_or_key: NameOrKey, default: Any) -> tuple[str, Any]:
    if isinstance(name_or_key, PropertyKey):
        if default is not _UNSET:
            raise TypeError("default must not be passed together with a PropertyKey")
        return name_or_key.name, name_or_key.default
    if default is _UNSET:
        raise TypeError(f"property {name_or_key!r} requires a default value")
    return name_or_key, default


def _write_atomically(target: Path, text: str, encoding: str) -> None:
    temp_name: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(text)
        os.chmod(temp_name, _file_mode(target))
        os.replace(temp_name, target)
    except (OSError, UnicodeEncodeError) as exc:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise SaveError.unwritable(target) from exc


def _file_mode(target: Path) -> int:
    """Permission bits for the saved file: the existing target's, else the umask default."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


__all__ = ["PropertyStore"]
