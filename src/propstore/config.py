from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}

ENCODING_ENV = "PROPSTORE_ENCODING"
TIMESTAMP_ENV = "PROPSTORE_TIMESTAMP"
FILE_ENV = "PROPSTORE_FILE"

DEFAULT_ENCODING = "utf-8"


def env_str(name: str, or_value: str | None = None) -> str | None:
    """Fetch an environment variable as a stripped string; blank counts as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return or_value
    return value.strip()


def env_bool(name: str, or_value: bool | None = None) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name)
    if raw is None:
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError.invalid_format(name, raw, "a boolean")


def file_encoding() -> str:
    """Encoding used to read and write backing files."""
    return env_str(ENCODING_ENV, or_value=DEFAULT_ENCODING)


def write_timestamp() -> bool:
    """Whether saved properties files carry a timestamp header line."""
    return bool(env_bool(TIMESTAMP_ENV, or_value=True))


def default_file() -> Optional[Path]:
    """Default properties file for the command line front end, if configured."""
    raw = env_str(FILE_ENV)
    if raw is None:
        return None
    return Path(raw).expanduser()


__all__ = [
    "DEFAULT_ENCODING",
    "ENCODING_ENV",
    "FILE_ENV",
    "TIMESTAMP_ENV",
    "default_file",
    "env_bool",
    "env_str",
    "file_encoding",
    "write_timestamp",
]
