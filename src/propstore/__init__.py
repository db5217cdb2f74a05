"""Typed, observable key-value store backed by a properties file."""

from propstore.converters import ConverterRegistry, FunctionConverter, StringConverter
from propstore.errors import ConfigurationError, LoadError, PropertyStoreError, SaveError
from propstore.handle import PropertyHandle
from propstore.key import PropertyKey
from propstore.store import PropertyStore

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConverterRegistry",
    "FunctionConverter",
    "LoadError",
    "PropertyHandle",
    "PropertyKey",
    "PropertyStore",
    "PropertyStoreError",
    "SaveError",
    "StringConverter",
    "__version__",
]
