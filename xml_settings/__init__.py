"""Typed, sectioned settings persisted as XML.

Two stores share one implementation:

  * :class:`SettingsStore` addresses values by ``(section, property)``.
  * :class:`TargetedSettingsStore` adds a section cursor; reads and writes
    go to whichever section was last targeted, and saving drains memory.

Values are restricted to bool, int32, float32, float64 and text and are
stored as their canonical text.
"""

from .errors import (
    ConversionError,
    InvalidNameError,
    SettingsError,
    StructuralError,
    UnsupportedTypeError,
)
from .fs import FileSystem, LocalFileSystem
from .location import StoreLocation
from .store import ReadResult, SettingsStore
from .targeted import TargetedSettingsStore
from .values import Value, ValueType

__all__ = [
    "ConversionError",
    "FileSystem",
    "InvalidNameError",
    "LocalFileSystem",
    "ReadResult",
    "SettingsError",
    "SettingsStore",
    "StoreLocation",
    "StructuralError",
    "TargetedSettingsStore",
    "UnsupportedTypeError",
    "Value",
    "ValueType",
]
