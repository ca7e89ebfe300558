"""Errors raised by the settings store.

"Not found" is never an error: missing files, sections and properties are
reported through return values. Everything below is fatal to the call that
raised it.
"""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for all settings store errors."""


class UnsupportedTypeError(SettingsError, TypeError):
    """A typed read/write used a type outside bool/int32/float32/float64/text."""


class ConversionError(SettingsError, ValueError):
    """Stored text could not be parsed as (or a value encoded to) the requested type."""


class StructuralError(SettingsError, ValueError):
    """A loaded document does not have the expected shape."""


class InvalidNameError(SettingsError, ValueError):
    """A section or property name cannot be used as an element tag."""
