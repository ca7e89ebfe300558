"""Value coercion between typed values and their canonical text.

Exactly five value types are supported. Everything stored in a settings
document is text; typed values are converted here, at the store boundary.

  * ``BOOL``     -> ``"True"`` / ``"False"``
  * ``INT32``    -> base-10 integer in the signed 32-bit range
  * ``FLOAT32``  -> shortest text that round-trips the single-precision value
  * ``FLOAT64``  -> ``repr(float)``
  * ``TEXT``     -> the string itself (characters XML cannot carry are rejected)

All numeric text is locale-invariant (``.`` as the decimal separator, no
grouping).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

import numpy as np

from .errors import ConversionError, UnsupportedTypeError


class ValueType(str, Enum):
    BOOL = "bool"
    INT32 = "int32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    TEXT = "text"


TypeSpec = Union[ValueType, str, type]

INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Characters outside the XML 1.0 Char production (C0 controls other than
# tab/LF/CR, lone surrogates, U+FFFE and U+FFFF).
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

# Type designators accepted by resolve_type(). Python's int/float map to the
# 32-bit integer and double-precision tags respectively.
_TYPE_TAGS: dict[Any, ValueType] = {
    bool: ValueType.BOOL,
    np.bool_: ValueType.BOOL,
    int: ValueType.INT32,
    np.int32: ValueType.INT32,
    np.float32: ValueType.FLOAT32,
    float: ValueType.FLOAT64,
    np.float64: ValueType.FLOAT64,
    str: ValueType.TEXT,
}

_DEFAULTS: dict[ValueType, Any] = {
    ValueType.BOOL: False,
    ValueType.INT32: 0,
    ValueType.FLOAT32: 0.0,
    ValueType.FLOAT64: 0.0,
    ValueType.TEXT: "",
}


def resolve_type(spec: TypeSpec) -> ValueType:
    """Map a type designator (tag, tag name or Python/numpy type) to a ValueType."""
    if isinstance(spec, ValueType):
        return spec
    if isinstance(spec, str):
        try:
            return ValueType(spec.strip().lower())
        except ValueError:
            raise UnsupportedTypeError(f"Unsupported value type name: {spec!r}") from None
    try:
        tag = _TYPE_TAGS.get(spec)
    except TypeError:
        tag = None
    if tag is None:
        raise UnsupportedTypeError(f"Unsupported value type: {spec!r}")
    return tag


def infer_type(value: Any) -> ValueType:
    """Pick the ValueType for a runtime value."""
    # bool before int: bool is an int subclass.
    if isinstance(value, (bool, np.bool_)):
        return ValueType.BOOL
    if isinstance(value, np.float32):
        return ValueType.FLOAT32
    if isinstance(value, (int, np.int32)):
        return ValueType.INT32
    if isinstance(value, float):
        return ValueType.FLOAT64
    if isinstance(value, str):
        return ValueType.TEXT
    raise UnsupportedTypeError(f"Unsupported value of type {type(value).__name__}: {value!r}")


def default_for(value_type: TypeSpec) -> Any:
    return _DEFAULTS[resolve_type(value_type)]


def _is_number(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def _to_float32(number: float) -> np.float32:
    with np.errstate(over="ignore"):
        single = np.float32(number)
    if math.isfinite(number) and not math.isfinite(float(single)):
        raise ConversionError(f"{number!r} is out of range for float32")
    return single


def encode(value: Any, value_type: Optional[TypeSpec] = None) -> str:
    """Return the canonical text for ``value``.

    When ``value_type`` is omitted it is inferred from the value. Raises
    UnsupportedTypeError for types outside the supported set and
    ConversionError when the value does not fit the requested type.
    """
    tag = infer_type(value) if value_type is None else resolve_type(value_type)

    if tag is ValueType.BOOL:
        if not isinstance(value, (bool, np.bool_)):
            raise ConversionError(f"Expected a bool, got {value!r}")
        return "True" if bool(value) else "False"

    if tag is ValueType.INT32:
        if not isinstance(value, (int, np.integer)) or isinstance(value, (bool, np.bool_)):
            raise ConversionError(f"Expected an integer, got {value!r}")
        number = int(value)
        if not INT32_MIN <= number <= INT32_MAX:
            raise ConversionError(f"{number} is out of range for int32")
        return str(number)

    if tag is ValueType.FLOAT32:
        if not _is_number(value):
            raise ConversionError(f"Expected a number, got {value!r}")
        return str(_to_float32(float(value)))

    if tag is ValueType.FLOAT64:
        if not _is_number(value):
            raise ConversionError(f"Expected a number, got {value!r}")
        return repr(float(value))

    if not isinstance(value, str):
        raise ConversionError(f"Expected a string, got {value!r}")
    bad = _XML_ILLEGAL_RE.search(value)
    if bad is not None:
        raise ConversionError(
            f"Text contains character U+{ord(bad.group()):04X} which cannot be stored in XML"
        )
    return str(value)


def decode(text: str, value_type: TypeSpec) -> Any:
    """Parse stored ``text`` as ``value_type``.

    Raises UnsupportedTypeError for an unsupported type (checked first) and
    ConversionError when the text cannot be parsed.
    """
    tag = resolve_type(value_type)
    if tag is ValueType.TEXT:
        return text

    s = (text or "").strip()

    if tag is ValueType.BOOL:
        lowered = s.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ConversionError(f"Cannot parse {text!r} as bool")

    if tag is ValueType.INT32:
        if not _INT_RE.fullmatch(s):
            raise ConversionError(f"Cannot parse {text!r} as int32")
        number = int(s)
        if not INT32_MIN <= number <= INT32_MAX:
            raise ConversionError(f"{text!r} is out of range for int32")
        return number

    try:
        number = float(s)
    except ValueError:
        raise ConversionError(f"Cannot parse {text!r} as {tag.value}") from None
    if tag is ValueType.FLOAT32:
        return float(_to_float32(number))
    return number


@dataclass(frozen=True)
class Value:
    """A tagged value: one of the five supported types and its payload."""

    type: ValueType
    data: Any

    @classmethod
    def of(cls, data: Any, value_type: Optional[TypeSpec] = None) -> "Value":
        tag = infer_type(data) if value_type is None else resolve_type(value_type)
        # Normalize the payload through its canonical text so that e.g. a
        # float32 value carries single-precision data.
        return cls(tag, decode(encode(data, tag), tag))

    def encode(self) -> str:
        return encode(self.data, self.type)

    @classmethod
    def decode(cls, text: str, value_type: TypeSpec) -> "Value":
        tag = resolve_type(value_type)
        return cls(tag, decode(text, tag))
