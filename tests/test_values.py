from __future__ import annotations

import math

import numpy as np
import pytest

from xml_settings import values
from xml_settings.errors import ConversionError, UnsupportedTypeError
from xml_settings.values import Value, ValueType


@pytest.mark.parametrize(
    "value, value_type",
    [
        (True, bool),
        (False, ValueType.BOOL),
        (-(2**31), int),
        (2**31 - 1, "int32"),
        (0.5, np.float32),
        (float(np.float32(3.14159)), ValueType.FLOAT32),
        (0.1, float),
        (-1e-300, ValueType.FLOAT64),
        ("héllo <&> world", str),
        ("", ValueType.TEXT),
    ],
)
def test_decode_inverts_encode(value, value_type) -> None:
    text = values.encode(value, value_type)
    assert isinstance(text, str)
    assert values.decode(text, value_type) == value


def test_canonical_text_forms() -> None:
    assert values.encode(True) == "True"
    assert values.encode(False) == "False"
    assert values.encode(100) == "100"
    assert values.encode(-7, ValueType.INT32) == "-7"
    assert values.encode(0.1, ValueType.FLOAT32) == "0.1"
    assert values.encode(np.float32(2.5)) == "2.5"
    assert values.encode(0.1) == "0.1"
    assert values.encode("as is ") == "as is "


def test_infer_type() -> None:
    assert values.infer_type(True) is ValueType.BOOL
    assert values.infer_type(np.bool_(False)) is ValueType.BOOL
    assert values.infer_type(3) is ValueType.INT32
    assert values.infer_type(np.int32(3)) is ValueType.INT32
    assert values.infer_type(np.float32(1.0)) is ValueType.FLOAT32
    assert values.infer_type(1.0) is ValueType.FLOAT64
    assert values.infer_type(np.float64(1.0)) is ValueType.FLOAT64
    assert values.infer_type("x") is ValueType.TEXT


@pytest.mark.parametrize("value", [None, b"raw", [1, 2], {"a": 1}, 1j, np.int64(5)])
def test_unsupported_values_are_rejected(value) -> None:
    with pytest.raises(UnsupportedTypeError):
        values.encode(value)


@pytest.mark.parametrize("spec", [list, bytes, complex, np.int64, "decimal", object])
def test_unsupported_type_designators_are_rejected(spec) -> None:
    with pytest.raises(UnsupportedTypeError):
        values.resolve_type(spec)
    with pytest.raises(UnsupportedTypeError):
        values.decode("1", spec)


def test_type_names_resolve() -> None:
    assert values.resolve_type("float32") is ValueType.FLOAT32
    assert values.resolve_type(" Bool ") is ValueType.BOOL


@pytest.mark.parametrize(
    "value, value_type",
    [
        (2**31, int),
        (-(2**31) - 1, ValueType.INT32),
        (1.5, int),
        (True, int),
        ("1", ValueType.INT32),
        (1, bool),
        (1e40, ValueType.FLOAT32),
        ("1.0", float),
        (3, str),
    ],
)
def test_encode_rejects_values_that_do_not_fit(value, value_type) -> None:
    with pytest.raises(ConversionError):
        values.encode(value, value_type)


def test_decode_tolerates_case_and_whitespace() -> None:
    assert values.decode("TRUE", bool) is True
    assert values.decode(" false\n", bool) is False
    assert values.decode("  42 ", int) == 42
    assert values.decode("+5", int) == 5
    assert values.decode("1e+20", ValueType.FLOAT32) == float(np.float32(1e20))
    assert math.isinf(values.decode("inf", float))


def test_text_is_never_trimmed() -> None:
    assert values.decode("  padded  ", str) == "  padded  "


@pytest.mark.parametrize(
    "text, value_type",
    [
        ("yes", bool),
        ("1", bool),
        ("4.2", int),
        ("2147483648", int),
        ("", int),
        ("abc", float),
        ("1,5", ValueType.FLOAT32),
    ],
)
def test_decode_rejects_unparseable_text(text, value_type) -> None:
    with pytest.raises(ConversionError):
        values.decode(text, value_type)


def test_float32_decode_rounds_to_single_precision() -> None:
    decoded = values.decode("0.1", ValueType.FLOAT32)
    assert decoded == float(np.float32(0.1))
    assert decoded != 0.1


def test_defaults() -> None:
    assert values.default_for(bool) is False
    assert values.default_for(int) == 0
    assert values.default_for(ValueType.FLOAT32) == 0.0
    assert values.default_for(float) == 0.0
    assert values.default_for(str) == ""


def test_tagged_value() -> None:
    v = Value.of(0.1, ValueType.FLOAT32)
    assert v.type is ValueType.FLOAT32
    assert v.data == float(np.float32(0.1))
    assert v.encode() == "0.1"

    assert Value.of(7) == Value(ValueType.INT32, 7)
    assert Value.decode("True", bool) == Value(ValueType.BOOL, True)

    with pytest.raises(UnsupportedTypeError):
        Value.of([1])


@pytest.mark.parametrize("text", ["bell\x07", "nul\x00", "vt\x0b", "\ud800", "\ufffe"])
def test_text_outside_xml_char_range_is_rejected(text: str) -> None:
    with pytest.raises(ConversionError):
        values.encode(text)


def test_text_with_tab_newline_and_cr_is_accepted() -> None:
    assert values.encode("a\tb\nc\rd") == "a\tb\nc\rd"
