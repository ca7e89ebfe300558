from __future__ import annotations

import pytest

from xml_settings.errors import InvalidNameError
from xml_settings.names import is_valid_name, validate_name


@pytest.mark.parametrize("name", ["Display", "_private", "a1", "window-size", "v1.2", "Größe"])
def test_valid_names(name: str) -> None:
    assert is_valid_name(name)
    assert validate_name(name) == name


@pytest.mark.parametrize("name", ["", "1st", "-x", ".x", "two words", "ns:tag", " pad", "pad ", "a<b", "\u00b2", "a\u00b2", None, 5])
def test_invalid_names(name) -> None:
    assert not is_valid_name(name)
    with pytest.raises(InvalidNameError):
        validate_name(name, "section name")
