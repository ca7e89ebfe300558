"""Validation of section and property names.

Names become element tags on disk, so they are checked when they enter the
store rather than when the document is rendered.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from functools import lru_cache

from .errors import InvalidNameError

# XML 1.0 NameStartChar / NameChar, without ":" so that names never acquire
# namespace-prefix meaning.
_NAME_START = (
    r"A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff"
    r"\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd"
    r"\U00010000-\U000effff"
)
_NAME_CHAR = _NAME_START + r"\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"
_NAME_RE = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")


@lru_cache(maxsize=1024)
def _parser_accepts(name: str) -> bool:
    # The loader's parser may use older Unicode name tables than the XML
    # production above; a name is only usable if it parses back.
    try:
        return ET.fromstring(f"<{name}/>").tag == name
    except ET.ParseError:
        return False


def is_valid_name(name: object) -> bool:
    if not isinstance(name, str) or _NAME_RE.fullmatch(name) is None:
        return False
    return _parser_accepts(name)


def validate_name(name: object, kind: str = "name") -> str:
    """Return ``name`` unchanged or raise InvalidNameError."""
    if not is_valid_name(name):
        raise InvalidNameError(f"Invalid {kind} {name!r}: not usable as an XML element name")
    return name  # type: ignore[return-value]
