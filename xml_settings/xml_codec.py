"""Render settings sections to an XML tree and parse them back.

Document shape (no attributes, exactly two levels below the root)::

    <?xml version='1.0' encoding='utf-8'?>
    <Root>
      <Section>
        <Property>stored text</Property>
      </Section>
    </Root>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Tuple

from .errors import StructuralError

Sections = Dict[str, Dict[str, str]]


def build_tree(root_name: str, sections: Mapping[str, Mapping[str, str]]) -> ET.ElementTree:
    root = ET.Element(root_name)
    for section_name, properties in sections.items():
        section_el = ET.SubElement(root, section_name)
        for prop_name, text in properties.items():
            prop_el = ET.SubElement(section_el, prop_name)
            prop_el.text = text
    return ET.ElementTree(root)


def to_bytes(tree: ET.ElementTree) -> bytes:
    ET.indent(tree, space="  ")
    data = ET.tostring(tree.getroot(), encoding="utf-8", xml_declaration=True) + b"\n"
    # ElementTree leaves CR unescaped and parsers normalize it to LF. Only
    # property text can hold a CR; 0x0D never occurs inside a UTF-8 sequence.
    return data.replace(b"\r", b"&#13;")


def render(root_name: str, sections: Mapping[str, Mapping[str, str]]) -> bytes:
    return to_bytes(build_tree(root_name, sections))


def _split_tag(tag: object) -> Tuple[str, str]:
    if not isinstance(tag, str):
        raise StructuralError(f"Unsupported element tag {tag!r}")
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return "", tag


def _local_name(el: ET.Element, namespace: str) -> str:
    uri, local = _split_tag(el.tag)
    if uri != namespace:
        raise StructuralError(
            f"Element '{local}' is in namespace {uri!r}; expected the document namespace {namespace!r}"
        )
    return local


def parse_document(data: bytes, root_name: str) -> Sections:
    """Parse a settings document into a fresh section mapping.

    Elements are matched by local name. A default namespace declared on the
    root is inherited by every section and property; any other namespace is
    a StructuralError. A property's value is all text inside it, including
    text of nested elements.

    Nothing is returned until the whole document has been read, so callers
    can swap the result in without ever seeing a partial load.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise StructuralError(f"Settings document is not well-formed XML: {e}") from e

    namespace, local_root = _split_tag(root.tag)
    if local_root != root_name:
        raise StructuralError(f"XML does not contain the expected root element '{root_name}'")

    sections: Sections = {}
    for section_el in root:
        section_name = _local_name(section_el, namespace)
        if section_name in sections:
            raise StructuralError(f"Duplicate section '{section_name}'")
        properties: Dict[str, str] = {}
        for prop_el in section_el:
            prop_name = _local_name(prop_el, namespace)
            if prop_name in properties:
                raise StructuralError(f"Duplicate property '{prop_name}' in section '{section_name}'")
            properties[prop_name] = "".join(prop_el.itertext())
        sections[section_name] = properties
    return sections
