# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Build ValueNode trees from XML configuration documents.

Expected document shape:

    <Configuration Version="1.0">
        <ConfigValue1> value </ConfigValue1>
        <ConfigValue2 Attr1="1" Attr2="2" />
        <Database>
            <Host>localhost</Host>
        </Database>
    </Configuration>

The root element only carries the version; each element under it is a
top-level configuration entry. Attributes and nested elements become
child nodes. Names are XML local names, namespaces are dropped.
"""

from __future__ import annotations

from xml.etree import ElementTree as ET

from ..exceptions import XmlSyntaxError
from ..node import ValueNode

# Checked in order on the root element.
VERSION_ATTRIBUTES = ('Version', 'version')


def parse_xml(source: str | bytes) -> ET.Element:
    """Parse a document and return its root element.

    Args:
        source: Document text. Bytes are decoded following the XML
            declaration.

    Raises:
        XmlSyntaxError: If the document is not well-formed.
    """
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise XmlSyntaxError(f"Malformed configuration document: {e}") from e


def local_name(qualified: str) -> str:
    """Strip an ElementTree '{namespace}' prefix from a name."""
    if qualified.startswith('{'):
        return qualified.rsplit('}', 1)[1]
    return qualified


def read_version(root: ET.Element) -> str | None:
    """Return the root's version attribute, or None if it has none."""
    for attr in VERSION_ATTRIBUTES:
        value = root.get(attr)
        if value is not None:
            return value
    return None


def node_from_element(element: ET.Element) -> ValueNode:
    """Build a ValueNode from an element and all its nested elements.

    Attributes become leaf children first, then nested elements follow.
    An element without nested elements is a leaf and keeps its text as
    written, including surrounding whitespace.

    Elements are visited with an explicit stack, children before their
    parent, so any nesting depth the XML parser accepts can be built.

    Raises:
        DuplicateNameError: If an attribute or element name repeats among
            the children of one element.
    """
    built: list[ValueNode] = []
    stack: list[tuple[ET.Element, bool]] = [(element, False)]
    while stack:
        current, expanded = stack.pop()
        nested = list(current)
        if nested and not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(nested))
            continue

        name = local_name(current.tag)
        attributes = [
            ValueNode.from_attribute(local_name(key), value)
            for key, value in current.attrib.items()
        ]
        if not nested:
            built.append(ValueNode(name, current.text or '', attributes))
            continue

        # The last len(nested) built nodes are this element's children, in order.
        elements = built[-len(nested):]
        del built[-len(nested):]
        built.append(ValueNode(name, None, [*attributes, *elements]))
    return built[0]
