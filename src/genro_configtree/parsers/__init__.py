# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parsers for building ValueNode trees from configuration documents.

Available parsers:
- xml: XML configuration documents

Example:
    >>> from genro_configtree.parsers import parse_xml, node_from_element
    >>> root = parse_xml('<Configuration><Port>8080</Port></Configuration>')
    >>> node_from_element(root[0]).as_int()
    8080
"""

from .xml_parser import (
    VERSION_ATTRIBUTES,
    local_name,
    node_from_element,
    parse_xml,
    read_version,
)

__all__ = [
    'VERSION_ATTRIBUTES',
    'local_name',
    'node_from_element',
    'parse_xml',
    'read_version',
]
