# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigurationTree - top-level entries merged from XML documents.

Each merge parses one document and adds its top-level elements to the
tree. A merge either succeeds completely or leaves the tree untouched:
every check runs before the first entry is inserted.

Checks, in order:
    1. The document is well-formed XML (XmlSyntaxError)
    2. The document version agrees with the tree version
       (VersionMismatchError)
    3. The resolved version equals the caller's expected version, if
       one was given (VersionMismatchError)
    4. Sibling names are unique at every level of every entry
       (DuplicateNameError)
    5. No entry name is already in the tree, and no name repeats within
       the document (DuplicateNameError)

Version rules:
    - The first document sets the version ('' when it declares none)
    - While the version is '', a later document may still set it
    - Once set, a later document must declare the same version or none

Example:
    >>> tree = ConfigurationTree().merge('<Configuration Version="1.0"><A>5</A></Configuration>')
    >>> tree = tree.merge('<Configuration><B on="yes"/></Configuration>')
    >>> tree['A'].as_int(), tree['B']['on'].as_bool()
    (5, True)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import DuplicateNameError, VersionMismatchError
from ..node import NodeContainer, ValueNode
from ..parsers import node_from_element, parse_xml, read_version

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)


class ConfigurationTree(NodeContainer):
    """The set of top-level configuration entries.

    Attributes:
        version: None before the first merge, then the document version
            ('' if the documents declared none).

    Example:
        >>> tree = ConfigurationTree().merge(xml_text, expected_version='1.0')
        >>> timeout = tree.get_value('Timeout', float, default=30.0)
    """

    __slots__ = ('_version', '_children')

    def __init__(self) -> None:
        self._version: str | None = None
        self._children: dict[str, ValueNode] = {}

    def __repr__(self) -> str:
        return f"ConfigurationTree(version={self.version!r}, names={self.child_names!r})"

    @property
    def version(self) -> str | None:
        """Tree version, set only by a successful merge."""
        return self._version

    @property
    def names(self) -> list[str]:
        """Top-level entry names in merge order."""
        return self.child_names

    def merge(
        self,
        source: str | bytes,
        expected_version: str | None = None,
    ) -> ConfigurationTree:
        """Parse a document and add its entries to the tree.

        Args:
            source: XML document text.
            expected_version: If given, the tree version after this merge
                must equal it.

        Returns:
            This tree, for chaining.

        Raises:
            XmlSyntaxError: If the document is not well-formed.
            VersionMismatchError: On a version conflict.
            DuplicateNameError: On a name collision.
        """
        return self.merge_element(parse_xml(source), expected_version)

    def merge_element(
        self,
        root: Element,
        expected_version: str | None = None,
    ) -> ConfigurationTree:
        """Add the entries under an already parsed root element.

        See merge() for arguments and errors.
        """
        version = self._resolve_version(read_version(root))
        if expected_version is not None and version != expected_version:
            raise VersionMismatchError(expected_version, version)

        entries = [node_from_element(element) for element in root]
        self._check_names(entries)

        for node in entries:
            self._children[node.name] = node
        self._version = version

        logger.debug(
            "Merged %d configuration entries (version %r): %s",
            len(entries), version, [node.name for node in entries],
        )
        return self

    def _resolve_version(self, found: str | None) -> str:
        """Return the tree version that would hold after merging found."""
        if self.version:
            if found is not None and found != self.version:
                raise VersionMismatchError(self.version, found)
            return self.version
        return found if found is not None else ''

    def _check_names(self, entries: list[ValueNode]) -> None:
        """Reject entries whose names are taken, before anything is inserted."""
        for node in entries:
            if node.name in self._children:
                raise DuplicateNameError(node.name, 'configuration')

        seen: set[str] = set()
        for node in entries:
            if node.name in seen:
                raise DuplicateNameError(node.name, 'configuration')
            seen.add(node.name)
