# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigurationLoader - load and reload configuration documents.

The loader owns the published ConfigurationTree and remembers every
document merged into it, so that reload() can rebuild the tree from
scratch in load order.

A reload never exposes a half-built tree: the new tree is built aside
and published with a single reference swap. Code that kept the old tree
keeps reading a complete, unchanged tree.

Example:
    >>> loader = ConfigurationLoader(expected_version='1.0')
    >>> loader.load('app.xml')
    >>> loader.load('local.xml')
    >>> cfg = loader.tree
    >>> cfg.get_value('Port', int, default=8080)
    >>> loader.reload()  # re-reads app.xml, then local.xml
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from .tree import ConfigurationTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationSource:
    """A document merged by the loader.

    Attributes:
        path: File to read again on reload, or None for in-memory content.
        content: Document content for in-memory sources.
        expected_version: Version required when this source was loaded.
    """

    path: Path | None = None
    content: str | bytes | None = None
    expected_version: str | None = None

    def read(self) -> str | bytes:
        """Return the document content, reading the file if there is one."""
        if self.path is not None:
            return self.path.read_bytes()
        return self.content if self.content is not None else ''

    @property
    def description(self) -> str:
        return str(self.path) if self.path is not None else '<text>'


class ConfigurationLoader:
    """Owns a ConfigurationTree built from recorded sources.

    Args:
        expected_version: Version required of every load unless a load
            passes its own.
    """

    def __init__(self, expected_version: str | None = None) -> None:
        self.expected_version = expected_version
        self._tree = ConfigurationTree()
        self._sources: list[ConfigurationSource] = []

    def __repr__(self) -> str:
        return f"ConfigurationLoader(sources={len(self._sources)}, tree={self._tree!r})"

    @property
    def tree(self) -> ConfigurationTree:
        """The currently published tree."""
        return self._tree

    @property
    def sources(self) -> tuple[ConfigurationSource, ...]:
        """Recorded sources in load order."""
        return tuple(self._sources)

    def load(
        self,
        path: str | Path,
        expected_version: str | None = None,
    ) -> ConfigurationTree:
        """Read an XML file and merge it into the tree.

        The file is read as bytes so that its XML declaration decides the
        encoding. A failed load changes nothing and records nothing.

        Raises:
            OSError: If the file cannot be read.
            ConfigurationError: If the document cannot be merged.
        """
        source = ConfigurationSource(
            path=Path(path),
            expected_version=self._expected(expected_version),
        )
        return self._merge(source)

    def load_text(
        self,
        text: str | bytes,
        expected_version: str | None = None,
    ) -> ConfigurationTree:
        """Merge an in-memory document into the tree."""
        source = ConfigurationSource(
            content=text,
            expected_version=self._expected(expected_version),
        )
        return self._merge(source)

    def load_stream(
        self,
        stream: IO[str] | IO[bytes],
        expected_version: str | None = None,
    ) -> ConfigurationTree:
        """Read a stream to the end and merge its content.

        The content is kept so that reload() can replay it.
        """
        return self.load_text(stream.read(), expected_version)

    def reload(self) -> ConfigurationTree:
        """Rebuild the tree from all recorded sources and publish it.

        If any source fails, the published tree stays as it was and the
        error propagates.
        """
        if not self._sources:
            return self._tree

        tree = ConfigurationTree()
        for source in self._sources:
            tree.merge(source.read(), source.expected_version)

        self._tree = tree
        logger.debug(
            "Reloaded configuration from %d sources (version %r)",
            len(self._sources), tree.version,
        )
        return tree

    def _expected(self, expected_version: str | None) -> str | None:
        if expected_version is not None:
            return expected_version
        return self.expected_version

    def _merge(self, source: ConfigurationSource) -> ConfigurationTree:
        self._tree.merge(source.read(), source.expected_version)
        self._sources.append(source)
        logger.debug("Loaded configuration from %s", source.description)
        return self._tree
