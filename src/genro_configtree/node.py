# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigTree node classes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Iterator, Mapping

from .conversion import (
    Color,
    Int64,
    Uri,
    convert_list,
    convert_mapping,
    convert_scalar,
)
from .exceptions import DuplicateNameError


class NodeContainer:
    """Name-based access to a set of ValueNode children.

    Subclasses keep their children in ``_children``, a dict from name to
    ValueNode in insertion order. Lookups come in two flavours:

    - resolve(name): returns None when the name is missing, so that
      callers can substitute their own default
    - get(name) / container[name]: raises KeyError when missing

    Example:
        >>> port = tree.get_value('Port', int, default=8080)
        >>> host = tree.resolve('Host') or fallback_node
    """

    __slots__ = ()

    _children: dict[str, ValueNode]

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._children)

    def __iter__(self) -> Iterator[ValueNode]:
        """Iterate over direct children in insertion order."""
        return iter(self._children.values())

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __getitem__(self, name: str) -> ValueNode:
        return self.get(name)

    @property
    def child_names(self) -> list[str]:
        """Names of the direct children in insertion order."""
        return list(self._children)

    def resolve(self, name: str) -> ValueNode | None:
        """Return the child called name, or None if there is none."""
        return self._children.get(name)

    def resolve_path(self, path: str, sep: str = '.') -> ValueNode | None:
        """Follow a separated path of child names.

        Args:
            path: Names joined by sep (e.g. 'Database.Pool.Size').
            sep: Separator between names.

        Returns:
            The node at the end of the path, or None if any step is missing.
        """
        current: NodeContainer = self
        node: ValueNode | None = None
        for name in path.split(sep):
            node = current.resolve(name)
            if node is None:
                return None
            current = node
        return node

    def get(self, name: str) -> ValueNode:
        """Return the child called name.

        Raises:
            KeyError: If there is no such child.
        """
        try:
            return self._children[name]
        except KeyError:
            raise KeyError(f"Name '{name}' not found") from None

    def get_value(self, name: str, target: Any = str, default: Any = None) -> Any:
        """Resolve a child and convert it, or return default if missing.

        Conversion errors are not masked by the default: a present value
        that does not parse still raises ConversionError.
        """
        node = self.resolve(name)
        if node is None:
            return default
        return node.convert(target)

    def walk(self, _prefix: str = '') -> Iterator[tuple[str, ValueNode]]:
        """Yield (path, node) for every descendant, depth first.

        Example:
            >>> for path, node in tree.walk():
            ...     print(path, node.text)
        """
        # Explicit stack so nesting depth is not bound by the recursion limit.
        stack: list[tuple[str, Iterator[ValueNode]]] = [
            (_prefix, iter(self._children.values()))
        ]
        while stack:
            prefix, children = stack[-1]
            node = next(children, None)
            if node is None:
                stack.pop()
                continue
            path = f"{prefix}.{node.name}" if prefix else node.name
            yield path, node
            stack.append((path, iter(node._children.values())))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dict of stored text.

        Branches become dicts of their children. Leaves become their text,
        or a dict with '_value' when they also carry attribute children.
        """
        result: dict[str, Any] = {}
        pending: list[tuple[NodeContainer, dict[str, Any]]] = [(self, result)]
        while pending:
            container, target = pending.pop()
            for node in container._children.values():
                if node.is_branch:
                    target[node.name] = child = {}
                elif node._children:
                    target[node.name] = child = {'_value': node.text}
                else:
                    target[node.name] = node.text
                    continue
                pending.append((node, child))
        return result


class ValueNode(NodeContainer):
    """A named configuration value.

    Each node has:
    - name: The node's unique name within its parent
    - text: The stored text of a leaf, or None for a branch
    - children: Nodes built from XML attributes and nested elements

    A node built from an element with nested elements is a branch and
    has no text. Attribute children can hang off leaves and branches.
    Nodes are never modified after construction.

    Example:
        >>> node = ValueNode('Port', '8080')
        >>> node.as_int()
        8080
        >>> server = ValueNode('Server', children=[node])
        >>> server.resolve('Port').text
        '8080'
    """

    __slots__ = ('_name', '_text', '_children')

    def __init__(
        self,
        name: str,
        text: str | None = None,
        children: Iterable[ValueNode] = (),
    ) -> None:
        """Initialize a ValueNode.

        Args:
            name: The node's name.
            text: Stored text, None for a branch.
            children: Child nodes, attributes first then elements.

        Raises:
            DuplicateNameError: If two children share a name.
        """
        self._name = name
        self._text = text
        self._children: dict[str, ValueNode] = {}
        for child in children:
            if child.name in self._children:
                raise DuplicateNameError(child.name, name)
            self._children[child.name] = child

    @property
    def name(self) -> str:
        """The node's name, unique within its parent."""
        return self._name

    @property
    def text(self) -> str | None:
        """Stored text of a leaf, None for a branch."""
        return self._text

    @classmethod
    def from_attribute(cls, name: str, value: str) -> ValueNode:
        """Build a leaf node from an XML attribute."""
        return cls(name, value)

    def __repr__(self) -> str:
        value_repr = (
            f"children={self.child_names!r}" if self.is_branch else f"text={self.text!r}"
        )
        return f"ValueNode({self.name!r}, {value_repr})"

    def __str__(self) -> str:
        return self.text if self.text is not None else ''

    def __bool__(self) -> bool:
        # A leaf has no children but is still a present value.
        return True

    @property
    def is_branch(self) -> bool:
        """True if this node was built from an element with nested elements."""
        return self.text is None

    @property
    def is_leaf(self) -> bool:
        """True if this node carries stored text."""
        return self.text is not None

    # ==================== Conversion ====================

    def convert(self, target: Any = str) -> Any:
        """Convert the stored text to target (see conversion module).

        A branch converts as the empty string.
        """
        return convert_scalar(str(self), target)

    def as_str(self) -> str:
        return str(self)

    def as_int(self, width: Any = Int64) -> int:
        return self.convert(width)

    def as_float(self) -> float:
        return self.convert(float)

    def as_bool(self) -> bool:
        return self.convert(bool)

    def as_datetime(self) -> datetime:
        return self.convert(datetime)

    def as_date(self) -> date:
        return self.convert(date)

    def as_color(self) -> Color:
        return self.convert(Color)

    def as_uri(self) -> Uri:
        return self.convert(Uri)

    def as_list(self, item_type: Any = str) -> tuple[Any, ...]:
        """Convert comma separated text to a tuple of item_type."""
        return convert_list(str(self), item_type)

    def as_mapping(self, key_type: Any = str, value_type: Any = str) -> Mapping[Any, Any]:
        """Convert 'key:value' pairs to a read-only mapping."""
        return convert_mapping(str(self), key_type, value_type)
