"""Node model of an adaptive radix tree and a visitor over it.

Inner nodes come in four sizes (4, 16, 48 and 256 children). Each holds a
compressed key prefix and maps single key bytes to children. Leaves hold a
whole key and its value.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class NodeType(enum.Enum):
    """The kind of a tree node."""

    NODE4 = "Node4"
    NODE16 = "Node16"
    NODE48 = "Node48"
    NODE256 = "Node256"
    LEAF = "Leaf"

    def upper_capacity(self) -> int:
        """Return the largest number of children a node of this type holds."""
        return _CAPACITY_BOUNDS[self][1]

    def capacity_range(self) -> range:
        """Return the allowed numbers of children for a node of this type."""
        low, high = _CAPACITY_BOUNDS[self]
        return range(low, high + 1)


_CAPACITY_BOUNDS = {
    NodeType.NODE4: (1, 4),
    NodeType.NODE16: (5, 16),
    NodeType.NODE48: (17, 48),
    NodeType.NODE256: (49, 256),
    NodeType.LEAF: (0, 0),
}


@dataclass(eq=False)
class LeafNode:
    """A leaf holding a whole key and its value."""

    key: Any
    value: Any


class InnerNode:
    """An inner node: a key prefix and children indexed by one key byte."""

    __slots__ = ("node_type", "prefix", "_children")

    def __init__(self, node_type: NodeType, prefix: bytes = b"") -> None:
        if node_type is NodeType.LEAF:
            raise ValueError("an inner node cannot have the leaf node type")
        self.node_type = node_type
        self.prefix = bytes(prefix)
        self._children: dict[int, Node] = {}

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return (
            f"InnerNode({self.node_type.value}, prefix={list(self.prefix)}, "
            f"children={sorted(self._children)})"
        )

    def write_child(self, key_byte: int, child: Node) -> None:
        """Set the child for ``key_byte``, replacing any existing one.

        Raises ``ValueError`` if ``key_byte`` is not a byte value or the node
        is already full.
        """
        if not 0 <= key_byte <= 255:
            raise ValueError(f"key byte must be in 0..=255, got {key_byte}")
        if (
            key_byte not in self._children
            and len(self._children) >= self.node_type.upper_capacity()
        ):
            raise ValueError(f"{self.node_type.value} is full")
        self._children[key_byte] = child

    def iter_children(self) -> Iterator[tuple[int, Node]]:
        """Yield ``(key_byte, child)`` pairs in ascending key byte order."""
        for key_byte in sorted(self._children):
            yield key_byte, self._children[key_byte]


Node = Union[InnerNode, LeafNode]


class Visitor(ABC, Generic[T]):
    """Walks a tree and folds the results of its nodes into one output."""

    @abstractmethod
    def default_output(self) -> T:
        """Return the output of a node that contributes nothing."""

    @abstractmethod
    def combine_output(self, o1: T, o2: T) -> T:
        """Merge two outputs into one."""

    def visit(self, node: Node) -> T:
        """Dispatch ``node`` to :meth:`visit_inner` or :meth:`visit_leaf`."""
        if isinstance(node, LeafNode):
            return self.visit_leaf(node)
        if isinstance(node, InnerNode):
            return self.visit_inner(node)
        raise TypeError(f"not a tree node: {node!r}")

    def visit_inner(self, node: InnerNode) -> T:
        """Visit an inner node; by default visit its children."""
        return self.super_visit(node)

    def visit_leaf(self, leaf: LeafNode) -> T:
        """Visit a leaf; by default contribute nothing."""
        return self.default_output()

    def super_visit(self, node: InnerNode) -> T:
        """Visit every child of ``node`` in order and combine the outputs."""
        output = self.default_output()
        for _, child in node.iter_children():
            output = self.combine_output(output, self.visit(child))
        return output