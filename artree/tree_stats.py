"""Statistics about the shape and memory use of a tree."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any

from artree.visitor import InnerNode, LeafNode, Node, NodeType, Visitor

_INNER_NODE_BYTES = {
    NodeType.NODE4: 80,
    NodeType.NODE16: 184,
    NodeType.NODE48: 680,
    NodeType.NODE256: 2088,
}
"""Bytes taken by each inner node type, prefix storage aside."""

_PREFIX_INLINE_CAPACITY = 16
"""Prefix bytes stored within a node; longer prefixes take extra storage."""


def _key_length(key: Any) -> int:
    if isinstance(key, str):
        return len(key.encode("utf-8"))
    return memoryview(key).nbytes


@dataclass
class TreeStats:
    """Counts of node types and byte totals for a tree."""

    node4_count: int = 0
    node16_count: int = 0
    node48_count: int = 0
    node256_count: int = 0
    leaf_count: int = 0
    empty_capacity: int = 0
    """Empty child slots in inner nodes."""
    total_key_bytes: int = 0
    """Total bytes of the keys stored in leaves."""
    total_inner_node_bytes: int = 0
    """Total bytes used by inner nodes."""

    def __add__(self, other: TreeStats) -> TreeStats:
        if not isinstance(other, TreeStats):
            return NotImplemented
        return TreeStats(
            **{
                field.name: getattr(self, field.name) + getattr(other, field.name)
                for field in dataclasses.fields(self)
            }
        )

    def overhead_per_key_byte(self) -> float:
        """Return inner node bytes per byte of key stored."""
        if self.total_key_bytes == 0:
            return math.nan if self.total_inner_node_bytes == 0 else math.inf
        return self.total_inner_node_bytes / self.total_key_bytes


_COUNT_FIELDS = {
    NodeType.NODE4: "node4_count",
    NodeType.NODE16: "node16_count",
    NodeType.NODE48: "node48_count",
    NodeType.NODE256: "node256_count",
}


class _LeafCounter(Visitor[int]):
    def default_output(self) -> int:
        return 0

    def combine_output(self, o1: int, o2: int) -> int:
        return o1 + o2

    def visit_leaf(self, leaf: LeafNode) -> int:
        return 1


class TreeStatsCollector(Visitor[TreeStats]):
    """A visitor that accumulates :class:`TreeStats` over a tree."""

    @classmethod
    def collect(cls, root: Node) -> TreeStats:
        """Return the statistics of the tree rooted at ``root``."""
        return cls().visit(root)

    @classmethod
    def count_leaf_nodes(cls, root: Node) -> int:
        """Return the number of leaves in the tree rooted at ``root``."""
        return _LeafCounter().visit(root)

    def default_output(self) -> TreeStats:
        return TreeStats()

    def combine_output(self, o1: TreeStats, o2: TreeStats) -> TreeStats:
        return o1 + o2

    def visit_inner(self, node: InnerNode) -> TreeStats:
        output = self.super_visit(node)
        count_field = _COUNT_FIELDS[node.node_type]
        prefix_bytes = len(node.prefix) if len(node.prefix) > _PREFIX_INLINE_CAPACITY else 0
        return dataclasses.replace(
            output,
            **{count_field: getattr(output, count_field) + 1},
            empty_capacity=output.empty_capacity + node.node_type.upper_capacity() - len(node),
            total_inner_node_bytes=output.total_inner_node_bytes
            + _INNER_NODE_BYTES[node.node_type]
            + prefix_bytes,
        )

    def visit_leaf(self, leaf: LeafNode) -> TreeStats:
        return TreeStats(leaf_count=1, total_key_bytes=_key_length(leaf.key))