"""Check that a tree is well-formed.

A tree is well-formed when:

1. no node can be reached along two different paths (there are no loops),
2. every inner node has a number of children that is in range for its type,
3. the prefixes and key bytes along the path to every leaf form a prefix of
   that leaf's key.

The checker reports the first problem it finds by raising a
:class:`MalformedTreeError`.
"""

from __future__ import annotations

from typing import Any

from artree.visitor import InnerNode, LeafNode, Node, NodeType, Visitor


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(memoryview(key))


def _format_bytes(data: bytes) -> str:
    return "[" + ", ".join(str(byte) for byte in data) + "]"


def _format_range(allowed: range) -> str:
    return f"{allowed.start}..={allowed.stop - 1}"


class MalformedTreeError(Exception):
    """The tree violates one of the well-formedness rules."""


class LoopFound(MalformedTreeError):
    """A node was reached more than once while walking the tree."""

    def __init__(self, node: Node, first_observed: bytes, later_observed: bytes) -> None:
        self.node = node
        self.first_observed = bytes(first_observed)
        self.later_observed = bytes(later_observed)
        super().__init__(
            f"Found a loop in the tree containing the node [{node!r}]. First observed "
            f"that node at [{_format_bytes(self.first_observed)}], then later observed "
            f"the same node at [{_format_bytes(self.later_observed)}]"
        )


class WrongChildrenCount(MalformedTreeError):
    """An inner node had a number of children outside the range of its type."""

    def __init__(self, key_prefix: bytes, inner_node_type: NodeType, num_children: int) -> None:
        self.key_prefix = bytes(key_prefix)
        self.inner_node_type = inner_node_type
        self.num_children = num_children
        super().__init__(
            f"Found an inner node of type [{inner_node_type.value}] at location "
            f"[{_format_bytes(self.key_prefix)}] that had the wrong number of children! "
            f"Expected children in range [{_format_range(inner_node_type.capacity_range())}], "
            f"but found [{num_children}] children"
        )


class PrefixMismatch(MalformedTreeError):
    """A leaf's key did not start with the prefix of the path leading to it."""

    def __init__(self, expected_prefix: bytes, entire_key: Any) -> None:
        self.expected_prefix = bytes(expected_prefix)
        self.entire_key = entire_key
        super().__init__(
            "Found a leaf that had a mismatched key from the expected prefix! Expected "
            f"the leaf key to start with [{_format_bytes(self.expected_prefix)}], but the "
            f"leaf key was [{_format_bytes(_key_bytes(entire_key))}]"
        )


class WellFormedChecker(Visitor[int]):
    """A visitor that verifies a tree and counts its nodes."""

    def __init__(self) -> None:
        self._key_prefix = bytearray()
        self._seen: dict[Node, bytes] = {}

    @classmethod
    def check_tree(cls, tree: Node) -> int:
        """Return the number of nodes in ``tree``.

        Raises a :class:`MalformedTreeError` subclass if the tree is not
        well-formed.
        """
        checker = cls()
        # The root is seen at the empty prefix.
        checker._seen[tree] = b""
        return checker.visit(tree)

    def default_output(self) -> int:
        return 0

    def combine_output(self, o1: int, o2: int) -> int:
        return o1 + o2

    def visit_inner(self, node: InnerNode) -> int:
        original_len = len(self._key_prefix)
        self._key_prefix += node.prefix

        node_count = 0
        num_children = 0
        for key_byte, child in node.iter_children():
            self._key_prefix.append(key_byte)
            current = bytes(self._key_prefix)

            first_observed = self._seen.get(child)
            if first_observed is not None:
                raise LoopFound(child, first_observed, current)
            self._seen[child] = current

            node_count += self.visit(child)

            popped = self._key_prefix.pop()
            if popped != key_byte:
                raise AssertionError("key prefix stack out of step with traversal")
            num_children += 1

        del self._key_prefix[original_len:]

        if num_children not in node.node_type.capacity_range():
            raise WrongChildrenCount(bytes(self._key_prefix), node.node_type, num_children)

        return node_count + 1

    def visit_leaf(self, leaf: LeafNode) -> int:
        if not _key_bytes(leaf.key).startswith(self._key_prefix):
            raise PrefixMismatch(bytes(self._key_prefix), leaf.key)
        return 1