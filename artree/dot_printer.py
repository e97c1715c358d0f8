"""Render a tree in the Graphviz DOT language."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, TextIO

from artree.visitor import InnerNode, LeafNode, Node, NodeType, Visitor


@dataclass
class DotPrinterSettings:
    """Options for :class:`DotPrinter`."""

    display_node_address: bool = False
    """Include each node's identity in its label."""


def _debug(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "[" + ", ".join(str(byte) for byte in bytes(value)) + "]"
    return repr(value)


def _address(node: Node) -> str:
    return f"{id(node):#x}"


class DotPrinter(Visitor[int]):
    """A visitor that writes each node as a DOT record and returns its id."""

    def __init__(self, output: TextIO, settings: DotPrinterSettings | None = None) -> None:
        self._output = output
        self._next_id = 0
        self._settings = settings if settings is not None else DotPrinterSettings()

    @classmethod
    def print_tree(
        cls, output: TextIO, tree: Node, settings: DotPrinterSettings | None = None
    ) -> None:
        """Write the DOT form of ``tree`` to the text stream ``output``."""
        printer = cls(output, settings)
        output.write("strict digraph G {\n")
        output.write("node [shape=record]\n")
        printer.visit(tree)
        output.write("}\n")

    def default_output(self) -> int:
        raise RuntimeError("this visitor should never use the default output")

    def combine_output(self, o1: int, o2: int) -> int:
        raise RuntimeError("this visitor should never combine outputs")

    def _new_id(self) -> int:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def visit_inner(self, node: InnerNode) -> int:
        write = self._output.write
        node_id = self._new_id()
        write(f"n{node_id} ")
        write('[label="{')
        header = f"{node.node_type.value} | {len(node.prefix)} | {_debug(node.prefix)}"
        if self._settings.display_node_address:
            write(f"{{<h0> {_address(node)}}}  | {{{header}}} | {{")
        else:
            write(f"{{<h0> {header}}} | {{")

        children = list(node.iter_children())
        write("| ".join(f"<c{idx}> {key_byte}" for idx, (key_byte, _) in enumerate(children)))
        write('}}"]\n')

        for idx, (_, child) in enumerate(children):
            child_id = self.visit(child)
            write(f"n{node_id}:c{idx} -> n{child_id}:h0\n")
        return node_id

    def visit_leaf(self, leaf: LeafNode) -> int:
        write = self._output.write
        node_id = self._new_id()
        write(f"n{node_id} ")
        write('[label="{')
        body = f"{{{NodeType.LEAF.value}}} | {{{_debug(leaf.key)}}} | {{{_debug(leaf.value)}}}}}"
        if self._settings.display_node_address:
            write(f'{{<h0> {_address(leaf)}}} | {body}"]\n')
        else:
            write(f"{{<h0> {NodeType.LEAF.value}}} | {{{_debug(leaf.key)}}} | "
                  f'{{{_debug(leaf.value)}}}}}"]\n')
        return node_id


def convert_tree_to_dot_string(root: Node, settings: DotPrinterSettings | None = None) -> str:
    """Return the DOT form of the tree rooted at ``root``."""
    buffer = io.StringIO()
    DotPrinter.print_tree(buffer, root, settings)
    return buffer.getvalue()