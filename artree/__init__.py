"""Adaptive radix tree building blocks: a node model, tree visitors, key generators and tagged pointers."""

__version__ = "0.1.0"

__all__ = [
    "dot_printer",
    "keygen",
    "tagged_pointer",
    "tree_stats",
    "visitor",
    "well_formed",
]