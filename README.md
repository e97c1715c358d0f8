# artree

Building blocks for working with adaptive radix trees over byte-string keys:
a node model, visitors that check, measure and draw a tree, key generators
for exercising trees, and a tagged-pointer value type.

## Modules

- `artree.visitor` – the node model and the `Visitor` base class.
  - `NodeType` has the members `NODE4`, `NODE16`, `NODE48`, `NODE256` and
    `LEAF`. `upper_capacity()` gives the most children a type holds and
    `capacity_range()` the allowed child counts (`1..=4`, `5..=16`,
    `17..=48`, `49..=256`).
  - `LeafNode(key, value)` holds a whole key and its value.
  - `InnerNode(node_type, prefix=b"")` holds a compressed prefix and children
    indexed by one key byte. `write_child(key_byte, child)` sets or replaces
    a child and raises `ValueError` for a key byte outside `0..=255` or when
    the node is full; `iter_children()` yields `(key_byte, child)` pairs in
    ascending order; `len(node)` is the number of children.
  - `Visitor` walks a tree with `visit`, `visit_inner`, `visit_leaf` and
    `super_visit`, folding results with `default_output` and
    `combine_output`.
- `artree.well_formed` – `WellFormedChecker.check_tree(tree)` returns the
  number of nodes in a tree, or raises a `MalformedTreeError` subclass:
  `LoopFound` (a node reached twice), `WrongChildrenCount` (an inner node
  with a child count outside its type's range) or `PrefixMismatch` (a leaf
  whose key does not start with the bytes of the path leading to it). Each
  carries the details as attributes (`first_observed`, `later_observed`,
  `key_prefix`, `inner_node_type`, `num_children`, `expected_prefix`,
  `entire_key`).
- `artree.tree_stats` – `TreeStatsCollector.collect(root)` returns a
  `TreeStats` with node counts per type, leaf count, empty child slots,
  total key bytes and inner-node bytes; `TreeStatsCollector.count_leaf_nodes(root)`
  counts leaves only. `TreeStats.overhead_per_key_byte()` divides inner-node
  bytes by key bytes, and `TreeStats` values can be added together.
- `artree.dot_printer` – `DotPrinter.print_tree(output, tree, settings)`
  writes a tree in Graphviz DOT notation to a text stream, and
  `convert_tree_to_dot_string(root, settings)` returns it as a string.
  `DotPrinterSettings(display_node_address=True)` adds each node's identity
  to its label.
- `artree.keygen` – deterministic key sets:
  - `generate_keys_skewed(max_len)` yields keys `[255]`, `[0, 255]`, … up to
    length `max_len`;
  - `generate_key_fixed_length(level_widths)` yields every key whose digit
    `i` steps from 0 to 255 in `level_widths[i]` steps, in ascending order;
  - `generate_key_with_prefix(level_widths, prefix_expansions)` does the same,
    then repeats chosen digits, each given by a
    `PrefixExpansion(base_index, expanded_length)`.

  Invalid arguments raise `ValueError`.
- `artree.tagged_pointer` – `TaggedPointer`, an integer address for a type
  of a given alignment that stores small integers in the low bits the
  alignment leaves free. `new` and `new_with_data` return `None` for address
  0; a misaligned address, an alignment that gives fewer than `min_bits`
  bits, or data that does not fit raises `ValueError`. `cast(alignment)`
  moves the address and data to another alignment.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Building, checking, measuring and drawing a tree:

```python
from artree.dot_printer import convert_tree_to_dot_string
from artree.tree_stats import TreeStatsCollector
from artree.visitor import InnerNode, LeafNode, NodeType
from artree.well_formed import WellFormedChecker

root = InnerNode(NodeType.NODE4)
root.write_child(1, LeafNode(bytes([1, 10]), "a"))
root.write_child(2, LeafNode(bytes([2, 20]), "b"))

assert WellFormedChecker.check_tree(root) == 3

stats = TreeStatsCollector.collect(root)
assert stats.node4_count == 1
assert stats.leaf_count == 2
assert stats.empty_capacity == 2
assert stats.total_key_bytes == 4

print(convert_tree_to_dot_string(root))
```

Key generation:

```python
from artree.keygen import PrefixExpansion, generate_key_fixed_length, generate_key_with_prefix

keys = list(generate_key_fixed_length([3, 2, 1]))
assert len(keys) == 24
assert keys[0] == bytes([0, 0, 0])
assert keys[-1] == bytes([255, 255, 255])

expanded = list(generate_key_with_prefix([2, 2, 2], [PrefixExpansion(0, 3)]))
assert expanded[-1] == bytes([255] * 5)
```

Tagged pointers:

```python
from artree.tagged_pointer import TaggedPointer

pointer = TaggedPointer.new_with_data(0x1000, 8, 3, 0b101)
assert pointer.to_data() == 0b101
assert pointer.to_ptr() == 0x1000
pointer.set_data(0b010)
assert pointer.to_data() == 0b010
```

## What this package does not do

There is no map or tree type with insert, search or delete operations, and
nodes do not grow or shrink between sizes by themselves: trees are built by
hand with `InnerNode.write_child`. `TaggedPointer` works on integer
addresses only and never reads or writes memory.