"""Generators of byte-string keys with controlled shapes.

These produce deterministic key sets for exercising and measuring tree
structures: skewed keys of growing length, dense fixed-length keys, and
fixed-length keys with long runs of repeated bytes that act as shared
prefixes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

BYTE_MIN = 0
BYTE_MAX = 255


@dataclass(frozen=True)
class PrefixExpansion:
    """Repeat the byte at ``base_index`` so it occupies ``expanded_length`` bytes."""

    base_index: int
    """Index in the unexpanded key of the byte to copy."""
    expanded_length: int
    """Number of copies of that byte in the expanded key."""


def generate_keys_skewed(max_len: int) -> Iterator[bytes]:
    """Yield ``max_len`` keys of lengths 1 to ``max_len``.

    Each key is zero or more ``0`` bytes followed by a single ``255`` byte, so
    no key is a prefix of another. Raises ``ValueError`` if ``max_len`` is
    not positive.
    """
    if max_len <= 0:
        raise ValueError("the fixed key length must be greater than 0")
    return (bytes(length - 1) + bytes([BYTE_MAX]) for length in range(1, max_len + 1))


def _div_ceil(lhs: int, rhs: int) -> int:
    return -(-lhs // rhs)


def _validate_widths(level_widths: Iterable[int]) -> tuple[int, ...]:
    widths = tuple(level_widths)
    if not widths:
        raise ValueError("the fixed key length must be greater than 0")
    for width in widths:
        if width > BYTE_MAX:
            raise ValueError(f"each level width must fit in a byte, got {width}")
        if width <= 0:
            raise ValueError(
                "the number of distinct values for each key digit must be greater than 0"
            )
    return widths


def _fixed_length_keys(increments: tuple[int, ...]) -> Iterator[bytes]:
    key = bytearray(len(increments))
    while True:
        yield bytes(key)
        if all(digit == BYTE_MAX for digit in key):
            return
        # Advance like an odometer, least significant digit last.
        for idx in reversed(range(len(key))):
            if key[idx] == BYTE_MAX:
                key[idx] = BYTE_MIN
            else:
                key[idx] = min(BYTE_MAX, key[idx] + increments[idx])
                break


def generate_key_fixed_length(level_widths: Sequence[int]) -> Iterator[bytes]:
    """Yield keys of length ``len(level_widths)`` in ascending order.

    Digit ``i`` steps from 0 towards 255 in increments of
    ``ceil(255 / level_widths[i])``, saturating at 255. Raises
    ``ValueError`` if ``level_widths`` is empty or any width is not in
    ``1..255``.
    """
    widths = _validate_widths(level_widths)
    increments = tuple(_div_ceil(BYTE_MAX, width) for width in widths)
    return _fixed_length_keys(increments)


def _apply_expansions(key: bytes, expansions: Sequence[PrefixExpansion]) -> bytes:
    expanded = bytearray()
    old_index = 0
    for expansion in expansions:
        expanded += key[old_index : expansion.base_index]
        expanded += bytes([key[expansion.base_index]]) * expansion.expanded_length
        old_index = expansion.base_index + 1
    expanded += key[old_index:]
    return bytes(expanded)


def generate_key_with_prefix(
    level_widths: Sequence[int], prefix_expansions: Iterable[PrefixExpansion]
) -> Iterator[bytes]:
    """Yield the keys of :func:`generate_key_fixed_length`, with bytes expanded.

    Each expansion replaces one digit of the base key by a run of copies of
    that digit, simulating long shared prefixes. Raises ``ValueError`` if an
    expansion index is out of range or repeated, or an expansion length is
    not positive.
    """
    widths = tuple(level_widths)
    expansions = tuple(prefix_expansions)

    if not all(expansion.base_index < len(widths) for expansion in expansions):
        raise ValueError("the prefix expansion index must be less than `base_key_len`.")
    if not all(expansion.base_index >= 0 for expansion in expansions):
        raise ValueError("the prefix expansion index must not be negative.")
    if not all(expansion.expanded_length > 0 for expansion in expansions):
        raise ValueError("the prefix expansion length must be greater than 0.")
    indices = [expansion.base_index for expansion in expansions]
    if len(set(indices)) != len(indices):
        raise ValueError("the prefix expansion index must be unique")

    sorted_expansions = sorted(expansions, key=lambda expansion: expansion.base_index)
    base_keys = generate_key_fixed_length(widths)
    return (_apply_expansions(key, sorted_expansions) for key in base_keys)