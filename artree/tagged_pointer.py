"""Addresses that carry a few bits of extra data in their low bits.

A value of a type with alignment ``A`` always lives at an address that is a
multiple of ``A``, so the lowest ``log2(A)`` bits of such an address are
always zero. A :class:`TaggedPointer` stores small integers in those bits.
"""

from __future__ import annotations

import functools

POINTER_WIDTH = 64
"""Width, in bits, of the addresses handled here."""

USIZE_MAX = (1 << POINTER_WIDTH) - 1

MAX_ALIGNMENT = 1 << 29
"""Largest alignment that a type may require."""


def _num_bits(alignment: int, min_bits: int) -> int:
    if alignment <= 0 or alignment & (alignment - 1):
        raise ValueError(f"alignment must be a positive power of two, got {alignment}")
    if alignment > MAX_ALIGNMENT:
        raise ValueError(f"alignment {alignment} exceeds the maximum of {MAX_ALIGNMENT}")
    if min_bits < 0:
        raise ValueError(f"min_bits must not be negative, got {min_bits}")
    num_bits = alignment.bit_length() - 1
    if num_bits < min_bits:
        raise ValueError(
            "need the alignment of the pointed to type to have sufficient bits: "
            f"alignment {alignment} gives {num_bits} bits, {min_bits} required"
        )
    return num_bits


@functools.total_ordering
class TaggedPointer:
    """A non-null address for a type of a given alignment, plus tag bits.

    ``min_bits`` is the number of tag bits the caller needs; an alignment
    that does not provide that many bits is rejected.
    """

    __slots__ = ("_raw", "_alignment", "_min_bits", "_num_bits")

    def __init__(self, address: int, alignment: int, min_bits: int) -> None:
        num_bits = _num_bits(alignment, min_bits)
        if address == 0:
            raise ValueError("a tagged pointer cannot be null")
        if address < 0 or address > USIZE_MAX:
            raise ValueError(f"address {address:#x} is outside the address space")
        if address & (alignment - 1):
            raise ValueError(f"this pointer was not aligned: {address:#x}")
        self._raw = address
        self._alignment = alignment
        self._min_bits = min_bits
        self._num_bits = num_bits

    @classmethod
    def new(cls, address: int, alignment: int, min_bits: int) -> TaggedPointer | None:
        """Return a tagged pointer for ``address``, or ``None`` if it is null.

        Raises ``ValueError`` if the address is not aligned to ``alignment``.
        """
        if address == 0:
            return None
        return cls(address, alignment, min_bits)

    @classmethod
    def new_with_data(
        cls, address: int, alignment: int, min_bits: int, data: int
    ) -> TaggedPointer | None:
        """Like :meth:`new`, then store ``data`` in the tag bits."""
        pointer = cls.new(address, alignment, min_bits)
        if pointer is None:
            return None
        pointer.set_data(data)
        return pointer

    @property
    def alignment(self) -> int:
        """Alignment of the pointed-to type."""
        return self._alignment

    @property
    def min_bits(self) -> int:
        """Number of tag bits this pointer was required to provide."""
        return self._min_bits

    @property
    def num_bits(self) -> int:
        """Number of tag bits available."""
        return self._num_bits

    @property
    def pointer_mask(self) -> int:
        """Mask of the address-carrying bits."""
        return (USIZE_MAX << self._num_bits) & USIZE_MAX

    @property
    def data_mask(self) -> int:
        """Mask of the data-carrying bits."""
        return ~self.pointer_mask & USIZE_MAX

    def to_ptr(self) -> int:
        """Return the address with the tag bits cleared."""
        return self._raw & self.pointer_mask

    def to_data(self) -> int:
        """Return the data stored in the tag bits."""
        return self._raw & self.data_mask

    def set_data(self, data: int) -> None:
        """Replace the tag bits with ``data``.

        Raises ``ValueError`` if ``data`` does not fit in :attr:`num_bits` bits.
        """
        if data < 0 or data & self.pointer_mask or data > USIZE_MAX:
            raise ValueError(
                f"cannot set more data beyond the lowest {self._num_bits} bits: {data:#b}"
            )
        self._raw = (self._raw & self.pointer_mask) | (data & self.data_mask)

    def cast(self, alignment: int) -> TaggedPointer:
        """Return a pointer to the same address for a type of ``alignment``.

        The tag data is carried over. Raises ``ValueError`` if the new
        alignment gives fewer than :attr:`min_bits` bits, if the address is
        not aligned for it, or if the data does not fit.
        """
        new = TaggedPointer(self.to_ptr(), alignment, self._min_bits)
        new.set_data(self.to_data())
        return new

    def _key(self) -> tuple[int, int]:
        return (self._raw, self._alignment)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaggedPointer):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TaggedPointer):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __copy__(self) -> TaggedPointer:
        new = TaggedPointer(self.to_ptr(), self._alignment, self._min_bits)
        new._raw = self._raw
        return new

    def __repr__(self) -> str:
        return f"TaggedPointer(pointer={self.to_ptr():#x}, data={self.to_data()})"

    def __format__(self, spec: str) -> str:
        if spec == "p":
            return f"{self.to_ptr():#x}"
        return format(repr(self), spec)