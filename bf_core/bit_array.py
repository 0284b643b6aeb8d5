"""Packed bit array backing a Bloom filter."""
from __future__ import annotations

from .exceptions import InvalidParameter

__all__ = ["BitArray"]


class BitArray:
    """Fixed-length bitset stored in a bytearray, bit ``i`` at ``byte[i >> 3] & (1 << (i & 7))``.

    Out-of-range positions are ignored by :meth:`set_bit` and read as unset
    by :meth:`get_bit`, so this layer never raises after construction.
    """

    __slots__ = ("_size", "_bytes")

    def __init__(self, size: int) -> None:
        if not isinstance(size, int) or size <= 0:
            raise InvalidParameter("size must be a positive integer")

        self._size = size
        self._bytes = bytearray((size + 7) // 8)

    @property
    def size(self) -> int:
        """Number of addressable bits."""
        return self._size

    @property
    def nbytes(self) -> int:
        """Number of bytes backing the bits."""
        return len(self._bytes)

    def set_bit(self, index: int) -> None:
        if not 0 <= index < self._size:
            return
        self._bytes[index >> 3] |= 1 << (index & 7)

    def get_bit(self, index: int) -> bool:
        if not 0 <= index < self._size:
            return False
        return bool(self._bytes[index >> 3] & (1 << (index & 7)))

    def count_set_bits(self) -> int:
        """Exact number of set bits among the first ``size`` bits."""
        full_bytes, extra_bits = divmod(self._size, 8)
        count = int.from_bytes(self._bytes[:full_bytes], "little").bit_count()
        if extra_bits:
            # padding bits past size-1 are never counted
            count += (self._bytes[full_bytes] & ((1 << extra_bits) - 1)).bit_count()
        return count

    def clear(self) -> None:
        self._bytes[:] = bytes(len(self._bytes))

    def __len__(self) -> int:
        return self._size

    def __bytes__(self) -> bytes:
        return bytes(self._bytes)

    def __repr__(self) -> str:
        return f"BitArray(size={self._size}, set_bits={self.count_set_bits()})"
