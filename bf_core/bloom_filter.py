"""Fixed-capacity Bloom filter using double hashing.

The filter uses two independent hash families (MurmurHash3 via mmh3 and
xxHash64) combined with the Kirsch-Mitzenmacher optimization to produce the
configured number of probe positions, and records them in a packed bit array.

Two ways to build one:

* ``BloomFilter(capacity, false_positive_rate)`` derives the bit array size
  and hash count from the expected load.
* ``BloomFilter.from_parameters(bit_array_size, hash_count, capacity)`` takes
  the sizing as given and computes the error rate it implies.

Instances are not thread-safe; share one across threads only behind an
external lock.
"""
from __future__ import annotations

import logging
import sys
from numbers import Real
from typing import Any, Iterable, Union

from .bit_array import BitArray
from .exceptions import InvalidParameter
from .hashing import DEFAULT_SEED1, DEFAULT_SEED2, DoubleHasher
from .params import (
    DEFAULT_FALSE_POSITIVE_RATE,
    MAX_HASH_FUNCTIONS,
    MIN_HASH_FUNCTIONS,
    estimate_false_positive_rate,
    load_factor,
    optimal_bit_array_size,
    optimal_hash_count,
)

__all__ = ["BloomFilter", "Item"]

logger = logging.getLogger(__name__)

Item = Union[bytes, bytearray, memoryview, str, None]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_bytes(item: Item) -> bytes:
    if item is None:
        return b""
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"expected bytes-like or str, got {type(item).__name__}")


class BloomFilter:
    """Bloom filter backed by a :class:`BitArray` and a :class:`DoubleHasher`.

    Args:
        capacity: Expected number of elements.
        false_positive_rate: Target false-positive probability, strictly
            between 0 and 1.
        seed1: Seed for the MurmurHash3 base hash (unsigned 32-bit).
        seed2: Seed for the xxHash64 base hash (unsigned 64-bit).

    Raises:
        InvalidParameter: If ``capacity`` is not a positive integer or the
            rate is outside ``(0, 1)``.
    """

    __slots__ = (
        "_bit_array_size",
        "_hash_count",
        "_capacity",
        "_false_positive_rate",
        "_inserted_count",
        "_bits",
        "_hasher",
    )

    def __init__(
        self,
        capacity: int,
        false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
        *,
        seed1: int = DEFAULT_SEED1,
        seed2: int = DEFAULT_SEED2,
    ) -> None:
        if not _is_int(capacity) or capacity <= 0:
            raise InvalidParameter("capacity must be a positive integer")
        if (
            not isinstance(false_positive_rate, Real)
            or isinstance(false_positive_rate, bool)
            or not 0.0 < false_positive_rate < 1.0
        ):
            raise InvalidParameter("false_positive_rate must be between 0 and 1 (exclusive)")

        bit_array_size = optimal_bit_array_size(capacity, false_positive_rate)
        hash_count = optimal_hash_count(bit_array_size, capacity)
        self._setup(bit_array_size, hash_count, capacity, float(false_positive_rate), seed1, seed2)

    @classmethod
    def from_parameters(
        cls,
        bit_array_size: int,
        hash_count: int,
        capacity: int,
        *,
        seed1: int = DEFAULT_SEED1,
        seed2: int = DEFAULT_SEED2,
    ) -> "BloomFilter":
        """Build a filter with an explicit bit array size and hash count.

        ``capacity`` is only used for statistics: the target error rate is
        the estimate for ``capacity`` insertions into ``bit_array_size`` bits.

        Raises:
            InvalidParameter: If ``bit_array_size`` is not positive, or
                ``hash_count`` is outside ``[1, 32]``, or ``capacity`` is
                negative.
        """
        if not _is_int(bit_array_size) or bit_array_size <= 0:
            raise InvalidParameter("bit_array_size must be a positive integer")
        if not _is_int(hash_count) or not MIN_HASH_FUNCTIONS <= hash_count <= MAX_HASH_FUNCTIONS:
            raise InvalidParameter(
                f"hash_count must be between {MIN_HASH_FUNCTIONS} and {MAX_HASH_FUNCTIONS}"
            )
        if not _is_int(capacity) or capacity < 0:
            raise InvalidParameter("capacity must be a non-negative integer")

        rate = estimate_false_positive_rate(bit_array_size, hash_count, capacity)
        bf = cls.__new__(cls)
        bf._setup(bit_array_size, hash_count, capacity, rate, seed1, seed2)
        return bf

    def _setup(
        self,
        bit_array_size: int,
        hash_count: int,
        capacity: int,
        false_positive_rate: float,
        seed1: int,
        seed2: int,
    ) -> None:
        self._bit_array_size = bit_array_size
        self._hash_count = hash_count
        self._capacity = capacity
        self._false_positive_rate = false_positive_rate
        self._inserted_count = 0
        self._hasher = DoubleHasher(bit_array_size, seed1, seed2)
        self._bits = BitArray(bit_array_size)

        logger.debug(
            "BloomFilter created: bit_array_size=%d, hash_count=%d, capacity=%d, fp_rate=%.6f",
            bit_array_size,
            hash_count,
            capacity,
            false_positive_rate,
        )

    # -------------------------------------------------------
    # Membership
    # -------------------------------------------------------
    def insert(self, item: Item) -> None:
        """Insert ``item``; ``None`` or an empty sequence is ignored.

        Every call on a non-empty item counts towards :meth:`size`, including
        repeats of an item already present.
        """
        data = _as_bytes(item)
        if not data:
            return
        for bit_index in self._hasher.indices(data, self._hash_count):
            self._bits.set_bit(bit_index)
        self._inserted_count += 1

    def update(self, items: Iterable[Item]) -> None:
        """Insert all ``items`` in order."""
        for item in items:
            self.insert(item)

    def contains(self, item: Item) -> bool:
        """Return False if ``item`` is definitely absent, True if it may be present.

        ``None`` and empty sequences are always reported absent.
        """
        data = _as_bytes(item)
        if not data:
            return False
        for bit_index in self._hasher.indices(data, self._hash_count):
            if not self._bits.get_bit(bit_index):
                return False
        return True

    def __contains__(self, item: Item) -> bool:
        return self.contains(item)

    def clear(self) -> None:
        """Reset every bit and the insert counter; sizing stays as configured."""
        self._bits.clear()
        self._inserted_count = 0
        logger.debug("BloomFilter cleared: bit_array_size=%d", self._bit_array_size)

    # -------------------------------------------------------
    # Statistics
    # -------------------------------------------------------
    def size(self) -> int:
        """Number of insert calls since construction or the last :meth:`clear`."""
        return self._inserted_count

    def capacity(self) -> int:
        return self._capacity

    def false_positive_rate(self) -> float:
        """Target rate: as configured, or as implied by explicit sizing."""
        return self._false_positive_rate

    def estimated_false_positive_rate(self) -> float:
        """Error rate expected at the current insert count."""
        return estimate_false_positive_rate(self._bit_array_size, self._hash_count, self._inserted_count)

    def load_factor(self) -> float:
        return load_factor(self._inserted_count, self._capacity)

    def bit_array_size(self) -> int:
        return self._bit_array_size

    def hash_count(self) -> int:
        return self._hash_count

    def memory_usage(self) -> int:
        """Bytes held by the bit array plus this object's own fields."""
        return self._bits.nbytes + sys.getsizeof(self)

    def count_set_bits(self) -> int:
        return self._bits.count_set_bits()

    def stats(self) -> dict[str, Any]:
        """Snapshot of the sizing parameters and live counters."""
        return {
            "bit_array_size": self._bit_array_size,
            "hash_count": self._hash_count,
            "capacity": self._capacity,
            "false_positive_rate": self._false_positive_rate,
            "size": self._inserted_count,
            "set_bits": self.count_set_bits(),
            "load_factor": self.load_factor(),
            "estimated_false_positive_rate": self.estimated_false_positive_rate(),
            "memory_usage": self.memory_usage(),
        }

    @property
    def bit_array(self) -> BitArray:
        """Expose the underlying bit array (primarily for inspection)."""
        return self._bits

    @property
    def hasher(self) -> DoubleHasher:
        return self._hasher

    def __repr__(self) -> str:
        return (
            f"BloomFilter(bit_array_size={self._bit_array_size}, hash_count={self._hash_count}, "
            f"capacity={self._capacity}, size={self._inserted_count})"
        )
