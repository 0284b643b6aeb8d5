"""Hash engine: two seeded 64-bit base hashes and a double-hashing combiner.

The two base hash families (MurmurHash3 via mmh3 and xxHash64) are combined
with the Kirsch-Mitzenmacher optimization, so a single pair of digests yields
every probe position for an item:

    g_i(x) = (h1(x) + i * h2(x)) mod m,   i in [0, k)

``h2`` is forced odd first, which makes the stride coprime with any
power-of-two ``m`` so up to ``m`` probes land on distinct slots.
"""
from __future__ import annotations

import mmh3
import xxhash

from .exceptions import InvalidParameter

__all__ = [
    "HASH_BITS",
    "DEFAULT_SEED1",
    "DEFAULT_SEED2",
    "Murmur3Hash64",
    "XXHash64",
    "DoubleHasher",
]

HASH_BITS = 64
DEFAULT_SEED1 = 0
DEFAULT_SEED2 = 0x1234567890ABCDEF

_MAX_SEED32 = (1 << 32) - 1
_MAX_SEED64 = (1 << 64) - 1


class Murmur3Hash64:
    """MurmurHash3 x64, truncated to the low 64 bits of the 128-bit digest."""

    __slots__ = ("seed",)

    def __init__(self, seed: int = DEFAULT_SEED1) -> None:
        # mmh3 only takes 32-bit seeds
        if not isinstance(seed, int) or not 0 <= seed <= _MAX_SEED32:
            raise InvalidParameter(f"murmur3 seed must be an unsigned 32-bit integer, got {seed!r}")
        self.seed = seed

    def __call__(self, data: bytes) -> int:
        return mmh3.hash64(data, self.seed, signed=False)[0]

    def __repr__(self) -> str:
        return f"Murmur3Hash64(seed={self.seed:#x})"


class XXHash64:
    """xxHash64 digest as an unsigned integer."""

    __slots__ = ("seed",)

    def __init__(self, seed: int = DEFAULT_SEED2) -> None:
        if not isinstance(seed, int) or not 0 <= seed <= _MAX_SEED64:
            raise InvalidParameter(f"xxhash seed must be an unsigned 64-bit integer, got {seed!r}")
        self.seed = seed

    def __call__(self, data: bytes) -> int:
        return xxhash.xxh64(data, seed=self.seed).intdigest()

    def __repr__(self) -> str:
        return f"XXHash64(seed={self.seed:#x})"


class DoubleHasher:
    """Expand one pair of base hashes into ``k`` probe indices in ``[0, m)``.

    Args:
        bit_array_size: Modulus ``m`` for the generated indices.
        seed1: Seed for the MurmurHash3 base hash.
        seed2: Seed for the xxHash64 base hash.

    Raises:
        InvalidParameter: If ``bit_array_size`` is not positive or a seed is
            out of range for its hash family.
    """

    __slots__ = ("bit_array_size", "_hash1", "_hash2")

    def __init__(
        self,
        bit_array_size: int,
        seed1: int = DEFAULT_SEED1,
        seed2: int = DEFAULT_SEED2,
    ) -> None:
        if not isinstance(bit_array_size, int) or bit_array_size <= 0:
            raise InvalidParameter("bit_array_size must be a positive integer")

        self.bit_array_size = bit_array_size
        self._hash1 = Murmur3Hash64(seed1)
        self._hash2 = XXHash64(seed2)

    @property
    def seeds(self) -> tuple[int, int]:
        return self._hash1.seed, self._hash2.seed

    def base_hashes(self, data: bytes) -> tuple[int, int]:
        """Return ``(h1, h2)`` for ``data`` with ``h2`` already made odd."""
        return self._hash1(data), self._hash2(data) | 1

    def hash(self, data: bytes, hash_index: int) -> int:
        """Return the ``hash_index``-th probe position for ``data``."""
        h1, h2 = self.base_hashes(data)
        return (h1 + hash_index * h2) % self.bit_array_size

    def indices(self, data: bytes, k: int) -> list[int]:
        """Return exactly ``k`` probe positions for ``data``.

        Positions may repeat; callers treat a repeat as redundant.
        """
        h1, h2 = self.base_hashes(data)
        m = self.bit_array_size
        pos = h1 % m
        step = h2 % m
        out = []
        for _ in range(k):
            out.append(pos)
            pos = (pos + step) % m
        return out

    def __repr__(self) -> str:
        return f"DoubleHasher(bit_array_size={self.bit_array_size}, hash1={self._hash1!r}, hash2={self._hash2!r})"
