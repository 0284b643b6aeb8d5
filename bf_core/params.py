"""Sizing math for Bloom filters.

The formulas are the textbook ones for a filter with ``m`` bits, ``k`` hash
functions and ``n`` expected elements:

* bits:    m = -n * ln(p) / (ln 2)^2
* hashes:  k = (m / n) * ln 2
* error:   p ~= (1 - e^(-k*n/m))^k

The module-level constants double as the package defaults.
"""
from __future__ import annotations

import math

__all__ = [
    "DEFAULT_FALSE_POSITIVE_RATE",
    "MIN_BIT_ARRAY_SIZE",
    "MIN_HASH_FUNCTIONS",
    "MAX_HASH_FUNCTIONS",
    "LN_2",
    "LN_2_SQUARED",
    "optimal_bit_array_size",
    "optimal_hash_count",
    "estimate_false_positive_rate",
    "load_factor",
]

DEFAULT_FALSE_POSITIVE_RATE = 0.01  # 1%
MIN_BIT_ARRAY_SIZE = 64
MIN_HASH_FUNCTIONS = 1
MAX_HASH_FUNCTIONS = 32

LN_2 = math.log(2)
LN_2_SQUARED = LN_2 * LN_2


def optimal_bit_array_size(n: int, p: float) -> int:
    """Return the number of bits needed to hold ``n`` items at error rate ``p``.

    ``n == 0`` yields :data:`MIN_BIT_ARRAY_SIZE`; a rate outside ``(0, 1)`` is
    replaced by :data:`DEFAULT_FALSE_POSITIVE_RATE`.
    """
    if n == 0:
        return MIN_BIT_ARRAY_SIZE
    if not 0.0 < p < 1.0:
        p = DEFAULT_FALSE_POSITIVE_RATE

    m = -n * math.log(p) / LN_2_SQUARED
    return max(math.ceil(m), MIN_BIT_ARRAY_SIZE)


def optimal_hash_count(m: int, n: int) -> int:
    """Return the hash count minimising the error rate for ``m`` bits and ``n`` items."""
    if n == 0:
        return MIN_HASH_FUNCTIONS

    k = (m / n) * LN_2
    # round half away from zero; k is never negative here
    k = math.floor(k + 0.5)
    return max(MIN_HASH_FUNCTIONS, min(k, MAX_HASH_FUNCTIONS))


def estimate_false_positive_rate(m: int, k: int, n_inserted: int) -> float:
    """Expected false-positive probability after ``n_inserted`` insertions.

    A filter without bits or without hashes answers "maybe" to everything, so
    it reports 1.0; an empty filter reports 0.0.
    """
    if m == 0 or k == 0:
        return 1.0
    if n_inserted == 0:
        return 0.0

    base = 1.0 - math.exp(-k * n_inserted / m)
    return base**k


def load_factor(n_inserted: int, n_target: int) -> float:
    """Ratio of inserted elements to expected capacity."""
    if n_target == 0:
        return 0.0 if n_inserted == 0 else math.inf
    return n_inserted / n_target
