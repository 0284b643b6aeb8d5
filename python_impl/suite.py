"""Consolidated Bloom filter evaluation suite.

Performs a deterministic 80/20 split of unique synthetic items, builds two
filters from the 80% training set and runs five checks on each:

1. Membership on the training set (should be all present)
2. False positive rate on the held-out set, next to the live estimate
3. Collision analysis using simple modifications of held-out items
4. Filter properties and memory usage
5. Insertion and query throughput

The "derived" filter is sized from the training set and TARGET_FPR; the
"explicit" filter uses BITS_PER_ITEM bits per training item and NUM_HASHES
hash functions (Kirsch-Mitzenmacher double hashing).

Run with ``python -m python_impl.suite``.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Tuple

from bf_core import BloomFilter


NUM_HASHES = 7
BITS_PER_ITEM = 10
TARGET_FPR = 0.01
SYNTHETIC_ITEMS = 100_000
QUERY_OPS = 1_000_000


def generate_synthetic_data(n: int = SYNTHETIC_ITEMS) -> list[str]:
    """Generate n unique random strings."""
    print(f"Generating {n} synthetic items...")
    # UUIDs are virtually guaranteed to be unique
    return sorted(str(uuid.uuid4()) for _ in range(n))


def split(words: list[str]) -> Tuple[list[str], list[str]]:
    """Deterministic 80/20 split into (training, held-out)."""
    cut = int(len(words) * 0.8)
    return words[:cut], words[cut:]


def build_derived(train: list[str]) -> BloomFilter:
    bloom = BloomFilter(capacity=max(1, len(train)), false_positive_rate=TARGET_FPR)
    bloom.update(train)
    return bloom


def build_explicit(train: list[str]) -> BloomFilter:
    bloom = BloomFilter.from_parameters(
        bit_array_size=max(1, len(train) * BITS_PER_ITEM),
        hash_count=NUM_HASHES,
        capacity=len(train),
    )
    bloom.update(train)
    return bloom


def check_membership(bloom: BloomFilter, train: list[str]) -> int:
    """Verify all training items are present in the filter."""
    print("CHECK A: Membership on training set")
    missing = [w for w in train if w not in bloom]
    print(f"  Training items: {len(train)}")
    print(f"  Missing after insertion: {len(missing)} (expected 0)")
    if missing:
        print(f"  Example missing: {missing[:5]}")
    print()
    return len(missing)


def check_false_positive_on_heldout(bloom: BloomFilter, train: list[str], test: list[str]) -> float:
    """Measure empirical false positive rate on the held-out set."""
    print("CHECK B: False positive rate on held-out items")
    train_set = set(train)
    test_filtered = [w for w in test if w not in train_set]

    if not test_filtered:
        print("  No held-out items available for testing.")
        print()
        return 0.0

    false_positives = sum(1 for w in test_filtered if w in bloom)
    fpr = false_positives / len(test_filtered)

    print(f"  Held-out items: {len(test_filtered)}")
    print(f"  False positives: {false_positives}")
    print(f"  Empirical FPR: {fpr:.6f} ({fpr*100:.4f}%)")
    print(f"  Estimated FPR: {bloom.estimated_false_positive_rate():.6f}")
    print(f"  Target FPR:    {bloom.false_positive_rate():.6f}")
    print()
    return fpr


def check_collision_analysis(bloom: BloomFilter, train: list[str], test: list[str]) -> float:
    """Analyze collision rate using simple modifications of held-out items."""
    print("CHECK C: Collision analysis with modified held-out items")
    modifications = []
    for word in test[:500]:
        modifications.append(word + "x")
        if len(word) > 1:
            modifications.append(word[:-1] + "z")
        modifications.append("x" + word)

    # Remove any accidental real items
    known = set(train) | set(test)
    modifications = [m for m in modifications if m not in known]

    if not modifications:
        print("  No modifications available for testing.")
        print()
        return 0.0

    false_positives = sum(1 for m in modifications if m in bloom)
    rate = false_positives / len(modifications)

    print(f"  Variants tested: {len(modifications)}")
    print(f"  False positives from variants: {false_positives}")
    print(f"  Collision rate: {rate:.6f} ({rate*100:.4f}%)")
    print()
    return rate


def show_properties(bloom: BloomFilter) -> None:
    """Display filter memory and configuration properties."""
    print("CHECK D: Filter properties")
    bytes_len = bloom.bit_array.nbytes
    mb = bytes_len / (1024 * 1024)
    inserted = max(1, bloom.size())

    print(f"  Filter size (bits): {bloom.bit_array_size()}")
    print(f"  Filter size (bytes): {bytes_len}")
    print(f"  Filter size (MB): {mb:.2f}")
    print(f"  Memory usage (bytes): {bloom.memory_usage()}")
    print(f"  Number of hash functions: {bloom.hash_count()}")
    print(f"  Items inserted: {bloom.size()}")
    print(f"  Bits set: {bloom.count_set_bits()} ({bloom.count_set_bits() / bloom.bit_array_size():.2%})")
    print(f"  Load factor: {bloom.load_factor():.2f}")
    print(f"  Bytes per item: {bytes_len / inserted:.4f}")
    print()


def check_performance(
    factory: Callable[[], BloomFilter], train: list[str], test: list[str]
) -> dict:
    """Measure insertion and query throughput (Ops/Sec)."""
    print("CHECK E: Performance Benchmarking")

    print("  Benchmarking Insertions...")
    bench_filter = factory()

    start_time = time.perf_counter()
    for word in train:
        bench_filter.insert(word)
    insert_time = time.perf_counter() - start_time

    ops_per_sec = len(train) / insert_time if insert_time > 0 else float("inf")
    print(f"    - Inserted {len(train)} items in {insert_time:.4f} sec")
    print(f"    - Insertion Throughput: {ops_per_sec:,.0f} ops/sec")

    print("  Benchmarking Queries...")
    repeats = (QUERY_OPS // max(1, len(test))) + 1
    queries = (test * repeats)[:QUERY_OPS]

    start_time = time.perf_counter()
    for word in queries:
        _ = word in bench_filter
    query_time = time.perf_counter() - start_time

    query_ops_per_sec = len(queries) / query_time if query_time > 0 else float("inf")
    print(f"    - Performed {len(queries)} queries in {query_time:.4f} sec")
    print(f"    - Query Throughput: {query_ops_per_sec:,.0f} ops/sec")
    print()

    return {
        "insert_count": len(train),
        "insert_time": insert_time,
        "insert_ops_per_sec": ops_per_sec,
        "query_count": len(queries),
        "query_time": query_time,
        "query_ops_per_sec": query_ops_per_sec,
    }


def compare_performance(derived: dict, explicit: dict) -> None:
    """Print a compact side-by-side comparison of performance metrics."""

    def fmt(val):
        if val is None:
            return "N/A"
        if isinstance(val, float):
            if val == float("inf"):
                return "inf"
            if abs(val) >= 1000:
                return f"{val:,.0f}"
            return f"{val:,.4f}"
        return str(val)

    def pct_change(a, b):
        if a is None or a == 0:
            return None
        return (b - a) / a * 100

    print(f"{'Metric':<36}{'Derived':>18}{'Explicit':>18}{'Diff (%)':>14}")
    print("-" * 86)

    rows = [
        ("Insertion Throughput (ops/sec)", "insert_ops_per_sec"),
        ("Insertion Time (s)", "insert_time"),
        ("Query Throughput (ops/sec)", "query_ops_per_sec"),
        ("Query Time (s)", "query_time"),
        ("Empirical FPR", "fpr"),
        ("Estimated FPR", "estimated_fpr"),
        ("Bit Array Size (bits)", "bit_array_size"),
        ("Hash Functions", "hash_count"),
    ]

    for name, key in rows:
        a, b = derived.get(key), explicit.get(key)
        diff = pct_change(a, b)
        diff_str = f"{diff:+.2f}%" if diff is not None else "N/A"
        print(f"{name:<36}{fmt(a):>18}{fmt(b):>18}{diff_str:>14}")
    print()


def evaluate(label: str, factory: Callable[[list[str]], BloomFilter], train: list[str], test: list[str]) -> dict:
    print("=" * 60)
    print(f"Running {label} Bloom filter checks (80/20 split)")
    print("=" * 60)
    print()

    bloom = factory(train)
    check_membership(bloom, train)
    fpr = check_false_positive_on_heldout(bloom, train, test)
    check_collision_analysis(bloom, train, test)
    show_properties(bloom)

    metrics = check_performance(
        lambda: BloomFilter.from_parameters(bloom.bit_array_size(), bloom.hash_count(), bloom.capacity()),
        train,
        test,
    )
    metrics.update(
        fpr=fpr,
        estimated_fpr=bloom.estimated_false_positive_rate(),
        bit_array_size=bloom.bit_array_size(),
        hash_count=bloom.hash_count(),
    )
    return metrics


def run_all() -> None:
    """Run all checks."""
    full_words = generate_synthetic_data()
    print(f"Full dataset unique items: {len(full_words)}")
    train, test = split(full_words)

    derived = evaluate("DERIVED", build_derived, train, test)
    explicit = evaluate("EXPLICIT", build_explicit, train, test)

    print("=" * 60)
    print("COMPARISON: Performance Summary")
    print("=" * 60)
    compare_performance(derived, explicit)

    print("=" * 60)
    print("Suite completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    run_all()
