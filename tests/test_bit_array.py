"""Unit tests for the packed bit array."""
import pytest

from bf_core.bit_array import BitArray
from bf_core.exceptions import InvalidParameter


def test_starts_empty():
    bits = BitArray(100)
    assert bits.count_set_bits() == 0
    assert not any(bits.get_bit(i) for i in range(100))


def test_backing_bytes():
    """m bits take ceil(m/8) bytes."""
    assert BitArray(64).nbytes == 8
    assert BitArray(65).nbytes == 9
    assert BitArray(1).nbytes == 1
    assert len(BitArray(65)) == 65
    assert bytes(BitArray(16)) == b"\x00\x00"


@pytest.mark.parametrize("size", [0, -1, 3.5])
def test_invalid_size(size):
    with pytest.raises(InvalidParameter):
        BitArray(size)


def test_set_and_get():
    bits = BitArray(20)
    bits.set_bit(0)
    bits.set_bit(9)
    bits.set_bit(19)
    assert bits.get_bit(0)
    assert bits.get_bit(9)
    assert bits.get_bit(19)
    assert not bits.get_bit(1)
    assert bits.count_set_bits() == 3


def test_bit_layout():
    """Bit i lives in byte i // 8 at position i % 8."""
    bits = BitArray(16)
    bits.set_bit(0)
    bits.set_bit(9)
    assert bytes(bits) == b"\x01\x02"


def test_set_is_idempotent():
    bits = BitArray(32)
    bits.set_bit(5)
    bits.set_bit(5)
    assert bits.count_set_bits() == 1


def test_out_of_range_is_ignored():
    """Indices outside [0, m) neither raise nor change anything."""
    bits = BitArray(10)
    bits.set_bit(10)
    bits.set_bit(1000)
    bits.set_bit(-1)
    assert bits.count_set_bits() == 0
    assert not bits.get_bit(10)
    assert not bits.get_bit(-1)
    # bit 10 shares a byte with valid bits but sits past the end
    assert bytes(bits) == b"\x00\x00"


def test_count_ignores_padding_bits():
    """Only the first m bits are counted, even if padding is dirty."""
    bits = BitArray(10)
    for i in range(10):
        bits.set_bit(i)
    assert bits.count_set_bits() == 10
    bits._bytes[1] = 0xFF
    assert bits.count_set_bits() == 10


def test_count_large():
    bits = BitArray(10_003)
    for i in range(0, 10_003, 3):
        bits.set_bit(i)
    assert bits.count_set_bits() == len(range(0, 10_003, 3))


def test_clear():
    bits = BitArray(100)
    for i in range(0, 100, 7):
        bits.set_bit(i)
    bits.clear()
    assert bits.count_set_bits() == 0
    assert bits.nbytes == 13
    assert len(bits) == 100
