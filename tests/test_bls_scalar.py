import random

import pytest

from rlncsim.bls_scalar import BlsScalar, ScalarError


def s(value):
    return BlsScalar.from_int(value)


def test_scalar_basic_operations():
    zero = BlsScalar.zero()
    one = BlsScalar.one()
    two = s(2)
    three = s(3)

    assert zero.is_zero()
    assert not one.is_zero()

    assert one + one == two
    assert two + one == three
    assert zero + one == one

    assert three - one == two
    assert two - two == zero

    assert two * two == s(4)
    assert three * two == s(6)
    assert zero * three == zero
    assert one * three == three


def test_scalar_assign_operations():
    a = s(5)
    b = s(3)
    a += b
    assert a == s(8)
    a -= b
    assert a == s(5)
    a *= b
    assert a == s(15)


def test_scalar_inversion():
    two = s(2)
    three = s(3)
    assert two * two.invert() == BlsScalar.one()
    assert three * three.invert() == BlsScalar.one()
    assert two.inverse() == two.invert()
    assert BlsScalar.zero().inverse() is None


def test_scalar_invert_zero_raises():
    with pytest.raises(ZeroDivisionError, match="Cannot invert zero element"):
        BlsScalar.zero().invert()


def test_scalar_field_properties():
    a, b, c = s(7), s(13), s(19)
    assert a + b == b + a
    assert a * b == b * a
    assert (a + b) + c == a + (b + c)
    assert (a * b) * c == a * (b * c)
    assert a * (b + c) == a * b + a * c
    assert a + BlsScalar.zero() == a
    assert a * BlsScalar.one() == a


def test_scalar_pow():
    base = s(2)
    assert base.pow(0) == BlsScalar.one()
    assert base.pow(1) == base
    assert base.pow(2) == s(4)
    assert base.pow(3) == s(8)
    assert base.pow(10) == s(1024)
    assert BlsScalar.zero().pow(5) == BlsScalar.zero()
    assert BlsScalar.zero().pow(0) == BlsScalar.one()


def test_scalar_negation():
    a = s(5)
    neg_a = -a
    assert a + neg_a == BlsScalar.zero()
    assert -neg_a == a
    assert -BlsScalar.zero() == BlsScalar.zero()
    b = s(7)
    assert b + (-b) == BlsScalar.zero()
    assert -(-a) == a


def test_scalar_conversions():
    assert BlsScalar.from_int(255) == BlsScalar.from_u64(255)
    assert BlsScalar.from_int(0xDEADBEEF) == BlsScalar.from_u64(0xDEADBEEF)
    assert BlsScalar.from_int(0x123456789ABCDEF) == BlsScalar.from_u64(0x123456789ABCDEF)


def test_from_u64_range():
    with pytest.raises(ScalarError):
        BlsScalar.from_u64(2**64)


def test_scalar_bytes_roundtrip():
    original = s(0x123456789ABCDEF)
    reconstructed = BlsScalar.from_raw_bytes(original.to_bytes())
    assert original == reconstructed


def test_scalar_canonical_roundtrip():
    original = s(42)
    assert BlsScalar.from_int(original.value) == original


def test_scalar_random():
    rng = random.Random(42)
    s1 = BlsScalar.random(rng)
    s2 = BlsScalar.random(rng)
    assert s1 != s2
    s3 = BlsScalar.random(rng)
    assert s1 + s2 == s2 + s1
    assert s1 * (s2 + s3) == s1 * s2 + s1 * s3


def test_scalar_sum():
    scalars = [s(1), s(2), s(3), s(4)]
    assert sum(scalars, BlsScalar.zero()) == s(10)
    assert sum([], BlsScalar.zero()) == BlsScalar.zero()


def test_field_scalar_trait():
    assert BlsScalar.zero() == BlsScalar()
    assert BlsScalar.one() == s(1)
    a = s(7)
    assert a * a.invert() == BlsScalar.one()


def test_scalar_display():
    zero_str = str(BlsScalar.zero())
    one_str = str(BlsScalar.one())
    assert "Scalar" in zero_str
    assert "Scalar" in one_str
    assert zero_str != one_str


def test_large_numbers():
    large1 = BlsScalar.from_u64(2**64 - 1)
    large2 = BlsScalar.from_u64(2**64 - 2)
    assert not (large1 + large2).is_zero()
    assert not (large1 * large2).is_zero()
    assert large1 - large2 == BlsScalar.one()


def test_bytes_validation():
    assert BlsScalar.from_bytes(bytes([1]) * 32).to_bytes() == bytes([1]) * 32
    with pytest.raises(ScalarError):
        BlsScalar.from_bytes(bytes([1]) * 16)
    with pytest.raises(ScalarError):
        BlsScalar.from_bytes(bytes([1]) * 64)