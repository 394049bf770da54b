"""Scalars of the BLS12-381 field, kept as 32 big-endian bytes."""

from __future__ import annotations

import random as _random
from typing import ClassVar

BLS12_381_R = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
_U64_MAX = 2**64 - 1


class ScalarError(ValueError):
    """Raised for malformed scalar input."""


class BlsScalar:
    """A BLS12-381 scalar.

    The raw 32 bytes are stored as given; arithmetic reduces them modulo the
    field order and always returns canonical encodings. Equality compares
    the stored bytes.
    """

    MODULUS: ClassVar[int] = BLS12_381_R
    __slots__ = ("_raw",)

    def __init__(self, data: bytes = bytes(32)) -> None:
        data = bytes(data)
        if len(data) != 32:
            raise ScalarError("Invalid scalar byte length")
        self._raw = data

    @classmethod
    def _canonical(cls, value: int) -> "BlsScalar":
        return cls((value % BLS12_381_R).to_bytes(32, "big"))

    @property
    def value(self) -> int:
        """The field element as a reduced integer."""
        return int.from_bytes(self._raw, "big") % BLS12_381_R

    @classmethod
    def zero(cls) -> "BlsScalar":
        return cls()

    @classmethod
    def one(cls) -> "BlsScalar":
        return cls._canonical(1)

    @classmethod
    def from_int(cls, value: int) -> "BlsScalar":
        """Reduce any integer into the field."""
        return cls._canonical(int(value))

    @classmethod
    def from_u64(cls, value: int) -> "BlsScalar":
        if not 0 <= value <= _U64_MAX:
            raise ScalarError(f"value {value} does not fit in 64 bits")
        return cls._canonical(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BlsScalar":
        """Wrap 32 big-endian bytes without reducing them."""
        return cls(data)

    @classmethod
    def from_raw_bytes(cls, data: bytes) -> "BlsScalar":
        return cls(data)

    @classmethod
    def random(cls, rng: _random.Random | None = None) -> "BlsScalar":
        """32 random bytes, stored unreduced."""
        rng = rng or _random.Random()
        return cls(rng.randbytes(32))

    def to_bytes(self) -> bytes:
        return self._raw

    def is_zero(self) -> bool:
        return not any(self._raw)

    def inverse(self) -> "BlsScalar | None":
        """Multiplicative inverse, or None for zero."""
        if self.is_zero():
            return None
        return self._canonical(pow(self.value, BLS12_381_R - 2, BLS12_381_R))

    def invert(self) -> "BlsScalar":
        result = self.inverse()
        if result is None:
            raise ZeroDivisionError("Cannot invert zero element")
        return result

    def pow(self, exp: int) -> "BlsScalar":
        if exp < 0:
            raise ValueError("exponent must be non-negative")
        return self._canonical(pow(self.value, exp, BLS12_381_R))

    def _coerce(self, other: object) -> int | None:
        if isinstance(other, BlsScalar):
            return other.value
        if isinstance(other, int):
            return other
        return None

    def __add__(self, other: object) -> "BlsScalar":
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._canonical(self.value + value)

    __radd__ = __add__

    def __sub__(self, other: object) -> "BlsScalar":
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._canonical(self.value - value)

    def __rsub__(self, other: object) -> "BlsScalar":
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._canonical(value - self.value)

    def __mul__(self, other: object) -> "BlsScalar":
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._canonical(self.value * value)

    __rmul__ = __mul__

    def __neg__(self) -> "BlsScalar":
        return self._canonical(-self.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlsScalar):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __str__(self) -> str:
        return f"Scalar({self._raw.hex()})"

    def __repr__(self) -> str:
        return f"BlsScalar({self._raw.hex()})"