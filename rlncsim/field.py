"""Prime field elements and the scalar field of the Ristretto group."""

from __future__ import annotations

from typing import ClassVar, TypeVar

F = TypeVar("F", bound="PrimeFieldElement")


class PrimeFieldElement:
    """An element of the prime field of size ``MODULUS``; subclasses set the modulus."""

    MODULUS: ClassVar[int] = 0
    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        modulus = type(self).MODULUS
        if modulus < 2:
            raise TypeError(f"{type(self).__name__} has no field modulus")
        self._value = int(value) % modulus

    @property
    def value(self) -> int:
        """The canonical integer representative."""
        return self._value

    @classmethod
    def zero(cls: type[F]) -> F:
        return cls(0)

    @classmethod
    def one(cls: type[F]) -> F:
        return cls(1)

    @classmethod
    def from_int(cls: type[F], value: int) -> F:
        """Reduce an integer into the field."""
        return cls(value)

    def is_zero(self) -> bool:
        return self._value == 0

    def invert(self: F) -> F:
        """Multiplicative inverse; zero has none."""
        if self._value == 0:
            raise ZeroDivisionError("cannot invert zero element")
        return type(self)(pow(self._value, -1, type(self).MODULUS))

    def _coerce(self, other: object) -> int | None:
        if isinstance(other, type(self)):
            return other._value
        if isinstance(other, int):
            return other
        return None

    def __add__(self: F, other: object) -> F:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value + value)

    __radd__ = __add__

    def __sub__(self: F, other: object) -> F:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value - value)

    def __rsub__(self: F, other: object) -> F:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(value - self._value)

    def __mul__(self: F, other: object) -> F:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value * value)

    __rmul__ = __mul__

    def __truediv__(self: F, other: object) -> F:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self * type(self)(value).invert()

    def __neg__(self: F) -> F:
        return type(self)(-self._value)

    def __pow__(self: F, exponent: int) -> F:
        if exponent < 0:
            return type(self)(pow(self.invert()._value, -exponent, type(self).MODULUS))
        return type(self)(pow(self._value, exponent, type(self).MODULUS))

    def __int__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class Scalar25519(PrimeFieldElement):
    """Scalar of the prime-order Ristretto group (curve25519 subgroup order)."""

    MODULUS: ClassVar[int] = 2**252 + 27742317777372353535851937790883648493
    __slots__ = ()

    @classmethod
    def from_bytes_mod_order(cls, data: bytes) -> "Scalar25519":
        """Read 32 little-endian bytes and reduce them modulo the group order."""
        data = bytes(data)
        if len(data) != 32:
            raise ValueError(f"expected 32 bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    def to_bytes(self) -> bytes:
        """Canonical 32-byte little-endian encoding."""
        return self._value.to_bytes(32, "little")