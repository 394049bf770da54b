"""The Ristretto prime-order group, built on edwards25519 in extended coordinates."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import Union

from .field import PrimeFieldElement

P = 2**255 - 19
D = (-121665 * pow(121666, -1, P)) % P
_D2 = (2 * D) % P
_SQRT_M1 = pow(2, (P - 1) // 4, P)

ScalarLike = Union[PrimeFieldElement, int]


def _recover_x(y: int, sign: int) -> int:
    u = (y * y - 1) % P
    v = (D * y * y + 1) % P
    x2 = u * pow(v, -1, P) % P
    x = pow(x2, (P + 3) // 8, P)
    if (x * x - x2) % P:
        x = x * _SQRT_M1 % P
    if (x * x - x2) % P:
        raise ValueError("y coordinate is not on the curve")
    if x & 1 != sign:
        x = P - x
    return x


_BASE_Y = 4 * pow(5, -1, P) % P
_BASE_X = _recover_x(_BASE_Y, 0)


def _scalar_value(scalar: object) -> int | None:
    if isinstance(scalar, PrimeFieldElement):
        return scalar.value
    if isinstance(scalar, int):
        return int(scalar)
    return None


class RistrettoPoint:
    """An element of the Ristretto group; ``RistrettoPoint()`` is the identity."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self) -> None:
        self._x, self._y, self._z, self._t = 0, 1, 1, 0

    @classmethod
    def _from_extended(cls, x: int, y: int, z: int, t: int) -> "RistrettoPoint":
        point = cls.__new__(cls)
        point._x, point._y, point._z, point._t = x % P, y % P, z % P, t % P
        return point

    @classmethod
    def identity(cls) -> "RistrettoPoint":
        return cls()

    @classmethod
    def basepoint(cls) -> "RistrettoPoint":
        """The standard generator of the group."""
        return cls._from_extended(_BASE_X, _BASE_Y, 1, _BASE_X * _BASE_Y)

    @classmethod
    def mul_base(cls, scalar: ScalarLike) -> "RistrettoPoint":
        """Multiply the basepoint by a scalar using a precomputed table."""
        n = _scalar_value(scalar)
        if n is None:
            raise TypeError(f"cannot multiply a point by {type(scalar).__name__}")
        if n < 0 or n.bit_length() > len(_base_table()):
            return cls.basepoint() * n
        result = cls()
        for bit, multiple in enumerate(_base_table()):
            if n >> bit & 1:
                result = result + multiple
        return result

    def is_identity(self) -> bool:
        return self._x == 0 or self._y == 0

    def _double(self) -> "RistrettoPoint":
        x, y, z = self._x, self._y, self._z
        a = x * x
        b = y * y
        c = 2 * z * z
        d = -a
        e = (x + y) * (x + y) - a - b
        g = d + b
        f = g - c
        h = d - b
        return self._from_extended(e * f, g * h, f * g, e * h)

    def __add__(self, other: object) -> "RistrettoPoint":
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        x1, y1, z1, t1 = self._x, self._y, self._z, self._t
        x2, y2, z2, t2 = other._x, other._y, other._z, other._t
        a = (y1 - x1) * (y2 - x2) % P
        b = (y1 + x1) * (y2 + x2) % P
        c = t1 * _D2 * t2 % P
        d = 2 * z1 * z2 % P
        e, f, g, h = b - a, d - c, d + c, b + a
        return self._from_extended(e * f, g * h, f * g, e * h)

    def __neg__(self) -> "RistrettoPoint":
        return self._from_extended(-self._x, self._y, self._z, -self._t)

    def __sub__(self, other: object) -> "RistrettoPoint":
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: object) -> "RistrettoPoint":
        n = _scalar_value(scalar)
        if n is None:
            return NotImplemented
        if n < 0:
            return (-self) * (-n)
        result = RistrettoPoint()
        addend = self
        while n:
            if n & 1:
                result = result + addend
            addend = addend._double()
            n >>= 1
        return result

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RistrettoPoint):
            return NotImplemented
        return (self._x * other._y - self._y * other._x) % P == 0 or (
            self._y * other._y - self._x * other._x
        ) % P == 0

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        z_inv = pow(self._z, -1, P)
        return f"RistrettoPoint(x={self._x * z_inv % P}, y={self._y * z_inv % P})"


@lru_cache(maxsize=1)
def _base_table() -> tuple[RistrettoPoint, ...]:
    multiples = []
    point = RistrettoPoint.basepoint()
    for _ in range(256):
        multiples.append(point)
        point = point._double()
    return tuple(multiples)


def multiscalar_mul(
    scalars: Iterable[ScalarLike], points: Iterable[RistrettoPoint]
) -> RistrettoPoint:
    """Compute the sum of scalar_i * point_i with shared doublings."""
    scalars = list(scalars)
    points = list(points)
    if len(scalars) != len(points):
        raise ValueError(f"got {len(scalars)} scalars for {len(points)} points")
    terms: list[tuple[int, RistrettoPoint]] = []
    for scalar, point in zip(scalars, points):
        n = _scalar_value(scalar)
        if n is None:
            raise TypeError(f"cannot multiply a point by {type(scalar).__name__}")
        if not isinstance(point, RistrettoPoint):
            raise TypeError(f"expected RistrettoPoint, got {type(point).__name__}")
        if n < 0:
            n, point = -n, -point
        if n:
            terms.append((n, point))
    result = RistrettoPoint()
    top = max((n.bit_length() for n, _ in terms), default=0)
    for bit in reversed(range(top)):
        result = result._double()
        for n, point in terms:
            if n >> bit & 1:
                result = result + point
    return result