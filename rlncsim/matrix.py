"""Incremental row echelon form over a prime field.

Echelon keeps the coefficient rows received so far, their echelon form and
the elementary row operations that produce it, so that
``transform * coefficients == echelon``. Rows are imported one at a time;
before the i-th row arrives the transform has block form ``[A 0; 0 I]``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from .field import Scalar25519


def _identity(size: int, scalar_type: Any) -> list[list[Any]]:
    zero, one = scalar_type.zero(), scalar_type.one()
    return [[one if i == j else zero for j in range(size)] for i in range(size)]


def _first_entry(row: Sequence[Any]) -> int | None:
    return next((index for index, value in enumerate(row) if not value.is_zero()), None)


def _is_zero_row(row: Iterable[Any]) -> bool:
    return all(value.is_zero() for value in row)


class Echelon:
    """Echelon form of the coefficient vectors seen so far, with its transform."""

    def __init__(self, size: int, scalar_type: Any = Scalar25519) -> None:
        if size < 0:
            raise ValueError("size must be non-negative")
        self._scalar_type = scalar_type
        self._coefficients: list[list[Any]] = []
        self._echelon: list[list[Any]] = []
        self._transform = _identity(size, scalar_type)

    @classmethod
    def new_identity(cls, size: int, scalar_type: Any = Scalar25519) -> "Echelon":
        """An echelon already holding the identity matrix."""
        result = cls(size, scalar_type)
        result._echelon = _identity(size, scalar_type)
        result._coefficients = _identity(size, scalar_type)
        return result

    def __len__(self) -> int:
        return len(self._coefficients)

    def __copy__(self) -> "Echelon":
        other = type(self).__new__(type(self))
        other._scalar_type = self._scalar_type
        other._coefficients = [list(row) for row in self._coefficients]
        other._echelon = [list(row) for row in self._echelon]
        other._transform = [list(row) for row in self._transform]
        return other

    def is_full(self) -> bool:
        """Whether the coefficient matrix is square."""
        if not self._coefficients:
            return False
        return len(self._coefficients) == len(self._coefficients[0])

    def add_row(self, row: Iterable[Any]) -> bool:
        """Import a row; False when it is zero, redundant or the matrix is full."""
        row = list(row)
        if len(row) != len(self._transform):
            raise ValueError(f"row has {len(row)} entries, expected {len(self._transform)}")
        if _is_zero_row(row):
            return False
        current_size = len(self._coefficients)
        if current_size == len(row):
            return False
        if current_size == 0:
            self._echelon.append(list(row))
            self._coefficients.append(row)
            return True

        tr = list(self._transform[current_size])
        new_row = list(row)
        i = 0
        while i < current_size:
            j = _first_entry(self._echelon[i])
            k = _first_entry(new_row)
            if k is None:
                return False
            if j < k:
                i += 1
                continue
            if j > k:
                break
            pivot = self._echelon[i][j]
            factor = new_row[j]
            new_row = [pivot * x - y * factor for x, y in zip(new_row, self._echelon[i])]
            tr = [pivot * x - y * factor for x, y in zip(tr, self._transform[i])]
            i += 1

        if _is_zero_row(new_row):
            return False
        self._echelon.insert(i, new_row)
        self._coefficients.append(row)
        if i < current_size:
            del self._transform[current_size]
            self._transform.insert(i, tr)
        else:
            self._transform[i] = tr
        return True

    def compound_scalars(self, scalars: Iterable[int]) -> list[Any]:
        """Combine the stored coefficient rows with the given small scalars."""
        scalars = [self._scalar_type.from_int(s) for s in scalars]
        zero = self._scalar_type.zero()
        return [
            sum(
                (s * coefficients[j] for s, coefficients in zip(scalars, self._coefficients)),
                zero,
            )
            for j in range(len(self._transform))
        ]

    def inverse(self) -> list[list[Any]]:
        """Inverse of the coefficient matrix; raises ValueError unless it is square."""
        if not self._coefficients:
            raise ValueError("No coefficients to decode")
        if len(self._echelon) != len(self._coefficients[0]):
            raise ValueError("The echelon form is not square")
        inverse = [list(row) for row in self._transform]
        n = len(self._echelon)
        for i in reversed(range(n)):
            pivot = self._echelon[i][i].invert()
            inverse[i] = [x * pivot for x in inverse[i]]
            for j in range(i + 1, n):
                diff = self._echelon[i][j] * pivot
                inverse[i] = [a - b * diff for a, b in zip(inverse[i], inverse[j])]
        return inverse