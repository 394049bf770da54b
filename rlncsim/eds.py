"""Square share matrices and their 2D Reed-Solomon extension."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .reed_solomon import ReedSolomon

_log = logging.getLogger(__name__)


class FlatMatrix:
    """A rows x cols grid of fixed-size shares stored in one contiguous buffer."""

    def __init__(self, block: bytes, share_size: int, k: int) -> None:
        """Lay out a block as a k x k matrix, zero padding or truncating it."""
        if k < 0:
            raise ValueError("k must be non-negative")
        total = k * k * share_size
        data = bytearray(bytes(block)[:total])
        data.extend(bytes(total - len(data)))
        self._setup(data, k, k, share_size)
        _log.debug("Created %d x %d matrix with share size %d", k, k, share_size)

    def _setup(self, data: bytearray, rows: int, cols: int, share_size: int) -> None:
        if share_size <= 0:
            raise ValueError("share_size must be positive")
        self._data = data
        self._rows = rows
        self._cols = cols
        self._share_size = share_size

    @classmethod
    def empty(cls, rows: int, cols: int, share_size: int) -> "FlatMatrix":
        """A zero-filled matrix of the given shape."""
        if rows < 0 or cols < 0:
            raise ValueError("dimensions must be non-negative")
        matrix = cls.__new__(cls)
        matrix._setup(bytearray(rows * cols * share_size), rows, cols, share_size)
        return matrix

    @property
    def share_size(self) -> int:
        return self._share_size

    @property
    def data(self) -> bytes:
        """The whole matrix, row by row."""
        return bytes(self._data)

    def dimensions(self) -> tuple[int, int]:
        return self._rows, self._cols

    def _offset(self, row: int, col: int) -> int:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"share ({row}, {col}) outside {self._rows} x {self._cols} matrix")
        return (row * self._cols + col) * self._share_size

    def get_share(self, row: int, col: int) -> bytes:
        start = self._offset(row, col)
        return bytes(self._data[start : start + self._share_size])

    def set_share(self, row: int, col: int, share_data: bytes) -> None:
        share_data = bytes(share_data)
        if len(share_data) != self._share_size:
            raise ValueError(f"share has {len(share_data)} bytes, expected {self._share_size}")
        start = self._offset(row, col)
        self._data[start : start + self._share_size] = share_data

    def get_row(self, row: int) -> list[bytes]:
        return [self.get_share(row, col) for col in range(self._cols)]

    def get_column(self, col: int) -> list[bytes]:
        return [self.get_share(row, col) for row in range(self._rows)]

    def set_row(self, row: int, row_data: Sequence[bytes]) -> None:
        for col, share in enumerate(row_data):
            self.set_share(row, col, share)

    def set_column(self, col: int, col_data: Sequence[bytes]) -> None:
        for row, share in enumerate(col_data):
            self.set_share(row, col, share)


def create_extended_matrix(original_matrix: FlatMatrix, k: int) -> FlatMatrix:
    """A 2k x 2k matrix holding the original k x k shares in its top-left quadrant."""
    extended = FlatMatrix.empty(2 * k, 2 * k, original_matrix.share_size)
    for row in range(k):
        for col in range(k):
            extended.set_share(row, col, original_matrix.get_share(row, col))
    _log.debug("Created extended %d x %d matrix", 2 * k, 2 * k)
    return extended


def extended_data_share(original_matrix: FlatMatrix, k: int) -> FlatMatrix:
    """Extend a k x k matrix to 2k x 2k by coding its columns and then every row."""
    extended = create_extended_matrix(original_matrix, k)
    rs = ReedSolomon(k, k)
    for col in range(k):
        extended.set_column(col, rs.encode(extended.get_column(col)))
    for row in range(2 * k):
        extended.set_row(row, rs.encode(extended.get_row(row)))
    return extended