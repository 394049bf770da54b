"""Systematic Reed-Solomon erasure coding over GF(2^8)."""

from __future__ import annotations

from collections.abc import Sequence

_POLYNOMIAL = 0x11D
_FIELD_SIZE = 256


def _build_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    exp = [0] * 510
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= _POLYNOMIAL
    for i in range(255, 510):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


_EXP, _LOG = _build_tables()


def _gf_mul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return _EXP[_LOG[a] + _LOG[b]]


def _gf_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("division by zero in GF(256)")
    if a == 0:
        return 0
    return _EXP[(_LOG[a] - _LOG[b]) % 255]


def _gf_pow(a: int, n: int) -> int:
    if n == 0:
        return 1
    if a == 0:
        return 0
    return _EXP[(_LOG[a] * n) % 255]


_MUL_TABLES = tuple(bytes(_gf_mul(c, x) for x in range(256)) for c in range(256))


def _matmul(left: Sequence[Sequence[int]], right: Sequence[Sequence[int]]) -> list[list[int]]:
    columns = list(zip(*right))
    result = []
    for row in left:
        out = []
        for column in columns:
            acc = 0
            for a, b in zip(row, column):
                acc ^= _gf_mul(a, b)
            out.append(acc)
        result.append(out)
    return result


def _invert(matrix: Sequence[Sequence[int]]) -> list[list[int]]:
    n = len(matrix)
    work = [list(row) + [1 if i == j else 0 for j in range(n)] for i, row in enumerate(matrix)]
    for col in range(n):
        pivot = next((r for r in range(col, n) if work[r][col]), None)
        if pivot is None:
            raise ReedSolomonError("Singular matrix")
        work[col], work[pivot] = work[pivot], work[col]
        scale = _gf_div(1, work[col][col])
        work[col] = [_gf_mul(scale, v) for v in work[col]]
        for r in range(n):
            factor = work[r][col]
            if r != col and factor:
                work[r] = [v ^ _gf_mul(factor, p) for v, p in zip(work[r], work[col])]
    return [row[n:] for row in work]


class ReedSolomonError(ValueError):
    """Raised for invalid codec parameters or shard layouts."""


class ReedSolomon:
    """Encoder with ``data_shards`` data and ``parity_shards`` parity shards.

    The encoding matrix is a Vandermonde matrix made systematic by
    multiplying with the inverse of its top square part.
    """

    def __init__(self, data_shards: int, parity_shards: int) -> None:
        if data_shards <= 0:
            raise ReedSolomonError("Too few data shards")
        if parity_shards <= 0:
            raise ReedSolomonError("Too few parity shards")
        if data_shards + parity_shards > _FIELD_SIZE:
            raise ReedSolomonError("Too many shards")
        self._data_shards = data_shards
        self._parity_shards = parity_shards
        total = data_shards + parity_shards
        vandermonde = [[_gf_pow(r, c) for c in range(data_shards)] for r in range(total)]
        systematic = _matmul(vandermonde, _invert(vandermonde[:data_shards]))
        self._parity_rows = tuple(tuple(row) for row in systematic[data_shards:])

    @property
    def data_shard_count(self) -> int:
        return self._data_shards

    @property
    def parity_shard_count(self) -> int:
        return self._parity_shards

    @property
    def total_shard_count(self) -> int:
        return self._data_shards + self._parity_shards

    def encode(self, shards: Sequence[bytes]) -> list[bytes]:
        """Return all shards with the parity shards recomputed from the data shards."""
        shards = [bytes(shard) for shard in shards]
        if len(shards) < self.total_shard_count:
            raise ReedSolomonError("Too few shards")
        if len(shards) > self.total_shard_count:
            raise ReedSolomonError("Too many shards")
        size = len(shards[0])
        if size == 0:
            raise ReedSolomonError("Empty shard")
        if any(len(shard) != size for shard in shards):
            raise ReedSolomonError("Incorrect shard size")
        data = shards[: self._data_shards]
        parity = []
        for row in self._parity_rows:
            acc = 0
            for coefficient, shard in zip(row, data):
                if coefficient:
                    acc ^= int.from_bytes(shard.translate(_MUL_TABLES[coefficient]), "big")
            parity.append(acc.to_bytes(size, "big"))
        return data + parity