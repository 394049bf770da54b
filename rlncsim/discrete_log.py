"""Discrete-log signatures for coded pieces over the Ristretto group.

Every coded piece is the vector ``[c | d]`` of byte coefficients ``c`` and
combined data ``d``. The original packets are the rows of ``[I | D]``. The
signature is a vector orthogonal to all of them, scaled by the inverses of
the secret generator exponents. Any linear combination of the packets is
then orthogonal as well, which is checked with one multiscalar product.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .coded import CodedPiece, Committer
from .curve import RistrettoPoint, multiscalar_mul
from .field import Scalar25519
from .scalars import coefficients_to_scalars

_SYSTEM_RANDOM = random.SystemRandom()


class _RandomBits(Protocol):
    def getrandbits(self, k: int) -> int: ...


class DiscreteLogError(ValueError):
    """Raised for malformed inputs to the discrete-log scheme."""


def _dimension_error(expected: int, actual: int) -> DiscreteLogError:
    return DiscreteLogError(f"Invalid vector dimensions: expected {expected}, got {actual}")


@dataclass(frozen=True)
class DiscreteLogParams:
    """Sizes of the coefficient part, the data part and the whole vector."""

    original_dim: int
    data_dim: int
    total_dim: int = field(init=False)

    def __post_init__(self) -> None:
        if self.original_dim < 0 or self.data_dim < 0:
            raise DiscreteLogError("dimensions must be non-negative")
        object.__setattr__(self, "total_dim", self.original_dim + self.data_dim)


def find_orthogonal_vector(
    params: DiscreteLogParams,
    packets: Iterable[Sequence[Scalar25519]],
    rng: _RandomBits | None = None,
) -> list[Scalar25519]:
    """A vector orthogonal to every row of the implicit matrix ``[I | packets]``."""
    m, n = params.original_dim, params.total_dim
    if m >= n:
        raise DiscreteLogError("Matrix rank insufficient")
    packets = [list(packet) for packet in packets]
    if len(packets) < m:
        raise _dimension_error(m, len(packets))
    rng = rng or _SYSTEM_RANDOM

    data_part = [Scalar25519.from_int(rng.getrandbits(64)) for _ in range(n - m)]
    if all(value.is_zero() for value in data_part):
        data_part[0] = Scalar25519.one()

    zero = Scalar25519.zero()
    identity_part = [
        -sum((value * weight for value, weight in zip(packet, data_part)), zero)
        for packet in packets[:m]
    ]
    return identity_part + data_part


class DiscreteLogCommitter(Committer):
    """Signs the span of the original packets; pieces are checked without the data."""

    def __init__(
        self,
        total_packets: int,
        total_data_in_single_packet: int,
        rng: _RandomBits | None = None,
    ) -> None:
        self._rng = rng or _SYSTEM_RANDOM
        self._params = DiscreteLogParams(total_packets, total_data_in_single_packet)
        self._alphas = [self._nonzero_scalar() for _ in range(self._params.total_dim)]
        self._generators = [RistrettoPoint.mul_base(alpha) for alpha in self._alphas]
        self._signature_vector: list[Scalar25519] = []

    def _nonzero_scalar(self) -> Scalar25519:
        while True:
            alpha = Scalar25519.from_int(self._rng.getrandbits(64))
            if not alpha.is_zero():
                return alpha

    @classmethod
    def from_keys(
        cls,
        params: DiscreteLogParams,
        alphas: Sequence[Scalar25519],
        generators: Sequence[RistrettoPoint],
        signature_vector: Sequence[Scalar25519],
    ) -> "DiscreteLogCommitter":
        """Rebuild a committer from existing keys."""
        if len(generators) != params.total_dim:
            raise _dimension_error(params.total_dim, len(generators))
        if len(signature_vector) != params.total_dim:
            raise _dimension_error(params.total_dim, len(signature_vector))
        committer = cls.__new__(cls)
        committer._rng = _SYSTEM_RANDOM
        committer._params = params
        committer._alphas = list(alphas)
        committer._generators = list(generators)
        committer._signature_vector = list(signature_vector)
        return committer

    @property
    def params(self) -> DiscreteLogParams:
        return self._params

    @property
    def generators(self) -> tuple[RistrettoPoint, ...]:
        return tuple(self._generators)

    @property
    def signature_vector(self) -> tuple[Scalar25519, ...]:
        return tuple(self._signature_vector)

    @signature_vector.setter
    def signature_vector(self, value: Iterable[Scalar25519]) -> None:
        self._signature_vector = list(value)

    def commit_vector(self, vector: Sequence[Scalar25519]) -> RistrettoPoint:
        """Commit to a vector using the first generators."""
        vector = list(vector)
        if len(vector) > len(self._generators):
            raise DiscreteLogError(
                f"Chunk size too large: {len(vector)} > {len(self._generators)}"
            )
        return multiscalar_mul(vector, self._generators[: len(vector)])

    def verify_signature(self, coded_piece: CodedPiece) -> bool:
        """Check that the piece's full vector is orthogonal to the signed subspace."""
        full_vector = coefficients_to_scalars(coded_piece.coefficients) + list(coded_piece.data)
        total = self._params.total_dim
        if len(full_vector) != total or len(self._signature_vector) != total:
            return False
        exponents = [x * w for x, w in zip(self._signature_vector, full_vector)]
        return multiscalar_mul(exponents, self._generators).is_identity()

    def commit(self, chunks: Sequence[Sequence[Scalar25519]]) -> list[Scalar25519]:
        """A fresh signature vector for the original chunks."""
        chunks = [list(chunk) for chunk in chunks]
        if len(chunks) != self._params.original_dim:
            raise _dimension_error(self._params.original_dim, len(chunks))
        for chunk in chunks:
            if len(chunk) != self._params.data_dim:
                raise _dimension_error(self._params.data_dim, len(chunk))
        orthogonal = find_orthogonal_vector(self._params, chunks, self._rng)
        return [u * alpha.invert() for u, alpha in zip(orthogonal, self._alphas)]

    def verify(self, commitment: Any, piece: CodedPiece, additional_data: Any = None) -> bool:
        """Verification relies on the installed signature vector alone."""
        return self.verify_signature(piece)