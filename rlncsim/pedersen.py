"""Pedersen vector commitments over the Ristretto group."""

from __future__ import annotations

import random
import secrets
from collections.abc import Iterable, Sequence
from typing import Any

from .coded import CodedPiece, Committer
from .curve import RistrettoPoint, multiscalar_mul
from .field import Scalar25519
from .scalars import coefficients_to_scalars


class PedersenError(ValueError):
    """Raised when a vector cannot be committed."""


class PedersenCommitter(Committer):
    """Commits each chunk with its own multiscalar product over random generators."""

    def __init__(self, n: int, rng: random.Random | None = None) -> None:
        if n < 0:
            raise ValueError("number of generators must be non-negative")
        draw = rng.getrandbits if rng is not None else secrets.randbits
        self._generators = tuple(
            RistrettoPoint.mul_base(Scalar25519.from_int(draw(128))) for _ in range(n)
        )

    @property
    def generators(self) -> tuple[RistrettoPoint, ...]:
        return self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def commit_vector(self, scalars: Iterable[Scalar25519]) -> RistrettoPoint:
        """Commit to one vector of at most len(self) scalars."""
        scalars = list(scalars)
        if len(scalars) > len(self._generators):
            raise PedersenError(
                f"Invalid chunk size: Chunk size is too large, "
                f"{len(scalars)} > {len(self._generators)}"
            )
        return multiscalar_mul(scalars, self._generators[: len(scalars)])

    def commit(self, chunks: Iterable[Sequence[Scalar25519]]) -> list[RistrettoPoint]:
        """One commitment per chunk."""
        return [self.commit_vector(chunk) for chunk in chunks]

    def verify(
        self,
        commitment: Sequence[RistrettoPoint] | None,
        piece: CodedPiece,
        additional_data: Any = None,
    ) -> bool:
        """Check that the piece's data commits to the same combination of chunk commitments."""
        if commitment is None:
            return False
        commitment = list(commitment)
        coefficients = coefficients_to_scalars(piece.coefficients)
        if len(coefficients) != len(commitment):
            return False
        combined = multiscalar_mul(coefficients, commitment)
        try:
            expected = self.commit_vector(piece.data)
        except PedersenError:
            return False
        return combined == expected