"""Coded pieces and the interface of homomorphic commitment schemes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

SCALAR_SIZE = 32


@dataclass(frozen=True)
class CodedPiece:
    """A linear combination of chunks together with its byte coefficients."""

    data: tuple = ()
    coefficients: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))
        object.__setattr__(self, "coefficients", bytes(self.coefficients))

    def size_in_bytes(self) -> int:
        """Bytes taken by the scalars plus one byte per coefficient."""
        return len(self.data) * SCALAR_SIZE + len(self.coefficients)


class Committer(ABC):
    """A commitment scheme that can check coded pieces against a commitment."""

    @abstractmethod
    def commit(self, chunks: Sequence[Sequence[Any]]) -> Any:
        """Commit to the original chunks of a shred."""

    @abstractmethod
    def verify(self, commitment: Any, piece: CodedPiece, additional_data: Any = None) -> bool:
        """Check that a coded piece is consistent with the commitment."""