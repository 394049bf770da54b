"""Random linear network coding: encoder, decoder and recoder."""

from __future__ import annotations

import copy
import secrets
from collections.abc import Iterable, Sequence
from typing import Any

from .coded import CodedPiece, Committer
from .field import Scalar25519
from .matrix import Echelon
from .scalars import block_to_chunks, chunk_to_scalars, coefficients_to_scalars

_MODULUS = Scalar25519.MODULUS
_SCALAR_BYTES = 32


class RLNCError(Exception):
    """Base class of network coding errors."""

    default_message = "network coding error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class PieceNotUsefulError(RLNCError):
    default_message = "Linearly dependent chunk received"


class ReceivedAllPiecesError(RLNCError):
    default_message = "Received all pieces"


class DecodingNotCompleteError(RLNCError):
    default_message = "Decoding not complete"


class LackOfCommitterError(RLNCError):
    default_message = "Committer not set for verification"


class InvalidDataError(RLNCError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid data: {detail}")


def generate_random_coefficients(length: int) -> bytes:
    """Random byte coefficients, one per chunk."""
    if length < 0:
        raise ValueError("length must be non-negative")
    return secrets.token_bytes(length)


def _split(data: bytes, num_chunks: int) -> list[list[Scalar25519]]:
    return [chunk_to_scalars(chunk) for chunk in block_to_chunks(data, num_chunks)]


def _combine(weights: Sequence[int], rows: Sequence[Sequence[Scalar25519]]) -> list[Scalar25519]:
    values = [[s.value for s in row] for row in rows]
    width = len(values[0])
    return [
        Scalar25519.from_int(sum(w * row[i] for w, row in zip(weights, values)))
        for i in range(width)
    ]


class NetworkEncoder:
    """Produces random linear combinations of a shred's chunks."""

    def __init__(self, committer: Committer, original_data: bytes | None, num_chunks: int) -> None:
        self.committer = committer
        self._chunks = _split(original_data, num_chunks) if original_data is not None else []

    @property
    def chunks(self) -> list[list[Scalar25519]]:
        return [list(chunk) for chunk in self._chunks]

    @property
    def piece_count(self) -> int:
        return len(self._chunks)

    @property
    def piece_byte_len(self) -> int:
        """Bytes in one chunk; 0 when there are none."""
        return len(self._chunks[0]) * _SCALAR_BYTES if self._chunks else 0

    def update_chunks(self, new_data: bytes, num_chunks: int) -> None:
        self._chunks = _split(new_data, num_chunks)

    def encode(self) -> CodedPiece:
        """A coded piece with fresh random coefficients."""
        if not self._chunks:
            raise ValueError("No chunks available for encoding")
        coefficients = generate_random_coefficients(len(self._chunks))
        return CodedPiece(data=_combine(coefficients, self._chunks), coefficients=coefficients)

    def commitment(self) -> Any:
        """The committer's commitment to the chunks."""
        if not self._chunks:
            raise ValueError("No chunks available for commitments")
        try:
            return self.committer.commit(self._chunks)
        except Exception as exc:
            raise ValueError("Commitment failed") from exc


class NetworkDecoder:
    """Collects linearly independent coded pieces until a shred can be solved."""

    def __init__(self, committer: Committer | None, piece_count: int) -> None:
        self.committer = committer
        self.piece_count = piece_count
        self.received_chunks: list[list[Scalar25519]] = []
        self.echelon = Echelon(piece_count)
        self._commitment: Any = None

    def __copy__(self) -> "NetworkDecoder":
        other = type(self)(self.committer, self.piece_count)
        other.received_chunks = [list(chunk) for chunk in self.received_chunks]
        other.echelon = copy.copy(self.echelon)
        other._commitment = self._commitment
        return other

    @property
    def commitment(self) -> Any:
        return self._commitment

    @property
    def useful_piece_count(self) -> int:
        return len(self.received_chunks)

    def check_commitment(self, commitment: Any) -> None:
        """Raise ValueError when the commitment disagrees with the stored one."""
        if self._commitment is None and self.received_chunks:
            raise ValueError("Commitments not set for received chunks")
        if self._commitment is not None and self._commitment != commitment:
            raise ValueError("Commitments do not match existing ones")

    def check_chunks(self, piece: CodedPiece) -> None:
        """Raise ValueError when the piece's width differs from earlier pieces."""
        if self.received_chunks and len(self.received_chunks[0]) != len(piece.data):
            raise ValueError("The chunk size is different")

    def decode(self, coded_piece: CodedPiece, commitment: Any, additional: Any = None) -> None:
        """Verify a piece against the commitment and add it."""
        if self._commitment is None:
            self._commitment = commitment
        self.verify_coded_piece(coded_piece, commitment, additional)
        self.direct_decode(coded_piece)

    def direct_decode(self, coded_piece: CodedPiece) -> None:
        """Add a piece without verification."""
        if self.is_already_decoded():
            raise ReceivedAllPiecesError()
        try:
            useful = self.echelon.add_row(coefficients_to_scalars(coded_piece.coefficients))
        except ValueError as exc:
            raise InvalidDataError(str(exc)) from exc
        if not useful:
            raise PieceNotUsefulError()
        self.received_chunks.append(list(coded_piece.data))

    def verify_coded_piece(
        self, coded_piece: CodedPiece, commitment: Any, additional: Any = None
    ) -> None:
        if self.committer is None:
            raise LackOfCommitterError()
        if not self.committer.verify(commitment, coded_piece, additional):
            raise InvalidDataError("Commitment verification failed")

    def is_already_decoded(self) -> bool:
        return len(self.received_chunks) >= self.piece_count

    def decoded_data(self) -> bytes:
        """The original shred bytes, 32 little-endian bytes per scalar."""
        if not self.is_already_decoded():
            raise DecodingNotCompleteError()
        try:
            inverse = self.echelon.inverse()
        except ValueError as exc:
            raise InvalidDataError(str(exc)) from exc
        rows = [[s.value for s in chunk] for chunk in self.received_chunks]
        width = len(rows[0])
        out = bytearray()
        for inverse_row in inverse:
            weights = [w.value for w in inverse_row]
            for k in range(width):
                total = sum(w * row[k] for w, row in zip(weights, rows)) % _MODULUS
                out += total.to_bytes(_SCALAR_BYTES, "little")
        return bytes(out)


class NetworkRecoder:
    """Mixes already coded pieces into new ones without decoding them."""

    def __init__(self, coded_pieces: Iterable[CodedPiece], piece_count: int) -> None:
        self.piece_count = piece_count
        self._load(list(coded_pieces))

    def _load(self, pieces: list[CodedPiece]) -> None:
        self._chunks = [list(piece.data) for piece in pieces]
        self._coefficients = [bytes(piece.coefficients) for piece in pieces]

    def update_packets(self, coded_pieces: Iterable[CodedPiece]) -> None:
        pieces = list(coded_pieces)
        if not pieces:
            raise ValueError("No packets to update")
        self._load(pieces)

    def recode(self) -> CodedPiece:
        """A random mix of the held pieces; coefficients are mixed with byte arithmetic."""
        if not self._chunks:
            raise ValueError("No packets to recode")
        mixing = generate_random_coefficients(len(self._chunks))
        first = self._chunks[0]
        scalar_type = type(first[0]) if first else Scalar25519
        zero = scalar_type.zero()
        data = [
            sum(
                (scalar_type.from_int(m) * chunk[i] for m, chunk in zip(mixing, self._chunks)),
                zero,
            )
            for i in range(len(first))
        ]
        coefficients = bytes(
            sum(m * coeffs[i] for m, coeffs in zip(mixing, self._coefficients)) % 256
            for i in range(len(self._coefficients[0]))
        )
        return CodedPiece(data=data, coefficients=coefficients)