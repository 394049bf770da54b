"""In-memory storage of shreds, coded pieces, commitments and decoders."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from ..coded import CodedPiece

BlockId = int
ShredId = int
PieceIdx = int

CommitmentT = TypeVar("CommitmentT")
DecoderT = TypeVar("DecoderT")


class InMemoryStorage(Generic[CommitmentT, DecoderT]):
    """A node's local store, keyed by block and shred."""

    def __init__(self) -> None:
        self._shreds: dict[tuple[BlockId, ShredId], bytes] = {}
        self._coded: dict[tuple[BlockId, ShredId, PieceIdx], CodedPiece] = {}
        self._piece_index: dict[tuple[BlockId, ShredId], set[PieceIdx]] = {}
        self._commitments: dict[tuple[BlockId, ShredId], CommitmentT] = {}
        self._decoded: dict[tuple[BlockId, ShredId], DecoderT] = {}

    def store_shred(self, block: BlockId, shred: ShredId, data: bytes) -> None:
        self._shreds[block, shred] = bytes(data)

    def get_shred(self, block: BlockId, shred: ShredId) -> bytes | None:
        return self._shreds.get((block, shred))

    def list_shreds(self, block: BlockId) -> list[tuple[ShredId, bytes]]:
        """The block's shreds, ordered by shred id."""
        return sorted(
            ((s, data) for (b, s), data in self._shreds.items() if b == block),
            key=lambda item: item[0],
        )

    def store_coded_piece(
        self, block: BlockId, shred: ShredId, idx: PieceIdx, piece: CodedPiece
    ) -> None:
        self._coded[block, shred, idx] = piece
        self._piece_index.setdefault((block, shred), set()).add(idx)

    def get_coded_piece(self, block: BlockId, shred: ShredId, idx: PieceIdx) -> CodedPiece | None:
        return self._coded.get((block, shred, idx))

    def list_piece_indices(self, block: BlockId, shred: ShredId) -> list[PieceIdx]:
        """Indices of the coded pieces stored for a shred, ascending."""
        return sorted(self._piece_index.get((block, shred), ()))

    def store_commitment(self, block: BlockId, shred: ShredId, commitment: CommitmentT) -> None:
        self._commitments[block, shred] = commitment

    def get_commitment(self, block: BlockId, shred: ShredId) -> CommitmentT | None:
        return self._commitments.get((block, shred))

    def list_commitments(self, block: BlockId) -> list[tuple[ShredId, CommitmentT]]:
        """The block's commitments, ordered by shred id."""
        return sorted(
            ((s, c) for (b, s), c in self._commitments.items() if b == block),
            key=lambda item: item[0],
        )

    def store_decoded(self, block: BlockId, shred: ShredId, decoder: DecoderT) -> None:
        self._decoded[block, shred] = decoder

    def get_decoded(self, block: BlockId, shred: ShredId) -> DecoderT | Any:
        """The decoder stored for a shred, or None; it may be updated in place."""
        return self._decoded.get((block, shred))