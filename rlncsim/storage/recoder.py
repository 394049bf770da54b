"""Recoding of coded pieces held in node storage."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..coded import CodedPiece
from ..rlnc import NetworkRecoder
from .core import BlockId, InMemoryStorage, PieceIdx, ShredId


@dataclass
class StorageRecoder:
    """Builds fresh coded pieces from those a node has stored."""

    piece_count: int

    def recode(
        self,
        storage: InMemoryStorage,
        block_id: BlockId,
        shred_id: ShredId,
        use_piece_indices: Iterable[PieceIdx],
    ) -> CodedPiece:
        """Mix the stored pieces at the given indices; missing indices are skipped."""
        collected = [
            piece
            for idx in use_piece_indices
            if (piece := storage.get_coded_piece(block_id, shred_id, idx)) is not None
        ]
        if not collected:
            raise ValueError("No pieces available to recode")
        return NetworkRecoder(collected, self.piece_count).recode()