"""Messages exchanged between simulated nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .coded import CodedPiece


@dataclass
class RetrieveShredMsg:
    """A request carrying one coded piece of a shred."""

    block_id: int
    shred_id: int
    piece_idx: int
    piece: CodedPiece
    commitment: Any
    source_id: int
    msg_type: str = field(default="IWANT", init=False)


@dataclass
class BroadcastCodedBlockMsg:
    """One coded piece per shred of a block, with the shreds' commitments."""

    block_id: int
    coded_pieces: list[CodedPiece]
    commitments: list[Any]
    source_id: int
    msg_type: str = field(default="PUBLISH", init=False)

    def coded_piece_size_in_bytes(self) -> int:
        """Total size of the carried coded pieces."""
        return sum(piece.size_in_bytes() for piece in self.coded_pieces)