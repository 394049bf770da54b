"""Gradual decoding of shreds from coded pieces held in node storage."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..coded import CodedPiece, Committer
from ..rlnc import DecodingNotCompleteError, InvalidDataError, NetworkDecoder, RLNCError
from .core import BlockId, InMemoryStorage, PieceIdx, ShredId

_log = logging.getLogger(__name__)


@dataclass
class StorageDecoder:
    """Knows how many independent pieces a shred needs and drives its decoders."""

    piece_count: int

    def verify_piece(
        self,
        committer: Committer,
        piece: CodedPiece,
        commitment: Any,
        additional_data: Any = None,
    ) -> None:
        """Raise InvalidDataError unless the piece matches the commitment."""
        if not committer.verify(commitment, piece, additional_data):
            raise InvalidDataError("Commitment verification failed")

    def decode_shred(
        self,
        storage: InMemoryStorage,
        block_id: BlockId,
        shred_id: ShredId,
        coded_piece: CodedPiece,
    ) -> bool:
        """Add a piece to the shred's decoder; True once the shred is fully decoded."""
        stored = storage.get_decoded(block_id, shred_id)
        if stored is None:
            decoder = NetworkDecoder(None, self.piece_count)
            storage.store_decoded(block_id, shred_id, copy.copy(decoder))
        else:
            decoder = copy.copy(stored)

        decoder.direct_decode(coded_piece)

        next_idx = len(storage.list_piece_indices(block_id, shred_id))
        storage.store_coded_piece(block_id, shred_id, next_idx, coded_piece)
        storage.store_decoded(block_id, shred_id, decoder)
        return decoder.is_already_decoded()

    def raw_from_decoded_shred(
        self, storage: InMemoryStorage, block_id: BlockId, shred_id: ShredId
    ) -> bytes:
        """The bytes of a fully decoded shred."""
        decoder = storage.get_decoded(block_id, shred_id)
        if decoder is None or not decoder.is_already_decoded():
            raise DecodingNotCompleteError()
        try:
            return decoder.decoded_data()
        except RLNCError as exc:
            raise DecodingNotCompleteError() from exc

    def try_decode_shred(
        self,
        storage: InMemoryStorage,
        block_id: BlockId,
        shred_id: ShredId,
        piece_indices: Iterable[PieceIdx],
        commitment: Any = None,
    ) -> bytes:
        """Solve a shred from the stored pieces at the given indices."""
        pieces = [
            piece
            for idx in piece_indices
            if (piece := storage.get_coded_piece(block_id, shred_id, idx)) is not None
        ]
        if len(pieces) < self.piece_count:
            raise DecodingNotCompleteError()

        decoder = NetworkDecoder(None, self.piece_count)
        for index, piece in enumerate(pieces):
            try:
                decoder.direct_decode(piece)
            except RLNCError as exc:
                _log.warning("Failed to decode piece at index %d: %s", index, exc)
        if not decoder.is_already_decoded():
            raise DecodingNotCompleteError()
        return decoder.decoded_data()