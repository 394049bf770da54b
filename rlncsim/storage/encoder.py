"""Encoding of shreds held in node storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..coded import CodedPiece, Committer
from ..rlnc import NetworkEncoder
from .core import BlockId, InMemoryStorage, ShredId


@dataclass
class StorageEncoder:
    """Produces coded pieces and commitments for the shreds of one block."""

    block_id: BlockId
    num_shreds: int
    num_chunks_per_shred: int

    def _encoder(
        self, storage: InMemoryStorage, committer: Committer, shred_id: ShredId, missing: str
    ) -> NetworkEncoder:
        shred = storage.get_shred(self.block_id, shred_id)
        if shred is None:
            raise ValueError(missing)
        return NetworkEncoder(committer, shred, self.num_chunks_per_shred)

    def encode_one_shred(
        self, storage: InMemoryStorage, committer: Committer, shred_id: ShredId
    ) -> CodedPiece:
        """A fresh random coded piece of a stored shred."""
        return self._encoder(
            storage, committer, shred_id, "Shred bytes not found in storage"
        ).encode()

    def shred_commitment(
        self, storage: InMemoryStorage, committer: Committer, shred_id: ShredId
    ) -> Any:
        """The committer's commitment to a stored shred's chunks."""
        return self._encoder(storage, committer, shred_id, "Shred bytes not found").commitment()