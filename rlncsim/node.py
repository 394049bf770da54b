"""A simulated network node that publishes and gradually decodes coded blocks."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any

from .coded import Committer
from .eds import FlatMatrix, extended_data_share
from .message import BroadcastCodedBlockMsg
from .storage.core import BlockId, InMemoryStorage
from .storage.decoder import StorageDecoder
from .storage.encoder import StorageEncoder
from .storage.recoder import StorageRecoder

_log = logging.getLogger(__name__)


class NodeError(ValueError):
    """Raised when a node cannot create, publish or store a block."""


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _extend_2d_matrix(data: bytes, share_size: int, k: int) -> bytes:
    """Extend a k x k share matrix to 2k x 2k and return its bytes."""
    expected = k * k * share_size
    if len(data) != expected:
        raise NodeError(
            f"data.len() {len(data)} does not match expected size {expected} "
            f"(k={k} x k={k} x share_size={share_size})"
        )
    extended = extended_data_share(FlatMatrix(data, share_size, k), k)
    rows, cols = extended.dimensions()
    if rows != 2 * k or cols != 2 * k:
        raise NodeError(
            f"Extended matrix dimensions ({rows}, {cols}) do not match "
            f"expected (2k={2 * k}, 2k={2 * k})"
        )
    return extended.data


class Node:
    """A peer holding shreds, commitments and decoders in local memory."""

    def __init__(
        self,
        node_id: int,
        committer: Committer,
        neighbors: Iterable[int],
        num_shreds: int,
        num_chunks_per_shred: int,
        custody_size: int,
    ) -> None:
        self.node_id = node_id
        self.committer = committer
        self.neighbors = list(neighbors)
        self.storage: InMemoryStorage = InMemoryStorage()
        self.active_block: BlockId | None = None
        self.num_shreds = num_shreds
        self.num_chunks_per_shred = num_chunks_per_shred
        self.custody_size = custody_size
        self.encoder = StorageEncoder(0, num_shreds, num_chunks_per_shred)
        self.decoder = StorageDecoder(num_chunks_per_shred)
        self.recoder = StorageRecoder(num_chunks_per_shred)

    def new_source(self, block_id: BlockId, data: bytes, use_rs: bool, share_size: int) -> None:
        """Become the source of a block: optionally extend it, split it into shreds and commit."""
        data = bytes(data)
        if use_rs:
            if share_size <= 0:
                raise NodeError("share_size must be positive")
            num_shares = _ceil_div(len(data), share_size)
            k = math.isqrt(num_shares)
            if k * k < num_shares:
                k += 1
            if k == 0:
                raise NodeError("Invalid k: data size too small or share_size too large")
            extended = _extend_2d_matrix(data, share_size, k)
            num_shreds = k
        else:
            num_shreds = self.num_shreds
            if num_shreds <= 0 or len(data) % num_shreds:
                raise NodeError(
                    f"data.len() {len(data)} not divisible by num_shreds {num_shreds}"
                )
            extended = data

        self.num_shreds = num_shreds
        shred_size = _ceil_div(len(extended), num_shreds)
        self.encoder = StorageEncoder(block_id, num_shreds, self.num_chunks_per_shred)
        for sid in range(num_shreds):
            start = sid * shred_size
            shred = extended[start : start + shred_size]
            self.storage.store_shred(block_id, sid, shred)
            try:
                commitment = self.encoder.shred_commitment(self.storage, self.committer, sid)
            except ValueError as exc:
                raise NodeError(f"Commit failed for shred {sid}: {exc}") from exc
            self.storage.store_commitment(block_id, sid, commitment)
            _log.debug("Stored shred %d (%s...) and its commitment", sid, shred[:8].hex())

        self.active_block = block_id

    def publish(self, block_id: BlockId, source_id: int) -> BroadcastCodedBlockMsg:
        """A message with one fresh coded piece per shred of the block."""
        if not self.is_active_node(block_id):
            raise NodeError(f"Node {self.node_id} is not active for block {block_id}")
        coded_pieces = []
        commitments: list[Any] = []
        for shred_id, _ in self.storage.list_shreds(block_id):
            try:
                piece = self.encoder.encode_one_shred(self.storage, self.committer, shred_id)
            except ValueError as exc:
                raise NodeError(f"Encode failed for shred {shred_id}: {exc}") from exc
            coded_pieces.append(piece)
            commitments.append(self.storage.get_commitment(block_id, shred_id))
        return BroadcastCodedBlockMsg(block_id, coded_pieces, commitments, source_id)

    def subscribe(self, msg: BroadcastCodedBlockMsg) -> None:
        """Verify and absorb a broadcast; raises the first network coding error met."""
        for shred_id, (commitment, piece) in enumerate(zip(msg.commitments, msg.coded_pieces)):
            if self.storage.get_commitment(msg.block_id, shred_id) != commitment:
                self.storage.store_commitment(msg.block_id, shred_id, commitment)

            self.decoder.verify_piece(self.committer, piece, commitment)

            if self.decoder.decode_shred(self.storage, msg.block_id, shred_id, piece):
                raw = self.decoder.raw_from_decoded_shred(self.storage, msg.block_id, shred_id)
                self.storage.store_shred(msg.block_id, shred_id, raw)

    def is_active_node(self, block_id: BlockId) -> bool:
        """True when the node holds every shred of the block, as source or after decoding."""
        held = sum(1 for _, data in self.storage.list_shreds(block_id) if data)
        return held == self.num_shreds