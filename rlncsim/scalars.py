"""Conversions between byte blocks and field scalars."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .bls_scalar import BlsScalar
from .field import Scalar25519

SCALAR_BYTES = 32
_PAYLOAD_BYTES = 31


def coefficients_to_scalars(coefficients: Iterable[int]) -> list[Scalar25519]:
    """Lift byte coefficients into Ristretto scalars."""
    return [Scalar25519.from_int(c) for c in coefficients]


def coefficients_to_bls_scalars(coefficients: Iterable[int]) -> list[BlsScalar]:
    """Lift byte coefficients into BLS12-381 scalars."""
    return [BlsScalar.from_int(c) for c in coefficients]


def chunk_to_scalars(chunk: bytes) -> list[Scalar25519]:
    """Split a chunk into 32-byte words, each reduced into a scalar."""
    chunk = bytes(chunk)
    if len(chunk) % SCALAR_BYTES:
        raise ValueError("Chunk size is not divisible by 32")
    return [
        Scalar25519.from_bytes_mod_order(chunk[start : start + SCALAR_BYTES])
        for start in range(0, len(chunk), SCALAR_BYTES)
    ]


def pad_data_for_scalars(data: bytes, num_chunks: int) -> bytes:
    """Spread data over 31-byte words with a zero high byte, padded to num_chunks equal 32-aligned chunks."""
    if num_chunks <= 0:
        raise ValueError("num_chunks must be positive")
    data = bytes(data)
    result = bytearray()
    for start in range(0, len(data), _PAYLOAD_BYTES):
        result += data[start : start + _PAYLOAD_BYTES]
        result.append(0)
    chunk_size = -(-len(result) // num_chunks)
    aligned = -(-chunk_size // SCALAR_BYTES) * SCALAR_BYTES
    result.extend(bytes(aligned * num_chunks - len(result)))
    return bytes(result)


def unpad_data_from_scalars(padded_data: bytes, original_length: int) -> bytes:
    """Undo pad_data_for_scalars, keeping original_length bytes."""
    padded_data = bytes(padded_data)
    result = b"".join(
        padded_data[start : start + SCALAR_BYTES][:_PAYLOAD_BYTES]
        for start in range(0, len(padded_data), SCALAR_BYTES)
    )
    return result[:original_length]


def random_u8_slice(length: int) -> bytes:
    """Random bytes whose every 32nd byte is zero, so each word is a canonical scalar."""
    data = bytearray(os.urandom(length))
    data[_PAYLOAD_BYTES::SCALAR_BYTES] = bytes(len(data[_PAYLOAD_BYTES::SCALAR_BYTES]))
    return bytes(data)


def block_to_chunks(block: bytes, num_chunks: int) -> list[bytes]:
    """Split a block into num_chunks equal parts."""
    if num_chunks <= 0:
        raise ValueError("num_chunks must be positive")
    block = bytes(block)
    if len(block) % num_chunks:
        raise ValueError("Block size is not divisible by num_chunks")
    chunk_size = len(block) // num_chunks
    if chunk_size == 0:
        raise ValueError("Block is empty")
    return [block[start : start + chunk_size] for start in range(0, len(block), chunk_size)]


def create_random_block(block_size: int) -> bytes:
    """A random block whose 32-byte words all decode to canonical scalars."""
    return random_u8_slice(block_size)