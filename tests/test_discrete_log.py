import random

import pytest

from rlncsim.coded import CodedPiece
from rlncsim.curve import RistrettoPoint, multiscalar_mul
from rlncsim.discrete_log import (
    DiscreteLogCommitter,
    DiscreteLogError,
    DiscreteLogParams,
    find_orthogonal_vector,
)
from rlncsim.field import Scalar25519
from rlncsim.rlnc import NetworkDecoder, NetworkEncoder
from rlncsim.scalars import chunk_to_scalars, random_u8_slice


def _data_chunks(num_packets, data_per_packet):
    data = random_u8_slice(num_packets * data_per_packet * 32)
    size = data_per_packet * 32
    chunks = [chunk_to_scalars(data[i : i + size]) for i in range(0, len(data), size)]
    return data, chunks


def _signed(num_packets, data_per_packet):
    data, chunks = _data_chunks(num_packets, data_per_packet)
    committer = DiscreteLogCommitter(len(chunks), len(chunks[0]))
    committer.signature_vector = committer.commit(chunks)
    return data, chunks, committer


def _identity_piece(chunks, i):
    coding = bytes(1 if j == i else 0 for j in range(len(chunks)))
    return CodedPiece(data=chunks[i], coefficients=coding)


class _ZeroBits:
    def getrandbits(self, k):
        return 0


def test_discrete_log_committer_creation():
    _, chunks = _data_chunks(3, 4)
    committer = DiscreteLogCommitter(len(chunks), len(chunks[0]))
    assert committer.params.original_dim == 3
    assert committer.params.data_dim == 4
    assert committer.params.total_dim == 7
    assert len(committer.generators) == 7
    assert committer.signature_vector == ()


def test_commit_and_verify():
    _, chunks, committer = _signed(2, 3)
    for i in range(len(chunks)):
        assert committer.verify_signature(_identity_piece(chunks, i))


def test_linear_combination():
    data, _, committer = _signed(2, 2)
    encoder = NetworkEncoder(committer, data, 2)
    coded_piece = encoder.encode()
    commitment = encoder.commitment()
    assert committer.verify_signature(coded_piece)
    assert committer.verify(commitment, coded_piece, None)
    decoder = NetworkDecoder(committer, 2)
    assert decoder.verify_coded_piece(coded_piece, commitment, None) is None


def test_invalid_packet_detection():
    rng = random.Random(42)
    num_packets, data_per_packet = 2, 2
    _, _, committer = _signed(num_packets, data_per_packet)
    pieces = [
        CodedPiece(
            data=[Scalar25519.from_int(rng.getrandbits(64))] * data_per_packet,
            coefficients=bytes([rng.getrandbits(8)] * num_packets),
        )
        for _ in range(10)
    ]
    results = [committer.verify_signature(piece) for piece in pieces]
    assert len(results) == 10
    assert results.count(False) >= 8


def test_orthogonality():
    rng = random.Random(42)
    params = DiscreteLogParams(3, 4)
    _, chunks = _data_chunks(3, 4)
    orthogonal = find_orthogonal_vector(params, chunks, rng)
    assert len(orthogonal) == params.total_dim
    for index, packet in enumerate(chunks):
        dot = orthogonal[index]
        for j, value in enumerate(packet):
            dot = dot + value * orthogonal[params.original_dim + j]
        assert dot == Scalar25519.zero()


def test_orthogonal_vector_with_all_zero_draws_uses_unit_data_part():
    params = DiscreteLogParams(2, 3)
    _, chunks = _data_chunks(2, 3)
    orthogonal = find_orthogonal_vector(params, chunks, _ZeroBits())
    assert orthogonal[2] == Scalar25519.one()
    assert orthogonal[3].is_zero() and orthogonal[4].is_zero()
    assert orthogonal[0] == -chunks[0][0]
    assert orthogonal[1] == -chunks[1][0]


def test_orthogonal_vector_needs_data_columns():
    with pytest.raises(DiscreteLogError, match="rank insufficient"):
        find_orthogonal_vector(DiscreteLogParams(2, 0), [[], []])


def test_tampered_piece_fails():
    _, chunks, committer = _signed(2, 3)
    piece = _identity_piece(chunks, 0)
    tampered = CodedPiece(
        data=[piece.data[0] + 1, *piece.data[1:]], coefficients=piece.coefficients
    )
    assert committer.verify_signature(piece)
    assert not committer.verify_signature(tampered)


def test_wrong_length_piece_fails():
    _, chunks, committer = _signed(2, 3)
    piece = CodedPiece(data=chunks[0][:2], coefficients=b"\x01\x00")
    assert not committer.verify_signature(piece)


def test_unsigned_committer_rejects_pieces():
    _, chunks = _data_chunks(2, 2)
    committer = DiscreteLogCommitter(2, 2)
    assert not committer.verify_signature(_identity_piece(chunks, 0))


def test_commit_checks_dimensions():
    _, chunks = _data_chunks(2, 3)
    committer = DiscreteLogCommitter(2, 3)
    with pytest.raises(DiscreteLogError, match="expected 2, got 1"):
        committer.commit(chunks[:1])
    with pytest.raises(DiscreteLogError, match="expected 3, got 2"):
        committer.commit([chunks[0], chunks[1][:2]])


def test_commit_vector():
    committer = DiscreteLogCommitter(1, 2)
    vector = [Scalar25519.from_int(3), Scalar25519.from_int(5)]
    assert committer.commit_vector(vector) == multiscalar_mul(
        vector, committer.generators[:2]
    )
    with pytest.raises(DiscreteLogError, match="Chunk size too large: 4 > 3"):
        committer.commit_vector([Scalar25519.one()] * 4)


def test_from_keys_round_trip_and_checks():
    _, chunks, committer = _signed(2, 2)
    rebuilt = DiscreteLogCommitter.from_keys(
        committer.params, [], committer.generators, committer.signature_vector
    )
    assert rebuilt.verify_signature(_identity_piece(chunks, 1))
    with pytest.raises(DiscreteLogError, match="expected 4, got 3"):
        DiscreteLogCommitter.from_keys(
            committer.params, [], committer.generators[:3], committer.signature_vector
        )
    with pytest.raises(DiscreteLogError, match="expected 4, got 0"):
        DiscreteLogCommitter.from_keys(committer.params, [], committer.generators, [])


def test_generators_are_not_identity():
    committer = DiscreteLogCommitter(2, 2)
    assert all(not g.is_identity() for g in committer.generators)
    assert all(isinstance(g, RistrettoPoint) for g in committer.generators)