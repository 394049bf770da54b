import copy

import pytest

from rlncsim.coded import CodedPiece
from rlncsim.field import Scalar25519
from rlncsim.pedersen import PedersenCommitter
from rlncsim.rlnc import (
    DecodingNotCompleteError,
    InvalidDataError,
    LackOfCommitterError,
    NetworkDecoder,
    NetworkEncoder,
    NetworkRecoder,
    PieceNotUsefulError,
    ReceivedAllPiecesError,
    generate_random_coefficients,
)
from rlncsim.scalars import random_u8_slice


def _piece(values, coefficients):
    return CodedPiece(data=[Scalar25519(v) for v in values], coefficients=bytes(coefficients))


def _fill(decoder, encoder, commitment=None):
    while not decoder.is_already_decoded():
        piece = encoder.encode()
        try:
            if commitment is None:
                decoder.direct_decode(piece)
            else:
                decoder.decode(piece, commitment, None)
        except PieceNotUsefulError:
            continue


def test_generate_random_coefficients():
    assert len(generate_random_coefficients(10)) == 10


def test_network_encoder():
    num_chunks = 10
    committer = PedersenCommitter(num_chunks)
    encoder = NetworkEncoder(committer, random_u8_slice(num_chunks * 32), num_chunks)
    assert encoder.piece_count == 10
    assert encoder.piece_byte_len >= 32
    assert encoder.piece_byte_len % 32 == 0


def test_network_decoder():
    num_chunks = 10
    committer = PedersenCommitter(num_chunks)
    original = random_u8_slice(num_chunks * 32)
    encoder = NetworkEncoder(committer, original, num_chunks)
    decoder = NetworkDecoder(committer, num_chunks)
    commitment = encoder.commitment()
    _fill(decoder, encoder, commitment)
    assert decoder.decoded_data() == original
    assert decoder.commitment == commitment


def test_direct_decode_round_trip_without_committer():
    original = random_u8_slice(4 * 64)
    encoder = NetworkEncoder(None, original, 4)
    decoder = NetworkDecoder(None, 4)
    _fill(decoder, encoder)
    assert decoder.useful_piece_count == 4
    assert decoder.decoded_data() == original


def test_decode_from_mixed_pieces():
    decoder = NetworkDecoder(None, 2)
    decoder.direct_decode(_piece([12], [1, 1]))
    decoder.direct_decode(_piece([7], [0, 1]))
    expected = (5).to_bytes(32, "little") + (7).to_bytes(32, "little")
    assert decoder.decoded_data() == expected


def test_encoder_without_data():
    encoder = NetworkEncoder(None, None, 4)
    assert encoder.piece_count == 0
    assert encoder.piece_byte_len == 0
    with pytest.raises(ValueError, match="No chunks available for encoding"):
        encoder.encode()
    with pytest.raises(ValueError, match="No chunks available for commitments"):
        encoder.commitment()


def test_update_chunks():
    encoder = NetworkEncoder(None, None, 2)
    encoder.update_chunks(random_u8_slice(128), 2)
    assert encoder.piece_count == 2
    assert encoder.piece_byte_len == 64


def test_encoder_rejects_uneven_data():
    with pytest.raises(ValueError):
        NetworkEncoder(None, bytes(100), 3)


def test_decoded_data_before_complete():
    decoder = NetworkDecoder(None, 2)
    decoder.direct_decode(_piece([1], [1, 0]))
    with pytest.raises(DecodingNotCompleteError):
        decoder.decoded_data()


def test_dependent_piece_is_rejected():
    decoder = NetworkDecoder(None, 3)
    decoder.direct_decode(_piece([1], [1, 2, 3]))
    with pytest.raises(PieceNotUsefulError):
        decoder.direct_decode(_piece([2], [2, 4, 6]))
    assert decoder.useful_piece_count == 1


def test_extra_piece_after_completion():
    decoder = NetworkDecoder(None, 1)
    decoder.direct_decode(_piece([9], [1]))
    with pytest.raises(ReceivedAllPiecesError):
        decoder.direct_decode(_piece([9], [1]))


def test_wrong_coefficient_count_is_invalid():
    decoder = NetworkDecoder(None, 2)
    with pytest.raises(InvalidDataError):
        decoder.direct_decode(_piece([1], [1, 2, 3]))


def test_verify_without_committer():
    decoder = NetworkDecoder(None, 2)
    with pytest.raises(LackOfCommitterError):
        decoder.verify_coded_piece(_piece([1], [1, 0]), [], None)


def test_tampered_piece_fails_verification():
    committer = PedersenCommitter(2)
    encoder = NetworkEncoder(committer, random_u8_slice(2 * 32), 2)
    commitment = encoder.commitment()
    piece = encoder.encode()
    tampered = CodedPiece(data=[piece.data[0] + 1], coefficients=piece.coefficients)
    decoder = NetworkDecoder(committer, 2)
    decoder.verify_coded_piece(piece, commitment, None)
    with pytest.raises(InvalidDataError, match="Commitment verification failed"):
        decoder.verify_coded_piece(tampered, commitment, None)


def test_check_commitment():
    committer = PedersenCommitter(1)
    encoder = NetworkEncoder(committer, random_u8_slice(64), 2)
    other = NetworkEncoder(committer, random_u8_slice(64), 2)
    decoder = NetworkDecoder(committer, 2)
    assert decoder.check_commitment(encoder.commitment()) is None
    decoder.decode(encoder.encode(), encoder.commitment(), None)
    assert decoder.check_commitment(encoder.commitment()) is None
    with pytest.raises(ValueError, match="do not match"):
        decoder.check_commitment(other.commitment())


def test_check_commitment_without_stored_commitment():
    decoder = NetworkDecoder(None, 2)
    decoder.direct_decode(_piece([1], [1, 0]))
    with pytest.raises(ValueError, match="not set"):
        decoder.check_commitment([])


def test_check_chunks():
    decoder = NetworkDecoder(None, 2)
    decoder.direct_decode(_piece([1], [1, 0]))
    assert decoder.check_chunks(_piece([3], [0, 1])) is None
    with pytest.raises(ValueError, match="chunk size is different"):
        decoder.check_chunks(_piece([3, 4], [0, 1]))


def test_decoder_copy_is_independent():
    decoder = NetworkDecoder(None, 2)
    decoder.direct_decode(_piece([1], [1, 0]))
    clone = copy.copy(decoder)
    clone.direct_decode(_piece([2], [0, 1]))
    assert clone.is_already_decoded()
    assert not decoder.is_already_decoded()
    assert decoder.useful_piece_count == 1


def test_recoder_single_piece_invariant():
    recoder = NetworkRecoder([_piece([1], [3])], 1)
    piece = recoder.recode()
    mix = piece.data[0].value
    assert mix < 256
    assert piece.coefficients[0] == (mix * 3) % 256
    assert recoder.piece_count == 1


def test_recoder_shapes():
    pieces = [_piece([1, 2, 3], [1, 0]), _piece([4, 5, 6], [0, 1])]
    piece = NetworkRecoder(pieces, 2).recode()
    assert len(piece.data) == 3
    assert len(piece.coefficients) == 2


def test_recoder_errors():
    recoder = NetworkRecoder([], 2)
    with pytest.raises(ValueError, match="No packets to recode"):
        recoder.recode()
    with pytest.raises(ValueError, match="No packets to update"):
        recoder.update_packets([])


def test_recoder_update_packets():
    recoder = NetworkRecoder([], 1)
    recoder.update_packets([_piece([0, 0], [0])])
    piece = recoder.recode()
    assert piece.data == (Scalar25519(0), Scalar25519(0))
    assert piece.coefficients == b"\x00"