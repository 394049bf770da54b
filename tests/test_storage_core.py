from rlncsim.coded import CodedPiece
from rlncsim.field import Scalar25519
from rlncsim.storage.core import InMemoryStorage


def test_shred_round_trip():
    storage = InMemoryStorage()
    storage.store_shred(1, 0, b"abc")
    assert storage.get_shred(1, 0) == b"abc"
    assert storage.get_shred(1, 1) is None
    assert storage.get_shred(2, 0) is None


def test_store_shred_overwrites():
    storage = InMemoryStorage()
    storage.store_shred(1, 0, b"old")
    storage.store_shred(1, 0, bytearray(b"new"))
    assert storage.get_shred(1, 0) == b"new"


def test_list_shreds_filters_and_sorts():
    storage = InMemoryStorage()
    storage.store_shred(1, 2, b"c")
    storage.store_shred(2, 0, b"x")
    storage.store_shred(1, 0, b"a")
    storage.store_shred(1, 1, b"b")
    assert storage.list_shreds(1) == [(0, b"a"), (1, b"b"), (2, b"c")]
    assert storage.list_shreds(3) == []


def test_coded_pieces_and_indices():
    storage = InMemoryStorage()
    first = CodedPiece(data=[Scalar25519(1)], coefficients=[1])
    second = CodedPiece(data=[Scalar25519(2)], coefficients=[2])
    storage.store_coded_piece(1, 0, 3, first)
    storage.store_coded_piece(1, 0, 1, second)
    storage.store_coded_piece(1, 0, 3, first)
    assert storage.get_coded_piece(1, 0, 3) == first
    assert storage.get_coded_piece(1, 0, 1) == second
    assert storage.get_coded_piece(1, 0, 2) is None
    assert storage.list_piece_indices(1, 0) == [1, 3]
    assert storage.list_piece_indices(1, 1) == []


def test_commitments():
    storage = InMemoryStorage()
    storage.store_commitment(4, 1, ["second"])
    storage.store_commitment(4, 0, ["first"])
    storage.store_commitment(5, 0, ["other"])
    assert storage.get_commitment(4, 0) == ["first"]
    assert storage.get_commitment(4, 2) is None
    assert storage.list_commitments(4) == [(0, ["first"]), (1, ["second"])]


def test_decoded_is_returned_by_reference():
    storage = InMemoryStorage()
    decoder = {"pieces": []}
    storage.store_decoded(1, 0, decoder)
    storage.get_decoded(1, 0)["pieces"].append(7)
    assert storage.get_decoded(1, 0) is decoder
    assert decoder["pieces"] == [7]
    assert storage.get_decoded(1, 1) is None