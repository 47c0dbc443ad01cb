import pytest

from mapservice.requests import (
    ChunkRequest,
    ChunkValidationError,
    hash_seed,
    normalize_seed,
    parse_chunk_request,
    validate_chunk_request,
)


def test_hash_seed_matches_known_values():
    assert hash_seed("") == 0
    assert hash_seed("a") == 97
    assert hash_seed("ab") == 97 * 31 + 98
    assert hash_seed("hello") == 99162322
    # Wraps to the most negative 32-bit value before the absolute value is taken.
    assert hash_seed("polygenelubricants") == 2147483648


def test_hash_seed_is_order_sensitive():
    assert hash_seed("abc") != hash_seed("cba")
    assert hash_seed("world") == hash_seed("world")


def test_normalize_seed():
    assert normalize_seed(12345) == 12345
    assert normalize_seed(-7) == -7
    assert normalize_seed("hello") == 99162322
    for bad in ("", "   ", None, True, 1.5):
        with pytest.raises(ChunkValidationError):
            normalize_seed(bad)


def test_bounds():
    assert validate_chunk_request(ChunkRequest(10000, -10000, 1)) == 1
    with pytest.raises(ChunkValidationError, match="chunkX"):
        validate_chunk_request(ChunkRequest(10001, 0, 1))
    with pytest.raises(ChunkValidationError, match="chunkY"):
        validate_chunk_request(ChunkRequest(0, -10001, 1))


def test_non_integer_coordinates():
    for bad in (1.0, "1", None, False):
        with pytest.raises(ChunkValidationError):
            validate_chunk_request(ChunkRequest(bad, 0, 1))


def test_parse_payload():
    request = parse_chunk_request({"chunkX": "3", "chunkY": -2, "seed": "abc"})
    assert request == ChunkRequest(3, -2, "abc")
    with pytest.raises(ChunkValidationError, match="Missing chunkY"):
        parse_chunk_request({"chunkX": 0, "seed": 1})
    with pytest.raises(ChunkValidationError, match="Seed is required"):
        parse_chunk_request({"chunkX": 0, "chunkY": 0})
    with pytest.raises(ChunkValidationError):
        parse_chunk_request({"chunkX": "x1", "chunkY": 0, "seed": 1})
    with pytest.raises(ChunkValidationError):
        parse_chunk_request([0, 0, 1])


def test_validation_error_is_value_error():
    assert issubclass(ChunkValidationError, ValueError)
