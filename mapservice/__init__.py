"""Request layer exposing chunk validation, seed hashing and the compact codec."""

from .codec import (
    EncodingError,
    decode_chunk,
    decode_tile,
    dumps_chunk,
    encode_chunk,
    encode_tile,
)
from .requests import (
    ChunkRequest,
    ChunkValidationError,
    hash_seed,
    normalize_seed,
    parse_chunk_request,
    validate_chunk_request,
)
from .service import generate_batch, generate_chunk_response, handle_chunk_request

__all__ = [
    "ChunkRequest",
    "ChunkValidationError",
    "EncodingError",
    "decode_chunk",
    "decode_tile",
    "dumps_chunk",
    "encode_chunk",
    "encode_tile",
    "generate_batch",
    "generate_chunk_response",
    "handle_chunk_request",
    "hash_seed",
    "normalize_seed",
    "parse_chunk_request",
    "validate_chunk_request",
]
