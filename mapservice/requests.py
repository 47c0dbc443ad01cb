from __future__ import annotations

"""Chunk request parsing, validation and seed normalisation."""

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .settings import MAX_CHUNK_COORD, MIN_CHUNK_COORD

Seed = Union[int, str]


# -----------------------------------------------------------------------------
# Custom Exceptions
# -----------------------------------------------------------------------------
class ChunkValidationError(ValueError):
    """Raised when a chunk request is rejected before any generation work."""


# -----------------------------------------------------------------------------
# Data Classes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ChunkRequest:
    chunk_x: int
    chunk_y: int
    seed: Seed


def hash_seed(text: str) -> int:
    """
    Order-sensitive string hash: ``h = h * 31 + code unit`` wrapped to a signed
    32-bit integer after every step, absolute value at the end. Characters are
    consumed as UTF-16 code units so seeds hash the same as in browser clients.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return abs(h)


def normalize_seed(seed: Seed) -> int:
    """
    Integer seed for the generator. Ints pass through unchanged; strings are
    hashed with ``hash_seed``.

    Raises:
        ChunkValidationError: If the seed is missing, empty or of another type.
    """
    if isinstance(seed, bool) or seed is None:
        raise ChunkValidationError("Seed is required")
    if isinstance(seed, int):
        return seed
    if isinstance(seed, str):
        if not seed.strip():
            raise ChunkValidationError("Seed is required")
        return hash_seed(seed)
    raise ChunkValidationError(f"Seed must be an int or a string, got {type(seed).__name__}")


def _check_chunk_coord(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ChunkValidationError(f"{name} must be an integer, got {value!r}")
    if not MIN_CHUNK_COORD <= value <= MAX_CHUNK_COORD:
        raise ChunkValidationError(
            f"{name} must be between {MIN_CHUNK_COORD} and {MAX_CHUNK_COORD}, got {value}"
        )


def validate_chunk_request(request: ChunkRequest) -> int:
    """
    Check coordinate bounds and the seed. Returns the normalised integer seed.

    Raises:
        ChunkValidationError: On the first problem found.
    """
    _check_chunk_coord("chunkX", request.chunk_x)
    _check_chunk_coord("chunkY", request.chunk_y)
    return normalize_seed(request.seed)


def _coerce_coord(name: str, value: Any) -> Any:
    # Query strings deliver numbers as text.
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ChunkValidationError(f"{name} must be an integer, got {value!r}") from e
    return value


def parse_chunk_request(payload: Mapping[str, Any]) -> ChunkRequest:
    """
    Build a ChunkRequest from a ``{"chunkX", "chunkY", "seed"}`` mapping and validate it.

    Raises:
        ChunkValidationError: If a key is missing or a value is invalid.
    """
    if not isinstance(payload, Mapping):
        raise ChunkValidationError("Chunk request must be an object")
    for key in ("chunkX", "chunkY"):
        if key not in payload:
            raise ChunkValidationError(f"Missing {key}")
    request = ChunkRequest(
        chunk_x=_coerce_coord("chunkX", payload["chunkX"]),
        chunk_y=_coerce_coord("chunkY", payload["chunkY"]),
        seed=payload.get("seed"),
    )
    validate_chunk_request(request)
    return request


__all__ = [
    "ChunkRequest",
    "ChunkValidationError",
    "hash_seed",
    "normalize_seed",
    "parse_chunk_request",
    "validate_chunk_request",
]
