from __future__ import annotations

"""Request handling: validate, generate, encode and size chunk responses."""

import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

from worldgen.settings import DEFAULT_SETTINGS, WorldSettings
from worldgen.world import generate_chunk

from .codec import dumps_chunk, encode_chunk
from .requests import (
    ChunkRequest,
    ChunkValidationError,
    Seed,
    normalize_seed,
    parse_chunk_request,
    validate_chunk_request,
)
from .settings import CHUNK_SIZE, MAX_BATCH_CHUNKS, MAX_PAYLOAD_BYTES

logger = logging.getLogger("mapservice.service")
logger.addHandler(logging.NullHandler())

SERVICE_SETTINGS: WorldSettings = DEFAULT_SETTINGS.replace(chunk_size=CHUNK_SIZE)


def generate_chunk_response(
    chunk_x: int,
    chunk_y: int,
    seed: Seed,
    settings: Optional[WorldSettings] = None,
) -> Dict[str, Any]:
    """
    Validate the request, generate the chunk and return the response envelope
    ``{chunkX, chunkY, seed, tiles, sizeBytes}``. ``sizeBytes`` is the length
    of the canonical JSON encoding of ``tiles``.

    Raises:
        ChunkValidationError: If the coordinates or seed are rejected.
    """
    request = ChunkRequest(chunk_x, chunk_y, seed)
    int_seed = validate_chunk_request(request)
    start = time.perf_counter()
    tiles = encode_chunk(generate_chunk(chunk_x, chunk_y, int_seed, settings or SERVICE_SETTINGS))
    size = len(dumps_chunk(tiles))
    logger.info(
        "Generated chunk (%d, %d) seed=%s in %.1fms, %d bytes",
        chunk_x,
        chunk_y,
        seed,
        (time.perf_counter() - start) * 1000.0,
        size,
    )
    return {
        "chunkX": chunk_x,
        "chunkY": chunk_y,
        "seed": seed,
        "tiles": tiles,
        "sizeBytes": size,
    }


def handle_chunk_request(payload: Mapping[str, Any], settings: Optional[WorldSettings] = None) -> Dict[str, Any]:
    """Parse a ``{chunkX, chunkY, seed}`` mapping and answer it."""
    request = parse_chunk_request(payload)
    return generate_chunk_response(request.chunk_x, request.chunk_y, request.seed, settings)


def generate_batch(
    entries: Iterable[Mapping[str, Any]],
    seed: Seed,
    settings: Optional[WorldSettings] = None,
) -> Dict[str, Any]:
    """
    Generate several chunks for one seed.

    Entries that fail validation are skipped with a warning. Generation stops
    as soon as the running payload size exceeds MAX_PAYLOAD_BYTES; the chunk
    that crossed the limit is dropped and ``truncated`` is set.

    Raises:
        ChunkValidationError: If the list is empty, too long, or the seed is invalid.
    """
    entries = list(entries)
    if not entries:
        raise ChunkValidationError("chunks must be a non-empty list of {chunkX, chunkY} objects")
    if len(entries) > MAX_BATCH_CHUNKS:
        raise ChunkValidationError(f"At most {MAX_BATCH_CHUNKS} chunks per batch, got {len(entries)}")

    normalize_seed(seed)
    start = time.perf_counter()
    chunks: List[Dict[str, Any]] = []
    skipped: List[Dict[str, Any]] = []
    total = 0
    truncated = False
    for entry in entries:
        try:
            payload = dict(entry)
        except (TypeError, ValueError):
            logger.warning("Skipping invalid batch entry: %r", entry)
            skipped.append({"entry": repr(entry), "error": "not an object"})
            continue
        payload["seed"] = seed
        try:
            response = handle_chunk_request(payload, settings)
        except ChunkValidationError as e:
            logger.warning("Skipping chunk (%s, %s): %s", payload.get("chunkX"), payload.get("chunkY"), e)
            skipped.append({"chunkX": payload.get("chunkX"), "chunkY": payload.get("chunkY"), "error": str(e)})
            continue
        if total + response["sizeBytes"] > MAX_PAYLOAD_BYTES:
            logger.warning(
                "Batch payload would exceed %d bytes after %d chunks; truncating",
                MAX_PAYLOAD_BYTES,
                len(chunks),
            )
            truncated = True
            break
        total += response["sizeBytes"]
        chunks.append(response)

    logger.info(
        "Generated %d chunks in %.1fms, total size %d bytes",
        len(chunks),
        (time.perf_counter() - start) * 1000.0,
        total,
    )
    return {
        "chunks": chunks,
        "totalSizeBytes": total,
        "seed": seed,
        "truncated": truncated,
        "skipped": skipped,
    }


__all__ = ["SERVICE_SETTINGS", "generate_batch", "generate_chunk_response", "handle_chunk_request"]
