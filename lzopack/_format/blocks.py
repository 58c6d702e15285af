"""
Block encoder — splits a payload into 256 KiB blocks and frames each one.

Per block:
  1. Compress the chunk with the caller's compressor
  2. Keep the result only if it is strictly shorter than the chunk,
     otherwise store the chunk raw (lzop reads stored_len == uncompressed_len
     as a raw block, and some LZO builds pad tiny or random inputs)
  3. Write uncompressed_len, stored_len, adler32(chunk), stored bytes

Blocks are emitted in payload order; a decoder rebuilds the payload by
concatenating them. An empty payload produces no blocks at all.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from lzopack._format.layout import BLOCK_HEADER_STRUCT, BLOCK_SIZE, adler32
from lzopack.buffers import Sink, append
from lzopack.errors import LzopError, WriteFailure

log = logging.getLogger(__name__)


def iter_chunks(data: bytes, block_size: int = BLOCK_SIZE) -> Iterator[memoryview]:
    """Yield successive chunks of at most ``block_size`` bytes, in order.

    ``data`` may be any bytes-like object; a non-contiguous view is copied
    first. The chunk size is ``min(block_size, len(data))``; the last chunk
    may be short. Nothing is yielded for empty input.
    """
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    view = memoryview(data)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    view = view.cast("B")
    total = len(view)
    step = min(block_size, total)
    offset = 0
    while offset < total:
        yield view[offset:offset + step]
        offset += step


def _compress_chunk(chunk: bytes, compress: Callable[[bytes], bytes]) -> bytes:
    """Run the compressor, turning any failure into WriteFailure."""
    try:
        result = compress(chunk)
    except LzopError:
        raise
    except Exception as e:
        raise WriteFailure(f"Compressor failed on a {len(chunk)}-byte block: {e}") from e

    if isinstance(result, bytes):
        return result
    if isinstance(result, (bytearray, memoryview)):
        return bytes(result)
    raise WriteFailure(f"Compressor returned {type(result).__name__}, expected bytes")


def write_blocks(sink: Sink, data: bytes, compress: Callable[[bytes], bytes]) -> int:
    """Append framed blocks for ``data`` to ``sink``. Returns the block count."""
    count = 0
    for view in iter_chunks(data):
        chunk = bytes(view)
        compressed = _compress_chunk(chunk, compress)

        if len(compressed) < len(chunk):
            stored = compressed
        else:
            log.debug(
                "Block %d: compressor returned %d bytes for %d, storing raw",
                count, len(compressed), len(chunk),
            )
            stored = chunk

        append(sink, BLOCK_HEADER_STRUCT.pack(len(chunk), len(stored), adler32(chunk)))
        append(sink, stored)
        count += 1
    return count


def encode_blocks(data: bytes, compress: Callable[[bytes], bytes]) -> bytes:
    """Frame ``data`` as LZOP blocks (no header, no end marker)."""
    out = bytearray()
    write_blocks(out, data, compress)
    return bytes(out)
