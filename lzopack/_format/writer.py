"""
Writer — assembles complete LZOP streams.

Stream order is fixed:
  magic + header + blocks + end marker

Two modes:
  - serialize():      fresh buffer per call, returns bytes
  - serialize_into(): caller-owned ScratchBuffers, rewound then written to,
                      for encoding many payloads without reallocating
"""

from __future__ import annotations

import logging
import os
import tempfile
import time

from lzopack._format.blocks import write_blocks
from lzopack._format.header import header_size, write_header
from lzopack._format.layout import (
    BLOCK_HEADER_SIZE,
    BLOCK_SIZE,
    DEFAULT_HEADER_FORMAT,
    END_MARKER,
    LZOP_MAGIC,
    HeaderFormat,
)
from lzopack.buffers import ScratchBuffers, Sink, append
from lzopack.compressors import Compressor
from lzopack.errors import WriteFailure

log = logging.getLogger(__name__)


def fixed_overhead() -> int:
    """Bytes every stream carries regardless of header or payload: magic + end marker."""
    return len(LZOP_MAGIC) + len(END_MARKER)


def encoded_size_bound(data_len: int, file_name: str | bytes = "") -> int:
    """Largest stream ``data_len`` payload bytes can produce.

    Blocks never grow past their raw size, so the bound is the payload plus
    one block header per block.
    """
    blocks = -(-data_len // BLOCK_SIZE)
    return fixed_overhead() + header_size(file_name) + blocks * BLOCK_HEADER_SIZE + data_len


def _resolve_time(file_time: int | None) -> int:
    return int(time.time()) if file_time is None else int(file_time)


def _discard(tmp_path: str) -> None:
    try:
        os.unlink(tmp_path)
    except OSError:
        pass


class LzopWriter:

    @staticmethod
    def _write_stream(
        out: Sink,
        data: bytes,
        file_name: str | bytes,
        compress: Compressor,
        file_time: int,
        fmt: HeaderFormat,
    ) -> int:
        """Write magic + header + blocks + end marker into ``out``."""
        append(out, LZOP_MAGIC)
        write_header(out, file_time, file_name, fmt)
        blocks = write_blocks(out, data, compress)
        append(out, END_MARKER)

        log.debug(
            "Encoded %d bytes as %d block(s) for %r",
            len(data), blocks, file_name,
        )
        return blocks

    @staticmethod
    def serialize(
        data: bytes,
        file_name: str | bytes,
        compress: Compressor,
        file_time: int | None = None,
        fmt: HeaderFormat = DEFAULT_HEADER_FORMAT,
    ) -> bytes:
        """Encode ``data`` as a complete LZOP stream in a fresh buffer."""
        out = bytearray()
        LzopWriter._write_stream(out, data, file_name, compress, _resolve_time(file_time), fmt)
        return bytes(out)

    @staticmethod
    def serialize_into(
        buffers: ScratchBuffers,
        data: bytes,
        file_name: str | bytes,
        compress: Compressor,
        file_time: int | None = None,
        fmt: HeaderFormat = DEFAULT_HEADER_FORMAT,
    ) -> memoryview:
        """Encode into caller-owned scratch buffers.

        The buffers are rewound first and keep their capacity. Returns a
        view of ``buffers.output`` covering the stream, valid until the
        buffers are used again. On error the buffers hold partial data.
        """
        with buffers.acquire():
            LzopWriter._write_stream(
                buffers, data, file_name, compress, _resolve_time(file_time), fmt,
            )
            return buffers.view()

    @staticmethod
    def write(
        path: str,
        data: bytes,
        compress: Compressor,
        file_name: str | bytes | None = None,
        file_time: int | None = None,
        mode: int = 0o644,
    ) -> int:
        """Write an LZOP file atomically. Returns bytes written.

        ``file_name`` defaults to the basename of ``path`` minus a ``.lzo`` suffix.
        """
        if file_name is None:
            base = os.path.basename(path)
            file_name = base[:-4] if base.endswith(".lzo") else base

        stream = LzopWriter.serialize(data, file_name, compress, file_time)

        dir_name = os.path.dirname(os.path.abspath(path)) or "."
        try:
            fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".lzo.tmp")
        except OSError as e:
            raise WriteFailure(f"Cannot create temp file in {dir_name}: {e}") from e
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(stream)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
        except OSError as e:
            _discard(tmp_path)
            raise WriteFailure(f"Failed to write {path}: {e}") from e
        except BaseException:
            _discard(tmp_path)
            raise
        return len(stream)


def compress_data(
    data: bytes,
    file_name: str | bytes,
    compress: Compressor,
    file_time: int | None = None,
) -> bytes:
    """Encode ``data`` as an LZOP stream. Allocates a new buffer."""
    return LzopWriter.serialize(data, file_name, compress, file_time)


def compress_data_with_buffers(
    buffers: ScratchBuffers,
    data: bytes,
    file_name: str | bytes,
    compress: Compressor,
    file_time: int | None = None,
) -> memoryview:
    """Encode ``data`` reusing ``buffers``. Returns a view of ``buffers.output``."""
    return LzopWriter.serialize_into(buffers, data, file_name, compress, file_time)
