"""
Header builder — the metadata record that follows the magic.

The header checksum is adler32 over the header bytes only. The magic is
written by the stream writer and must stay out of the checksum: lzop -d
rejects files whose checksum covers it ("header corrupted").
"""

from __future__ import annotations

from lzopack._format.layout import (
    CHECKSUM_STRUCT,
    DEFAULT_HEADER_FORMAT,
    HEADER_STRUCT,
    MAX_NAME_LENGTH,
    MAX_U32,
    HeaderFormat,
    adler32,
)
from lzopack.buffers import Sink, append
from lzopack.errors import InvalidFileName


def encode_file_name(file_name: str | bytes) -> bytes:
    """Encode a filename for the header. Raises InvalidFileName if it can't fit."""
    if isinstance(file_name, str):
        try:
            raw = file_name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidFileName(f"Filename is not UTF-8 encodable: {file_name!r}") from e
    elif isinstance(file_name, (bytes, bytearray, memoryview)):
        raw = bytes(file_name)
    else:
        raise InvalidFileName(f"Filename must be str or bytes, got {type(file_name).__name__}")

    if len(raw) > MAX_NAME_LENGTH:
        raise InvalidFileName(
            f"Filename too long: {len(raw)} bytes (max {MAX_NAME_LENGTH})"
        )
    return raw


def header_size(file_name: str | bytes) -> int:
    """Size in bytes of the header for ``file_name``, checksum included."""
    return HEADER_STRUCT.size + len(encode_file_name(file_name)) + CHECKSUM_STRUCT.size


def build_header(
    file_time: int,
    file_name: str | bytes,
    fmt: HeaderFormat = DEFAULT_HEADER_FORMAT,
) -> bytes:
    """Serialize the header record: fixed fields, filename, adler32.

    ``file_time`` is stored in the 32-bit mtime_low field, truncated like a
    C uint32 cast. mtime_high is always 0.
    """
    name = encode_file_name(file_name)
    fields = HEADER_STRUCT.pack(
        fmt.version,
        fmt.lib_version,
        fmt.version_needed,
        fmt.method,
        fmt.level,
        fmt.flags,
        fmt.mode,
        int(file_time) & MAX_U32,
        0,  # mtime_high
        len(name),
    )
    body = fields + name
    return body + CHECKSUM_STRUCT.pack(adler32(body))


def write_header(
    sink: Sink,
    file_time: int,
    file_name: str | bytes,
    fmt: HeaderFormat = DEFAULT_HEADER_FORMAT,
) -> int:
    """Append the header record to ``sink``. Returns bytes written."""
    return append(sink, build_header(file_time, file_name, fmt))
