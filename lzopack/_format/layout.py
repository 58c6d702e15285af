"""
LZOP container layout, as written by lzop 1.03.

Layout (all integers big-endian):
    89 4C 5A 4F 00 0D 0A 1A 0A   <- Magic (9 bytes, not checksummed)
    version            u16       <- 0x1030
    lib_version        u16       <- 0x2080
    version_needed     u16       <- 0x0940
    method             u8        <- 2 (LZO1X)
    level              u8        <- 1
    flags              u32       <- F_OS_UNIX | F_ADLER32_D
    mode               u32       <- 0100664
    mtime_low          u32       <- caller-supplied
    mtime_high         u32       <- always 0
    name_len           u8        <- 0..255
    name               bytes     <- not NUL-terminated
    header_checksum    u32       <- adler32(version .. name)
    [block]*                     <- see below
    00 00 00 00                  <- End marker (a block with zero length)

Block:
    uncompressed_len   u32
    stored_len         u32       <- == uncompressed_len means stored raw
    adler32            u32       <- of the uncompressed bytes (F_ADLER32_D)
    data               bytes

Decoders treat stored_len == uncompressed_len as a raw block and
stored_len < uncompressed_len as LZO1X data, so a block is only emitted
compressed when compression actually made it shorter.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass

# Magic bytes - first 9 bytes of every .lzo file
LZOP_MAGIC = b"\x89LZO\x00\r\n\x1a\n"

# A zero uncompressed length terminates the block list
END_MARKER = b"\x00\x00\x00\x00"

# Payload is split into blocks of this many bytes (lzop's default)
BLOCK_SIZE = 256 * 1024

# Method ids
M_LZO1X_1 = 1
M_LZO1X_1_15 = 2
M_LZO1X_999 = 3

# Header flags
F_ADLER32_D = 0x00000001
F_ADLER32_C = 0x00000002
F_OS_UNIX = 0x03000000

# Field limits
MAX_NAME_LENGTH = 255
MAX_U32 = 0xFFFFFFFF

# Header struct: version, lib_version, version_needed, method, level,
# flags, mode, mtime_low, mtime_high, name_len. The name and checksum follow.
HEADER_STRUCT = struct.Struct(">HHHBBIIIIB")

# Per-block framing: uncompressed_len, stored_len, adler32
BLOCK_HEADER_STRUCT = struct.Struct(">III")
BLOCK_HEADER_SIZE = BLOCK_HEADER_STRUCT.size

CHECKSUM_STRUCT = struct.Struct(">I")


@dataclass(frozen=True)
class HeaderFormat:
    """The fixed header fields, kept together so the format is auditable in one place.

    Attributes:
        version: lzop program version that "wrote" the file.
        lib_version: LZO library version.
        version_needed: Minimum lzop version able to extract the file.
        method: Compression method id (2 = LZO1X).
        level: Compression level recorded in the header.
        flags: Header flag bitmask; F_ADLER32_D selects per-block adler32.
        mode: Unix file mode restored by lzop -d.
    """

    version: int = 0x1030
    lib_version: int = 0x2080
    version_needed: int = 0x0940
    method: int = M_LZO1X_1_15
    level: int = 1
    flags: int = F_OS_UNIX | F_ADLER32_D
    mode: int = 0o100664


DEFAULT_HEADER_FORMAT = HeaderFormat()


def adler32(data: bytes) -> int:
    """Adler-32 of ``data`` as an unsigned 32-bit int."""
    return zlib.adler32(data) & MAX_U32
