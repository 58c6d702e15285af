"""
lzopack — write LZOP containers from in-memory payloads.

Architecture:
    _format/header.py   magic-less metadata header + adler32 checksum
    _format/blocks.py   256 KiB blocks, compress-or-store, per-block framing
    _format/writer.py   magic + header + blocks + terminator
    buffers.py          reusable scratch sinks for repeated encodes
    compressors.py      pluggable block compressors (store, LZO1X-1)
"""

__version__ = "0.1.0"

# CLI defaults
DEFAULT_SUFFIX = ".lzo"
DEFAULT_CONFIG_DIR = ".lzopack"
DEFAULT_CONFIG_NAME = "config.toml"

from lzopack.errors import LzopError, InvalidFileName, WriteFailure, CompressorUnavailable  # noqa: E402
from lzopack.buffers import ScratchBuffers  # noqa: E402
from lzopack._format.writer import (  # noqa: E402
    LzopWriter,
    compress_data,
    compress_data_with_buffers,
    encoded_size_bound,
    fixed_overhead,
)

__all__ = [
    "LzopError",
    "InvalidFileName",
    "WriteFailure",
    "CompressorUnavailable",
    "ScratchBuffers",
    "LzopWriter",
    "compress_data",
    "compress_data_with_buffers",
    "encoded_size_bound",
    "fixed_overhead",
]
