"""
Internal LZOP container engine.

Only the writer side exists: header serialization, block framing and
stream assembly. Reading .lzo files is left to lzop(1) and friends.

Format: lzop 1.03 header layout, method LZO1X, adler32 checksums
"""

from lzopack._format.layout import LZOP_MAGIC, END_MARKER, BLOCK_SIZE, HeaderFormat, DEFAULT_HEADER_FORMAT
from lzopack._format.header import build_header, write_header, header_size
from lzopack._format.blocks import encode_blocks, write_blocks, iter_chunks
from lzopack._format.writer import LzopWriter
