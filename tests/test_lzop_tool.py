"""
Interop tests — streams must decompress with the real lzop(1).

Skipped unless the ``lzop`` binary is on PATH. Uses ``lzop -d`` on a file
written by LzopWriter and compares the extracted bytes with the input.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import time

import pytest

from lzopack import LzopWriter, ScratchBuffers, compress_data_with_buffers
from lzopack._format.layout import BLOCK_SIZE
from lzopack.compressors import store

try:
    import lzo  # noqa: F401
    HAS_LZO = True
except ImportError:
    HAS_LZO = False

LZOP = shutil.which("lzop")

pytestmark = pytest.mark.skipif(LZOP is None, reason="lzop binary not installed")

SIZES = [
    0,
    1,
    256,
    1024,
    BLOCK_SIZE,
    BLOCK_SIZE + 1,
    BLOCK_SIZE * 2,
    BLOCK_SIZE * 4 + 12345,
]


def _payload(size: int) -> bytes:
    # Half text, half random, so LZO1X both compresses and falls back
    text = (b"lorem ipsum dolor sit amet " * (size // 27 + 1))[: size // 2]
    return text + os.urandom(size - len(text))


def _lzop_decompress(path) -> bytes:
    """Run lzop -d next to ``path`` and return the extracted file's bytes."""
    result = subprocess.run(
        [LZOP, "-d", "-f", str(path)],
        cwd=path.parent,
        capture_output=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr.decode(errors="replace")
    out = path.with_suffix("")
    return out.read_bytes()


@pytest.mark.parametrize("size", SIZES)
def test_store_roundtrip(tmp_path, size):
    data = _payload(size)
    path = tmp_path / "sample.bin.lzo"
    LzopWriter.write(str(path), data, store, file_time=int(time.time()))
    assert _lzop_decompress(path) == data


@pytest.mark.skipif(not HAS_LZO, reason="python-lzo not installed")
@pytest.mark.parametrize("size", SIZES)
def test_lzo1x_roundtrip(tmp_path, size):
    from lzopack.compressors import lzo1x_1

    data = _payload(size)
    path = tmp_path / "sample.bin.lzo"
    LzopWriter.write(str(path), data, lzo1x_1, file_time=int(time.time()))
    assert _lzop_decompress(path) == data


@pytest.mark.skipif(not HAS_LZO, reason="python-lzo not installed")
def test_reused_buffers_roundtrip(tmp_path):
    from lzopack.compressors import lzo1x_1

    buffers = ScratchBuffers()
    for i, size in enumerate([BLOCK_SIZE * 3, 256, BLOCK_SIZE + 1, 0]):
        data = _payload(size)
        stream = compress_data_with_buffers(buffers, data, f"f{i}", lzo1x_1, file_time=0)
        path = tmp_path / f"f{i}.lzo"
        path.write_bytes(stream)
        assert _lzop_decompress(path) == data


def test_lzop_test_mode_accepts_empty(tmp_path):
    path = tmp_path / "empty.lzo"
    LzopWriter.write(str(path), b"", store, file_time=0)
    result = subprocess.run([LZOP, "-t", str(path)], capture_output=True, timeout=60)
    assert result.returncode == 0, result.stderr.decode(errors="replace")
