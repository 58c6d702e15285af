"""
Block compressors.

A compressor is any ``Callable[[bytes], bytes]``. The block encoder keeps
its output only when it is shorter than the input, so a compressor is free
to return garbage-sized results; it just must not return invalid LZO1X data
shorter than the input.

The `python-lzo` package is lazily imported — a missing dependency produces
a clear error message when ``lzo1x_1`` is first used, not at import time.

Install with: pip install lzopack[lzo]
"""

from __future__ import annotations

from typing import Callable

from lzopack.errors import CompressorUnavailable

Compressor = Callable[[bytes], bytes]

# python-lzo level 1 selects lzo1x_1_compress
_LZO_LEVEL = 1


def _import_lzo():
    """Lazily import python-lzo.

    Raises CompressorUnavailable with a helpful message if not installed.
    """
    try:
        import lzo

        return lzo
    except ImportError as e:
        raise CompressorUnavailable(
            "python-lzo is required for LZO1X compression. "
            "Install with: pip install lzopack[lzo]"
        ) from e


def store(data: bytes) -> bytes:
    """Identity compressor. Every block ends up stored raw."""
    return data


def lzo1x_1(data: bytes) -> bytes:
    """Raw LZO1X-1 (no python-lzo length header)."""
    lzo = _import_lzo()
    return lzo.compress(data, _LZO_LEVEL, False)


COMPRESSORS: dict[str, Compressor] = {
    "store": store,
    "lzo1x_1": lzo1x_1,
}

# Import check for each compressor's backend; None means pure Python
BACKENDS: dict[str, Callable[[], object] | None] = {
    "store": None,
    "lzo1x_1": _import_lzo,
}


def get_compressor(name: str) -> Compressor:
    """Look up a compressor by name. Raises ValueError for unknown names."""
    try:
        return COMPRESSORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown compressor {name!r} (choose from: {', '.join(sorted(COMPRESSORS))})"
        ) from None


def available_compressors() -> dict[str, bool]:
    """Map each compressor name to whether its backend can be imported."""
    result = {}
    for name in sorted(COMPRESSORS):
        probe = BACKENDS.get(name)
        if probe is None:
            result[name] = True
            continue
        try:
            probe()
            result[name] = True
        except CompressorUnavailable:
            result[name] = False
    return result
