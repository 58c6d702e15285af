"""Exceptions raised while building LZOP streams."""

from __future__ import annotations


class LzopError(Exception):
    """Base class for lzopack errors."""


class InvalidFileName(LzopError, ValueError):
    """Filename cannot be stored in the one-byte length field."""


class WriteFailure(LzopError):
    """A byte sink or the block compressor failed mid-encode.

    The encode is aborted; any supplied scratch buffers hold unspecified data.
    """


class CompressorUnavailable(LzopError, ImportError):
    """The requested compressor backend is not installed."""
