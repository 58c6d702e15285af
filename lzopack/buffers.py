"""
Scratch sinks for repeated encodes.

A ``ScratchBuffers`` is owned by the caller and handed to
``LzopWriter.serialize_into`` on every call. The writer rewinds its cursor
before touching it and only writes forward from there, so nothing left over
from a previous call can leak into the next stream. The backing
``bytearray`` keeps its high-water size between calls; bytes past the
cursor are stale and never read.

Usage:
    buffers = ScratchBuffers()
    for name, payload in items:
        out = LzopWriter.serialize_into(buffers, payload, name, lzo1x_1)
        sink.write(out)   # out is a view of buffers.output, valid until the next call
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Union

from lzopack.errors import WriteFailure

# Anything the writer can append to
Sink = Union[bytearray, BinaryIO, "ScratchBuffers"]


def append(sink: Sink, data: bytes) -> int:
    """Append ``data`` to a growable sink. Returns the number of bytes appended.

    Accepts a ``bytearray``, a ``ScratchBuffers`` or a writable binary
    stream. Any failure to grow the sink is raised as ``WriteFailure``.
    """
    try:
        if isinstance(sink, bytearray):
            sink.extend(data)
        else:
            sink.write(data)
    except (MemoryError, BufferError, ValueError, OSError) as e:
        raise WriteFailure(f"Sink rejected a {len(data)}-byte write: {e}") from e
    return len(data)


class ScratchBuffers:
    """A reusable output buffer with a write cursor.

    ``output`` is the backing store and ``length`` the number of valid bytes
    in it. Rewinding only moves the cursor, so capacity built up by a large
    encode is reused by the following ones.

    Not thread-safe to share. Concurrent or re-entrant use of one instance
    is refused with ``WriteFailure`` rather than interleaving writes.
    """

    def __init__(self) -> None:
        self.output = bytearray()
        self.length = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return len(self.output)

    @property
    def in_use(self) -> bool:
        return self._lock.locked()

    def reset(self) -> None:
        """Rewind to empty. The backing store is kept."""
        self.length = 0

    def write(self, data: bytes) -> int:
        """Write ``data`` at the cursor, growing the backing store if needed."""
        n = len(data)
        end = self.length + n
        try:
            self.output[self.length:end] = data
        except BufferError:
            # A previous result still holds a view; move to a fresh store
            # instead of resizing under it
            fresh = bytearray(self.output[:self.length])
            fresh += data
            self.output = fresh
        self.length = end
        return n

    def view(self) -> memoryview:
        """The bytes written since the last reset."""
        return memoryview(self.output)[:self.length]

    @contextmanager
    def acquire(self) -> Iterator[ScratchBuffers]:
        """Hold the buffers for one encode. The cursor is rewound on entry."""
        if not self._lock.acquire(blocking=False):
            raise WriteFailure("Scratch buffers are already in use by another encode")
        try:
            self.reset()
            yield self
        finally:
            self._lock.release()
