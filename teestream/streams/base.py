"""Shared plumbing for the tee wrappers.

Every wrapper holds one "inner" stream (the source of a reader, the primary
of a writer) plus a mirror. Both are plain constructor arguments; whether the
wrapper closes them is decided per stream at construction.
"""

import errno
import io
from typing import Optional

from teestream.core.errors import ShortWriteError, StreamRole
from teestream.core.logging import get_logger

logger = get_logger("streams")


def write_all(stream, data, role: StreamRole = StreamRole.MIRROR) -> None:
    """Write every byte of ``data`` to ``stream``.

    Raw streams may accept only part of a buffer, so the remainder is
    offered again until nothing is left. A stream that accepts zero bytes
    raises ShortWriteError; a non-blocking stream with no room raises
    BlockingIOError carrying the count already written.
    """
    data = bytes(data)
    total = len(data)
    written = 0
    while written < total:
        n = stream.write(data[written:] if written else data)
        if n is None:
            raise BlockingIOError(errno.EAGAIN, f"{role.value} stream would block", written)
        if n == 0:
            raise ShortWriteError("failed to write whole buffer", role=role, written=written)
        written += n


def read_into(stream, b) -> Optional[int]:
    """Fill ``b`` from ``stream``, preferring the stream's own readinto()."""
    readinto = getattr(stream, "readinto", None)
    if readinto is not None:
        return readinto(b)
    
    view = memoryview(b).cast("B")
    data = stream.read(len(view))
    if data is None:
        return None
    n = len(data)
    view[:n] = data
    return n


def flush_open(stream) -> None:
    """Flush ``stream`` unless it has already been closed by its owner."""
    if getattr(stream, "closed", False):
        return
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


class TeeBase(io.RawIOBase):
    """Common state, lifecycle and mirroring for TeeReader and TeeWriter."""
    
    inner_role = StreamRole.SOURCE
    
    def __init__(self, inner, mirror, *, owns_inner: bool = True, owns_mirror: bool = False):
        super().__init__()
        self._inner = inner
        self._mirror = mirror
        self._owns_inner = owns_inner
        self._owns_mirror = owns_mirror
    
    @property
    def mirror(self):
        return self._mirror
    
    @property
    def detached(self) -> bool:
        return self._inner is None
    
    def _require_inner(self):
        """Return the inner stream, raising ValueError once closed or detached."""
        if self._inner is None:
            raise ValueError("underlying stream has been detached")
        if self.closed:
            raise ValueError("I/O operation on closed tee")
        return self._inner
    
    def _mirror_bytes(self, data) -> None:
        try:
            write_all(self._mirror, data, StreamRole.MIRROR)
        except Exception as exc:
            logger.mirror_failed(type(self).__name__, len(data), exc)
            raise
    
    def _flush_mirror(self) -> None:
        flush_open(self._mirror)
    
    def isatty(self) -> bool:
        inner = self._require_inner()
        isatty = getattr(inner, "isatty", None)
        return bool(isatty()) if isatty is not None else False
    
    def close(self) -> None:
        """Flush, then close whichever wrapped streams this tee owns."""
        if self.closed:
            return
        
        inner, mirror = self._inner, self._mirror
        released = []
        try:
            super().close()
        finally:
            try:
                if self._owns_inner and inner is not None:
                    inner.close()
                    released.append(self.inner_role.value)
            finally:
                if self._owns_mirror and mirror is not None and mirror is not inner:
                    mirror.close()
                    released.append(StreamRole.MIRROR.value)
        
        logger.closed(type(self).__name__, released)
    
    def detach(self):
        """Flush and hand back the wrapped streams without closing them.
        
        The wrapper is unusable afterwards.
        """
        self._require_inner()
        self.flush()
        
        inner, mirror = self._inner, self._mirror
        self._owns_inner = self._owns_mirror = False
        super().close()
        self._inner = self._mirror = None
        
        logger.detached(type(self).__name__)
        return inner, mirror
    
    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.inner_role.value}={self._inner!r} "
            f"mirror={self._mirror!r}>"
        )
