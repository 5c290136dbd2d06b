"""Readers that copy everything they hand out to a mirror.

TeeReader implements the raw primitives (readinto, read, readall, readline)
by delegating to the source's own methods, so a source's optimized paths are
used as-is. Each delegated call mirrors exactly the bytes it returns, once
and in order, before returning them. Everything else (readlines, iteration,
context management) comes from io.RawIOBase on top of those primitives.

If the mirror fails after the source produced data, the call raises the
mirror's error. For readinto() the bytes are already in the caller's buffer;
for read() they are lost to the caller. The mirror holds exactly the bytes
it accepted before failing.
"""

import errno
import io
from typing import Optional, Union

from teestream.core.errors import StreamRole, UnexpectedEOFError
from teestream.streams.base import TeeBase, read_into
from teestream.streams.seek import TeeSeek


class TeeReader(TeeSeek, TeeBase):
    """A reader which tees its input to a mirror.
    
    Args:
        source: Readable stream supplying the bytes.
        mirror: Writable stream receiving a copy of every byte read.
        owns_source: Close the source when the tee is closed.
        owns_mirror: Close the mirror when the tee is closed.
    """
    
    inner_role = StreamRole.SOURCE
    
    def __init__(self, source, mirror, *, owns_source: bool = True, owns_mirror: bool = False):
        super().__init__(source, mirror, owns_inner=owns_source, owns_mirror=owns_mirror)
    
    @property
    def source(self):
        return self._inner
    
    def readable(self) -> bool:
        self._require_inner()
        return True
    
    def readinto(self, b) -> Optional[int]:
        n = read_into(self._require_inner(), b)
        if n:
            self._mirror_bytes(memoryview(b).cast("B")[:n])
        return n
    
    def read(self, size: Optional[int] = -1) -> Optional[bytes]:
        if size is None or size < 0:
            return self.readall()
        
        data = self._require_inner().read(size)
        if data:
            self._mirror_bytes(data)
        return data
    
    def readall(self) -> Optional[bytes]:
        data = self._require_inner().read()
        if data:
            self._mirror_bytes(data)
        return data
    
    def readline(self, size: Optional[int] = -1) -> bytes:
        source = self._require_inner()
        if size is None:
            size = -1
        if not hasattr(source, "readline"):
            return super().readline(size)
        
        line = source.readline(size)
        if line:
            self._mirror_bytes(line)
        return line
    
    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes or raise UnexpectedEOFError.
        
        Bytes obtained before the source ran dry have already been mirrored.
        """
        buf = bytearray(n)
        view = memoryview(buf)
        got = 0
        while got < n:
            count = self.readinto(view[got:])
            if count is None:
                raise BlockingIOError(errno.EAGAIN, "source stream would block", got)
            if count == 0:
                raise UnexpectedEOFError("failed to fill whole buffer", expected=n, received=got)
            got += count
        return bytes(buf)
    
    def flush(self) -> None:
        self._require_inner()
        self._flush_mirror()


class TeeBufReader(TeeReader):
    """A TeeReader over a buffered source that mirrors only consumed bytes.
    
    fill_buffer() exposes the source's buffered bytes without mirroring
    them. consume(n) mirrors the first n of those bytes and then advances
    the source past them. Bytes that were peeked but never consumed do not
    reach the mirror, and bytes peeked more than once are mirrored once.
    
    The source must offer either fill_buffer()/consume() (another
    TeeBufReader, for instance) or peek() as io.BufferedReader does.
    """
    
    def __init__(self, source, mirror, *, owns_source: bool = True, owns_mirror: bool = False):
        super().__init__(source, mirror, owns_source=owns_source, owns_mirror=owns_mirror)
        self._pending = b""
    
    @property
    def pending(self) -> bytes:
        """Bytes returned by the last fill that are not yet consumed."""
        return self._pending
    
    def _after_seek(self) -> None:
        self._pending = b""
    
    def fill_buffer(self) -> bytes:
        source = self._require_inner()
        fill = getattr(source, "fill_buffer", None)
        if fill is not None:
            data = fill()
        else:
            peek = getattr(source, "peek", None)
            if peek is None:
                raise io.UnsupportedOperation("source stream has no buffer to fill")
            data = peek()
        
        self._pending = bytes(data)
        return self._pending
    
    def peek(self, size: int = 0) -> bytes:
        # size is a hint only, as with io.BufferedReader.peek
        return self.fill_buffer()
    
    def consume(self, amt: int) -> None:
        """Mirror the first ``amt`` pending bytes, then advance past them.
        
        The source advances even if the mirror fails partway, so a retry
        never hands the mirror the bytes it already accepted.
        """
        source = self._require_inner()
        if amt < 0 or amt > len(self._pending):
            raise ValueError(
                f"cannot consume {amt} bytes, {len(self._pending)} are buffered"
            )
        if amt == 0:
            return
        
        try:
            self._mirror_bytes(self._pending[:amt])
        finally:
            consume = getattr(source, "consume", None)
            if consume is not None:
                consume(amt)
            else:
                # Served from the source's buffer filled by peek()
                source.read(amt)
            self._pending = self._pending[amt:]
    
    def read_until(self, delimiter: Union[bytes, int] = b"\n") -> bytes:
        """Read up to and including ``delimiter`` or end of stream."""
        if isinstance(delimiter, int):
            delimiter = bytes([delimiter])
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single byte")
        
        out = bytearray()
        while True:
            available = self.fill_buffer()
            if not available:
                break
            
            index = available.find(delimiter)
            if index >= 0:
                self.consume(index + 1)
                out += available[:index + 1]
                break
            
            self.consume(len(available))
            out += available
        return bytes(out)
    
    def readinto(self, b) -> Optional[int]:
        self._pending = b""
        return super().readinto(b)
    
    def read(self, size: Optional[int] = -1) -> Optional[bytes]:
        self._pending = b""
        return super().read(size)
    
    def readall(self) -> Optional[bytes]:
        self._pending = b""
        return super().readall()
    
    def readline(self, size: Optional[int] = -1) -> bytes:
        self._pending = b""
        return super().readline(size)
    
    def read1(self, size: int = -1) -> Optional[bytes]:
        self._pending = b""
        source = self._require_inner()
        read1 = getattr(source, "read1", None)
        data = read1(size) if read1 is not None else source.read(size)
        if data:
            self._mirror_bytes(data)
        return data
