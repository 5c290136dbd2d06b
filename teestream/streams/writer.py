"""Writers that duplicate every accepted byte to a mirror.

The primary always goes first. Whatever part of the buffer it accepts is
then written to the mirror in full. If the primary raises, the mirror is
left untouched for that call. If the mirror raises, the primary already
holds the bytes even though the call reports failure.
"""

from typing import Iterable, Optional

from teestream.core.errors import StreamRole
from teestream.streams.base import TeeBase, flush_open, write_all
from teestream.streams.seek import TeeSeek


class TeeWriter(TeeSeek, TeeBase):
    """A writer which tees its output to a mirror.
    
    Args:
        primary: Writable stream whose result is reported to the caller.
        mirror: Writable stream receiving a copy of every accepted byte.
        owns_primary: Close the primary when the tee is closed.
        owns_mirror: Close the mirror when the tee is closed.
    
    A primary whose write() returns None is treated as a non-blocking raw
    stream that accepted nothing.
    """
    
    inner_role = StreamRole.PRIMARY
    
    def __init__(self, primary, mirror, *, owns_primary: bool = True, owns_mirror: bool = False):
        super().__init__(primary, mirror, owns_inner=owns_primary, owns_mirror=owns_mirror)
    
    @property
    def primary(self):
        return self._inner
    
    def writable(self) -> bool:
        self._require_inner()
        return True
    
    def write(self, b) -> Optional[int]:
        n = self._require_inner().write(b)
        if n:
            self._mirror_bytes(memoryview(b).cast("B")[:n])
        return n
    
    def write_all(self, b) -> None:
        """Write the whole buffer to the primary, then to the mirror."""
        write_all(self._require_inner(), b, StreamRole.PRIMARY)
        self._mirror_bytes(b)
    
    def writelines(self, lines: Iterable[bytes]) -> None:
        for line in lines:
            self.write_all(line)
    
    def flush(self) -> None:
        flush_open(self._require_inner())
        self._flush_mirror()
