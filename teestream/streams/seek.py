"""Positioning support for tees whose inner stream is seekable.

Seeks go to the source or primary alone. The mirror is an append-only record
of the bytes seen through the tee, so it is never repositioned or truncated.
"""

import io


class TeeSeek:
    """Mixin forwarding seekable()/seek()/tell() to the inner stream."""
    
    def _after_seek(self) -> None:
        pass
    
    def seekable(self) -> bool:
        inner = self._require_inner()
        seekable = getattr(inner, "seekable", None)
        if seekable is not None:
            return bool(seekable())
        return hasattr(inner, "seek")
    
    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        inner = self._require_inner()
        if not self.seekable():
            raise io.UnsupportedOperation(f"{self.inner_role.value} stream is not seekable")
        
        position = inner.seek(offset, whence)
        self._after_seek()
        if position is None:
            position = inner.tell()
        return position
    
    def tell(self) -> int:
        inner = self._require_inner()
        tell = getattr(inner, "tell", None)
        if tell is None:
            raise io.UnsupportedOperation(f"{self.inner_role.value} stream does not report its position")
        return tell()
