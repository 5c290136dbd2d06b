"""Convenience constructors that attach a mirror to an existing stream.

None of these touch either stream; they only build the wrapper.
"""

import sys
from typing import Optional

from teestream.config import get_config
from teestream.streams.reader import TeeBufReader, TeeReader
from teestream.streams.writer import TeeWriter


def is_buffered_reader(stream) -> bool:
    """Whether ``stream`` exposes a buffer a TeeBufReader can work with."""
    if hasattr(stream, "fill_buffer") and hasattr(stream, "consume"):
        return True
    return hasattr(stream, "peek")


def _supports(stream, capability: str, fallback: str) -> bool:
    check = getattr(stream, capability, None)
    if callable(check):
        return bool(check())
    return hasattr(stream, fallback)


def tee_reader(
    source,
    mirror,
    *,
    buffered: Optional[bool] = None,
    owns_source: bool = True,
    owns_mirror: bool = False
) -> TeeReader:
    """Mirror everything read from ``source`` into ``mirror``.
    
    Returns a TeeBufReader when the source is buffered (detected
    automatically unless ``buffered`` is given), otherwise a TeeReader.
    """
    if buffered is None:
        buffered = is_buffered_reader(source)
    
    cls = TeeBufReader if buffered else TeeReader
    return cls(source, mirror, owns_source=owns_source, owns_mirror=owns_mirror)


def tee_writer(primary, mirror, *, owns_primary: bool = True, owns_mirror: bool = False) -> TeeWriter:
    """Mirror everything written to ``primary`` into ``mirror``."""
    return TeeWriter(primary, mirror, owns_primary=owns_primary, owns_mirror=owns_mirror)


def tee(
    stream,
    mirror,
    *,
    mode: Optional[str] = None,
    owns_stream: bool = True,
    owns_mirror: bool = False
):
    """Attach ``mirror`` to ``stream``, picking a reader or writer tee.
    
    Args:
        stream: Existing stream to wrap.
        mirror: Destination for the duplicated bytes.
        mode: "r" or "w". Required when the stream is both readable and
            writable, such as io.BytesIO.
        owns_stream: Close ``stream`` when the tee is closed.
        owns_mirror: Close ``mirror`` when the tee is closed.
    """
    if mode is None:
        readable = _supports(stream, "readable", "read")
        writable = _supports(stream, "writable", "write")
        if readable == writable:
            raise ValueError(
                "cannot tell whether to tee reads or writes; pass mode='r' or mode='w'"
            )
        mode = "r" if readable else "w"
    
    if mode == "r":
        return tee_reader(stream, mirror, owns_source=owns_stream, owns_mirror=owns_mirror)
    if mode == "w":
        return tee_writer(stream, mirror, owns_primary=owns_stream, owns_mirror=owns_mirror)
    raise ValueError(f"invalid mode: {mode!r}")


def debug_sink():
    """The binary side of the configured process stream (stderr by default)."""
    stream = getattr(sys, get_config().debug.stream)
    return getattr(stream, "buffer", stream)


def tee_reader_dbg(source, *, buffered: Optional[bool] = None, owns_source: bool = True) -> TeeReader:
    """Echo everything read from ``source`` to the debug stream."""
    return tee_reader(source, debug_sink(), buffered=buffered, owns_source=owns_source, owns_mirror=False)


def tee_writer_dbg(primary, *, owns_primary: bool = True) -> TeeWriter:
    """Echo everything written to ``primary`` to the debug stream."""
    return tee_writer(primary, debug_sink(), owns_primary=owns_primary, owns_mirror=False)
