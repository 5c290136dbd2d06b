"""teestream - readers and writers that mirror their bytes to a second stream."""

from .core.errors import TeeError, ShortWriteError, UnexpectedEOFError, StreamRole
from .streams import (
    TeeReader,
    TeeBufReader,
    TeeWriter,
    TeeSeek,
    tee,
    tee_reader,
    tee_writer,
    tee_reader_dbg,
    tee_writer_dbg,
)

__version__ = "0.1.0"

__all__ = [
    "TeeReader",
    "TeeBufReader",
    "TeeWriter",
    "TeeSeek",
    "tee",
    "tee_reader",
    "tee_writer",
    "tee_reader_dbg",
    "tee_writer_dbg",
    "TeeError",
    "ShortWriteError",
    "UnexpectedEOFError",
    "StreamRole",
]
