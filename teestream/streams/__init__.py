"""Streams package - the tee wrappers and their constructors."""

from .reader import TeeReader, TeeBufReader
from .writer import TeeWriter
from .seek import TeeSeek
from .extensions import (
    tee,
    tee_reader,
    tee_writer,
    tee_reader_dbg,
    tee_writer_dbg,
    is_buffered_reader,
)

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
    "is_buffered_reader",
]
