"""Core package - errors and logging."""

from .errors import TeeError, ShortWriteError, UnexpectedEOFError, StreamRole
from .logging import setup_logging, get_logger

__all__ = [
    "TeeError",
    "ShortWriteError",
    "UnexpectedEOFError",
    "StreamRole",
    "setup_logging",
    "get_logger",
]
