"""Custom exceptions for teestream.

Errors raised by the wrapped streams are never translated: they reach the
caller exactly as the source, primary or mirror raised them. The classes here
cover the conditions the wrappers detect themselves.
"""

from enum import Enum
from typing import Optional


class StreamRole(str, Enum):
    """Which side of a tee a stream plays."""
    SOURCE = "source"
    PRIMARY = "primary"
    MIRROR = "mirror"


class TeeError(Exception):
    """Base exception for all teestream errors.
    
    Provides:
    - User-friendly message
    - Technical details for debugging
    - Suggested fixes when applicable
    """
    
    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        suggestion: Optional[str] = None
    ):
        self.message = message
        self.details = details
        self.suggestion = suggestion
        super().__init__(message)
    
    def format_user_friendly(self) -> str:
        """Format error for display to user."""
        parts = [self.message]
        
        if self.details:
            parts.append(f"   Details: {self.details}")
        
        if self.suggestion:
            parts.append(f"   Try: {self.suggestion}")
        
        return "\n".join(parts)
    
    def __str__(self) -> str:
        return self.format_user_friendly()


class ShortWriteError(TeeError, OSError):
    """A sink accepted zero bytes while data was still pending."""
    
    def __init__(
        self,
        message: str,
        role: StreamRole = StreamRole.MIRROR,
        written: int = 0,
        **kwargs
    ):
        details = kwargs.pop("details", None)
        if not details:
            details = f"Stream: {role.value}, bytes written before stall: {written}"
        
        suggestion = kwargs.pop("suggestion", None)
        if not suggestion and role is StreamRole.MIRROR:
            suggestion = "Check that the mirror is open and not full"
        
        super().__init__(message, details=details, suggestion=suggestion, **kwargs)
        self.role = role
        self.written = written


class UnexpectedEOFError(TeeError, EOFError):
    """The source ended before the requested number of bytes arrived."""
    
    def __init__(self, message: str, expected: int = 0, received: int = 0, **kwargs):
        details = kwargs.pop("details", None)
        if not details:
            details = f"Expected {expected} bytes, received {received}"
        
        super().__init__(message, details=details, **kwargs)
        self.expected = expected
        self.received = received


def format_exception_chain(error: BaseException, max_depth: int = 5) -> str:
    """Format an exception chain for display.
    
    Useful when a mirror failure was raised while handling a source error,
    or when a wrapped stream chains its own causes.
    """
    lines = []
    current = error
    depth = 0
    
    while current and depth < max_depth:
        if isinstance(current, TeeError):
            lines.append(current.format_user_friendly())
        else:
            lines.append(f"{type(current).__name__}: {current}")
        
        current = current.__cause__ or current.__context__
        depth += 1
        
        if current:
            lines.append("   Caused by:")
    
    return "\n".join(lines)
