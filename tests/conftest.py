"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

# Add project root to Python path so 'teestream' is importable without install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import errno
import io
import tempfile
from typing import Generator
import pytest

from teestream.config import reset_config
from teestream.core.logging import reset_logging


class LimitedSink(io.RawIOBase):
    """Accepts ``limit`` bytes in total, then raises ENOSPC."""
    
    def __init__(self, limit: int):
        super().__init__()
        self.data = bytearray()
        self.limit = limit
    
    def writable(self):
        return True
    
    def write(self, b):
        room = self.limit - len(self.data)
        if room <= 0:
            raise OSError(errno.ENOSPC, "sink full")
        chunk = bytes(b[:room])
        self.data += chunk
        return len(chunk)


class ChunkySink(io.RawIOBase):
    """Accepts at most ``per_write`` bytes per write() call."""
    
    def __init__(self, per_write: int):
        super().__init__()
        self.data = bytearray()
        self.per_write = per_write
        self.calls = 0
    
    def writable(self):
        return True
    
    def write(self, b):
        self.calls += 1
        chunk = bytes(b[:self.per_write])
        self.data += chunk
        return len(chunk)


class StalledSink(io.RawIOBase):
    """Never accepts anything."""
    
    def writable(self):
        return True
    
    def write(self, b):
        return 0


class CallRecorder:
    """Duck-typed stream that records every method called on it."""
    
    def __init__(self):
        self.calls = []
    
    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)
        
        def method(*args, **kwargs):
            self.calls.append(name)
            return 0
        return method


class FlushRecorder(io.BytesIO):
    """BytesIO that logs flushes into a shared event list."""
    
    def __init__(self, label: str, events: list, fail: bool = False):
        super().__init__()
        self.label = label
        self.events = events
        self.fail = fail
    
    def flush(self):
        if self.fail:
            raise OSError(f"{self.label} flush failed")
        self.events.append(self.label)
        super().flush()


@pytest.fixture(autouse=True)
def clean_globals():
    """Reset global config and logging between tests."""
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_data() -> bytes:
    return b"The quick brown fox\njumps over\nthe lazy dog\n"


@pytest.fixture
def mirror() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def buffered_source(sample_data: bytes) -> io.BufferedReader:
    """A buffered reader with a small buffer so fills happen often."""
    return io.BufferedReader(io.BytesIO(sample_data), buffer_size=8)


@pytest.fixture
def limited_sink():
    return LimitedSink


@pytest.fixture
def chunky_sink():
    return ChunkySink


@pytest.fixture
def stalled_sink():
    return StalledSink


@pytest.fixture
def call_recorder():
    return CallRecorder


@pytest.fixture
def flush_recorder():
    return FlushRecorder
