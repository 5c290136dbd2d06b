"""Structured logging for teestream.

Provides JSON-formatted logs with file and console output. The library
itself only emits records; nothing is printed until setup_logging() runs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from logging.handlers import RotatingFileHandler

from colorama import Fore, Style

# Record attributes promoted out of extra_data
CONTEXT_FIELDS = ("component", "wrapper", "role", "nbytes")


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""
    
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        
        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)
        
        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console formatter for human-readable output."""
    
    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA,
    }
    RESET = Style.RESET_ALL
    
    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now().strftime("%H:%M:%S")
        
        prefix = f"{color}[{timestamp}] {record.levelname:8}{self.RESET}"
        
        if hasattr(record, "component"):
            prefix += f" [{record.component}]"
        
        message = record.getMessage()
        
        extras = []
        if hasattr(record, "wrapper"):
            extras.append(f"wrapper={record.wrapper}")
        if hasattr(record, "role"):
            extras.append(f"role={record.role}")
        if hasattr(record, "nbytes"):
            extras.append(f"bytes={record.nbytes}")
        
        if extras:
            message += f" ({', '.join(extras)})"
        
        return f"{prefix} {message}"


class TeeLogger:
    """Logger wrapper with convenience methods for tee-specific events."""
    
    def __init__(self, name: str, logger: logging.Logger):
        self._name = name
        self._logger = logger
    
    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)
    
    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)
    
    def _log(self, level: int, message: str, **kwargs):
        """Log with extra context fields."""
        if not self._logger.isEnabledFor(level):
            return
        
        extra = {}
        for key in CONTEXT_FIELDS:
            if key in kwargs:
                extra[key] = kwargs.pop(key)
        
        if kwargs:
            extra["extra_data"] = kwargs
        
        self._logger.log(level, message, extra=extra)
    
    # Convenience methods for common tee events
    
    def mirror_failed(self, wrapper: str, nbytes: int, error: BaseException):
        self.warning(
            f"Mirror write failed: {type(error).__name__}: {error}",
            component="mirror",
            wrapper=wrapper,
            role="mirror",
            nbytes=nbytes,
        )
    
    def detached(self, wrapper: str):
        self.debug("Wrapper detached", component="lifecycle", wrapper=wrapper)
    
    def closed(self, wrapper: str, closed_streams: list[str]):
        self.debug(
            "Wrapper closed",
            component="lifecycle",
            wrapper=wrapper,
            owned=closed_streams,
        )


_loggers: dict[str, TeeLogger] = {}
_initialized = False

logging.getLogger("teestream").addHandler(logging.NullHandler())


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_dir: Optional[Path] = None,
    file_enabled: bool = True,
    console_enabled: bool = True
) -> None:
    """Initialize the logging system.
    
    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text"
        log_dir: Directory for log files
        file_enabled: Write logs to file
        console_enabled: Write logs to console
    """
    global _initialized
    
    if _initialized:
        return
    
    root = logging.getLogger("teestream")
    root.setLevel(getattr(logging, level.upper()))
    root.handlers.clear()
    
    # Console goes to stderr so stdout stays free for teed data
    if console_enabled:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.DEBUG)
        
        if format_type == "json":
            console.setFormatter(JSONFormatter())
        else:
            console.setFormatter(ColoredFormatter())
        
        root.addHandler(console)
    
    if file_enabled and log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "teestream.log"
        
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)
    
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    
    _initialized = True


def setup_logging_from_config(config=None) -> None:
    """Initialize logging from the environment-driven configuration."""
    if config is None:
        from teestream.config import get_config
        config = get_config()
    
    setup_logging(
        level=config.log.level,
        format_type=config.log.format,
        log_dir=config.log.log_dir,
        file_enabled=config.log.file_enabled,
        console_enabled=config.log.console_enabled,
    )


def reset_logging() -> None:
    """Drop installed handlers so setup_logging() can run again."""
    global _initialized
    root = logging.getLogger("teestream")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(logging.NullHandler())
    root.setLevel(logging.NOTSET)
    _initialized = False


def get_logger(name: str = "streams") -> TeeLogger:
    """Get a teestream logger instance."""
    if name not in _loggers:
        logger = logging.getLogger(f"teestream.{name}")
        _loggers[name] = TeeLogger(name, logger)
    return _loggers[name]
