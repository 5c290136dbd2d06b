"""Centralized configuration for teestream.

This module provides typed, validated configuration loaded from
environment variables and .env files.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes", "on")


class LogConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="WARNING", description="Log level for the teestream logger")
    format: Literal["json", "text"] = Field(default="text", description="Console log format")
    log_dir: Optional[Path] = Field(default=None, description="Directory for rotating log files")
    file_enabled: bool = Field(default=False, description="Write logs to a file under log_dir")
    console_enabled: bool = Field(default=True, description="Write logs to stderr")
    
    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return value
    
    @classmethod
    def from_env(cls) -> "LogConfig":
        log_dir = os.getenv("TEESTREAM_LOG_DIR")
        return cls(
            level=os.getenv("TEESTREAM_LOG_LEVEL", "WARNING"),
            format=os.getenv("TEESTREAM_LOG_FORMAT", "text").lower(),
            log_dir=Path(log_dir) if log_dir else None,
            file_enabled=_env_flag("TEESTREAM_LOG_FILE", bool(log_dir)),
            console_enabled=_env_flag("TEESTREAM_LOG_CONSOLE", True),
        )


class DebugConfig(BaseModel):
    """Where the *_dbg constructors send their mirror."""
    stream: Literal["stderr", "stdout"] = Field(default="stderr", description="Process stream used as debug mirror")
    
    @classmethod
    def from_env(cls) -> "DebugConfig":
        return cls(stream=os.getenv("TEESTREAM_DEBUG_STREAM", "stderr").lower())


class Config(BaseModel):
    """Main configuration container."""
    log: LogConfig = Field(default_factory=LogConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
    
    @classmethod
    def from_env(cls) -> "Config":
        return cls(log=LogConfig.from_env(), debug=DebugConfig.from_env())


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
