"""Core configuration and error types."""

from .config import DEFAULT_CHILD_NAME, DEFAULT_EXCLUDE, LogConfig, Settings, SweepConfig
from .errors import ConfigurationError, ErrorKind, SweepError

__all__ = [
    "DEFAULT_CHILD_NAME",
    "DEFAULT_EXCLUDE",
    "LogConfig",
    "Settings",
    "SweepConfig",
    "ConfigurationError",
    "ErrorKind",
    "SweepError",
]
