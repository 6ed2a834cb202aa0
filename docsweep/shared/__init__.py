"""
Shared utilities for docsweep.
"""

from .run_log import RUN_LOGGER_NAME, LoggerRunLog, RunLog, setup_logging, setup_run_log

__all__ = [
    "RUN_LOGGER_NAME",
    "LoggerRunLog",
    "RunLog",
    "setup_logging",
    "setup_run_log",
]
