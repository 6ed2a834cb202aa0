"""
Run log for docsweep.

The reorganizer only needs two operations from its log: ``log(level,
message)`` and ``flush()``. LoggerRunLog provides them on top of a stdlib
logger with a file sink and an optional rich console sink.
"""

import logging
from typing import List, Optional, Protocol

from rich.console import Console
from rich.logging import RichHandler

from ..core.config import LogConfig
from ..core.errors import ConfigurationError

PACKAGE_LOGGER_NAME = "docsweep"
RUN_LOGGER_NAME = "docsweep.run"

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


class RunLog(Protocol):
    """Leveled log consumed by the reorganizer."""

    def log(self, level: int, message: str) -> None:
        ...

    def flush(self) -> None:
        ...


class LoggerRunLog:
    """RunLog backed by a stdlib logger."""

    def __init__(self, run_logger: logging.Logger):
        self.logger = run_logger

    def log(self, level: int, message: str) -> None:
        self.logger.log(level, message)

    def flush(self) -> None:
        """Block until every handler has written its buffered records."""
        for handler in self.logger.handlers:
            handler.flush()

    def close(self) -> None:
        """Flush, close and detach all handlers."""
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
            self.logger.removeHandler(handler)


def setup_run_log(config: LogConfig, console: Optional[Console] = None) -> LoggerRunLog:
    """
    Configure the run logger from a LogConfig.

    Args:
        config: Log sink configuration
        console: Console for the console sink (stderr console if None)

    Returns:
        Ready-to-use run log

    Raises:
        ConfigurationError: If the log file cannot be opened
    """
    run_logger = logging.getLogger(RUN_LOGGER_NAME)

    # Drop sinks left over from an earlier run in the same process
    LoggerRunLog(run_logger).close()

    run_logger.setLevel(logging.DEBUG if config.verbose else logging.INFO)
    run_logger.propagate = False

    handlers: List[logging.Handler] = []

    if config.to_file:
        try:
            file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {config.log_file}: {e}") from e
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        handlers.append(file_handler)

    if config.to_console:
        console_handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handlers.append(console_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        run_logger.addHandler(handler)

    logger.debug(f"Run log ready with {len(handlers)} handler(s)")
    return LoggerRunLog(run_logger)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Send the docsweep module loggers to stderr through rich.

    These carry diagnostics such as exclusion decisions. The run log has its
    own logger and sinks, see setup_run_log.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    )
    package_logger.setLevel(level)
