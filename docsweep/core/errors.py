"""
Error types for docsweep.

Only configuration failures are raised. Problems with a single source path
or a single child item are reported as outcome values tagged with an
ErrorKind and never unwind the run.
"""

from enum import Enum


class SweepError(Exception):
    """Base error for docsweep."""


class ConfigurationError(SweepError):
    """The run cannot start (e.g. the log sinks could not be set up)."""


class ErrorKind(str, Enum):
    """Kind of a local error recorded in an outcome."""

    INVALID_SOURCE = "invalid_source"  # missing or not a directory
    SOURCE_QUERY_FAILED = "source_query_failed"  # stat itself failed
    DESTINATION_CREATE = "destination_create"
    LIST_CHILDREN = "list_children"
    ITEM_MOVE = "item_move"
