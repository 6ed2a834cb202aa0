"""Source path validation."""

import logging
import os
import stat
from pathlib import Path
from typing import Union

from ..core.errors import ErrorKind
from .results import SourceDirectory, SourceRejection

logger = logging.getLogger(__name__)

SourceCheck = Union[SourceDirectory, SourceRejection]


def validate_source(path: Union[str, os.PathLike]) -> SourceCheck:
    """Check that a path currently exists and is a directory.

    Args:
        path: Any path-like value; ``~`` is expanded

    Returns:
        SourceDirectory if the path is a directory, otherwise a
        SourceRejection saying why not
    """
    source = Path(path).expanduser()

    try:
        info = source.stat()
    except (FileNotFoundError, NotADirectoryError):
        return SourceRejection(
            path=source,
            kind=ErrorKind.INVALID_SOURCE,
            message=f"Source path does not exist: {source}",
        )
    except OSError as e:
        # e.g. no search permission on a parent directory
        return SourceRejection(
            path=source,
            kind=ErrorKind.SOURCE_QUERY_FAILED,
            message=f"Cannot query source path {source}: {e}",
        )

    if not stat.S_ISDIR(info.st_mode):
        return SourceRejection(
            path=source,
            kind=ErrorKind.INVALID_SOURCE,
            message=f"Source path is not a directory: {source}",
        )

    logger.debug(f"Validated source directory {source}")
    return SourceDirectory(path=source)
