"""
Destination subdirectory resolution.

The destination is ``<source>/<child name>``. It is created when missing and
left alone when it already exists, so running twice is harmless.
"""

import logging
import stat

from ..core.errors import ErrorKind
from ..shared.run_log import RunLog
from .gate import ActionGate
from .results import DestinationOutcome, DestinationStatus, SourceDirectory

logger = logging.getLogger(__name__)


def resolve_destination(
    source: SourceDirectory,
    child_name: str,
    gate: ActionGate,
    run_log: RunLog,
) -> DestinationOutcome:
    """
    Compute the destination of a source directory and create it if needed.

    Args:
        source: Validated source directory
        child_name: Name of the destination subdirectory
        gate: Gate that approves the directory creation
        run_log: Run log for notices and errors

    Returns:
        Destination outcome. Only READY, CREATED and PLANNED destinations
        may receive moves.
    """
    destination = source.path / child_name

    try:
        info = destination.stat()
    except FileNotFoundError:
        info = None
    except OSError as e:
        return _failed(destination, f"Cannot query destination {destination}: {e}", run_log)

    if info is not None:
        if stat.S_ISDIR(info.st_mode):
            logger.debug(f"Destination already exists: {destination}")
            return DestinationOutcome(path=destination, status=DestinationStatus.READY)
        return _failed(
            destination,
            f"Destination exists but is not a directory: {destination}",
            run_log,
        )

    if not gate.should_perform(f"create directory {destination}"):
        status = DestinationStatus.PLANNED if gate.dry_run else DestinationStatus.DECLINED
        return DestinationOutcome(path=destination, status=status)

    try:
        # exist_ok: another process may have created it since the stat above
        destination.mkdir(exist_ok=True)
    except OSError as e:
        return _failed(destination, f"Failed to create destination {destination}: {e}", run_log)

    run_log.log(logging.INFO, f"Created destination {destination}")
    return DestinationOutcome(path=destination, status=DestinationStatus.CREATED)


def _failed(destination, message: str, run_log: RunLog) -> DestinationOutcome:
    run_log.log(logging.ERROR, message)
    return DestinationOutcome(
        path=destination,
        status=DestinationStatus.FAILED,
        error_kind=ErrorKind.DESTINATION_CREATE,
        error_message=message,
    )
