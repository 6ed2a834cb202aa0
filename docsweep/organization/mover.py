"""
Moving the children of a source directory into its destination.

Children are the direct entries of the source. An entry is left in place if
its name matches any exclusion pattern or if it is the destination itself.
A failed move is recorded and the loop carries on with the next child.
"""

import logging
import os
import shutil
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List

from ..core.errors import ErrorKind
from ..shared.run_log import RunLog
from .gate import ActionGate
from .results import (
    ActionStatus,
    DestinationOutcome,
    MoveOutcome,
    PathResult,
    PathState,
    SourceDirectory,
)

logger = logging.getLogger(__name__)


def is_excluded(name: str, patterns: Iterable[str], case_sensitive: bool = True) -> bool:
    """Return True if a file name matches any glob pattern.

    Patterns are matched against the name only, never the full path.
    """
    if case_sensitive:
        return any(fnmatchcase(name, pattern) for pattern in patterns)
    lowered = name.lower()
    return any(fnmatchcase(lowered, pattern.lower()) for pattern in patterns)


def _same_name(a: str, b: str, case_sensitive: bool) -> bool:
    return a == b if case_sensitive else a.lower() == b.lower()


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


class ChildMover:
    """Move the non-excluded children of source directories."""

    def __init__(
        self,
        exclude: Iterable[str],
        gate: ActionGate,
        run_log: RunLog,
        case_sensitive: bool = True,
        keep: Iterable[Path] = (),
    ):
        """
        Initialize child mover.

        Args:
            exclude: Glob patterns of names that are never moved
            gate: Gate approving each move
            run_log: Run log for moves and failures
            case_sensitive: Match patterns case-sensitively
            keep: Paths never moved whatever their name, such as the
                run's own log file
        """
        self.exclude = frozenset(exclude)
        self.gate = gate
        self.run_log = run_log
        self.case_sensitive = case_sensitive
        self.keep = tuple(keep)

    def candidates(self, source: Path, destination: Path) -> List[Path]:
        """
        List the children of source that should be moved, sorted by name.

        Raises:
            OSError: If the source directory cannot be listed
        """
        children = []
        for entry in sorted(source.iterdir(), key=lambda p: p.name):
            if _same_name(entry.name, destination.name, self.case_sensitive):
                continue
            if any(_same_file(entry, path) for path in self.keep):
                logger.debug(f"Kept {entry}")
                continue
            if is_excluded(entry.name, self.exclude, self.case_sensitive):
                logger.debug(f"Excluded {entry}")
                continue
            children.append(entry)
        return children

    def move_one(self, child: Path, destination: Path) -> MoveOutcome:
        """Move a single child into destination, keeping its name."""
        target = destination / child.name

        if not self.gate.should_perform(f"move {child} → {target}"):
            status = ActionStatus.PLANNED if self.gate.dry_run else ActionStatus.DECLINED
            return MoveOutcome(source=child, target=target, status=status)

        # Never overwrite or nest into an existing entry of the same name
        if os.path.lexists(target):
            return self._failed(child, target, f"Failed to move {child}: {target} already exists")

        try:
            shutil.move(str(child), str(target))
        except OSError as e:
            return self._failed(child, target, f"Failed to move {child} → {target}: {e}")

        self.run_log.log(logging.INFO, f"Moved {child} → {target}")
        return MoveOutcome(source=child, target=target, status=ActionStatus.DONE)

    def move_all(self, source: SourceDirectory, destination: DestinationOutcome) -> PathResult:
        """
        Move every candidate child of source into destination.

        Args:
            source: Validated source directory
            destination: Usable destination outcome

        Returns:
            Path result in state DONE, or LIST_FAILED if the source could
            not be listed
        """
        result = PathResult(source=source.path, state=PathState.DONE, destination=destination)

        try:
            children = self.candidates(source.path, destination.path)
        except OSError as e:
            message = f"Failed to list {source.path}: {e}"
            self.run_log.log(logging.ERROR, message)
            result.state = PathState.LIST_FAILED
            result.error_kind = ErrorKind.LIST_CHILDREN
            result.error_message = message
            return result

        logger.debug(f"{len(children)} candidate(s) in {source.path}")

        for child in children:
            result.moves.append(self.move_one(child, destination.path))

        return result

    def _failed(self, child: Path, target: Path, message: str) -> MoveOutcome:
        self.run_log.log(logging.ERROR, message)
        return MoveOutcome(
            source=child,
            target=target,
            status=ActionStatus.FAILED,
            error_kind=ErrorKind.ITEM_MOVE,
            error_message=message,
        )
