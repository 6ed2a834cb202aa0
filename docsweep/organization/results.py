"""
Outcome values for a reorganization run.

Every step reports what happened as a value instead of raising, so a failed
item or path is recorded and the run moves on.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import ErrorKind

logger = logging.getLogger(__name__)


class ActionStatus(str, Enum):
    """Status of a single mutating action."""

    DONE = "done"
    PLANNED = "planned"  # dry run: reported, not performed
    DECLINED = "declined"  # operator answered no
    FAILED = "failed"


class DestinationStatus(str, Enum):
    """Status of the destination subdirectory of one source path."""

    READY = "ready"  # already existed
    CREATED = "created"
    PLANNED = "planned"
    DECLINED = "declined"
    FAILED = "failed"


class PathState(str, Enum):
    """Terminal state of one source path."""

    INVALID = "invalid"
    DESTINATION_FAILED = "destination_failed"
    DESTINATION_DECLINED = "destination_declined"
    LIST_FAILED = "list_failed"
    DONE = "done"


class SourceDirectory(BaseModel):
    """A source path confirmed to be an existing directory."""

    path: Path

    model_config = ConfigDict(frozen=True)


class SourceRejection(BaseModel):
    """A source path that cannot be processed."""

    path: Path
    kind: ErrorKind
    message: str

    model_config = ConfigDict(frozen=True)


class DestinationOutcome(BaseModel):
    """Result of resolving the destination subdirectory."""

    path: Path
    status: DestinationStatus
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @property
    def usable(self) -> bool:
        """True if moves into this destination may be attempted or previewed."""
        return self.status in (
            DestinationStatus.READY,
            DestinationStatus.CREATED,
            DestinationStatus.PLANNED,
        )


class MoveOutcome(BaseModel):
    """Result of moving one child item."""

    source: Path
    target: Path
    status: ActionStatus
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None


class PathResult(BaseModel):
    """Everything that happened to one source path."""

    source: Path
    state: PathState
    destination: Optional[DestinationOutcome] = None
    moves: List[MoveOutcome] = Field(default_factory=list)
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    def count(self, status: ActionStatus) -> int:
        return sum(1 for move in self.moves if move.status == status)

    @property
    def failures(self) -> int:
        """Local errors recorded for this path (path-level plus per-item)."""
        path_failed = self.state in (
            PathState.INVALID,
            PathState.DESTINATION_FAILED,
            PathState.LIST_FAILED,
        )
        return int(path_failed) + self.count(ActionStatus.FAILED)


class RunSummary(BaseModel):
    """Accumulated result of a whole run."""

    dry_run: bool = False
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    processed: int = Field(default=0, description="Source paths that passed validation")
    invalid: int = Field(default=0, description="Source paths rejected by validation")
    paths: List[PathResult] = Field(default_factory=list)

    def record(self, result: PathResult) -> None:
        """Add a finished path and update the counters."""
        self.paths.append(result)
        if result.state == PathState.INVALID:
            self.invalid += 1
        else:
            self.processed += 1

    def count(self, status: ActionStatus) -> int:
        return sum(result.count(status) for result in self.paths)

    @property
    def failures(self) -> int:
        return sum(result.failures for result in self.paths)

    @property
    def has_failures(self) -> bool:
        return self.failures > 0

    def save(self, report_path: Path) -> None:
        """
        Write the summary as JSON.

        Args:
            report_path: Path of the report file
        """
        report_path.parent.mkdir(parents=True, exist_ok=True)

        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

        logger.info(f"Saved run report to {report_path}")

    @classmethod
    def load(cls, report_path: Path) -> "RunSummary":
        with open(report_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)
