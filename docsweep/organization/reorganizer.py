"""
Reorganizer: runs validate → resolve destination → move children for each
source path and accumulates the results.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from ..core.config import SweepConfig
from ..shared.run_log import RunLog
from .destination import resolve_destination
from .gate import ActionGate, Prompt, make_gate
from .mover import ChildMover
from .results import (
    ActionStatus,
    DestinationStatus,
    PathResult,
    PathState,
    RunSummary,
    SourceRejection,
)
from .validator import validate_source

logger = logging.getLogger(__name__)


class Reorganizer:
    """Move the loose contents of directories into a subdirectory of each."""

    def __init__(
        self,
        config: SweepConfig,
        run_log: RunLog,
        gate: Optional[ActionGate] = None,
        prompt: Optional[Prompt] = None,
    ):
        """
        Initialize reorganizer.

        Args:
            config: Resolved run configuration
            run_log: Run log receiving progress and errors
            gate: Gate for mutating actions (built from config if None)
            prompt: Confirmation prompt used when config.confirm is set
        """
        self.config = config
        self.run_log = run_log
        self.gate = gate or make_gate(
            run_log, dry_run=config.dry_run, confirm=config.confirm, prompt=prompt
        )
        self.mover = ChildMover(
            exclude=config.exclude,
            gate=self.gate,
            run_log=run_log,
            case_sensitive=config.case_sensitive,
            keep=(config.log.log_file,) if config.log.to_file else (),
        )

    def run(self, sources: Optional[Iterable[Union[str, os.PathLike]]] = None) -> RunSummary:
        """
        Process every source path in order.

        Args:
            sources: Source paths (config.sources if None). May be a lazy
                iterable such as lines read from a pipe.

        Returns:
            Summary of the run
        """
        if sources is None:
            sources = self.config.sources

        summary = RunSummary(dry_run=self.gate.dry_run)

        mode = "DRY RUN" if self.gate.dry_run else "LIVE"
        self._info(f"Starting run ({mode})")
        self._info(f"Destination subdirectory: {self.config.child_name}")
        excluded = ", ".join(sorted(self.config.exclude)) or "(none)"
        self._info(f"Excluded names: {excluded}")

        for source in sources:
            summary.record(self.process(source))

        self._info(f"Processed {summary.processed} source path(s)")
        if summary.invalid:
            self._info(f"Skipped {summary.invalid} invalid source path(s)")

        summary.completed_at = datetime.now()
        self._info("Run complete")
        self.run_log.flush()

        return summary

    def process(self, source: Union[str, os.PathLike]) -> PathResult:
        """Process a single source path through to its terminal state."""
        self._info(f"Processing {source}")

        check = validate_source(source)
        if isinstance(check, SourceRejection):
            self.run_log.log(logging.ERROR, check.message)
            result = PathResult(
                source=check.path,
                state=PathState.INVALID,
                error_kind=check.kind,
                error_message=check.message,
            )
            self._info(f"Skipped {check.path}")
            return result

        destination = resolve_destination(check, self.config.child_name, self.gate, self.run_log)

        if not destination.usable:
            if destination.status == DestinationStatus.DECLINED:
                state = PathState.DESTINATION_DECLINED
            else:
                state = PathState.DESTINATION_FAILED
            result = PathResult(
                source=check.path,
                state=state,
                destination=destination,
                error_kind=destination.error_kind,
                error_message=destination.error_message,
            )
            self._info(f"Skipped {check.path}: destination not available")
            return result

        result = self.mover.move_all(check, destination)
        self._info(self._path_summary(check.path, result))
        return result

    def _path_summary(self, source: Path, result: PathResult) -> str:
        if self.gate.dry_run:
            return f"Finished {source}: {result.count(ActionStatus.PLANNED)} item(s) would be moved"
        parts = [f"{result.count(ActionStatus.DONE)} moved"]
        declined = result.count(ActionStatus.DECLINED)
        if declined:
            parts.append(f"{declined} declined")
        parts.append(f"{result.count(ActionStatus.FAILED)} failed")
        return f"Finished {source}: " + ", ".join(parts)

    def _info(self, message: str) -> None:
        self.run_log.log(logging.INFO, message)
