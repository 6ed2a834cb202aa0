"""
Organization module for sweeping directory contents into a subdirectory.

Each source path is validated, its destination subdirectory is resolved
(created when missing) and its non-excluded children are moved into it.
Every mutating action passes through a gate, which is what makes dry-run
and per-action confirmation work.
"""

from .destination import resolve_destination
from .gate import ActionGate, ConfirmGate, DryRunGate, ExecuteGate, make_gate
from .mover import ChildMover, is_excluded
from .reorganizer import Reorganizer
from .results import (
    ActionStatus,
    DestinationOutcome,
    DestinationStatus,
    MoveOutcome,
    PathResult,
    PathState,
    RunSummary,
    SourceDirectory,
    SourceRejection,
)
from .validator import validate_source

__all__ = [
    "ActionGate",
    "ConfirmGate",
    "DryRunGate",
    "ExecuteGate",
    "make_gate",
    "ChildMover",
    "is_excluded",
    "Reorganizer",
    "resolve_destination",
    "validate_source",
    "ActionStatus",
    "DestinationOutcome",
    "DestinationStatus",
    "MoveOutcome",
    "PathResult",
    "PathState",
    "RunSummary",
    "SourceDirectory",
    "SourceRejection",
]
