"""
Configuration for docsweep.

Settings holds environment-driven defaults (DOCSWEEP_* variables or a .env
file). SweepConfig is the resolved, immutable configuration of one run.
"""

import os
import sys
from datetime import date
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TOOL_NAME = "docsweep"

DEFAULT_CHILD_NAME = "Documents"

DEFAULT_EXCLUDE: FrozenSet[str] = frozenset(
    {
        ".*",
        "Desktop",
        "Documents",
        "Downloads",
        "Favorites",
        "Music",
        "Pictures",
        "Videos",
    }
)


def host_is_case_sensitive() -> bool:
    """Return True if file names on this platform are usually case-sensitive."""
    return not (sys.platform.startswith("win") or sys.platform == "darwin")


def default_log_file(directory: Optional[Path] = None, today: Optional[date] = None) -> Path:
    """Default log file: ``<directory>/docsweep_YYYY-MM-DD.log``."""
    day = today or date.today()
    return Path(directory or ".") / f"{TOOL_NAME}_{day:%Y-%m-%d}.log"


class Settings(BaseSettings):
    """Defaults loaded from environment variables."""

    child_name: str = DEFAULT_CHILD_NAME
    exclude: List[str] = Field(default_factory=lambda: sorted(DEFAULT_EXCLUDE))
    log_dir: Path = Path(".")
    log_to_file: bool = True
    log_to_console: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DOCSWEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class LogConfig(BaseModel):
    """Where run log lines go."""

    log_file: Path = Field(default_factory=default_log_file)
    to_file: bool = True
    to_console: bool = False
    verbose: bool = False

    model_config = ConfigDict(frozen=True)


class SweepConfig(BaseModel):
    """Resolved configuration of a single run."""

    sources: Tuple[Path, ...] = Field(default=(), description="Directories to reorganize, in order")
    child_name: str = Field(default=DEFAULT_CHILD_NAME, description="Destination subdirectory name")
    exclude: FrozenSet[str] = Field(default=DEFAULT_EXCLUDE, description="Glob patterns never moved")
    dry_run: bool = False
    confirm: bool = False
    case_sensitive: bool = Field(default_factory=host_is_case_sensitive)
    log: LogConfig = Field(default_factory=LogConfig)

    model_config = ConfigDict(frozen=True)

    @field_validator("child_name")
    @classmethod
    def _check_child_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("child name must not be empty")
        if value in (".", ".."):
            raise ValueError(f"child name cannot be {value!r}")
        separators = [sep for sep in ("/", os.sep, os.altsep) if sep]
        if any(sep in value for sep in separators):
            raise ValueError(f"child name must be a single path component: {value!r}")
        return value
