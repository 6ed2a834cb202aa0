"""
Pytest configuration and fixtures for docsweep tests.
"""

import logging
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from docsweep.organization.gate import ConfirmGate, DryRunGate, ExecuteGate


class RecordingRunLog:
    """RunLog that keeps every line in memory."""

    def __init__(self):
        self.records: List[Tuple[int, str]] = []
        self.flush_count = 0

    def log(self, level: int, message: str) -> None:
        self.records.append((level, message))

    def flush(self) -> None:
        self.flush_count += 1

    def messages(self, level: int = None) -> List[str]:
        return [msg for lvl, msg in self.records if level is None or lvl == level]

    def errors(self) -> List[str]:
        return self.messages(logging.ERROR)

    def contains(self, text: str, level: int = None) -> bool:
        return any(text in msg for msg in self.messages(level))


def snapshot(root: Path) -> Dict[str, bytes]:
    """Map every path under root to its content (b"<dir>" for directories)."""
    state = {}
    for path in sorted(root.rglob("*")):
        key = path.relative_to(root).as_posix()
        state[key] = b"<dir>" if path.is_dir() else path.read_bytes()
    return state


@pytest.fixture
def snapshot_tree():
    """Function taking a filesystem snapshot of a directory tree."""
    return snapshot


@pytest.fixture
def run_log():
    """In-memory run log."""
    return RecordingRunLog()


@pytest.fixture
def execute_gate():
    return ExecuteGate()


@pytest.fixture
def dry_run_gate(run_log):
    return DryRunGate(run_log)


@pytest.fixture
def answers():
    """Scripted confirmation answers: description substring -> bool."""
    return {}


@pytest.fixture
def confirm_gate(run_log, answers):
    """Confirm gate answering from the ``answers`` fixture (default: no)."""

    def prompt(question: str) -> bool:
        for needle, answer in answers.items():
            if needle in question:
                return answer
        return False

    return ConfirmGate(run_log, prompt=prompt)


@pytest.fixture
def home_dir(tmp_path):
    """A home-like directory with default-excluded and loose entries."""
    home = tmp_path / "home"
    home.mkdir()

    for name in ["Desktop", "Documents", "Downloads", "Music", "Pictures"]:
        (home / name).mkdir()
    (home / ".bashrc").write_text("export PS1='$ '")
    (home / ".config").mkdir()
    (home / "notes.txt").write_text("notes")
    (home / "report.pdf").write_bytes(b"%PDF-1.4")
    (home / "projects").mkdir()
    (home / "projects" / "main.py").write_text("print('hi')")

    return home
