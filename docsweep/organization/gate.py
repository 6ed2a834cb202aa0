"""
Gate for mutating filesystem actions.

Every directory creation and every move asks the gate first. The gate
decides whether the action really happens: always (normal run), never
(dry run, which logs the action instead) or after asking the operator.
"""

import logging
import sys
from typing import Callable, Optional, Protocol

import click

from ..shared.run_log import RunLog

Prompt = Callable[[str], bool]

# Controlling terminal, used when stdin carries the source paths
TERMINAL = "CONIN$" if sys.platform == "win32" else "/dev/tty"


class ActionGate(Protocol):
    """Decides whether a described mutating action is performed."""

    dry_run: bool

    def should_perform(self, description: str) -> bool:
        ...


class ExecuteGate:
    """Performs every action."""

    dry_run = False

    def should_perform(self, description: str) -> bool:
        return True


class DryRunGate:
    """Performs nothing; logs what would have been done."""

    dry_run = True

    def __init__(self, run_log: RunLog):
        self.run_log = run_log

    def should_perform(self, description: str) -> bool:
        self.run_log.log(logging.INFO, f"[DRY RUN] Would {description}")
        return False


def confirm_prompt(question: str) -> bool:
    """Ask on the terminal, defaulting to no."""
    return click.confirm(question, default=False)


def terminal_prompt(question: str) -> bool:
    """
    Ask on the controlling terminal instead of stdin, defaulting to no.

    Raises:
        click.Abort: If there is no terminal, or it is closed or interrupted
    """
    click.echo(f"{question} [y/N]: ", nl=False, err=True)
    try:
        with click.open_file(TERMINAL, encoding="utf-8") as tty:
            answer = tty.readline()
    except (OSError, KeyboardInterrupt) as e:
        raise click.Abort() from e
    if not answer:
        raise click.Abort()
    return answer.strip().lower() in ("y", "yes")


class ConfirmGate:
    """
    Asks the operator before each action.

    If the prompt is aborted (end of input, Ctrl-C, no terminal), that action
    and every later one are declined without asking again, so the run still
    visits every source path.
    """

    dry_run = False

    def __init__(self, run_log: RunLog, prompt: Optional[Prompt] = None):
        self.run_log = run_log
        self.prompt = prompt or confirm_prompt
        self.aborted = False

    def should_perform(self, description: str) -> bool:
        approved = False
        if not self.aborted:
            question = description[:1].upper() + description[1:] + "?"
            try:
                approved = self.prompt(question)
            except click.Abort:
                self.aborted = True
                self.run_log.log(
                    logging.WARNING, "No answer to confirmation; declining all remaining actions"
                )
        if not approved:
            self.run_log.log(logging.INFO, f"Declined: {description}")
        return approved


def make_gate(
    run_log: RunLog,
    dry_run: bool = False,
    confirm: bool = False,
    prompt: Optional[Prompt] = None,
) -> ActionGate:
    """
    Build the gate for a run.

    Dry run wins over confirm, so a dry run never prompts.
    """
    if dry_run:
        return DryRunGate(run_log)
    if confirm:
        return ConfirmGate(run_log, prompt=prompt)
    return ExecuteGate()
