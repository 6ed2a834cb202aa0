"""
Console output and shared options of the docsweep command.
"""

from functools import wraps
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core.config import SweepConfig
from ..organization import ActionStatus, PathState, RunSummary
from ..shared import setup_logging

STATE_LABELS = {
    PathState.DONE: "[green]done[/green]",
    PathState.INVALID: "[red]invalid[/red]",
    PathState.DESTINATION_FAILED: "[red]no destination[/red]",
    PathState.DESTINATION_DECLINED: "[yellow]declined[/yellow]",
    PathState.LIST_FAILED: "[red]unreadable[/red]",
}


def verbosity_options(f: Callable) -> Callable:
    """Add -v/--verbose and -q/--quiet, and route diagnostics accordingly."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        setup_logging(verbose=kwargs["verbose"], quiet=kwargs["quiet"])
        return f(*args, **kwargs)

    wrapper = click.option(
        "-q", "--quiet", is_flag=True, help="Only print warnings and errors"
    )(wrapper)
    wrapper = click.option(
        "-v", "--verbose", is_flag=True, help="Log debug lines and diagnostics"
    )(wrapper)
    return wrapper


class SweepDisplay:
    """Rich console output of a sweep."""

    def __init__(self, console: Optional[Console] = None, quiet: bool = False):
        """
        Args:
            console: Rich console (stdout console if None)
            quiet: Only print warnings and errors
        """
        self.console = console or Console()
        self.quiet = quiet

    def show_config(self, config: SweepConfig) -> None:
        """Print the resolved settings, plus a banner for dry runs."""
        if not self.quiet:
            self.console.print(f"\n[bold cyan]docsweep[/bold cyan] [dim]{__version__}[/dim]\n")

            table = Table(show_header=False, box=None)
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="green")
            table.add_row("Source paths", str(len(config.sources)))
            table.add_row("Destination name", escape(config.child_name))
            table.add_row("Excluded names", escape(", ".join(sorted(config.exclude)) or "(none)"))
            log_file = escape(str(config.log.log_file)) if config.log.to_file else "(off)"
            table.add_row("Log file", log_file)
            confirm = config.confirm and not config.dry_run
            table.add_row("Confirm each action", "YES" if confirm else "NO")
            self.console.print(table)
            self.console.print()

        if config.dry_run:
            self.console.print("[yellow]⚠ DRY RUN MODE - No files will be modified[/yellow]\n")

    def show_summary(self, summary: RunSummary) -> None:
        """Print one row per source path, then every failure of the run."""
        if not self.quiet:
            self.console.print(self._paths_table(summary))

        for message in self._failure_messages(summary):
            self.error(f"✗ {message}")

        if self.quiet:
            return
        if summary.dry_run:
            planned = summary.count(ActionStatus.PLANNED)
            self.console.print(
                f"\n[yellow]This was a DRY RUN - {planned} item(s) would be moved[/yellow]"
            )
        elif summary.has_failures:
            self.error(f"\n{summary.failures} error(s) occurred. Check the log for details.")
        else:
            moved = summary.count(ActionStatus.DONE)
            self.console.print(f"\n[green]✓ Moved {moved} item(s)[/green]")

    def error(self, message: str) -> None:
        """Print an error (shown even in quiet mode)."""
        self.console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)

    def _paths_table(self, summary: RunSummary) -> Table:
        moved_label = "Would move" if summary.dry_run else "Moved"
        moved_status = ActionStatus.PLANNED if summary.dry_run else ActionStatus.DONE

        table = Table(title="Sweep Results")
        table.add_column("Source", style="cyan")
        table.add_column("State")
        table.add_column(moved_label, justify="right")
        table.add_column("Declined", justify="right")
        table.add_column("Failed", justify="right")

        for result in summary.paths:
            table.add_row(
                escape(str(result.source)),
                STATE_LABELS[result.state],
                str(result.count(moved_status)),
                str(result.count(ActionStatus.DECLINED)),
                str(result.count(ActionStatus.FAILED)),
            )

        table.caption = (
            f"{summary.processed} processed, {summary.invalid} invalid, "
            f"{summary.failures} error(s)"
        )
        return table

    @staticmethod
    def _failure_messages(summary: RunSummary):
        for result in summary.paths:
            if result.error_message and result.state != PathState.DESTINATION_DECLINED:
                yield result.error_message
            for move in result.moves:
                if move.status == ActionStatus.FAILED:
                    yield move.error_message
