"""
CLI command for sweeping directories.

Moves everything in each source directory, apart from excluded names, into
a subdirectory of it (Documents by default).
"""

import sys
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Tuple

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError

from .. import __version__
from ..core.config import LogConfig, Settings, SweepConfig, default_log_file
from ..core.errors import ConfigurationError
from ..organization import Reorganizer
from ..organization.gate import terminal_prompt
from ..shared import setup_run_log
from .base import SweepDisplay, verbosity_options


def reads_stdin(sources: Sequence[Path]) -> bool:
    return not sources or any(str(source) == "-" for source in sources)


def read_sources(sources: Sequence[Path]) -> List[Path]:
    """
    Expand the SOURCES argument.

    With no arguments, or for each ``-``, source paths are read from stdin,
    one per line. Blank lines are ignored.
    """
    if not sources:
        sources = (Path("-"),)

    expanded: List[Path] = []
    stdin_lines: Optional[List[str]] = None
    for source in sources:
        if str(source) != "-":
            expanded.append(source)
            continue
        if stdin_lines is None:
            stdin_lines = [] if sys.stdin.isatty() else [line.strip() for line in sys.stdin]
            expanded.extend(Path(line) for line in stdin_lines if line)
    return expanded


def resolve_exclude(
    exclude: Tuple[str, ...], no_exclude: bool, settings: Settings
) -> FrozenSet[str]:
    """Exclusion set: empty, the given patterns, or the configured default."""
    if no_exclude:
        return frozenset()
    if exclude:
        return frozenset(exclude)
    return frozenset(settings.exclude)


@click.command()
@click.argument("sources", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "-n",
    "--child-name",
    type=str,
    default=None,
    help="Name of the destination subdirectory [default: Documents]",
)
@click.option(
    "-x",
    "--exclude",
    multiple=True,
    help="Glob pattern of names never moved; repeat to give several. Replaces the default set",
)
@click.option(
    "--no-exclude",
    is_flag=True,
    help="Do not exclude anything except the destination itself",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Log file [default: ./docsweep_YYYY-MM-DD.log]",
)
@click.option(
    "--log-to-console/--no-log-to-console",
    default=None,
    help="Also write log lines to the console [default: off]",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=None,
    help="Write log lines to the log file [default: on]",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Report what would be created and moved without changing anything",
)
@click.option(
    "--confirm",
    is_flag=True,
    default=False,
    help="Ask before each directory creation and each move",
)
@click.option(
    "--case-sensitive/--case-insensitive",
    default=None,
    help="Exclusion matching mode [default: platform convention]",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a JSON report of the run to this file",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with status 1 if any path or item failed",
)
@verbosity_options
@click.version_option(__version__, prog_name="docsweep")
def sweep(
    sources: Tuple[Path, ...],
    child_name: Optional[str],
    exclude: Tuple[str, ...],
    no_exclude: bool,
    log_file: Optional[Path],
    log_to_console: Optional[bool],
    log_to_file: Optional[bool],
    dry_run: bool,
    confirm: bool,
    case_sensitive: Optional[bool],
    report: Optional[Path],
    strict: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """
    Move the contents of each SOURCES directory into a subdirectory of it.

    Entries whose names match an exclusion pattern stay where they are, as
    does the destination subdirectory itself. Source paths are read from
    stdin when none are given.

    \b
    Examples:
        # Preview first
        docsweep ~/ --dry-run --log-to-console

        # Sweep two directories into "Archive"
        docsweep /srv/a /srv/b --child-name Archive

        # Keep only *.iso files in place, ask before each move
        docsweep ~/incoming -x '*.iso' --confirm

        # Paths from a pipe
        find /home -mindepth 1 -maxdepth 1 -type d | docsweep

    \b
    Default exclusions:
        .*  Desktop  Documents  Downloads  Favorites  Music  Pictures  Videos

    Failed moves are logged and do not stop the run. The exit status is 0
    unless the log cannot be opened, or --strict is given and something
    failed.
    """
    display = SweepDisplay(quiet=quiet)
    try:
        settings = Settings()
    except (SettingsError, ValidationError) as e:
        raise click.UsageError(f"Invalid DOCSWEEP_* setting: {e}")

    source_paths = read_sources(sources)
    if not source_paths:
        raise click.UsageError("No source paths given (as arguments or on stdin)")

    case_options = {} if case_sensitive is None else {"case_sensitive": case_sensitive}
    try:
        config = SweepConfig(
            sources=tuple(source_paths),
            child_name=child_name if child_name is not None else settings.child_name,
            exclude=resolve_exclude(exclude, no_exclude, settings),
            dry_run=dry_run,
            confirm=confirm,
            log=LogConfig(
                log_file=log_file or default_log_file(settings.log_dir),
                to_file=settings.log_to_file if log_to_file is None else log_to_file,
                to_console=settings.log_to_console if log_to_console is None else log_to_console,
                verbose=verbose,
            ),
            **case_options,
        )
    except ValidationError as e:
        raise click.UsageError(e.errors()[0]["msg"])

    display.show_config(config)

    # Piped source paths leave stdin at EOF, so answers come from the terminal
    prompt = terminal_prompt if config.confirm and reads_stdin(sources) else None

    try:
        run_log = setup_run_log(config.log)
    except ConfigurationError as e:
        display.error(f"✗ Error: {e}")
        sys.exit(1)

    try:
        summary = Reorganizer(config, run_log, prompt=prompt).run()
    finally:
        run_log.close()

    if report:
        summary.save(report)

    display.show_summary(summary)

    if strict and summary.has_failures:
        sys.exit(1)


if __name__ == "__main__":
    sweep()
