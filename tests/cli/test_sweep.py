"""Tests for the sweep CLI command."""

import json
from datetime import date

import pytest
from click.testing import CliRunner

from docsweep import __version__
from docsweep.cli.sweep import read_sources, reads_stdin, resolve_exclude, sweep
from docsweep.core.config import DEFAULT_EXCLUDE, Settings
from docsweep.organization import gate as gate_module


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "sweep.log"


class TestSweepCLI:
    """Test sweep command."""

    def test_moves_loose_items(self, runner, home_dir, log_file):
        """Test a normal run."""
        result = runner.invoke(sweep, [str(home_dir), "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "Sweep Results" in result.output
        assert (home_dir / "Documents" / "notes.txt").exists()
        assert (home_dir / ".bashrc").exists()

        log_text = log_file.read_text(encoding="utf-8")
        assert "Starting run (LIVE)" in log_text
        assert "Processed 1 source path(s)" in log_text
        assert "Run complete" in log_text

    def test_dry_run(self, runner, home_dir, log_file, snapshot_tree):
        """Test that --dry-run reports and changes nothing."""
        before = snapshot_tree(home_dir)

        result = runner.invoke(
            sweep, [str(home_dir), "--dry-run", "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert snapshot_tree(home_dir) == before
        assert "[DRY RUN] Would move" in log_file.read_text(encoding="utf-8")

    def test_sources_from_stdin(self, runner, tmp_path, log_file):
        """Test that piped source paths are read one per line."""
        d1 = tmp_path / "d1"
        d2 = tmp_path / "d2"
        for source in (d1, d2):
            source.mkdir()
            (source / "x.txt").write_text("x")

        result = runner.invoke(
            sweep, ["--log-file", str(log_file)], input=f"{d1}\n\n{d2}\n"
        )

        assert result.exit_code == 0, result.output
        assert (d1 / "Documents" / "x.txt").exists()
        assert (d2 / "Documents" / "x.txt").exists()
        assert "Processed 2 source path(s)" in log_file.read_text(encoding="utf-8")

    def test_no_sources(self, runner, log_file):
        """Test that a run without sources is a usage error."""
        result = runner.invoke(sweep, ["--log-file", str(log_file)], input="")

        assert result.exit_code == 2
        assert "No source paths" in result.output

    def test_invalid_child_name(self, runner, home_dir, log_file):
        result = runner.invoke(
            sweep, [str(home_dir), "--child-name", "a/b", "--log-file", str(log_file)]
        )

        assert result.exit_code == 2
        assert not log_file.exists()

    def test_log_cannot_be_opened(self, runner, home_dir, tmp_path, snapshot_tree):
        """Test that a broken log sink aborts before touching anything."""
        before = snapshot_tree(home_dir)
        bad_log = tmp_path / "no-such-dir" / "sweep.log"

        result = runner.invoke(sweep, [str(home_dir), "--log-file", str(bad_log)])

        assert result.exit_code == 1
        assert "Cannot open log file" in result.output
        assert snapshot_tree(home_dir) == before

    def test_failures_keep_exit_status_zero(self, runner, tmp_path, home_dir, log_file):
        """Test that local errors are logged but do not fail the process."""
        missing = tmp_path / "missing"

        result = runner.invoke(
            sweep, [str(missing), str(home_dir), "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert (home_dir / "Documents" / "notes.txt").exists()
        assert " - ERROR - Source path does not exist" in log_file.read_text(encoding="utf-8")

    def test_strict(self, runner, tmp_path, home_dir, log_file):
        """Test that --strict turns local errors into exit status 1."""
        missing = tmp_path / "missing"

        result = runner.invoke(
            sweep, [str(missing), str(home_dir), "--strict", "--log-file", str(log_file)]
        )

        assert result.exit_code == 1
        assert (home_dir / "Documents" / "notes.txt").exists()

    def test_strict_without_failures(self, runner, home_dir, log_file):
        result = runner.invoke(sweep, [str(home_dir), "--strict", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output

    def test_confirm(self, runner, tmp_path, log_file):
        """Test that each move is confirmed separately."""
        source = tmp_path / "src"
        (source / "Documents").mkdir(parents=True)
        (source / "a.txt").write_text("a")
        (source / "b.txt").write_text("b")

        result = runner.invoke(
            sweep,
            [str(source), "--confirm", "--log-file", str(log_file)],
            input="y\nn\n",
        )

        assert result.exit_code == 0, result.output
        assert (source / "Documents" / "a.txt").exists()
        assert (source / "b.txt").exists()
        assert "Declined: move" in log_file.read_text(encoding="utf-8")

    def test_confirm_with_piped_sources(self, runner, tmp_path, log_file, monkeypatch):
        """Test that with piped sources the answers are read from the terminal."""
        source = tmp_path / "src"
        (source / "Documents").mkdir(parents=True)
        (source / "a.txt").write_text("a")
        (source / "b.txt").write_text("b")
        tty = tmp_path / "tty"
        tty.write_text("y\n", encoding="utf-8")
        monkeypatch.setattr(gate_module, "TERMINAL", str(tty))

        result = runner.invoke(
            sweep, ["--confirm", "--log-file", str(log_file)], input=f"{source}\n"
        )

        assert result.exit_code == 0, result.output
        assert (source / "Documents" / "a.txt").exists()
        assert (source / "Documents" / "b.txt").exists()

    def test_confirm_without_terminal_declines(self, runner, tmp_path, log_file, monkeypatch):
        """Test that an unanswerable prompt declines everything and the run completes."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        for source in (first, second):
            source.mkdir()
            (source / "a.txt").write_text("a")
        monkeypatch.setattr(gate_module, "TERMINAL", str(tmp_path / "no-tty"))

        result = runner.invoke(
            sweep,
            ["--confirm", "--log-file", str(log_file)],
            input=f"{first}\n{second}\n",
        )

        assert result.exit_code == 0, result.output
        assert (first / "a.txt").exists()
        assert (second / "a.txt").exists()
        log_text = log_file.read_text(encoding="utf-8")
        assert "declining all remaining actions" in log_text
        assert "Processed 2 source path(s)" in log_text
        assert "Run complete" in log_text

    def test_confirm_input_runs_out(self, runner, tmp_path, log_file):
        """Test that running out of answers declines the rest instead of aborting."""
        source = tmp_path / "src"
        (source / "Documents").mkdir(parents=True)
        for name in ("a.txt", "b.txt", "c.txt"):
            (source / name).write_text(name)

        result = runner.invoke(
            sweep, [str(source), "--confirm", "--log-file", str(log_file)], input="y\n"
        )

        assert result.exit_code == 0, result.output
        assert (source / "Documents" / "a.txt").exists()
        assert (source / "b.txt").exists()
        assert (source / "c.txt").exists()
        assert "Run complete" in log_file.read_text(encoding="utf-8")

    def test_own_log_in_source(self, runner, tmp_path, monkeypatch):
        """Test that the default log file stays put when the cwd is swept."""
        source = tmp_path / "src"
        source.mkdir()
        (source / "a.txt").write_text("a")
        monkeypatch.chdir(source)
        log_name = f"docsweep_{date.today():%Y-%m-%d}.log"

        result = runner.invoke(sweep, ["."])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in source.iterdir()) == ["Documents", log_name]
        assert sorted(p.name for p in (source / "Documents").iterdir()) == ["a.txt"]
        assert "Run complete" in (source / log_name).read_text(encoding="utf-8")

    def test_own_log_in_source_dry_run(self, runner, tmp_path, monkeypatch, snapshot_tree):
        """Test that a dry run in the swept cwd changes nothing but its log."""
        source = tmp_path / "src"
        source.mkdir()
        (source / "a.txt").write_text("a")
        monkeypatch.chdir(source)
        log_name = f"docsweep_{date.today():%Y-%m-%d}.log"
        before = snapshot_tree(source)

        result = runner.invoke(sweep, [".", "--dry-run"])

        assert result.exit_code == 0, result.output
        after = snapshot_tree(source)
        assert after.pop(log_name)
        assert after == before
        log_lines = (source / log_name).read_text(encoding="utf-8").splitlines()
        assert any("Would move" in line and "a.txt" in line for line in log_lines)
        assert not any("Would move" in line and log_name in line for line in log_lines)

    def test_failures_listed(self, runner, tmp_path, home_dir, log_file):
        """Test that every failure is printed after the results table."""
        missing = tmp_path / "missing"
        (home_dir / "Documents" / "notes.txt").write_text("older")

        result = runner.invoke(
            sweep, [str(missing), str(home_dir), "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Source path does not exist" in result.output
        assert "already exists" in result.output
        assert "2 error(s) occurred" in result.output

    def test_failures_listed_when_quiet(self, runner, tmp_path, log_file):
        missing = tmp_path / "missing"

        result = runner.invoke(sweep, [str(missing), "-q", "--log-file", str(log_file)])

        assert "Sweep Results" not in result.output
        assert "Source path does not exist" in result.output

    def test_malformed_setting(self, runner, home_dir, log_file, monkeypatch):
        """Test that a broken DOCSWEEP_* variable is a usage error."""
        monkeypatch.setenv("DOCSWEEP_EXCLUDE", "not json")

        result = runner.invoke(sweep, [str(home_dir), "--log-file", str(log_file)])

        assert result.exit_code == 2
        assert "Invalid DOCSWEEP_* setting" in result.output
        assert (home_dir / "notes.txt").exists()


    def test_custom_exclude_replaces_defaults(self, runner, home_dir, log_file):
        """Test that -x replaces the default exclusion set."""
        (home_dir / "disk.iso").write_bytes(b"\0")

        result = runner.invoke(
            sweep, [str(home_dir), "-x", "*.iso", "-x", ".*", "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert (home_dir / "disk.iso").exists()
        assert (home_dir / ".bashrc").exists()
        assert (home_dir / "Documents" / "Music").is_dir()

    def test_no_exclude(self, runner, home_dir, log_file):
        result = runner.invoke(sweep, [str(home_dir), "--no-exclude", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert (home_dir / "Documents" / ".bashrc").exists()

    def test_child_name(self, runner, home_dir, log_file):
        result = runner.invoke(
            sweep, [str(home_dir), "-n", "Archive", "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert (home_dir / "Archive" / "notes.txt").exists()

    def test_report(self, runner, home_dir, tmp_path, log_file):
        """Test that --report writes a JSON summary."""
        report = tmp_path / "report.json"

        result = runner.invoke(
            sweep, [str(home_dir), "--report", str(report), "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(report.read_text(encoding="utf-8"))
        assert data["processed"] == 1
        assert data["dry_run"] is False
        assert len(data["paths"][0]["moves"]) == 3

    def test_default_log_file(self, runner, home_dir, tmp_path, monkeypatch):
        """Test that the log goes to ./docsweep_<date>.log by default."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(sweep, [str(home_dir)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / f"docsweep_{date.today():%Y-%m-%d}.log").exists()

    def test_no_log_to_file(self, runner, home_dir, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(sweep, [str(home_dir), "--no-log-to-file"])

        assert result.exit_code == 0, result.output
        assert list(tmp_path.glob("*.log")) == []

    def test_quiet(self, runner, home_dir, log_file):
        result = runner.invoke(sweep, [str(home_dir), "-q", "--log-file", str(log_file)])

        assert result.exit_code == 0, result.output
        assert "Sweep Results" not in result.output

    def test_version(self, runner):
        result = runner.invoke(sweep, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestHelpers:
    """Test CLI helper functions."""

    def test_resolve_exclude(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings()

        assert resolve_exclude((), False, settings) == DEFAULT_EXCLUDE
        assert resolve_exclude(("*.iso",), False, settings) == {"*.iso"}
        assert resolve_exclude(("*.iso",), True, settings) == frozenset()

    def test_read_sources_keeps_arguments(self, tmp_path):
        assert read_sources([tmp_path]) == [tmp_path]

    def test_reads_stdin(self, tmp_path):
        assert reads_stdin([])
        assert reads_stdin([tmp_path, "-"])
        assert not reads_stdin([tmp_path])
