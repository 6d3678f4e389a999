#!/usr/bin/env python3
"""
Integration tests for the logbook CLI.

Runs the click commands end to end against a temporary database.
"""
import csv
import io

import pytest
from click.testing import CliRunner

from scobro.database.cli import cli


class TestLogbookCLI:
    """Test logbook CLI commands with a temporary database."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Temporary database and log locations."""
        return {
            "db_path": tmp_path / "logbook.db",
            "log_dir": tmp_path / "logs",
            "export_dir": tmp_path / "exports",
        }

    def invoke_cli(self, runner, test_dirs, args, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--db-path", str(test_dirs["db_path"]),
            "--log-dir", str(test_dirs["log_dir"]),
        ]
        return runner.invoke(cli, base_args + args, **kwargs)

    def add_note(self, runner, test_dirs, content="stand-up", *extra):
        return self.invoke_cli(
            runner,
            test_dirs,
            ["add", "2024-01-01T09:00:00Z", "--content", content, *extra],
        )

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "logbook" in result.output.lower()

    def test_init_command(self, runner, test_dirs):
        """'init' creates the database file."""
        result = self.invoke_cli(runner, test_dirs, ["init"])

        assert result.exit_code == 0
        assert "Logbook ready" in result.output
        assert test_dirs["db_path"].exists()
        assert test_dirs["db_path"].stat().st_size > 0

    def test_add_then_list(self, runner, test_dirs):
        result = self.add_note(
            runner, test_dirs, "stand-up", "--tag", "team-a", "--person", "alice", "--jira", "OPS-1"
        )
        assert result.exit_code == 0
        assert "Entry created" in result.output

        result = self.invoke_cli(runner, test_dirs, ["list"])

        assert result.exit_code == 0
        assert "2024-01-01 09:00:00" in result.output
        assert "[Note] stand-up" in result.output
        assert "tags: team-a" in result.output
        assert "people: alice" in result.output
        assert "jira: OPS-1" in result.output

    def test_list_empty(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["list"])

        assert result.exit_code == 0
        assert "No entries yet" in result.output

    def test_add_invalid_timestamp(self, runner, test_dirs):
        result = self.invoke_cli(
            runner, test_dirs, ["add", "yesterday", "--content", "oops"]
        )

        assert result.exit_code == 1
        assert "ValidationError" in result.output

        listing = self.invoke_cli(runner, test_dirs, ["list"])
        assert "No entries yet" in listing.output

    def test_export_csv_to_stdout(self, runner, test_dirs):
        self.add_note(runner, test_dirs, 'say "hi"', "--type", "Action")

        result = self.invoke_cli(runner, test_dirs, ["export", "csv"])

        assert result.exit_code == 0
        rows = list(csv.reader(io.StringIO(result.output)))
        assert rows[0] == ["Date", "Time", "Type", "Content", "Project", "Tags", "Jira", "People"]
        assert rows[1][:4] == ["2024-01-01", "09:00:00", "Action", 'say "hi"']

    def test_export_markdown_to_file(self, runner, test_dirs):
        self.add_note(runner, test_dirs, "stand-up", "--project", "Apollo")
        output = test_dirs["export_dir"] / "logbook.md"

        result = self.invoke_cli(runner, test_dirs, ["export", "markdown", "-o", str(output)])

        assert result.exit_code == 0
        assert "Export complete" in result.output
        text = output.read_text(encoding="utf-8")
        assert text.startswith("# ScoBro Logbook Export")
        assert "**Project:** 📂 Apollo" in text

    def test_tags_listing(self, runner, test_dirs):
        self.add_note(runner, test_dirs, "stand-up", "--tag", "zeta", "--tag", "alpha")

        result = self.invoke_cli(runner, test_dirs, ["tags"])

        assert result.exit_code == 0
        assert "Tags (2)" in result.output
        assert result.output.index("alpha") < result.output.index("zeta")

    def test_projects_and_meetings_empty(self, runner, test_dirs):
        assert "Projects (0)" in self.invoke_cli(runner, test_dirs, ["projects"]).output
        assert "Meetings (0)" in self.invoke_cli(runner, test_dirs, ["meetings"]).output

    def test_delete_entry(self, runner, test_dirs):
        result = self.add_note(runner, test_dirs)
        entry_id = result.output.split("Entry created: ")[1].split()[0]

        result = self.invoke_cli(runner, test_dirs, ["delete-entry", entry_id])

        assert result.exit_code == 0
        assert "No entries yet" in self.invoke_cli(runner, test_dirs, ["list"]).output
