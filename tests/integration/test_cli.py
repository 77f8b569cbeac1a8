"""
Integration tests for the command-line interface.

The audit database is in-memory SQLite (see conftest), shared by every
command run in this process.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.main import app
from models.database import reset_db

runner = CliRunner()


@pytest.fixture
def fresh_db():
    """Start from an empty audit trail."""
    reset_db()
    yield


class TestBanner:
    """Running without a command."""

    def test_banner(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "CAMPUS ACCESS CONTROL" in result.output
        assert "Quick Start" in result.output


class TestDemo:
    """Reference walkthrough."""

    def test_demo_prints_eight_audit_lines(self) -> None:
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if "] Access " in line]
        assert len(lines) == 8
        assert lines[1].endswith("Access request: Student Aruana, major=Software Engineering -> AI Lab = false")
        assert lines[3].endswith("-> AI Lab = true")
        assert lines[4].endswith("Access request: Lecturer Dr. Maksat, dept=Computer Science -> AI Lab = true")
        assert lines[5].endswith("Access request: Staff Daniyar, position=Security -> AI Lab = true")

    def test_demo_record_then_audit(self, fresh_db) -> None:
        result = runner.invoke(app, ["demo", "--record"])
        assert result.exit_code == 0
        assert "Audit trail recorded" in result.output

        logs = runner.invoke(app, ["audit", "logs"])
        assert logs.exit_code == 0
        assert "REQUEST" in logs.output
        assert "GRANT" in logs.output

        stats = runner.invoke(app, ["audit", "stats"])
        assert stats.exit_code == 0
        assert "Requests:" in stats.output
        assert "Unique People:" in stats.output

        denials = runner.invoke(app, ["audit", "denials"])
        assert denials.exit_code == 0
        assert "AI Lab" in denials.output


class TestCheck:
    """One-off access checks."""

    def test_student_denied_lab(self) -> None:
        result = runner.invoke(app, ["check", "--person", "student", "--facility", "laboratory"])
        assert result.exit_code == 0
        assert "ACCESS DENIED" in result.output
        assert "-> AI Lab = false" in result.output

    def test_student_granted_lab(self) -> None:
        result = runner.invoke(app, ["check", "-p", "student", "-f", "laboratory", "--grant"])
        assert result.exit_code == 0
        assert "ACCESS GRANTED" in result.output
        assert "explicit grant" in result.output

    def test_lecturer_lab_by_policy(self) -> None:
        result = runner.invoke(app, ["check", "-p", "lecturer", "-f", "laboratory"])
        assert result.exit_code == 0
        assert "ACCESS GRANTED" in result.output
        assert "access level meets requirement" in result.output

    def test_unknown_person(self) -> None:
        result = runner.invoke(app, ["check", "-p", "visitor", "-f", "room"])
        assert result.exit_code == 1
        assert "Unknown role" in result.output

    def test_unknown_facility(self) -> None:
        result = runner.invoke(app, ["check", "-p", "staff", "-f", "garage"])
        assert result.exit_code == 1
        assert "Unknown facility kind" in result.output


class TestLevelsAndScenarios:
    """Reference tables and scenario runs."""

    def test_levels(self) -> None:
        result = runner.invoke(app, ["levels"])
        assert result.exit_code == 0
        assert "LABORATORY" in result.output
        assert "ADVANCED" in result.output
        assert "Policy Matrix" in result.output

    def test_scenario(self) -> None:
        result = runner.invoke(app, ["scenario"])
        assert result.exit_code == 0
        assert "6 passed" in result.output
        assert "0 failed" in result.output


class TestAuditCommands:
    """Audit trail inspection."""

    def test_logs_empty(self, fresh_db) -> None:
        result = runner.invoke(app, ["audit", "logs"])
        assert result.exit_code == 0
        assert "Audit Trail" in result.output

    def test_denials_empty(self, fresh_db) -> None:
        result = runner.invoke(app, ["audit", "denials"])
        assert result.exit_code == 0
        assert "No access denials" in result.output

    def test_logs_unknown_action(self, fresh_db) -> None:
        result = runner.invoke(app, ["audit", "logs", "--action", "delete"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_logs_unknown_decision(self, fresh_db) -> None:
        result = runner.invoke(app, ["audit", "logs", "--decision", "permt"])
        assert result.exit_code == 1
        assert "Unknown decision" in result.output

    def test_logs_decision_filter(self, fresh_db) -> None:
        runner.invoke(app, ["demo", "--record"])
        result = runner.invoke(app, ["audit", "logs", "--decision", "deny"])
        assert result.exit_code == 0
        assert "DENY" in result.output
        assert "PERMIT" not in result.output

    def test_export_json(self, fresh_db, tmp_path: Path) -> None:
        runner.invoke(app, ["demo", "--record"])
        output = tmp_path / "trail.json"

        result = runner.invoke(app, ["audit", "export", "--output", str(output)])
        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert len(data) == 8
        assert {row['action'] for row in data} == {"REQUEST", "GRANT", "REVOKE"}

    def test_export_bad_format(self, fresh_db, tmp_path: Path) -> None:
        output = tmp_path / "trail.xml"
        result = runner.invoke(app, ["audit", "export", "--output", str(output), "--format", "xml"])
        assert result.exit_code == 1
        assert "Unsupported format" in result.output
        assert not output.exists()

    def test_reset_requires_confirmation(self, fresh_db) -> None:
        runner.invoke(app, ["demo", "--record"])
        result = runner.invoke(app, ["reset"], input="y\n")
        assert result.exit_code == 0
        assert "reset complete" in result.output

        denials = runner.invoke(app, ["audit", "denials"])
        assert "No access denials" in denials.output
