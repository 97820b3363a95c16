"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from pfe.cli import app

runner = CliRunner()

PIRATE_PROMPT = "Remember your role: you are a pirate captain. Find treasure."


class TestAnalyzeCommand:
    def test_json_output(self) -> None:
        result = runner.invoke(app, ["analyze", "--text", PIRATE_PROMPT, "--format", "json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["score"]["correctness"] == 55
        assert payload["overall"] == 85
        assert payload["label"] == "Excellent"
        assert [s["id"] for s in payload["suggestions"]][0] == "passive-voice-1"

    def test_empty_text(self) -> None:
        result = runner.invoke(app, ["analyze", "--text", "", "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["suggestions"] == []
        assert payload["overall"] == 100

    def test_table_output(self, tmp_path: Path) -> None:
        prompt = tmp_path / "prompt.txt"
        prompt.write_text(PIRATE_PROMPT)
        result = runner.invoke(app, ["analyze", str(prompt)])
        assert result.exit_code == 0, result.output
        assert "Rewrite in active voice" in result.output
        assert "Excellent" in result.output

    def test_stdin(self) -> None:
        result = runner.invoke(app, ["analyze", "-", "--format", "json"], input="Do this etc")
        assert result.exit_code == 0
        assert json.loads(result.output)["score"]["clarity"] == 60

    def test_writes_html(self, tmp_path: Path) -> None:
        out = tmp_path / "reports" / "feedback.html"
        result = runner.invoke(
            app, ["analyze", "--text", PIRATE_PROMPT, "--format", "html", "--output", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert "<!DOCTYPE html>" in out.read_text()

    def test_table_to_file_rejected(self, tmp_path: Path) -> None:
        out = tmp_path / "feedback.txt"
        result = runner.invoke(app, ["analyze", "--text", PIRATE_PROMPT, "--output", str(out)])
        assert result.exit_code == 1
        assert "terminal-only" in result.output
        assert not out.exists()

    def test_markdown_to_stdout(self) -> None:
        result = runner.invoke(app, ["analyze", "--text", PIRATE_PROMPT, "--format", "markdown"])
        assert result.exit_code == 0
        assert "# Prompt Feedback" in result.output

    def test_fail_under(self) -> None:
        result = runner.invoke(app, ["analyze", "--text", "Do this etc", "--fail-under", "95"])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_no_input(self) -> None:
        result = runner.invoke(app, ["analyze"])
        assert result.exit_code == 1

    def test_config_applied(self, tmp_config: Path) -> None:
        result = runner.invoke(
            app, ["analyze", "--text", "Do this etc", "--config", str(tmp_config), "--format", "json"]
        )
        assert result.exit_code == 0
        # clarity penalty 25 from the fixture config
        assert json.loads(result.output)["score"]["clarity"] == 50

    def test_bad_config(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yml"
        bad.write_text("just a string")
        result = runner.invoke(app, ["analyze", "--text", "hi", "--config", str(bad)])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output


class TestReviewCommand:
    def test_yes_applies_fix(self, tmp_path: Path) -> None:
        prompt = tmp_path / "prompt.txt"
        prompt.write_text(PIRATE_PROMPT)
        result = runner.invoke(app, ["review", str(prompt), "--yes"])
        assert result.exit_code == 0, result.output
        assert prompt.read_text() == (
            "Remember your role: You must act as a pirate captain. Find treasure."
        )

    def test_non_interactive_leaves_file(self, tmp_path: Path) -> None:
        prompt = tmp_path / "prompt.txt"
        prompt.write_text(PIRATE_PROMPT)
        result = runner.invoke(app, ["review", str(prompt)])
        assert result.exit_code == 0, result.output
        assert prompt.read_text() == PIRATE_PROMPT
        assert "No changes made" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["review", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1


class TestAgentCommand:
    def test_valid_agent(self, agent_file: Path) -> None:
        result = runner.invoke(app, ["agent", str(agent_file)])
        assert result.exit_code == 0, result.output
        assert "Treasure Hunter" in result.output
        assert "Exa Search" in result.output
        assert "Rewrite in active voice" in result.output

    def test_unknown_tool(self, tmp_path: Path) -> None:
        path = tmp_path / "agent.yml"
        path.write_text("title: Scout\ntools:\n  - teleport\n")
        result = runner.invoke(app, ["agent", str(path)])
        assert result.exit_code == 1
        assert "Agent validation failed" in result.output


class TestToolsCommand:
    def test_lists_catalog(self) -> None:
        result = runner.invoke(app, ["tools"])
        assert result.exit_code == 0
        assert "Available tools" in result.output


class TestValidateCommand:
    def test_valid(self, tmp_config: Path) -> None:
        result = runner.invoke(app, ["validate", "--config", str(tmp_config)])
        assert result.exit_code == 0
        assert "Config is valid" in result.output

    def test_invalid(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yml"
        bad.write_text("min_words: 900\nmax_words: 10\n")
        result = runner.invoke(app, ["validate", "--config", str(bad)])
        assert result.exit_code == 1
