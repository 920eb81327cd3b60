"""
Tests for CLI functionality.

Tests the analyze, review and config commands.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from src.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestAnalyzeCommand:
    """Test the analyze command."""

    def test_inline_text(self, runner, logging_manager, long_sentence_text):
        """Test analyzing text passed as an argument."""
        result = runner.invoke(cli, ["analyze", long_sentence_text])

        assert result.exit_code == 0
        assert "# Fluency Report" in result.output
        assert "**Fluency score:** 3.2/5.0" in result.output

    def test_file_to_json_output(self, runner, logging_manager, worst_case_article):
        """Test analyzing a file and saving the JSON report."""
        with runner.isolated_filesystem():
            Path("draft.md").write_text(worst_case_article, encoding="utf-8")

            result = runner.invoke(
                cli,
                ["analyze", "draft.md", "--format", "json", "--output", "report.json"],
            )

            assert result.exit_code == 0
            assert "📁 Reading content from: draft.md" in result.output
            data = json.loads(Path("report.json").read_text(encoding="utf-8"))
            assert data["metadata"]["source"] == "draft.md"
            assert data["report"]["fluency_score"] == 1.0

    def test_stdin(self, runner, logging_manager, clean_article):
        """Test reading the article from stdin."""
        result = runner.invoke(cli, ["analyze"], input=clean_article)

        assert result.exit_code == 0
        assert "**Fluency score:** 5.0/5.0" in result.output

    def test_empty_stdin(self, runner, logging_manager):
        """Test that blank stdin produces the all-zero report."""
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                ["analyze", "--format", "json", "--output", "report.json"],
                input="   \n",
            )

            assert result.exit_code == 0
            report = json.loads(Path("report.json").read_text(encoding="utf-8"))["report"]
            assert report["fluency_score"] == 5.0
            assert report["analysis_results"]["sentence_length"]["long_percentage"] == "0.0"

    def test_empty_text_argument(self, runner, logging_manager):
        """Test that an empty CONTENT argument is analyzed, not rejected."""
        result = runner.invoke(cli, ["analyze", ""])

        assert result.exit_code == 0
        assert "**Fluency score:** 5.0/5.0" in result.output

    def test_no_content_from_terminal(self, runner, logging_manager):
        """Test that a missing argument with an interactive stdin is an error."""
        with patch("src.cli.main._stdin_is_tty", return_value=True):
            result = runner.invoke(cli, ["analyze"])

        assert result.exit_code == 1
        assert "No content provided" in result.output

    def test_level_and_focus(self, runner, logging_manager, long_sentence_text):
        """Test that options reach the analyzer."""
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                [
                    "analyze",
                    long_sentence_text,
                    "--level",
                    "deep",
                    "--focus",
                    "rhythm_control",
                    "--output",
                    "report.json",
                    "--format",
                    "json",
                ],
            )

            assert result.exit_code == 0
            report = json.loads(Path("report.json").read_text(encoding="utf-8"))["report"]
            assert report["options"]["focus_areas"] == ["rhythm_control"]
            assert len(report["optimization_suggestions"]["low_priority"]) == 4

    def test_invalid_focus(self, runner, logging_manager):
        """Test that click rejects unknown focus areas."""
        result = runner.invoke(cli, ["analyze", "正文。", "--focus", "tone"])

        assert result.exit_code == 2

    def test_fail_under(self, runner, logging_manager, long_sentence_text):
        """Test that a low score sets exit status 2."""
        result = runner.invoke(cli, ["analyze", long_sentence_text, "--fail-under", "4.0"])

        assert result.exit_code == 2
        assert "below 4.0" in result.output

    def test_fail_under_passes(self, runner, logging_manager, clean_article):
        """Test that a score at the threshold exits cleanly."""
        result = runner.invoke(cli, ["analyze", clean_article, "--fail-under", "5.0"])

        assert result.exit_code == 0

    def test_unwritable_output(self, runner, logging_manager, long_sentence_text):
        """Test that a failed save exits with status 1."""
        with runner.isolated_filesystem():
            Path("blocker").write_text("file", encoding="utf-8")

            result = runner.invoke(
                cli, ["analyze", long_sentence_text, "--output", "blocker/report.md"]
            )

            assert result.exit_code == 1
            assert "Error saving to blocker/report.md" in result.output

    def test_bad_config(self, runner, logging_manager, tmp_path):
        """Test that an invalid config file stops the run."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("unknown_threshold: 1\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", "正文。", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error loading config" in result.output

    def test_session_logged(self, runner, logging_manager, long_sentence_text):
        """Test that each run writes a logging session."""
        runner.invoke(cli, ["analyze", long_sentence_text])

        info_files = list(logging_manager.base_log_dir.glob("session_*/session_info.json"))
        assert len(info_files) == 1
        info = json.loads(info_files[0].read_text(encoding="utf-8"))
        assert info["command"] == "analyze"
        assert info["end_time"] is not None


class TestReviewCommand:
    """Test the review command."""

    def test_review_markdown(self, runner, logging_manager, ai_tone_article):
        """Test a review with a workspace."""
        result = runner.invoke(cli, ["review", ai_tone_article, "--workspace", "blog"])

        assert result.exit_code == 0
        assert "# Article Review" in result.output
        assert "**Workspace:** blog" in result.output

    def test_review_json_without_fluency(self, runner, logging_manager, clean_article):
        """Test a quick review saved as JSON with fluency disabled."""
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                [
                    "review",
                    clean_article,
                    "--level",
                    "quick",
                    "--no-fluency",
                    "--format",
                    "json",
                    "-o",
                    "review.json",
                ],
            )

            assert result.exit_code == 0
            data = json.loads(Path("review.json").read_text(encoding="utf-8"))
            assert data["metadata"]["report_type"] == "article_review"
            assert data["report"]["fluency_optimization"]["status"] == "disabled"
            assert data["report"]["fast_track"]["enabled"] is True


class TestConfigCommand:
    """Test the config command."""

    def test_defaults(self, runner):
        """Test the default configuration listing."""
        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 0
        assert "📊 Fluency-Crew Configuration" in result.output
        assert "Source: built-in defaults" in result.output
        assert "long_sentence_chars: 30" in result.output
        assert "Tip:" in result.output

    def test_config_file(self, runner, tmp_path):
        """Test listing overrides from a file."""
        config_file = tmp_path / "fluency.yaml"
        config_file.write_text("long_sentence_chars: 40\n", encoding="utf-8")

        result = runner.invoke(cli, ["config", "--config", str(config_file)])

        assert result.exit_code == 0
        assert f"Source: {config_file}" in result.output
        assert "long_sentence_chars: 40" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        """Test that a missing config file is an error."""
        result = runner.invoke(cli, ["config", "--config", str(tmp_path / "none.yaml")])

        assert result.exit_code == 1
        assert "Fluency config not found" in result.output
