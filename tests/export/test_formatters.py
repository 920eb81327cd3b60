"""Unit tests for report export formatters."""

import json

import pytest

from src.export.formatters import (
    ExportManager,
    JSONExporter,
    MarkdownExporter,
    format_fluency_markdown,
)
from src.tools.fluency_analysis import FluencyOptions, analyze_fluency
from src.tools.review_tools import review_article


@pytest.fixture
def fluency_report(worst_case_article):
    return analyze_fluency(
        worst_case_article, FluencyOptions(focus_areas=("sentence_length",))
    )


class TestMarkdownExporter:
    """Test Markdown rendering."""

    def test_fluency_report(self, fluency_report):
        """Test the headline, score table and suggestion sections."""
        text = MarkdownExporter().render(fluency_report)

        assert text.startswith("# Fluency Report")
        assert "**Fluency score:** 1.0/5.0" in text
        assert "| **sentence_length** | 3.2 | ⚠️ NEED IMPROVEMENT |" in text
        assert "### question_ratio (7)" in text
        assert "**High priority:**" in text

    def test_clean_report_has_no_findings_section(self, clean_article):
        """Test that a clean report omits findings and suggestions."""
        lines = format_fluency_markdown(analyze_fluency(clean_article))

        assert "## Findings" not in lines
        assert "## Suggestions" not in lines

    def test_review_report(self, ai_tone_article):
        """Test review rendering with nested fluency section."""
        review = review_article(ai_tone_article, workspace_type="tech")
        text = MarkdownExporter().render(review)

        assert text.startswith("# Article Review")
        assert "**Workspace:** tech" in text
        assert "## AI Tone" in text
        assert "- 众所周知 (template_starts) x1" in text
        assert "## Fluency Report" in text


class TestJSONExporter:
    """Test JSON rendering."""

    def test_render_without_metadata(self, fluency_report):
        """Test that the report is nested under a report key."""
        data = json.loads(JSONExporter().render(fluency_report))

        assert "metadata" not in data
        assert data["report"]["fluency_score"] == 1.0

    def test_chinese_text_not_escaped(self, fluency_report):
        """Test that CJK text is written as-is."""
        assert "为什么" in JSONExporter().render(fluency_report)


class TestExportManager:
    """Test ExportManager."""

    def test_available_formats(self):
        """Test the registered formats."""
        assert ExportManager().get_available_formats() == ["json", "markdown"]

    def test_export_json_with_metadata(self, tmp_path, fluency_report):
        """Test that exported JSON carries metadata."""
        output = tmp_path / "reports" / "report.json"

        assert ExportManager().export_result(fluency_report, output, source="draft.md")

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["metadata"]["report_type"] == "fluency"
        assert data["metadata"]["source"] == "draft.md"
        assert data["metadata"]["fluency_score"] == 1.0
        assert data["report"]["status"] == "optimization_complete"

    def test_export_review_markdown(self, tmp_path, clean_article):
        """Test exporting a review as Markdown."""
        output = tmp_path / "review.md"
        review = review_article(clean_article)

        assert ExportManager().export_result(review, output, "markdown")
        assert output.read_text(encoding="utf-8").startswith("# Article Review")

    def test_unsupported_format(self, fluency_report):
        """Test that unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported export format"):
            ExportManager().render(fluency_report, "pdf")

    def test_uncreatable_directory_returns_false(self, tmp_path, fluency_report):
        """Test that a parent path blocked by a file is reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        assert ExportManager().export_result(
            fluency_report, blocker / "reports" / "report.json"
        ) is False


class TestReviewMarkdown:
    """Test the guidance sections of the review rendering."""

    def test_review_guidance_sections(self, clean_article):
        """Test that passes, standards, outputs, next steps and notes are rendered."""
        text = MarkdownExporter().render(review_article(clean_article))

        assert "## Review Process" in text
        assert "### 第二遍：风格与语气审校 (20分钟)" in text
        assert "- AI腔表达检测: 识别并标记所有AI腔表达 (AI腔表达<2%)" in text
        assert "## Quality Standards" in text
        assert "- ai_tone_ratio: <2%" in text
        assert "## Expected Outputs" in text
        assert "1. 开始第一遍审校：内容与逻辑" in text
        assert "- 第二遍是降AI味的关键" in text
