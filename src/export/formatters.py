"""
Export formatters for fluency and review reports.

This module renders FluencyReport and ArticleReview results as JSON
records or Markdown reports and writes them to disk. The analyzer never
persists anything itself; saving a report is done here, at the caller's
request.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..tools.fluency_analysis import FluencyReport
from ..tools.review_tools import (
    EXPECTED_OUTPUTS,
    IMPORTANT_NOTES,
    QUALITY_STANDARDS,
    REVIEW_NEXT_STEPS,
    REVIEW_PASSES,
    ArticleReview,
)

Report = Union[FluencyReport, ArticleReview]


@dataclass
class ExportMetadata:
    """Metadata for exported reports."""

    export_timestamp: str
    export_format: str
    report_type: str
    source: Optional[str] = None
    fluency_score: Optional[float] = None
    export_version: str = "1.0"


class BaseExporter(ABC):
    """Base class for report exporters."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize exporter with configuration.

        Args:
            config: Export configuration dictionary
        """
        self.config = config or {}

    @abstractmethod
    def render(self, result: Report, metadata: Optional[ExportMetadata] = None) -> str:
        """Render a report to text."""

    def export(
        self, result: Report, output_path: Path, metadata: Optional[ExportMetadata] = None
    ) -> bool:
        """Export a report to the given path.

        Args:
            result: FluencyReport or ArticleReview
            output_path: Path of the file to write
            metadata: Optional export metadata

        Returns:
            True if export successful, False otherwise
        """
        try:
            content = self.render(result, metadata)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(content)
            return True
        except OSError as e:
            print(f"❌ {type(self).__name__} failed to write {output_path}: {e}")
            return False


class JSONExporter(BaseExporter):
    """Export reports as structured JSON."""

    def render(self, result: Report, metadata: Optional[ExportMetadata] = None) -> str:
        export_data: Dict[str, Any] = {}
        if metadata:
            export_data["metadata"] = asdict(metadata)
        export_data["report"] = result.to_dict()
        return json.dumps(
            export_data,
            indent=self.config.get("indent", 2),
            ensure_ascii=False,
            default=str,
        )


class MarkdownExporter(BaseExporter):
    """Export reports as a readable Markdown document."""

    def render(self, result: Report, metadata: Optional[ExportMetadata] = None) -> str:
        if isinstance(result, ArticleReview):
            lines = format_review_markdown(result)
        else:
            lines = format_fluency_markdown(result)

        if metadata:
            lines += [
                "",
                "---",
                f"*Exported {metadata.export_timestamp}"
                + (f" from {metadata.source}" if metadata.source else "")
                + "*",
            ]
        return "\n".join(lines) + "\n"


def format_fluency_markdown(report: FluencyReport, heading_level: int = 1) -> List[str]:
    """Render a FluencyReport as Markdown lines."""
    h = "#" * heading_level
    lines = [
        f"{h} Fluency Report",
        "",
        f"**Fluency score:** {report.fluency_score:.1f}/5.0",
        f"**Target audience:** {report.options.target_audience} "
        f"({report.target_audience_note})",
        f"**Optimization level:** {report.options.optimization_level}",
        "",
        f"{h}# Score Breakdown",
        "",
        "| Dimension | Score | Status | Criteria |",
        "|---|---|---|---|",
    ]
    for dimension in report.dimensions:
        name = f"**{dimension.name}**" if dimension.focused else dimension.name
        lines.append(
            f"| {name} | {dimension.score:.1f} | {dimension.status} "
            f"| {dimension.pass_criteria} |"
        )

    grouped = report.findings_by_dimension()
    if report.findings:
        lines += ["", f"{h}# Findings"]
        for dimension, findings in grouped.items():
            if not findings:
                continue
            lines += ["", f"{h}## {dimension} ({len(findings)})", ""]
            for finding in findings:
                lines.append(f"- {finding.location}: {finding.excerpt}")
                lines.append(f"  - {finding.suggestion}")

    buckets = [
        ("High priority", report.high_priority),
        ("Medium priority", report.medium_priority),
        ("Low priority", report.low_priority),
    ]
    if any(items for _, items in buckets):
        lines += ["", f"{h}# Suggestions"]
        for title, items in buckets:
            if items:
                lines += ["", f"**{title}:**"]
                lines += [f"- {item}" for item in items]

    return lines


def format_review_markdown(review: ArticleReview) -> List[str]:
    """Render an ArticleReview as Markdown lines."""
    level = review.level
    lines = [
        "# Article Review",
        "",
        f"**Level:** {level['name']} ({review.review_level}, {level['time']})",
        f"**Focus:** {', '.join(level['focus'])}",
    ]
    if review.workspace_type:
        lines.append(f"**Workspace:** {review.workspace_type}")
    lines.append(f"**Overall:** {'✅ PASS' if review.passed else '⚠️ NEED IMPROVEMENT'}")

    if review.ai_tone is not None:
        ai_tone = review.ai_tone
        lines += [
            "",
            "## AI Tone",
            "",
            f"{ai_tone.affected_sentences}/{ai_tone.total_sentences} sentences "
            f"({ai_tone.ai_tone_percentage:.1f}%) contain AI-tone phrasing "
            f"- {'✅ PASS' if ai_tone.passed else '⚠️ NEED IMPROVEMENT'}",
        ]
        if ai_tone.matched_phrases:
            lines.append("")
            for match in ai_tone.matched_phrases:
                lines.append(
                    f"- {match['phrase']} ({match['category']}) x{match['count']}"
                )

    if review.fluency is not None:
        lines.append("")
        lines += format_fluency_markdown(review.fluency, heading_level=2)

    lines += ["", "## Review Process"]
    for review_pass in REVIEW_PASSES.values():
        lines += ["", f"### {review_pass['name']} ({review_pass['expected_time']})", ""]
        for check in review_pass["checks"]:
            lines.append(
                f"- {check['item']}: {check['description']} ({check['pass_criteria']})"
            )
        lines.append(f"- Common issues: {', '.join(review_pass['common_issues'])}")

    lines += ["", "## Quality Standards", ""]
    for key, value in QUALITY_STANDARDS["pass_criteria"].items():
        lines.append(f"- {key}: {value}")

    lines += ["", "## Expected Outputs", ""]
    lines += [f"- {output}" for output in EXPECTED_OUTPUTS]

    lines += ["", "## Next Steps", ""]
    lines += list(REVIEW_NEXT_STEPS)

    lines += ["", "## Important Notes", ""]
    lines += [f"- {note}" for note in IMPORTANT_NOTES]

    return lines


class ExportManager:
    """Manages export formats and handles export requests."""

    def __init__(self) -> None:
        self.exporters: Dict[str, BaseExporter] = {
            "json": JSONExporter(),
            "markdown": MarkdownExporter(),
        }

    def render(self, result: Report, format_type: str = "markdown") -> str:
        """Render a report without writing it anywhere."""
        return self._exporter(format_type).render(result)

    def export_result(
        self,
        result: Report,
        output_path: Path,
        format_type: str = "json",
        source: Optional[str] = None,
    ) -> bool:
        """Export a report in the specified format.

        Args:
            result: FluencyReport or ArticleReview
            output_path: Path where to save the exported file
            format_type: Export format ('json' or 'markdown')
            source: Optional description of the analyzed input

        Returns:
            True if export successful
        """
        exporter = self._exporter(format_type)
        metadata = self._create_metadata(result, format_type, source)
        return exporter.export(result, output_path, metadata)

    def get_available_formats(self) -> List[str]:
        return list(self.exporters.keys())

    def _exporter(self, format_type: str) -> BaseExporter:
        if format_type not in self.exporters:
            raise ValueError(
                f"Unsupported export format: {format_type} "
                f"(available: {', '.join(self.exporters)})"
            )
        return self.exporters[format_type]

    def _create_metadata(
        self, result: Report, format_type: str, source: Optional[str]
    ) -> ExportMetadata:
        if isinstance(result, ArticleReview):
            report_type = "article_review"
            score = result.fluency.fluency_score if result.fluency else None
        else:
            report_type = "fluency"
            score = result.fluency_score

        return ExportMetadata(
            export_timestamp=datetime.now().isoformat(),
            export_format=format_type,
            report_type=report_type,
            source=source,
            fluency_score=score,
        )
