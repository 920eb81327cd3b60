"""
Export functionality for fluency and review reports.

This module provides JSON and Markdown renderings of analysis results.
"""

from .formatters import (
    ExportManager,
    ExportMetadata,
    JSONExporter,
    MarkdownExporter,
    format_fluency_markdown,
    format_review_markdown,
)

__all__ = [
    "ExportManager",
    "ExportMetadata",
    "JSONExporter",
    "MarkdownExporter",
    "format_fluency_markdown",
    "format_review_markdown",
]
