"""
Tools package for Fluency-Crew.

This package contains deterministic text analysis tools for Chinese
technical articles: a heuristic fluency analyzer, an AI-tone phrase scan
and a review flow that combines them. Agent-facing wrappers live in
``agent_tools``.
"""

from .ai_tone import AIToneAnalysis, detect_ai_tone
from .fluency_analysis import (
    DimensionScore,
    Finding,
    FluencyOptions,
    FluencyReport,
    analyze_fluency,
)
from .review_tools import ArticleReview, review_article
from .segmentation import Document, segment

__all__ = [
    # Segmentation
    "Document",
    "segment",
    # Fluency analysis
    "analyze_fluency",
    "FluencyOptions",
    "FluencyReport",
    "DimensionScore",
    "Finding",
    # Review flow
    "detect_ai_tone",
    "AIToneAnalysis",
    "review_article",
    "ArticleReview",
]
