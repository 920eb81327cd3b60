"""
Agent-facing tool entry points.

These wrap the fluency analyzer and the review flow as Strands tools, so a
host agent gets a JSON input schema derived from each signature and
docstring. Requests are validated against the tool's JSON schema, logged
in the active session and answered with JSON-compatible dictionaries.
"""

from typing import Any, Optional

from strands import tool

from ..config.fluency_config import FluencyConfigLoader
from ..validation.request_validator import (
    validate_fluency_request,
    validate_review_request,
)
from .fluency_analysis import analyze_fluency
from .logging_utils import log_tool_execution
from .review_tools import review_article


@tool
def fluency_optimizer(
    article_content: str,
    optimization_level: str = "standard",
    target_audience: str = "general",
    focus_areas: Optional[list[str]] = None,
) -> dict[str, Any]:
    """Score the fluency of an article and list concrete fixes.

    Checks paragraph transitions, sentence length, information density,
    paragraph length, interrogative sentences and poetic line breaks, and
    returns a 1.0-5.0 fluency score with per-dimension diagnostics.

    Args:
        article_content: Article text in Markdown
        optimization_level: basic, standard or deep
        target_audience: Reader group, e.g. general, technical, academic, creative
        focus_areas: Any of paragraph_transition, sentence_length, info_density, rhythm_control
    """
    request: dict[str, Any] = {
        "article_content": article_content,
        "optimization_level": optimization_level,
        "target_audience": target_audience,
    }
    if focus_areas is not None:
        request["focus_areas"] = focus_areas
    return run_fluency_optimizer(request)


@tool(name="review_article")
def review_article_tool(
    article_content: str,
    review_level: str = "standard",
    workspace_type: Optional[str] = None,
    enable_fluency_optimization: bool = True,
    use_ai_tone_filter: bool = True,
) -> dict[str, Any]:
    """Review an article for AI-tone phrasing and fluency.

    Args:
        article_content: Article text in Markdown
        review_level: quick, standard or deep
        workspace_type: tech, blog, paper or promptlab
        enable_fluency_optimization: Run the fluency analysis
        use_ai_tone_filter: Scan for AI-tone phrasing
    """
    return run_review_article(
        {
            "article_content": article_content,
            "review_level": review_level,
            "workspace_type": workspace_type,
            "enable_fluency_optimization": enable_fluency_optimization,
            "use_ai_tone_filter": use_ai_tone_filter,
        }
    )


@log_tool_execution("fluency_optimizer")
def run_fluency_optimizer(request: dict[str, Any]) -> dict[str, Any]:
    """Validate a fluency_optimizer request and run the analysis."""
    content, options = validate_fluency_request(request)
    config = FluencyConfigLoader().load()
    return analyze_fluency(content, options, config).to_dict()


@log_tool_execution("review_article")
def run_review_article(request: dict[str, Any]) -> dict[str, Any]:
    """Validate a review_article request and run the review."""
    request = validate_review_request(request)
    config = FluencyConfigLoader().load()
    review = review_article(
        request["article_content"],
        review_level=request["review_level"],
        workspace_type=request["workspace_type"],
        enable_fluency_optimization=request["enable_fluency_optimization"],
        use_ai_tone_filter=request["use_ai_tone_filter"],
        target_audience=request["target_audience"],
        config=config,
    )
    return review.to_dict()


WRITING_TOOLS = [fluency_optimizer, review_article_tool]
