"""
JSON-schema validation for tool requests.

Tool calls arrive from the host agent as plain JSON objects. These
schemas define the input contract of each tool; violations are reported
as InvalidInputError before any analysis runs.
"""

from typing import Any

import jsonschema

from ..tools.fluency_analysis import FOCUS_AREAS, OPTIMIZATION_LEVELS, FluencyOptions
from ..tools.review_tools import REVIEW_LEVELS, WORKSPACE_FOCUS
from .errors import InvalidInputError

FLUENCY_REQUEST_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "fluency_optimizer request",
    "type": "object",
    "properties": {
        "article_content": {
            "type": "string",
            "description": "Article to analyze (Markdown)",
        },
        "optimization_level": {
            "type": "string",
            "enum": list(OPTIMIZATION_LEVELS),
            "default": "standard",
        },
        "target_audience": {
            "type": "string",
            "default": "general",
        },
        "focus_areas": {
            "type": "array",
            "items": {"type": "string", "enum": list(FOCUS_AREAS)},
            "default": list(FOCUS_AREAS),
        },
    },
    "required": ["article_content"],
    "additionalProperties": False,
}

REVIEW_REQUEST_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "review_article request",
    "type": "object",
    "properties": {
        "article_content": {"type": "string"},
        "review_level": {
            "type": "string",
            "enum": list(REVIEW_LEVELS),
            "default": "standard",
        },
        "workspace_type": {
            "type": ["string", "null"],
            "enum": [*WORKSPACE_FOCUS, None],
        },
        "enable_fluency_optimization": {"type": "boolean", "default": True},
        "use_ai_tone_filter": {"type": "boolean", "default": True},
        "target_audience": {"type": "string", "default": "general"},
    },
    "required": ["article_content"],
    "additionalProperties": False,
}


def validate_request(payload: Any, schema: dict[str, Any]) -> dict[str, Any]:
    """Validate a request payload against a schema.

    Args:
        payload: Decoded JSON request
        schema: Draft-07 JSON schema

    Returns:
        The payload with schema defaults filled in for missing keys

    Raises:
        InvalidInputError: For the first violation found (by path order)
    """
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(
        validator.iter_errors(payload), key=lambda e: [str(part) for part in e.path]
    )
    if errors:
        error = errors[0]
        field = ".".join(str(part) for part in error.path) or _missing_field(error)
        raise InvalidInputError(field, error.message)

    request = dict(payload)
    for name, spec in schema["properties"].items():
        if name not in request and "default" in spec:
            default = spec["default"]
            request[name] = list(default) if isinstance(default, list) else default
    return request


def validate_fluency_request(payload: Any) -> tuple[str, FluencyOptions]:
    """Validate a fluency_optimizer request.

    Returns:
        Tuple of article content and FluencyOptions
    """
    request = validate_request(payload, FLUENCY_REQUEST_SCHEMA)
    options = FluencyOptions(
        optimization_level=request["optimization_level"],
        target_audience=request["target_audience"],
        focus_areas=tuple(request["focus_areas"]),
    )
    return request["article_content"], options


def validate_review_request(payload: Any) -> dict[str, Any]:
    """Validate a review_article request and fill in defaults."""
    request = validate_request(payload, REVIEW_REQUEST_SCHEMA)
    request.setdefault("workspace_type", None)
    return request


def _missing_field(error: jsonschema.ValidationError) -> str:
    # "required" errors sit at the object level; name the missing property
    if error.validator == "required":
        return str(error.message).split("'")[1]
    return "request"
