"""
Typed errors raised when a tool request cannot be analyzed.
"""

from typing import Any, Optional


class InvalidInputError(ValueError):
    """Raised when a tool request is malformed.

    Covers non-text article content, unknown enum values (optimization
    level, review level, workspace type) and unknown focus areas. The
    error is raised before any segmentation happens, so no partial
    report is ever produced.
    """

    def __init__(self, field: str, reason: str, value: Optional[Any] = None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid input for '{field}': {reason}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for a tool response."""
        return {
            "error": "invalid_input",
            "field": self.field,
            "reason": self.reason,
        }
