"""
Threshold configuration for the fluency analyzer.

Thresholds live in a single dataclass so every call site (the standalone
fluency tool, the review flow, the CLI) reads them from one place.
Values can be overridden from a YAML file.

Environment Variables:
    FLUENCY_CREW_CONFIG: Path to a YAML file with threshold overrides
"""

import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

load_dotenv()

CONFIG_ENV_VAR = "FLUENCY_CREW_CONFIG"

# Info points per paragraph above which the review flow calls a paragraph dense
REVIEW_DENSE_INFO_POINTS = 2


@dataclass(frozen=True)
class FluencyConfig:
    """Thresholds used by the six fluency passes."""

    # Paragraph transitions
    transition_min_chars: int = 15
    transition_penalty: float = 0.5
    transition_floor: float = 3.0

    # Sentence length
    long_sentence_chars: int = 30
    long_sentence_warn_percentage: float = 10.0
    long_sentence_severe_percentage: float = 20.0
    long_sentence_warn_penalty: float = 0.8
    long_sentence_severe_penalty: float = 1.0
    long_sentence_pass_percentage: float = 5.0
    sentence_length_floor: float = 2.0

    # Information density
    info_point_min_chars: int = 10
    dense_info_points: int = 3
    dense_paragraph_percentage: float = 30.0
    dense_paragraph_penalty: float = 0.7
    density_pass_percentage: float = 20.0
    info_density_floor: float = 2.0

    # Paragraph length (characters, CJK)
    paragraph_min_chars: int = 200
    paragraph_max_chars: int = 500
    short_paragraph_allowance: int = 2
    short_paragraph_penalty: float = 0.8
    long_paragraph_penalty: float = 0.5
    paragraph_length_floor: float = 2.0

    # Interrogative sentences
    question_percentage_limit: float = 1.0
    question_penalty: float = 0.8
    question_ratio_floor: float = 1.0

    # Poetic line breaks
    poetic_line_max_chars: int = 50
    poetic_issue_allowance: int = 5
    poetic_penalty: float = 0.5
    poetic_line_break_floor: float = 3.0

    # Example lists
    sentence_example_limit: int = 5
    sentence_excerpt_chars: int = 50
    paragraph_example_limit: int = 3
    paragraph_excerpt_chars: int = 100

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if f.name.endswith("_penalty") or f.name.endswith("_allowance"):
                if value < 0:
                    raise ValueError(f"{f.name} must not be negative")
            elif value <= 0:
                raise ValueError(f"{f.name} must be positive")

        if self.paragraph_min_chars > self.paragraph_max_chars:
            raise ValueError(
                "paragraph_min_chars must not exceed paragraph_max_chars"
            )
        if self.long_sentence_warn_percentage > self.long_sentence_severe_percentage:
            raise ValueError(
                "long_sentence_warn_percentage must not exceed "
                "long_sentence_severe_percentage"
            )
        for f in fields(self):
            if f.name.endswith("_floor") and not 1.0 <= getattr(self, f.name) <= 5.0:
                raise ValueError(f"{f.name} must be within [1.0, 5.0]")

    def for_review(self) -> "FluencyConfig":
        """Return a copy using the review flow's density threshold."""
        return replace(self, dense_info_points=REVIEW_DENSE_INFO_POINTS)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FluencyConfigLoader:
    """Loads FluencyConfig overrides from YAML."""

    def __init__(self, config_path: Path | str | None = None):
        """Initialize the loader.

        Args:
            config_path: Explicit YAML path. Overrides the environment variable.
        """
        if config_path:
            self.config_path: Path | None = Path(config_path)
        elif os.getenv(CONFIG_ENV_VAR):
            self.config_path = Path(os.environ[CONFIG_ENV_VAR])
        else:
            self.config_path = None

    def get_config_info(self) -> dict[str, Any]:
        """Get information about where configuration is read from."""
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "config_exists": bool(self.config_path and self.config_path.exists()),
            "env_config_path": os.getenv(CONFIG_ENV_VAR),
            "is_using_env_var": bool(os.getenv(CONFIG_ENV_VAR)),
            "is_default": self.config_path is None,
        }

    def load(self) -> FluencyConfig:
        """Load the effective configuration.

        Returns:
            FluencyConfig with YAML overrides applied, or defaults

        Raises:
            FileNotFoundError: If a configured file doesn't exist
            yaml.YAMLError: If the YAML is invalid
            ValueError: If the configuration is invalid
        """
        if self.config_path is None:
            return FluencyConfig()

        if not self.config_path.exists():
            raise FileNotFoundError(f"Fluency config not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in {self.config_path}: {e}") from e

        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Fluency config in {self.config_path} must be a mapping"
            )

        # Allow the thresholds to be nested under a top-level key
        if "fluency" in data and isinstance(data["fluency"], dict):
            data = data["fluency"]

        known = {f.name for f in fields(FluencyConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown fluency config keys in {self.config_path}: {', '.join(unknown)}"
            )

        return FluencyConfig(**data)
