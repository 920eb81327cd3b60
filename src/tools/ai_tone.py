"""
AI-tone phrase detection.

Flags the stock phrasing that makes machine-drafted Chinese prose read as
generated: templated openings, empty buzzwords, absolute claims and
rallying-cry endings. Matching is exact (or pattern-based for phrases with
a gap), so results are precise and repeatable.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .segmentation import split_sentences

# Share of sentences containing AI-tone phrasing that still passes review
AI_TONE_PASS_PERCENTAGE = 2.0

# Phrases per category; "..." marks a gap of up to 20 characters
AI_TONE_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "template_starts": (
            "在当今时代",
            "随着...的快速发展",
            "近年来",
            "我们可以看到",
            "众所周知",
        ),
        "empty_phrases": (
            "赋能",
            "引领",
            "加速转型",
            "充分利用",
            "深度挖掘",
            "极致体验",
        ),
        "absolute_statements": (
            "所有人都知道",
            "显而易见",
            "毫无疑问",
            "板上钉钉",
        ),
        "social_endings": (
            "让我们共同期待",
            "相信明天会更好",
            "未来可期",
            "一起加油",
        ),
    }
)


def _compile(phrase: str) -> re.Pattern[str]:
    parts = [re.escape(part) for part in phrase.split("...")]
    return re.compile(".{1,20}?".join(parts))


_COMPILED_PATTERNS = {
    category: tuple((phrase, _compile(phrase)) for phrase in phrases)
    for category, phrases in AI_TONE_PATTERNS.items()
}


@dataclass(frozen=True)
class AIToneAnalysis:
    """AI-tone detection results."""

    total_matches: int
    category_counts: Mapping[str, int]
    matched_phrases: tuple[Mapping[str, Any], ...]
    affected_sentences: int
    total_sentences: int
    ai_tone_percentage: float
    passed: bool
    pass_criteria: str = field(default=f"AI腔表达<{AI_TONE_PASS_PERCENTAGE:g}%")

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_matches": self.total_matches,
            "category_counts": dict(self.category_counts),
            "matched_phrases": [dict(match) for match in self.matched_phrases],
            "affected_sentences": self.affected_sentences,
            "total_sentences": self.total_sentences,
            "ai_tone_percentage": f"{self.ai_tone_percentage:.1f}",
            "pass_criteria": self.pass_criteria,
            "status": "✅ PASS" if self.passed else "⚠️ NEED IMPROVEMENT",
        }


def detect_ai_tone(content: str) -> AIToneAnalysis:
    """
    Detect AI-tone phrasing in an article.

    Args:
        content: Article text to scan

    Returns:
        AIToneAnalysis with per-category counts, the matched phrases and
        the share of sentences that contain at least one match

    Example:
        >>> analysis = detect_ai_tone("众所周知，AI正在赋能各行各业。")
        >>> analysis.total_matches
        2
    """
    category_counts = {category: 0 for category in AI_TONE_PATTERNS}
    if not content:
        return AIToneAnalysis(
            total_matches=0,
            category_counts=MappingProxyType(category_counts),
            matched_phrases=(),
            affected_sentences=0,
            total_sentences=0,
            ai_tone_percentage=0.0,
            passed=True,
        )

    matched_phrases = []
    for category, patterns in _COMPILED_PATTERNS.items():
        for phrase, pattern in patterns:
            count = len(pattern.findall(content))
            if count:
                category_counts[category] += count
                matched_phrases.append(
                    MappingProxyType(
                        {"phrase": phrase, "category": category, "count": count}
                    )
                )

    sentences = split_sentences(content)
    affected = sum(1 for sentence in sentences if _contains_ai_tone(sentence.text))
    percentage = round(affected / len(sentences) * 100, 1) if sentences else 0.0

    return AIToneAnalysis(
        total_matches=sum(category_counts.values()),
        category_counts=MappingProxyType(category_counts),
        matched_phrases=tuple(matched_phrases),
        affected_sentences=affected,
        total_sentences=len(sentences),
        ai_tone_percentage=percentage,
        passed=percentage < AI_TONE_PASS_PERCENTAGE,
    )


def _contains_ai_tone(sentence: str) -> bool:
    return any(
        pattern.search(sentence)
        for patterns in _COMPILED_PATTERNS.values()
        for _, pattern in patterns
    )
