"""
Heuristic fluency analysis for Markdown articles.

Runs six independent passes over a segmented document and folds their
penalties into a 1.0-5.0 fluency score:

- paragraph_transition: does each ``##`` section open with a connective?
- sentence_length: share of sentences longer than 30 characters
- info_density: paragraphs packing too many information points
- paragraph_length: CJK paragraphs outside the 200-500 character range
- question_ratio: interrogative sentences in declarative prose
- poetic_line_break: runs of short lines that should be one paragraph

Every dimension score and the composite use one penalty table: a
dimension scores ``max(floor, 5.0 - penalty)`` and the composite is
``5.0`` minus the sum of all dimension deductions, clamped to [1.0, 5.0].
The analysis is a pure function of the text, the options and the config.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..config.fluency_config import FluencyConfig
from ..validation.errors import InvalidInputError
from .segmentation import (
    Document,
    is_structural_line,
    segment,
    split_sentences,
    truncate,
)

MIN_SCORE = 1.0
MAX_SCORE = 5.0

PARAGRAPH_TRANSITION = "paragraph_transition"
SENTENCE_LENGTH = "sentence_length"
INFO_DENSITY = "info_density"
PARAGRAPH_LENGTH = "paragraph_length"
QUESTION_RATIO = "question_ratio"
POETIC_LINE_BREAK = "poetic_line_break"

DIMENSIONS = (
    PARAGRAPH_TRANSITION,
    SENTENCE_LENGTH,
    INFO_DENSITY,
    PARAGRAPH_LENGTH,
    QUESTION_RATIO,
    POETIC_LINE_BREAK,
)

OPTIMIZATION_LEVELS = ("basic", "standard", "deep")

# Focus areas a caller can request, and the dimensions each one covers
FOCUS_AREAS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "paragraph_transition": (PARAGRAPH_TRANSITION,),
        "sentence_length": (SENTENCE_LENGTH,),
        "info_density": (INFO_DENSITY,),
        "rhythm_control": (PARAGRAPH_LENGTH, QUESTION_RATIO, POETIC_LINE_BREAK),
    }
)

# Connectives that open a section naturally: contrastive, sequential,
# causal, referential and emphatic. Longer markers first.
TRANSITION_MARKERS = (
    "更重要的是",
    "接下来",
    "然而",
    "基于",
    "同时",
    "此外",
    "因此",
    "所以",
    "以上",
    "下面",
    "除了",
    "但",
    "从",
    "这",
    "那",
)

INTERROGATIVE_WORDS = (
    "为什么",
    "是不是",
    "能不能",
    "要不要",
    "哪里",
    "什么",
    "怎么",
    "如何",
)

AUDIENCE_NOTES: Mapping[str, str] = MappingProxyType(
    {
        "general": "保持简洁明了，避免过于复杂的句式",
        "technical": "可以容忍稍长的句子，但要注意逻辑清晰",
        "academic": "重视严谨性，但需平衡可读性",
        "creative": "鼓励多样化句式，但保持整体流畅",
    }
)
DEFAULT_AUDIENCE_NOTE = "保持平衡的阅读体验"

PASS_CRITERIA: Mapping[str, str] = MappingProxyType(
    {
        PARAGRAPH_TRANSITION: "每章开头有2-3句过渡",
        SENTENCE_LENGTH: "长句<5%，平均长度<25字",
        INFO_DENSITY: "每段1-2个信息点",
        PARAGRAPH_LENGTH: "每段200-500字，符合中文阅读习惯",
        QUESTION_RATIO: "问句比例≤1%，技术文章避免问句",
        POETIC_LINE_BREAK: "避免诗式换行，相关内容合并为段落",
    }
)

LOW_PRIORITY_SUGGESTIONS = (
    "在长段落后添加呼吸点（短段落或列表）",
    "使用过渡词汇连接句子",
    "控制每段的核心信息点数量",
    "保持句长适度变化（10字短句+30字中句+50字长句）",
)

NEXT_STEPS = (
    "1. 根据分析结果进行修改",
    "2. 重新运行 fluency_optimizer 验证",
    "3. 进行人工阅读检查",
    "4. 最终质量确认",
)

TRANSITION_SUGGESTION = (
    '建议在开头添加过渡句，如："基于以上分析，接下来我们将..."'
    '或"但技术成熟只是第一步，真正的变革在于..."'
)


def freeze_data(value: Any) -> Any:
    """Recursively convert dicts to read-only mappings and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze_data(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_data(item) for item in value)
    return value


def plain_data(value: Any) -> Any:
    """Recursively convert read-only data into fresh dicts and lists."""
    if isinstance(value, Mapping):
        return {key: plain_data(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_data(item) for item in value]
    return value


@dataclass(frozen=True)
class FluencyOptions:
    """Caller options for a fluency analysis."""

    optimization_level: str = "standard"
    target_audience: str = "general"
    focus_areas: tuple[str, ...] = tuple(FOCUS_AREAS)

    def __post_init__(self) -> None:
        if self.optimization_level not in OPTIMIZATION_LEVELS:
            raise InvalidInputError(
                "optimization_level",
                f"must be one of {', '.join(OPTIMIZATION_LEVELS)}",
                self.optimization_level,
            )
        if not isinstance(self.target_audience, str):
            raise InvalidInputError(
                "target_audience", "must be a string", self.target_audience
            )
        if isinstance(self.focus_areas, str):
            raise InvalidInputError(
                "focus_areas", "must be a list of focus area names", self.focus_areas
            )
        unknown = [area for area in self.focus_areas if area not in FOCUS_AREAS]
        if unknown:
            raise InvalidInputError(
                "focus_areas",
                f"unknown focus areas: {', '.join(map(str, unknown))}",
                self.focus_areas,
            )
        # Normalize to a de-duplicated tuple in caller order
        object.__setattr__(self, "focus_areas", tuple(dict.fromkeys(self.focus_areas)))

    @property
    def focused_dimensions(self) -> frozenset[str]:
        return frozenset(
            dimension for area in self.focus_areas for dimension in FOCUS_AREAS[area]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimization_level": self.optimization_level,
            "target_audience": self.target_audience,
            "focus_areas": list(self.focus_areas),
        }


@dataclass(frozen=True)
class Finding:
    """One located issue produced by a pass."""

    dimension: str
    index: int  # 1-based section/sentence/paragraph/line number
    location: str
    excerpt: str
    suggestion: str
    detail: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "detail", freeze_data(self.detail))

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension,
            "location": self.location,
            "excerpt": self.excerpt,
            "suggestion": self.suggestion,
            **plain_data(self.detail),
        }


@dataclass(frozen=True)
class DimensionScore:
    """Score and verdict for one dimension."""

    name: str
    score: float
    passed: bool
    pass_criteria: str
    focused: bool = False

    @property
    def status(self) -> str:
        return "✅ PASS" if self.passed else "⚠️ NEED IMPROVEMENT"


@dataclass(frozen=True)
class PassResult:
    """Raw output of one pass before scoring."""

    dimension: str
    penalty: float
    floor: float
    passed: bool
    statistics: Mapping[str, Any]
    findings: tuple[Finding, ...]

    @property
    def score(self) -> float:
        return round(max(self.floor, MAX_SCORE - self.penalty), 1)


@dataclass(frozen=True)
class FluencyReport:
    """Complete result of a fluency analysis."""

    fluency_score: float
    dimensions: tuple[DimensionScore, ...]
    statistics: Mapping[str, Mapping[str, Any]]
    findings: tuple[Finding, ...]
    high_priority: tuple[str, ...]
    medium_priority: tuple[str, ...]
    low_priority: tuple[str, ...]
    target_audience_note: str
    options: FluencyOptions

    def dimension(self, name: str) -> DimensionScore:
        for dimension in self.dimensions:
            if dimension.name == name:
                return dimension
        raise KeyError(name)

    def findings_by_dimension(self) -> dict[str, list[Finding]]:
        grouped: dict[str, list[Finding]] = {name: [] for name in DIMENSIONS}
        for finding in self.findings:
            grouped[finding.dimension].append(finding)
        return grouped

    def score_breakdown(self) -> dict[str, float]:
        return {dimension.name: dimension.score for dimension in self.dimensions}

    @property
    def passed(self) -> bool:
        return all(dimension.passed for dimension in self.dimensions)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible record with stable key order."""
        grouped = self.findings_by_dimension()
        analysis_results = {}
        for dimension in self.dimensions:
            analysis_results[dimension.name] = {
                "score": dimension.score,
                **plain_data(self.statistics[dimension.name]),
                "issues_found": len(grouped[dimension.name]),
                "issues": [finding.to_dict() for finding in grouped[dimension.name]],
                "pass_criteria": dimension.pass_criteria,
                "status": dimension.status,
                "focused": dimension.focused,
            }

        return {
            "status": "optimization_complete",
            "fluency_score": self.fluency_score,
            "score_breakdown": self.score_breakdown(),
            "analysis_results": analysis_results,
            "optimization_suggestions": {
                "high_priority": list(self.high_priority),
                "medium_priority": list(self.medium_priority),
                "low_priority": list(self.low_priority),
            },
            "target_audience_notes": self.target_audience_note,
            "options": self.options.to_dict(),
            "next_steps": list(NEXT_STEPS),
        }


def analyze_fluency(
    content: str,
    options: Optional[FluencyOptions] = None,
    config: Optional[FluencyConfig] = None,
) -> FluencyReport:
    """
    Score the fluency of a Markdown article.

    Args:
        content: Article text (Markdown, any length, may be empty)
        options: Optimization level, target audience and focus areas
        config: Threshold configuration (defaults to the standalone values)

    Returns:
        FluencyReport with the composite score, per-dimension scores,
        findings and prioritized suggestions

    Raises:
        InvalidInputError: If content is not a string

    Example:
        >>> report = analyze_fluency("A" * 35 + "。" + "短。")
        >>> report.statistics["sentence_length"]["long_percentage"]
        '50.0'
    """
    if not isinstance(content, str):
        raise InvalidInputError(
            "article_content", f"expected text, got {type(content).__name__}"
        )
    options = options or FluencyOptions()
    config = config or FluencyConfig()

    document = segment(content)
    results = [
        _paragraph_transition_pass(document, config),
        _sentence_length_pass(document, config),
        _info_density_pass(document, config),
        _paragraph_length_pass(document, config),
        _question_pass(document, config),
        _poetic_line_break_pass(document, config),
    ]

    focused = options.focused_dimensions
    dimensions = tuple(
        DimensionScore(
            name=result.dimension,
            score=result.score,
            passed=result.passed,
            pass_criteria=PASS_CRITERIA[result.dimension],
            focused=result.dimension in focused,
        )
        for result in results
    )

    deductions = sum(MAX_SCORE - dimension.score for dimension in dimensions)
    fluency_score = round(_clamp(MAX_SCORE - deductions), 1)

    statistics = {result.dimension: result.statistics for result in results}
    high, medium = _build_suggestions(statistics, focused, config)
    if options.optimization_level == "basic":
        medium = []
    low = list(LOW_PRIORITY_SUGGESTIONS) if options.optimization_level == "deep" else []

    return FluencyReport(
        fluency_score=fluency_score,
        dimensions=dimensions,
        statistics=freeze_data(statistics),
        findings=tuple(finding for result in results for finding in result.findings),
        high_priority=tuple(high),
        medium_priority=tuple(medium),
        low_priority=tuple(low),
        target_audience_note=AUDIENCE_NOTES.get(
            options.target_audience, DEFAULT_AUDIENCE_NOTE
        ),
        options=options,
    )


# Passes


def _paragraph_transition_pass(document: Document, config: FluencyConfig) -> PassResult:
    findings = []
    for section in document.sections:
        first_line = _first_body_line(section.body_lines)
        if first_line is None or first_line.startswith(TRANSITION_MARKERS):
            continue

        abrupt = len(first_line) < config.transition_min_chars
        findings.append(
            Finding(
                dimension=PARAGRAPH_TRANSITION,
                index=section.index,
                location=f"section {section.index}: {section.title}",
                excerpt=truncate(first_line, config.sentence_excerpt_chars),
                suggestion=TRANSITION_SUGGESTION,
                detail={
                    "title": section.title,
                    "issue": "章节开头过短且缺少过渡" if abrupt else "缺少自然的段落过渡",
                },
            )
        )

    penalty = config.transition_penalty * len(findings)
    return PassResult(
        dimension=PARAGRAPH_TRANSITION,
        penalty=penalty,
        floor=config.transition_floor,
        passed=not findings,
        statistics={
            "sections_checked": len(document.sections),
            "transition_issues": len(findings),
        },
        findings=tuple(findings),
    )


def _sentence_length_pass(document: Document, config: FluencyConfig) -> PassResult:
    findings = []
    for sentence in document.sentences:
        length = len(sentence.text)
        if length <= config.long_sentence_chars:
            continue
        findings.append(
            Finding(
                dimension=SENTENCE_LENGTH,
                index=sentence.position,
                location=f"sentence {sentence.position}",
                excerpt=truncate(sentence.text, config.sentence_excerpt_chars),
                suggestion=_long_sentence_suggestion(sentence.text),
                detail={"length": length},
            )
        )

    total = len(document.sentences)
    long_percentage = _percentage(len(findings), total)

    penalty = 0.0
    if long_percentage > config.long_sentence_warn_percentage:
        penalty += config.long_sentence_warn_penalty
    if long_percentage > config.long_sentence_severe_percentage:
        penalty += config.long_sentence_severe_penalty

    return PassResult(
        dimension=SENTENCE_LENGTH,
        penalty=penalty,
        floor=config.sentence_length_floor,
        passed=long_percentage < config.long_sentence_pass_percentage,
        statistics={
            "total_sentences": total,
            "long_sentences": len(findings),
            "long_percentage": _format_percentage(long_percentage),
            "examples": _examples(findings, config.sentence_example_limit, "length"),
        },
        findings=tuple(findings),
    )


def _info_density_pass(document: Document, config: FluencyConfig) -> PassResult:
    findings = []
    for number, paragraph in enumerate(document.paragraphs, start=1):
        info_points = sum(
            1
            for sentence in split_sentences(paragraph)
            if len(sentence.text) > config.info_point_min_chars
        )
        if info_points > config.dense_info_points:
            findings.append(
                Finding(
                    dimension=INFO_DENSITY,
                    index=number,
                    location=f"paragraph {number}",
                    excerpt=truncate(paragraph, config.paragraph_excerpt_chars),
                    suggestion="建议：拆分为2个段落，或删除非核心信息点",
                    detail={"info_points": info_points},
                )
            )

    total = len(document.paragraphs)
    density_percentage = _percentage(len(findings), total)
    penalty = (
        config.dense_paragraph_penalty
        if density_percentage > config.dense_paragraph_percentage
        else 0.0
    )

    return PassResult(
        dimension=INFO_DENSITY,
        penalty=penalty,
        floor=config.info_density_floor,
        passed=density_percentage < config.density_pass_percentage,
        statistics={
            "total_paragraphs": total,
            "dense_paragraphs": len(findings),
            "density_percentage": _format_percentage(density_percentage),
            "dense_threshold": config.dense_info_points,
            "examples": _examples(
                findings, config.paragraph_example_limit, "info_points"
            ),
        },
        findings=tuple(findings),
    )


def _paragraph_length_pass(document: Document, config: FluencyConfig) -> PassResult:
    short_findings = []
    long_findings = []
    for number, paragraph in enumerate(document.paragraphs, start=1):
        length = len(paragraph)
        if length < config.paragraph_min_chars:
            bucket = short_findings
            suggestion = (
                f"建议：扩展段落内容，增加细节或例子，"
                f"达到{config.paragraph_min_chars}字以上"
            )
        elif length > config.paragraph_max_chars:
            bucket = long_findings
            suggestion = "建议：将超长段落拆分为2-3个段落，每个段落聚焦一个主题"
        else:
            continue
        bucket.append(
            Finding(
                dimension=PARAGRAPH_LENGTH,
                index=number,
                location=f"paragraph {number}",
                excerpt=truncate(paragraph, config.paragraph_excerpt_chars),
                suggestion=suggestion,
                detail={"length": length},
            )
        )

    penalty = 0.0
    if len(short_findings) > config.short_paragraph_allowance:
        penalty += config.short_paragraph_penalty
    if long_findings:
        penalty += config.long_paragraph_penalty

    findings = sorted(short_findings + long_findings, key=lambda f: f.index)
    return PassResult(
        dimension=PARAGRAPH_LENGTH,
        penalty=penalty,
        floor=config.paragraph_length_floor,
        passed=not findings,
        statistics={
            "total_paragraphs": len(document.paragraphs),
            "short_paragraphs": len(short_findings),
            "long_paragraphs": len(long_findings),
            "short_examples": _examples(
                short_findings, config.paragraph_example_limit, "length"
            ),
            "long_examples": _examples(
                long_findings, config.paragraph_example_limit, "length"
            ),
        },
        findings=tuple(findings),
    )


def _question_pass(document: Document, config: FluencyConfig) -> PassResult:
    findings = []
    for sentence in document.sentences:
        if not _is_interrogative(sentence.text, sentence.terminator):
            continue
        findings.append(
            Finding(
                dimension=QUESTION_RATIO,
                index=sentence.position,
                location=f"sentence {sentence.position}",
                excerpt=truncate(sentence.text, config.sentence_excerpt_chars),
                suggestion="建议：将问句改为陈述句或反问句，避免直接提问",
            )
        )

    total = len(document.sentences)
    question_percentage = _percentage(len(findings), total)
    penalty = (
        config.question_penalty
        if question_percentage > config.question_percentage_limit
        else 0.0
    )

    return PassResult(
        dimension=QUESTION_RATIO,
        penalty=penalty,
        floor=config.question_ratio_floor,
        passed=question_percentage <= config.question_percentage_limit,
        statistics={
            "total_sentences": total,
            "question_count": len(findings),
            "question_percentage": _format_percentage(question_percentage),
            "examples": [
                {
                    "text": finding.excerpt,
                    "position": f"第{finding.index}句",
                    "suggestion": finding.suggestion,
                }
                for finding in findings[: config.sentence_example_limit]
            ],
        },
        findings=tuple(findings),
    )


def _poetic_line_break_pass(document: Document, config: FluencyConfig) -> PassResult:
    lines = [line.strip() for line in document.lines]
    findings = []
    # One finding per adjacent pair of short prose lines
    for i in range(len(lines) - 1):
        if _is_short_prose_line(lines[i], config) and _is_short_prose_line(
            lines[i + 1], config
        ):
            findings.append(
                Finding(
                    dimension=POETIC_LINE_BREAK,
                    index=i + 1,
                    location=f"line {i + 1}",
                    excerpt=lines[i],
                    suggestion="建议：将相关短句合并为连续段落，避免诗式换行",
                    detail={"line_number": i + 1},
                )
            )

    penalty = (
        config.poetic_penalty
        if len(findings) > config.poetic_issue_allowance
        else 0.0
    )
    return PassResult(
        dimension=POETIC_LINE_BREAK,
        penalty=penalty,
        floor=config.poetic_line_break_floor,
        passed=len(findings) < config.poetic_issue_allowance,
        statistics={
            "total_lines": len(lines),
            "issue_count": len(findings),
            "examples": _examples(
                findings, config.sentence_example_limit, "line_number"
            ),
        },
        findings=tuple(findings),
    )


# Helpers


def _first_body_line(body_lines: Iterable[str]) -> Optional[str]:
    """First non-empty line of a section that is not a heading or list item."""
    for line in body_lines:
        stripped = line.strip()
        if stripped and not is_structural_line(stripped):
            return stripped
    return None


def _long_sentence_suggestion(sentence: str) -> str:
    if "，" in sentence and len(sentence.split("，")) > 2:
        return "建议：将并列的多个短句拆分为独立句子"
    if "；" in sentence:
        return "建议：将分号前后的内容拆分为两个句子"
    if "，并且" in sentence or "，同时" in sentence:
        return '建议：将"并且/同时"连接的内容拆分为两个句子'
    return "建议：将长句拆分为2-3个短句"


def _is_interrogative(text: str, terminator: str) -> bool:
    return (
        text.startswith(("?", "？"))
        or terminator == "？"
        or text.startswith(INTERROGATIVE_WORDS)
    )


def _is_short_prose_line(line: str, config: FluencyConfig) -> bool:
    return (
        bool(line)
        and not is_structural_line(line)
        and len(line) < config.poetic_line_max_chars
    )


def _build_suggestions(
    statistics: Mapping[str, Mapping[str, Any]],
    focused: frozenset[str],
    config: FluencyConfig,
) -> tuple[list[str], list[str]]:
    long_pct = float(statistics[SENTENCE_LENGTH]["long_percentage"])
    density_pct = float(statistics[INFO_DENSITY]["density_percentage"])
    question_pct = float(statistics[QUESTION_RATIO]["question_percentage"])
    paragraphs = statistics[PARAGRAPH_LENGTH]

    candidates = [
        (
            PARAGRAPH_TRANSITION,
            statistics[PARAGRAPH_TRANSITION]["transition_issues"] > 0,
            "为缺少过渡的章节添加2-3句过渡句",
        ),
        (
            SENTENCE_LENGTH,
            long_pct > config.long_sentence_warn_percentage,
            f"拆分超过{config.long_sentence_chars}字的长句",
        ),
        (
            INFO_DENSITY,
            density_pct > config.dense_paragraph_percentage,
            "拆分信息过密的段落",
        ),
        (
            PARAGRAPH_LENGTH,
            paragraphs["short_paragraphs"] > 0,
            f"扩展短段落至{config.paragraph_min_chars}字以上",
        ),
        (
            PARAGRAPH_LENGTH,
            paragraphs["long_paragraphs"] > 0,
            "将超长段落拆分为2-3个段落",
        ),
        (
            QUESTION_RATIO,
            question_pct > config.question_percentage_limit,
            "将问句改为陈述句或反问句",
        ),
        (
            POETIC_LINE_BREAK,
            statistics[POETIC_LINE_BREAK]["issue_count"] > 0,
            "合并诗式换行为连贯段落",
        ),
    ]
    triggered = [(dimension, text) for dimension, hit, text in candidates if hit]
    # Stable sort: focused dimensions first, original order otherwise
    triggered.sort(key=lambda item: item[0] not in focused)
    high = [text for _, text in triggered]

    medium = []
    if long_pct > config.long_sentence_pass_percentage:
        medium.append("优化句式结构，增加短句调节")
    if question_pct > config.question_percentage_limit / 2:
        medium.append("减少技术文章中的问句使用")

    return high, medium


def _examples(findings: list[Finding], limit: int, detail_key: str) -> list[dict[str, Any]]:
    return [
        {
            "text": finding.excerpt,
            detail_key: finding.detail[detail_key],
            "suggestion": finding.suggestion,
        }
        for finding in findings[:limit]
    ]


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count / total * 100, 1)


def _format_percentage(value: float) -> str:
    return f"{value:.1f}"


def _clamp(score: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, score))
