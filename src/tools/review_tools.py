"""
Article review flow.

Combines the AI-tone scan with a fluency analysis tuned for review (a
paragraph with more than two information points already counts as dense)
and attaches the guidance tables: review levels, workspace focus, the
four review passes with their checks, quality standards and next steps.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..config.fluency_config import FluencyConfig
from ..validation.errors import InvalidInputError
from .ai_tone import AIToneAnalysis, detect_ai_tone
from .fluency_analysis import (
    FluencyOptions,
    FluencyReport,
    analyze_fluency,
    plain_data,
)

REVIEW_LEVELS: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "quick": MappingProxyType(
            {
                "name": "快速审校",
                "time": "10-15分钟",
                "focus": ("AI腔表达", "明显错误", "基本格式"),
                "depth": "surface",
            }
        ),
        "standard": MappingProxyType(
            {
                "name": "标准审校",
                "time": "30-45分钟",
                "focus": ("事实准确性", "逻辑连贯性", "风格一致性", "语言自然度"),
                "depth": "moderate",
            }
        ),
        "deep": MappingProxyType(
            {
                "name": "深度审校",
                "time": "60-90分钟",
                "focus": ("技术细节", "引用规范", "结构优化", "读者体验", "内容深度"),
                "depth": "thorough",
            }
        ),
    }
)

WORKSPACE_FOCUS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "tech": MappingProxyType(
            {
                "primary": ("技术准确性", "数据支撑", "实验验证"),
                "secondary": ("专业术语", "逻辑严密", "实操性"),
            }
        ),
        "blog": MappingProxyType(
            {
                "primary": ("可读性", "互动性", "金句设计"),
                "secondary": ("开头抓力", "故事性", "情感共鸣"),
            }
        ),
        "paper": MappingProxyType(
            {
                "primary": ("引用规范", "逻辑严谨", "方法透明"),
                "secondary": ("学术客观", "结构完整", "结论审慎"),
            }
        ),
        "promptlab": MappingProxyType(
            {
                "primary": ("方法论", "可复现性", "实验设计"),
                "secondary": ("假设明确", "数据支撑", "结论有效"),
            }
        ),
    }
)

# Review levels mapped onto fluency optimization levels
_OPTIMIZATION_LEVEL_FOR_REVIEW = {
    "quick": "basic",
    "standard": "standard",
    "deep": "deep",
}

FAST_TRACK = MappingProxyType(
    {
        "enabled": True,
        "skips": ("深度内容分析", "详细格式检查"),
        "keeps": ("AI腔检测", "基本逻辑检查"),
        "time_saving": "50%",
    }
)


def _check(item: str, description: str, pass_criteria: str) -> Mapping[str, str]:
    return MappingProxyType(
        {"item": item, "description": description, "pass_criteria": pass_criteria}
    )


# The four review passes, in the order an editor works through them
REVIEW_PASSES: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "pass1": MappingProxyType(
            {
                "name": "第一遍：内容与逻辑审校",
                "focus_areas": (
                    "事实准确性：技术参数、数据来源",
                    "逻辑连贯性：论证链条、因果关系",
                    "结构完整性：各部分是否完整",
                    "信息可验证：来源是否可靠",
                ),
                "checks": (
                    _check("技术参数验证", "所有技术数据是否有来源", "100%有来源标注"),
                    _check("逻辑连贯性", "论证是否环环相扣", "无逻辑跳跃或断层"),
                    _check("信息完整性", "是否遗漏关键信息", "核心观点有充分支撑"),
                ),
                "common_issues": ("数据来源不明确", "逻辑链条断裂", "技术细节错误", "信息过时"),
                "expected_time": "15分钟",
            }
        ),
        "pass2": MappingProxyType(
            {
                "name": "第二遍：风格与语气审校",
                "focus_areas": (
                    "AI腔清理：模板化句式识别",
                    "个人风格对齐：语言习惯、表达偏好",
                    "语言自然度：流畅性、生动性",
                    "真实感增强：个人色彩、真实细节",
                ),
                "checks": (
                    _check("AI腔表达检测", "识别并标记所有AI腔表达", "AI腔表达<2%"),
                    _check("风格一致性", "是否匹配个人写作风格", "风格匹配度≥4.5/5"),
                    _check("语言自然度", "语言是否流畅自然", "无明显机械感"),
                    _check("真实感", "是否体现个人特色", "至少1处真实素材"),
                ),
                "common_issues": ("模板化开头和结尾", "使用禁用词汇", "语气过于正式", "缺少个人色彩"),
                "expected_time": "20分钟",
            }
        ),
        "pass3": MappingProxyType(
            {
                "name": "第三遍：细节与格式审校",
                "focus_areas": (
                    "术语一致性：专业词汇统一使用",
                    "格式规范：标题、列表、引用格式",
                    "标点符号：逗号、句号、分号使用",
                    "数字与单位：数值格式、单位规范",
                ),
                "checks": (
                    _check("术语一致性", "专业术语是否统一", "无同义词混用"),
                    _check("格式规范", "是否符合写作规范", "100%符合规范"),
                    _check("标点准确", "标点使用是否正确", "无标点错误"),
                    _check("数字格式", "数值格式是否统一", "格式完全一致"),
                ),
                "common_issues": ("术语不统一", "中英文混排不规范", "标点中英文混用", "数字格式混乱"),
                "expected_time": "10-15分钟",
            }
        ),
        "pass4": MappingProxyType(
            {
                "name": "第四遍：流畅度优化",
                "focus_areas": (
                    "段落过渡：章节间连接是否自然",
                    "句子长度：避免过长句子",
                    "节奏控制：信息密度是否适中",
                    "阅读体验：整体流畅度优化",
                ),
                "checks": (
                    _check("段落过渡检查", "章节间是否有过渡句", "每章开头有2-3句过渡"),
                    _check("句子长度优化", "长句是否拆分为短句", "长句<5%，平均长度<25字"),
                    _check("信息密度控制", "段落信息点是否过多", "每段1-2个信息点"),
                    _check("流畅度评分", "整体阅读流畅度", "流畅度≥4.0/5"),
                ),
                "common_issues": ("段落间跳跃大", "句子过长（>30字）", "信息点过密", "缺少呼吸点"),
                "expected_time": "5-10分钟",
            }
        ),
    }
)

QUALITY_STANDARDS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "pass_criteria": MappingProxyType(
            {
                "factual_accuracy": "100%",
                "logic_coherence": "无断层",
                "style_match": "≥4.5/5",
                "ai_tone_ratio": "<2%",
                "format_compliance": "100%",
                "readability": "优秀",
            }
        ),
        "excellence_criteria": MappingProxyType(
            {
                "unique_perspective": "有独特观点",
                "rich_materials": "素材丰富",
                "natural_language": "语言自然",
                "clear_structure": "结构清晰",
                "engaging_content": "值得转发",
            }
        ),
    }
)

EXPECTED_OUTPUTS = (
    "第一遍审校报告（问题清单+修改建议）",
    "第二遍审校报告（AI腔清理+风格优化）",
    "第三遍审校报告（细节优化+格式规范）",
    "最终修改稿（经审校优化）",
    "质量评分报告（各项得分+综合评分）",
    "改进建议（如何进一步优化）",
)

REVIEW_NEXT_STEPS = (
    "1. 开始第一遍审校：内容与逻辑",
    "2. 重点检查工作区特定要求",
    "3. 清理所有AI腔表达",
    "4. 确保格式完全规范",
    "5. 对照质量标准自查",
)

IMPORTANT_NOTES = (
    "第二遍是降AI味的关键",
    "不要跳过任何一遍审校",
    "发现严重问题时回到第一步",
    "质量标准必须严格把关",
    "最终稿件需要用户确认",
)


@dataclass(frozen=True)
class ArticleReview:
    """Outcome of a review run."""

    review_level: str
    workspace_type: Optional[str]
    ai_tone: Optional[AIToneAnalysis]
    fluency: Optional[FluencyReport]

    @property
    def level(self) -> Mapping[str, Any]:
        return REVIEW_LEVELS[self.review_level]

    @property
    def passed(self) -> bool:
        ai_tone_ok = self.ai_tone is None or self.ai_tone.passed
        fluency_ok = self.fluency is None or self.fluency.passed
        return ai_tone_ok and fluency_ok

    def to_dict(self) -> dict[str, Any]:
        level = self.level
        result: dict[str, Any] = {
            "status": "review_complete",
            "review_config": {
                "level": self.review_level,
                "level_name": level["name"],
                "time_estimate": level["time"],
                "depth": level["depth"],
                "focus_areas": list(level["focus"]),
                "workspace_type": self.workspace_type,
                "ai_tone_filter": self.ai_tone is not None,
                "fluency_optimization_enabled": self.fluency is not None,
            },
        }

        if self.ai_tone is not None:
            result["ai_tone_detection"] = self.ai_tone.to_dict()
        else:
            result["ai_tone_detection"] = {
                "status": "disabled",
                "reason": "use_ai_tone_filter = false",
            }

        if self.fluency is not None:
            result["fluency_optimization"] = self.fluency.to_dict()
        else:
            result["fluency_optimization"] = {
                "status": "disabled",
                "reason": "enable_fluency_optimization = false",
            }

        if self.workspace_type:
            focus = WORKSPACE_FOCUS[self.workspace_type]
            result["workspace_guidelines"] = {
                "workspace": self.workspace_type,
                "primary_focus": list(focus["primary"]),
                "secondary_focus": list(focus["secondary"]),
            }

        result["review_process"] = plain_data(REVIEW_PASSES)
        result["expected_outputs"] = list(EXPECTED_OUTPUTS)
        result["quality_standards"] = plain_data(QUALITY_STANDARDS)
        result["next_steps"] = list(REVIEW_NEXT_STEPS)
        result["important_notes"] = list(IMPORTANT_NOTES)
        result["fast_track"] = (
            plain_data(FAST_TRACK) if self.review_level == "quick" else None
        )
        result["passed"] = self.passed
        return result


def review_article(
    content: str,
    review_level: str = "standard",
    workspace_type: Optional[str] = None,
    enable_fluency_optimization: bool = True,
    use_ai_tone_filter: bool = True,
    target_audience: str = "general",
    config: Optional[FluencyConfig] = None,
) -> ArticleReview:
    """
    Review an article for AI tone and fluency.

    The fluency pass runs with the review density threshold, so paragraphs
    with more than two information points are flagged.

    Args:
        content: Article text
        review_level: quick, standard or deep
        workspace_type: tech, blog, paper or promptlab (optional)
        enable_fluency_optimization: Run the fluency analyzer
        use_ai_tone_filter: Run the AI-tone scan
        target_audience: Audience passed to the fluency analyzer
        config: Base threshold configuration

    Returns:
        ArticleReview with the enabled analyses

    Raises:
        InvalidInputError: On non-text content or unknown level/workspace
    """
    if not isinstance(content, str):
        raise InvalidInputError(
            "article_content", f"expected text, got {type(content).__name__}"
        )
    if review_level not in REVIEW_LEVELS:
        raise InvalidInputError(
            "review_level",
            f"must be one of {', '.join(REVIEW_LEVELS)}",
            review_level,
        )
    if workspace_type is not None and workspace_type not in WORKSPACE_FOCUS:
        raise InvalidInputError(
            "workspace_type",
            f"must be one of {', '.join(WORKSPACE_FOCUS)}",
            workspace_type,
        )

    ai_tone = detect_ai_tone(content) if use_ai_tone_filter else None

    fluency = None
    if enable_fluency_optimization:
        review_config = (config or FluencyConfig()).for_review()
        options = FluencyOptions(
            optimization_level=_OPTIMIZATION_LEVEL_FOR_REVIEW[review_level],
            target_audience=target_audience,
        )
        fluency = analyze_fluency(content, options, review_config)

    return ArticleReview(
        review_level=review_level,
        workspace_type=workspace_type,
        ai_tone=ai_tone,
        fluency=fluency,
    )
