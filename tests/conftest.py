"""Pytest configuration and fixtures for Fluency-Crew tests."""

import sys
from pathlib import Path

import pytest

# Make the src package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.logging.manager import LoggingManager


def make_paragraph(opening: str = "这") -> str:
    """Build a 214-character paragraph that passes every fluency check.

    One short opening sentence, three 30-character sentences (three
    information points, none of them long) and ten short sentences.
    """
    opening_sentence = opening + "二" * (10 - len(opening)) + "。"
    info_sentences = ("一" * 30 + "。") * 3
    short_sentences = ("二" * 10 + "。") * 10
    return opening_sentence + info_sentences + short_sentences


@pytest.fixture
def clean_article():
    """Two-section article that scores 5.0 on every dimension."""
    return (
        "# 标题\n\n"
        "## 第一节\n\n"
        f"{make_paragraph('这')}\n\n"
        "## 第二节\n\n"
        f"{make_paragraph('因此')}\n"
    )


@pytest.fixture
def long_sentence_text():
    """One 35-character sentence and one short sentence."""
    return "A" * 35 + "。" + "短。"


@pytest.fixture
def worst_case_article():
    """Article that trips penalties in five of the six dimensions."""
    sections = "".join(f"## 第{i}节\n\n新的内容。\n\n" for i in range(5))
    questions = "\n".join(
        ["为什么？", "怎么办？", "如何做？", "哪里去？", "什么事？", "是不是？", "能不能？"]
    )
    long_paragraph = ("长" * 40 + "。") * 15
    return f"{sections}{questions}\n\n{long_paragraph}"


@pytest.fixture
def ai_tone_article():
    return (
        "## 引言\n\n"
        "随着人工智能技术的快速发展，我们可以看到很多变化。"
        "众所周知，大模型正在赋能各行各业。"
        "让我们共同期待未来。"
    )


@pytest.fixture
def logging_manager(tmp_path):
    """A LoggingManager singleton writing under tmp_path."""
    LoggingManager.reset_instance()
    manager = LoggingManager(base_log_dir=tmp_path / "logs")
    LoggingManager._instance = manager
    yield manager
    manager.end_session()
    LoggingManager.reset_instance()


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep tests independent of a developer's FLUENCY_CREW_CONFIG."""
    monkeypatch.delenv("FLUENCY_CREW_CONFIG", raising=False)
