"""
Markdown segmentation for the fluency passes.

Splits a document into sections, paragraphs, sentences and lines. The
splits are deliberately simple: sentence boundaries are any of
``。！？.!?``, so decimal points and abbreviations also end a sentence.
Segmentation never raises and always yields the same boundaries for the
same input.
"""

import re
from dataclasses import dataclass

SENTENCE_TERMINATORS = "。！？.!?"

_SECTION_PATTERN = re.compile(r"^## ", re.MULTILINE)
_PARAGRAPH_PATTERN = re.compile(r"\n[ \t\r\f\v]*\n")
_SENTENCE_PATTERN = re.compile(f"([{re.escape(SENTENCE_TERMINATORS)}])")

# Line prefixes that mark headings and list items
STRUCTURAL_PREFIXES = ("#", "-", "*")


@dataclass(frozen=True)
class Section:
    """A level-2 section: its heading line and the lines below it."""

    index: int  # 1-based, preamble excluded
    title: str
    body_lines: tuple[str, ...]


@dataclass(frozen=True)
class Sentence:
    """A sentence with its terminal punctuation split off."""

    position: int  # 1-based
    text: str
    terminator: str  # "" when the text ends without punctuation


@dataclass(frozen=True)
class Document:
    """All segment collections for one piece of text."""

    sections: tuple[Section, ...]
    paragraphs: tuple[str, ...]
    sentences: tuple[Sentence, ...]
    lines: tuple[str, ...]


def split_sections(content: str) -> list[Section]:
    """Split on ``## `` headings, dropping the preamble before the first one."""
    fragments = _SECTION_PATTERN.split(content)
    sections = []
    for index, fragment in enumerate(fragments[1:], start=1):
        lines = fragment.split("\n")
        sections.append(
            Section(index=index, title=lines[0].strip(), body_lines=tuple(lines[1:]))
        )
    return sections


def split_paragraphs(content: str) -> list[str]:
    """Split on blank lines; headings and empty fragments are excluded."""
    paragraphs = []
    for fragment in _PARAGRAPH_PATTERN.split(content):
        paragraph = fragment.strip()
        if paragraph and not paragraph.startswith("#"):
            paragraphs.append(paragraph)
    return paragraphs


def split_sentences(content: str) -> list[Sentence]:
    """Split on terminal punctuation, keeping each sentence's terminator."""
    parts = _SENTENCE_PATTERN.split(content)
    sentences: list[Sentence] = []
    # re.split with a capture group alternates text, terminator, text, ...
    for i in range(0, len(parts), 2):
        text = parts[i].strip()
        if not text:
            continue
        terminator = parts[i + 1] if i + 1 < len(parts) else ""
        sentences.append(
            Sentence(position=len(sentences) + 1, text=text, terminator=terminator)
        )
    return sentences


def split_lines(content: str) -> list[str]:
    if not content:
        return []
    return content.split("\n")


def is_structural_line(line: str) -> bool:
    """True for heading and list lines (after stripping)."""
    return line.strip().startswith(STRUCTURAL_PREFIXES)


def segment(content: str) -> Document:
    """Segment text into every unit the fluency passes need."""
    return Document(
        sections=tuple(split_sections(content)),
        paragraphs=tuple(split_paragraphs(content)),
        sentences=tuple(split_sentences(content)),
        lines=tuple(split_lines(content)),
    )


def truncate(text: str, limit: int) -> str:
    """Shorten text for display, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
