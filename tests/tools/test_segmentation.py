"""Unit tests for Markdown segmentation."""

from src.tools.segmentation import (
    is_structural_line,
    segment,
    split_lines,
    split_paragraphs,
    split_sections,
    split_sentences,
    truncate,
)


class TestSplitSections:
    """Test the split_sections function."""

    def test_preamble_is_dropped(self):
        """Test that text before the first level-2 heading is not a section."""
        content = "# 标题\n引言\n\n## 第一节\n正文一\n\n## 第二节\n正文二"
        sections = split_sections(content)

        assert [s.title for s in sections] == ["第一节", "第二节"]
        assert [s.index for s in sections] == [1, 2]

    def test_body_lines(self):
        """Test that the heading line is split from the body lines."""
        sections = split_sections("## 标题\n第一行\n第二行")

        assert sections[0].body_lines == ("第一行", "第二行")

    def test_deeper_headings_do_not_split(self):
        """Test that ### headings stay inside their section."""
        sections = split_sections("## 一\n### 小节\n内容")

        assert len(sections) == 1
        assert "### 小节" in sections[0].body_lines

    def test_no_sections(self):
        """Test text without level-2 headings."""
        assert split_sections("只有正文。") == []
        assert split_sections("") == []


class TestSplitParagraphs:
    """Test the split_paragraphs function."""

    def test_blank_line_separation(self):
        """Test that blank lines (including whitespace-only) separate paragraphs."""
        paragraphs = split_paragraphs("第一段。\n\n第二段。\n  \n第三段。")

        assert paragraphs == ["第一段。", "第二段。", "第三段。"]

    def test_headings_excluded(self):
        """Test that heading fragments are not paragraphs."""
        paragraphs = split_paragraphs("# 标题\n\n## 小节\n\n正文。")

        assert paragraphs == ["正文。"]

    def test_single_newlines_stay_in_paragraph(self):
        """Test that a single newline does not split a paragraph."""
        assert split_paragraphs("第一行\n第二行") == ["第一行\n第二行"]

    def test_empty_content(self):
        """Test with empty content."""
        assert split_paragraphs("") == []
        assert split_paragraphs("\n\n\n") == []


class TestSplitSentences:
    """Test the split_sentences function."""

    def test_mixed_terminators(self):
        """Test Chinese and ASCII terminators."""
        sentences = split_sentences("你好。真的吗？太好了！Yes. No? Go!")

        assert [s.text for s in sentences] == ["你好", "真的吗", "太好了", "Yes", "No", "Go"]
        assert [s.terminator for s in sentences] == ["。", "？", "！", ".", "?", "!"]

    def test_positions_are_one_based(self):
        """Test that positions count only non-empty sentences."""
        sentences = split_sentences("一。。二。")

        assert [(s.position, s.text) for s in sentences] == [(1, "一"), (2, "二")]

    def test_trailing_text_without_terminator(self):
        """Test that unterminated trailing text is still a sentence."""
        sentences = split_sentences("第一句。第二句")

        assert sentences[-1].text == "第二句"
        assert sentences[-1].terminator == ""

    def test_decimal_point_splits(self):
        """Test that a decimal point also ends a sentence."""
        sentences = split_sentences("版本3.5发布了。")

        assert [s.text for s in sentences] == ["版本3", "5发布了"]

    def test_empty_content(self):
        """Test with empty content."""
        assert split_sentences("") == []


class TestSplitLines:
    """Test the split_lines function."""

    def test_empty_content(self):
        """Test that empty text has no lines."""
        assert split_lines("") == []

    def test_lines_keep_blanks(self):
        """Test that blank lines are kept."""
        assert split_lines("a\n\nb") == ["a", "", "b"]


class TestSegment:
    """Test the segment function and helpers."""

    def test_segment_collects_all_units(self):
        """Test that segment returns every collection."""
        document = segment("## 一\n\n这是正文。第二句。")

        assert len(document.sections) == 1
        assert document.paragraphs == ("这是正文。第二句。",)
        assert len(document.sentences) == 2
        assert document.lines == ("## 一", "", "这是正文。第二句。")

    def test_segment_is_deterministic(self):
        """Test that the same input yields the same boundaries."""
        content = "## 一\n\n正文。\n\n## 二\n\n更多正文？"
        assert segment(content) == segment(content)

    def test_is_structural_line(self):
        """Test heading and list detection."""
        assert is_structural_line("## 标题")
        assert is_structural_line("  - 列表项")
        assert is_structural_line("* 列表项")
        assert not is_structural_line("正文")

    def test_truncate(self):
        """Test display truncation."""
        assert truncate("短文本", 50) == "短文本"
        assert truncate("长" * 60, 50) == "长" * 50 + "..."
