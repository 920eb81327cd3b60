"""Unit tests for AI-tone phrase detection."""

from src.tools.ai_tone import AI_TONE_PATTERNS, detect_ai_tone


class TestDetectAITone:
    """Test the detect_ai_tone function."""

    def test_empty_content(self):
        """Test that empty text has no matches and passes."""
        analysis = detect_ai_tone("")

        assert analysis.total_matches == 0
        assert analysis.total_sentences == 0
        assert analysis.passed is True
        assert set(analysis.category_counts) == set(AI_TONE_PATTERNS)

    def test_template_start_with_gap(self):
        """Test that a gapped template phrase matches across its gap."""
        analysis = detect_ai_tone("随着人工智能技术的快速发展，我们可以看到很多变化。")

        assert analysis.category_counts["template_starts"] == 2
        assert analysis.total_matches == 2
        assert analysis.affected_sentences == 1
        assert analysis.ai_tone_percentage == 100.0
        assert analysis.passed is False

    def test_categories(self, ai_tone_article):
        """Test counts across several categories."""
        analysis = detect_ai_tone(ai_tone_article)

        assert analysis.category_counts == {
            "template_starts": 3,
            "empty_phrases": 1,
            "absolute_statements": 0,
            "social_endings": 1,
        }
        phrases = {match["phrase"] for match in analysis.matched_phrases}
        assert {"众所周知", "赋能", "让我们共同期待"} <= phrases
        assert analysis.affected_sentences == 3

    def test_repeated_phrase_counted(self):
        """Test that each occurrence of a phrase is counted."""
        analysis = detect_ai_tone("毫无疑问，这很好。毫无疑问，那也很好。")

        assert analysis.matched_phrases == (
            {"phrase": "毫无疑问", "category": "absolute_statements", "count": 2},
        )

    def test_clean_text_passes(self, clean_article):
        """Test that plain prose passes."""
        analysis = detect_ai_tone(clean_article)

        assert analysis.total_matches == 0
        assert analysis.passed is True

    def test_to_dict(self, ai_tone_article):
        """Test serialization."""
        record = detect_ai_tone(ai_tone_article).to_dict()

        assert record["ai_tone_percentage"] == "100.0"
        assert record["status"] == "⚠️ NEED IMPROVEMENT"
        assert record["pass_criteria"] == "AI腔表达<2%"
