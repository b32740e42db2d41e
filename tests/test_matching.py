"""Tests for matching utilities."""

from student_hub.matching import matches_query, phrase_matches, query_terms, word_matches


class TestWordMatches:
    """Single words match at word boundaries."""

    def test_standalone_word(self) -> None:
        """Standalone word matches, case-insensitive."""
        assert word_matches("Part-time Library Assistant", "library") is True

    def test_substring_no_match(self) -> None:
        """'intern' does not match 'international' as a whole word."""
        assert word_matches("International student desk", "intern") is False

    def test_prefix(self) -> None:
        """With prefix=True a word start is enough."""
        assert word_matches("International student desk", "intern", prefix=True) is True
        assert word_matches("Hackathon", "thon", prefix=True) is False


class TestQueries:
    """Search box queries."""

    def test_query_terms_keep_quoted_phrases(self) -> None:
        """Quoted phrases stay one term."""
        assert query_terms('"teaching assistant" CSE') == ["teaching assistant", "cse"]

    def test_phrase_any_order(self) -> None:
        """A multi-word phrase falls back to every word present."""
        assert phrase_matches("Assistant for teaching labs", "teaching assistant") is True
        assert phrase_matches("Teaching labs", "teaching assistant") is False

    def test_all_terms_required(self) -> None:
        """Every term must match some field."""
        fields = ["Research Assistant", "BRAC University", "python, ml"]
        assert matches_query(fields, "research python") is True
        assert matches_query(fields, "research java") is False

    def test_empty_query_matches(self) -> None:
        """Blank queries match everything."""
        assert matches_query(["anything"], "  ") is True
