"""Unit tests for text normalization."""
from exercise_field_parser.parsers.text_normalizer import (
    clean_text,
    collapse_whitespace,
    normalize_text,
)


class TestNormalizeText:
    """Test cases for normalize_text."""

    def test_trims_and_collapses_whitespace(self):
        assert normalize_text("  4   sets\tx\n8 reps  ") == "4 sets x 8 reps"

    def test_lowercases(self):
        assert normalize_text("Rest 90 Seconds") == "rest 90 seconds"

    def test_maps_curly_quotes(self):
        assert normalize_text("“slow” ‘tempo’") == '"slow" "tempo"'

    def test_maps_en_and_em_dashes(self):
        assert normalize_text("8–12 reps") == "8-12 reps"
        assert normalize_text("30—60 seconds rest") == "30-60 seconds rest"

    def test_empty_and_none(self):
        """Normalization is total: empty input gives an empty string."""
        assert normalize_text("") == ""
        assert normalize_text("   ") == ""
        assert normalize_text(None) == ""


class TestCleanText:
    """clean_text does the same cleanup but keeps the user's casing."""

    def test_preserves_case(self):
        assert clean_text("  Keep   Elbows Tucked ") == "Keep Elbows Tucked"

    def test_maps_dashes(self):
        assert clean_text("8–12") == "8-12"

    def test_collapse_whitespace(self):
        assert collapse_whitespace(" a \n\n b ") == "a b"
