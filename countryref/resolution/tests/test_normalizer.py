"""
Tests for the name normalizer.

Run with: pytest countryref/resolution/tests/ -v
"""

import pytest

from countryref.resolution.normalizer import normalize


class TestNormalize:
    """Tests for normalize()."""

    def test_lowercases(self):
        assert normalize("FRANCE") == "france"

    def test_separators_become_spaces(self):
        """Test punctuation is replaced, not removed."""
        assert normalize("Guinea-Bissau") == "guinea bissau"
        assert normalize("Congo (Brazzaville)") == "congo brazzaville"
        assert normalize("Cote d'Ivoire") == "cote d ivoire"
        assert normalize("Cote d’Ivoire") == "cote d ivoire"
        assert normalize("Bahamas, The") == "bahamas the"
        assert normalize("u.s.") == "u s"

    def test_whitespace_collapsed_and_trimmed(self):
        assert normalize("  United    Kingdom \t") == "united kingdom"

    def test_diacritics_folded(self):
        """Test accent families fold to plain vowels."""
        assert normalize("Côte d'Ivoire") == "cote d ivoire"
        assert normalize("Türkiye") == "turkiye"
        assert normalize("São Tomé and Príncipe") == "sao tome and principe"
        assert normalize("Curaçao") == "curacao"
        assert normalize("Åland Islands") == "aland islands"
        assert normalize("françe") == "france"

    def test_ligatures_and_single_letters(self):
        assert normalize("Æ") == "ae"
        assert normalize("Œ") == "oe"
        assert normalize("España") == "espana"
        assert normalize("Großbritannien") == "grossbritannien"

    @pytest.mark.parametrize("raw,expected", [
        ("Korea, Dem. Rep.", "korea democratic republic"),
        ("Congo, Rep.", "congo republic"),
        ("St. Lucia", "saint lucia"),
        ("Micronesia, Fed. Sts.", "micronesia federal sts"),
        ("Govt. of India", "government of india"),
    ])
    def test_abbreviations_expanded(self, raw, expected):
        assert normalize(raw) == expected

    def test_abbreviations_whole_word_only(self):
        """Test 'rep' inside a word is left alone."""
        assert normalize("Representative") == "representative"
        assert normalize("Stan") == "stan"
        assert normalize("Democracy") == "democracy"

    def test_empty_and_punctuation_only(self):
        assert normalize("") == ""
        assert normalize(" .,- ") == ""

    def test_idempotent(self):
        for raw in ["Korea, Dem. Rep.", "Côte d'Ivoire", "St. Kitts and Nevis"]:
            once = normalize(raw)
            assert normalize(once) == once
