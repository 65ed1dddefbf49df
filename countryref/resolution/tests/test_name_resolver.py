"""
Tests for NameResolver against the fixture tables in conftest.py.

Run with: pytest countryref/resolution/tests/ -v
"""

import pytest

from countryref.models import DiagnosticLevel
from countryref.resolution.name_resolver import STOP_WORDS, NameResolver, is_only_stop_words


@pytest.fixture
def resolver(reference_data, sink):
    return NameResolver(reference_data, sink)


class TestExactMatch:
    """Tests for the exact tier."""

    def test_canonical_names(self, resolver):
        assert resolver.resolve("France") == "FRA"
        assert resolver.resolve("United States") == "USA"
        assert resolver.resolve("Czechia") == "CZE"

    def test_case_and_accent_insensitive(self, resolver):
        assert resolver.resolve("FRANCE") == "FRA"
        assert resolver.resolve("françe") == "FRA"
        assert resolver.resolve("Cote d'Ivoire") == "CIV"
        assert resolver.resolve("  cote   D IVOIRE ") == "CIV"

    def test_aliases(self, resolver):
        assert resolver.resolve("Deutschland") == "DEU"
        assert resolver.resolve("Korea, Rep.") == "KOR"
        assert resolver.resolve("Korea Republic") == "KOR"

    def test_special_and_historical_names(self, resolver):
        assert resolver.resolve("Euro Area") == "EMU"
        assert resolver.resolve("Czechoslovakia") == "CSK"

    def test_exact_match_emits_nothing(self, resolver, sink):
        resolver.resolve("France")
        assert len(sink) == 0


class TestKorea:
    """Tests for the bare 'Korea' disambiguation."""

    @pytest.mark.parametrize("name", ["korea", "Korea", "KOREA", " Korea. "])
    def test_korea_is_south_korea(self, resolver, name):
        assert resolver.resolve(name) == "KOR"

    def test_korea_warns(self, resolver, sink):
        resolver.resolve("Korea")
        warnings = sink.warnings()
        assert len(warnings) == 1
        assert "South Korea" in warnings[0].message

    def test_korea_without_verbose(self, resolver, sink):
        assert resolver.resolve("Korea", verbose=False) == "KOR"
        assert len(sink) == 0


class TestFuzzyMatch:
    """Tests for the prefix and substring tiers."""

    def test_prefix_match(self, resolver, sink):
        assert resolver.resolve("Franc", min_letter=5) == "FRA"
        events = sink.with_tag("PREFIX")
        assert len(events) == 1
        assert events[0].level is DiagnosticLevel.INFO
        assert "'France'" in events[0].message

    def test_prefix_first_in_table_order(self, resolver):
        """Test 'Czech' prefixes both Czechia and Czechoslovakia; Czechia comes first."""
        assert resolver.resolve("Czech") == "CZE"

    def test_substring_match(self, resolver, sink):
        assert resolver.resolve("Arabia") == "SAU"
        assert len(sink.with_tag("PARTIAL")) == 1
        assert sink.with_tag("PREFIX") == []

    def test_short_input_not_fuzzy_matched(self, resolver, sink):
        assert resolver.resolve("Fra", min_letter=5) is None
        warnings = sink.warnings()
        assert len(warnings) == 1
        assert "not found" in warnings[0].message

    def test_min_letter_lowers_gate(self, resolver):
        assert resolver.resolve("Fra", min_letter=3) == "FRA"
        assert resolver.resolve("Fra", min_letter=0) == "FRA"

    def test_min_letter_raises_gate(self, resolver):
        assert resolver.resolve("Franc", min_letter=6) is None

    def test_stop_words_never_fuzzy_matched(self, resolver):
        """Test 'United' alone must not match United States/Kingdom."""
        assert resolver.resolve("United") is None
        assert resolver.resolve("United Kingdom") == "GBR"
        assert resolver.resolve("Republic", min_letter=0) is None
        assert resolver.resolve("Democratic Republic") is None

    def test_content_word_prefix(self, resolver):
        assert resolver.resolve("Saudi") == "SAU"

    def test_input_is_not_a_pattern(self, resolver):
        assert resolver.resolve("Fr.nce") is None
        assert resolver.resolve("Russ*") is None


class TestNotFound:
    """Tests for unmatched input."""

    def test_unknown_name(self, resolver, sink):
        assert resolver.resolve("Atlantis") is None
        assert "Atlantis" in sink.warnings()[0].message

    def test_empty_name(self, resolver):
        assert resolver.resolve("") is None
        assert resolver.resolve("   ") is None

    def test_verbose_false_is_silent(self, resolver, sink):
        assert resolver.resolve("Atlantis", verbose=False) is None
        assert resolver.resolve("Franc", verbose=False) == "FRA"
        assert len(sink) == 0

    def test_no_sink(self, reference_data):
        assert NameResolver(reference_data).resolve("Atlantis") is None


class TestStopWords:
    """Tests for the stop-word helper."""

    def test_stop_words(self):
        assert "united" in STOP_WORDS
        assert "germany" in STOP_WORDS
        assert "france" not in STOP_WORDS

    def test_is_only_stop_words(self):
        assert is_only_stop_words("united states")
        assert is_only_stop_words("")
        assert not is_only_stop_words("united arab")
