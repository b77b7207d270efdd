"""Tests for request language negotiation."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from i18nstore.enums import LanguageSource
from i18nstore.integration.negotiation import (
    Negotiation,
    NegotiationConfig,
    detect_languages,
    filter_allowed,
    parse_language_list,
    select_languages,
)


class TestParseLanguageList:
    """Test language list parsing."""

    def test_comma_separated(self) -> None:
        """Entries are split on commas and trimmed."""
        assert parse_language_list("en-GB, fr ,de") == ["en-GB", "fr", "de"]

    def test_quality_parameters_stripped(self) -> None:
        """Quality values are removed; order is kept as sent."""
        assert parse_language_list("fr;q=0.5,en-US;q=0.9,de") == ["fr", "en-US", "de"]

    def test_unparseable_entries_dropped(self) -> None:
        """Entries without a leading tag are dropped."""
        assert parse_language_list("*;q=0.1,,123,en") == ["en"]

    def test_sequence_input(self) -> None:
        """Sequences are parsed entry by entry."""
        assert parse_language_list(["en;q=1", " de"]) == ["en", "de"]

    def test_none(self) -> None:
        """None yields an empty list."""
        assert parse_language_list(None) == []

    @given(st.text(max_size=40))
    def test_never_raises(self, header: str) -> None:
        """Arbitrary header text parses to tags matching [a-zA-Z-]+."""
        for tag in parse_language_list(header):
            assert tag
            assert all(c.isascii() and (c.isalpha() or c == "-") for c in tag)


class TestFilterAllowed:
    """Test allow-list filtering."""

    def test_intersection_in_detected_order(self) -> None:
        """Only allowed languages remain, in detected order."""
        assert filter_allowed(["fr", "es", "de", "it"], ["de", "en"]) == ["de"]

    def test_no_allow_list(self) -> None:
        """None keeps every language."""
        assert filter_allowed(["fr", "es"], None) == ["fr", "es"]

    def test_duplicates_removed(self) -> None:
        """Repeated languages appear once."""
        assert filter_allowed(["en", "de", "en"], ["en", "de"]) == ["en", "de"]

    def test_select_languages_combines_both(self) -> None:
        """Parsing and filtering in one step."""
        assert select_languages("fr;q=0.9, de", ("de",)) == ["de"]


class TestDetectLanguages:
    """Test source precedence."""

    config = NegotiationConfig(query="lang", cookie_name="lang", detect=True)

    def test_query_wins(self) -> None:
        """Query parameter beats cookie and header."""
        result = detect_languages(
            {"lang": "fr,en"}, {"lang": "de"}, {"accept-language": "es"}, self.config
        )

        assert result == Negotiation(("fr", "en"), LanguageSource.QUERY)

    def test_cookie_beats_header(self) -> None:
        """Cookie is used when the query parameter is absent."""
        result = detect_languages({}, {"lang": "de"}, {"accept-language": "es"}, self.config)

        assert result == Negotiation(("de",), LanguageSource.COOKIE)

    def test_header_when_detect_enabled(self) -> None:
        """Accept-Language is the last resort."""
        result = detect_languages({}, {}, {"accept-language": "es-ES,es;q=0.9"}, self.config)

        assert result == Negotiation(("es-ES", "es"), LanguageSource.HEADER)

    def test_header_ignored_without_detect(self) -> None:
        """detect=False never reads the header."""
        config = NegotiationConfig(query="lang")

        result = detect_languages({}, {}, {"accept-language": "es"}, config)

        assert result == Negotiation((), LanguageSource.NONE)

    def test_wildcard_header_ignored(self) -> None:
        """A bare * header means no preference."""
        result = detect_languages({}, {}, {"accept-language": "*"}, self.config)

        assert result.languages == ()
        assert result.source is LanguageSource.NONE

    def test_empty_query_value_skipped(self) -> None:
        """An empty query value falls through to the cookie."""
        result = detect_languages({"lang": ""}, {"lang": "de"}, {}, self.config)

        assert result.source is LanguageSource.COOKIE

    def test_unconfigured_sources_ignored(self) -> None:
        """Without query or cookie names, those sources are not read."""
        result = detect_languages({"lang": "fr"}, {"lang": "de"}, {}, NegotiationConfig())

        assert result.source is LanguageSource.NONE

    def test_allow_list_applied(self) -> None:
        """Detected languages are filtered by the allow-list."""
        config = NegotiationConfig(
            query="lang", allowed_langs=["de", "en"]  # type: ignore[arg-type]
        )

        result = detect_languages({"lang": "fr,es,de,it"}, {}, {}, config)

        assert result.languages == ("de",)

    def test_allowed_langs_string_normalized(self) -> None:
        """A single allowed language string becomes a tuple."""
        config = NegotiationConfig(allowed_langs="en")  # type: ignore[arg-type]

        assert config.allowed_langs == ("en",)
