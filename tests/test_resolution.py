"""Tests for the fallback-chain resolution engine.

Covers candidate list construction, dotted-path lookup and the
language-major resolution order.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from i18nstore.runtime.resolution import (
    as_list,
    is_present,
    language_candidates,
    lookup,
    namespace_candidates,
    namespaced_path,
    resolve,
)

_language_codes = st.from_regex(r"[a-z]{2}(-[A-Z]{2})?", fullmatch=True)


class TestLanguageCandidates:
    """Test language candidate list construction."""

    def test_region_followed_by_primary(self) -> None:
        """Each region-qualified language is followed by its primary subtag."""
        assert language_candidates(["en-GB", "en-US"], ["en"]) == ["en-GB", "en", "en-US"]

    def test_fallback_appended(self) -> None:
        """Fallback languages come after requested ones."""
        assert language_candidates(["fr-CA"], ["en", "de"]) == ["fr-CA", "fr", "en", "de"]

    def test_single_string_request(self) -> None:
        """A single string counts as one requested language."""
        assert language_candidates("de", ["en"]) == ["de", "en"]

    def test_no_request_yields_fallback(self) -> None:
        """Without a request, only fallback languages remain."""
        assert language_candidates(None, ["en"]) == ["en"]

    def test_empty_everything(self) -> None:
        """No request and no fallback yields an empty list."""
        assert language_candidates(None) == []

    def test_leading_separator_has_no_primary(self) -> None:
        """A code without text before the separator adds no primary."""
        assert language_candidates(["-x"], []) == ["-x"]

    @given(
        requested=st.lists(_language_codes, max_size=5),
        fallback=st.lists(_language_codes, max_size=3),
    )
    def test_candidates_unique_and_ordered(
        self, requested: list[str], fallback: list[str]
    ) -> None:
        """Candidates are unique, cover every input and start with the first request."""
        candidates = language_candidates(requested, fallback)
        event(f"candidates={len(candidates)}")

        assert len(candidates) == len(set(candidates))
        for language in requested:
            assert language in candidates
        for language in fallback:
            assert language in candidates
        if requested:
            assert candidates[0] == requested[0]


class TestNamespaceCandidates:
    """Test namespace candidate list construction."""

    def test_requested_then_fallback(self) -> None:
        """Requested namespaces precede fallback namespaces."""
        assert namespace_candidates(["forms", "errors"], ["default"]) == [
            "forms",
            "errors",
            "default",
        ]

    def test_duplicates_removed(self) -> None:
        """A requested namespace also in fallback appears once, in first position."""
        assert namespace_candidates("default", ["default"]) == ["default"]


class TestLookup:
    """Test dotted path traversal."""

    def test_nested_path(self) -> None:
        """Dotted path walks nested mappings."""
        assert lookup({"a": {"b": {"c": "deep"}}}, "a.b.c") == "deep"

    def test_missing_segment_returns_none(self) -> None:
        """Missing segments yield None."""
        assert lookup({"a": {}}, "a.b.c") is None

    def test_list_index_segment(self) -> None:
        """Digit segments index into lists."""
        assert lookup({"steps": [{"title": "One"}, {"title": "Two"}]}, "steps.1.title") == "Two"

    def test_list_index_out_of_range(self) -> None:
        """Out-of-range indices yield None."""
        assert lookup({"steps": ["only"]}, "steps.3") is None

    def test_flat_dotted_key_wins(self) -> None:
        """A top-level key spelled like the whole path is used directly."""
        tree = {"a.b": "flat", "a": {"b": "nested"}}

        assert lookup(tree, "a.b") == "flat"

    def test_traversal_through_scalar_returns_none(self) -> None:
        """Traversing into a string yields None."""
        assert lookup({"a": "text"}, "a.b") is None

    def test_structured_value_returned(self) -> None:
        """Subtrees are returned as-is."""
        assert lookup({"menu": {"home": "Home"}}, "menu") == {"home": "Home"}


class TestResolve:
    """Test full resolution over a dictionary."""

    dictionary: dict[str, dict[str, Any]] = {  # noqa: RUF012
        "en": {
            "hello": "Hello",
            "empty": "",
            "errors": {"required": "Required", "tooLong": "Too long"},
            "shared": "English shared",
        },
        "en-GB": {"colour": "Colour"},
        "fr": {"hello": "Bonjour", "errors": {"required": "Obligatoire"}},
    }

    def _resolve(self, keys: Any, **kwargs: Any) -> Any:
        kwargs.setdefault("languages", language_candidates(kwargs.pop("lang", None), ["en"]))
        kwargs.setdefault("namespaces", namespace_candidates(kwargs.pop("ns", None), ["default"]))
        return resolve(self.dictionary, keys, **kwargs)

    def test_requested_language_wins(self) -> None:
        """The first language with a value is used."""
        assert self._resolve("hello", lang="fr") == "Bonjour"

    def test_falls_back_to_fallback_language(self) -> None:
        """Missing keys fall back through the language chain."""
        assert self._resolve("shared", lang="fr") == "English shared"

    def test_region_falls_back_to_primary(self) -> None:
        """en-GB falls back to en."""
        assert self._resolve("hello", lang="en-GB") == "Hello"
        assert self._resolve("colour", lang="en-GB") == "Colour"

    def test_namespace_prefix_applied(self) -> None:
        """Named namespaces prefix the key path."""
        assert self._resolve("required", lang="fr", ns="errors") == "Obligatoire"

    def test_namespace_falls_back_to_default(self) -> None:
        """Keys missing in the requested namespace resolve from default."""
        assert self._resolve("hello", ns="errors") == "Hello"

    def test_language_beats_key_order(self) -> None:
        """A later key in a higher-priority language beats an earlier key in a lower one."""
        result = self._resolve(["errors.tooLong", "hello"], lang="fr")

        assert result == "Bonjour"

    def test_key_order_within_language(self) -> None:
        """Within one language, keys are tried in order."""
        assert self._resolve(["missing", "hello"], lang="en") == "Hello"

    def test_empty_string_is_missing(self) -> None:
        """Empty strings do not count as translations."""
        assert self._resolve("empty", default="fallback") == "fallback"

    def test_missing_returns_first_key(self) -> None:
        """Unresolved keys return the first key by default."""
        assert self._resolve(["foo.bar", "baz"]) == "foo.bar"

    def test_missing_returns_default(self) -> None:
        """A default takes precedence over the key fallback."""
        assert self._resolve("foo.bar", default="Oops") == "Oops"

    def test_missing_without_key_fallback_is_none(self) -> None:
        """Disabling the key fallback yields None."""
        assert self._resolve("foo.bar", fallback_to_key=False) is None

    def test_empty_dictionary_returns_key(self) -> None:
        """Nothing loaded still answers with the key."""
        assert resolve({}, ["foo.bar"], languages=["en"], namespaces=["default"]) == "foo.bar"

    def test_no_keys_returns_none(self) -> None:
        """An empty key list resolves to None."""
        assert self._resolve([]) is None

    def test_structured_value(self) -> None:
        """Subtrees resolve like strings."""
        assert self._resolve("errors", lang="fr") == {"required": "Obligatoire"}

    @given(
        key=st.from_regex(r"[a-z]{1,6}(\.[a-z]{1,6}){0,2}", fullmatch=True),
        default=st.one_of(st.none(), st.text(min_size=1, max_size=5)),
    )
    def test_missing_key_never_raises(self, key: str, default: str | None) -> None:
        """Lookups of arbitrary missing keys return default or key."""
        result = resolve({}, key, languages=["en"], namespaces=["default"], default=default)

        assert result == (default if default is not None else key)


class TestHelpers:
    """Test small helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, []), ("a", ["a"]), (["a", "b"], ["a", "b"]), (("a",), ["a"])],
    )
    def test_as_list(self, value: Any, expected: list[str]) -> None:
        """Normalize None, strings and iterables."""
        assert as_list(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, False), ("", False), ("x", True), (0, True), ([], True), ({}, True)],
    )
    def test_is_present(self, value: Any, expected: bool) -> None:
        """Only None and the empty string count as missing."""
        assert is_present(value) is expected

    def test_namespaced_path(self) -> None:
        """Default namespace adds no prefix."""
        assert namespaced_path("default", "a") == "a"
        assert namespaced_path("errors", "a") == "errors.a"
