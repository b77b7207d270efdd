"""Language-specific template selection.

For a template ``pages/about.html`` and languages ``["fr-CA", "fr", "en"]``,
the resolver looks for ``pages/about_fr-CA.html``, ``pages/about_fr.html``
and ``pages/about_en.html`` under each search path in turn. The first file
that exists is used; otherwise the caller renders the original name.

LocalizedRenderer wraps any ``render(name, context)`` callable (a Jinja2
environment, Starlette's Jinja2Templates, a test double) so rendering code
does not need to know about localized variants.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from i18nstore.localization.orchestrator import Translator

__all__ = ["LocalizedCandidate", "LocalizedRenderer", "LocalizedTemplateResolver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalizedCandidate:
    """A localized template that may exist.

    Attributes:
        name: Template name relative to its search path
        path: Absolute file path checked for existence
    """

    name: str
    path: str


def _is_within(base_dir: Path, full_path: Path) -> bool:
    """Check if full_path stays inside base_dir once both are resolved."""
    try:
        full_path.resolve().relative_to(base_dir.resolve())
    except ValueError:
        return False
    return True


class LocalizedTemplateResolver:
    """Find the first existing language-specific variant of a template.

    Existence checks are cached per resolver instance when use_cache is set.
    Call clear_cache() after adding templates at runtime.

    Example:
        >>> resolver = LocalizedTemplateResolver(["templates"])
        >>> resolver.resolve("pages/about.html", ["fr-CA", "fr", "en"])
        'pages/about_fr.html'
    """

    __slots__ = ("_cache", "_exists", "_lock", "search_paths", "use_cache")

    def __init__(
        self,
        search_paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]],
        *,
        use_cache: bool = True,
        exists: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            search_paths: Template directories, searched in order
            use_cache: Remember existence checks
            exists: Existence check (default: os.path.isfile)
        """
        if isinstance(search_paths, (str, os.PathLike)):
            search_paths = [search_paths]
        self.search_paths: tuple[str, ...] = tuple(
            os.path.abspath(path) for path in search_paths
        )
        self.use_cache = use_cache
        self._exists: Callable[[str], bool] = exists if exists is not None else os.path.isfile
        self._cache: dict[str, bool] = {}
        self._lock = threading.Lock()

    def candidates(
        self, name: str, languages: Iterable[str], ext: str | None = None
    ) -> list[LocalizedCandidate]:
        """List localized variants of name in lookup order.

        Args:
            name: Template name (e.g., "pages/about.html")
            languages: Languages, highest priority first
            ext: Extension to use when name has none (e.g., ".html")

        Returns:
            Candidates ordered by language, then search path. Search paths
            the template base would escape (e.g., "../secret") are skipped.
        """
        stem, found_ext = os.path.splitext(name)
        extension = found_ext or ext or ""
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        base = stem.lstrip("/\\")

        roots = [root for root in self.search_paths if _is_within(Path(root), Path(root, base))]
        if len(roots) < len(self.search_paths):
            logger.debug(
                "Template %r escapes %d search path(s)",
                name,
                len(self.search_paths) - len(roots),
            )

        result: list[LocalizedCandidate] = []
        for language in languages:
            localized = f"{base}_{language}{extension}"
            for root in roots:
                result.append(LocalizedCandidate(localized, os.path.join(root, localized)))
        return result

    def resolve(
        self, name: str, languages: Iterable[str], ext: str | None = None
    ) -> str | None:
        """Return the name of the first existing localized variant.

        Args:
            name: Template name
            languages: Languages, highest priority first
            ext: Extension to use when name has none

        Returns:
            Localized template name, or None when no variant exists
        """
        for candidate in self.candidates(name, languages, ext):
            if self._check(candidate.path):
                return candidate.name
        return None

    def clear_cache(self) -> None:
        """Forget every cached existence check."""
        with self._lock:
            self._cache.clear()

    def _check(self, path: str) -> bool:
        if not self.use_cache:
            return self._exists(path)
        with self._lock:
            cached = self._cache.get(path)
        if cached is not None:
            return cached
        exists = self._exists(path)
        with self._lock:
            self._cache[path] = exists
        return exists

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocalizedTemplateResolver(search_paths={self.search_paths!r}, "
            f"use_cache={self.use_cache})"
        )


class LocalizedRenderer:
    """Render the best localized variant of a template.

    Example:
        >>> templates = Jinja2Templates(directory="templates")
        >>> renderer = LocalizedRenderer(
        ...     lambda name, context: templates.TemplateResponse(context["request"], name, context),
        ...     translator,
        ...     LocalizedTemplateResolver("templates"),
        ... )
        >>> renderer.render("about.html", {"request": request, "lang": request.state.lang})
    """

    __slots__ = ("_render", "resolver", "translator")

    def __init__(
        self,
        render: Callable[[str, Mapping[str, Any]], Any],
        translator: Translator,
        resolver: LocalizedTemplateResolver,
    ) -> None:
        """Initialize renderer.

        Args:
            render: Underlying render(name, context) callable
            translator: Supplies the language fallback chain
            resolver: Finds localized variants
        """
        self._render = render
        self.translator = translator
        self.resolver = resolver

    def resolve(self, name: str, lang: str | Iterable[str] | None = None) -> str:
        """Return the template name that render() would use."""
        languages = self.translator.get_languages(lang)
        return self.resolver.resolve(name, languages) or name

    def render(
        self,
        name: str,
        context: Mapping[str, Any] | None = None,
        *,
        lang: str | Iterable[str] | None = None,
    ) -> Any:
        """Render the first localized variant of name, or name itself.

        Args:
            name: Template name
            context: Template context; its "lang" entry is used when lang is None
            lang: Requested language(s)

        Returns:
            Whatever the wrapped render callable returns
        """
        context = context if context is not None else {}
        if lang is None:
            lang = context.get("lang")
        return self._render(self.resolve(name, lang), context)
