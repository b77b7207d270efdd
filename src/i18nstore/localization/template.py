"""Path template compilation.

A path template such as ``locales/{lang}/{namespace}.{ext}`` describes where
resource files live. It compiles two ways:

- glob patterns (one per supported extension) used to discover files, with
  ``{lang}`` and ``{namespace}`` as ``*`` wildcards;
- a capturing regular expression used to pull language, namespace and
  extension back out of each discovered path.

Both derive from the same token sequence produced by ``tokenize``, so the
placeholder positions of the glob and the capture-group indices of the regex
cannot disagree.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import glob
import os
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from i18nstore.constants import (
    DEFAULT_PATH_TEMPLATE,
    PLACEHOLDER_EXT,
    PLACEHOLDER_LANG,
    PLACEHOLDER_NAMESPACE,
    PLACEHOLDERS,
    SUPPORTED_EXTENSIONS,
)
from i18nstore.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    "PathTemplate",
    "TemplateMatch",
    "TemplateToken",
    "compile_globs",
    "compile_regex",
    "placeholder_groups",
    "tokenize",
]

_PLACEHOLDER_PATTERN = re.compile(r"\{(" + "|".join(PLACEHOLDERS) + r")\}")

# Capture groups substituted for each placeholder in the match expression.
_CAPTURE_PATTERNS: dict[str, str] = {
    PLACEHOLDER_LANG: r"([a-zA-Z_-]+)",
    PLACEHOLDER_NAMESPACE: r"([a-zA-Z_-]+(?:\.[a-zA-Z_-]+)*)",
    PLACEHOLDER_EXT: "(" + "|".join(SUPPORTED_EXTENSIONS) + ")",
}

_GLOB_WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class TemplateToken:
    """One piece of a tokenized template: literal text or a placeholder name."""

    text: str
    placeholder: bool = False


@dataclass(frozen=True, slots=True)
class TemplateMatch:
    """Values captured from a path that matched a template.

    Attributes:
        language: Captured {lang} value
        namespace: Captured {namespace} value
        extension: Captured {ext} value (one of SUPPORTED_EXTENSIONS)
    """

    language: str
    namespace: str
    extension: str


def tokenize(template: str) -> tuple[TemplateToken, ...]:
    """Split a template into literal and placeholder tokens.

    Args:
        template: Path template string

    Returns:
        Tokens in template order

    Raises:
        ConfigurationError: If a placeholder is missing or appears more than once
    """
    tokens: list[TemplateToken] = []
    seen: set[str] = set()
    position = 0

    for match in _PLACEHOLDER_PATTERN.finditer(template):
        name = match.group(1)
        if name in seen:
            msg = f"Placeholder '{{{name}}}' appears more than once in path template: '{template}'"
            raise ConfigurationError(msg)
        seen.add(name)
        if match.start() > position:
            tokens.append(TemplateToken(template[position : match.start()]))
        tokens.append(TemplateToken(name, placeholder=True))
        position = match.end()

    if position < len(template):
        tokens.append(TemplateToken(template[position:]))

    missing = [name for name in PLACEHOLDERS if name not in seen]
    if missing:
        names = ", ".join(f"{{{name}}}" for name in missing)
        msg = f"Path template must contain {names}: '{template}'"
        raise ConfigurationError(msg)

    return tuple(tokens)


def compile_globs(tokens: tuple[TemplateToken, ...]) -> tuple[str, ...]:
    """Compile tokens into glob patterns, one per supported extension.

    Literal text is glob-escaped. {lang} and {namespace} become ``*``;
    {ext} becomes each supported extension in turn, so the globs only ever
    match files a parser exists for.

    Args:
        tokens: Output of tokenize()

    Returns:
        Tuple of glob patterns
    """
    patterns: list[str] = []
    for extension in SUPPORTED_EXTENSIONS:
        parts: list[str] = []
        for token in tokens:
            if not token.placeholder:
                parts.append(glob.escape(token.text))
            elif token.text == PLACEHOLDER_EXT:
                parts.append(extension)
            else:
                parts.append(_GLOB_WILDCARD)
        patterns.append("".join(parts))
    return tuple(patterns)


def compile_regex(tokens: tuple[TemplateToken, ...]) -> re.Pattern[str]:
    """Compile tokens into a capturing regular expression.

    Literal text is regex-escaped; each placeholder becomes exactly one
    capture group. Use placeholder_groups() for the group numbers.

    Args:
        tokens: Output of tokenize()

    Returns:
        Compiled pattern intended for fullmatch()
    """
    return re.compile(
        "".join(
            _CAPTURE_PATTERNS[token.text] if token.placeholder else re.escape(token.text)
            for token in tokens
        )
    )


def placeholder_groups(tokens: tuple[TemplateToken, ...]) -> dict[str, int]:
    """Map each placeholder name to its capture group number in compile_regex().

    Args:
        tokens: Output of tokenize()

    Returns:
        Dict of placeholder name -> 1-based group number
    """
    groups: dict[str, int] = {}
    for token in tokens:
        if token.placeholder:
            groups[token.text] = len(groups) + 1
    return groups


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """Validated resource path template.

    The template is normalized with os.path.normpath so host separators are
    used throughout. Relative templates are anchored at a base directory
    before compiling; absolute templates ignore the base directory.

    Example:
        >>> template = PathTemplate("locales/{lang}/{namespace}.{ext}")
        >>> template.globs("/srv/app")[0]
        '/srv/app/locales/*/*.json'
        >>> template.match("/srv/app/locales/en/errors.json", "/srv/app")
        TemplateMatch(language='en', namespace='errors', extension='json')

    Attributes:
        template: Path template with {lang}, {namespace} and {ext}
    """

    template: str = DEFAULT_PATH_TEMPLATE
    _tokens: tuple[TemplateToken, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Tokenize and validate the template.

        Raises:
            ConfigurationError: If the template is not a string or its
                placeholders are missing or repeated
        """
        if not isinstance(self.template, str):
            msg = f"Path template must be a string, got {type(self.template).__name__}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "_tokens", tokenize(os.path.normpath(self.template)))

    @property
    def tokens(self) -> tuple[TemplateToken, ...]:
        """Tokens of the normalized, unanchored template."""
        return self._tokens

    @property
    def is_absolute(self) -> bool:
        """True if the template names an absolute location."""
        return os.path.isabs(os.path.normpath(self.template))

    def anchored(self, base_dir: str | os.PathLike[str] | None = None) -> tuple[TemplateToken, ...]:
        """Return tokens with the absolute base directory prepended as a literal.

        Args:
            base_dir: Directory the template is relative to; ignored for
                absolute templates. None leaves the template unanchored.

        Returns:
            Token tuple
        """
        if base_dir is None or self.is_absolute:
            return self._tokens
        prefix = os.path.join(os.path.abspath(base_dir), "")
        return (TemplateToken(prefix), *self._tokens)

    def globs(self, base_dir: str | os.PathLike[str] | None = None) -> tuple[str, ...]:
        """Glob patterns for the template anchored at base_dir."""
        return compile_globs(self.anchored(base_dir))

    def regex(self, base_dir: str | os.PathLike[str] | None = None) -> re.Pattern[str]:
        """Capturing expression for the template anchored at base_dir."""
        return compile_regex(self.anchored(base_dir))

    def matcher(
        self, base_dir: str | os.PathLike[str] | None = None
    ) -> Callable[[str], TemplateMatch | None]:
        """Compile once and return a function matching paths under base_dir.

        The returned function yields a TemplateMatch, or None if the path
        does not match or a captured language or namespace is empty.

        Args:
            base_dir: Same base directory used for globbing

        Returns:
            Path -> TemplateMatch | None
        """
        tokens = self.anchored(base_dir)
        pattern = compile_regex(tokens)
        groups = placeholder_groups(tokens)

        def match(path: str) -> TemplateMatch | None:
            found = pattern.fullmatch(path)
            if found is None:
                return None
            language = found.group(groups[PLACEHOLDER_LANG])
            namespace = found.group(groups[PLACEHOLDER_NAMESPACE])
            if not language or not namespace:
                return None
            return TemplateMatch(
                language=language,
                namespace=namespace,
                extension=found.group(groups[PLACEHOLDER_EXT]),
            )

        return match

    def match(
        self, path: str, base_dir: str | os.PathLike[str] | None = None
    ) -> TemplateMatch | None:
        """Extract language, namespace and extension from a single path.

        Args:
            path: Path as returned by globbing globs(base_dir)
            base_dir: Same base directory used for globbing

        Returns:
            TemplateMatch or None
        """
        return self.matcher(base_dir)(path)
