"""Translator configuration.

Provides a single frozen dataclass that encapsulates every option the
Translator and the filesystem backend recognize. Sequence options accept a
single string or any iterable and are normalized to tuples, so a config can
be compared and shared between threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from i18nstore.constants import (
    DEFAULT_FALLBACK_LANG,
    DEFAULT_FALLBACK_NAMESPACE,
    DEFAULT_PATH_TEMPLATE,
    DEFAULT_WATCH_INTERVAL,
)
from i18nstore.errors import ConfigurationError
from i18nstore.localization.template import PathTemplate

__all__ = ["TranslatorConfig"]

# Option names accepted by from_options() besides the field names themselves.
_OPTION_ALIASES: dict[str, str] = {
    "baseDir": "base_dir",
    "fallbackLang": "fallback_lang",
    "fallbackNamespace": "fallback_namespace",
    "watchInterval": "watch_interval",
}


def _as_tuple(name: str, value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            msg = f"{name} entries must be strings, got {type(item).__name__}"
            raise ConfigurationError(msg)
    return items


@dataclass(frozen=True, slots=True)
class TranslatorConfig:
    """Immutable configuration for Translator and FileSystemBackend.

    All fields have sensible defaults; ``TranslatorConfig()`` loads
    ``locales/{lang}/{namespace}.{ext}`` under the calling project's root.

    Attributes:
        path: Path template with {lang}, {namespace} and {ext} placeholders.
        base_dir: Directory or directories the template is relative to, in
            increasing merge precedence. Made absolute against the current
            directory at construction. None discovers the project root.
        resources: In-memory resources merged over file content; wins every
            conflict. Shape matches the loaded dictionary (language -> tree).
        watch: Reload automatically when resource files change.
        watch_interval: Seconds between two polls of the resource tree.
        fallback_lang: Languages tried after the requested ones.
        fallback_namespace: Namespaces tried after the requested ones.

    Example:
        >>> config = TranslatorConfig(base_dir="app", fallback_lang="en")
        >>> config.fallback_lang
        ('en',)
        >>> config.base_dir
        ('/srv/app',)
    """

    path: str = DEFAULT_PATH_TEMPLATE
    base_dir: tuple[str, ...] | None = None
    resources: Mapping[str, Any] | None = None
    watch: bool = False
    watch_interval: float = DEFAULT_WATCH_INTERVAL
    fallback_lang: tuple[str, ...] = DEFAULT_FALLBACK_LANG
    fallback_namespace: tuple[str, ...] = DEFAULT_FALLBACK_NAMESPACE
    _template: PathTemplate = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize sequence options and validate values.

        Raises:
            ConfigurationError: If the path template is invalid, the watch
                interval is not positive, or an option has the wrong type
        """
        object.__setattr__(self, "_template", PathTemplate(self.path))

        if self.base_dir is not None:
            base_dir: Any = self.base_dir
            if isinstance(base_dir, (str, os.PathLike)):
                dirs: tuple[str, ...] = (os.path.abspath(base_dir),)
            else:
                dirs = tuple(os.path.abspath(directory) for directory in base_dir)
            object.__setattr__(self, "base_dir", dirs)

        if self.resources is not None and not isinstance(self.resources, Mapping):
            msg = f"resources must be a mapping, got {type(self.resources).__name__}"
            raise ConfigurationError(msg)

        if self.watch_interval <= 0:
            msg = f"watch_interval must be positive, got {self.watch_interval}"
            raise ConfigurationError(msg)

        object.__setattr__(
            self, "fallback_lang", _as_tuple("fallback_lang", self.fallback_lang)
        )
        object.__setattr__(
            self,
            "fallback_namespace",
            _as_tuple("fallback_namespace", self.fallback_namespace),
        )

    @property
    def template(self) -> PathTemplate:
        """Compiled path template."""
        return self._template

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> TranslatorConfig:
        """Build a config from an options mapping.

        Accepts the field names and the camelCase spellings ``baseDir``,
        ``fallbackLang``, ``fallbackNamespace`` and ``watchInterval``.

        Args:
            options: Option name -> value

        Returns:
            New TranslatorConfig

        Raises:
            ConfigurationError: If an option name is not recognized

        Example:
            >>> TranslatorConfig.from_options({"baseDir": "app", "watch": True}).watch
            True
        """
        known = {f.name for f in fields(cls) if f.init}
        kwargs: dict[str, Any] = {}
        for name, value in (options or {}).items():
            target = _OPTION_ALIASES.get(name, name)
            if target not in known:
                msg = f"Unknown translator option: '{name}'"
                raise ConfigurationError(msg)
            kwargs[target] = value
        return cls(**kwargs)
