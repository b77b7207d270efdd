"""Translator: owns the dictionary snapshot and answers translation lookups.

Separates the moving parts of localization:
- Backend: produces a complete dictionary (FileSystemBackend by default)
- Resolution engine: pure fallback-chain lookup over a snapshot
- ReadinessGate: one-shot "first load finished" signal
- ResourceWatcher: optional live reload

Key architectural decisions:
- Snapshot publishing: every load builds a new dictionary and replaces the
  reference in one assignment. Readers never lock; they see either the old
  or the new dictionary, never a partial one.
- Single writer: loads are serialized by a lock, so concurrent reload
  triggers run one after another and the last to finish wins.
- Fail-fast first load: errors from the first load (and from any explicit
  reload()) propagate to the caller. Reloads triggered by the watcher are
  logged and the previous dictionary stays published.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import threading
from typing import TYPE_CHECKING, Any

from i18nstore.config import TranslatorConfig
from i18nstore.errors import ConfigurationError, WatcherError
from i18nstore.localization.discovery import resolve_base_dirs
from i18nstore.localization.loading import Backend, FileSystemBackend
from i18nstore.localization.merge import deep_merge
from i18nstore.runtime.readiness import ReadinessGate
from i18nstore.runtime.resolution import language_candidates, namespace_candidates, resolve
from i18nstore.runtime.watcher import Fingerprint, ResourceWatcher, fingerprint_files

if TYPE_CHECKING:
    from collections.abc import Iterable

    from i18nstore.localization.types import Dictionary
    from i18nstore.runtime.readiness import Dispatcher, Listener

__all__ = ["Translator"]

logger = logging.getLogger(__name__)


class Translator:
    """Multi-language translation lookup with fallback chains.

    Example - Disk-based resources:
        >>> translator = Translator(TranslatorConfig(base_dir="app"))
        >>> translator.translate("title", lang=["en-GB"], namespace="home")
        # Tries en-GB, en, then fallback languages; home.title, then title

    Example - In-memory resources:
        >>> translator = Translator(
        ...     TranslatorConfig(resources={"en": {"hello": "Hello"}}),
        ...     backend=StaticBackend({}),
        ... )
        >>> translator.translate("hello")
        'Hello'

    Example - Deferred loading:
        >>> translator = Translator(config, autoload=False)
        >>> translator.on_ready(lambda: print("loaded"))
        >>> translator.load_in_background()
        >>> translator.wait_ready(timeout=5)
        True
    """

    __slots__ = (
        "_backend",
        "_closed",
        "_config",
        "_dictionary",
        "_gate",
        "_load_config",
        "_reload_count",
        "_reload_lock",
        "_watcher",
    )

    def __init__(
        self,
        config: TranslatorConfig | None = None,
        *,
        backend: Backend | None = None,
        autoload: bool = True,
        dispatch: Dispatcher | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            config: Translator configuration (default: TranslatorConfig())
            backend: Dictionary backend (default: FileSystemBackend()). It
                receives the config without resources.
            autoload: Run the first load now, in the calling thread
            dispatch: Scheduler for readiness listeners (default: new thread)

        Raises:
            ConfigurationError: If the backend has no callable load method
            WatcherError: If watch is enabled but the backend cannot list files
            ResourceSyntaxError: If autoload is set and a resource is malformed
            OSError: If autoload is set and a resource cannot be read
        """
        resolved_backend: Any = backend if backend is not None else FileSystemBackend()
        if not callable(getattr(resolved_backend, "load", None)):
            msg = "Invalid backend. Backend must expose a `load` method."
            raise ConfigurationError(msg)

        config = config if config is not None else TranslatorConfig()
        # Resolve the project root once, from the caller's stack; reloads
        # started by the watcher thread have no user frame to inspect.
        if config.base_dir is None:
            config = dataclasses.replace(
                config, base_dir=resolve_base_dirs(None, sys._getframe(1))
            )

        if config.watch and not callable(getattr(resolved_backend, "discover", None)):
            msg = (
                f"watch requires a backend exposing a `discover` method, "
                f"got {type(resolved_backend).__name__}"
            )
            raise WatcherError(msg)

        self._config: TranslatorConfig = config
        # Explicit resources are merged by reload(), not by the backend
        self._load_config = dataclasses.replace(config, resources=None)
        self._backend: Backend = resolved_backend
        # Until the first load finishes, explicit resources are all there is
        self._dictionary: Dictionary = deep_merge(config.resources)
        self._reload_lock = threading.Lock()
        self._reload_count = 0
        self._gate = ReadinessGate(dispatch)
        self._closed = False
        self._watcher: ResourceWatcher | None = None
        if config.watch:
            self._watcher = ResourceWatcher(
                self._fingerprint,
                self._reload_from_watcher,
                interval=config.watch_interval,
            )

        if autoload:
            self.reload()

    @property
    def config(self) -> TranslatorConfig:
        """Configuration in effect, with base directories resolved."""
        return self._config

    @property
    def backend(self) -> Backend:
        """Dictionary backend."""
        return self._backend

    @property
    def dictionary(self) -> Dictionary:
        """Current dictionary snapshot. Treat as read-only."""
        return self._dictionary

    @property
    def available_languages(self) -> tuple[str, ...]:
        """Languages present in the current snapshot, sorted."""
        return tuple(sorted(self._dictionary))

    @property
    def reload_count(self) -> int:
        """Number of successful loads so far."""
        return self._reload_count

    @property
    def is_ready(self) -> bool:
        """True once the first load has succeeded."""
        return self._gate.is_ready

    @property
    def is_watching(self) -> bool:
        """True while live reload is active."""
        return self._watcher is not None and self._watcher.is_running

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        state = "ready" if self.is_ready else "pending"
        return (
            f"Translator({state}, languages={self.available_languages!r}, "
            f"watching={self.is_watching})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reload(self) -> Dictionary:
        """Load the dictionary from the backend and publish it.

        On failure the previous dictionary stays published and the error
        propagates. Before the first success the failure is also recorded on
        the readiness gate so wait_ready() re-raises it.

        Returns:
            The newly published dictionary

        Raises:
            ResourceSyntaxError: If a resource is malformed
            OSError: If a resource cannot be read
            WatcherError: If live reload cannot be started after the first
                load; the new dictionary is already published and the
                translator is ready, only watching stays off
        """
        with self._reload_lock:
            self._gate.begin()
            try:
                baseline = self._fingerprint() if self._watcher is not None else None
                loaded = self._backend.load(self._load_config)
            except Exception as e:
                self._gate.fail(e)
                raise
            dictionary = deep_merge(loaded, self._config.resources)
            self._dictionary = dictionary
            self._reload_count += 1
            logger.info(
                "Published dictionary #%d with %d language(s)",
                self._reload_count,
                len(dictionary),
            )
            self._gate.set()

            if self._watcher is not None and not self._closed and not self._watcher.is_running:
                self._watcher.start(baseline)

        return dictionary

    def load_in_background(self) -> threading.Thread:
        """Run reload() on a daemon thread.

        Failures are logged and, before the first success, re-raised by
        wait_ready().

        Returns:
            The started thread
        """
        thread = threading.Thread(
            target=self._load_logged, name="i18nstore-load", daemon=True
        )
        thread.start()
        return thread

    def on_ready(self, listener: Listener) -> None:
        """Call listener once the first load has succeeded.

        Listeners registered after readiness are still called, always
        asynchronously through the dispatcher.

        Args:
            listener: Zero-argument callback
        """
        self._gate.on_ready(listener)

    def wait_ready(self, timeout: float | None = None) -> bool:
        """Block until the first load has succeeded.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely

        Returns:
            True if ready, False on timeout

        Raises:
            Exception: The failure of the most recent load attempt, if no
                attempt has succeeded yet
        """
        return self._gate.wait(timeout)

    def close(self) -> None:
        """Stop live reload. The current dictionary stays usable."""
        self._closed = True
        if self._watcher is not None:
            self._watcher.stop()

    def __enter__(self) -> Translator:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Stop live reload on exit. Does not suppress exceptions."""
        self.close()

    def _fingerprint(self) -> Fingerprint:
        discover = getattr(self._backend, "discover")  # noqa: B009 - checked in __init__
        return fingerprint_files(
            resource.filename for resource in discover(self._load_config)
        )

    def _reload_from_watcher(self) -> None:
        try:
            self.reload()
        except Exception:
            logger.exception("Reload failed; keeping previous dictionary")

    def _load_logged(self) -> None:
        try:
            self.reload()
        except Exception:
            logger.exception("Background load failed")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get_languages(self, lang: str | Iterable[str] | None = None) -> list[str]:
        """Language candidates for requested languages plus configured fallbacks.

        Args:
            lang: Requested language(s), highest priority first

        Returns:
            De-duplicated language list
        """
        return language_candidates(lang, self._config.fallback_lang)

    def get_namespaces(self, namespace: str | Iterable[str] | None = None) -> list[str]:
        """Namespace candidates for requested namespaces plus configured fallbacks.

        Args:
            namespace: Requested namespace(s), highest priority first

        Returns:
            De-duplicated namespace list
        """
        return namespace_candidates(namespace, self._config.fallback_namespace)

    def translate(
        self,
        keys: str | Iterable[str],
        *,
        lang: str | Iterable[str] | None = None,
        namespace: str | Iterable[str] | None = None,
        default: Any = None,
        fallback_to_key: bool = True,
    ) -> Any:
        """Resolve keys against the current dictionary snapshot.

        Never raises for missing data and performs no I/O.

        Args:
            keys: Key or keys to try, in order
            lang: Requested language(s), highest priority first
            namespace: Requested namespace(s), highest priority first
            default: Returned when nothing resolves
            fallback_to_key: Return the first key when nothing resolves and
                no default is given

        Returns:
            Resolved string or structured value, default, first key, or None

        Example:
            >>> translator.translate(["title.short", "title"], lang="fr-CA", namespace="home")
            'Accueil'
        """
        return resolve(
            self._dictionary,
            keys,
            languages=self.get_languages(lang),
            namespaces=self.get_namespaces(namespace),
            default=default,
            fallback_to_key=fallback_to_key,
        )

    def has_translation(
        self,
        keys: str | Iterable[str],
        *,
        lang: str | Iterable[str] | None = None,
        namespace: str | Iterable[str] | None = None,
    ) -> bool:
        """Check if any key resolves anywhere in the fallback chain."""
        return (
            self.translate(keys, lang=lang, namespace=namespace, fallback_to_key=False)
            is not None
        )
