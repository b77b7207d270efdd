"""Polling watcher for live reload of resource files.

The watcher re-runs file discovery on every poll, so it notices edits to
files that were loaded, files that disappeared, and new files matching the
path template. A poll compares a fingerprint of the discovered files
(``{path: (mtime_ns, size)}``) with the previous one and calls ``on_change``
once per differing poll. Polls run on a single daemon thread, so a burst of
edits between two polls triggers one reload.

Errors raised while fingerprinting are logged and the poll is skipped.
Errors raised by ``on_change`` are logged; the watcher keeps running.

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import TYPE_CHECKING

from i18nstore.constants import DEFAULT_WATCH_INTERVAL
from i18nstore.errors import ConfigurationError, WatcherError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

__all__ = ["Fingerprint", "ResourceWatcher", "fingerprint_files"]

logger = logging.getLogger(__name__)

type Fingerprint = dict[str, tuple[int, int] | None]
"""Path -> (mtime_ns, size), or None for a path that could not be stat'ed."""


def fingerprint_files(paths: Iterable[str]) -> Fingerprint:
    """Fingerprint files by modification time and size.

    A file that vanished between discovery and stat maps to None rather
    than raising.

    Args:
        paths: File paths

    Returns:
        Fingerprint mapping
    """
    result: Fingerprint = {}
    for path in paths:
        try:
            stat = os.stat(path)
        except FileNotFoundError:
            result[path] = None
        else:
            result[path] = (stat.st_mtime_ns, stat.st_size)
    return result


class ResourceWatcher:
    """Poll a fingerprint function and report changes.

    Example:
        >>> watcher = ResourceWatcher(
        ...     lambda: fingerprint_files(paths),
        ...     on_change=translator.reload,
        ...     interval=0.5,
        ... )
        >>> watcher.start()
        >>> ...
        >>> watcher.stop()

    Attributes:
        interval: Seconds between polls
    """

    __slots__ = (
        "_baseline",
        "_fingerprint",
        "_lock",
        "_on_change",
        "_stop",
        "_thread",
        "interval",
    )

    def __init__(
        self,
        fingerprint: Callable[[], Fingerprint],
        on_change: Callable[[], object],
        *,
        interval: float = DEFAULT_WATCH_INTERVAL,
    ) -> None:
        """Initialize a stopped watcher.

        Args:
            fingerprint: Returns the current fingerprint of the watched tree
            on_change: Called once for every poll that sees a difference
            interval: Seconds between polls

        Raises:
            ConfigurationError: If interval is not positive
        """
        if interval <= 0:
            msg = f"Watch interval must be positive, got {interval}"
            raise ConfigurationError(msg)
        self._fingerprint = fingerprint
        self._on_change = on_change
        self.interval = interval
        self._baseline: Fingerprint | None = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """True while the polling thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self, baseline: Fingerprint | None = None) -> None:
        """Record the baseline fingerprint and start polling.

        Args:
            baseline: Fingerprint of the tree as last loaded; computed now if None

        Raises:
            WatcherError: If already running, or the baseline cannot be taken
                or the polling thread cannot be started
        """
        if self.is_running:
            msg = "Watcher is already running"
            raise WatcherError(msg)
        try:
            self._baseline = baseline if baseline is not None else self._fingerprint()
        except OSError as e:
            msg = f"Cannot fingerprint resource files: {e}"
            raise WatcherError(msg) from e

        self._stop.clear()
        thread = threading.Thread(target=self._run, name="i18nstore-watcher", daemon=True)
        try:
            thread.start()
        except RuntimeError as e:
            msg = f"Cannot start watcher thread: {e}"
            raise WatcherError(msg) from e
        self._thread = thread
        logger.info(
            "Watching %d resource file(s), polling every %ss",
            len(self._baseline),
            self.interval,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Stop polling and wait for the thread to exit.

        Safe to call when not running. Must not be called from on_change.

        Args:
            timeout: Maximum seconds to wait for the thread
        """
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.debug("Watcher stopped")

    def check(self) -> bool:
        """Poll once in the calling thread.

        Returns:
            True if a change was detected and on_change was called
        """
        with self._lock:
            try:
                current = self._fingerprint()
            except OSError as e:
                logger.warning("Resource scan failed, skipping poll: %s", e)
                return False
            if self._baseline is not None and current == self._baseline:
                return False
            changed = self._describe_change(self._baseline or {}, current)
            self._baseline = current

        logger.info("Resource files changed: %s", ", ".join(changed) or "(file set changed)")
        try:
            self._on_change()
        except Exception:
            logger.exception("Reload after resource change failed")
        return True

    @staticmethod
    def _describe_change(before: Fingerprint, after: Fingerprint) -> list[str]:
        return sorted(
            path
            for path in before.keys() | after.keys()
            if before.get(path) != after.get(path)
        )

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.check()

    def __enter__(self) -> ResourceWatcher:
        """Start on enter."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Stop on exit. Does not suppress exceptions."""
        self.stop()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        state = "running" if self.is_running else "stopped"
        return f"ResourceWatcher({state}, interval={self.interval})"
