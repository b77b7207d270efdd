"""Tests for the polling resource watcher.

Most tests drive check() directly with an in-memory fingerprint so no
timing is involved; one test runs the polling thread against real files.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

import pytest

from i18nstore.errors import ConfigurationError, WatcherError
from i18nstore.runtime.watcher import Fingerprint, ResourceWatcher, fingerprint_files


class _Tree:
    """Mutable fake fingerprint source."""

    def __init__(self) -> None:
        self.state: Fingerprint = {"a.json": (1, 10)}
        self.error: OSError | None = None

    def __call__(self) -> Fingerprint:
        if self.error is not None:
            raise self.error
        return dict(self.state)


class TestFingerprintFiles:
    """Test file fingerprinting."""

    def test_records_mtime_and_size(self, tmp_path: Path) -> None:
        """Existing files map to (mtime_ns, size)."""
        path = tmp_path / "a.json"
        path.write_text("{}", encoding="utf-8")
        stat = os.stat(path)

        assert fingerprint_files([str(path)]) == {str(path): (stat.st_mtime_ns, 2)}

    def test_missing_file_maps_to_none(self, tmp_path: Path) -> None:
        """Vanished files do not raise."""
        missing = str(tmp_path / "gone.json")

        assert fingerprint_files([missing]) == {missing: None}


class TestResourceWatcherCheck:
    """Test single polls."""

    def test_non_positive_interval_rejected(self) -> None:
        """Interval must be positive."""
        with pytest.raises(ConfigurationError, match="positive"):
            ResourceWatcher(dict, lambda: None, interval=0)

    def test_unchanged_tree_does_not_fire(self) -> None:
        """No change, no callback."""
        tree = _Tree()
        calls: list[int] = []
        watcher = ResourceWatcher(tree, lambda: calls.append(1))
        watcher.start()
        watcher.stop()

        assert watcher.check() is False
        assert calls == []

    def test_modified_file_fires_once(self) -> None:
        """A change fires once; the next poll sees the new baseline."""
        tree = _Tree()
        calls: list[int] = []
        watcher = ResourceWatcher(tree, lambda: calls.append(1))
        watcher.start()
        watcher.stop()

        tree.state["a.json"] = (2, 12)

        assert watcher.check() is True
        assert watcher.check() is False
        assert calls == [1]

    def test_added_and_removed_files_fire(self) -> None:
        """New and deleted files count as changes."""
        tree = _Tree()
        calls: list[int] = []
        watcher = ResourceWatcher(tree, lambda: calls.append(1))
        watcher.start()
        watcher.stop()

        tree.state["b.yml"] = (1, 1)
        assert watcher.check() is True

        del tree.state["a.json"]
        assert watcher.check() is True
        assert calls == [1, 1]

    def test_explicit_baseline_used(self) -> None:
        """A baseline passed to start() is compared against the first poll."""
        tree = _Tree()
        calls: list[int] = []
        watcher = ResourceWatcher(tree, lambda: calls.append(1))
        watcher.start(baseline={"a.json": (0, 0)})
        watcher.stop()

        assert watcher.check() is True

    def test_scan_error_skips_poll(self, caplog: pytest.LogCaptureFixture) -> None:
        """Fingerprint errors are logged as warnings and do not fire."""
        tree = _Tree()
        calls: list[int] = []
        watcher = ResourceWatcher(tree, lambda: calls.append(1))
        watcher.start()
        watcher.stop()
        tree.error = PermissionError("denied")

        with caplog.at_level(logging.WARNING, logger="i18nstore.runtime.watcher"):
            assert watcher.check() is False

        assert calls == []
        assert "skipping poll" in caplog.text

    def test_callback_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """on_change exceptions are logged and the change still counts."""
        tree = _Tree()

        def broken() -> None:
            msg = "reload failed"
            raise ValueError(msg)

        watcher = ResourceWatcher(tree, broken)
        watcher.start()
        watcher.stop()
        tree.state["a.json"] = (3, 3)

        with caplog.at_level(logging.ERROR, logger="i18nstore.runtime.watcher"):
            assert watcher.check() is True

        assert "Reload after resource change failed" in caplog.text


class TestResourceWatcherLifecycle:
    """Test thread lifecycle."""

    def test_start_twice_raises(self) -> None:
        """A running watcher cannot be started again."""
        watcher = ResourceWatcher(_Tree(), lambda: None, interval=60)
        watcher.start()
        try:
            with pytest.raises(WatcherError, match="already running"):
                watcher.start()
        finally:
            watcher.stop()

        assert not watcher.is_running

    def test_baseline_error_raises_watcher_error(self) -> None:
        """An unreadable tree at start is reported synchronously."""
        tree = _Tree()
        tree.error = PermissionError("denied")
        watcher = ResourceWatcher(tree, lambda: None)

        with pytest.raises(WatcherError, match="Cannot fingerprint"):
            watcher.start()

    def test_stop_when_not_running(self) -> None:
        """stop() on a stopped watcher is harmless."""
        watcher = ResourceWatcher(_Tree(), lambda: None)

        watcher.stop()

        assert not watcher.is_running

    def test_context_manager(self) -> None:
        """with-block starts and stops polling."""
        watcher = ResourceWatcher(_Tree(), lambda: None, interval=60)

        with watcher:
            assert watcher.is_running
            assert "running" in repr(watcher)

        assert not watcher.is_running

    def test_polling_thread_detects_file_edit(self, tmp_path: Path) -> None:
        """The background thread notices a rewritten file."""
        path = tmp_path / "default.json"
        path.write_text("{}", encoding="utf-8")
        changed = threading.Event()
        watcher = ResourceWatcher(
            lambda: fingerprint_files([str(path)]), changed.set, interval=0.02
        )

        with watcher:
            path.write_text('{"hello": "Hello"}', encoding="utf-8")
            assert changed.wait(timeout=5)
