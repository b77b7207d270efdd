"""One-shot readiness gate for the Translator lifecycle.

The gate starts not-ready. The first successful load calls set(), which
flips it to ready permanently and dispatches every queued listener. After
that, on_ready() dispatches new listeners straight away. Listeners never run
inside the on_ready() or set() call that scheduled them: the dispatcher
hands them to another thread (default) or to an injected scheduler such as
``loop.call_soon_threadsafe``.

A failed first load is recorded with fail() so that wait() can re-raise it,
until begin() announces the next attempt. Once the gate is ready, failures are
ignored and readiness is never revoked.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["Dispatcher", "Listener", "ReadinessGate", "thread_dispatch"]

logger = logging.getLogger(__name__)

type Listener = Callable[[], object]
"""Callback invoked once the gate is ready."""

type Dispatcher = Callable[[Listener], object]
"""Schedules a listener to run later, outside the caller's stack."""


def _run_listener(listener: Listener) -> None:
    try:
        listener()
    except Exception:
        logger.exception("Readiness listener %r failed", listener)


def thread_dispatch(listener: Listener) -> None:
    """Run listener on a new daemon thread.

    Args:
        listener: Callback to run
    """
    thread = threading.Thread(
        target=_run_listener, args=(listener,), name="i18nstore-ready", daemon=True
    )
    thread.start()


class ReadinessGate:
    """Ready-once-then-immediate gate.

    Thread Safety:
        All methods are thread-safe. Listeners are dispatched outside the
        internal lock.

    Example:
        >>> gate = ReadinessGate()
        >>> gate.on_ready(lambda: print("ready"))  # queued
        >>> gate.set()                              # dispatches queued listeners
        >>> gate.is_ready
        True
        >>> gate.on_ready(lambda: print("again"))   # dispatched right away
    """

    __slots__ = ("_condition", "_dispatch", "_error", "_pending", "_ready")

    def __init__(self, dispatch: Dispatcher | None = None) -> None:
        """Initialize a not-ready gate.

        Args:
            dispatch: Scheduler for listeners (default: thread_dispatch)
        """
        self._dispatch: Dispatcher = dispatch if dispatch is not None else thread_dispatch
        self._condition = threading.Condition(threading.Lock())
        self._ready = False
        self._pending: list[Listener] = []
        self._error: BaseException | None = None

    @property
    def is_ready(self) -> bool:
        """True once set() has been called."""
        with self._condition:
            return self._ready

    @property
    def error(self) -> BaseException | None:
        """Error of the last failed attempt before readiness, if any."""
        with self._condition:
            return self._error

    def on_ready(self, listener: Listener) -> None:
        """Register a listener for readiness.

        Queued until set() if not ready yet; dispatched immediately
        (asynchronously) otherwise.

        Args:
            listener: Zero-argument callback
        """
        with self._condition:
            if not self._ready:
                self._pending.append(listener)
                return
        self._dispatch(listener)

    def set(self) -> None:
        """Mark the gate ready and dispatch queued listeners.

        Idempotent: later calls do nothing.
        """
        with self._condition:
            if self._ready:
                return
            self._ready = True
            self._error = None
            pending, self._pending = self._pending, []
            self._condition.notify_all()
        logger.debug("Readiness reached; dispatching %d listener(s)", len(pending))
        for listener in pending:
            self._dispatch(listener)

    def begin(self) -> None:
        """Mark the start of a new attempt.

        Clears a failure recorded by an earlier attempt so that wait() blocks
        for the outcome of this one. Does nothing once the gate is ready.
        """
        with self._condition:
            if not self._ready:
                self._error = None

    def fail(self, error: BaseException) -> None:
        """Record a failed attempt to become ready.

        Ignored once the gate is ready. Wakes waiters so they can re-raise.
        Queued listeners stay queued for a later successful attempt.

        Args:
            error: Exception raised by the failed load
        """
        with self._condition:
            if self._ready:
                return
            self._error = error
            self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until ready or until a failure is recorded.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely

        Returns:
            True if ready, False on timeout

        Raises:
            BaseException: The most recent recorded failure, while not ready
        """
        with self._condition:
            self._condition.wait_for(
                lambda: self._ready or self._error is not None, timeout
            )
            if self._ready:
                return True
            if self._error is not None:
                raise self._error
            return False

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        with self._condition:
            state = "ready" if self._ready else "pending"
            return f"ReadinessGate({state}, listeners={len(self._pending)})"
