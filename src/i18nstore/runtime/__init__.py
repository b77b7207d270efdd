"""Runtime package.

Provides fallback-chain resolution over dictionary snapshots, the readiness
gate and the polling resource watcher. Depends only on constants, errors and
locale utilities, so it can be imported without the loading stack.

Python 3.13+.
"""

from .readiness import ReadinessGate, thread_dispatch
from .resolution import language_candidates, lookup, namespace_candidates, resolve
from .watcher import ResourceWatcher, fingerprint_files

__all__ = [
    "ReadinessGate",
    "ResourceWatcher",
    "fingerprint_files",
    "language_candidates",
    "lookup",
    "namespace_candidates",
    "resolve",
    "thread_dispatch",
]
