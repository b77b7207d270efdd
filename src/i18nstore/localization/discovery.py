"""Base directory discovery for the filesystem backend.

When no base directory is configured, resources are searched relative to the
root of the project that uses i18nstore: the nearest ancestor of the calling
source file that holds a project manifest (pyproject.toml, setup.cfg or
setup.py). Without a usable call site or manifest, the current working
directory is used.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from i18nstore.constants import PROJECT_MANIFESTS

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import FrameType

__all__ = [
    "PACKAGE_ROOT",
    "find_caller_file",
    "find_manifest_dir",
    "find_project_root",
    "resolve_base_dirs",
]

logger = logging.getLogger(__name__)

PACKAGE_ROOT: Path = Path(__file__).resolve().parent.parent


def _is_internal(filename: str, package_root: Path) -> bool:
    # <frozen ...>, <string>, <stdin> and friends have no file on disk
    if filename.startswith("<"):
        return True
    path = Path(filename).resolve()
    return path == package_root or package_root in path.parents


def find_caller_file(
    frame: FrameType | None = None, package_root: Path = PACKAGE_ROOT
) -> Path | None:
    """Return the source file of the innermost caller outside package_root.

    Args:
        frame: Frame to start walking from (default: the caller's frame)
        package_root: Directory whose frames are skipped

    Returns:
        Path of the first external source file, or None
    """
    current = frame if frame is not None else sys._getframe(1)
    while current is not None:
        filename = current.f_code.co_filename
        if not _is_internal(filename, package_root):
            return Path(filename).resolve()
        current = current.f_back
    return None


def find_manifest_dir(start: Path, manifests: Iterable[str] = PROJECT_MANIFESTS) -> Path | None:
    """Find the nearest directory at or above start holding a manifest file.

    Args:
        start: File or directory to search upward from
        manifests: Manifest file names to look for

    Returns:
        Directory containing a manifest, or None
    """
    names = tuple(manifests)
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        if any((candidate / name).is_file() for name in names):
            return candidate
    return None


def find_project_root(frame: FrameType | None = None) -> Path:
    """Locate the root directory of the project calling into i18nstore.

    Args:
        frame: Frame to start walking from (default: the caller's frame)

    Returns:
        Manifest directory above the external call site, or Path.cwd()
    """
    caller = find_caller_file(frame if frame is not None else sys._getframe(1))
    if caller is not None:
        try:
            root = find_manifest_dir(caller)
        except OSError as e:
            logger.debug("Project root lookup from %s failed: %s", caller, e)
            root = None
        if root is not None:
            logger.debug("Project root for %s: %s", caller, root)
            return root
    return Path.cwd()


def resolve_base_dirs(
    base_dir: str | os.PathLike[str] | Iterable[str | os.PathLike[str]] | None,
    frame: FrameType | None = None,
) -> tuple[str, ...]:
    """Normalize a configured base directory setting to absolute paths.

    Args:
        base_dir: One directory, several directories, or None for discovery
        frame: Frame used for discovery when base_dir is None

    Returns:
        Tuple of absolute directory paths in configured order
    """
    if base_dir is None:
        root = find_project_root(frame if frame is not None else sys._getframe(1))
        return (str(root),)
    if isinstance(base_dir, (str, os.PathLike)):
        return (os.path.abspath(base_dir),)
    return tuple(os.path.abspath(directory) for directory in base_dir)
