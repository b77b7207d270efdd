"""Shared fixtures and Hypothesis settings for the i18nstore tests.

Two Hypothesis profiles: "dev" (500 examples) locally and "ci" (50
examples, derandomized) when CI=true. HYPOTHESIS_PROFILE picks one
explicitly.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
import yaml
from hypothesis import Phase, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# RESOURCE TREE FIXTURE
# =============================================================================

type ResourceWriter = Callable[..., Path]


def _serialize(path: Path, content: Any) -> str:
    if isinstance(content, str):
        return content
    if path.suffix in (".yaml", ".yml"):
        return yaml.safe_dump(content, allow_unicode=True)
    return json.dumps(content, ensure_ascii=False)


@pytest.fixture
def resource_tree(tmp_path: Path) -> ResourceWriter:
    """Factory writing resource files under a temporary base directory.

    Values that are not strings are serialized by extension (JSON or YAML);
    strings are written verbatim, so malformed content can be tested.

    Example:
        >>> base = resource_tree({"locales/en/default.json": {"hello": "Hello"}})
    """

    def write(files: Mapping[str, Any], base: str | None = None) -> Path:
        root = tmp_path / base if base else tmp_path
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_serialize(path, content), encoding="utf-8")
        return root

    return write
