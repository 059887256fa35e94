# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Regulatory framework descriptors and the built-in framework registry."""

from __future__ import annotations

from food_audit.frameworks.bcc import BCC_FRAMEWORK
from food_audit.frameworks.config import (
    DEFAULT_PERCENTAGE_BANDS,
    FrameworkConfig,
    ScoreBand,
    TierRule,
    load_framework,
)
from food_audit.frameworks.fda import FDA_FRAMEWORK

FRAMEWORKS: dict[str, FrameworkConfig] = {
    "bcc": BCC_FRAMEWORK,
    "fda": FDA_FRAMEWORK,
}


def get_framework(name: str) -> FrameworkConfig:
    """Return the built-in framework registered as *name*.

    Raises
    ------
    KeyError
        If *name* does not match any registered framework.
    """
    try:
        return FRAMEWORKS[name]
    except KeyError:
        available = ", ".join(sorted(FRAMEWORKS.keys()))
        raise KeyError(
            f"Unknown framework '{name}'. Available frameworks: {available}"
        ) from None


__all__ = [
    "BCC_FRAMEWORK",
    "DEFAULT_PERCENTAGE_BANDS",
    "FDA_FRAMEWORK",
    "FRAMEWORKS",
    "FrameworkConfig",
    "ScoreBand",
    "TierRule",
    "get_framework",
    "load_framework",
]
