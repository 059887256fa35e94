# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Band thresholds, readiness constants, and color mappings.

Framework-specific ladders live on the framework configs; the values here
are the defaults used when a framework does not supply its own, plus the
fixed constants of the readiness scorecard.
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Percentage-model default bands (score -> label)
# ---------------------------------------------------------------------------
PCT_COMPLIANT_MIN = 80
PCT_NEEDS_IMPROVEMENT_MIN = 50
# Below 50 = Non-Compliant

PCT_COMPLIANT_LABEL = "Compliant"
PCT_NEEDS_IMPROVEMENT_LABEL = "Needs Improvement"
PCT_NON_COMPLIANT_LABEL = "Non-Compliant"

# ---------------------------------------------------------------------------
# Readiness scorecard
# ---------------------------------------------------------------------------
TOTAL_READINESS_CHECKS = 10
DAILY_LOG_TARGET = 5
RECENCY_WINDOW_DAYS = 30

READY_MIN = 80
NEEDS_ATTENTION_MIN = 50
# Below 50 = Not Ready

READY_BAND = "Ready for Inspection"
NEEDS_ATTENTION_BAND = "Needs Attention"
NOT_READY_BAND = "Not Ready"

# ---------------------------------------------------------------------------
# Color thresholds
# ---------------------------------------------------------------------------
GREEN_MIN = 80
YELLOW_MIN = 50
# Below 50 = Red


# ---------------------------------------------------------------------------
# Utility functions
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positive values.

    Python's ``round`` uses banker's rounding (``round(12.5) == 12``);
    inspection percentages round 12.5 up to 13.
    """
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Return ``part / whole`` as a rounded 0-100 integer, 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def readiness_band(score_pct: float) -> str:
    """Convert a 0-100 readiness percentage to its band label."""
    if score_pct >= READY_MIN:
        return READY_BAND
    if score_pct >= NEEDS_ATTENTION_MIN:
        return NEEDS_ATTENTION_BAND
    return NOT_READY_BAND


def score_to_color(score: float) -> str:
    """Convert a 0-100 numeric score to a color string.

    Returns 'green', 'yellow', or 'red'.
    """
    if score >= GREEN_MIN:
        return "green"
    if score >= YELLOW_MIN:
        return "yellow"
    return "red"
