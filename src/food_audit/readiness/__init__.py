# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Pre-inspection readiness scorecard."""

from food_audit.readiness.aggregator import ReadinessAggregator, compute_readiness
from food_audit.readiness.checks import (
    READINESS_CHECKS,
    CheckDefinition,
    CheckKind,
    DateFilter,
    classify,
)
from food_audit.readiness.sources import InMemoryRecordSource, RecordQuery, RecordSource

__all__ = [
    "READINESS_CHECKS",
    "CheckDefinition",
    "CheckKind",
    "DateFilter",
    "InMemoryRecordSource",
    "ReadinessAggregator",
    "RecordQuery",
    "RecordSource",
    "classify",
    "compute_readiness",
]
