# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Food Audit - Food Safety Self-Assessment and Inspection Readiness Tool."""

__version__ = "0.1.0"

from food_audit.data.models import (
    AssessmentItem,
    AssessmentRecord,
    AssessmentSection,
    ItemAnswer,
    ItemStatus,
    ReadinessCheck,
    ReadinessReport,
    ReadinessStatus,
    ScoreResult,
    ScoringModel,
    Severity,
)
from food_audit.frameworks import FRAMEWORKS, FrameworkConfig, get_framework
from food_audit.scoring.engine import ScoringEngine, compute_score
from food_audit.assessment.reconcile import reconcile
from food_audit.assessment.session import AssessmentSession
from food_audit.readiness.aggregator import ReadinessAggregator, compute_readiness

__all__ = [
    "AssessmentItem",
    "AssessmentRecord",
    "AssessmentSection",
    "AssessmentSession",
    "FRAMEWORKS",
    "FrameworkConfig",
    "ItemAnswer",
    "ItemStatus",
    "ReadinessAggregator",
    "ReadinessCheck",
    "ReadinessReport",
    "ReadinessStatus",
    "ScoreResult",
    "ScoringEngine",
    "ScoringModel",
    "Severity",
    "compute_readiness",
    "compute_score",
    "get_framework",
    "reconcile",
]
