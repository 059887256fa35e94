# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models shared across the audit engine."""

from food_audit.data.models import (
    AnswerMap,
    AssessmentItem,
    AssessmentRecord,
    AssessmentSection,
    HistoryStats,
    ItemAnswer,
    ItemStatus,
    ReadinessCheck,
    ReadinessReport,
    ReadinessStatus,
    ScoreResult,
    ScoringModel,
    Severity,
    SeverityBreakdown,
)

__all__ = [
    "AnswerMap",
    "AssessmentItem",
    "AssessmentRecord",
    "AssessmentSection",
    "HistoryStats",
    "ItemAnswer",
    "ItemStatus",
    "ReadinessCheck",
    "ReadinessReport",
    "ReadinessStatus",
    "ScoreResult",
    "ScoringModel",
    "Severity",
    "SeverityBreakdown",
]
