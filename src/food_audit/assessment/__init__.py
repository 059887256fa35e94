# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Self-assessment answers, persistence and sessions."""

from food_audit.assessment.history import (
    AssessmentSaveError,
    AssessmentStore,
    JsonAssessmentStore,
    compare_records,
)
from food_audit.assessment.progress import ProgressTracker, SectionProgress
from food_audit.assessment.reconcile import (
    AnswerReconciler,
    history_stats,
    reconcile,
    to_record,
    to_responses,
)
from food_audit.assessment.session import AssessmentSession, SaveOutcome

__all__ = [
    "AnswerReconciler",
    "AssessmentSaveError",
    "AssessmentSession",
    "AssessmentStore",
    "JsonAssessmentStore",
    "ProgressTracker",
    "SaveOutcome",
    "SectionProgress",
    "compare_records",
    "history_stats",
    "reconcile",
    "to_record",
    "to_responses",
]
