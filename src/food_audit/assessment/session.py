# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Assessment session: one organization, one framework, one calendar day.

The session owns the current answer map. Each edit replaces the map with
a new one, so a failed save leaves the map exactly as the user left it and
the user can simply retry.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel

from food_audit.assessment.answers import (
    mark_all_compliant,
    set_item_comments,
    set_item_evidence,
    set_item_severity,
    set_item_status,
)
from food_audit.assessment.history import (
    DEFAULT_HISTORY_LIMIT,
    AssessmentSaveError,
    AssessmentStore,
)
from food_audit.assessment.progress import ProgressTracker, SectionProgress
from food_audit.assessment.reconcile import reconcile, to_record
from food_audit.data.models import (
    AnswerMap,
    AssessmentRecord,
    ItemStatus,
    ScoreResult,
    ScoringModel,
    Severity,
)
from food_audit.frameworks.config import FrameworkConfig
from food_audit.scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)


class SaveOutcome(BaseModel):
    """Result of a save attempt, suitable for showing to the user."""

    success: bool
    message: str
    record: Optional[AssessmentRecord] = None


class AssessmentSession:
    """Edits and persists the answer set for one assessment period."""

    def __init__(
        self,
        config: FrameworkConfig,
        store: AssessmentStore,
        org_id: Optional[str],
        assessment_date: Optional[date] = None,
        assessed_by: Optional[str] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.org_id = org_id
        self.assessment_date = assessment_date or date.today()
        self.assessed_by = assessed_by
        self._answers: AnswerMap = {}
        self._engine = ScoringEngine()
        self._progress = ProgressTracker()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def answers(self) -> AnswerMap:
        """A copy of the current answer map."""
        return dict(self._answers)

    @property
    def score(self) -> ScoreResult:
        """Score of the current answers, recomputed on every access."""
        return self._engine.score(self.config, self._answers)

    def section_progress(self) -> list[SectionProgress]:
        return self._progress.all_sections(self.config, self._answers)

    def overall_progress(self) -> float:
        return self._progress.overall_progress(self.config, self._answers)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> AnswerMap:
        """Load today's saved answers, starting empty if there are none."""
        if not self.org_id:
            self._answers = {}
            return self.answers
        try:
            record = self.store.load_assessment_record(
                self.org_id, self.assessment_date, self.config.id
            )
        except Exception as exc:
            logger.warning("Could not load assessment for %s: %s", self.org_id, exc)
            record = None
        self._answers = reconcile(record)
        return self.answers

    def history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AssessmentRecord]:
        """Earlier records for this organization and framework, newest first."""
        if not self.org_id:
            return []
        try:
            return self.store.load_recent_assessment_records(
                self.org_id, self.config.id, limit=limit, exclude_date=self.assessment_date
            )
        except Exception as exc:
            logger.warning("Could not load history for %s: %s", self.org_id, exc)
            return []

    def load_from_history(self, record: AssessmentRecord) -> AnswerMap:
        """Replace the current answers wholesale with those of *record*."""
        self._answers = reconcile(record)
        return self.answers

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_status(self, code: str, status: ItemStatus) -> ScoreResult:
        item = self.config.get_item(code)
        self._answers = set_item_status(self._answers, item, status)
        return self.score

    def set_severity(self, code: str, severity: Severity) -> ScoreResult:
        item = self.config.get_item(code)
        self._answers = set_item_severity(self._answers, item, severity)
        return self.score

    def set_comments(self, code: str, comments: str) -> None:
        item = self.config.get_item(code)
        self._answers = set_item_comments(self._answers, item, comments)

    def set_evidence(self, code: str, evidence: bool) -> None:
        item = self.config.get_item(code)
        self._answers = set_item_evidence(self._answers, item, evidence)

    def mark_all_compliant(self) -> ScoreResult:
        self._answers = mark_all_compliant(self.config, self._answers)
        return self.score

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self) -> SaveOutcome:
        """Persist the current answers in the framework's record shape.

        Never raises for storage failures; the outcome carries the error
        message instead and the in-memory answers are left unchanged.
        """
        if not self.org_id:
            return SaveOutcome(success=False, message="No organization selected")

        record = to_record(
            self.config,
            self._answers,
            org_id=self.org_id,
            assessment_date=self.assessment_date,
            assessed_by=self.assessed_by,
        )
        try:
            self.store.save_assessment_record(record)
        except AssessmentSaveError as exc:
            logger.warning("Save failed for %s: %s", self.org_id, exc)
            return SaveOutcome(success=False, message=str(exc))
        except Exception as exc:
            logger.warning("Save failed for %s: %s", self.org_id, exc)
            return SaveOutcome(success=False, message=f"Could not save assessment: {exc}")

        result = self.score
        if self.config.model is ScoringModel.tiered:
            message = f"Assessment saved. Predicted rating: {result.predicted_value} stars."
        else:
            message = f"Assessment submitted. Score: {result.predicted_value}%"
        return SaveOutcome(success=True, message=message, record=record)
