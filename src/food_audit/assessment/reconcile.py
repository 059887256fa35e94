# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Conversion between persisted assessment records and canonical answers.

Records have been written in two shapes over time:

* ``answers`` -- full per-item answers with severity, comments and
  evidence (tiered frameworks);
* ``responses`` -- a reduced ``code -> passed`` map (percentage
  frameworks).

:func:`reconcile` resolves either shape into the canonical answer map once,
at the storage boundary. :func:`to_record` goes the other way on save.
Malformed data never raises here; it degrades to fewer (or no) answers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import ValidationError

from food_audit.data.models import (
    AnswerMap,
    AssessmentRecord,
    HistoryStats,
    ItemAnswer,
    ItemStatus,
    ScoringModel,
)
from food_audit.scoring.engine import compute_score
from food_audit.scoring.thresholds import percentage

if TYPE_CHECKING:
    from food_audit.frameworks.config import FrameworkConfig

logger = logging.getLogger(__name__)

RecordLike = Union[AssessmentRecord, Mapping[str, Any], None]


class AnswerReconciler:
    """Adapter from any persisted record shape to the canonical answer map."""

    def reconcile(self, record: RecordLike) -> AnswerMap:
        """Return the canonical answer map for *record*.

        ``answers`` wins when present and is returned as-is; otherwise
        ``responses`` are expanded (``True`` -> compliant, ``False`` ->
        non-compliant, no severity). Anything else yields an empty map.
        """
        if record is None:
            return {}

        if isinstance(record, AssessmentRecord):
            if record.answers is not None:
                return dict(record.answers)
            if record.responses is not None:
                return self._from_responses(record.responses)
            return {}

        if not isinstance(record, Mapping):
            logger.warning("Ignoring assessment record of type %s", type(record).__name__)
            return {}

        raw_answers = record.get("answers")
        if raw_answers is not None:
            return self._parse_answers(raw_answers)

        raw_responses = record.get("responses")
        if raw_responses is not None:
            return self._from_responses(raw_responses)

        return {}

    # ------------------------------------------------------------------
    # Shape handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_answers(raw: Any) -> AnswerMap:
        if not isinstance(raw, Mapping):
            logger.warning("Malformed 'answers' payload (%s); starting empty", type(raw).__name__)
            return {}

        answers: AnswerMap = {}
        for code, entry in raw.items():
            if isinstance(entry, ItemAnswer):
                answers[str(code)] = entry
                continue
            try:
                answers[str(code)] = ItemAnswer.model_validate(entry)
            except ValidationError:
                logger.debug("Skipping malformed answer for %s: %r", code, entry)
        return answers

    @staticmethod
    def _from_responses(raw: Any) -> AnswerMap:
        if not isinstance(raw, Mapping):
            logger.warning("Malformed 'responses' payload (%s); starting empty", type(raw).__name__)
            return {}

        answers: AnswerMap = {}
        for code, passed in raw.items():
            if not isinstance(passed, bool):
                logger.debug("Skipping non-boolean response for %s: %r", code, passed)
                continue
            status = ItemStatus.compliant if passed else ItemStatus.non_compliant
            answers[str(code)] = ItemAnswer(status=status)
        return answers


_DEFAULT_RECONCILER = AnswerReconciler()


def reconcile(record: RecordLike) -> AnswerMap:
    """Resolve a persisted record of either shape into canonical answers."""
    return _DEFAULT_RECONCILER.reconcile(record)


# ---------------------------------------------------------------------------
# Canonical -> persisted
# ---------------------------------------------------------------------------

def to_responses(answers: Mapping[str, ItemAnswer]) -> dict[str, bool]:
    """Reduce canonical answers to the ``code -> passed`` shape.

    Unassessed items are omitted so they stay unassessed when reconciled.
    Severity, comments and evidence are dropped.
    """
    return {
        code: answer.status is ItemStatus.compliant
        for code, answer in answers.items()
        if answer.status is not ItemStatus.not_assessed
    }


def to_record(
    config: FrameworkConfig,
    answers: Mapping[str, ItemAnswer],
    org_id: str,
    assessment_date: date,
    assessed_by: Optional[str] = None,
) -> AssessmentRecord:
    """Serialize *answers* into the record shape *config* persists.

    Tiered frameworks keep the full answers plus the predicted tier.
    Percentage frameworks keep ``responses`` and a stored score of
    compliant items over *all* checklist items, alongside the item totals.
    """
    result = compute_score(config, answers)

    if config.model is ScoringModel.tiered:
        return AssessmentRecord(
            org_id=org_id,
            assessment_date=assessment_date,
            framework=config.id,
            answers=dict(answers),
            predicted_star_rating=result.predicted_value,
            assessed_by=assessed_by,
        )

    stored_score = (
        percentage(result.compliant_count, config.total_items)
        if result.assessed_count > 0 else 0
    )
    return AssessmentRecord(
        org_id=org_id,
        assessment_date=assessment_date,
        framework=config.id,
        responses=to_responses(answers),
        score=stored_score,
        total_items=config.total_items,
        passed_items=result.compliant_count,
        assessed_by=assessed_by,
    )


def history_stats(answers: Mapping[str, ItemAnswer]) -> HistoryStats:
    """Summary counts for a (historical) answer map."""
    values = list(answers.values())
    return HistoryStats(
        assessed=sum(1 for a in values if a.status is not ItemStatus.not_assessed),
        compliant=sum(1 for a in values if a.status is ItemStatus.compliant),
        non_compliant=sum(1 for a in values if a.status is ItemStatus.non_compliant),
    )
