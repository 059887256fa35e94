# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Persistence and history for self-assessment records.

The engine only depends on the :class:`AssessmentStore` protocol. A
JSON-file implementation is provided for the CLI; records are saved to
``~/.food-audit/assessments/<org>/<framework>/<YYYY-MM-DD>.json``, one file
per organization, framework and calendar day.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable
from urllib.parse import quote

from pydantic import ValidationError

from food_audit.assessment.reconcile import history_stats, reconcile
from food_audit.data.models import AssessmentRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_DIR = Path.home() / ".food-audit"
ASSESSMENTS_DIR_NAME = "assessments"
DEFAULT_HISTORY_LIMIT = 10


class AssessmentSaveError(Exception):
    """Raised by a store when a record could not be persisted."""


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class AssessmentStore(Protocol):
    """Storage collaborator for assessment records."""

    def load_assessment_record(
        self, org_id: str, assessment_date: date, framework: str
    ) -> Optional[AssessmentRecord]:
        """Return the record for one assessment period, or None."""
        ...

    def save_assessment_record(self, record: AssessmentRecord) -> None:
        """Persist *record*, replacing any record for the same period.

        Raises ``AssessmentSaveError`` on failure.
        """
        ...

    def load_recent_assessment_records(
        self,
        org_id: str,
        framework: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
        exclude_date: Optional[date] = None,
    ) -> list[AssessmentRecord]:
        """Return up to *limit* records, most recent first."""
        ...


# ---------------------------------------------------------------------------
# JSON file store
# ---------------------------------------------------------------------------

def _safe_segment(value: str) -> str:
    """Percent-encode *value* into a single directory name.

    Distinct ids map to distinct names, and no id can climb out of the
    store directory.
    """
    if not value:
        raise ValueError("Path segment must not be empty")
    encoded = quote(value, safe="")
    if encoded in (".", ".."):
        encoded = encoded.replace(".", "%2E")
    return encoded


class JsonAssessmentStore:
    """Stores one JSON file per (org, framework, date)."""

    def __init__(self, base_dir: Path = DEFAULT_BASE_DIR) -> None:
        self.base_dir = Path(base_dir)

    def _dir(self, org_id: str, framework: str) -> Path:
        return (
            self.base_dir / ASSESSMENTS_DIR_NAME
            / _safe_segment(org_id) / _safe_segment(framework)
        )

    def _path(self, org_id: str, assessment_date: date, framework: str) -> Path:
        return self._dir(org_id, framework) / f"{assessment_date.isoformat()}.json"

    @staticmethod
    def _read(path: Path) -> Optional[AssessmentRecord]:
        try:
            data = json.loads(path.read_text())
            return AssessmentRecord.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Could not read assessment record %s: %s", path, exc)
            return None

    def load_assessment_record(
        self, org_id: str, assessment_date: date, framework: str
    ) -> Optional[AssessmentRecord]:
        path = self._path(org_id, assessment_date, framework)
        if not path.exists():
            return None
        return self._read(path)

    def save_assessment_record(self, record: AssessmentRecord) -> None:
        path = self._path(record.org_id, record.assessment_date, record.framework)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(record.model_dump_json(indent=2, exclude_none=True))
        except OSError as exc:
            raise AssessmentSaveError(f"Could not save assessment to {path}: {exc}") from exc
        logger.debug("Saved assessment record %s", path)

    def load_recent_assessment_records(
        self,
        org_id: str,
        framework: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
        exclude_date: Optional[date] = None,
    ) -> list[AssessmentRecord]:
        directory = self._dir(org_id, framework)
        if not directory.exists():
            return []

        records = []
        for path in directory.glob("*.json"):
            record = self._read(path)
            if record is None or record.assessment_date == exclude_date:
                continue
            records.append(record)

        records.sort(key=lambda r: r.assessment_date, reverse=True)
        return records[:limit]


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_records(
    record_a: AssessmentRecord,
    record_b: AssessmentRecord,
) -> dict[str, dict]:
    """Compare two records of the same framework, returning per-count deltas.

    Returns a dict keyed by ``assessed``, ``compliant``, ``non_compliant``
    and ``predicted`` with ``a``, ``b``, ``delta`` and ``improved``.
    Fewer non-compliances count as an improvement.
    """
    stats_a = history_stats(reconcile(record_a))
    stats_b = history_stats(reconcile(record_b))

    comparison: dict[str, dict] = {}
    for name in ("assessed", "compliant", "non_compliant"):
        a = getattr(stats_a, name)
        b = getattr(stats_b, name)
        delta = b - a
        comparison[name] = {
            "a": a,
            "b": b,
            "delta": delta,
            "improved": delta < 0 if name == "non_compliant" else delta > 0,
        }

    predicted_a = _predicted(record_a)
    predicted_b = _predicted(record_b)
    if predicted_a is not None and predicted_b is not None:
        comparison["predicted"] = {
            "a": predicted_a,
            "b": predicted_b,
            "delta": predicted_b - predicted_a,
            "improved": predicted_b > predicted_a,
        }

    return comparison


def _predicted(record: AssessmentRecord) -> Optional[int]:
    if record.predicted_star_rating is not None:
        return record.predicted_star_rating
    return record.score
