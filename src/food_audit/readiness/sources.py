# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Record-source protocol and query model for readiness checks.

Every readiness check is a count query against an external record
collaborator. The aggregator only needs :class:`RecordSource`; an
in-memory implementation (optionally loaded from JSON) backs the CLI and
tests.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Table names
# ---------------------------------------------------------------------------
COMPLIANCE_PROFILES = "compliance_profiles"
FOOD_SAFETY_SUPERVISORS = "food_safety_supervisors"
FOOD_HANDLER_TRAINING = "food_handler_training"
DAILY_COMPLIANCE_LOGS = "daily_compliance_logs"
CORRECTIVE_ACTIONS = "corrective_actions"
CLEANING_SCHEDULES = "cleaning_schedules"
PEST_CONTROL_LOGS = "pest_control_logs"
EQUIPMENT_CALIBRATION_LOGS = "equipment_calibration_logs"
SUPPLIER_REGISTER = "supplier_register"
AUDIT_SELF_ASSESSMENTS = "audit_self_assessments"


class RecordQuery(BaseModel):
    """A count query scoped to one organization."""

    table: str
    org_id: str
    equals: dict[str, Any] = Field(default_factory=dict)
    greater_than: dict[str, Any] = Field(
        default_factory=dict,
        description="Field -> exclusive lower bound (dates compare as ISO strings)",
    )


@runtime_checkable
class RecordSource(Protocol):
    """Protocol every readiness record source must satisfy."""

    def count(self, query: RecordQuery) -> int:
        """Return the number of records matching *query*."""
        ...


def _comparable(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class InMemoryRecordSource:
    """Counts rows held in memory as ``{table: [row, ...]}``."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.tables = tables or {}

    @classmethod
    def from_json(cls, path: str | Path) -> InMemoryRecordSource:
        """Load tables from a JSON file shaped ``{table: [row, ...]}``."""
        source_path = Path(path)
        if not source_path.exists():
            raise FileNotFoundError(f"Records file not found: {source_path}")
        data = json.loads(source_path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Records file must hold an object of tables: {source_path}")
        return cls(data)

    def count(self, query: RecordQuery) -> int:
        rows = self.tables.get(query.table, [])
        return sum(1 for row in rows if self._matches(row, query))

    @staticmethod
    def _matches(row: dict[str, Any], query: RecordQuery) -> bool:
        if row.get("org_id") != query.org_id:
            return False
        for field, expected in query.equals.items():
            if _comparable(row.get(field)) != _comparable(expected):
                return False
        for field, bound in query.greater_than.items():
            value = row.get(field)
            if value is None or not _comparable(value) > _comparable(bound):
                return False
        return True
