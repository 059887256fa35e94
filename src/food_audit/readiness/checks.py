# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""The ten pre-inspection readiness checks.

Each check is declared as data: the table it counts, the filters that
scope the count, how the count is classified, and which workflow fixes a
gap. ``READINESS_CHECKS`` is ordered as shown on the scorecard.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from food_audit.data.models import ReadinessCheck, ReadinessStatus
from food_audit.readiness import sources
from food_audit.readiness.sources import RecordQuery
from food_audit.scoring.thresholds import DAILY_LOG_TARGET, RECENCY_WINDOW_DAYS


class CheckKind(str, Enum):
    """How a record count maps onto a readiness status."""

    exists = "exists"          # count > 0 -> ready
    threshold = "threshold"    # count >= target -> ready, 0 < count -> warning
    inverse = "inverse"        # count == 0 -> ready


class DateFilter(str, Enum):
    """Date scoping applied to ``date_field``."""

    today = "today"            # field == today
    after_today = "after_today"  # field > today (e.g. certificate expiry)
    recent = "recent"          # field > today - window


def classify(kind: CheckKind, count: int, target: int = 1) -> ReadinessStatus:
    """Classify *count* for a check of *kind*."""
    if kind is CheckKind.inverse:
        return ReadinessStatus.ready if count == 0 else ReadinessStatus.not_ready
    if kind is CheckKind.threshold:
        if count >= target:
            return ReadinessStatus.ready
        if count > 0:
            return ReadinessStatus.warning
        return ReadinessStatus.not_ready
    return ReadinessStatus.ready if count > 0 else ReadinessStatus.not_ready


class CheckDefinition(BaseModel):
    """Declarative description of one readiness check."""

    model_config = {"frozen": True}

    key: str
    label: str
    fix_route: str
    table: str
    kind: CheckKind = CheckKind.exists
    target: int = Field(default=1, ge=1)
    equals: dict[str, str] = Field(default_factory=dict)
    date_field: Optional[str] = None
    date_filter: Optional[DateFilter] = None
    window_days: int = Field(default=RECENCY_WINDOW_DAYS, ge=1)

    # Detail text. ``{count}``, ``{target}`` and ``{noun}`` are substituted.
    ready_detail: str
    missing_detail: str
    partial_detail: Optional[str] = None
    noun: tuple[str, str] = ("record", "records")

    def query_for(self, org_id: str, today: date) -> RecordQuery:
        """Build the count query for *org_id* as of *today*."""
        equals: dict = dict(self.equals)
        greater_than: dict = {}
        if self.date_field and self.date_filter is DateFilter.today:
            equals[self.date_field] = today
        elif self.date_field and self.date_filter is DateFilter.after_today:
            greater_than[self.date_field] = today
        elif self.date_field and self.date_filter is DateFilter.recent:
            greater_than[self.date_field] = today - timedelta(days=self.window_days)
        return RecordQuery(
            table=self.table, org_id=org_id, equals=equals, greater_than=greater_than
        )

    def evaluate(self, count: int, failed: bool = False) -> ReadinessCheck:
        """Classify *count* and render the detail text.

        A failed query is reported as not ready regardless of kind.
        """
        status = classify(self.kind, count, self.target)
        if failed:
            status = ReadinessStatus.not_ready

        if failed:
            detail = "Could not be checked - tap to retry"
        elif status is ReadinessStatus.ready:
            detail = self.ready_detail
        elif status is ReadinessStatus.warning and self.partial_detail:
            detail = self.partial_detail
        else:
            detail = self.missing_detail

        noun = self.noun[0] if count == 1 else self.noun[1]
        return ReadinessCheck(
            key=self.key,
            label=self.label,
            detail=detail.format(count=count, target=self.target, noun=noun),
            status=status,
            fix_route=self.fix_route,
            count=count,
            failed=failed,
        )


READINESS_CHECKS: list[CheckDefinition] = [
    CheckDefinition(
        key="compliance_profile",
        label="Compliance Profile",
        fix_route="overview",
        table=sources.COMPLIANCE_PROFILES,
        ready_detail="Profile configured",
        missing_detail="No profile found - tap to set up",
    ),
    CheckDefinition(
        key="fss_cert",
        label="FSS Certificate Current",
        fix_route="training",
        table=sources.FOOD_SAFETY_SUPERVISORS,
        date_field="certificate_expiry",
        date_filter=DateFilter.after_today,
        ready_detail="{count} current {noun}",
        missing_detail="No current certificates - tap to add",
        noun=("certificate", "certificates"),
    ),
    CheckDefinition(
        key="food_handler_training",
        label="Food Handler Training",
        fix_route="training",
        table=sources.FOOD_HANDLER_TRAINING,
        ready_detail="{count} {noun} found",
        missing_detail="No training records - tap to add",
    ),
    CheckDefinition(
        key="daily_logs",
        label="Daily Compliance Logs",
        fix_route="burst",
        table=sources.DAILY_COMPLIANCE_LOGS,
        kind=CheckKind.threshold,
        target=DAILY_LOG_TARGET,
        date_field="log_date",
        date_filter=DateFilter.today,
        ready_detail="{count} logs today",
        partial_detail="{count}/{target} logs today - tap to log",
        missing_detail="{count}/{target} logs today - tap to log",
        noun=("log", "logs"),
    ),
    CheckDefinition(
        key="critical_actions",
        label="No Open Critical Actions",
        fix_route="actions",
        table=sources.CORRECTIVE_ACTIONS,
        kind=CheckKind.inverse,
        equals={"status": "open", "severity": "critical"},
        ready_detail="No open critical actions",
        missing_detail="{count} open - tap to resolve",
    ),
    CheckDefinition(
        key="cleaning_schedules",
        label="Cleaning Schedules",
        fix_route="cleaning",
        table=sources.CLEANING_SCHEDULES,
        ready_detail="{count} {noun} configured",
        missing_detail="No cleaning schedules - tap to set up",
        noun=("schedule", "schedules"),
    ),
    CheckDefinition(
        key="pest_control",
        label=f"Pest Control ({RECENCY_WINDOW_DAYS} days)",
        fix_route="pest",
        table=sources.PEST_CONTROL_LOGS,
        date_field="log_date",
        date_filter=DateFilter.recent,
        ready_detail=f"{{count}} {{noun}} in last {RECENCY_WINDOW_DAYS} days",
        missing_detail="No recent logs - tap to add",
        noun=("log", "logs"),
    ),
    CheckDefinition(
        key="equipment_calibration",
        label=f"Equipment Calibration ({RECENCY_WINDOW_DAYS} days)",
        fix_route="equipment",
        table=sources.EQUIPMENT_CALIBRATION_LOGS,
        date_field="calibration_date",
        date_filter=DateFilter.recent,
        ready_detail=f"{{count}} {{noun}} in last {RECENCY_WINDOW_DAYS} days",
        missing_detail="No recent calibrations - tap to log",
        noun=("calibration", "calibrations"),
    ),
    CheckDefinition(
        key="supplier_register",
        label="Supplier Register",
        fix_route="suppliers",
        table=sources.SUPPLIER_REGISTER,
        ready_detail="{count} {noun} registered",
        missing_detail="No suppliers - tap to add",
        noun=("supplier", "suppliers"),
    ),
    CheckDefinition(
        key="self_assessment",
        label="Self-Assessment Completed",
        fix_route="self_assessment",
        table=sources.AUDIT_SELF_ASSESSMENTS,
        ready_detail="Self-assessment on file",
        missing_detail="Not completed - tap to start",
    ),
]
