# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Inspection-readiness aggregation.

All checks are issued concurrently against the record source and joined
before anything is reported. A check whose query fails is reported as not
ready with a zero count; it never aborts the rest of the scorecard.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional, Sequence

from food_audit.data.models import ReadinessCheck, ReadinessReport, ReadinessStatus
from food_audit.readiness.checks import READINESS_CHECKS, CheckDefinition
from food_audit.readiness.sources import RecordSource
from food_audit.scoring.thresholds import (
    TOTAL_READINESS_CHECKS,
    percentage,
    readiness_band,
)

logger = logging.getLogger(__name__)


def compute_readiness(
    checks: Sequence[ReadinessCheck],
    total_checks: int = TOTAL_READINESS_CHECKS,
) -> ReadinessReport:
    """Reduce evaluated checks to the scorecard summary.

    ``total_checks`` is fixed by the check list, not by how many queries
    succeeded. An empty list yields a 0% "Not Ready" report.
    """
    ready = sum(1 for c in checks if c.status is ReadinessStatus.ready)
    score_pct = percentage(ready, total_checks)
    return ReadinessReport(
        checks=list(checks),
        ready_count=ready,
        total_checks=total_checks,
        score_pct=score_pct,
        band=readiness_band(score_pct),
    )


class ReadinessAggregator:
    """Runs every readiness check for an organization and scores the result."""

    def __init__(
        self,
        source: RecordSource,
        checks: Optional[Sequence[CheckDefinition]] = None,
    ) -> None:
        self.source = source
        self.definitions = list(checks if checks is not None else READINESS_CHECKS)

    @property
    def total_checks(self) -> int:
        return len(self.definitions)

    async def _evaluate(
        self, definition: CheckDefinition, org_id: str, today: date
    ) -> ReadinessCheck:
        query = definition.query_for(org_id, today)
        try:
            raw = await asyncio.to_thread(self.source.count, query)
            count = int(raw)
            if count < 0:
                raise ValueError(f"negative count {count}")
        except Exception as exc:
            logger.warning("Readiness check %s failed: %s", definition.key, exc)
            return definition.evaluate(0, failed=True)
        logger.debug("Readiness check %s: %d record(s)", definition.key, count)
        return definition.evaluate(count)

    async def run(self, org_id: Optional[str], today: Optional[date] = None) -> ReadinessReport:
        """Evaluate all checks concurrently for *org_id*.

        Without an organization no queries are issued and an empty report
        is returned.
        """
        if not org_id:
            return compute_readiness([], self.total_checks)

        today = today or date.today()
        results = await asyncio.gather(
            *(self._evaluate(d, org_id, today) for d in self.definitions)
        )
        return compute_readiness(results, self.total_checks)

    def run_sync(self, org_id: Optional[str], today: Optional[date] = None) -> ReadinessReport:
        """Blocking wrapper around :meth:`run`."""
        return asyncio.run(self.run(org_id, today))
