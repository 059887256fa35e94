# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Section and overall completion figures for an answer map."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, computed_field

from food_audit.data.models import AssessmentSection, ItemAnswer, ItemStatus
from food_audit.scoring.thresholds import round_half_up

if TYPE_CHECKING:
    from food_audit.frameworks.config import FrameworkConfig


class SectionProgress(BaseModel):
    """Completion counts for one checklist section."""

    key: str
    label: str
    total: int = Field(..., ge=0)
    compliant: int = Field(..., ge=0, description="Items answered compliant ('N/M compliant')")
    assessed: int = Field(..., ge=0, description="Items with any answer ('N/M assessed')")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def pct(self) -> float:
        """Assessed share of the section, 0-100."""
        if self.total == 0:
            return 0.0
        return round_half_up(self.assessed / self.total * 1000) / 10


class ProgressTracker:
    """Derives completion figures from an answer map; holds no state."""

    @staticmethod
    def _status(answers: Mapping[str, ItemAnswer], code: str) -> ItemStatus:
        answer = answers.get(code)
        return answer.status if answer is not None else ItemStatus.not_assessed

    def section_progress(
        self, section: AssessmentSection, answers: Mapping[str, ItemAnswer]
    ) -> SectionProgress:
        """Count compliant and assessed items within *section*."""
        statuses = [self._status(answers, item.code) for item in section.items]
        return SectionProgress(
            key=section.key,
            label=section.label,
            total=len(statuses),
            compliant=sum(1 for s in statuses if s is ItemStatus.compliant),
            assessed=sum(1 for s in statuses if s is not ItemStatus.not_assessed),
        )

    def all_sections(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> list[SectionProgress]:
        """Progress for every section of *config*, in display order."""
        return [self.section_progress(s, answers) for s in config.sections]

    def overall_progress(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> float:
        """Assessed items over checklist items, as a fraction in [0, 1]."""
        total = config.total_items
        if total == 0:
            return 0.0
        assessed = sum(
            1 for item in config.all_items()
            if self._status(answers, item.code) is not ItemStatus.not_assessed
        )
        return assessed / total

    def overall_percent(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> float:
        """Overall progress as a 0-100 percentage."""
        return round_half_up(self.overall_progress(config, answers) * 1000) / 10
