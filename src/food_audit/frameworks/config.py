# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Framework configuration model and YAML loader.

A :class:`FrameworkConfig` is the static descriptor of one regulatory
self-assessment scheme: its ordered checklist, which scoring model applies,
and the tier ladder or percentage bands used to label the prediction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from food_audit.data.models import (
    AssessmentItem,
    AssessmentSection,
    ScoringModel,
    SeverityBreakdown,
)
from food_audit.scoring.thresholds import (
    PCT_COMPLIANT_LABEL,
    PCT_COMPLIANT_MIN,
    PCT_NEEDS_IMPROVEMENT_LABEL,
    PCT_NEEDS_IMPROVEMENT_MIN,
    PCT_NON_COMPLIANT_LABEL,
)


# ---------------------------------------------------------------------------
# Ladder rows
# ---------------------------------------------------------------------------

class TierRule(BaseModel):
    """One row of a severity tier ladder.

    A row is satisfied when every severity count is at or below its maximum.
    ``None`` means the severity is unbounded for this row.
    """

    model_config = {"frozen": True}

    minor_max: Optional[int] = Field(default=None, ge=0)
    major_max: Optional[int] = Field(default=None, ge=0)
    critical_max: Optional[int] = Field(default=None, ge=0)
    tier_value: int = Field(..., ge=0, description="Predicted tier, e.g. star count")
    tier_label: str
    color: str = Field(default="white")

    def matches(self, breakdown: SeverityBreakdown) -> bool:
        """Return True if *breakdown* satisfies every threshold of this row."""
        limits = (
            (self.minor_max, breakdown.minor),
            (self.major_max, breakdown.major),
            (self.critical_max, breakdown.critical),
        )
        return all(limit is None or count <= limit for limit, count in limits)


class ScoreBand(BaseModel):
    """Percentage band: scores at or above ``min`` get ``label``."""

    model_config = {"frozen": True}

    min: int = Field(..., ge=0, le=100)
    label: str
    color: str = Field(default="white")


DEFAULT_PERCENTAGE_BANDS: list[ScoreBand] = [
    ScoreBand(min=PCT_COMPLIANT_MIN, label=PCT_COMPLIANT_LABEL, color="green"),
    ScoreBand(min=PCT_NEEDS_IMPROVEMENT_MIN, label=PCT_NEEDS_IMPROVEMENT_LABEL, color="yellow"),
    ScoreBand(min=0, label=PCT_NON_COMPLIANT_LABEL, color="red"),
]


# ---------------------------------------------------------------------------
# Framework descriptor
# ---------------------------------------------------------------------------

class FrameworkConfig(BaseModel):
    """Static descriptor of a regulatory self-assessment framework."""

    model_config = {"frozen": True}

    id: str = Field(..., description="Framework id stored on persisted records")
    name: str = Field(..., description="Full framework name")
    short_name: str = Field(default="", description="Abbreviation for compact display")
    cert_body: str = Field(default="", description="Issuing regulator")
    assessment_title: str = Field(default="Self-Assessment")
    model: ScoringModel
    sections: list[AssessmentSection] = Field(..., min_length=1)
    tiers: list[TierRule] = Field(
        default_factory=list,
        description="Tier ladder evaluated top-down (tiered model only)",
    )
    bands: list[ScoreBand] = Field(
        default_factory=lambda: list(DEFAULT_PERCENTAGE_BANDS),
        description="Label bands, highest minimum first (percentage model only)",
    )

    @field_validator("bands")
    @classmethod
    def _sort_bands(cls, bands: list[ScoreBand]) -> list[ScoreBand]:
        return sorted(bands, key=lambda b: b.min, reverse=True)

    @model_validator(mode="after")
    def _check_consistency(self) -> FrameworkConfig:
        codes = [item.code for item in self.all_items()]
        dupes = sorted({c for c in codes if codes.count(c) > 1})
        if dupes:
            raise ValueError(f"duplicate item codes: {', '.join(dupes)}")

        if self.model is ScoringModel.tiered and not self.tiers:
            raise ValueError("tiered frameworks need at least one tier rule")

        if self.model is ScoringModel.percentage:
            graded = [item.code for item in self.all_items() if item.severities]
            if graded:
                raise ValueError(
                    f"percentage frameworks have no severities (found on {', '.join(graded)})"
                )
            if not self.bands:
                raise ValueError("percentage frameworks need at least one band")

        return self

    # ------------------------------------------------------------------
    # Item lookups
    # ------------------------------------------------------------------

    def all_items(self) -> list[AssessmentItem]:
        """Flatten every item across sections, in display order."""
        return [item for section in self.sections for item in section.items]

    def item_map(self) -> dict[str, AssessmentItem]:
        """Map of item code to item."""
        return {item.code: item for item in self.all_items()}

    def get_item(self, code: str) -> AssessmentItem:
        """Return the item with *code*, raising ``KeyError`` if unknown."""
        try:
            return self.item_map()[code]
        except KeyError:
            raise KeyError(f"Unknown item '{code}' for framework '{self.id}'") from None

    @property
    def total_items(self) -> int:
        """Number of items in the checklist."""
        return sum(len(section.items) for section in self.sections)

    @property
    def uses_severities(self) -> bool:
        """True if answers carry a severity when non-compliant."""
        return self.model is ScoringModel.tiered

    @property
    def max_tier(self) -> int:
        """Highest tier value in the ladder (0 for percentage frameworks)."""
        return max((t.tier_value for t in self.tiers), default=0)


def load_framework(path: str | Path) -> FrameworkConfig:
    """Load a FrameworkConfig from a YAML file."""
    import yaml

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Framework file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    return FrameworkConfig.model_validate(raw)
