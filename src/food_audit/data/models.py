# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the food-safety audit engine.

This module defines the data contract shared by the framework configs,
scoring engine, answer reconciler, readiness aggregator, and CLI layers.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Non-compliance severity levels, mildest first."""

    minor = "minor"
    major = "major"
    critical = "critical"

    @property
    def color(self) -> str:
        """Terminal color associated with this severity."""
        return {
            Severity.minor: "yellow",
            Severity.major: "dark_orange",
            Severity.critical: "red",
        }[self]


class ItemStatus(str, Enum):
    """Answer state of a single assessment item."""

    compliant = "compliant"
    non_compliant = "non_compliant"
    not_assessed = "not_assessed"


class ScoringModel(str, Enum):
    """How a framework turns answers into a predicted outcome."""

    tiered = "tiered"
    percentage = "percentage"


class ReadinessStatus(str, Enum):
    """Tri-state outcome of a single readiness check."""

    ready = "ready"
    warning = "warning"
    not_ready = "not_ready"

    @property
    def color(self) -> str:
        """Terminal color for this status."""
        return {
            ReadinessStatus.ready: "green",
            ReadinessStatus.warning: "yellow",
            ReadinessStatus.not_ready: "red",
        }[self]

    @property
    def icon(self) -> str:
        """Short glyph used in tables."""
        return {
            ReadinessStatus.ready: "✔",
            ReadinessStatus.warning: "!",
            ReadinessStatus.not_ready: "✘",
        }[self]


# ---------------------------------------------------------------------------
# Assessment checklist models
# ---------------------------------------------------------------------------

class AssessmentItem(BaseModel):
    """A single checklist item in a regulatory self-assessment."""

    model_config = {"frozen": True}

    code: str = Field(..., description="Item code, unique within a framework (e.g. 'A11')")
    category: str = Field(default="", description="Category heading shown with the item")
    text: str = Field(..., description="The question presented to the operator")
    detail: Optional[str] = Field(default=None, description="Clarifying guidance text")
    severities: list[Severity] = Field(
        default_factory=list,
        description="Allowed non-compliance severities, in display order",
    )
    has_evidence: bool = Field(
        default=False,
        description="True if an evidence toggle applies to this item",
    )

    @property
    def default_severity(self) -> Optional[Severity]:
        """First declared severity, used when an item is marked non-compliant."""
        return self.severities[0] if self.severities else None


class AssessmentSection(BaseModel):
    """An ordered group of assessment items."""

    model_config = {"frozen": True}

    key: str
    label: str
    items: list[AssessmentItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Answer models
# ---------------------------------------------------------------------------

class ItemAnswer(BaseModel):
    """The operator's answer to one item.

    Answers are immutable; every mutation in
    :mod:`food_audit.assessment.answers` returns a new instance.
    """

    model_config = {"frozen": True}

    status: ItemStatus = ItemStatus.not_assessed
    severity: Optional[Severity] = None
    comments: Optional[str] = None
    evidence: Optional[bool] = None


AnswerMap = dict[str, ItemAnswer]


class AssessmentRecord(BaseModel):
    """A persisted self-assessment, in one of two historical shapes.

    Tiered frameworks store the full ``answers`` map and a
    ``predicted_star_rating``; percentage frameworks store a reduced
    ``responses`` map of code -> passed plus a ``score``.
    """

    model_config = {"populate_by_name": True}

    org_id: str = Field(..., description="Owning organization")
    assessment_date: date = Field(..., description="Calendar day of the assessment period")
    framework: str = Field(..., description="Framework id the record was written under")
    answers: Optional[dict[str, ItemAnswer]] = None
    responses: Optional[dict[str, bool]] = None
    predicted_star_rating: Optional[int] = Field(default=None, ge=0)
    score: Optional[int] = Field(default=None, ge=0, le=100)
    total_items: Optional[int] = Field(default=None, ge=0)
    passed_items: Optional[int] = Field(default=None, ge=0)
    assessed_by: Optional[str] = None

    @model_validator(mode="after")
    def _single_shape(self) -> AssessmentRecord:
        if self.answers is not None and self.responses is not None:
            raise ValueError("a record holds either 'answers' or 'responses', never both")
        return self


# ---------------------------------------------------------------------------
# Scoring result models
# ---------------------------------------------------------------------------

class SeverityBreakdown(BaseModel):
    """Counts of non-compliant answers per severity."""

    minor: int = Field(default=0, ge=0)
    major: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        """Total severity-graded non-compliances."""
        return self.minor + self.major + self.critical


class ScoreResult(BaseModel):
    """Graded outcome of a self-assessment."""

    model: ScoringModel
    total_items: int = Field(..., ge=0)
    assessed_count: int = Field(..., ge=0)
    compliant_count: int = Field(..., ge=0)
    non_compliant_count: int = Field(..., ge=0)
    severity_breakdown: SeverityBreakdown = Field(default_factory=SeverityBreakdown)
    predicted_value: int = Field(
        ..., ge=0,
        description="Tier value (tiered model) or 0-100 percentage (percentage model)",
    )
    label: str = Field(..., description="Tier or band label for the predicted value")
    color: str = Field(default="white", description="Display color for the label")


class HistoryStats(BaseModel):
    """Summary counts for a historical answer set."""

    assessed: int = 0
    compliant: int = 0
    non_compliant: int = 0


# ---------------------------------------------------------------------------
# Readiness models
# ---------------------------------------------------------------------------

class ReadinessCheck(BaseModel):
    """Classified outcome of one readiness check."""

    key: str
    label: str
    detail: str = Field(..., description="Human text including live counts")
    status: ReadinessStatus
    fix_route: str = Field(..., description="Workflow key that resolves the gap")
    count: int = Field(default=0, ge=0)
    failed: bool = Field(default=False, description="True if the underlying query raised")


class ReadinessReport(BaseModel):
    """Aggregate inspection-readiness scorecard."""

    checks: list[ReadinessCheck] = Field(default_factory=list)
    ready_count: int = Field(default=0, ge=0)
    total_checks: int = Field(..., ge=1)
    score_pct: int = Field(default=0, ge=0, le=100)
    band: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """True when no checks ran (no organization context)."""
        return not self.checks
