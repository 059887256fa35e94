# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the food audit test suite."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from food_audit.assessment.history import AssessmentSaveError, JsonAssessmentStore
from food_audit.data.models import (
    AssessmentItem,
    AssessmentRecord,
    AssessmentSection,
    ItemAnswer,
    ItemStatus,
    ScoringModel,
    Severity,
)
from food_audit.frameworks import BCC_FRAMEWORK, FDA_FRAMEWORK
from food_audit.frameworks.config import FrameworkConfig

TODAY = date(2025, 3, 14)


def compliant() -> ItemAnswer:
    return ItemAnswer(status=ItemStatus.compliant)


def non_compliant(severity: Optional[Severity] = None, **extra) -> ItemAnswer:
    return ItemAnswer(status=ItemStatus.non_compliant, severity=severity, **extra)


def not_assessed() -> ItemAnswer:
    return ItemAnswer()


@pytest.fixture()
def bcc() -> FrameworkConfig:
    return BCC_FRAMEWORK


@pytest.fixture()
def fda() -> FrameworkConfig:
    return FDA_FRAMEWORK


@pytest.fixture()
def ten_item_framework() -> FrameworkConfig:
    """A two-section percentage framework of 10 items using the default bands."""
    return FrameworkConfig(
        id="ten",
        name="Ten Item Checklist",
        model=ScoringModel.percentage,
        sections=[
            AssessmentSection(
                key="first",
                label="First",
                items=[AssessmentItem(code=f"T{i}", text=f"Item {i}") for i in range(1, 6)],
            ),
            AssessmentSection(
                key="second",
                label="Second",
                items=[AssessmentItem(code=f"T{i}", text=f"Item {i}") for i in range(6, 11)],
            ),
        ],
    )


@pytest.fixture()
def store(tmp_path) -> JsonAssessmentStore:
    return JsonAssessmentStore(tmp_path)


class FailingSaveStore(JsonAssessmentStore):
    """A JSON store whose saves always fail."""

    def save_assessment_record(self, record: AssessmentRecord) -> None:
        raise AssessmentSaveError("Network unavailable")


class BrokenStore:
    """A store whose every call raises."""

    def load_assessment_record(self, org_id, assessment_date, framework):
        raise ConnectionError("storage offline")

    def save_assessment_record(self, record):
        raise ConnectionError("storage offline")

    def load_recent_assessment_records(self, org_id, framework, limit=10, exclude_date=None):
        raise ConnectionError("storage offline")


@pytest.fixture()
def failing_store(tmp_path) -> FailingSaveStore:
    return FailingSaveStore(tmp_path)
