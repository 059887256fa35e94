# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Single-answer updates on a canonical answer map.

Every function returns a new map and leaves its input untouched, so a
caller can hold the previous map (e.g. to roll back a failed save) and the
scoring functions stay pure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Optional

from food_audit.data.models import (
    AnswerMap,
    AssessmentItem,
    ItemAnswer,
    ItemStatus,
    Severity,
)

if TYPE_CHECKING:
    from food_audit.frameworks.config import FrameworkConfig


def _current(answers: Mapping[str, ItemAnswer], code: str) -> ItemAnswer:
    return answers.get(code) or ItemAnswer()


def _heal_severity(item: AssessmentItem, severity: Optional[Severity]) -> Optional[Severity]:
    """Keep *severity* if the item allows it, else fall back to its first severity."""
    if not item.severities:
        return None
    if severity is not None and severity in item.severities:
        return severity
    return item.default_severity


def set_item_status(
    answers: Mapping[str, ItemAnswer], item: AssessmentItem, status: ItemStatus
) -> AnswerMap:
    """Set the status of *item*, keeping comments and evidence.

    Marking an item non-compliant keeps a valid existing severity or
    defaults to the item's first declared severity. Any other status
    clears the severity.
    """
    existing = _current(answers, item.code)
    if status is ItemStatus.non_compliant:
        severity = _heal_severity(item, existing.severity)
    else:
        severity = None

    updated = dict(answers)
    updated[item.code] = existing.model_copy(update={"status": status, "severity": severity})
    return updated


def set_item_severity(
    answers: Mapping[str, ItemAnswer], item: AssessmentItem, severity: Severity
) -> AnswerMap:
    """Change the severity of a non-compliant *item*.

    Returns an unchanged copy when the item is not currently non-compliant.
    A severity the item does not allow is replaced by its first declared
    severity.
    """
    existing = _current(answers, item.code)
    updated = dict(answers)
    if existing.status is not ItemStatus.non_compliant:
        return updated
    updated[item.code] = existing.model_copy(
        update={"severity": _heal_severity(item, severity)}
    )
    return updated


def set_item_comments(
    answers: Mapping[str, ItemAnswer], item: AssessmentItem, comments: str
) -> AnswerMap:
    """Attach free-text comments to *item*; empty text removes them."""
    existing = _current(answers, item.code)
    updated = dict(answers)
    updated[item.code] = existing.model_copy(update={"comments": comments or None})
    return updated


def set_item_evidence(
    answers: Mapping[str, ItemAnswer], item: AssessmentItem, evidence: bool
) -> AnswerMap:
    """Toggle the evidence flag. Items without an evidence check are left as-is."""
    updated = dict(answers)
    if not item.has_evidence:
        return updated
    existing = _current(answers, item.code)
    updated[item.code] = existing.model_copy(update={"evidence": evidence})
    return updated


def mark_all_compliant(
    config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
) -> AnswerMap:
    """Mark every checklist item compliant.

    Comments and evidence on existing answers survive; severities are
    discarded. Entries for codes outside the checklist are kept untouched.
    """
    updated = dict(answers)
    for item in config.all_items():
        existing = _current(answers, item.code)
        updated[item.code] = existing.model_copy(
            update={"status": ItemStatus.compliant, "severity": None}
        )
    return updated
