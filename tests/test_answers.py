# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for single-answer updates."""

from __future__ import annotations

from food_audit.assessment.answers import (
    mark_all_compliant,
    set_item_comments,
    set_item_evidence,
    set_item_severity,
    set_item_status,
)
from food_audit.data.models import ItemAnswer, ItemStatus, Severity

from conftest import compliant, non_compliant


class TestSetStatus:
    def test_non_compliant_defaults_to_first_severity(self, bcc):
        item = bcc.get_item("A10")
        answers = set_item_status({}, item, ItemStatus.non_compliant)
        assert answers["A10"].severity is Severity.minor

    def test_non_compliant_keeps_valid_severity(self, bcc):
        item = bcc.get_item("A10")
        answers = {"A10": ItemAnswer(status=ItemStatus.compliant, severity=Severity.critical)}
        answers = set_item_status(answers, item, ItemStatus.non_compliant)
        assert answers["A10"].severity is Severity.critical

    def test_out_of_set_severity_healed(self, bcc):
        item = bcc.get_item("A1")  # minor only
        answers = {"A1": non_compliant(Severity.critical)}
        answers = set_item_status(answers, item, ItemStatus.non_compliant)
        assert answers["A1"].severity is Severity.minor

    def test_leaving_non_compliant_clears_severity(self, bcc):
        item = bcc.get_item("A2")
        answers = {"A2": non_compliant(Severity.major)}
        for status in (ItemStatus.compliant, ItemStatus.not_assessed):
            updated = set_item_status(answers, item, status)
            assert updated["A2"].status is status
            assert updated["A2"].severity is None

    def test_keeps_comments_and_evidence(self, bcc):
        item = bcc.get_item("A11")
        answers = {"A11": non_compliant(Severity.minor, comments="warm delivery", evidence=True)}
        updated = set_item_status(answers, item, ItemStatus.compliant)
        assert updated["A11"].comments == "warm delivery"
        assert updated["A11"].evidence is True

    def test_input_not_mutated(self, bcc):
        item = bcc.get_item("A1")
        answers = {"A1": compliant()}
        set_item_status(answers, item, ItemStatus.non_compliant)
        assert answers["A1"].status is ItemStatus.compliant

    def test_item_without_severities(self, fda):
        answers = set_item_status({}, fda.get_item("D1"), ItemStatus.non_compliant)
        assert answers["D1"].severity is None


class TestSetSeverity:
    def test_changes_severity(self, bcc):
        item = bcc.get_item("A32")
        answers = set_item_severity({"A32": non_compliant(Severity.minor)}, item, Severity.critical)
        assert answers["A32"].severity is Severity.critical

    def test_no_op_without_non_compliant_status(self, bcc):
        item = bcc.get_item("A32")
        answers = {"A32": compliant()}
        updated = set_item_severity(answers, item, Severity.major)
        assert updated == answers
        assert updated is not answers
        assert set_item_severity({}, item, Severity.major) == {}

    def test_disallowed_severity_healed(self, bcc):
        item = bcc.get_item("A2")  # minor, major
        answers = set_item_severity({"A2": non_compliant(Severity.major)}, item, Severity.critical)
        assert answers["A2"].severity is Severity.minor


class TestCommentsAndEvidence:
    def test_comments(self, bcc):
        item = bcc.get_item("A1")
        answers = set_item_comments({}, item, "renewal pending")
        assert answers["A1"].comments == "renewal pending"
        assert answers["A1"].status is ItemStatus.not_assessed

    def test_empty_comments_removed(self, bcc):
        item = bcc.get_item("A1")
        answers = set_item_comments({"A1": non_compliant(comments="x")}, item, "")
        assert answers["A1"].comments is None

    def test_evidence(self, bcc):
        answers = set_item_evidence({}, bcc.get_item("A11"), True)
        assert answers["A11"].evidence is True

    def test_evidence_ignored_without_evidence_check(self, bcc):
        assert set_item_evidence({}, bcc.get_item("A1"), True) == {}


class TestMarkAllCompliant:
    def test_every_item_compliant(self, bcc):
        answers = mark_all_compliant(bcc, {})
        assert len(answers) == 40
        assert all(a.status is ItemStatus.compliant for a in answers.values())

    def test_preserves_comments_and_evidence_discards_severity(self, bcc):
        answers = {"A11": non_compliant(Severity.critical, comments="probe broken", evidence=False)}
        updated = mark_all_compliant(bcc, answers)
        assert updated["A11"].severity is None
        assert updated["A11"].comments == "probe broken"
        assert updated["A11"].evidence is False

    def test_unknown_codes_kept(self, bcc):
        updated = mark_all_compliant(bcc, {"OLD1": non_compliant()})
        assert updated["OLD1"].status is ItemStatus.non_compliant
