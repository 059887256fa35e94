# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for record reconciliation and record building."""

from __future__ import annotations

from datetime import date

from food_audit.assessment.reconcile import (
    AnswerReconciler,
    history_stats,
    reconcile,
    to_record,
    to_responses,
)
from food_audit.data.models import AssessmentRecord, ItemAnswer, ItemStatus, Severity

from conftest import compliant, non_compliant, not_assessed

DAY = date(2025, 3, 14)


class TestReconcile:
    def test_answers_returned_unchanged(self):
        answers = {
            "A1": compliant(),
            "A2": non_compliant(Severity.major, comments="sign missing"),
        }
        record = AssessmentRecord(
            org_id="org", assessment_date=DAY, framework="bcc", answers=answers
        )
        assert reconcile(record) == answers

    def test_idempotent(self):
        answers = {"A1": non_compliant(Severity.minor, evidence=True)}
        record = AssessmentRecord(
            org_id="org", assessment_date=DAY, framework="bcc", answers=answers
        )
        once = reconcile(record)
        again = reconcile(AssessmentRecord(
            org_id="org", assessment_date=DAY, framework="bcc", answers=once
        ))
        assert again == once == answers

    def test_responses_expanded(self):
        record = {"responses": {"D1": True, "D2": False}}
        answers = reconcile(record)
        assert answers["D1"].status is ItemStatus.compliant
        assert answers["D2"].status is ItemStatus.non_compliant
        assert answers["D2"].severity is None

    def test_answers_win_over_responses_in_raw_mapping(self):
        record = {
            "answers": {"A1": {"status": "compliant"}},
            "responses": {"A1": False},
        }
        assert reconcile(record)["A1"].status is ItemStatus.compliant

    def test_neither_shape(self):
        assert reconcile({"org_id": "org"}) == {}
        assert reconcile(AssessmentRecord(org_id="org", assessment_date=DAY, framework="bcc")) == {}

    def test_none(self):
        assert reconcile(None) == {}

    def test_raw_answers_parsed(self):
        answers = reconcile({"answers": {"A1": {"status": "non_compliant", "severity": "critical"}}})
        assert answers["A1"] == ItemAnswer(
            status=ItemStatus.non_compliant, severity=Severity.critical
        )


class TestMalformedRecords:
    def test_non_mapping_record(self):
        assert reconcile(["not", "a", "record"]) == {}

    def test_malformed_answers_container(self):
        assert reconcile({"answers": "garbage"}) == {}

    def test_malformed_responses_container(self):
        assert reconcile({"responses": [True, False]}) == {}

    def test_malformed_entries_skipped(self):
        answers = reconcile({
            "answers": {
                "A1": {"status": "compliant"},
                "A2": {"status": "sideways"},
                "A3": 42,
            }
        })
        assert list(answers) == ["A1"]

    def test_non_boolean_responses_skipped(self):
        answers = reconcile({"responses": {"D1": True, "D2": "yes", "D3": None}})
        assert list(answers) == ["D1"]

    def test_reconciler_instance(self):
        assert AnswerReconciler().reconcile({"responses": {"D1": False}})["D1"].status is (
            ItemStatus.non_compliant
        )


class TestRoundTrip:
    def test_percentage_round_trip_preserves_classification(self):
        answers = {
            "D1": compliant(),
            "D2": non_compliant(comments="no sink"),
            "D3": not_assessed(),
        }
        restored = reconcile({"responses": to_responses(answers)})
        assert restored["D1"].status is ItemStatus.compliant
        assert restored["D2"].status is ItemStatus.non_compliant
        assert "D3" not in restored
        assert restored["D2"].comments is None

    def test_to_responses(self):
        assert to_responses({"D1": compliant(), "D2": non_compliant(), "D3": not_assessed()}) == {
            "D1": True,
            "D2": False,
        }


class TestToRecord:
    def test_tiered_record(self, bcc):
        answers = {"A1": non_compliant(Severity.minor)}
        record = to_record(bcc, answers, org_id="org", assessment_date=DAY, assessed_by="Sam")
        assert record.framework == "bcc"
        assert record.answers == answers
        assert record.responses is None
        assert record.predicted_star_rating == 4
        assert record.assessed_by == "Sam"

    def test_percentage_record(self, fda):
        answers = {"D1": compliant(), "D2": compliant(), "D3": non_compliant()}
        record = to_record(fda, answers, org_id="org", assessment_date=DAY)
        assert record.answers is None
        assert record.responses == {"D1": True, "D2": True, "D3": False}
        assert record.total_items == 40
        assert record.passed_items == 2
        # Stored against all checklist items.
        assert record.score == 5

    def test_percentage_record_nothing_assessed(self, fda):
        record = to_record(fda, {}, org_id="org", assessment_date=DAY)
        assert record.score == 0
        assert record.responses == {}


class TestHistoryStats:
    def test_counts(self):
        stats = history_stats({
            "A1": compliant(),
            "A2": compliant(),
            "A3": non_compliant(Severity.minor),
            "A4": not_assessed(),
        })
        assert stats.assessed == 3
        assert stats.compliant == 2
        assert stats.non_compliant == 1

    def test_empty(self):
        assert history_stats({}).assessed == 0
