# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the scoring engine and thresholds."""

from __future__ import annotations

import pytest

from food_audit.assessment.answers import mark_all_compliant
from food_audit.data.models import ScoringModel, Severity, SeverityBreakdown
from food_audit.scoring.engine import ScoringEngine, band_for, compute_score, evaluate_tiers
from food_audit.scoring.thresholds import (
    percentage,
    readiness_band,
    round_half_up,
    score_to_color,
)
from food_audit.frameworks.bcc import BCC_TIERS

from conftest import compliant, non_compliant, not_assessed


def _bcc_answers(minor: int = 0, major: int = 0, critical: int = 0) -> dict:
    """Build BCC answers with the requested severity counts."""
    answers = {}
    minor_codes = ["A1", "A2", "A3", "A4", "A5", "A7", "A8", "A10"]
    major_codes = ["A12", "A13", "A14", "A16"]
    critical_codes = ["A26", "A28", "A29"]
    for code in minor_codes[:minor]:
        answers[code] = non_compliant(Severity.minor)
    for code in major_codes[:major]:
        answers[code] = non_compliant(Severity.major)
    for code in critical_codes[:critical]:
        answers[code] = non_compliant(Severity.critical)
    return answers


class TestThresholds:
    def test_round_half_up(self):
        assert round_half_up(66.6667) == 67
        assert round_half_up(12.5) == 13
        assert round_half_up(12.4999) == 12

    def test_percentage(self):
        assert percentage(4, 6) == 67
        assert percentage(1, 8) == 13
        assert percentage(3, 0) == 0

    @pytest.mark.parametrize("pct,band", [
        (100, "Ready for Inspection"),
        (80, "Ready for Inspection"),
        (79, "Needs Attention"),
        (50, "Needs Attention"),
        (49, "Not Ready"),
        (0, "Not Ready"),
    ])
    def test_readiness_band(self, pct, band):
        assert readiness_band(pct) == band

    def test_score_to_color(self):
        assert score_to_color(80) == "green"
        assert score_to_color(50) == "yellow"
        assert score_to_color(10) == "red"


class TestTierLadder:
    @pytest.mark.parametrize("minor,major,critical,tier", [
        (0, 0, 0, 5),
        (2, 0, 0, 4),
        (3, 0, 0, 4),
        (4, 0, 0, 3),
        (5, 0, 0, 3),
        (6, 0, 0, 2),
        (7, 0, 0, 2),
        (0, 1, 0, 2),
        (0, 2, 0, 2),
        (0, 0, 1, 2),
        (0, 3, 0, 0),
        (0, 0, 2, 0),
        (1, 1, 1, 2),
    ])
    def test_literal_lookups(self, minor, major, critical, tier):
        breakdown = SeverityBreakdown(minor=minor, major=major, critical=critical)
        assert evaluate_tiers(BCC_TIERS, breakdown).tier_value == tier

    def test_labels(self):
        assert evaluate_tiers(BCC_TIERS, SeverityBreakdown()).tier_label == "Excellent"
        worst = evaluate_tiers(BCC_TIERS, SeverityBreakdown(critical=4))
        assert worst.tier_label == "Non-Compliant"

    def test_empty_ladder(self):
        with pytest.raises(ValueError):
            evaluate_tiers([], SeverityBreakdown())

    def test_no_match_falls_to_lowest_tier(self):
        bounded = BCC_TIERS[:3]
        assert evaluate_tiers(bounded, SeverityBreakdown(major=1)).tier_value == 3


class TestBands:
    def test_band_for(self, ten_item_framework):
        bands = ten_item_framework.bands
        assert band_for(bands, 80).label == "Compliant"
        assert band_for(bands, 67).label == "Needs Improvement"
        assert band_for(bands, 49).label == "Non-Compliant"


class TestTieredScoring:
    def test_empty_answers_score_top_tier(self, bcc):
        result = compute_score(bcc, {})
        assert result.model is ScoringModel.tiered
        assert result.assessed_count == 0
        assert result.predicted_value == 5

    @pytest.mark.parametrize("counts,tier", [
        ((2, 0, 0), 4),
        ((5, 0, 0), 3),
        ((7, 0, 0), 2),
        ((0, 1, 0), 2),
        ((0, 0, 1), 2),
        ((0, 3, 0), 0),
        ((0, 0, 2), 0),
    ])
    def test_answers_to_tier(self, bcc, counts, tier):
        result = compute_score(bcc, _bcc_answers(*counts))
        assert result.predicted_value == tier

    def test_severity_breakdown(self, bcc):
        result = compute_score(bcc, _bcc_answers(2, 1, 1))
        assert result.severity_breakdown.minor == 2
        assert result.severity_breakdown.major == 1
        assert result.severity_breakdown.critical == 1
        assert result.non_compliant_count == 4

    def test_non_compliant_without_severity_not_graded(self, bcc):
        result = compute_score(bcc, {"A1": non_compliant()})
        assert result.non_compliant_count == 1
        assert result.severity_breakdown.total == 0
        assert result.predicted_value == 5

    def test_unknown_codes_ignored(self, bcc):
        answers = {"A1": compliant(), "ZZ99": non_compliant(Severity.critical)}
        result = compute_score(bcc, answers)
        assert result.assessed_count == 1
        assert result.non_compliant_count == 0

    def test_mark_all_compliant_gives_max_tier(self, bcc):
        answers = mark_all_compliant(bcc, _bcc_answers(3, 2, 1))
        result = compute_score(bcc, answers)
        assert result.non_compliant_count == 0
        assert result.predicted_value == bcc.max_tier
        assert result.assessed_count == result.total_items == 40


class TestPercentageScoring:
    def test_example(self, ten_item_framework):
        answers = {
            "T1": compliant(),
            "T2": compliant(),
            "T3": compliant(),
            "T4": compliant(),
            "T5": non_compliant(),
            "T6": non_compliant(),
            "T7": not_assessed(),
        }
        result = compute_score(ten_item_framework, answers)
        assert result.total_items == 10
        assert result.assessed_count == 6
        assert result.compliant_count == 4
        assert result.predicted_value == 67
        assert result.label == "Needs Improvement"
        assert result.color == "yellow"

    def test_nothing_assessed(self, ten_item_framework):
        result = compute_score(ten_item_framework, {"T1": not_assessed()})
        assert result.predicted_value == 0
        assert result.label == "Non-Compliant"

    def test_fda_bands(self, fda):
        answers = {f"D{i}": compliant() for i in range(1, 10)}
        answers["D10"] = non_compliant()
        result = compute_score(fda, answers)
        assert result.predicted_value == 90
        assert result.label == "Pass - Excellent"

    def test_fda_labels_with_own_bands(self, fda, ten_item_framework):
        answers = {f"D{i}": compliant() for i in range(1, 5)}
        answers.update({"D5": non_compliant(), "D6": non_compliant()})
        result = compute_score(fda, answers)
        assert result.predicted_value == 67
        assert result.label == "Fail - Unsatisfactory"

        generic = {f"T{i}": a for i, a in enumerate(answers.values(), 1)}
        assert compute_score(ten_item_framework, generic).label == "Needs Improvement"

    def test_mark_all_compliant_gives_full_score(self, fda):
        result = compute_score(fda, mark_all_compliant(fda, {"D1": non_compliant()}))
        assert result.predicted_value == 100
        assert result.non_compliant_count == 0


class TestEngineProperties:
    def test_does_not_mutate_input(self, bcc):
        answers = _bcc_answers(1, 1, 0)
        snapshot = dict(answers)
        ScoringEngine().score(bcc, answers)
        assert answers == snapshot

    def test_assessed_never_exceeds_total(self, ten_item_framework):
        answers = {f"T{i}": compliant() for i in range(1, 11)}
        answers.update({f"X{i}": compliant() for i in range(20)})
        result = compute_score(ten_item_framework, answers)
        assert result.assessed_count <= result.total_items

    def test_status_values(self, bcc):
        result = compute_score(bcc, {"A1": compliant(), "A2": not_assessed()})
        assert result.assessed_count == 1
        assert result.compliant_count == 1
