# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for terminal charts, renderers and the interactive walker."""

from __future__ import annotations

from datetime import timedelta

from rich.console import Console
from rich.prompt import Confirm, Prompt

from food_audit.assessment.engine import AssessmentWalker
from food_audit.assessment.reconcile import to_record
from food_audit.assessment.report import AssessmentRenderer
from food_audit.assessment.session import AssessmentSession
from food_audit.data.models import ItemStatus, Severity
from food_audit.readiness.aggregator import compute_readiness
from food_audit.readiness.checks import READINESS_CHECKS
from food_audit.reporting.ascii_charts import (
    mini_gauge,
    percentage_bar,
    score_gauge,
    sparkline,
    star_rating,
)
from food_audit.reporting.terminal import ReadinessRenderer
from food_audit.scoring.engine import compute_score

from conftest import TODAY, compliant, non_compliant


def _console() -> Console:
    return Console(record=True, width=140, no_color=True)


class TestAsciiCharts:
    def test_star_rating(self):
        assert star_rating(3) == "[yellow]★★★[/]☆☆"
        assert star_rating(9, 5).count("★") == 5
        assert star_rating(0).endswith("☆☆☆☆☆")

    def test_gauges_clamp(self):
        assert mini_gauge(150).endswith(" 100")
        assert "0/100" in score_gauge(-5)
        assert percentage_bar("Overall", 45).endswith("45%")

    def test_score_gauge_label(self):
        assert "[green]Compliant[/]" in score_gauge(85, "Compliant")

    def test_sparkline(self):
        assert sparkline([]) == ""
        assert len(sparkline([1, 2, 3, 4])) == 4
        assert len(sparkline(list(range(20)), width=5)) == 5


class TestAssessmentRenderer:
    def test_tiered_report(self, bcc):
        answers = {"A1": non_compliant(Severity.minor, comments="fee overdue"), "A2": compliant()}
        console = _console()
        AssessmentRenderer(console).render(bcc, answers, compute_score(bcc, answers), org_id="cafe-1")
        text = console.export_text()
        assert "PREDICTED RATING" in text
        assert "Very Good" in text
        assert "NON-COMPLIANCES BY SEVERITY" in text
        assert "fee overdue" in text
        assert "General Requirements" in text

    def test_percentage_report(self, fda):
        answers = {"D1": compliant()}
        console = _console()
        AssessmentRenderer(console).render(fda, answers, compute_score(fda, answers))
        text = console.export_text()
        assert "SCORE" in text
        assert "Pass - Excellent" in text
        assert "BY SEVERITY" not in text

    def test_history(self, bcc):
        records = [
            to_record(bcc, {"A1": compliant()}, "cafe-1", TODAY),
            to_record(bcc, {"A1": non_compliant(Severity.minor)}, "cafe-1", TODAY - timedelta(days=1)),
        ]
        console = _console()
        AssessmentRenderer(console).render_history(bcc, records)
        text = console.export_text()
        assert TODAY.isoformat() in text
        assert "Trend" in text

    def test_empty_history(self, bcc):
        console = _console()
        AssessmentRenderer(console).render_history(bcc, [])
        assert "No assessments found" in console.export_text()


class TestReadinessRenderer:
    def test_render(self):
        checks = [d.evaluate(1) for d in READINESS_CHECKS]
        console = _console()
        ReadinessRenderer(console).render(compute_readiness(checks), org_id="cafe-1")
        text = console.export_text()
        assert "8/10 checks ready" in text
        assert "TO FIX" in text
        assert "actions" in text

    def test_render_empty(self):
        console = _console()
        ReadinessRenderer(console).render(compute_readiness([]))
        assert "No organization selected" in console.export_text()


class TestAssessmentWalker:
    def test_walks_items(self, monkeypatch, bcc, store):
        session = AssessmentSession(bcc, store, "cafe-1", TODAY)
        session.mark_all_compliant()
        session.set_status("A32", ItemStatus.not_assessed)
        session.set_status("A1", ItemStatus.not_assessed)

        replies = iter(["c", "n", "critical", "broken seal"])
        monkeypatch.setattr(Prompt, "ask", classmethod(lambda cls, *a, **k: next(replies)))
        monkeypatch.setattr(Confirm, "ask", classmethod(lambda cls, *a, **k: True))

        AssessmentWalker(session, _console()).run(skip_answered=True)

        answers = session.answers
        assert answers["A32"].status is ItemStatus.non_compliant
        assert answers["A32"].severity is Severity.critical
        assert answers["A32"].comments == "broken seal"
        assert answers["A32"].evidence is True
        assert answers["A1"].status is ItemStatus.compliant
        assert session.score.predicted_value == 2
