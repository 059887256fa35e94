# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal report renderer for self-assessments.

Follows the same Rich-based pattern as ``ReadinessRenderer`` in the
reporting module.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from food_audit.assessment.progress import ProgressTracker
from food_audit.assessment.reconcile import history_stats, reconcile
from food_audit.data.models import (
    AssessmentRecord,
    ItemAnswer,
    ItemStatus,
    ScoreResult,
    ScoringModel,
    Severity,
)
from food_audit.reporting.ascii_charts import (
    horizontal_bar,
    mini_gauge,
    percentage_bar,
    score_gauge,
    sparkline,
    star_rating,
)

if TYPE_CHECKING:
    from food_audit.frameworks.config import FrameworkConfig


class AssessmentRenderer:
    """Renders assessment scores, progress and history using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._progress = ProgressTracker()

    def render(
        self,
        config: FrameworkConfig,
        answers: Mapping[str, ItemAnswer],
        result: ScoreResult,
        org_id: str | None = None,
    ) -> None:
        """Render the full assessment report."""
        self._render_header(config, org_id)
        self._render_score(config, result)
        if config.uses_severities:
            self._render_severity_breakdown(result)
        self._render_sections(config, answers)
        self._render_non_compliances(config, answers)

    def render_history(
        self, config: FrameworkConfig, records: list[AssessmentRecord]
    ) -> None:
        """Render past assessments, newest first."""
        self.console.print()
        self.console.print(Rule(f"[bold]Assessment History | {config.short_name}[/]"))

        if not records:
            self.console.print("  [dim]No assessments found.[/]")
            return

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("#", justify="right", width=3)
        table.add_column("Date", min_width=12)
        table.add_column("Assessed", justify="right")
        table.add_column("Compliant", justify="right", style="green")
        table.add_column("Non-Compliant", justify="right", style="red")
        table.add_column("Result", min_width=14)

        trend: list[float] = []
        for i, record in enumerate(records, 1):
            stats = history_stats(reconcile(record))
            table.add_row(
                str(i),
                record.assessment_date.isoformat(),
                str(stats.assessed),
                str(stats.compliant),
                str(stats.non_compliant),
                self._record_result(config, record),
            )
            value = self._record_value(record)
            if value is not None:
                trend.append(float(value))

        self.console.print(table)
        if len(trend) > 1:
            # Oldest on the left.
            self.console.print(f"  [dim]Trend:[/] {sparkline(list(reversed(trend)))}")

    def render_comparison(
        self,
        comparison: dict[str, dict],
        record_a: AssessmentRecord,
        record_b: AssessmentRecord,
    ) -> None:
        """Render a side-by-side comparison between two records."""
        self.console.print()
        self.console.print(Rule("[bold]Assessment Comparison[/]"))

        date_a = record_a.assessment_date.isoformat()
        date_b = record_b.assessment_date.isoformat()

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Measure", min_width=16)
        table.add_column(date_a, justify="right")
        table.add_column(date_b, justify="right")
        table.add_column("Delta", justify="right", min_width=8)

        for name, data in comparison.items():
            delta = data["delta"]
            if delta == 0:
                delta_str = "[dim]0[/]"
            else:
                color = "green" if data["improved"] else "red"
                delta_str = f"[{color}]{delta:+d}[/]"
            table.add_row(name.replace("_", " ").title(), str(data["a"]), str(data["b"]), delta_str)

        self.console.print(table)

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_header(self, config: FrameworkConfig, org_id: str | None) -> None:
        header = Text()
        header.append(f"{config.assessment_title.upper()}\n", style="bold cyan")
        header.append(config.name, style="bold")
        header.append(f" | {config.cert_body}", style="dim")
        if org_id:
            header.append(f" | {org_id}", style="dim")
        self.console.print()
        self.console.print(Panel(header, border_style="cyan"))

    def _render_score(self, config: FrameworkConfig, result: ScoreResult) -> None:
        self.console.print()
        if result.model is ScoringModel.tiered:
            stars = star_rating(result.predicted_value, config.max_tier, result.color)
            self.console.print(
                f"  [bold]PREDICTED RATING[/]: {stars} "
                f"[{result.color}]{result.label}[/]"
            )
        else:
            self.console.print(
                f"  [bold]SCORE[/]: {score_gauge(result.predicted_value, result.label, width=30)}"
            )
        self.console.print(
            f"  [dim]{result.assessed_count}/{result.total_items} assessed, "
            f"{result.compliant_count} compliant, "
            f"{result.non_compliant_count} non-compliant[/]"
        )

    def _render_severity_breakdown(self, result: ScoreResult) -> None:
        breakdown = result.severity_breakdown
        self.console.print()
        self.console.print(Rule("[bold]NON-COMPLIANCES BY SEVERITY[/]"))
        scale = max(breakdown.total, 1)
        for severity in Severity:
            count = getattr(breakdown, severity.value)
            self.console.print(
                horizontal_bar(severity.value.title(), count, scale, color=severity.color)
            )

    def _render_sections(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> None:
        self.console.print()
        self.console.print(Rule("[bold]SECTIONS[/]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Section", style="bold", min_width=28)
        table.add_column("Compliant", justify="right")
        table.add_column("Assessed", justify="right")
        table.add_column("Progress", min_width=15)

        for progress in self._progress.all_sections(config, answers):
            table.add_row(
                progress.label,
                f"{progress.compliant}/{progress.total}",
                f"{progress.assessed}/{progress.total}",
                mini_gauge(progress.pct),
            )
        self.console.print(table)
        overall = self._progress.overall_percent(config, answers)
        self.console.print(f"  {percentage_bar('Overall', overall)}")

    def _render_non_compliances(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> None:
        failing = [
            (item, answers[item.code])
            for item in config.all_items()
            if item.code in answers and answers[item.code].status is ItemStatus.non_compliant
        ]
        if not failing:
            return

        self.console.print()
        self.console.print(Rule("[bold red]NON-COMPLIANT ITEMS[/]"))
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Code", style="bold", width=5)
        table.add_column("Item", min_width=36)
        table.add_column("Severity", min_width=9)
        table.add_column("Comments", min_width=20)

        for item, answer in failing:
            severity = (
                f"[{answer.severity.color}]{answer.severity.value}[/]"
                if answer.severity else "[dim]-[/]"
            )
            table.add_row(item.code, item.text, severity, answer.comments or "")
        self.console.print(table)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _record_value(record: AssessmentRecord) -> int | None:
        if record.predicted_star_rating is not None:
            return record.predicted_star_rating
        return record.score

    def _record_result(self, config: FrameworkConfig, record: AssessmentRecord) -> str:
        if record.predicted_star_rating is not None:
            return star_rating(record.predicted_star_rating, config.max_tier)
        if record.score is not None:
            return mini_gauge(record.score)
        return "[dim]-[/]"
