# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Rich terminal renderers for the readiness scorecard and framework list."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from food_audit.data.models import ReadinessReport, ReadinessStatus, ScoringModel
from food_audit.frameworks.config import FrameworkConfig
from food_audit.reporting.ascii_charts import score_gauge
from food_audit.scoring.thresholds import score_to_color


class ReadinessRenderer:
    """Renders an inspection-readiness report to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, report: ReadinessReport, org_id: str | None = None) -> None:
        """Render the full scorecard."""
        self._render_header(report, org_id)
        if report.is_empty:
            self.console.print("  [dim]No organization selected; no checks were run.[/]")
            return
        self._render_checks(report)
        self._render_fixes(report)

    def _render_header(self, report: ReadinessReport, org_id: str | None) -> None:
        header = Text()
        header.append("INSPECTION READINESS", style="bold cyan")
        if org_id:
            header.append(" | ", style="dim")
            header.append(org_id, style="bold")
        header.append(" | ", style="dim")
        header.append(f"{report.ready_count}/{report.total_checks} checks ready")

        self.console.print()
        self.console.print(Panel(header, border_style=score_to_color(report.score_pct)))
        self.console.print(
            f"  [bold]READINESS[/bold]: {score_gauge(report.score_pct, report.band, width=30)}"
        )

    def _render_checks(self, report: ReadinessReport) -> None:
        self.console.print()
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("", width=2)
        table.add_column("Check", style="bold", min_width=28)
        table.add_column("Status", min_width=10)
        table.add_column("Detail", min_width=36)

        for check in report.checks:
            color = check.status.color
            table.add_row(
                f"[{color}]{check.status.icon}[/]",
                check.label,
                f"[{color}]{check.status.value.replace('_', ' ')}[/]",
                check.detail,
            )
        self.console.print(table)

    def _render_fixes(self, report: ReadinessReport) -> None:
        gaps = [c for c in report.checks if c.status is not ReadinessStatus.ready]
        if not gaps:
            self.console.print("\n  [green]All checks ready.[/]")
            return
        self.console.print()
        self.console.print(Rule("[bold]TO FIX[/]"))
        for check in gaps:
            self.console.print(f"  [{check.status.color}]•[/] {check.label} -> [cyan]{check.fix_route}[/]")


class FrameworkRenderer:
    """Lists the available assessment frameworks."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, frameworks: list[FrameworkConfig]) -> None:
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("ID", style="bold cyan")
        table.add_column("Name", min_width=28)
        table.add_column("Certifying Body", min_width=20)
        table.add_column("Model")
        table.add_column("Items", justify="right")
        table.add_column("Outcome", min_width=24)

        for config in frameworks:
            if config.model is ScoringModel.tiered:
                outcome = f"0-{config.max_tier} stars"
            else:
                outcome = ", ".join(f"{b.label} (>={b.min}%)" for b in config.bands)
            table.add_row(
                config.id,
                config.name,
                config.cert_body,
                config.model.value,
                str(config.total_items),
                outcome,
            )
        self.console.print(table)
