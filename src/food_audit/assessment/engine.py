# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Interactive self-assessment walker.

Presents each checklist item via Rich prompts, records the answer on an
:class:`AssessmentSession`, and shows the live score as it changes.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.text import Text

from food_audit.assessment.session import AssessmentSession
from food_audit.data.models import (
    AssessmentItem,
    AssessmentSection,
    ItemStatus,
    ScoringModel,
    Severity,
)

_STATUS_CHOICES = {
    "c": ItemStatus.compliant,
    "n": ItemStatus.non_compliant,
    "s": ItemStatus.not_assessed,
}


class AssessmentWalker:
    """Walks a user through every item of a framework checklist."""

    def __init__(self, session: AssessmentSession, console: Console | None = None) -> None:
        self.session = session
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, skip_answered: bool = False) -> None:
        """Prompt for every item, section by section.

        With *skip_answered*, items that already carry an answer are not
        asked again.
        """
        self._render_welcome()
        for section in self.session.config.sections:
            self.console.print()
            self.console.rule(f"[bold magenta]{section.label}[/]")
            self._run_section(section, skip_answered)

    # ------------------------------------------------------------------
    # Interactive prompts
    # ------------------------------------------------------------------

    def _render_welcome(self) -> None:
        config = self.session.config
        welcome = Text()
        welcome.append(f"{config.assessment_title.upper()}\n", style="bold cyan")
        welcome.append(
            f"{config.total_items} items across {len(config.sections)} sections.\n",
            style="dim",
        )
        welcome.append(
            "Answer C (compliant), N (non-compliant) or S (skip) for each item.",
            style="dim",
        )
        if config.uses_severities:
            welcome.append(
                "\nNon-compliances are graded minor, major or critical.",
                style="dim",
            )
        self.console.print(Panel(welcome, border_style="cyan"))

    def _run_section(self, section: AssessmentSection, skip_answered: bool) -> None:
        answers = self.session.answers
        for i, item in enumerate(section.items, 1):
            existing = answers.get(item.code)
            if skip_answered and existing and existing.status is not ItemStatus.not_assessed:
                continue
            self._ask_item(item, i, len(section.items))

    def _ask_item(self, item: AssessmentItem, index: int, total: int) -> None:
        """Present a single item and record the answer."""
        self.console.print()
        self.console.print(f"  [bold]{index}/{total}[/] [cyan]{item.code}[/] {item.text}")
        if item.detail:
            self.console.print(f"  [dim]{item.detail}[/]")

        choice = Prompt.ask(
            "  [bold]C/N/S[/]",
            console=self.console,
            choices=list(_STATUS_CHOICES),
            default="s",
        )
        status = _STATUS_CHOICES[choice]
        result = self.session.set_status(item.code, status)

        if status is ItemStatus.non_compliant and len(item.severities) > 1:
            severity = Prompt.ask(
                "  [yellow]Severity[/]",
                console=self.console,
                choices=[s.value for s in item.severities],
                default=item.default_severity.value,
            )
            result = self.session.set_severity(item.code, Severity(severity))

        if item.has_evidence and status is not ItemStatus.not_assessed:
            evidence = Confirm.ask(
                "  [dim]Evidence sighted?[/]", console=self.console, default=False
            )
            self.session.set_evidence(item.code, evidence)

        if status is ItemStatus.non_compliant:
            comments = Prompt.ask(
                "  [dim]Comments (press Enter to skip)[/]",
                console=self.console,
                default="",
            )
            self.session.set_comments(item.code, comments)

        if self.session.config.model is ScoringModel.tiered:
            self.console.print(
                f"  [{result.color}]Predicted: {result.predicted_value} stars "
                f"({result.label})[/]"
            )
        else:
            self.console.print(
                f"  [{result.color}]Score: {result.predicted_value}% ({result.label})[/]"
            )
