# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for food-audit."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from food_audit import __version__
from food_audit.assessment.history import DEFAULT_BASE_DIR, JsonAssessmentStore, compare_records
from food_audit.assessment.reconcile import reconcile
from food_audit.assessment.report import AssessmentRenderer
from food_audit.assessment.session import AssessmentSession
from food_audit.frameworks import FRAMEWORKS, get_framework, load_framework
from food_audit.frameworks.config import FrameworkConfig
from food_audit.readiness.aggregator import ReadinessAggregator
from food_audit.readiness.sources import InMemoryRecordSource
from food_audit.reporting.terminal import FrameworkRenderer, ReadinessRenderer
from food_audit.scoring.engine import compute_score

FRAMEWORK_CHOICES = list(FRAMEWORKS.keys())


def _resolve_framework(
    framework: str, framework_file: str | None, console: Console
) -> FrameworkConfig:
    """Return the shipped framework, or a custom one loaded from YAML."""
    if not framework_file:
        return get_framework(framework)
    try:
        return load_framework(framework_file)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid framework file:[/red] {exc}")
        raise SystemExit(1)


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


framework_option = click.option(
    "--framework", "-f",
    type=click.Choice(FRAMEWORK_CHOICES),
    default="bcc",
    help="Assessment framework",
)
framework_file_option = click.option(
    "--framework-file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="Custom framework YAML (overrides --framework)",
)
data_dir_option = click.option(
    "--data-dir", type=click.Path(file_okay=False), default=str(DEFAULT_BASE_DIR),
    show_default=True, help="Directory holding saved assessments",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool) -> None:
    """food-audit: Food Safety Self-Assessment and Inspection Readiness Tool

    \b
      Self-assessment:  walk a regulatory checklist and predict the outcome
      Readiness:        check the records an inspector will ask for
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(no_color=no_color)


@cli.command()
@click.pass_context
def frameworks(ctx: click.Context) -> None:
    """List the available assessment frameworks."""
    console: Console = ctx.obj["console"]
    FrameworkRenderer(console).render(list(FRAMEWORKS.values()))


@cli.command()
@framework_option
@framework_file_option
@click.option(
    "--answers", "-a", "answers_path", type=click.Path(exists=True, dir_okay=False),
    required=True, help="JSON file: a saved record or a code -> answer map",
)
@click.option("--json", "as_json", is_flag=True, help="Print the score as JSON")
@click.pass_context
def score(
    ctx: click.Context,
    framework: str,
    framework_file: str | None,
    answers_path: str,
    as_json: bool,
) -> None:
    """Score a saved answer set without prompting."""
    console: Console = ctx.obj["console"]
    config = _resolve_framework(framework, framework_file, console)

    try:
        data = json.loads(Path(answers_path).read_text())
    except ValueError as exc:
        console.print(f"[red]Could not parse answers file:[/red] {exc}")
        raise SystemExit(1)

    if isinstance(data, dict) and not ({"answers", "responses"} & data.keys()):
        data = {"answers": data}
    answers = reconcile(data)
    result = compute_score(config, answers)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return
    AssessmentRenderer(console).render(config, answers, result)


@cli.command()
@click.option("--org", "-o", "org_id", required=True, help="Organization id")
@framework_option
@framework_file_option
@data_dir_option
@click.option("--date", "date_str", default=None, help="Assessment day (YYYY-MM-DD), default today")
@click.option("--assessor", default=None, help="Name of the person assessing")
@click.option("--mark-all", is_flag=True, help="Mark every item compliant before prompting")
@click.option(
    "--resume", is_flag=True,
    help="Only prompt for items without an answer",
)
@click.pass_context
def assess(
    ctx: click.Context,
    org_id: str,
    framework: str,
    framework_file: str | None,
    data_dir: str,
    date_str: str | None,
    assessor: str | None,
    mark_all: bool,
    resume: bool,
) -> None:
    """Run an interactive self-assessment and save it.

    \b
    Answers for the same organization, framework and day are loaded first,
    so the assessment can be resumed and re-saved.
    """
    console: Console = ctx.obj["console"]
    config = _resolve_framework(framework, framework_file, console)

    from food_audit.assessment.engine import AssessmentWalker

    session = AssessmentSession(
        config,
        JsonAssessmentStore(Path(data_dir)),
        org_id=org_id,
        assessment_date=_parse_date(date_str),
        assessed_by=assessor,
    )
    session.load()
    if mark_all:
        session.mark_all_compliant()

    AssessmentWalker(session, console).run(skip_answered=resume or mark_all)

    outcome = session.save()
    if outcome.success:
        console.print(f"\n  [green]{outcome.message}[/green]")
    else:
        console.print(f"\n  [red]{outcome.message}[/red]")

    AssessmentRenderer(console).render(config, session.answers, session.score, org_id=org_id)
    if not outcome.success:
        raise SystemExit(1)


@cli.command()
@click.option("--org", "-o", "org_id", required=True, help="Organization id")
@framework_option
@framework_file_option
@data_dir_option
@click.option("--limit", "-n", type=int, default=10, show_default=True, help="Records to show")
@click.option(
    "--compare", is_flag=True, default=False,
    help="Compare the two most recent assessments",
)
@click.pass_context
def history(
    ctx: click.Context,
    org_id: str,
    framework: str,
    framework_file: str | None,
    data_dir: str,
    limit: int,
    compare: bool,
) -> None:
    """Show past assessments for an organization."""
    console: Console = ctx.obj["console"]
    config = _resolve_framework(framework, framework_file, console)
    store = JsonAssessmentStore(Path(data_dir))
    records = store.load_recent_assessment_records(org_id, config.id, limit=limit)
    renderer = AssessmentRenderer(console)

    if compare:
        if len(records) < 2:
            console.print(
                f"[yellow]Need at least 2 assessments for '{org_id}' to compare. "
                f"Found {len(records)}.[/]"
            )
            return
        record_b, record_a = records[0], records[1]
        renderer.render_comparison(compare_records(record_a, record_b), record_a, record_b)
        return

    renderer.render_history(config, records)


@cli.command()
@click.option("--org", "-o", "org_id", required=True, help="Organization id")
@click.option(
    "--records", "-r", "records_path", type=click.Path(exists=True, dir_okay=False),
    required=True, help="JSON file of record tables: {table: [row, ...]}",
)
@click.option("--date", "date_str", default=None, help="Evaluate as of this day (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def readiness(
    ctx: click.Context,
    org_id: str,
    records_path: str,
    date_str: str | None,
    as_json: bool,
) -> None:
    """Check pre-inspection readiness for an organization."""
    console: Console = ctx.obj["console"]
    try:
        source = InMemoryRecordSource.from_json(records_path)
    except ValueError as exc:
        console.print(f"[red]Could not read records file:[/red] {exc}")
        raise SystemExit(1)

    report = ReadinessAggregator(source).run_sync(org_id, _parse_date(date_str))

    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return
    ReadinessRenderer(console).render(report, org_id=org_id)
