# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Scoring engine for regulatory self-assessments.

Turns a canonical answer map into a graded outcome. The framework decides
the model: tiered frameworks walk their tier ladder with the severity
counts, percentage frameworks score compliant items over assessed items
and label the result from their bands.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from food_audit.data.models import (
    ItemAnswer,
    ItemStatus,
    ScoreResult,
    ScoringModel,
    Severity,
    SeverityBreakdown,
)
from food_audit.scoring.thresholds import percentage

if TYPE_CHECKING:
    from food_audit.frameworks.config import FrameworkConfig, ScoreBand, TierRule


# ---------------------------------------------------------------------------
# Ladder / band lookups
# ---------------------------------------------------------------------------

def evaluate_tiers(tiers: list[TierRule], breakdown: SeverityBreakdown) -> TierRule:
    """Return the first tier row satisfied by *breakdown*.

    If no row matches (a ladder without an unbounded final row), the row
    with the lowest tier value is returned.
    """
    if not tiers:
        raise ValueError("tier ladder is empty")
    for rule in tiers:
        if rule.matches(breakdown):
            return rule
    return min(tiers, key=lambda t: t.tier_value)


def band_for(bands: list[ScoreBand], score: int) -> ScoreBand:
    """Return the highest band whose minimum *score* reaches."""
    if not bands:
        raise ValueError("band list is empty")
    for band in bands:
        if score >= band.min:
            return band
    return bands[-1]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ScoringEngine:
    """Computes the predicted inspection outcome for a framework.

    Usage::

        engine = ScoringEngine()
        result = engine.score(BCC_FRAMEWORK, answers)
        print(result.predicted_value, result.label)

    Scoring never mutates its inputs and is cheap enough to call after
    every single answer change.
    """

    def score(
        self, config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> ScoreResult:
        """Score *answers* against *config*.

        Args:
            config: The active framework descriptor.
            answers: Canonical answer map keyed by item code. Codes that
                are not part of *config* are ignored.

        Returns:
            A ``ScoreResult`` with counts, severity breakdown, predicted
            value (tier or percentage) and its label.
        """
        items = config.item_map()
        relevant = {code: a for code, a in answers.items() if code in items}

        assessed = sum(1 for a in relevant.values() if a.status is not ItemStatus.not_assessed)
        compliant = sum(1 for a in relevant.values() if a.status is ItemStatus.compliant)
        non_compliant = sum(1 for a in relevant.values() if a.status is ItemStatus.non_compliant)

        breakdown = SeverityBreakdown()
        if config.uses_severities:
            breakdown = self._severity_breakdown(config, relevant)

        if config.model is ScoringModel.tiered:
            rule = evaluate_tiers(config.tiers, breakdown)
            value, label, color = rule.tier_value, rule.tier_label, rule.color
        else:
            value = percentage(compliant, assessed)
            band = band_for(config.bands, value)
            label, color = band.label, band.color

        return ScoreResult(
            model=config.model,
            total_items=config.total_items,
            assessed_count=assessed,
            compliant_count=compliant,
            non_compliant_count=non_compliant,
            severity_breakdown=breakdown,
            predicted_value=value,
            label=label,
            color=color,
        )

    @staticmethod
    def _severity_breakdown(
        config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
    ) -> SeverityBreakdown:
        """Count non-compliant answers per severity for graded items."""
        items = config.item_map()
        counts = {s: 0 for s in Severity}
        for code, answer in answers.items():
            if answer.status is not ItemStatus.non_compliant or answer.severity is None:
                continue
            if not items[code].severities:
                continue
            counts[answer.severity] += 1
        return SeverityBreakdown(
            minor=counts[Severity.minor],
            major=counts[Severity.major],
            critical=counts[Severity.critical],
        )


def compute_score(
    config: FrameworkConfig, answers: Mapping[str, ItemAnswer]
) -> ScoreResult:
    """Score *answers* against *config* with a default engine."""
    return ScoringEngine().score(config, answers)
