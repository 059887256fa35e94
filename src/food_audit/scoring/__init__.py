# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Scoring engine for regulatory self-assessments."""

from food_audit.scoring.engine import ScoringEngine, compute_score

__all__ = ["ScoringEngine", "compute_score"]
