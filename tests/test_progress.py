# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for section and overall progress."""

from __future__ import annotations

from food_audit.assessment.progress import ProgressTracker, SectionProgress

from conftest import compliant, non_compliant, not_assessed


class TestProgressTracker:
    def test_section_progress(self, ten_item_framework):
        section = ten_item_framework.sections[0]
        progress = ProgressTracker().section_progress(section, {
            "T1": compliant(),
            "T2": non_compliant(),
            "T3": not_assessed(),
        })
        assert progress.total == 5
        assert progress.compliant == 1
        assert progress.assessed == 2
        assert progress.pct == 40.0

    def test_missing_items_are_not_assessed(self, ten_item_framework):
        sections = ProgressTracker().all_sections(ten_item_framework, {})
        assert [s.assessed for s in sections] == [0, 0]
        assert [s.key for s in sections] == ["first", "second"]

    def test_overall_progress(self, ten_item_framework):
        tracker = ProgressTracker()
        answers = {"T1": compliant(), "T6": non_compliant(), "T9": compliant(), "X1": compliant()}
        assert tracker.overall_progress(ten_item_framework, answers) == 0.3
        assert tracker.overall_percent(ten_item_framework, answers) == 30.0

    def test_overall_progress_bounds(self, bcc):
        tracker = ProgressTracker()
        assert tracker.overall_progress(bcc, {}) == 0.0
        full = {item.code: compliant() for item in bcc.all_items()}
        assert tracker.overall_progress(bcc, full) == 1.0

    def test_pct_ties_round_up(self):
        progress = SectionProgress(key="s", label="S", total=16, compliant=0, assessed=1)
        assert progress.pct == 6.3
        progress = SectionProgress(key="s", label="S", total=8, compliant=0, assessed=5)
        assert progress.pct == 62.5
