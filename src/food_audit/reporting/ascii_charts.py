# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bars, gauges,
star ratings and sparklines in the terminal via the Rich library.
"""

from __future__ import annotations

from food_audit.scoring.thresholds import score_to_color

_FULL = "█"
_EMPTY = "░"
_SPARK_BLOCKS = " ▁▂▃▄▅▆▇█"


def _bar(pct: float, width: int) -> tuple[str, str, float]:
    clamped = max(0.0, min(100.0, pct))
    filled = int(clamped / 100 * width)
    return _FULL * filled + _EMPTY * (width - filled), score_to_color(clamped), clamped


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    width: int = 30,
    color: str = "green",
) -> str:
    """Render a horizontal bar chart line.

    Returns a Rich-markup string like:
        Major.................. [dark_orange]██████░░░░░░[/]      2
    """
    if max_value <= 0:
        return f"  {label:.<24} [dim]none[/]"
    ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    bar = _FULL * filled + _EMPTY * (width - filled)
    return f"  {label:.<24} [{color}]{bar}[/] {value:>6.0f}"


def score_gauge(score: float, label: str = "", width: int = 20) -> str:
    """Large visual gauge: [green]████████░░[/] 78/100 [green]Compliant[/]"""
    bar, color, clamped = _bar(score, width)
    suffix = f" [{color}]{label}[/]" if label else ""
    return f"[{color}]{bar}[/] {clamped:.0f}/100{suffix}"


def mini_gauge(score: float, width: int = 10) -> str:
    """Compact gauge for inline use in tables."""
    bar, color, clamped = _bar(score, width)
    return f"[{color}]{bar}[/] {clamped:.0f}"


def percentage_bar(label: str, pct: float, width: int = 20) -> str:
    """Simple percentage bar: [label] ████░░░░ 45%"""
    bar, color, clamped = _bar(pct, width)
    return f"{label} [{color}]{bar}[/] {clamped:.0f}%"


def star_rating(value: int, max_value: int = 5, color: str = "yellow") -> str:
    """Render a tier as filled and hollow stars: [yellow]★★★[/]☆☆"""
    value = max(0, min(value, max_value))
    return f"[{color}]{'★' * value}[/]{'☆' * (max_value - value)}"


def sparkline(values: list[float], width: int | None = None) -> str:
    """Render a sparkline using Unicode block characters.

    If width is given and len(values) > width, values are downsampled.
    """
    if not values:
        return ""

    if width and len(values) > width:
        step = len(values) / width
        sampled = []
        for i in range(width):
            start = int(i * step)
            end = int((i + 1) * step)
            sampled.append(sum(values[start:end]) / (end - start))
        values = sampled

    min_v = min(values)
    max_v = max(values)
    range_v = max_v - min_v or 1

    return "".join(_SPARK_BLOCKS[int((v - min_v) / range_v * 8)] for v in values)
