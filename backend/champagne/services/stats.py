"""
Open-area statistics for a computed layout, and the markdown notes table.

Percentages are of the full panel (length x width), rounded half-up for display.
The total is rounded from the unrounded sum, so it can differ from the sum of the
per-radius figures.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass

from champagne.config import RELEASES_URL, VERSION
from champagne.services.layout import Layout, PanelSpec


@dataclass(frozen=True)
class RadiusStats:
    radius: float
    count: int
    total_area: float
    percentage: int


@dataclass(frozen=True)
class StatsSummary:
    per_radius: tuple[RadiusStats, ...]
    total_hole_count: int
    total_hole_area: float
    total_area: float
    total_open_percentage: int
    columns: int
    rows: int
    pitch: float


def round_half_up(value: float) -> int:
    """0.5 rounds up (2.5 -> 3), unlike built-in round()."""
    return math.floor(value + 0.5)


def _circle_area(radius: float) -> float:
    return math.pi * radius * radius


def summarize(layout: Layout, spec: PanelSpec) -> StatsSummary:
    """Per-radius counts and areas (largest radius first) plus panel totals."""
    counts: dict[float, int] = defaultdict(int)
    areas: dict[float, float] = defaultdict(float)
    for hole in layout.holes:
        counts[hole.radius] += 1
        areas[hole.radius] += _circle_area(hole.radius)

    total_area = spec.total_area
    per_radius = tuple(
        RadiusStats(
            radius=radius,
            count=counts[radius],
            total_area=areas[radius],
            percentage=round_half_up(100 * areas[radius] / total_area),
        )
        for radius in sorted(counts, reverse=True)
    )
    total_hole_area = sum(item.total_area for item in per_radius)
    return StatsSummary(
        per_radius=per_radius,
        total_hole_count=sum(counts.values()),
        total_hole_area=total_hole_area,
        total_area=total_area,
        total_open_percentage=round_half_up(100 * total_hole_area / total_area),
        columns=layout.grid.columns,
        rows=layout.grid.rows,
        pitch=layout.pitch,
    )


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def render_notes(summary: StatsSummary, version: str = VERSION) -> str:
    """
    Markdown notes: pitch, one table row per radius, grid totals, release link.

    The totals line reads rows x columns (length-wise count first).
    """
    lines = [
        f"**Pitch**: {_fmt(summary.pitch)}",
        "",
        "| | Circles | Radius | Area |",
        "|-| -------:| ------:| ----:|",
    ]
    for item in summary.per_radius:
        lines.append(f"| | {item.count} | {_fmt(item.radius)}mm | {item.percentage}% |")
    lines.append("| | ========= | | ==== |")
    lines.append(
        f"| | *{summary.rows} x {summary.columns} =* **{summary.total_hole_count}** "
        f"| | **{summary.total_open_percentage}%** |"
    )
    lines.extend(["", "---", f"[v{version}]({RELEASES_URL}v{version})"])
    return "\n".join(lines)
