from __future__ import annotations

from typing import Dict, List

from . import aspects as aspects_svc
from .layout import resolve_layout
from .models import AspectRecord, LayoutEntry, LayoutPoint, NatalChart


def synastry(chart_a: NatalChart, chart_b: NatalChart, limit: int = aspects_svc.DEFAULT_LIMIT) -> List[AspectRecord]:
    """Cross aspects from subject A's bodies to subject B's, tightest first."""

    return aspects_svc.find_aspects(chart_a.positions, chart_b.positions, limit=limit)


def layout_points(chart: NatalChart, owner: str = "A") -> List[LayoutPoint]:
    return [LayoutPoint(body=p.body, longitude=p.longitude, owner=owner) for p in chart.placements]


def wheel_layout(chart_a: NatalChart, chart_b: NatalChart | None = None, min_separation: float = 6.0) -> Dict[str, List[LayoutEntry]]:
    # Each subject is laid out on its own ring.
    rings = {"A": resolve_layout(layout_points(chart_a, "A"), min_separation)}
    if chart_b is not None:
        rings["B"] = resolve_layout(layout_points(chart_b, "B"), min_separation)
    return rings
