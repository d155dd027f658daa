"""Radial track assignment for drawing points on a chart wheel.

Points that sit close together on the ring are pushed onto separate
concentric tracks so their glyphs do not overlap. Track 0 is the default
ring; the renderer decides whether higher tracks stack inward or outward.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

from .aspects import angle_diff
from .constants import normalize_longitude
from .models import LayoutEntry, LayoutPoint

DEFAULT_MIN_SEPARATION = 6.0
ISOLATION_THRESHOLD = 15.0
LOOKBACK = 4


@lru_cache(maxsize=256)
def _resolve(
    longitudes: Tuple[float, ...],
    min_separation: float,
    isolation_threshold: float,
) -> Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[bool, ...]]:
    # Returns (sorted order as input indices, tracks, isolated), both in sorted order.
    order = tuple(sorted(range(len(longitudes)), key=lambda i: longitudes[i]))
    lons = [longitudes[i] for i in order]
    n = len(lons)

    tracks: List[int] = []
    isolated: List[bool] = []
    for i, lon in enumerate(lons):
        alone = True
        if n > 1:
            d_prev = angle_diff(lon, lons[(i - 1) % n])
            d_next = angle_diff(lon, lons[(i + 1) % n])
            if d_prev < isolation_threshold or d_next < isolation_threshold:
                alone = False
        isolated.append(alone)

        used = set()
        for j in range(1, LOOKBACK + 1):
            if i - j < 0:
                break
            if angle_diff(lon, lons[i - j]) < min_separation:
                used.add(tracks[i - j])
        track = 0
        while track in used:
            track += 1
        tracks.append(track)

    # Seam patch: only the first point moves, later collisions are not revisited.
    if n > 1 and angle_diff(lons[0], lons[-1]) < min_separation and tracks[0] == tracks[-1]:
        tracks[0] += 1

    return order, tuple(tracks), tuple(isolated)


def resolve_layout(
    points: Sequence[LayoutPoint],
    min_separation: float = DEFAULT_MIN_SEPARATION,
    isolation_threshold: float = ISOLATION_THRESHOLD,
) -> List[LayoutEntry]:
    """Assign tracks and isolation flags; entries come back sorted by longitude."""

    longitudes = tuple(normalize_longitude(p.longitude) for p in points)
    order, tracks, isolated = _resolve(longitudes, float(min_separation), float(isolation_threshold))
    return [
        LayoutEntry(point=points[idx], track=tracks[k], isolated=isolated[k])
        for k, idx in enumerate(order)
    ]


def max_track(entries: Sequence[LayoutEntry]) -> int:
    return max((e.track for e in entries), default=0)
