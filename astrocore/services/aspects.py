from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import AngularPosition, AspectRecord, AspectType


@dataclass(frozen=True)
class AspectBand:
    aspect_type: AspectType
    angle: float
    orb: float


# Evaluated top to bottom; the first band containing the separation wins.
ASPECT_BANDS: Tuple[AspectBand, ...] = (
    AspectBand(AspectType.CONJUNCTION, 0.0, 6.0),
    AspectBand(AspectType.SEXTILE, 60.0, 4.2),
    AspectBand(AspectType.SQUARE, 90.0, 6.0),
    AspectBand(AspectType.TRINE, 120.0, 6.0),
    AspectBand(AspectType.OPPOSITION, 180.0, 6.0),
)

DEFAULT_LIMIT = 8

# Band edges are inclusive; absorbs float error such as 64.2 - 60 == 4.200000000000003.
EDGE_TOLERANCE = 1e-9


def angle_diff(a: float, b: float) -> float:
    """Return the minimal angular distance between two longitudes."""

    diff = abs(a - b) % 360.0
    return 360.0 - diff if diff > 180.0 else diff


def classify(separation: float, bands: Sequence[AspectBand] = ASPECT_BANDS) -> Optional[Tuple[AspectType, float]]:
    """Aspect type and orb for a separation in [0, 180], or None."""

    for band in bands:
        orb = abs(separation - band.angle)
        if orb <= band.orb + EDGE_TOLERANCE:
            return band.aspect_type, orb
    return None


def find_aspects(
    positions_a: Sequence[AngularPosition],
    positions_b: Sequence[AngularPosition],
    same_subject: bool = False,
    limit: Optional[int] = DEFAULT_LIMIT,
    bands: Sequence[AspectBand] = ASPECT_BANDS,
) -> List[AspectRecord]:
    """Pairwise aspects between two position sets, tightest first.

    With ``same_subject`` only pairs ``j > i`` are compared, so a chart
    checked against itself yields each pair once and no self-pairs.
    Ties keep enumeration order.
    """

    res = []
    for i, pa in enumerate(positions_a):
        for j, pb in enumerate(positions_b):
            if same_subject and j <= i:
                continue
            hit = classify(angle_diff(pa.longitude, pb.longitude), bands)
            if hit is None:
                continue
            aspect_type, orb = hit
            res.append(AspectRecord(body_a=pa.body, body_b=pb.body, aspect_type=aspect_type, orb=orb))
    res.sort(key=lambda r: r.orb)
    return res if limit is None else res[:limit]
