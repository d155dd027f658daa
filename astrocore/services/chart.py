"""Assemble a natal chart from body positions and the ascendant."""

from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, Sequence, Tuple

from . import ascendant as ascendant_svc
from . import ephem
from .constants import CelestialBody, Element, ZodiacSign, normalize_longitude, relative_degree, sign_from_lon
from .houses import house_of
from .models import AngularPosition, BigThree, BodyPlacement, ElementalBalance, NatalChart, Rising


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def sign_placement(lon: float) -> Tuple[ZodiacSign, float]:
    """Sign and degree within the sign for a longitude."""

    return sign_from_lon(lon), relative_degree(lon)


def elemental_balance(placements: Iterable[BodyPlacement]) -> ElementalBalance:
    """Percentages per element, summing to exactly 100.

    Fire, earth and air are rounded independently; water takes the
    remainder, clipped at zero.
    """

    counts = Counter(p.sign.element for p in placements)
    total = max(sum(counts.values()), 1)
    fire = _round_half_up(counts[Element.FIRE] / total * 100)
    earth = _round_half_up(counts[Element.EARTH] / total * 100)
    air = _round_half_up(counts[Element.AIR] / total * 100)
    water = max(0, 100 - fire - earth - air)
    return ElementalBalance(fire=fire, earth=earth, air=air, water=water)


def assemble_chart(positions: Sequence[AngularPosition], ascendant_lon: float) -> NatalChart:
    asc_lon = normalize_longitude(ascendant_lon)
    asc_sign = sign_from_lon(asc_lon)

    placements = []
    for pos in positions:
        sign, within = sign_placement(pos.longitude)
        placements.append(
            BodyPlacement(
                position=pos,
                sign=sign,
                relative_degree=within,
                house=house_of(sign.index, asc_sign.index),
            )
        )

    by_body = {p.body: p for p in placements}
    sun = by_body.get(CelestialBody.SUN)
    moon = by_body.get(CelestialBody.MOON)
    big_three = BigThree(
        sun=sun.sign.name if sun else "",
        moon=moon.sign.name if moon else "",
        rising=asc_sign.name,
    )
    return NatalChart(
        placements=tuple(placements),
        rising=Rising(sign=asc_sign, longitude=asc_lon),
        elements=elemental_balance(placements),
        big_three=big_three,
    )


def build_natal_chart(
    instant: ephem.Instant,
    lat: float,
    lon: float,
    ephemeris: ephem.EphemerisProvider,
    clock: ephem.SiderealClock,
) -> NatalChart:
    # Location is checked before any ephemeris call.
    asc = ascendant_svc.ascendant(instant, lat, lon, clock)
    positions = ephem.positions_ecliptic(instant, ephemeris)
    return assemble_chart(positions, asc)
