from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .errors import DomainError, InvalidBodyError


class CelestialBody(str, Enum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"

    @property
    def symbol(self) -> str:
        return BODY_SYMBOLS[self]

    @classmethod
    def parse(cls, value: object) -> "CelestialBody":
        """Resolve a body from a member or its name (case-insensitive)."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise InvalidBodyError(value)


BODY_SYMBOLS: Dict[CelestialBody, str] = {
    CelestialBody.SUN: "☉",
    CelestialBody.MOON: "☽",
    CelestialBody.MERCURY: "☿",
    CelestialBody.VENUS: "♀",
    CelestialBody.MARS: "♂",
    CelestialBody.JUPITER: "♃",
    CelestialBody.SATURN: "♄",
    CelestialBody.URANUS: "♅",
    CelestialBody.NEPTUNE: "♆",
    CelestialBody.PLUTO: "♇",
}


class Element(str, Enum):
    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"
    WATER = "water"


@dataclass(frozen=True)
class ZodiacSign:
    index: int
    name: str
    symbol: str
    element: Element

    @property
    def start_degree(self) -> float:
        return self.index * 30.0


SIGN_NAMES = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo","Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

_SIGN_SYMBOLS = ["♈︎", "♉︎", "♊︎", "♋︎", "♌︎", "♍︎", "♎︎", "♏︎", "♐︎", "♑︎", "♒︎", "♓︎"]

# Fire, earth, air, water repeat in that order from Aries.
_ELEMENT_CYCLE = (Element.FIRE, Element.EARTH, Element.AIR, Element.WATER)

ZODIAC_SIGNS: Tuple[ZodiacSign, ...] = tuple(
    ZodiacSign(index=i, name=name, symbol=_SIGN_SYMBOLS[i], element=_ELEMENT_CYCLE[i % 4])
    for i, name in enumerate(SIGN_NAMES)
)


def normalize_longitude(lon: float) -> float:
    """Map any real longitude into [0, 360)."""

    if not math.isfinite(lon):
        raise DomainError(f"Longitude must be finite, got {lon!r}")
    norm = lon % 360.0
    # Tiny negative inputs round up to exactly 360.0 under float modulo.
    if norm >= 360.0:
        norm = 0.0
    return norm


def sign_index_from_lon(lon: float) -> int:
    return int(normalize_longitude(lon) // 30) % 12

def sign_from_lon(lon: float) -> ZodiacSign:
    return ZODIAC_SIGNS[sign_index_from_lon(lon)]

def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]

def relative_degree(lon: float) -> float:
    return normalize_longitude(lon) % 30.0

def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′56″"
    lon = normalize_longitude(lon)
    sidx = sign_index_from_lon(lon)
    within = lon % 30.0
    deg = int(within)
    minutes_float = (within - deg) * 60
    mins = int(minutes_float)
    secs = int((minutes_float - mins) * 60)
    return f"{SIGN_NAMES[sidx]} {deg:02d}°{mins:02d}′{secs:02d}″"
