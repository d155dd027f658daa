"""Immutable value types produced by the chart engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Literal, Mapping, Optional, Tuple

from .constants import CelestialBody, Element, ZodiacSign, normalize_longitude

Owner = Literal["A", "B"]


@dataclass(frozen=True)
class AngularPosition:
    body: CelestialBody
    longitude: float
    retrograde: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "longitude", normalize_longitude(self.longitude))


@dataclass(frozen=True)
class BodyPlacement:
    position: AngularPosition
    sign: ZodiacSign
    relative_degree: float
    house: int

    @property
    def body(self) -> CelestialBody:
        return self.position.body

    @property
    def longitude(self) -> float:
        return self.position.longitude

    @property
    def retrograde(self) -> bool:
        return self.position.retrograde


@dataclass(frozen=True)
class ElementalBalance:
    fire: int
    earth: int
    air: int
    water: int

    def as_dict(self) -> Dict[str, int]:
        return {
            Element.FIRE.value: self.fire,
            Element.EARTH.value: self.earth,
            Element.AIR.value: self.air,
            Element.WATER.value: self.water,
        }


@dataclass(frozen=True)
class Rising:
    sign: ZodiacSign
    longitude: float


@dataclass(frozen=True)
class BigThree:
    sun: str
    moon: str
    rising: str


@dataclass(frozen=True)
class NatalChart:
    placements: Tuple[BodyPlacement, ...]
    rising: Rising
    elements: ElementalBalance
    big_three: BigThree
    interpretations: Mapping[CelestialBody, str] = field(default_factory=dict)
    summary: Optional[str] = None

    @property
    def positions(self) -> Tuple[AngularPosition, ...]:
        return tuple(p.position for p in self.placements)

    @property
    def ascendant_longitude(self) -> float:
        return self.rising.longitude

    def placement(self, body: CelestialBody) -> BodyPlacement:
        for p in self.placements:
            if p.body is body:
                return p
        raise KeyError(body)

    def enrich(self, interpretations: Mapping[CelestialBody, str], summary: Optional[str] = None) -> "NatalChart":
        """Return a copy carrying interpretation text; numeric fields are shared as-is."""

        merged = dict(self.interpretations)
        merged.update(interpretations)
        return replace(self, interpretations=merged, summary=summary if summary is not None else self.summary)


class AspectType(str, Enum):
    CONJUNCTION = "conjunction"
    SEXTILE = "sextile"
    SQUARE = "square"
    TRINE = "trine"
    OPPOSITION = "opposition"


@dataclass(frozen=True)
class AspectRecord:
    body_a: CelestialBody
    body_b: CelestialBody
    aspect_type: AspectType
    orb: float


@dataclass(frozen=True)
class LayoutPoint:
    body: CelestialBody
    longitude: float
    owner: Owner = "A"

    def __post_init__(self) -> None:
        object.__setattr__(self, "longitude", normalize_longitude(self.longitude))


@dataclass(frozen=True)
class LayoutEntry:
    point: LayoutPoint
    track: int
    isolated: bool
