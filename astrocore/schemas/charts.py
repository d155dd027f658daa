from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Owner = Literal["A", "B"]


class NatalRequest(BaseModel):
    instant: datetime  # ISO-8601; naive values are read as UTC
    lat: float
    lon: float
    name: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "instant": "1990-08-18T09:02:00Z",
                "lat": 17.385,
                "lon": 78.4867,
                "name": "Sample User",
            }
        }
    )


class SynastryRequest(BaseModel):
    person_a: NatalRequest
    person_b: NatalRequest


class BodyOut(BaseModel):
    name: str
    symbol: str
    lon: float
    sign: str
    sign_symbol: str
    relative_degree: float
    formatted: str
    house: int
    retro: bool
    interpretation: Optional[str] = None


class RisingOut(BaseModel):
    sign: str
    sign_symbol: str
    degree: float


class ElementsOut(BaseModel):
    fire: int
    earth: int
    air: int
    water: int


class BigThreeOut(BaseModel):
    sun: str
    moon: str
    rising: str


class AspectOut(BaseModel):
    p1: str
    p2: str
    type: str
    orb: float


class HouseOut(BaseModel):
    num: int
    sign: str


class MetaOut(BaseModel):
    engine: str = "astrocore"
    engine_version: str
    zodiac: str = "tropical"
    house_system: str = "whole_sign"
    backend: Optional[str] = None


class NatalResponse(BaseModel):
    chart_id: str
    name: Optional[str] = None
    meta: MetaOut
    rising: RisingOut
    houses: List[HouseOut]
    bodies: List[BodyOut]
    elements: ElementsOut
    big_three: BigThreeOut
    aspects: List[AspectOut]
    summary: Optional[str] = None


class SynastryResponse(BaseModel):
    person_a: NatalResponse
    person_b: NatalResponse
    aspects: List[AspectOut]


class LayoutPointIn(BaseModel):
    body: str
    owner: Owner = "A"
    lon: float


class LayoutRequest(BaseModel):
    points: List[LayoutPointIn]
    min_separation: Optional[float] = Field(default=None, gt=0)


class LayoutEntryOut(BaseModel):
    body: str
    owner: Owner
    lon: float
    track: int
    isolated: bool


class LayoutResponse(BaseModel):
    entries: List[LayoutEntryOut]
    max_track: int
