from hashlib import sha256
from typing import List, Sequence

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..deps import get_ephemeris, get_sidereal_clock
from ..schemas import (
    AspectOut,
    BigThreeOut,
    BodyOut,
    ElementsOut,
    HouseOut,
    LayoutEntryOut,
    LayoutRequest,
    LayoutResponse,
    MetaOut,
    NatalRequest,
    NatalResponse,
    RisingOut,
    SynastryRequest,
    SynastryResponse,
)
from ..services import aspects as aspects_svc, ephem, layout as layout_svc, synastry as synastry_svc
from ..services.chart import build_natal_chart
from ..services.constants import CelestialBody, ZODIAC_SIGNS, fmt_deg
from ..services.houses import whole_sign_houses
from ..services.models import AspectRecord, LayoutPoint, NatalChart

router = APIRouter(prefix="/v1/charts", tags=["charts"])


def _chart_id(req: NatalRequest) -> str:
    instant = ephem.to_utc(req.instant)
    seed = f"{instant.isoformat()}|{req.lat:.6f}|{req.lon:.6f}|whole_sign"
    return "cht_" + sha256(seed.encode()).hexdigest()[:24]


def _aspects_out(records: Sequence[AspectRecord]) -> List[AspectOut]:
    return [
        AspectOut(p1=r.body_a.value, p2=r.body_b.value, type=r.aspect_type.value, orb=round(r.orb, 2))
        for r in records
    ]


def natal_response(req: NatalRequest, chart: NatalChart, settings: Settings) -> NatalResponse:
    bodies = []
    for p in chart.placements:
        bodies.append(
            BodyOut(
                name=p.body.value,
                symbol=p.body.symbol,
                lon=round(p.longitude, 4),
                sign=p.sign.name,
                sign_symbol=p.sign.symbol,
                relative_degree=round(p.relative_degree, 4),
                formatted=fmt_deg(p.longitude),
                house=p.house,
                retro=p.retrograde,
                interpretation=chart.interpretations.get(p.body),
            )
        )

    houses = [
        HouseOut(num=i + 1, sign=ZODIAC_SIGNS[sidx].name)
        for i, sidx in enumerate(whole_sign_houses(chart.ascendant_longitude))
    ]
    intra = aspects_svc.find_aspects(chart.positions, chart.positions, same_subject=True, limit=settings.aspect_limit)

    return NatalResponse(
        chart_id=_chart_id(req),
        name=req.name,
        meta=MetaOut(engine_version=ephem.ENGINE_VERSION, backend=settings.ephemeris_backend),
        rising=RisingOut(
            sign=chart.rising.sign.name,
            sign_symbol=chart.rising.sign.symbol,
            degree=round(chart.rising.longitude, 4),
        ),
        houses=houses,
        bodies=bodies,
        elements=ElementsOut(**chart.elements.as_dict()),
        big_three=BigThreeOut(sun=chart.big_three.sun, moon=chart.big_three.moon, rising=chart.big_three.rising),
        aspects=_aspects_out(intra),
        summary=chart.summary,
    )


@router.post("/natal", response_model=NatalResponse)
def natal_chart(
    req: NatalRequest,
    ephemeris: ephem.EphemerisProvider = Depends(get_ephemeris),
    clock: ephem.SiderealClock = Depends(get_sidereal_clock),
    settings: Settings = Depends(get_settings),
):
    chart = build_natal_chart(req.instant, req.lat, req.lon, ephemeris, clock)
    return natal_response(req, chart, settings)


@router.post("/synastry", response_model=SynastryResponse)
def synastry_chart(
    req: SynastryRequest,
    ephemeris: ephem.EphemerisProvider = Depends(get_ephemeris),
    clock: ephem.SiderealClock = Depends(get_sidereal_clock),
    settings: Settings = Depends(get_settings),
):
    a = build_natal_chart(req.person_a.instant, req.person_a.lat, req.person_a.lon, ephemeris, clock)
    b = build_natal_chart(req.person_b.instant, req.person_b.lat, req.person_b.lon, ephemeris, clock)
    cross = synastry_svc.synastry(a, b, limit=settings.aspect_limit)
    return SynastryResponse(
        person_a=natal_response(req.person_a, a, settings),
        person_b=natal_response(req.person_b, b, settings),
        aspects=_aspects_out(cross),
    )


@router.post("/layout", response_model=LayoutResponse)
def chart_layout(req: LayoutRequest, settings: Settings = Depends(get_settings)):
    points = [LayoutPoint(body=CelestialBody.parse(p.body), longitude=p.lon, owner=p.owner) for p in req.points]
    min_sep = req.min_separation if req.min_separation is not None else settings.layout_min_separation
    entries = layout_svc.resolve_layout(points, min_separation=min_sep)
    return LayoutResponse(
        entries=[
            LayoutEntryOut(
                body=e.point.body.value,
                owner=e.point.owner,
                lon=e.point.longitude,
                track=e.track,
                isolated=e.isolated,
            )
            for e in entries
        ],
        max_track=layout_svc.max_track(entries),
    )
