"""Swiss Ephemeris providers and the body position calculator."""

from __future__ import annotations

import logging
import math
import os
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional, Protocol, Union

import swisseph as swe

from .constants import CelestialBody, normalize_longitude
from .errors import AstroError, InvalidBodyError, InvalidInstantError, ProviderError
from .models import AngularPosition

logger = logging.getLogger(__name__)

# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"

SWE_CODES: Dict[CelestialBody, int] = {
    CelestialBody.SUN: swe.SUN,
    CelestialBody.MOON: swe.MOON,
    CelestialBody.MERCURY: swe.MERCURY,
    CelestialBody.VENUS: swe.VENUS,
    CelestialBody.MARS: swe.MARS,
    CelestialBody.JUPITER: swe.JUPITER,
    CelestialBody.SATURN: swe.SATURN,
    CelestialBody.URANUS: swe.URANUS,
    CelestialBody.NEPTUNE: swe.NEPTUNE,
    CelestialBody.PLUTO: swe.PLUTO,
}

# Finite-difference step used to decide retrograde motion.
RETROGRADE_SAMPLE = timedelta(hours=1)

Instant = Union[datetime, int, float]


class EphemerisProvider(Protocol):
    def longitude(self, body: CelestialBody, instant: datetime) -> float:
        """Geocentric ecliptic longitude in degrees at a UTC instant."""


class SiderealClock(Protocol):
    def sidereal_time(self, instant: datetime) -> float:
        """Greenwich mean sidereal time in hours at a UTC instant."""


def _backend_flag() -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return swe.FLG_MOSEPH if backend == "moseph" else swe.FLG_SWIEPH


def backend_name() -> str:
    return "moseph" if _backend_flag() == swe.FLG_MOSEPH else "swieph"


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)


def to_utc(instant: Instant) -> datetime:
    """Coerce an instant to an aware UTC datetime.

    Naive datetimes are taken to be UTC already. Numbers are POSIX
    timestamps and must be finite.
    """

    if isinstance(instant, bool):
        raise InvalidInstantError(f"Invalid instant: {instant!r}")
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)
    if isinstance(instant, (int, float)):
        if not math.isfinite(instant):
            raise InvalidInstantError(f"Instant must be finite, got {instant!r}")
        try:
            return datetime.fromtimestamp(instant, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidInstantError(f"Instant out of range: {instant!r}") from exc
    raise InvalidInstantError(f"Invalid instant: {instant!r}")


def to_jd_utc(instant: Instant) -> float:
    """Convert a UTC instant to a Julian day."""

    dt_utc = to_utc(instant)
    hour = (
        dt_utc.hour
        + dt_utc.minute / 60
        + dt_utc.second / 3600
        + dt_utc.microsecond / 3_600_000_000
    )
    return swe.julday(dt_utc.year, dt_utc.month, dt_utc.day, hour, swe.GREG_CAL)


class SwissEphemeris:
    """EphemerisProvider backed by ``swe.calc_ut``."""

    def __init__(self, flag: Optional[int] = None) -> None:
        self.flag = _backend_flag() if flag is None else flag

    def longitude(self, body: CelestialBody, instant: datetime) -> float:
        try:
            values, _ = swe.calc_ut(to_jd_utc(instant), SWE_CODES[body], self.flag)
        except swe.Error as exc:
            logger.warning("ephemeris_calc_failed", extra={"body": body.value, "error": str(exc)})
            raise ProviderError(f"Swiss Ephemeris failed for {body.value}: {exc}") from exc
        return values[0]


class SwissSiderealClock:
    """SiderealClock backed by ``swe.sidtime``."""

    def sidereal_time(self, instant: datetime) -> float:
        try:
            return swe.sidtime(to_jd_utc(instant))
        except swe.Error as exc:
            logger.warning("sidereal_time_failed", extra={"error": str(exc)})
            raise ProviderError(f"Swiss Ephemeris sidereal time failed: {exc}") from exc


class FixedEphemeris:
    """Deterministic provider: each body moves linearly from an epoch.

    ``rates`` are in degrees per hour; a negative rate makes the body
    retrograde. Bodies missing from ``longitudes`` raise ``ProviderError``.
    """

    def __init__(
        self,
        longitudes: Mapping[CelestialBody, float],
        rates: Optional[Mapping[CelestialBody, float]] = None,
        epoch: Optional[datetime] = None,
    ) -> None:
        self.longitudes = dict(longitudes)
        self.rates = dict(rates or {})
        self.epoch = to_utc(epoch or datetime(2000, 1, 1, 12, tzinfo=timezone.utc))

    def longitude(self, body: CelestialBody, instant: datetime) -> float:
        if body not in self.longitudes:
            raise ProviderError(f"No fixed longitude for {body.value}")
        hours = (to_utc(instant) - self.epoch).total_seconds() / 3600.0
        return self.longitudes[body] + self.rates.get(body, 0.0) * hours


class FixedSiderealClock:
    def __init__(self, hours: float) -> None:
        self.hours = hours

    def sidereal_time(self, instant: datetime) -> float:
        return self.hours


def is_retrograde(earlier: float, later: float) -> bool:
    """Backward motion between two samples, ignoring the 0/360 seam."""

    return later < earlier and (earlier - later) < 180.0


def _sample(provider: EphemerisProvider, body: CelestialBody, instant: datetime) -> float:
    try:
        raw = provider.longitude(body, instant)
    except AstroError:
        raise
    except Exception as exc:
        logger.warning("ephemeris_provider_failed", extra={"body": body.value, "error": str(exc)})
        raise ProviderError(f"Ephemeris provider failed for {body.value}: {exc}") from exc
    if raw is None or not math.isfinite(raw):
        raise ProviderError(f"Ephemeris provider returned {raw!r} for {body.value}")
    return normalize_longitude(raw)


def body_position(body: CelestialBody, instant: Instant, provider: EphemerisProvider) -> AngularPosition:
    """Longitude and retrograde flag of one body.

    Retrograde is a one-hour finite difference: the body is retrograde when
    the later sample is smaller and the drop is under 180 degrees. It is
    coarse near stations and for the Moon.
    """

    if not isinstance(body, CelestialBody):
        raise InvalidBodyError(body)
    moment = to_utc(instant)
    now = _sample(provider, body, moment)
    later = _sample(provider, body, moment + RETROGRADE_SAMPLE)
    return AngularPosition(body=body, longitude=now, retrograde=is_retrograde(now, later))


def positions_ecliptic(instant: Instant, provider: EphemerisProvider) -> List[AngularPosition]:
    """Positions of all supported bodies, in enumeration order."""

    moment = to_utc(instant)
    return [body_position(body, moment, provider) for body in CelestialBody]
