"""Ascendant (rising degree) from sidereal time and observer location."""

from __future__ import annotations

import logging
import math

from .constants import normalize_longitude
from .ephem import Instant, SiderealClock, to_utc
from .errors import AstroError, DomainError, PolarLatitudeError, ProviderError

logger = logging.getLogger(__name__)

OBLIQUITY_DEG = 23.4392911


def _check_location(lat: float, lon: float) -> None:
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise DomainError(f"Coordinates must be finite (lat={lat}, lon={lon})")
    if abs(lat) > 90.0:
        raise DomainError(f"Latitude out of range: {lat}")
    if abs(lat) == 90.0:
        logger.info("polar_latitude_rejected", extra={"lat": lat})
        raise PolarLatitudeError(lat)


def ascendant_from_sidereal(gmst_hours: float, lat: float, lon: float) -> float:
    """Rising ecliptic longitude for a Greenwich sidereal time in hours.

    ``lon`` is east-positive in degrees. Polar latitudes have no defined
    horizon intersection with ``tan(lat)`` and raise ``PolarLatitudeError``.
    """

    _check_location(lat, lon)
    if not math.isfinite(gmst_hours):
        raise DomainError(f"Sidereal time must be finite, got {gmst_hours!r}")

    lst_deg = (gmst_hours + lon / 15.0) * 15.0
    ramc = math.radians(lst_deg)
    eps = math.radians(OBLIQUITY_DEG)
    lat_rad = math.radians(lat)

    num = math.cos(ramc)
    den = -math.sin(ramc) * math.cos(eps) - math.tan(lat_rad) * math.sin(eps)
    return normalize_longitude(math.degrees(math.atan2(num, den)))


def ascendant(instant: Instant, lat: float, lon: float, clock: SiderealClock) -> float:
    _check_location(lat, lon)
    moment = to_utc(instant)
    try:
        gmst = clock.sidereal_time(moment)
    except AstroError:
        raise
    except Exception as exc:
        logger.warning("sidereal_provider_failed", extra={"error": str(exc)})
        raise ProviderError(f"Sidereal time provider failed: {exc}") from exc
    if gmst is None or not math.isfinite(gmst):
        raise ProviderError(f"Sidereal time provider returned {gmst!r}")
    return ascendant_from_sidereal(gmst, lat, lon)
