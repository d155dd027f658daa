import math
from datetime import datetime, timezone

import pytest

from astrocore.services.ascendant import OBLIQUITY_DEG, ascendant, ascendant_from_sidereal
from astrocore.services.ephem import FixedSiderealClock
from astrocore.services.errors import DomainError, PolarLatitudeError, ProviderError

INSTANT = datetime(1990, 8, 18, 9, 2, tzinfo=timezone.utc)


def test_equator_greenwich_zero_sidereal_time_is_90_degrees():
    # RAMC = 0: atan2(cos 0, -sin 0 * cos eps - tan 0 * sin eps) = atan2(1, -0) = 90°
    assert ascendant_from_sidereal(0.0, 0.0, 0.0) == pytest.approx(90.0, abs=1e-9)


def test_six_hours_sidereal_time_at_equator():
    assert ascendant_from_sidereal(6.0, 0.0, 0.0) == pytest.approx(180.0, abs=1e-9)


def test_observer_longitude_shifts_local_sidereal_time():
    # 90° east at GMST 0 is the same sky as Greenwich at GMST 6h.
    assert ascendant_from_sidereal(0.0, 0.0, 90.0) == pytest.approx(ascendant_from_sidereal(6.0, 0.0, 0.0))


def test_matches_formula_at_mid_latitude():
    lat, lon, gmst = 51.5, -0.12, 3.25
    ramc = math.radians((gmst + lon / 15.0) * 15.0)
    eps = math.radians(OBLIQUITY_DEG)
    expected = math.degrees(
        math.atan2(math.cos(ramc), -math.sin(ramc) * math.cos(eps) - math.tan(math.radians(lat)) * math.sin(eps))
    ) % 360.0
    assert ascendant_from_sidereal(gmst, lat, lon) == pytest.approx(expected)


@pytest.mark.parametrize("gmst", [0.0, 5.5, 11.99, 23.99, 48.0, -3.0])
def test_result_in_range(gmst):
    value = ascendant_from_sidereal(gmst, 40.0, -74.0)
    assert 0.0 <= value < 360.0


@pytest.mark.parametrize("lat", [90.0, -90.0])
def test_polar_latitude_fails(lat):
    with pytest.raises(PolarLatitudeError):
        ascendant_from_sidereal(0.0, lat, 0.0)


@pytest.mark.parametrize("lat,lon", [(91.0, 0.0), (-120.0, 0.0), (float("nan"), 0.0), (0.0, float("inf"))])
def test_invalid_coordinates_fail(lat, lon):
    with pytest.raises(DomainError) as excinfo:
        ascendant_from_sidereal(0.0, lat, lon)
    assert not isinstance(excinfo.value, PolarLatitudeError)


def test_ascendant_uses_clock():
    assert ascendant(INSTANT, 0.0, 0.0, FixedSiderealClock(0.0)) == pytest.approx(90.0)


def test_polar_rejected_before_clock_is_asked():
    class Exploding:
        def sidereal_time(self, instant):
            raise AssertionError("clock must not be called")

    with pytest.raises(PolarLatitudeError):
        ascendant(INSTANT, 90.0, 0.0, Exploding())


def test_clock_failure_is_provider_error():
    class Broken:
        def sidereal_time(self, instant):
            raise OSError("no clock")

    with pytest.raises(ProviderError):
        ascendant(INSTANT, 10.0, 0.0, Broken())


def test_clock_non_finite_is_provider_error():
    with pytest.raises(ProviderError):
        ascendant(INSTANT, 10.0, 0.0, FixedSiderealClock(float("nan")))
