"""Provider instances shared by the routes.

Tests replace these through ``app.dependency_overrides``.
"""

from .config import get_settings
from .services import ephem


def get_ephemeris() -> ephem.EphemerisProvider:
    settings = get_settings()
    ephem.init_paths(settings.ephemeris_dir)
    return ephem.SwissEphemeris()


def get_sidereal_clock() -> ephem.SiderealClock:
    return ephem.SwissSiderealClock()
