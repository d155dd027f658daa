"""Error taxonomy for the chart engine.

Input errors are raised immediately and must reach the caller unchanged.
Provider errors wrap failures of the ephemeris or sidereal-time source and
are never retried here.
"""

from __future__ import annotations


class AstroError(Exception):
    """Base class for every error raised by the engine."""


class InputDomainError(AstroError, ValueError):
    """The caller supplied a value outside the engine's domain."""


class InvalidBodyError(InputDomainError):
    def __init__(self, body: object) -> None:
        super().__init__(f"Unsupported celestial body: {body!r}")
        self.body = body


class DomainError(InputDomainError):
    """A geometric input has no defined result (e.g. polar latitude)."""


class PolarLatitudeError(DomainError):
    def __init__(self, lat: float) -> None:
        super().__init__(f"Polar latitudes are not supported (lat={lat})")
        self.lat = lat


class InvalidInstantError(InputDomainError):
    """The instant is missing, naive-but-unparseable or not finite."""


class ProviderError(AstroError):
    """The ephemeris or sidereal-time provider failed."""


ComputationError = ProviderError


__all__ = [
    "AstroError",
    "ComputationError",
    "DomainError",
    "InputDomainError",
    "InvalidBodyError",
    "InvalidInstantError",
    "PolarLatitudeError",
    "ProviderError",
]
