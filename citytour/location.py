"""Geographic locations and distances on the Earth's surface."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0
SEMI_MAJOR = 6378.137
FLATTENING = 1.0 / 298.257223563
SEMI_MINOR = (1.0 - FLATTENING) * SEMI_MAJOR

_PI = 3.14159265358979
_MAX_ITERATIONS = 100
_CONVERGENCE = 1e-12


def _radians(degrees: float) -> float:
    return degrees / 180.0 * _PI


@dataclass(frozen=True)
class Location:
    """A point given by latitude and longitude in degrees."""

    lat: float
    lon: float

    def is_valid(self) -> bool:
        """Return True if the latitude is finite and within [-90, 90] and the longitude is finite."""
        return (
            math.isfinite(self.lat)
            and -90.0 <= self.lat <= 90.0
            and math.isfinite(self.lon)
        )

    def distance_to(self, other: Location | None) -> float:
        """Return the distance in km to another location (NaN if either is invalid)."""
        return distance(self, other)


def _both_valid(l1: Location | None, l2: Location | None) -> bool:
    return l1 is not None and l2 is not None and l1.is_valid() and l2.is_valid()


def distance(l1: Location | None, l2: Location | None) -> float:
    """Return the distance in km between two locations on an oblate spheroid.

    Falls back to a spherical model when the spheroid iteration fails to
    converge. NaN indicates an invalid location.
    """
    return distance_oblate(l1, l2)


def distance_spherical(l1: Location | None, l2: Location | None) -> float:
    """Return the great-circle distance in km on a sphere of radius 6371 km.

    NaN indicates an invalid location.
    """
    if not _both_valid(l1, l2):
        return math.nan
    delta_lon = _radians(l1.lon - l2.lon)
    colat1 = _radians(90.0 - l1.lat)
    colat2 = _radians(90.0 - l2.lat)
    cosine = math.cos(colat1) * math.cos(colat2) + math.sin(colat1) * math.sin(
        colat2
    ) * math.cos(delta_lon)
    angle = math.acos(max(-1.0, min(1.0, cosine)))
    return EARTH_RADIUS_KM * angle


def distance_oblate(l1: Location | None, l2: Location | None) -> float:
    """Return the Vincenty distance in km on the WGS-84 spheroid.

    Falls back to the spherical model if the iteration does not converge.
    NaN indicates an invalid location.
    """
    if not _both_valid(l1, l2):
        return math.nan
    if l1.lat == l2.lat and (l1.lat in (-90.0, 90.0) or l1.lon == l2.lon):
        return 0.0

    big_l = _radians(l2.lon - l1.lon)

    tan_u1 = (1 - FLATTENING) * math.tan(_radians(l1.lat))
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1

    tan_u2 = (1 - FLATTENING) * math.tan(_radians(l2.lat))
    cos_u2 = 1 / math.sqrt(1 + tan_u2 * tan_u2)
    sin_u2 = tan_u2 * cos_u2

    lam = big_l
    for _ in range(_MAX_ITERATIONS):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)
        cross = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam
        sin_sig = math.sqrt((cos_u2 * sin_lam) ** 2 + cross * cross)
        if sin_sig == 0:
            return 0.0  # co-incident points

        cos_sig = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sig, cos_sig)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sig
        cos_sq_alpha = 1 - sin_alpha**2
        if cos_sq_alpha == 0:
            cos_2sigmam = 0.0  # equatorial line
        else:
            cos_2sigmam = cos_sig - 2 * sin_u1 * sin_u2 / cos_sq_alpha
            if math.isnan(cos_2sigmam):
                cos_2sigmam = 0.0

        c = FLATTENING / 16 * cos_sq_alpha * (4 + FLATTENING * (4 - 3 * cos_sq_alpha))
        last_lam = lam
        lam = big_l + (1 - c) * FLATTENING * sin_alpha * (
            sigma
            + c * sin_sig * (cos_2sigmam + c * cos_sig * (-1 + 2 * cos_2sigmam**2))
        )
        if not abs(lam - last_lam) > _CONVERGENCE:
            break
    else:
        return distance_spherical(l1, l2)

    u_sq = cos_sq_alpha * (SEMI_MAJOR**2 - SEMI_MINOR**2) / SEMI_MINOR**2
    a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sig = (
        b
        * sin_sig
        * (
            cos_2sigmam
            + b
            / 4
            * (
                cos_sig * (-1 + 2 * cos_2sigmam**2)
                - b / 6 * cos_2sigmam * (-3 + 4 * sin_sig**2) * (-3 + 4 * cos_2sigmam**2)
            )
        )
    )
    return SEMI_MINOR * a * (sigma - delta_sig)