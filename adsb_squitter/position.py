"""WGS84 aircraft positions and distances between them.

A Position is what a CPR decoder produces: longitude and latitude in decimal
degrees, barometric or GNSS altitude in feet, and an advisory `reasonable`
flag that plausibility checks may clear. Any coordinate may be missing.

Two distances are offered:
- haversine():          great-circle surface distance on a spherical Earth
- wgs84_distance_3d():  straight-line distance between ECEF points on the
                        WGS84 ellipsoid, altitude included

Both return None (never NaN) when a coordinate they need is missing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import MissingCoordinateError

logger = logging.getLogger(__name__)

# Mean Earth radius for the spherical model
EARTH_RADIUS_M = 6_371_000.0

# WGS84 ellipsoid
WGS84_A = 6378137.0
WGS84_B = 6356752.314245
WGS84_F = (WGS84_A - WGS84_B) / WGS84_A
WGS84_E2 = WGS84_F * (2 - WGS84_F)

FEET_TO_METERS = 0.3048


def feet_to_meters(feet: float) -> float:
    return feet * FEET_TO_METERS


def llh_to_ecef(lat: float, lon: float, height_m: float) -> tuple[float, float, float]:
    """Convert WGS84 latitude/longitude (degrees) and height (m) to ECEF metres."""
    lat_r = math.radians(lat)
    lon_r = math.radians(lon)
    sin_lat = math.sin(lat_r)
    cos_lat = math.cos(lat_r)

    # Prime vertical radius of curvature
    v = WGS84_A / math.sqrt(1 - WGS84_E2 * sin_lat * sin_lat)

    return (
        (v + height_m) * cos_lat * math.cos(lon_r),
        (v + height_m) * cos_lat * math.sin(lon_r),
        (v * (1 - WGS84_E2) + height_m) * sin_lat,
    )


@dataclass(unsafe_hash=True)
class Position:
    """Mutable WGS84 position. None marks a coordinate that isn't known."""

    longitude: float | None = None  # degrees, [-180, 180]
    latitude: float | None = None  # degrees, [-90, 90]
    altitude: float | None = None  # feet
    reasonable: bool = True

    @property
    def has_position(self) -> bool:
        return self.longitude is not None and self.latitude is not None

    @property
    def is_complete(self) -> bool:
        return self.has_position and self.altitude is not None

    def _lat_lon(self) -> tuple[float, float]:
        if self.latitude is None:
            raise MissingCoordinateError("latitude")
        if self.longitude is None:
            raise MissingCoordinateError("longitude")
        return self.latitude, self.longitude

    def _to_ecef(self) -> tuple[float, float, float]:
        """ECEF (x, y, z) in metres.

        Raises:
            MissingCoordinateError: latitude, longitude or altitude is None.
        """
        lat, lon = self._lat_lon()
        if self.altitude is None:
            raise MissingCoordinateError("altitude")
        return llh_to_ecef(lat, lon, feet_to_meters(self.altitude))

    def haversine(self, other: Position) -> float | None:
        """Great-circle distance to `other` in metres, ignoring altitude.

        Returns None if either position lacks latitude or longitude.
        """
        try:
            lat0, lon0 = self._lat_lon()
            lat1, lon1 = other._lat_lon()
        except MissingCoordinateError as e:
            logger.debug("No haversine distance: %s", e)
            return None

        lat0r = math.radians(lat0)
        lat1r = math.radians(lat1)
        dlat = lat1r - lat0r
        dlon = math.radians(lon1 - lon0)
        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat0r) * math.cos(lat1r) * math.sin(dlon / 2) ** 2
        )
        # Rounding can push a just above 1 for antipodal points
        return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(a, 1.0)))

    def wgs84_distance_3d(self, other: Position) -> float | None:
        """Straight-line distance to `other` in metres on the WGS84 ellipsoid.

        Returns None if either position lacks latitude, longitude or altitude.
        """
        try:
            x0, y0, z0 = self._to_ecef()
            x1, y1, z1 = other._to_ecef()
        except MissingCoordinateError as e:
            logger.debug("No 3D distance: %s", e)
            return None
        return math.sqrt((x1 - x0) ** 2 + (y1 - y0) ** 2 + (z1 - z0) ** 2)
