"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Waypoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) * math.sin(d_phi / 2)
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lambda / 2) * math.sin(d_lambda / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Waypoint, b: Waypoint) -> float:
    """Great-circle distance between two waypoints in kilometres."""

    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def is_valid_coordinate(lat: object, lng: object) -> bool:
    """Return True if (lat, lng) is a finite, in-range geographic coordinate."""

    for value in (lat, lng):
        # bool is an int subclass; a True latitude is a caller bug, not 1 degree
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0
