"""Domain models for waypoint records."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A named geographic point selected by the user.

    ``address``, ``road_address``, ``phone`` and ``category`` are carried
    through untouched for display purposes.
    """

    id: str
    name: str
    lat: float
    lng: float
    address: Optional[str] = None
    road_address: Optional[str] = None
    phone: Optional[str] = None
    category: Optional[str] = None
