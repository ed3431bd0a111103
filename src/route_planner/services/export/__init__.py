"""Export services."""

from .geojson import (
    export_route_to_geojson,
    route_bounds,
    route_to_linestring,
)

__all__ = [
    "export_route_to_geojson",
    "route_bounds",
    "route_to_linestring",
]
