"""Export services."""

from .geojson import (
    frequent_places_to_geojson,
    regions_to_geojson,
    save_geojson,
    trip_day_to_geojson,
)

__all__ = [
    "frequent_places_to_geojson",
    "regions_to_geojson",
    "trip_day_to_geojson",
    "save_geojson",
]
