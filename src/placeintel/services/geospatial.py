"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np
from shapely.geometry import MultiPoint

from ..models.domain import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def bearing_degrees(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the initial bearing from (lat1, lon1) to (lat2, lon2)."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lambda = math.radians(lon2 - lon1)
    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lambda)
    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360) % 360


def bearing_between(a: Coordinate, b: Coordinate) -> float:
    return bearing_degrees(a.latitude, a.longitude, b.latitude, b.longitude)


def centroid(points: Iterable[Coordinate]) -> Optional[Coordinate]:
    """Average coordinates through 3-D unit vectors.

    Each point is projected onto the unit sphere, the vectors are averaged and
    the mean is converted back to latitude/longitude, so clusters straddling
    the antimeridian do not collapse towards longitude 0. Returns ``None`` for
    an empty input and the point itself for a single point.
    """

    coords = list(points)
    if not coords:
        return None
    if len(coords) == 1:
        return coords[0]

    lat_rad = np.radians([c.latitude for c in coords])
    lon_rad = np.radians([c.longitude for c in coords])
    x = np.mean(np.cos(lat_rad) * np.cos(lon_rad))
    y = np.mean(np.cos(lat_rad) * np.sin(lon_rad))
    z = np.mean(np.sin(lat_rad))

    latitude = math.degrees(math.atan2(z, math.hypot(x, y)))
    longitude = math.degrees(math.atan2(y, x))
    return Coordinate(latitude=float(latitude), longitude=float(longitude))


def bounding_box(points: Iterable[Coordinate]) -> Optional[tuple[Coordinate, Coordinate]]:
    """Return the (southwest, northeast) corners enclosing all points, or None."""

    coords = list(points)
    if not coords:
        return None

    min_lon, min_lat, max_lon, max_lat = MultiPoint([(c.longitude, c.latitude) for c in coords]).bounds
    return (
        Coordinate(latitude=min_lat, longitude=min_lon),
        Coordinate(latitude=max_lat, longitude=max_lon),
    )


def is_inside_circle(
    lat: float,
    lon: float,
    center_lat: float,
    center_lon: float,
    radius_m: float,
) -> bool:
    """Check whether a point is inside or on the boundary of a circle."""

    return haversine_m(lat, lon, center_lat, center_lon) <= radius_m


def within_radius(a: Coordinate, b: Coordinate, radius_meters: float) -> bool:
    return distance_meters(a, b) <= radius_meters
