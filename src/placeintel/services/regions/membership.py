"""Circular region (geofence) membership queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import AbstractSet, Iterable, Optional, Sequence

from ...models.domain import Coordinate, Region
from ..geospatial import haversine_m, is_inside_circle

logger = logging.getLogger(__name__)


class RegionSortOption(str, Enum):
    NAME = "NAME"
    DISTANCE = "DISTANCE"
    MOST_VISITED = "MOST_VISITED"
    LAST_ENTERED = "LAST_ENTERED"


@dataclass(frozen=True, slots=True)
class RegionTransitions:
    """Regions entered and exited between two consecutive location fixes."""

    entered: tuple[Region, ...]
    exited: tuple[Region, ...]
    current_ids: frozenset[str]


def distance_to_region(region: Region, coordinate: Coordinate) -> float:
    """Distance in meters from the coordinate to the region centre."""

    return haversine_m(coordinate.latitude, coordinate.longitude, region.latitude, region.longitude)


def region_contains(region: Region, coordinate: Coordinate) -> bool:
    return is_inside_circle(
        coordinate.latitude,
        coordinate.longitude,
        region.latitude,
        region.longitude,
        region.radius_meters,
    )


def regions_containing(coordinate: Coordinate, regions: Iterable[Region]) -> list[Region]:
    """Return the regions containing the coordinate, nearest centre first."""

    matches = [
        (distance, region)
        for region in regions
        if (distance := distance_to_region(region, coordinate)) <= region.radius_meters
    ]
    matches.sort(key=lambda item: item[0])
    return [region for _, region in matches]


def detect_transitions(
    coordinate: Coordinate,
    regions: Sequence[Region],
    current_region_ids: AbstractSet[str],
) -> RegionTransitions:
    """Compare a new location fix against the regions the user was already in.

    ``current_region_ids`` is the ``current_ids`` of the previous call (empty
    on the first fix). Exited regions that are no longer in ``regions`` are
    dropped silently.
    """

    containing = regions_containing(coordinate, regions)
    now_ids = frozenset(region.id for region in containing)

    entered = tuple(region for region in containing if region.id not in current_region_ids)
    exited = tuple(
        region for region in regions if region.id in current_region_ids and region.id not in now_ids
    )

    for region in entered:
        logger.info("Entered region %s (%s)", region.id, region.name)
    for region in exited:
        logger.info("Exited region %s (%s)", region.id, region.name)

    return RegionTransitions(entered=entered, exited=exited, current_ids=now_ids)


def filter_regions(regions: Iterable[Region], query: str) -> list[Region]:
    """Case-insensitive search on region name and description."""

    term = query.strip().lower()
    if not term:
        return list(regions)
    return [
        region
        for region in regions
        if term in region.name.lower() or (region.description is not None and term in region.description.lower())
    ]


def sort_regions(
    regions: Iterable[Region],
    option: RegionSortOption,
    current_location: Optional[Coordinate] = None,
) -> list[Region]:
    items = list(regions)
    match option:
        case RegionSortOption.NAME:
            return sorted(items, key=lambda region: region.name.lower())
        case RegionSortOption.DISTANCE:
            if current_location is None:
                return sorted(items, key=lambda region: region.name.lower())
            return sorted(items, key=lambda region: distance_to_region(region, current_location))
        case RegionSortOption.MOST_VISITED:
            return sorted(items, key=lambda region: region.enter_count, reverse=True)
        case RegionSortOption.LAST_ENTERED:
            # Regions never entered go last.
            never = datetime.min.replace(tzinfo=timezone.utc)
            return sorted(items, key=lambda region: region.last_enter_time or never, reverse=True)
        case _:
            raise ValueError(f"Unknown region sort option '{option}'.")
