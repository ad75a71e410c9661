"""Region membership services."""

from .membership import (
    RegionSortOption,
    RegionTransitions,
    detect_transitions,
    distance_to_region,
    filter_regions,
    region_contains,
    regions_containing,
    sort_regions,
)

__all__ = [
    "RegionSortOption",
    "RegionTransitions",
    "detect_transitions",
    "distance_to_region",
    "filter_regions",
    "region_contains",
    "regions_containing",
    "sort_regions",
]
