"""Frequent place services."""

from .base import PlaceCategorizer
from .categorizer import HeuristicCategorizer, categorize_poi_name
from .clustering import PlaceClusterer
from .ranking import filter_by_significance, rank_frequent_places, sort_by_significance
from .stats import (
    category_distribution,
    compute_place_statistics,
    time_by_category,
    top_places_by_duration,
)

__all__ = [
    "PlaceCategorizer",
    "HeuristicCategorizer",
    "PlaceClusterer",
    "categorize_poi_name",
    "category_distribution",
    "compute_place_statistics",
    "filter_by_significance",
    "rank_frequent_places",
    "sort_by_significance",
    "time_by_category",
    "top_places_by_duration",
]
