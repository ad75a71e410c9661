"""Domain and timeline models."""

from .domain import (
    CategoryConfidence,
    Coordinate,
    FrequentPlace,
    PlaceCategory,
    PlaceSignificance,
    PlaceVisit,
    Region,
    RouteSegment,
    TransportType,
    Trip,
)
from .timeline import (
    DayEndItem,
    DayStartItem,
    RouteItem,
    TimelineItem,
    TimelineItemKind,
    TripDay,
    VisitItem,
)

__all__ = [
    "CategoryConfidence",
    "Coordinate",
    "DayEndItem",
    "DayStartItem",
    "FrequentPlace",
    "PlaceCategory",
    "PlaceSignificance",
    "PlaceVisit",
    "Region",
    "RouteItem",
    "RouteSegment",
    "TimelineItem",
    "TimelineItemKind",
    "TransportType",
    "Trip",
    "TripDay",
    "VisitItem",
]
