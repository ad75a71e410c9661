"""Per-day timeline models built from trips."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import ClassVar, List, Union

from .domain import PlaceVisit, RouteSegment


class TimelineItemKind(str, Enum):
    DAY_START = "DAY_START"
    VISIT = "VISIT"
    ROUTE = "ROUTE"
    DAY_END = "DAY_END"


@dataclass(frozen=True, slots=True)
class DayStartItem:
    kind: ClassVar[TimelineItemKind] = TimelineItemKind.DAY_START

    id: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class VisitItem:
    kind: ClassVar[TimelineItemKind] = TimelineItemKind.VISIT

    id: str
    timestamp: datetime
    place_visit: PlaceVisit


@dataclass(frozen=True, slots=True)
class RouteItem:
    kind: ClassVar[TimelineItemKind] = TimelineItemKind.ROUTE

    id: str
    timestamp: datetime
    route_segment: RouteSegment


@dataclass(frozen=True, slots=True)
class DayEndItem:
    kind: ClassVar[TimelineItemKind] = TimelineItemKind.DAY_END

    id: str
    timestamp: datetime


TimelineItem = Union[DayStartItem, VisitItem, RouteItem, DayEndItem]


@dataclass(slots=True)
class TripDay:
    """One calendar day of a trip with its ordered timeline items."""

    id: str
    trip_id: str
    date: date
    items: List[TimelineItem] = field(default_factory=list)

    @property
    def visits(self) -> list[PlaceVisit]:
        return [item.place_visit for item in self.items if isinstance(item, VisitItem)]

    @property
    def routes(self) -> list[RouteSegment]:
        return [item.route_segment for item in self.items if isinstance(item, RouteItem)]
