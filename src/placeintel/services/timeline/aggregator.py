"""Aggregation of trips into per-day timelines."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Sequence

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...config import settings
from ...models.domain import PlaceVisit, RouteSegment, Trip
from ...models.timeline import (
    DayEndItem,
    DayStartItem,
    RouteItem,
    TimelineItem,
    TripDay,
    VisitItem,
)

logger = logging.getLogger(__name__)


class TripDayAggregator:
    """Split a trip's visits and routes into one ``TripDay`` per calendar day.

    Days are computed in ``timezone_name``. The range runs from the date of
    the trip start to the date of the trip end inclusive, so a trip ending
    exactly at local midnight still gets a day for that midnight. Each day is
    framed by a ``DayStartItem`` at local midnight and a ``DayEndItem`` at the
    following midnight.
    """

    def __init__(self, timezone_name: str | None = None) -> None:
        zone_name = timezone_name or settings.timezone
        try:
            self.tz = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{zone_name}'.") from exc

    def aggregate_trip_days(
        self,
        trip: Trip,
        visits: Sequence[PlaceVisit],
        routes: Sequence[RouteSegment],
    ) -> list[TripDay]:
        logger.info("Aggregating trip %s into daily timelines", trip.id)

        trip_visits = sorted(
            (visit for visit in visits if self._in_trip(trip, visit.start_time)),
            key=lambda visit: visit.start_time,
        )
        trip_routes = sorted(
            (route for route in routes if self._in_trip(trip, route.start_time)),
            key=lambda route: route.start_time,
        )

        if not trip_visits and not trip_routes:
            logger.warning("No visits or routes found for trip %s", trip.id)
            return []

        start_date = self.local_date(trip.start_time)
        end_date = self.local_date(trip.end_time or trip.start_time)
        days = list(self.day_range(start_date, end_date))
        logger.debug(
            "Trip %s spans %d days from %s to %s (%d visits, %d routes)",
            trip.id,
            len(days),
            start_date,
            end_date,
            len(trip_visits),
            len(trip_routes),
        )

        trip_days = [self._build_trip_day(trip.id, day, trip_visits, trip_routes) for day in days]
        logger.info("Built %d trip days for trip %s", len(trip_days), trip.id)
        return trip_days

    def local_date(self, instant: datetime) -> date:
        return instant.astimezone(self.tz).date()

    def start_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    @staticmethod
    def day_range(start: date, end: date):
        current = start
        while current <= end:
            yield current
            current += timedelta(days=1)

    @staticmethod
    def _in_trip(trip: Trip, instant: datetime) -> bool:
        if instant < trip.start_time:
            return False
        return trip.end_time is None or instant <= trip.end_time

    def _build_trip_day(
        self,
        trip_id: str,
        day: date,
        visits: Sequence[PlaceVisit],
        routes: Sequence[RouteSegment],
    ) -> TripDay:
        day_start = self.start_of_day(day)
        day_end = self.start_of_day(day + timedelta(days=1))

        day_visits = [visit for visit in visits if day_start <= visit.start_time < day_end]
        day_routes = [route for route in routes if day_start <= route.start_time < day_end]

        entries: list[TimelineItem] = [
            VisitItem(id=f"timeline_visit_{visit.id}", timestamp=visit.start_time, place_visit=visit)
            for visit in day_visits
        ]
        entries.extend(
            RouteItem(id=f"timeline_route_{route.id}", timestamp=route.start_time, route_segment=route)
            for route in day_routes
        )
        # Stable sort: on equal timestamps visits stay ahead of routes.
        entries.sort(key=lambda item: item.timestamp)

        items: list[TimelineItem] = [
            DayStartItem(id=f"timeline_day_start_{trip_id}_{day.isoformat()}", timestamp=day_start),
            *entries,
            DayEndItem(id=f"timeline_day_end_{trip_id}_{day.isoformat()}", timestamp=day_end),
        ]

        logger.debug("Day %s: %d visits, %d routes", day, len(day_visits), len(day_routes))
        return TripDay(id=f"trip_day_{trip_id}_{day.isoformat()}", trip_id=trip_id, date=day, items=items)
