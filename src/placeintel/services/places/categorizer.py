"""Heuristic categorizer based on POI names, visit patterns and recency."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ...config import settings
from ...models.domain import CategoryConfidence, PlaceCategory, PlaceSignificance, PlaceVisit

# Checked in order; the first matching keyword wins.
POI_KEYWORDS: tuple[tuple[PlaceCategory, tuple[str, ...]], ...] = (
    (
        PlaceCategory.FOOD,
        ("restaurant", "cafe", "coffee", "diner", "pizzeria", "burger", "sushi", "bakery", "bar", "pub", "bistro"),
    ),
    (PlaceCategory.SHOPPING, ("mall", "shop", "store", "market", "boutique", "supermarket", "grocery")),
    (PlaceCategory.FITNESS, ("gym", "fitness", "yoga", "sports", "pool", "stadium", "arena")),
    (
        PlaceCategory.ENTERTAINMENT,
        ("cinema", "theater", "theatre", "museum", "gallery", "concert", "club", "arcade"),
    ),
    (PlaceCategory.TRAVEL, ("airport", "station", "terminal", "hotel", "motel", "hostel", "resort")),
    (PlaceCategory.HEALTHCARE, ("hospital", "clinic", "doctor", "dentist", "pharmacy", "medical")),
    (PlaceCategory.EDUCATION, ("school", "university", "college", "library", "academy")),
    (PlaceCategory.RELIGIOUS, ("church", "mosque", "temple", "synagogue", "chapel")),
    (PlaceCategory.OUTDOOR, ("park", "garden", "beach", "trail", "nature", "forest")),
    (PlaceCategory.SERVICE, ("bank", "atm", "post office", "salon", "barber", "laundry", "gas station")),
)

WORK_HOURS = range(9, 18)
EVENING_START_HOUR = 18
PATTERN_SHARE = 0.6


@dataclass(frozen=True, slots=True)
class TimeOfDayPattern:
    is_weekday_daytime: bool
    is_evening_or_weekend: bool


def categorize_poi_name(poi_name: str) -> Optional[PlaceCategory]:
    """Return the category implied by keywords in a POI name, if any."""

    normalized = poi_name.lower()
    for category, keywords in POI_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return category
    return None


class HeuristicCategorizer:
    """Rule-based implementation of the ``PlaceCategorizer`` contract.

    Hosts that have no categorization service of their own can inject this
    into ``PlaceClusterer``.
    """

    def __init__(
        self,
        *,
        timezone_name: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        zone_name = timezone_name or settings.categorizer_timezone
        try:
            self.tz = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{zone_name}'.") from exc
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def categorize(
        self,
        visit: PlaceVisit,
        sibling_visits: Sequence[PlaceVisit] = (),
    ) -> tuple[PlaceCategory, CategoryConfidence]:
        if visit.poi_name:
            category = categorize_poi_name(visit.poi_name)
            if category is not None:
                return category, CategoryConfidence.HIGH

        if sibling_visits:
            by_pattern = self._categorize_by_pattern(visit, sibling_visits)
            if by_pattern is not None:
                return by_pattern

        return PlaceCategory.OTHER, CategoryConfidence.LOW

    def determine_significance(
        self,
        visit_count: int,
        total_duration: timedelta,
        last_visit_time: datetime,
    ) -> PlaceSignificance:
        days_since_last_visit = (self.clock() - last_visit_time).days

        if visit_count >= 20 and days_since_last_visit <= 7:
            return PlaceSignificance.PRIMARY
        if visit_count >= 10 and days_since_last_visit <= 30:
            return PlaceSignificance.FREQUENT
        if visit_count >= 3 and days_since_last_visit <= 90:
            return PlaceSignificance.OCCASIONAL
        return PlaceSignificance.RARE

    def _categorize_by_pattern(
        self,
        visit: PlaceVisit,
        sibling_visits: Sequence[PlaceVisit],
    ) -> Optional[tuple[PlaceCategory, CategoryConfidence]]:
        history = [*sibling_visits, visit]
        total_visits = len(history)
        total_seconds = sum(int(item.duration.total_seconds()) for item in history)
        average_duration = timedelta(seconds=total_seconds // total_visits)
        pattern = self.analyze_time_of_day(history)

        if total_visits >= 10 and average_duration > timedelta(hours=4):
            return PlaceCategory.HOME, CategoryConfidence.MEDIUM

        if pattern.is_weekday_daytime and total_visits >= 5 and average_duration > timedelta(hours=2):
            return PlaceCategory.WORK, CategoryConfidence.MEDIUM

        if pattern.is_evening_or_weekend and total_visits >= 3:
            if average_duration > timedelta(hours=2):
                return PlaceCategory.SOCIAL, CategoryConfidence.LOW
            return PlaceCategory.ENTERTAINMENT, CategoryConfidence.LOW

        return None

    def analyze_time_of_day(self, visits: Sequence[PlaceVisit]) -> TimeOfDayPattern:
        weekday_daytime = 0
        evening = 0
        weekend = 0

        for visit in visits:
            local_start = visit.start_time.astimezone(self.tz)
            if local_start.weekday() >= 5:
                weekend += 1
            elif local_start.hour in WORK_HOURS:
                weekday_daytime += 1
            elif local_start.hour >= EVENING_START_HOUR:
                evening += 1

        total = len(visits)
        if not total:
            return TimeOfDayPattern(is_weekday_daytime=False, is_evening_or_weekend=False)
        return TimeOfDayPattern(
            is_weekday_daytime=weekday_daytime / total > PATTERN_SHARE,
            is_evening_or_weekend=(evening + weekend) / total > PATTERN_SHARE,
        )
