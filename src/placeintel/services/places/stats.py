"""Place visit analytics helpers."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional, Sequence

from ...models.domain import PlaceCategory, PlaceVisit


@dataclass(slots=True)
class PlaceVisitCount:
    place_key: str
    place_id: Optional[str]
    place_name: str
    visit_count: int
    total_duration: timedelta
    category: PlaceCategory
    city: Optional[str]
    country_code: Optional[str]


@dataclass(slots=True)
class VisitRecord:
    visit_id: str
    place_name: str
    duration: timedelta
    category: PlaceCategory


@dataclass(slots=True)
class PlaceStatistics:
    total_places: int
    total_visits: int
    most_visited_places: List[PlaceVisitCount] = field(default_factory=list)
    visits_by_category: Dict[PlaceCategory, int] = field(default_factory=dict)
    average_visit_duration: timedelta = timedelta(0)
    longest_visit: Optional[VisitRecord] = None
    shortest_visit: Optional[VisitRecord] = None


def _place_key(visit: PlaceVisit) -> str:
    return (
        visit.frequent_place_id
        or visit.user_label
        or visit.poi_name
        or f"{visit.center_latitude},{visit.center_longitude}"
    )


def _group_by_place(visits: Sequence[PlaceVisit]) -> Dict[str, List[PlaceVisit]]:
    groups: Dict[str, List[PlaceVisit]] = defaultdict(list)
    for visit in visits:
        groups[_place_key(visit)].append(visit)
    return groups


def _summarize_group(key: str, visits: Sequence[PlaceVisit]) -> PlaceVisitCount:
    representative = visits[0]
    return PlaceVisitCount(
        place_key=key,
        place_id=representative.frequent_place_id,
        place_name=representative.display_name,
        visit_count=len(visits),
        total_duration=sum((visit.duration for visit in visits), timedelta(0)),
        category=representative.category,
        city=representative.city,
        country_code=representative.country_code,
    )


def _record(visit: PlaceVisit) -> VisitRecord:
    return VisitRecord(
        visit_id=visit.id,
        place_name=visit.display_name,
        duration=visit.duration,
        category=visit.category,
    )


def compute_place_statistics(visits: Sequence[PlaceVisit], top_n: int = 10) -> PlaceStatistics:
    """Aggregate visit counts, durations and categories across distinct places.

    Visits are grouped by frequent place id, then user label, then POI name and
    finally by their raw coordinates.
    """

    if top_n < 0:
        raise ValueError("top_n must be >= 0")
    if not visits:
        return PlaceStatistics(total_places=0, total_visits=0)

    groups = _group_by_place(visits)
    summaries = [_summarize_group(key, items) for key, items in groups.items()]
    summaries.sort(key=lambda item: item.visit_count, reverse=True)

    category_counts: Counter[PlaceCategory] = Counter(visit.category for visit in visits)
    total_duration = sum((visit.duration for visit in visits), timedelta(0))

    return PlaceStatistics(
        total_places=len(groups),
        total_visits=len(visits),
        most_visited_places=summaries[:top_n],
        visits_by_category=dict(category_counts),
        average_visit_duration=total_duration / len(visits),
        longest_visit=_record(max(visits, key=lambda visit: visit.duration)),
        shortest_visit=_record(min(visits, key=lambda visit: visit.duration)),
    )


def category_distribution(visits: Sequence[PlaceVisit]) -> Dict[PlaceCategory, float]:
    """Return the share of visits per category as percentages."""

    if not visits:
        return {}
    counts: Counter[PlaceCategory] = Counter(visit.category for visit in visits)
    total = len(visits)
    return {category: (count / total) * 100.0 for category, count in counts.items()}


def time_by_category(visits: Sequence[PlaceVisit]) -> Dict[PlaceCategory, timedelta]:
    totals: Dict[PlaceCategory, timedelta] = {}
    for visit in visits:
        totals[visit.category] = totals.get(visit.category, timedelta(0)) + visit.duration
    return totals


def top_places_by_duration(visits: Sequence[PlaceVisit], limit: int = 5) -> List[PlaceVisitCount]:
    if limit < 0:
        raise ValueError("limit must be >= 0")
    summaries = [_summarize_group(key, items) for key, items in _group_by_place(visits).items()]
    summaries.sort(key=lambda item: item.total_duration, reverse=True)
    return summaries[:limit]
