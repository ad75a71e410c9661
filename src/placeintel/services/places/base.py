"""Contract for the categorization collaborator consumed by the clusterer."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, Sequence, runtime_checkable

from ...models.domain import CategoryConfidence, PlaceCategory, PlaceSignificance, PlaceVisit


@runtime_checkable
class PlaceCategorizer(Protocol):
    """Category votes and significance tiers supplied by the host application.

    Implementations must be pure and deterministic from the clusterer's point
    of view. ``categorize`` is called once per cluster member with the other
    members as ``sibling_visits``; it never sees the finished cluster.
    """

    def categorize(
        self,
        visit: PlaceVisit,
        sibling_visits: Sequence[PlaceVisit],
    ) -> tuple[PlaceCategory, CategoryConfidence]:
        ...

    def determine_significance(
        self,
        visit_count: int,
        total_duration: timedelta,
        last_visit_time: datetime,
    ) -> PlaceSignificance:
        ...
