"""Seed-radius clustering of place visits into frequent places."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import (
    CategoryConfidence,
    FrequentPlace,
    PlaceCategory,
    PlaceVisit,
)
from ..geospatial import centroid, haversine_m
from .base import PlaceCategorizer

logger = logging.getLogger(__name__)

HIGH_CONSENSUS = 0.8
MEDIUM_CONSENSUS = 0.5


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlaceClusterer:
    """Group place visits into frequent places.

    Uses seed-radius clustering: visits are scanned in start-time order and
    every unassigned visit seeds a new cluster that absorbs all remaining
    unassigned visits within ``cluster_radius_meters`` of the seed. Distances
    are only ever measured to the seed, so a chain of visits that are each
    close to their neighbour but far from the seed splits into several
    clusters.

    Two entry points with different guarantees:

    - ``cluster_visits`` rebuilds places from scratch, including centroid and
      category.
    - ``update_frequent_places`` folds new visits into existing places and only
      refreshes counts, durations, time bounds and significance. Centroid and
      category stay as they were until the next full clustering.
    """

    def __init__(
        self,
        categorizer: PlaceCategorizer,
        *,
        cluster_radius_meters: float | None = None,
        min_visits_for_place: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.categorizer = categorizer
        self.cluster_radius_meters = (
            cluster_radius_meters if cluster_radius_meters is not None else settings.cluster_radius_meters
        )
        self.min_visits_for_place = (
            min_visits_for_place if min_visits_for_place is not None else settings.min_visits_for_place
        )
        if self.cluster_radius_meters <= 0:
            raise ValueError("cluster_radius_meters must be > 0")
        if self.min_visits_for_place < 1:
            raise ValueError("min_visits_for_place must be >= 1")
        self.clock = clock or _utc_now

    def cluster_visits(self, visits: Sequence[PlaceVisit], user_id: str) -> list[FrequentPlace]:
        """Cluster visits into frequent places sorted by visit count, highest first."""

        if not visits:
            return []

        self._warn_on_reversed_visits(visits)
        ordered = sorted(visits, key=lambda visit: visit.start_time)
        clusters = self._seed_radius_clusters(ordered)
        kept = [cluster for cluster in clusters if len(cluster) >= self.min_visits_for_place]

        logger.debug(
            "Seed-radius clustering formed %d clusters from %d visits; %d reach %d visits",
            len(clusters),
            len(ordered),
            len(kept),
            self.min_visits_for_place,
        )

        places = [self._create_frequent_place(cluster, user_id, index) for index, cluster in enumerate(kept)]
        places.sort(key=lambda place: place.visit_count, reverse=True)

        logger.info("Clustered %d visits into %d frequent places for user %s", len(visits), len(places), user_id)
        return places

    def update_frequent_places(
        self,
        new_visits: Sequence[PlaceVisit],
        existing_places: Sequence[FrequentPlace],
        user_id: str,
    ) -> list[FrequentPlace]:
        """Fold new visits into existing places and mint places from the leftovers.

        A visit joins the nearest existing place whose centre lies within the
        cluster radius. Visits that match nothing are clustered among
        themselves and the resulting places are appended. The input sequence
        and its places are left untouched.
        """

        updated = list(existing_places)
        unassigned: list[PlaceVisit] = []

        self._warn_on_reversed_visits(new_visits)
        for visit in new_visits:
            index = self._find_nearest_place(visit, updated)
            if index is None:
                unassigned.append(visit)
                continue
            updated[index] = self._fold_visit(updated[index], visit)

        logger.debug(
            "Matched %d of %d new visits to existing places",
            len(new_visits) - len(unassigned),
            len(new_visits),
        )

        if unassigned:
            updated.extend(self.cluster_visits(unassigned, user_id))

        updated.sort(key=lambda place: place.visit_count, reverse=True)
        return updated

    def _seed_radius_clusters(self, visits: Sequence[PlaceVisit]) -> list[list[PlaceVisit]]:
        clusters: list[list[PlaceVisit]] = []
        assigned: set[int] = set()

        for index, seed in enumerate(visits):
            if index in assigned:
                continue
            cluster = [seed]
            assigned.add(index)

            for other_index in range(index + 1, len(visits)):
                if other_index in assigned:
                    continue
                other = visits[other_index]
                distance = haversine_m(
                    seed.center_latitude,
                    seed.center_longitude,
                    other.center_latitude,
                    other.center_longitude,
                )
                if distance <= self.cluster_radius_meters:
                    cluster.append(other)
                    assigned.add(other_index)

            clusters.append(cluster)
        return clusters

    def _create_frequent_place(self, cluster: Sequence[PlaceVisit], user_id: str, index: int) -> FrequentPlace:
        center = centroid(visit.center for visit in cluster)
        if center is None:
            raise ValueError("Cannot build a frequent place from an empty cluster")

        visit_count = len(cluster)
        total_duration = sum((visit.duration for visit in cluster), timedelta(0))
        first_visit_time = min(visit.start_time for visit in cluster)
        last_visit_time = max(visit.end_time for visit in cluster)

        category, confidence = self._vote_category(cluster)
        significance = self.categorizer.determine_significance(
            visit_count=visit_count,
            total_duration=total_duration,
            last_visit_time=last_visit_time,
        )

        # Members are in start-time order; ties resolve to the later input.
        most_recent_first = list(reversed(cluster))
        now = self.clock()

        return FrequentPlace(
            id=f"place_{user_id}_{index}_{hash(center.latitude)}_{hash(center.longitude)}",
            user_id=user_id,
            center_latitude=center.latitude,
            center_longitude=center.longitude,
            radius_meters=self.cluster_radius_meters,
            name=_most_recent_value(most_recent_first, "poi_name"),
            address=_most_recent_value(most_recent_first, "approximate_address"),
            city=_most_recent_value(most_recent_first, "city"),
            country_code=_most_recent_value(most_recent_first, "country_code"),
            category=category,
            category_confidence=confidence,
            significance=significance,
            visit_count=visit_count,
            total_duration=total_duration,
            first_visit_time=first_visit_time,
            last_visit_time=last_visit_time,
            created_at=now,
            updated_at=now,
        )

    def _vote_category(self, cluster: Sequence[PlaceVisit]) -> tuple[PlaceCategory, CategoryConfidence]:
        votes: Counter[PlaceCategory] = Counter()
        for position, visit in enumerate(cluster):
            siblings = [other for other_position, other in enumerate(cluster) if other_position != position]
            category, _ = self.categorizer.categorize(visit, siblings)
            votes[category] += 1

        # most_common keeps first-seen order among equal counts.
        winner, winner_votes = votes.most_common(1)[0]
        consensus = winner_votes / len(cluster)

        if consensus >= HIGH_CONSENSUS:
            confidence = CategoryConfidence.HIGH
        elif consensus >= MEDIUM_CONSENSUS:
            confidence = CategoryConfidence.MEDIUM
        else:
            confidence = CategoryConfidence.LOW
        return winner, confidence

    def _find_nearest_place(self, visit: PlaceVisit, places: Sequence[FrequentPlace]) -> Optional[int]:
        nearest_index: Optional[int] = None
        nearest_distance = float("inf")
        for index, place in enumerate(places):
            distance = haversine_m(
                visit.center_latitude,
                visit.center_longitude,
                place.center_latitude,
                place.center_longitude,
            )
            if distance <= self.cluster_radius_meters and distance < nearest_distance:
                nearest_index = index
                nearest_distance = distance
        return nearest_index

    def _fold_visit(self, place: FrequentPlace, visit: PlaceVisit) -> FrequentPlace:
        visit_count = place.visit_count + 1
        total_duration = place.total_duration + visit.duration
        first_visit_time = min(place.first_visit_time, visit.start_time)
        last_visit_time = max(place.last_visit_time, visit.end_time)

        significance = self.categorizer.determine_significance(
            visit_count=visit_count,
            total_duration=total_duration,
            last_visit_time=last_visit_time,
        )
        return replace(
            place,
            visit_count=visit_count,
            total_duration=total_duration,
            first_visit_time=first_visit_time,
            last_visit_time=last_visit_time,
            significance=significance,
            updated_at=self.clock(),
        )

    @staticmethod
    def _warn_on_reversed_visits(visits: Sequence[PlaceVisit]) -> None:
        for visit in visits:
            if visit.end_time < visit.start_time:
                logger.warning(
                    "Visit %s ends before it starts; aggregates will include a negative duration",
                    visit.id,
                )


def _most_recent_value(visits_newest_first: Sequence[PlaceVisit], attribute: str) -> Optional[str]:
    for visit in visits_newest_first:
        value = getattr(visit, attribute)
        if value is not None:
            return value
    return None
