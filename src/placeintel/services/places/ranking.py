"""Significance filtering and ordering of frequent places."""

from __future__ import annotations

from typing import Dict, Iterable

from ...models.domain import FrequentPlace, PlaceSignificance

SIGNIFICANCE_RANK: Dict[PlaceSignificance, int] = {
    PlaceSignificance.RARE: 0,
    PlaceSignificance.OCCASIONAL: 1,
    PlaceSignificance.FREQUENT: 2,
    PlaceSignificance.PRIMARY: 3,
}


def filter_by_significance(
    places: Iterable[FrequentPlace],
    min_significance: PlaceSignificance = PlaceSignificance.RARE,
) -> list[FrequentPlace]:
    """Keep places at least as significant as ``min_significance``.

    The default of ``RARE`` keeps every place.
    """

    threshold = SIGNIFICANCE_RANK[min_significance]
    return [place for place in places if SIGNIFICANCE_RANK[place.significance] >= threshold]


def sort_by_significance(places: Iterable[FrequentPlace]) -> list[FrequentPlace]:
    """Order places PRIMARY first, then by visit count, highest first."""

    return sorted(
        places,
        key=lambda place: (SIGNIFICANCE_RANK[place.significance], place.visit_count),
        reverse=True,
    )


def rank_frequent_places(
    places: Iterable[FrequentPlace],
    min_significance: PlaceSignificance = PlaceSignificance.RARE,
) -> list[FrequentPlace]:
    return sort_by_significance(filter_by_significance(places, min_significance))
