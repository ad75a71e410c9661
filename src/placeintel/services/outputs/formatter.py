"""Utilities to serialize frequent places and trip days into JSON/CSV artifacts."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ...models.domain import FrequentPlace
from ...models.timeline import TripDay
from ...schemas.places import FrequentPlaceModel, TripDayModel

CSV_FIELDS = [
    "id",
    "name",
    "category",
    "category_confidence",
    "significance",
    "visit_count",
    "total_duration_seconds",
    "center_latitude",
    "center_longitude",
    "radius_meters",
    "first_visit_time",
    "last_visit_time",
    "city",
    "country_code",
]


def frequent_places_to_json(places: Sequence[FrequentPlace]) -> list[dict]:
    return [FrequentPlaceModel.from_place(place).model_dump(mode="json") for place in places]


def frequent_places_to_csv(places: Sequence[FrequentPlace]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for row in frequent_places_to_json(places):
        writer.writerow(row)
    return buffer.getvalue()


def trip_days_to_json(trip_days: Sequence[TripDay]) -> list[dict]:
    return [TripDayModel.from_trip_day(day).model_dump(mode="json") for day in trip_days]
