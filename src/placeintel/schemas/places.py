"""Pydantic serialization models for frequent places and trip timelines."""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import CategoryConfidence, FrequentPlace, PlaceCategory, PlaceSignificance
from ..models.timeline import RouteItem, TimelineItem, TimelineItemKind, TripDay, VisitItem


class FrequentPlaceModel(BaseModel):
    id: str
    user_id: str
    center_latitude: float
    center_longitude: float
    radius_meters: float
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    category: PlaceCategory
    category_confidence: CategoryConfidence
    significance: PlaceSignificance
    visit_count: int = Field(..., ge=0)
    total_duration_seconds: float
    first_visit_time: dt.datetime
    last_visit_time: dt.datetime
    created_at: dt.datetime
    updated_at: dt.datetime
    user_label: Optional[str] = None
    is_favorite: bool = False

    @classmethod
    def from_place(cls, place: FrequentPlace) -> "FrequentPlaceModel":
        return cls(
            id=place.id,
            user_id=place.user_id,
            center_latitude=place.center_latitude,
            center_longitude=place.center_longitude,
            radius_meters=place.radius_meters,
            name=place.name,
            address=place.address,
            city=place.city,
            country_code=place.country_code,
            category=place.category,
            category_confidence=place.category_confidence,
            significance=place.significance,
            visit_count=place.visit_count,
            total_duration_seconds=place.total_duration.total_seconds(),
            first_visit_time=place.first_visit_time,
            last_visit_time=place.last_visit_time,
            created_at=place.created_at,
            updated_at=place.updated_at,
            user_label=place.user_label,
            is_favorite=place.is_favorite,
        )


class TimelineItemModel(BaseModel):
    id: str
    kind: TimelineItemKind
    timestamp: dt.datetime
    ref_id: Optional[str] = Field(default=None, description="Id of the visit or route segment, if any.")

    @classmethod
    def from_item(cls, item: TimelineItem) -> "TimelineItemModel":
        ref_id: Optional[str] = None
        if isinstance(item, VisitItem):
            ref_id = item.place_visit.id
        elif isinstance(item, RouteItem):
            ref_id = item.route_segment.id
        return cls(id=item.id, kind=item.kind, timestamp=item.timestamp, ref_id=ref_id)


class TripDayModel(BaseModel):
    id: str
    trip_id: str
    date: dt.date
    items: List[TimelineItemModel]

    @classmethod
    def from_trip_day(cls, trip_day: TripDay) -> "TripDayModel":
        return cls(
            id=trip_day.id,
            trip_id=trip_day.trip_id,
            date=trip_day.date,
            items=[TimelineItemModel.from_item(item) for item in trip_day.items],
        )
