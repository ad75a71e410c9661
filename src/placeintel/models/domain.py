"""Domain models for visits, frequent places, trips and regions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class PlaceCategory(str, Enum):
    HOME = "HOME"
    WORK = "WORK"
    FOOD = "FOOD"
    SHOPPING = "SHOPPING"
    FITNESS = "FITNESS"
    ENTERTAINMENT = "ENTERTAINMENT"
    TRAVEL = "TRAVEL"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    RELIGIOUS = "RELIGIOUS"
    SOCIAL = "SOCIAL"
    OUTDOOR = "OUTDOOR"
    SERVICE = "SERVICE"
    OTHER = "OTHER"


class CategoryConfidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class PlaceSignificance(str, Enum):
    """Coarse importance tier of a frequent place."""

    PRIMARY = "PRIMARY"
    FREQUENT = "FREQUENT"
    OCCASIONAL = "OCCASIONAL"
    RARE = "RARE"


class TransportType(str, Enum):
    WALK = "WALK"
    BIKE = "BIKE"
    CAR = "CAR"
    TRAIN = "TRAIN"
    PLANE = "PLANE"
    BOAT = "BOAT"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class PlaceVisit:
    """A detected stationary period.

    Callers are expected to guarantee ``end_time >= start_time``; the engine
    does not validate it and a reversed visit yields a negative duration.
    """

    id: str
    user_id: str
    center_latitude: float
    center_longitude: float
    start_time: datetime
    end_time: datetime
    poi_name: Optional[str] = None
    approximate_address: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    category: PlaceCategory = PlaceCategory.OTHER
    category_confidence: CategoryConfidence = CategoryConfidence.LOW
    user_label: Optional[str] = None
    user_notes: Optional[str] = None
    is_favorite: bool = False
    frequent_place_id: Optional[str] = None

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.center_latitude, self.center_longitude)

    @property
    def display_name(self) -> str:
        return self.user_label or self.poi_name or self.approximate_address or "Unknown place"


@dataclass(frozen=True, slots=True)
class FrequentPlace:
    """A recurring location inferred by clustering place visits."""

    id: str
    user_id: str
    center_latitude: float
    center_longitude: float
    radius_meters: float
    category: PlaceCategory
    category_confidence: CategoryConfidence
    significance: PlaceSignificance
    visit_count: int
    total_duration: timedelta
    first_visit_time: datetime
    last_visit_time: datetime
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    user_label: Optional[str] = None
    user_notes: Optional[str] = None
    is_favorite: bool = False

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.center_latitude, self.center_longitude)

    @property
    def display_name(self) -> str:
        return self.user_label or self.name or self.address or "Unknown place"


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """Movement between two place visits."""

    id: str
    trip_id: Optional[str]
    start_time: datetime
    end_time: datetime
    from_place_visit_id: Optional[str] = None
    to_place_visit_id: Optional[str] = None
    distance_meters: float = 0.0
    transport_type: TransportType = TransportType.UNKNOWN
    simplified_path: tuple[Coordinate, ...] = field(default_factory=tuple)

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


@dataclass(frozen=True, slots=True)
class Trip:
    """A time span grouping visits and routes; ``end_time`` is None while ongoing."""

    id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    name: Optional[str] = None
    visit_ids: tuple[str, ...] = field(default_factory=tuple)
    route_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Region:
    """A circular geofence."""

    id: str
    user_id: str
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    description: Optional[str] = None
    notifications_enabled: bool = True
    enter_count: int = 0
    last_enter_time: Optional[datetime] = None

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)
