"""GeoJSON export utilities for frequent places, regions and trip days."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, Point, mapping

from ...models.domain import FrequentPlace, PlaceCategory, Region
from ...models.timeline import RouteItem, TripDay, VisitItem

CATEGORY_COLORS: Dict[PlaceCategory, str] = {
    PlaceCategory.HOME: "#e0003e",
    PlaceCategory.WORK: "#0000c1",
    PlaceCategory.FOOD: "#e0af00",
    PlaceCategory.SHOPPING: "#611cc7",
    PlaceCategory.FITNESS: "#38e000",
    PlaceCategory.ENTERTAINMENT: "#e000a2",
    PlaceCategory.TRAVEL: "#13aae0",
    PlaceCategory.HEALTHCARE: "#e0002f",
    PlaceCategory.EDUCATION: "#a4d819",
    PlaceCategory.RELIGIOUS: "#00e0bb",
    PlaceCategory.SOCIAL: "#e0e005",
    PlaceCategory.OUTDOOR: "#22e000",
    PlaceCategory.SERVICE: "#3100e0",
    PlaceCategory.OTHER: "#02d8e0",
}


def _feature(geometry: Any, properties: Dict[str, Any], feature_id: str) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "id": feature_id,
        "geometry": mapping(geometry),
        "properties": {**properties, "wkt": geometry.wkt},
    }


def _collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


def frequent_places_to_geojson(places: Sequence[FrequentPlace]) -> Dict[str, Any]:
    """Convert frequent places into a FeatureCollection of centre points.

    The radius travels as a property; GeoJSON has no circle geometry.
    """

    features = []
    for place in places:
        properties = {
            "name": place.display_name,
            "category": place.category.value,
            "categoryConfidence": place.category_confidence.value,
            "significance": place.significance.value,
            "visitCount": place.visit_count,
            "totalDurationSeconds": place.total_duration.total_seconds(),
            "firstVisitTime": place.first_visit_time.isoformat(),
            "lastVisitTime": place.last_visit_time.isoformat(),
            "radiusMeters": place.radius_meters,
            "city": place.city,
            "countryCode": place.country_code,
            "markerColor": CATEGORY_COLORS[place.category],
        }
        geometry = Point(place.center_longitude, place.center_latitude)
        features.append(_feature(geometry, properties, place.id))
    return _collection(features)


def regions_to_geojson(regions: Sequence[Region]) -> Dict[str, Any]:
    features = []
    for region in regions:
        properties = {
            "name": region.name,
            "description": region.description,
            "radiusMeters": region.radius_meters,
            "notificationsEnabled": region.notifications_enabled,
            "enterCount": region.enter_count,
        }
        geometry = Point(region.longitude, region.latitude)
        features.append(_feature(geometry, properties, region.id))
    return _collection(features)


def trip_day_to_geojson(trip_day: TripDay) -> Dict[str, Any]:
    """Export the visits and routes of one trip day.

    Routes with fewer than two path points have no line geometry and are
    skipped.
    """

    features = []
    for position, item in enumerate(trip_day.items):
        if isinstance(item, VisitItem):
            visit = item.place_visit
            properties = {
                "kind": item.kind.value,
                "order": position,
                "name": visit.display_name,
                "startTime": visit.start_time.isoformat(),
                "endTime": visit.end_time.isoformat(),
                "category": visit.category.value,
            }
            geometry = Point(visit.center_longitude, visit.center_latitude)
            features.append(_feature(geometry, properties, item.id))
        elif isinstance(item, RouteItem):
            route = item.route_segment
            if len(route.simplified_path) < 2:
                continue
            properties = {
                "kind": item.kind.value,
                "order": position,
                "startTime": route.start_time.isoformat(),
                "endTime": route.end_time.isoformat(),
                "transportType": route.transport_type.value,
                "distanceMeters": route.distance_meters,
            }
            geometry = LineString([(point.longitude, point.latitude) for point in route.simplified_path])
            features.append(_feature(geometry, properties, item.id))

    collection = _collection(features)
    collection["properties"] = {"tripId": trip_day.trip_id, "date": trip_day.date.isoformat()}
    return collection


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    """Write a FeatureCollection to disk as UTF-8 JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(collection, handle, indent=2, ensure_ascii=False)
