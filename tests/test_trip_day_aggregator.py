import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from placeintel.models.domain import PlaceVisit, RouteSegment, TransportType, Trip
from placeintel.models.timeline import DayEndItem, DayStartItem, RouteItem, TimelineItemKind, VisitItem
from placeintel.services.timeline import aggregator as aggregator_module
from placeintel.services.timeline.aggregator import TripDayAggregator


def _utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def _visit(vid: str, start: datetime, hours: float = 1.0) -> PlaceVisit:
    return PlaceVisit(
        id=vid,
        user_id="user-1",
        center_latitude=48.8566,
        center_longitude=2.3522,
        start_time=start,
        end_time=start + timedelta(hours=hours),
    )


def _route(rid: str, start: datetime, hours: float = 0.5) -> RouteSegment:
    return RouteSegment(
        id=rid,
        trip_id="trip-1",
        start_time=start,
        end_time=start + timedelta(hours=hours),
        distance_meters=1200.0,
        transport_type=TransportType.WALK,
    )


def _trip(start: datetime, end: datetime | None) -> Trip:
    return Trip(id="trip-1", user_id="user-1", start_time=start, end_time=end)


@pytest.fixture
def aggregator() -> TripDayAggregator:
    return TripDayAggregator(timezone_name="UTC")


def test_single_day_with_one_visit_and_one_route(aggregator):
    trip = _trip(_utc(2024, 10, 1, 8), _utc(2024, 10, 1, 20))
    visit = _visit("v1", _utc(2024, 10, 1, 10))
    route = _route("r1", _utc(2024, 10, 1, 12))

    days = aggregator.aggregate_trip_days(trip, [visit], [route])

    assert len(days) == 1
    day = days[0]
    assert day.date == date(2024, 10, 1)
    assert day.id == "trip_day_trip-1_2024-10-01"
    assert [item.kind for item in day.items] == [
        TimelineItemKind.DAY_START,
        TimelineItemKind.VISIT,
        TimelineItemKind.ROUTE,
        TimelineItemKind.DAY_END,
    ]
    assert isinstance(day.items[1], VisitItem) and day.items[1].place_visit is visit
    assert isinstance(day.items[2], RouteItem) and day.items[2].route_segment is route
    assert day.items[0].timestamp == _utc(2024, 10, 1)
    assert day.items[-1].timestamp == _utc(2024, 10, 2)
    assert day.visits == [visit]
    assert day.routes == [route]


def test_items_are_ordered_by_timestamp_with_visits_first_on_ties(aggregator):
    trip = _trip(_utc(2024, 10, 1), _utc(2024, 10, 1, 23))
    route_early = _route("r-early", _utc(2024, 10, 1, 7))
    visit_noon = _visit("v-noon", _utc(2024, 10, 1, 12))
    route_noon = _route("r-noon", _utc(2024, 10, 1, 12))
    visit_late = _visit("v-late", _utc(2024, 10, 1, 18))

    day = aggregator.aggregate_trip_days(trip, [visit_late, visit_noon], [route_noon, route_early])[0]

    assert [item.id for item in day.items[1:-1]] == [
        "timeline_route_r-early",
        "timeline_visit_v-noon",
        "timeline_route_r-noon",
        "timeline_visit_v-late",
    ]
    timestamps = [item.timestamp for item in day.items]
    assert timestamps == sorted(timestamps)


def test_span_ending_at_midnight_includes_that_day(aggregator):
    trip = _trip(_utc(2024, 10, 1), _utc(2024, 10, 3))
    visit = _visit("v1", _utc(2024, 10, 1, 9))

    days = aggregator.aggregate_trip_days(trip, [visit], [])

    assert [day.date for day in days] == [date(2024, 10, 1), date(2024, 10, 2), date(2024, 10, 3)]


def test_four_day_span_with_empty_days_keeps_markers(aggregator):
    trip = _trip(_utc(2024, 10, 1), _utc(2024, 10, 4))
    visit = _visit("v1", _utc(2024, 10, 2, 9))

    days = aggregator.aggregate_trip_days(trip, [visit], [])

    assert len(days) == 4
    assert [len(day.items) for day in days] == [2, 3, 2, 2]
    for day in days:
        assert isinstance(day.items[0], DayStartItem)
        assert isinstance(day.items[-1], DayEndItem)


def test_empty_trip_yields_no_days(aggregator, caplog):
    trip = _trip(_utc(2024, 10, 1), _utc(2024, 10, 4))
    outside = _visit("before", _utc(2024, 9, 30, 9))

    with caplog.at_level(logging.WARNING, logger=aggregator_module.__name__):
        days = aggregator.aggregate_trip_days(trip, [outside], [])

    assert days == []
    assert "trip-1" in caplog.text


def test_only_items_starting_inside_the_trip_are_kept(aggregator):
    trip = _trip(_utc(2024, 10, 1, 8), _utc(2024, 10, 1, 20))
    inside = _visit("inside", _utc(2024, 10, 1, 9))
    at_end = _visit("at-end", _utc(2024, 10, 1, 20))
    before = _visit("before", _utc(2024, 10, 1, 7))
    after = _route("after", _utc(2024, 10, 1, 21))

    day = aggregator.aggregate_trip_days(trip, [inside, at_end, before], [after])[0]

    assert [visit.id for visit in day.visits] == ["inside", "at-end"]
    assert day.routes == []


def test_ongoing_trip_covers_only_its_start_day(aggregator):
    trip = _trip(_utc(2024, 10, 1, 8), None)
    first = _visit("first", _utc(2024, 10, 1, 9))
    next_day = _visit("next-day", _utc(2024, 10, 2, 9))

    days = aggregator.aggregate_trip_days(trip, [first, next_day], [])

    assert len(days) == 1
    assert [visit.id for visit in days[0].visits] == ["first"]


def test_days_follow_the_configured_time_zone():
    aggregator = TripDayAggregator(timezone_name="Europe/Paris")
    trip = _trip(_utc(2024, 10, 1, 8), _utc(2024, 10, 2, 10))
    # 23:30 UTC on Oct 1 is 01:30 on Oct 2 in Paris.
    late = _visit("late", _utc(2024, 10, 1, 23, 30))

    days = aggregator.aggregate_trip_days(trip, [late], [])

    assert [day.date for day in days] == [date(2024, 10, 1), date(2024, 10, 2)]
    assert days[0].visits == []
    assert [visit.id for visit in days[1].visits] == ["late"]
    assert days[0].items[0].timestamp == _utc(2024, 9, 30, 22)
    assert days[0].items[-1].timestamp == days[1].items[0].timestamp


def test_default_zone_comes_from_settings(monkeypatch):
    monkeypatch.setattr(aggregator_module.settings, "timezone", "Asia/Tokyo")

    assert TripDayAggregator().tz.key == "Asia/Tokyo"


def test_invalid_zone_raises():
    with pytest.raises(ValueError):
        TripDayAggregator(timezone_name="Not/AZone")
