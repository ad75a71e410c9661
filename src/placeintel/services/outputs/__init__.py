"""Serialization of engine outputs."""

from .formatter import frequent_places_to_csv, frequent_places_to_json, trip_days_to_json

__all__ = ["frequent_places_to_csv", "frequent_places_to_json", "trip_days_to_json"]
