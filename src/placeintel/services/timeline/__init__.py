"""Trip timeline services."""

from .aggregator import TripDayAggregator

__all__ = ["TripDayAggregator"]
