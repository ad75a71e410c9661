"""Place intelligence engine: frequent places, trip day timelines and geofences."""

from __future__ import annotations

import logging

from .config import settings

__version__ = "0.1.0"


def configure_logging(level: str | None = None) -> None:
    """Apply a basic logging configuration for hosts that do not set one up."""

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ["configure_logging", "settings", "__version__"]
