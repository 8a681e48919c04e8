"""Seismic event model and feed normalization - Pure functions.

This module turns USGS GeoJSON features into typed SeismicEvent objects
ready for display. All functions are pure with no side effects.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any


logger = logging.getLogger(__name__)


# Resembles the en-US locale string, e.g. "12/19/2023, 12:00:00 PM"
DEFAULT_TIME_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

UNKNOWN_LOCATION = "Unknown location"


@dataclass(frozen=True)
class SeismicEvent:
    """Immutable, display-ready seismic event.

    Attributes:
        location: Human-readable place description
        magnitude: Event magnitude (may be negative for very small events)
        depth_km: Depth below surface in kilometers
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        occurred_at: Event timestamp (UTC)
        time_label: Display string rendered from occurred_at
    """
    location: str
    magnitude: float
    depth_km: float
    latitude: float
    longitude: float
    occurred_at: datetime
    time_label: str

    @property
    def position(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def format_event_time(
    occurred_at: datetime,
    tz: tzinfo | None = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> str:
    """Render an event time for display.

    Pure function. One-way transform; the result is never parsed back.

    Args:
        occurred_at: Timezone-aware event time
        tz: Display timezone, None for the local timezone
        time_format: strftime format string

    Returns:
        Formatted time string
    """
    return occurred_at.astimezone(tz).strftime(time_format)


def normalize_feature(
    feature: dict[str, Any],
    tz: tzinfo | None = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> SeismicEvent | None:
    """Normalize a single GeoJSON feature into a SeismicEvent.

    Pure function: takes raw dict, returns SeismicEvent or None if a
    required field (mag, time, coordinates) is missing or malformed.

    Args:
        feature: GeoJSON feature dict from the USGS feed
        tz: Display timezone for the time label
        time_format: strftime format for the time label

    Returns:
        SeismicEvent or None if the feature is malformed
    """
    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        coords = geometry.get("coordinates") or []

        if not isinstance(coords, (list, tuple)) or len(coords) < 3:
            return None

        magnitude = props.get("mag")
        time_ms = props.get("time")
        if magnitude is None or time_ms is None:
            return None

        if not math.isfinite(float(magnitude)):
            return None

        # USGS uses milliseconds since epoch
        occurred_at = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)

        return SeismicEvent(
            location=props.get("place") or UNKNOWN_LOCATION,
            magnitude=float(magnitude),
            depth_km=float(coords[2]),
            latitude=float(coords[1]),
            longitude=float(coords[0]),
            occurred_at=occurred_at,
            time_label=format_event_time(occurred_at, tz, time_format),
        )
    except (AttributeError, KeyError, IndexError, TypeError, ValueError, OverflowError, OSError):
        return None


def normalize_feed(
    geojson: dict[str, Any],
    tz: tzinfo | None = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> list[SeismicEvent]:
    """Normalize a GeoJSON FeatureCollection into SeismicEvents.

    Pure function: one event per valid feature, in feed order. Malformed
    features are skipped; they never abort the batch.

    Args:
        geojson: FeatureCollection from the USGS feed
        tz: Display timezone for time labels
        time_format: strftime format for time labels

    Returns:
        List of SeismicEvent objects in source order
    """
    events = []
    skipped = 0

    for feature in geojson.get("features", []):
        event = normalize_feature(feature, tz, time_format)
        if event is None:
            skipped += 1
            continue
        events.append(event)

    if skipped:
        logger.warning("Skipped %d malformed features", skipped)

    return events
