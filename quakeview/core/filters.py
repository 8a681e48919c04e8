"""User filters - Pure functions.

Time window and magnitude threshold selections, and the magnitude
filter applied to the event list on every render.
"""

from enum import Enum

from quakeview.core.event import SeismicEvent


# Events at or above this magnitude pass the ">=4" threshold
SIGNIFICANT_MAGNITUDE = 4.0


class TimeWindow(str, Enum):
    """Lookback period of the summary feed."""
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class MagnitudeThreshold(str, Enum):
    """Magnitude filter offered to the user."""
    ALL = "all"
    AT_LEAST_4 = ">=4"


def parse_time_window(value: str | TimeWindow) -> TimeWindow:
    """Map a UI selection to a TimeWindow.

    Raises:
        ValueError: If value is not one of hour/day/week/month
    """
    return TimeWindow(value)


def parse_magnitude_threshold(value: str | MagnitudeThreshold) -> MagnitudeThreshold:
    """Map a UI selection to a MagnitudeThreshold.

    Accepts "all", ">=4" and the "≥4" spelling used on screen.

    Raises:
        ValueError: If value is not a known threshold
    """
    if value == "≥4":
        return MagnitudeThreshold.AT_LEAST_4
    return MagnitudeThreshold(value)


def apply_magnitude_filter(
    events: list[SeismicEvent],
    threshold: MagnitudeThreshold,
) -> list[SeismicEvent]:
    """Filter events by the selected magnitude threshold.

    Pure function. Order is preserved; ALL returns every event.

    Args:
        events: Normalized events in feed order
        threshold: Active magnitude threshold

    Returns:
        Filtered list of events
    """
    if threshold is MagnitudeThreshold.ALL:
        return list(events)

    return [e for e in events if e.magnitude >= SIGNIFICANT_MAGNITUDE]
