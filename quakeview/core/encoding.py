"""Marker encoding - Pure functions.

Derives the marker color and size drawn for each event from its
magnitude. The rendering itself is done by the map widget.
"""

from dataclasses import dataclass
from functools import lru_cache


# Marker diameter per unit of magnitude (pixels)
SIZE_PER_MAGNITUDE = 5.0

# Smallest marker drawn, so zero and negative magnitudes stay visible
MIN_MARKER_SIZE = 5.0


@dataclass(frozen=True)
class VisualEncoding:
    """Immutable marker encoding for one magnitude.

    Attributes:
        color_category: "red", "orange" or "green"
        size_units: Marker diameter in display units
    """
    color_category: str
    size_units: float


def get_color_category(magnitude: float) -> str:
    """Get the color category for a magnitude.

    Pure function. Lower bounds are inclusive.

    Args:
        magnitude: Event magnitude

    Returns:
        "red" (>= 6), "orange" (4 to 6) or "green" (< 4)
    """
    if magnitude >= 6:
        return "red"
    elif magnitude >= 4:
        return "orange"
    return "green"


def get_marker_size(
    magnitude: float,
    size_per_magnitude: float = SIZE_PER_MAGNITUDE,
    min_size: float = MIN_MARKER_SIZE,
) -> float:
    """Determine marker diameter from magnitude.

    Pure function. Linear in magnitude, floored at min_size (NaN included).

    Args:
        magnitude: Event magnitude
        size_per_magnitude: Diameter per unit of magnitude
        min_size: Smallest diameter returned

    Returns:
        Marker diameter in display units
    """
    size = magnitude * size_per_magnitude
    if not size >= min_size:
        return min_size
    return size


@lru_cache(maxsize=1024)
def encode_magnitude(
    magnitude: float,
    size_per_magnitude: float = SIZE_PER_MAGNITUDE,
    min_size: float = MIN_MARKER_SIZE,
) -> VisualEncoding:
    """Encode a magnitude as marker color and size.

    Pure function, memoized per magnitude.
    """
    return VisualEncoding(
        color_category=get_color_category(magnitude),
        size_units=get_marker_size(magnitude, size_per_magnitude, min_size),
    )
