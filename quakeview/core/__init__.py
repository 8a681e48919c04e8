"""Functional Core - Pure functions with no side effects.

This module contains all display logic as pure functions:
- Feed normalization into SeismicEvents
- Magnitude filtering
- Marker color/size encoding
- View state transitions (reducer)
- Render payload construction

All functions here are deterministic and have no I/O.
"""

from quakeview.core.event import SeismicEvent, normalize_feature, normalize_feed
from quakeview.core.filters import (
    MagnitudeThreshold,
    TimeWindow,
    apply_magnitude_filter,
)
from quakeview.core.encoding import VisualEncoding, encode_magnitude
from quakeview.core.state import FetchState, ViewState, reduce
from quakeview.core.render import MarkerSpec, RenderFrame, build_render_frame

__all__ = [
    # Event
    "SeismicEvent",
    "normalize_feature",
    "normalize_feed",
    # Filters
    "MagnitudeThreshold",
    "TimeWindow",
    "apply_magnitude_filter",
    # Encoding
    "VisualEncoding",
    "encode_magnitude",
    # State
    "FetchState",
    "ViewState",
    "reduce",
    # Render
    "MarkerSpec",
    "RenderFrame",
    "build_render_frame",
]
