"""Render payloads - Pure functions.

Builds what the map widget needs to draw a frame: one marker per
visible event plus the loading, warning and error indicators. The
widget itself lives outside this package.
"""

from dataclasses import dataclass

from quakeview.core.config import AppConfig, MapView
from quakeview.core.encoding import encode_magnitude
from quakeview.core.event import SeismicEvent
from quakeview.core.filters import apply_magnitude_filter
from quakeview.core.state import ViewState


# Marker styling shared by every event
MARKER_SHAPE = "circle"
MARKER_BORDER_WIDTH = 2
MARKER_BORDER_COLOR = "white"
MARKER_OPACITY = 0.8


@dataclass(frozen=True)
class MarkerIcon:
    """Icon descriptor for one marker.

    Attributes:
        color: Fill color category
        size: Diameter in display units
        shape: Marker shape
        border_width: Border width in display units
        border_color: Border color
        opacity: Fill opacity (0-1)
    """
    color: str
    size: float
    shape: str = MARKER_SHAPE
    border_width: int = MARKER_BORDER_WIDTH
    border_color: str = MARKER_BORDER_COLOR
    opacity: float = MARKER_OPACITY


@dataclass(frozen=True)
class MarkerSpec:
    """One marker handed to the map widget.

    Attributes:
        position: (latitude, longitude)
        icon: Icon descriptor
        popup_text: Text shown when the marker is opened
    """
    position: tuple[float, float]
    icon: MarkerIcon
    popup_text: str

    @property
    def color_category(self) -> str:
        return self.icon.color

    @property
    def size_units(self) -> float:
        return self.icon.size


@dataclass(frozen=True)
class RenderFrame:
    """Everything the map widget draws in one pass.

    Attributes:
        map_view: Initial map viewport
        markers: Markers for the visible events, in feed order
        loading: Whether the loading indicator is shown
        warning_visible: Whether the large-dataset warning is shown
        warning_text: Text of the large-dataset warning
        error_message: Fetch error shown to the user, if any
        total_events: Events in the current feed before filtering
    """
    map_view: MapView
    markers: tuple[MarkerSpec, ...]
    loading: bool
    warning_visible: bool
    warning_text: str
    error_message: str | None
    total_events: int

    @property
    def visible_events(self) -> int:
        return len(self.markers)


def format_number(value: float) -> str:
    """Format a number the way the feed reports it (5.0 -> "5").

    Pure function.
    """
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_popup_text(event: SeismicEvent) -> str:
    """Format the popup text for an event.

    Pure function.

    Args:
        event: Event to describe

    Returns:
        Multi-line popup text
    """
    lines = [
        event.location,
        f"Magnitude: {format_number(event.magnitude)}",
        f"Depth: {format_number(event.depth_km)} km",
        f"Time: {event.time_label}",
    ]
    return "\n".join(lines)


def build_marker(event: SeismicEvent, config: AppConfig) -> MarkerSpec:
    """Build the marker for one event.

    Pure function.
    """
    encoding = encode_magnitude(
        event.magnitude,
        config.size_per_magnitude,
        config.min_marker_size,
    )

    return MarkerSpec(
        position=event.position,
        icon=MarkerIcon(
            color=encoding.color_category,
            size=encoding.size_units,
        ),
        popup_text=format_popup_text(event),
    )


def build_markers(
    events: list[SeismicEvent],
    config: AppConfig,
) -> list[MarkerSpec]:
    """Build markers for a list of events, preserving order.

    Pure function.
    """
    return [build_marker(e, config) for e in events]


def build_render_frame(state: ViewState, config: AppConfig) -> RenderFrame:
    """Build the frame for the current state.

    Pure function. The magnitude filter is applied here on every call,
    so the frame always reflects the latest events and threshold.

    Args:
        state: Current view state
        config: Application configuration

    Returns:
        RenderFrame for the map widget
    """
    visible = apply_magnitude_filter(list(state.events), state.magnitude_threshold)

    return RenderFrame(
        map_view=config.map_view,
        markers=tuple(build_markers(visible, config)),
        loading=state.loading,
        warning_visible=state.warning_visible,
        warning_text=config.warning_text,
        error_message=state.error_message,
        total_events=len(state.events),
    )
