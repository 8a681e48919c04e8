"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from quakeview.core.encoding import MIN_MARKER_SIZE, SIZE_PER_MAGNITUDE
from quakeview.core.event import DEFAULT_TIME_FORMAT
from quakeview.core.filters import MagnitudeThreshold, TimeWindow


# USGS real-time summary feeds
DEFAULT_FEED_BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"

DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
DEFAULT_ATTRIBUTION = "&copy; OpenStreetMap contributors"


@dataclass(frozen=True)
class MapView:
    """Initial map viewport handed to the map widget.

    Attributes:
        title: Page header text
        center_latitude: Initial center latitude
        center_longitude: Initial center longitude
        zoom: Initial zoom level
        scroll_wheel_zoom: Whether the wheel zooms the map
        show_scale: Whether a scale bar is drawn
        tile_url: Tile URL template
        attribution: Tile attribution text
    """
    title: str = "Earthquake Visualizer"
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 2
    scroll_wheel_zoom: bool = True
    show_scale: bool = True
    tile_url: str = DEFAULT_TILE_URL
    attribution: str = DEFAULT_ATTRIBUTION


@dataclass
class AppConfig:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_base_url: Base URL of the summary feeds
        request_timeout_seconds: HTTP timeout for a feed request
        warning_dwell_seconds: How long the large-dataset warning stays up
        warning_text: Large-dataset warning shown to the user
        default_time_window: Window fetched on startup
        default_magnitude_threshold: Threshold active on startup
        size_per_magnitude: Marker diameter per unit of magnitude
        min_marker_size: Smallest marker diameter
        display_timezone: IANA zone for time labels (None for local time)
        time_format: strftime format for time labels
        map_view: Initial map viewport
    """
    feed_base_url: str = DEFAULT_FEED_BASE_URL
    request_timeout_seconds: float = 30.0
    warning_dwell_seconds: float = 25.0
    warning_text: str = "Loading a month of earthquakes may take a while."
    default_time_window: TimeWindow = TimeWindow.DAY
    default_magnitude_threshold: MagnitudeThreshold = MagnitudeThreshold.ALL
    size_per_magnitude: float = SIZE_PER_MAGNITUDE
    min_marker_size: float = MIN_MARKER_SIZE
    display_timezone: str | None = None
    time_format: str = DEFAULT_TIME_FORMAT
    map_view: MapView = field(default_factory=MapView)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_map_view(view: MapView, field_name: str) -> list[ValidationError]:
    """Validate the initial map viewport.

    Pure function.

    Args:
        view: Map viewport to validate
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= view.center_latitude <= 90:
        errors.append(ValidationError(
            field=f"{field_name}.center_latitude",
            message=f"Latitude {view.center_latitude} out of range [-90, 90]",
        ))

    if not -180 <= view.center_longitude <= 180:
        errors.append(ValidationError(
            field=f"{field_name}.center_longitude",
            message=f"Longitude {view.center_longitude} out of range [-180, 180]",
        ))

    if not 0 <= view.zoom <= 18:
        errors.append(ValidationError(
            field=f"{field_name}.zoom",
            message=f"Zoom {view.zoom} out of range [0, 18]",
        ))

    if "{z}" not in view.tile_url:
        errors.append(ValidationError(
            field=f"{field_name}.tile_url",
            message="Tile URL has no {z}/{x}/{y} placeholders",
            severity="warning",
        ))

    return errors


def validate_config(config: AppConfig) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_base_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_base_url",
            message=f"Feed URL must be http(s), got {config.feed_base_url!r}",
        ))
    elif config.feed_base_url.startswith("http://"):
        errors.append(ValidationError(
            field="feed_base_url",
            message="Feed URL is not using https",
            severity="warning",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if config.warning_dwell_seconds <= 0:
        errors.append(ValidationError(
            field="warning_dwell_seconds",
            message=f"Dwell time must be positive, got {config.warning_dwell_seconds}",
        ))

    if config.size_per_magnitude <= 0:
        errors.append(ValidationError(
            field="size_per_magnitude",
            message=f"Size factor must be positive, got {config.size_per_magnitude}",
        ))

    if config.min_marker_size <= 0:
        errors.append(ValidationError(
            field="min_marker_size",
            message="Markers with a non-positive minimum size can be invisible",
            severity="warning",
        ))

    errors.extend(validate_map_view(config.map_view, "map_view"))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
