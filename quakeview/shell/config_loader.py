"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (AppConfig, MapView) are defined in quakeview/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from quakeview.core.config import AppConfig, MapView
from quakeview.core.filters import parse_magnitude_threshold, parse_time_window


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} environment placeholder.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_map_view(data: dict[str, Any]) -> MapView:
    """Parse the map viewport from config data."""
    defaults = MapView()
    center = data.get("center") or {}

    return MapView(
        title=data.get("title", defaults.title),
        center_latitude=float(center.get("lat", defaults.center_latitude)),
        center_longitude=float(center.get("lng", defaults.center_longitude)),
        zoom=int(data.get("zoom", defaults.zoom)),
        scroll_wheel_zoom=bool(data.get("scroll_wheel_zoom", defaults.scroll_wheel_zoom)),
        show_scale=bool(data.get("show_scale", defaults.show_scale)),
        tile_url=_resolve_value(data.get("tile_url", defaults.tile_url)),
        attribution=data.get("attribution", defaults.attribution),
    )


def load_config_from_dict(data: dict[str, Any]) -> AppConfig:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed AppConfig object

    Raises:
        ValueError: If a time window or threshold is not a known value
    """
    defaults = AppConfig()

    return AppConfig(
        feed_base_url=_resolve_value(data.get("feed_base_url", defaults.feed_base_url)),
        request_timeout_seconds=float(
            data.get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
        warning_dwell_seconds=float(
            data.get("warning_dwell_seconds", defaults.warning_dwell_seconds)
        ),
        warning_text=data.get("warning_text", defaults.warning_text),
        default_time_window=parse_time_window(
            data.get("default_time_window", defaults.default_time_window)
        ),
        default_magnitude_threshold=parse_magnitude_threshold(
            data.get("default_magnitude_threshold", defaults.default_magnitude_threshold)
        ),
        size_per_magnitude=float(data.get("size_per_magnitude", defaults.size_per_magnitude)),
        min_marker_size=float(data.get("min_marker_size", defaults.min_marker_size)),
        display_timezone=data.get("display_timezone", defaults.display_timezone),
        time_format=data.get("time_format", defaults.time_format),
        map_view=_parse_map_view(data.get("map_view") or {}),
    )


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed AppConfig object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return AppConfig()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return AppConfig()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: default window %s, warning dwell %.0fs",
        config.default_time_window.value,
        config.warning_dwell_seconds,
    )

    return config


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables.

    Useful for running without a YAML file.

    Environment variables:
        QUAKEVIEW_FEED_BASE_URL: Base URL of the summary feeds
        QUAKEVIEW_TIMEOUT: Request timeout in seconds
        QUAKEVIEW_WARNING_DWELL: Large-dataset warning dwell in seconds
        QUAKEVIEW_TIME_WINDOW: Window fetched on startup
        QUAKEVIEW_TIMEZONE: IANA zone for time labels

    Returns:
        AppConfig object from environment
    """
    data: dict[str, Any] = {}

    env_map = {
        "QUAKEVIEW_FEED_BASE_URL": "feed_base_url",
        "QUAKEVIEW_TIMEOUT": "request_timeout_seconds",
        "QUAKEVIEW_WARNING_DWELL": "warning_dwell_seconds",
        "QUAKEVIEW_TIME_WINDOW": "default_time_window",
        "QUAKEVIEW_TIMEZONE": "display_timezone",
    }
    for env_var, key in env_map.items():
        value = os.environ.get(env_var)
        if value:
            data[key] = value

    return load_config_from_dict(data)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Look up the display timezone.

    Returns None (local time) when no zone is configured or the zone
    is unknown.
    """
    if not name:
        return None

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %s, using local time", name)
        return None
