"""Session Entry Point.

Thin wrapper that configures logging, loads configuration and runs a
UI state controller. The map widget subscribes to the controller; for
local runs this module loads one feed and prints what would be drawn.
"""

import asyncio
import json
import logging
import os
from typing import Any

from quakeview.controller import UiStateController
from quakeview.core.config import AppConfig, validate_config
from quakeview.core.filters import MagnitudeThreshold, TimeWindow
from quakeview.core.render import RenderFrame
from quakeview.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> AppConfig:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif any(key.startswith("QUAKEVIEW_") for key in os.environ):
        return load_config_from_env()
    else:
        return load_config()


def summarize_frame(frame: RenderFrame) -> dict[str, Any]:
    """Summarize a render frame as a JSON-friendly dict."""
    summary: dict[str, Any] = {
        "loading": frame.loading,
        "warning_visible": frame.warning_visible,
        "total_events": frame.total_events,
        "visible_events": frame.visible_events,
        "markers": [
            {
                "position": list(marker.position),
                "color": marker.color_category,
                "size": marker.size_units,
                "popup": marker.popup_text,
            }
            for marker in frame.markers
        ],
    }

    if frame.error_message:
        summary["error"] = frame.error_message

    return summary


async def run_once(
    config: AppConfig,
    time_window: TimeWindow | str | None = None,
    magnitude_threshold: MagnitudeThreshold | str | None = None,
    controller: UiStateController | None = None,
) -> RenderFrame:
    """Run a session until the first feed has loaded.

    Args:
        config: Application configuration
        time_window: Window to show instead of the configured default
        magnitude_threshold: Threshold to apply instead of the default
        controller: Controller to run (created if not provided)

    Returns:
        The frame the map widget would draw
    """
    controller = controller or UiStateController(config)

    async with controller:
        if time_window is not None:
            controller.select_time_window(time_window)
        if magnitude_threshold is not None:
            controller.select_magnitude_threshold(magnitude_threshold)

        await controller.wait_for_fetch()
        frame = controller.render_frame()

    logger.info(
        "Showing %d of %d earthquakes",
        frame.visible_events,
        frame.total_events,
    )

    return frame


# For local testing
if __name__ == "__main__":
    import sys

    config = _get_config()

    result = validate_config(config)
    for error in result.errors:
        logger.log(
            logging.ERROR if error.severity == "error" else logging.WARNING,
            "%s: %s",
            error.field,
            error.message,
        )
    if not result.valid:
        sys.exit(1)

    window = sys.argv[1] if len(sys.argv) > 1 else None
    threshold = sys.argv[2] if len(sys.argv) > 2 else None

    frame = asyncio.run(run_once(config, window, threshold))
    print(json.dumps(summarize_frame(frame), indent=2))
