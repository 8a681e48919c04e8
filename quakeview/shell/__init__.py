"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS summary feed client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All display logic should be in core.
"""

from quakeview.shell.feed_client import FeedClient, FeedError, NetworkError, ParseError
from quakeview.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "FeedClient",
    "FeedError",
    "NetworkError",
    "ParseError",
    "load_config",
    "load_config_from_env",
]
