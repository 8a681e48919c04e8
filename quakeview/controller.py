"""UI State Controller - Wires Functional Core and Imperative Shell.

This module owns the view state and coordinates the pure core (reducer,
normalization, filtering, encoding) with the I/O-performing shell (feed
client) and the asyncio event loop (fetch tasks, warning timer).
"""

import asyncio
import logging
from typing import Callable

from quakeview.core.config import AppConfig
from quakeview.core.event import SeismicEvent, normalize_feed
from quakeview.core.filters import (
    MagnitudeThreshold,
    TimeWindow,
    apply_magnitude_filter,
    parse_magnitude_threshold,
    parse_time_window,
)
from quakeview.core.render import RenderFrame, build_render_frame
from quakeview.core.state import (
    Action,
    FetchFailed,
    FetchSucceeded,
    ThresholdSelected,
    TimeWindowSelected,
    ViewState,
    WarningExpired,
    initial_state,
    is_stale,
    reduce,
)
from quakeview.shell.config_loader import resolve_timezone
from quakeview.shell.feed_client import FeedClient, FeedError


logger = logging.getLogger(__name__)


Listener = Callable[[RenderFrame], None]


class UiStateController:
    """Owns the view state for one UI session.

    This class wires together:
    - Feed client (fetches the time-windowed feed)
    - Core functions (reducer, normalization, filtering, encoding)
    - Listeners (the map widget redrawing each RenderFrame)

    All methods run on a single event loop. Use it as an async context
    manager so the warning timer and in-flight fetches are released on
    every exit path.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        feed_client: FeedClient | None = None,
    ) -> None:
        """Initialize controller with configuration.

        Args:
            config: Application configuration (defaults if not provided)
            feed_client: Feed client (created if not provided)
        """
        self.config = config or AppConfig()
        self.feed_client = feed_client or FeedClient(
            base_url=self.config.feed_base_url,
            timeout=self.config.request_timeout_seconds,
        )
        self._tz = resolve_timezone(self.config.display_timezone)
        self._state = initial_state(
            self.config.default_time_window,
            self.config.default_magnitude_threshold,
        )
        self._listeners: list[Listener] = []
        self._warning_timer: asyncio.TimerHandle | None = None
        self._fetch_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._started = False

    @property
    def state(self) -> ViewState:
        """Current view state snapshot."""
        return self._state

    async def __aenter__(self) -> "UiStateController":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    def start(self) -> None:
        """Issue the initial fetch for the default time window.

        Must be called from a running event loop. Calling it again is a
        no-op.
        """
        if self._started:
            return
        self._started = True

        logger.info("Starting UI session")
        self.select_time_window(self._state.time_window)

    async def stop(self) -> None:
        """Cancel the warning timer and every in-flight fetch."""
        self._started = False
        self._cancel_warning_timer()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        self._fetch_task = None
        logger.info("Stopped UI session")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a RenderFrame after each change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_time_window(self, window: TimeWindow | str) -> None:
        """Switch the time window and fetch its feed.

        Supersedes any outstanding fetch; its response will be ignored.
        Re-selecting the current window retries the fetch.

        Raises:
            ValueError: If window is not hour/day/week/month
        """
        window = parse_time_window(window)
        loop = asyncio.get_running_loop()

        self._cancel_warning_timer()
        self._dispatch(TimeWindowSelected(window))

        generation = self._state.generation
        if self._state.warning_visible:
            self._arm_warning_timer(generation)

        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()

        task = loop.create_task(self._run_fetch(window, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._fetch_task = task

    def select_magnitude_threshold(self, threshold: MagnitudeThreshold | str) -> None:
        """Switch the magnitude threshold. No network activity.

        Raises:
            ValueError: If threshold is not a known value
        """
        self._dispatch(ThresholdSelected(parse_magnitude_threshold(threshold)))

    def visible_events(self) -> list[SeismicEvent]:
        """Events passing the current magnitude threshold, in feed order."""
        return apply_magnitude_filter(
            list(self._state.events),
            self._state.magnitude_threshold,
        )

    def render_frame(self) -> RenderFrame:
        """Build the frame the map widget should draw now."""
        return build_render_frame(self._state, self.config)

    async def wait_for_fetch(self) -> None:
        """Wait until the current fetch (and any that replaces it) settles."""
        while self._fetch_task is not None and not self._fetch_task.done():
            await asyncio.wait({self._fetch_task})

    async def _run_fetch(self, window: TimeWindow, generation: int) -> None:
        """Fetch, normalize and store the feed for one generation."""
        try:
            geojson = await self.feed_client.fetch(window)
            events = normalize_feed(geojson, self._tz, self.config.time_format)
        except FeedError as e:
            logger.error("Failed to fetch %s feed: %s", window.value, e)
            self._dispatch(FetchFailed(generation, f"Failed to load earthquakes: {e}"))
            return
        except Exception as e:
            logger.exception("Unexpected error loading %s feed", window.value)
            self._dispatch(FetchFailed(generation, f"Failed to load earthquakes: {e}"))
            return

        if is_stale(self._state, generation):
            logger.debug(
                "Discarding stale %s feed (generation %d, current %d)",
                window.value,
                generation,
                self._state.generation,
            )
            return

        logger.info("Loaded %d earthquakes for %s", len(events), window.value)
        self._dispatch(FetchSucceeded(generation, tuple(events)))

    def _arm_warning_timer(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        self._warning_timer = loop.call_later(
            self.config.warning_dwell_seconds,
            self._on_warning_expired,
            generation,
        )

    def _cancel_warning_timer(self) -> None:
        if self._warning_timer is not None:
            self._warning_timer.cancel()
            self._warning_timer = None

    def _on_warning_expired(self, generation: int) -> None:
        self._warning_timer = None
        self._dispatch(WarningExpired(generation))

    def _dispatch(self, action: Action) -> None:
        """Apply an action and notify listeners if the state changed."""
        new_state = reduce(self._state, action)
        if new_state is self._state:
            return

        self._state = new_state
        frame = self.render_frame()

        for listener in list(self._listeners):
            try:
                listener(frame)
            except Exception:
                logger.exception("Render listener failed")
