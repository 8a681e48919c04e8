"""View state and reducer - Pure functions.

The UI state is an explicit finite state machine. Every input (user
selection, fetch completion, timer expiry) is an action, and reduce()
computes the next state. Side effects (network, timers) are performed
by the controller, never here.
"""

from dataclasses import dataclass, replace
from enum import Enum

from quakeview.core.event import SeismicEvent
from quakeview.core.filters import MagnitudeThreshold, TimeWindow


class FetchState(str, Enum):
    """Progress of the fetch for the current time window."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


# Windows large enough to show the slow-loading warning
LARGE_WINDOWS = frozenset({TimeWindow.MONTH})


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of the UI state.

    Attributes:
        time_window: Selected feed window
        magnitude_threshold: Selected magnitude filter
        fetch_state: Progress of the fetch for time_window
        warning_visible: Whether the large-dataset warning is shown
        events: Normalized events from the last completed fetch
        generation: Id of the fetch the state is waiting on
        error_message: Last fetch error shown to the user, if any
    """
    time_window: TimeWindow = TimeWindow.DAY
    magnitude_threshold: MagnitudeThreshold = MagnitudeThreshold.ALL
    fetch_state: FetchState = FetchState.IDLE
    warning_visible: bool = False
    events: tuple[SeismicEvent, ...] = ()
    generation: int = 0
    error_message: str | None = None

    @property
    def loading(self) -> bool:
        """True while the fetch for the current window is outstanding."""
        return self.fetch_state is FetchState.LOADING


@dataclass(frozen=True)
class TimeWindowSelected:
    """User picked a time window (re-selecting the same one retries)."""
    time_window: TimeWindow


@dataclass(frozen=True)
class ThresholdSelected:
    """User picked a magnitude threshold."""
    magnitude_threshold: MagnitudeThreshold


@dataclass(frozen=True)
class FetchSucceeded:
    """A fetch finished and its features were normalized."""
    generation: int
    events: tuple[SeismicEvent, ...]


@dataclass(frozen=True)
class FetchFailed:
    """A fetch failed with a network or parse error."""
    generation: int
    error_message: str


@dataclass(frozen=True)
class WarningExpired:
    """The large-dataset warning dwell time elapsed."""
    generation: int


Action = (
    TimeWindowSelected
    | ThresholdSelected
    | FetchSucceeded
    | FetchFailed
    | WarningExpired
)


def initial_state(
    time_window: TimeWindow = TimeWindow.DAY,
    magnitude_threshold: MagnitudeThreshold = MagnitudeThreshold.ALL,
) -> ViewState:
    """Build the state before the first fetch is issued.

    Pure function.
    """
    return ViewState(
        time_window=time_window,
        magnitude_threshold=magnitude_threshold,
    )


def is_stale(state: ViewState, generation: int) -> bool:
    """Check whether a completion belongs to a superseded fetch.

    Pure function.
    """
    return generation != state.generation


def reduce(state: ViewState, action: Action) -> ViewState:
    """Compute the next state for an action.

    Pure function - returns new state without modifying input.
    Completions tagged with an old generation leave the state unchanged.

    Args:
        state: Current state
        action: Action to apply

    Returns:
        Next state

    Raises:
        TypeError: If action is not a known action type
    """
    if isinstance(action, TimeWindowSelected):
        return replace(
            state,
            time_window=action.time_window,
            fetch_state=FetchState.LOADING,
            warning_visible=action.time_window in LARGE_WINDOWS,
            generation=state.generation + 1,
            error_message=None,
        )

    if isinstance(action, ThresholdSelected):
        return replace(state, magnitude_threshold=action.magnitude_threshold)

    if isinstance(action, FetchSucceeded):
        if is_stale(state, action.generation):
            return state
        return replace(
            state,
            fetch_state=FetchState.READY,
            events=tuple(action.events),
            error_message=None,
        )

    if isinstance(action, FetchFailed):
        if is_stale(state, action.generation):
            return state
        # Prior events are kept on screen
        return replace(
            state,
            fetch_state=FetchState.FAILED,
            error_message=action.error_message,
        )

    if isinstance(action, WarningExpired):
        if is_stale(state, action.generation):
            return state
        return replace(state, warning_visible=False)

    raise TypeError(f"Unknown action: {action!r}")
