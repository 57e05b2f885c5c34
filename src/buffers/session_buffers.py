"""
Session buffers - All rolling windows and counters for one engine.

Turns raw host observations (positions, scroll offsets, timestamps) into
the bounded samples the feature extractor reads. Raw positions are kept
only as the single previous observation needed to compute a velocity.
"""

import math
from typing import Optional, Tuple

from src.buffers.sample_buffer import SampleBuffer, ActionCounts, DwellTimes
from src.models.interaction_event import ViewportGeometry
from src.utils.constants import (
    ACTION_SCROLL,
    ACTION_POINTER_MOVE,
    DISCRETE_ACTIONS,
    SCROLL_BUFFER_CAPACITY,
    POINTER_BUFFER_CAPACITY,
    HESITATION_BUFFER_CAPACITY,
    REGION_TOP,
    REGION_MIDDLE,
    REGION_BOTTOM,
    REGION_TOP_LIMIT,
    REGION_MIDDLE_LIMIT,
)


def region_for_ratio(scroll_ratio: float) -> str:
    """
    Map a scroll ratio onto a page third.

    Returns:
        'top' below 0.33, 'middle' below 0.66, otherwise 'bottom'
    """
    if scroll_ratio < REGION_TOP_LIMIT:
        return REGION_TOP
    elif scroll_ratio < REGION_MIDDLE_LIMIT:
        return REGION_MIDDLE
    return REGION_BOTTOM


class SessionBuffers:
    """
    Owner of every sample window, counter and dwell accumulator.

    Velocities are stored in px/ms. Observations with a non-positive time
    delta update the baseline but append no sample.

    Example usage:
        buffers = SessionBuffers(start_ms=0.0)
        buffers.record_pointer(10, 10, 16.0)
        buffers.record_pointer(40, 50, 32.0)
    """

    def __init__(self, start_ms: float, initial_scroll_y: float = 0.0) -> None:
        """
        Initialize empty buffers.

        Args:
            start_ms: Engine start time; baseline for scroll and dwell deltas
            initial_scroll_y: Scroll offset at engine start
        """
        self.scroll = SampleBuffer(SCROLL_BUFFER_CAPACITY)
        self.pointer = SampleBuffer(POINTER_BUFFER_CAPACITY)
        self.hesitation = SampleBuffer(HESITATION_BUFFER_CAPACITY)
        self.actions = ActionCounts()
        self.dwell = DwellTimes()

        self._last_scroll_y = initial_scroll_y
        self._last_scroll_ms = start_ms
        self._last_pointer: Optional[Tuple[float, float, float]] = None
        self._last_discrete_ms: Optional[float] = None
        self._last_dwell_ms = start_ms

    def record_scroll(self, scroll_y: float, timestamp_ms: float) -> None:
        """Count a scroll and sample its speed against the previous offset."""
        self.actions.increment(ACTION_SCROLL)

        delta_ms = timestamp_ms - self._last_scroll_ms
        if delta_ms > 0:
            distance = abs(scroll_y - self._last_scroll_y)
            self.scroll.append(distance / delta_ms)

        self._last_scroll_y = scroll_y
        self._last_scroll_ms = timestamp_ms

    def record_pointer(self, x: float, y: float, timestamp_ms: float) -> None:
        """
        Count a pointer move and sample its speed.

        The first move only establishes the baseline position.
        """
        self.actions.increment(ACTION_POINTER_MOVE)

        if self._last_pointer is not None:
            last_x, last_y, last_ms = self._last_pointer
            delta_ms = timestamp_ms - last_ms
            if delta_ms > 0:
                distance = math.hypot(x - last_x, y - last_y)
                self.pointer.append(distance / delta_ms)

        self._last_pointer = (x, y, timestamp_ms)

    def record_discrete(self, kind: str, timestamp_ms: float) -> None:
        """
        Count a click or key press and sample the gap since the previous one.

        Raises:
            ValueError: If kind is not a discrete action
        """
        if kind not in DISCRETE_ACTIONS:
            raise ValueError(
                f"'{kind}' is not a discrete action: {sorted(DISCRETE_ACTIONS)}"
            )
        self.actions.increment(kind)

        if self._last_discrete_ms is not None:
            self.hesitation.append(max(0.0, timestamp_ms - self._last_discrete_ms))
        self._last_discrete_ms = timestamp_ms

    def update_dwell(self, geometry: ViewportGeometry, now_ms: float) -> str:
        """
        Credit time elapsed since the last check to the current page third.

        Args:
            geometry: Current viewport geometry
            now_ms: Current time

        Returns:
            The region that was credited
        """
        elapsed = now_ms - self._last_dwell_ms
        self._last_dwell_ms = now_ms

        region = region_for_ratio(geometry.scroll_ratio)
        self.dwell.add(region, elapsed)
        return region
