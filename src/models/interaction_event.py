"""
InteractionEvent model - A single recorded host event.

Represents one row of a recorded interaction trace. Carries only timing,
motion and viewport geometry; never content, targets or identifiers.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from src.utils.constants import HOST_EVENT_ACTIONS


@dataclass(frozen=True)
class ViewportGeometry:
    """
    Viewport and document geometry read at tick time.

    Attributes:
        scroll_y: Vertical scroll offset in px
        viewport_height: Visible height in px
        document_height: Full scrollable height in px
    """

    scroll_y: float = 0.0
    viewport_height: float = 0.0
    document_height: float = 0.0

    @property
    def scroll_ratio(self) -> float:
        """
        Position of the viewport within the scrollable range.

        Not clamped; a short document yields a ratio of 0.
        """
        scrollable = max(1.0, self.document_height - self.viewport_height)
        return self.scroll_y / scrollable


@dataclass(frozen=True)
class InteractionEvent:
    """
    One recorded host interaction event.

    Attributes:
        timestamp_ms: Milliseconds on the trace clock
        event_type: Host event type (scroll, pointermove, click, ...)
        x: Pointer/touch x coordinate (pointer events only)
        y: Pointer/touch y coordinate (pointer events only)
        scroll_y: Scroll offset at the time of the event
        viewport_height: Viewport height at the time of the event
        document_height: Document height at the time of the event
    """

    timestamp_ms: float
    event_type: str
    x: Optional[float] = None
    y: Optional[float] = None
    scroll_y: Optional[float] = None
    viewport_height: Optional[float] = None
    document_height: Optional[float] = None

    def __post_init__(self) -> None:
        """
        Validate and normalize event data after initialization.

        Raises:
            ValueError: If timestamp is negative
            ValueError: If event_type is not a known host event
        """
        if self.timestamp_ms < 0:
            raise ValueError(
                f"timestamp_ms cannot be negative: {self.timestamp_ms}"
            )

        event_type = self.event_type.strip().lower()
        if event_type not in HOST_EVENT_ACTIONS:
            raise ValueError(
                f"Invalid event_type '{self.event_type}'. "
                f"Must be one of: {sorted(HOST_EVENT_ACTIONS)}"
            )
        object.__setattr__(self, 'event_type', event_type)

    @property
    def action_kind(self) -> str:
        """Engine action kind this host event maps to."""
        return HOST_EVENT_ACTIONS[self.event_type]

    @property
    def has_geometry(self) -> bool:
        """Whether the row carries a full geometry reading."""
        return None not in (self.scroll_y, self.viewport_height, self.document_height)

    def geometry(self) -> Optional[ViewportGeometry]:
        """Geometry reading carried by this event, if complete."""
        if not self.has_geometry:
            return None
        return ViewportGeometry(
            scroll_y=self.scroll_y,
            viewport_height=self.viewport_height,
            document_height=self.document_height,
        )

    def payload(self) -> Dict[str, Any]:
        """Host event payload as delivered to listeners."""
        payload: Dict[str, Any] = {}
        if self.x is not None and self.y is not None:
            payload['x'] = self.x
            payload['y'] = self.y
        if self.scroll_y is not None:
            payload['scroll_y'] = self.scroll_y
        return payload

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp_ms': self.timestamp_ms,
            'event_type': self.event_type,
            'x': self.x,
            'y': self.y,
            'scroll_y': self.scroll_y,
            'viewport_height': self.viewport_height,
            'document_height': self.document_height,
        }
