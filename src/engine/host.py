"""
Host environment bindings.

The engine core only understands handle_event(kind, payload, timestamp).
HostAdapter is the one place that knows about host event types: it binds
listeners on a HostEnvironment, translates touch events, fills in scroll
offsets from viewport geometry and stamps events with the engine clock.
"""

import functools
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from src.engine.clock import Clock
from src.models.interaction_event import ViewportGeometry
from src.utils.constants import (
    HOST_EVENT_ACTIONS,
    HOST_EVENT_TYPES,
    HOST_SCROLL,
    HOST_TOUCH_MOVE,
)


logger = logging.getLogger(__name__)

HostHandler = Callable[[Optional[Mapping[str, Any]]], None]


class HostEnvironment(ABC):
    """
    Abstract host event system.

    Subclasses must implement:
        - add_listener(): register a handler for a host event type
        - remove_listener(): deregister a previously added handler
        - geometry(): current viewport/document geometry
    """

    @abstractmethod
    def add_listener(self, event_type: str, handler: HostHandler) -> None:
        pass

    @abstractmethod
    def remove_listener(self, event_type: str, handler: HostHandler) -> None:
        pass

    @abstractmethod
    def geometry(self) -> ViewportGeometry:
        pass


class SimulatedHost(HostEnvironment):
    """
    In-memory host for tests, replay and headless embedding.

    Example usage:
        host = SimulatedHost(ViewportGeometry(0, 800, 4000))
        host.dispatch("pointermove", {"x": 10, "y": 20})
        host.scroll_to(1200)
    """

    def __init__(self, geometry: Optional[ViewportGeometry] = None) -> None:
        self._geometry = geometry or ViewportGeometry()
        self._listeners: Dict[str, List[HostHandler]] = defaultdict(list)

    def add_listener(self, event_type: str, handler: HostHandler) -> None:
        self._listeners[event_type].append(handler)

    def remove_listener(self, event_type: str, handler: HostHandler) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def geometry(self) -> ViewportGeometry:
        return self._geometry

    def set_geometry(self, geometry: ViewportGeometry) -> None:
        self._geometry = geometry

    def listener_count(self, event_type: Optional[str] = None) -> int:
        """Number of registered handlers, optionally for one event type."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch(
        self, event_type: str, payload: Optional[Mapping[str, Any]] = None
    ) -> int:
        """
        Deliver an event to every handler registered for its type.

        Returns:
            Number of handlers invoked
        """
        handlers = list(self._listeners.get(event_type, []))
        for handler in handlers:
            handler(payload)
        return len(handlers)

    def scroll_to(self, scroll_y: float) -> int:
        """Move the viewport and dispatch a scroll event."""
        self._geometry = ViewportGeometry(
            scroll_y=scroll_y,
            viewport_height=self._geometry.viewport_height,
            document_height=self._geometry.document_height,
        )
        return self.dispatch(HOST_SCROLL, {'scroll_y': scroll_y})


class HostAdapter:
    """
    Binds host events to an engine's handle_event entry point.

    Args:
        host: Host event system to listen on
        handle_event: Engine entry point (kind, payload, timestamp_ms)
        clock: Clock used to timestamp host events
    """

    def __init__(
        self,
        host: HostEnvironment,
        handle_event: Callable[[str, Mapping[str, Any], float], None],
        clock: Clock,
    ) -> None:
        self.host = host
        self._handle_event = handle_event
        self._clock = clock
        self._bindings: List[Tuple[str, HostHandler]] = []

    @property
    def attached(self) -> bool:
        return bool(self._bindings)

    def attach(self) -> None:
        """Register one listener per supported host event type."""
        if self._bindings:
            return
        for event_type in HOST_EVENT_TYPES:
            handler = functools.partial(self._on_host_event, event_type)
            self.host.add_listener(event_type, handler)
            self._bindings.append((event_type, handler))

    def detach(self) -> None:
        """Remove every listener this adapter registered."""
        for event_type, handler in self._bindings:
            self.host.remove_listener(event_type, handler)
        self._bindings = []

    def _on_host_event(
        self, event_type: str, payload: Optional[Mapping[str, Any]] = None
    ) -> None:
        translated = self.translate(event_type, payload or {})
        if translated is None:
            logger.debug("Ignoring %s event without usable payload", event_type)
            return
        self._handle_event(
            HOST_EVENT_ACTIONS[event_type], translated, self._clock.now_ms()
        )

    def translate(
        self, event_type: str, payload: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Convert a host payload into an engine payload.

        Touch moves use the first touch point; scrolls without an offset
        read it from the host geometry.

        Returns:
            Engine payload, or None when the event carries nothing usable
        """
        if event_type == HOST_TOUCH_MOVE and 'touches' in payload:
            touches = payload['touches']
            if not touches:
                return None
            first = touches[0]
            return {'x': first['x'], 'y': first['y']}

        if event_type == HOST_SCROLL and 'scroll_y' not in payload:
            return {'scroll_y': self.host.geometry().scroll_y}

        return dict(payload)
