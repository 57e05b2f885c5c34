"""
Cognition engine controller.

Owns every buffer, the tick task, host listener registrations and the
subscriber list for one session. Data flow:

    host event -> handle_event -> buffer update
    tick -> dwell update -> extract -> classify -> phase -> emit

Lifecycle: IDLE (constructed, listening) -> ACTIVE (first interaction)
-> STOPPED (terminal).
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from src.buffers.session_buffers import SessionBuffers
from src.engine.clock import Clock, SystemClock
from src.engine.host import HostAdapter, HostEnvironment
from src.engine.scheduler import AsyncioScheduler, ScheduledTask, Scheduler
from src.models.engine_config import EngineConfig, load_config
from src.models.interaction_event import ViewportGeometry
from src.models.session_state import SessionState
from src.scoring.archetype_classifier import ArchetypeClassifier
from src.scoring.feature_extractor import FeatureExtractor
from src.scoring.phase import PhaseComputer
from src.utils.constants import (
    ACTION_SCROLL,
    ACTION_POINTER_MOVE,
    DEFAULT_ARCHETYPE,
    DISCRETE_ACTIONS,
    HOST_EVENT_ACTIONS,
    MIN_ACTIONS_FOR_CLASSIFICATION,
    STATUS_IDLE,
    STATUS_ACTIVE,
    STATUS_STOPPED,
    TICK_INTERVAL_MS,
)


logger = logging.getLogger(__name__)

Subscriber = Callable[[SessionState], None]


class CognitionEngine:
    """
    Engine handle for one browsing session.

    Build engines with start(); the constructor wires state but does not
    attach listeners, schedule ticks or emit.

    Example usage:
        engine = start({"phaseSeconds": 4}, host=host)
        engine.subscribe(lambda state: print(state.archetype))
        ...
        engine.stop()
    """

    def __init__(
        self,
        config: EngineConfig,
        clock: Clock,
        scheduler: Scheduler,
        host: Optional[HostEnvironment] = None,
    ) -> None:
        self.config = config
        self._clock = clock
        self._scheduler = scheduler
        self._host = host

        self.start_ms = clock.now_ms()
        self._buffers = SessionBuffers(self.start_ms, self._geometry().scroll_y)
        self._extractor = FeatureExtractor(self.start_ms)
        self._classifier = ArchetypeClassifier()
        self._phase = PhaseComputer(config.phase_seconds)

        self._subscribers: List[Subscriber] = []
        self._first_interaction_ms: Optional[float] = None
        self._archetype = DEFAULT_ARCHETYPE
        self._state = SessionState()
        self._status = STATUS_IDLE
        self._stopped = False
        self._task: Optional[ScheduledTask] = None
        self._adapter = HostAdapter(host, self.handle_event, clock) if host else None

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def status(self) -> str:
        """'IDLE', 'ACTIVE' or 'STOPPED'."""
        return self._status

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def state(self) -> SessionState:
        """Last emitted state."""
        return self._state

    @property
    def buffers(self) -> SessionBuffers:
        return self._buffers

    @property
    def first_interaction_ms(self) -> Optional[float]:
        return self._first_interaction_ms

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _start(self, subscribers: Iterable[Subscriber] = ()) -> None:
        """Attach listeners, schedule the tick and emit the initial state."""
        for callback in subscribers:
            self.subscribe(callback)

        if self._adapter is not None:
            self._adapter.attach()
        self._task = self._scheduler.call_every(TICK_INTERVAL_MS, self.tick)

        logger.info(
            "Cognition engine started (phase_seconds=%s)", self.config.phase_seconds
        )
        self._emit(self._clock.now_ms())

    def stop(self) -> None:
        """
        Stop the engine. Idempotent.

        Cancels the tick, detaches every host listener and makes all
        further events and ticks no-ops.
        """
        if self._stopped:
            return
        self._stopped = True
        self._status = STATUS_STOPPED

        if self._task is not None:
            self._task.cancel()
            self._task = None
        if self._adapter is not None:
            self._adapter.detach()

        logger.info("Cognition engine stopped")

    def subscribe(self, callback: Subscriber) -> None:
        """
        Register a listener for every subsequent emission.

        Subscribing after stop is allowed; the callback is simply never
        invoked.

        Raises:
            TypeError: If callback is not callable
        """
        if not callable(callback):
            raise TypeError(f"Subscriber must be callable, got: {type(callback).__name__}")
        self._subscribers.append(callback)

    # -------------------------------------------------------------------------
    # Event intake
    # -------------------------------------------------------------------------

    def handle_event(
        self,
        kind: str,
        payload: Optional[Mapping[str, Any]] = None,
        timestamp_ms: Optional[float] = None,
    ) -> None:
        """
        Record one interaction.

        Args:
            kind: Action kind (scroll, click, pointer_move, key_press) or
                  the equivalent host event type
            payload: {'scroll_y'} for scrolls, {'x', 'y'} for pointer moves
            timestamp_ms: Event time; defaults to the engine clock
        """
        if self._stopped:
            return

        kind = HOST_EVENT_ACTIONS.get(kind, kind)
        payload = payload or {}
        now = self._clock.now_ms() if timestamp_ms is None else timestamp_ms

        if kind == ACTION_SCROLL:
            scroll_y = payload.get('scroll_y')
            if scroll_y is None:
                scroll_y = self._geometry().scroll_y
            self._buffers.record_scroll(float(scroll_y), now)
        elif kind == ACTION_POINTER_MOVE:
            if payload.get('x') is None or payload.get('y') is None:
                logger.debug("Ignoring pointer event without coordinates")
                return
            self._buffers.record_pointer(float(payload['x']), float(payload['y']), now)
        elif kind in DISCRETE_ACTIONS:
            self._buffers.record_discrete(kind, now)
        else:
            logger.debug("Ignoring unknown event kind '%s'", kind)
            return

        self._record_first_interaction(now)

    def _record_first_interaction(self, now: float) -> None:
        if self._first_interaction_ms is not None:
            return
        self._first_interaction_ms = now
        self._status = STATUS_ACTIVE
        logger.info(
            "First interaction after %.0fms; phase ramp started", now - self.start_ms
        )

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self) -> Optional[SessionState]:
        """
        Run the full pipeline once and notify subscribers.

        Returns:
            The emitted state, or None once stopped
        """
        if self._stopped:
            return None
        now = self._clock.now_ms()
        self._buffers.update_dwell(self._geometry(), now)
        return self._emit(now)

    def _emit(self, now: float) -> SessionState:
        signature = self._extractor.extract(self._buffers, self._first_interaction_ms)
        candidate = self._classifier.classify(signature)

        # Archetype only moves once enough actions were seen
        if self._buffers.actions.total >= MIN_ACTIONS_FOR_CLASSIFICATION:
            self._archetype = candidate

        state = SessionState(
            signature=signature,
            archetype=self._archetype,
            phase=self._phase.compute(self._first_interaction_ms, now),
        )
        self._state = state

        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Subscriber %r failed", callback)

        return state

    def _geometry(self) -> ViewportGeometry:
        if self._host is None:
            return ViewportGeometry()
        return self._host.geometry()


def start(
    config: Union[EngineConfig, Mapping[str, Any], None] = None,
    *,
    host: Optional[HostEnvironment] = None,
    clock: Optional[Clock] = None,
    scheduler: Optional[Scheduler] = None,
    subscribers: Iterable[Subscriber] = (),
) -> CognitionEngine:
    """
    Start a cognition engine.

    Args:
        config: EngineConfig, {'phaseSeconds': n} mapping, or None to read
                the environment
        host: Host event system to bind to; None for direct handle_event use
        clock: Time source; defaults to the scheduler's clock or SystemClock
        scheduler: Tick scheduler; defaults to AsyncioScheduler on the
                   running loop
        subscribers: Callbacks registered before the initial emission

    Returns:
        Running CognitionEngine
    """
    engine_config = config if isinstance(config, EngineConfig) else load_config(config)
    scheduler = scheduler or AsyncioScheduler()
    clock = clock or getattr(scheduler, 'clock', None) or SystemClock()

    engine = CognitionEngine(engine_config, clock, scheduler, host=host)
    engine._start(subscribers)
    return engine
