"""
Trace replay - run recorded interaction events through a fresh engine.

Uses a ManualClock and ManualScheduler so ticks fire exactly where they
would have in the live session, independent of wall-clock time.
"""

from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from src.engine.clock import ManualClock
from src.engine.controller import start
from src.engine.host import SimulatedHost
from src.engine.scheduler import ManualScheduler
from src.models.engine_config import EngineConfig
from src.models.interaction_event import InteractionEvent, ViewportGeometry
from src.models.session_state import SessionState
from src.utils.constants import TICK_INTERVAL_MS


def replay_trace(
    events: Sequence[InteractionEvent],
    config: Union[EngineConfig, Mapping[str, Any], None] = None,
    start_ms: float = 0.0,
    settle_ms: float = TICK_INTERVAL_MS,
) -> List[SessionState]:
    """
    Replay a trace and collect every emitted state.

    Args:
        events: Recorded events; replayed in timestamp order
        config: Engine config for the replay
        start_ms: Trace time at which the session (engine) started
        settle_ms: Extra time to run after the last event

    Returns:
        Emitted states, the construction emission first

    Raises:
        ValueError: If an event predates start_ms
    """
    ordered = sorted(events, key=lambda e: e.timestamp_ms)
    if ordered and ordered[0].timestamp_ms < start_ms:
        raise ValueError(
            f"Event at {ordered[0].timestamp_ms}ms predates session start {start_ms}ms"
        )

    initial_geometry = ViewportGeometry()
    for event in ordered:
        if event.has_geometry:
            initial_geometry = event.geometry()
            break

    clock = ManualClock(start_ms)
    scheduler = ManualScheduler(clock)
    host = SimulatedHost(initial_geometry)
    states: List[SessionState] = []

    engine = start(
        config,
        host=host,
        clock=clock,
        scheduler=scheduler,
        subscribers=[states.append],
    )
    try:
        for event in ordered:
            scheduler.advance_to(event.timestamp_ms)
            geometry = event.geometry()
            if geometry is not None:
                host.set_geometry(geometry)
            host.dispatch(event.event_type, event.payload())
        scheduler.advance(settle_ms)
    finally:
        engine.stop()

    return states


def summarize_timeline(states: Sequence[SessionState]) -> Dict[str, Any]:
    """
    Summarize a replayed state timeline.

    Returns:
        Dict with emission count, archetype share per emission, the
        archetype transitions and the final state
    """
    if not states:
        return {
            'emissions': 0,
            'archetype_share': {},
            'transitions': [],
            'final_state': None,
        }

    counts = Counter(state.archetype for state in states)
    transitions = []
    previous: Optional[str] = None
    for index, state in enumerate(states):
        if state.archetype != previous:
            transitions.append({'emission': index, 'archetype': state.archetype})
            previous = state.archetype

    return {
        'emissions': len(states),
        'archetype_share': {
            archetype: round(count / len(states), 4)
            for archetype, count in counts.items()
        },
        'transitions': transitions,
        'final_state': states[-1].to_dict(),
    }
