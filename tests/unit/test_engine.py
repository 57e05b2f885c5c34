"""
Unit tests for the engine layer.

Tests cover:
- ManualClock / ManualScheduler / AsyncioScheduler
- HostAdapter event translation and listener lifecycle
- CognitionEngine: emission, gating, phase, lifecycle, subscriber isolation
"""

import asyncio
import logging

import pytest

from src.engine.clock import ManualClock, SystemClock
from src.engine.controller import CognitionEngine, start
from src.engine.host import SimulatedHost
from src.engine.scheduler import AsyncioScheduler, ManualScheduler
from src.models.engine_config import EngineConfig
from src.models.interaction_event import ViewportGeometry
from src.utils.constants import HOST_EVENT_TYPES


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def clock():
    return ManualClock(0.0)


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def host():
    """Host with an 800px viewport over a 4000px document."""
    return SimulatedHost(ViewportGeometry(scroll_y=0, viewport_height=800, document_height=4000))


@pytest.fixture
def states():
    return []


@pytest.fixture
def engine(clock, scheduler, host, states):
    """Running engine bound to the simulated host."""
    engine = start(
        {'phaseSeconds': 5},
        host=host,
        clock=clock,
        scheduler=scheduler,
        subscribers=[states.append],
    )
    yield engine
    engine.stop()


# =============================================================================
# Clock & Scheduler Tests
# =============================================================================

class TestManualClock:
    """Tests for the virtual clock."""

    def test_advance(self):
        clock = ManualClock(100)
        assert clock.advance(50) == 150
        assert clock.now_ms() == 150

    def test_reject_backwards(self):
        """Test the clock never moves backwards."""
        clock = ManualClock(100)
        with pytest.raises(ValueError):
            clock.advance(-1)
        with pytest.raises(ValueError):
            clock.set(50)

    def test_system_clock_is_monotonic(self):
        clock = SystemClock()
        first = clock.now_ms()
        assert clock.now_ms() >= first


class TestManualScheduler:
    """Tests for the clock-driven scheduler."""

    def test_fires_at_each_interval(self, clock, scheduler):
        """Test callbacks fire at their due times."""
        seen = []
        scheduler.call_every(200, lambda: seen.append(clock.now_ms()))

        fired = scheduler.advance(1000)

        assert fired == 5
        assert seen == [200, 400, 600, 800, 1000]
        assert clock.now_ms() == 1000

    def test_cancel_stops_callbacks(self, clock, scheduler):
        """Test a cancelled task no longer fires."""
        seen = []
        task = scheduler.call_every(200, lambda: seen.append(clock.now_ms()))
        scheduler.advance(400)
        task.cancel()
        scheduler.advance(1000)

        assert seen == [200, 400]
        assert scheduler.pending == 0

    def test_advance_to_partial_interval(self, clock, scheduler):
        """Test advancing between ticks fires nothing extra."""
        seen = []
        scheduler.call_every(200, lambda: seen.append(clock.now_ms()))
        scheduler.advance_to(350)

        assert seen == [200]
        assert clock.now_ms() == 350

    def test_reject_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)


class TestAsyncioScheduler:
    """Tests for the event-loop scheduler."""

    def test_requires_running_loop(self):
        """Test construction outside a loop raises RuntimeError."""
        with pytest.raises(RuntimeError):
            AsyncioScheduler()

    def test_engine_ticks_on_event_loop(self):
        """Test a default engine emits on the running loop until stopped."""
        async def run():
            states = []
            engine = start(subscribers=[states.append])
            await asyncio.sleep(0.5)
            engine.stop()
            emitted = len(states)
            await asyncio.sleep(0.3)
            return emitted, len(states)

        emitted, after_stop = asyncio.run(run())

        assert emitted >= 2
        assert after_stop == emitted


# =============================================================================
# Host Adapter Tests
# =============================================================================

class TestHostAdapter:
    """Tests for host event binding."""

    def test_listeners_attached_for_every_event_type(self, engine, host):
        """Test one listener per supported host event type."""
        for event_type in HOST_EVENT_TYPES:
            assert host.listener_count(event_type) == 1

    def test_stop_detaches_all_listeners(self, engine, host):
        """Test stop removes every registration, touch listeners included."""
        engine.stop()
        assert host.listener_count() == 0

    def test_touchstart_counts_as_click(self, engine, host):
        host.dispatch("touchstart", {'x': 5, 'y': 5})
        assert engine.buffers.actions["click"] == 1

    def test_touchmove_uses_first_touch(self, engine, host, scheduler):
        """Test touch moves feed the pointer buffer from the first touch."""
        host.dispatch("touchmove", {'touches': [{'x': 0, 'y': 0}, {'x': 99, 'y': 99}]})
        scheduler.advance(10)
        host.dispatch("touchmove", {'touches': [{'x': 30, 'y': 40}]})

        assert engine.buffers.actions["pointer_move"] == 2
        assert engine.buffers.pointer.values() == [5.0]

    def test_touchmove_without_touches_ignored(self, engine, host):
        host.dispatch("touchmove", {'touches': []})
        assert engine.buffers.actions.total == 0
        assert engine.status == "IDLE"

    def test_scroll_reads_offset_from_geometry(self, engine, host, scheduler):
        """Test scroll events without an offset use host geometry."""
        scheduler.advance(100)
        host.set_geometry(ViewportGeometry(400, 800, 4000))
        host.dispatch("scroll")

        assert engine.buffers.scroll.values() == [4.0]

    def test_events_stamped_with_engine_clock(self, engine, host, scheduler):
        scheduler.advance(1234)
        host.dispatch("click")
        assert engine.first_interaction_ms == 1234


# =============================================================================
# CognitionEngine Tests
# =============================================================================

class TestCognitionEngine:
    """Tests for the engine controller."""

    def test_initial_emission(self, engine, states):
        """Test start emits once to initial subscribers."""
        assert len(states) == 1
        assert states[0].archetype == "Analyst"
        assert states[0].phase == 0.0
        assert engine.status == "IDLE"

    def test_emits_every_tick(self, engine, scheduler, states):
        """Test one emission per 200ms tick."""
        scheduler.advance(1000)
        assert len(states) == 6

    def test_late_subscriber_gets_following_ticks(self, engine, scheduler):
        late = []
        engine.subscribe(late.append)
        scheduler.advance(400)
        assert len(late) == 2

    def test_state_property_tracks_last_emission(self, engine, scheduler, states):
        scheduler.advance(200)
        assert engine.state is states[-1]

    def test_idle_to_active_on_first_interaction(self, engine, host):
        host.dispatch("keypress")
        assert engine.status == "ACTIVE"

    def test_phase_ramps_from_first_interaction(self, engine, host, scheduler):
        """Test phase reaches exactly 1 at phase_seconds after first interaction."""
        scheduler.advance(1000)
        host.dispatch("click")

        scheduler.advance(2400)
        assert engine.state.phase == pytest.approx(1 - (1 - 0.48) ** 2)

        scheduler.advance(2600)
        assert engine.state.phase == 1.0

    def test_phase_zero_while_idle(self, engine, scheduler):
        scheduler.advance(10000)
        assert engine.state.phase == 0.0

    def test_archetype_gated_until_four_actions(self, clock, scheduler):
        """Test archetype holds at Analyst until 4 actions were recorded."""
        engine = start(clock=clock, scheduler=scheduler)

        # Steady fast scrolling classifies as Engineer
        engine.handle_event("scroll", {'scroll_y': 1000}, 10)
        engine.handle_event("scroll", {'scroll_y': 2000}, 20)
        engine.handle_event("scroll", {'scroll_y': 3000}, 30)
        scheduler.advance(200)
        assert engine.state.archetype == "Analyst"

        engine.handle_event("scroll", {'scroll_y': 4000}, 40)
        scheduler.advance(200)
        assert engine.state.archetype == "Engineer"
        engine.stop()

    def test_dwell_accumulates_per_tick(self, engine, host, scheduler):
        """Test each tick credits elapsed time to the current third."""
        scheduler.advance(400)
        host.set_geometry(ViewportGeometry(1600, 800, 4000))
        scheduler.advance(1000)

        assert engine.buffers.dwell["top"] == 400
        assert engine.buffers.dwell["middle"] == 1000

    def test_unknown_event_kind_ignored(self, engine):
        engine.handle_event("wheel", {}, 10)
        assert engine.buffers.actions.total == 0
        assert engine.status == "IDLE"

    def test_pointer_without_coordinates_ignored(self, engine):
        engine.handle_event("pointer_move", {'x': 10}, 10)
        assert engine.buffers.actions.total == 0

    def test_config_mapping_clamped(self, clock, scheduler):
        engine = start({'phaseSeconds': 30}, clock=clock, scheduler=scheduler)
        assert engine.config.phase_seconds == 7.0
        engine.stop()

    def test_clock_defaults_to_scheduler_clock(self, clock, scheduler):
        """Test a manual scheduler's clock is picked up."""
        engine = start(scheduler=scheduler)
        clock.advance(700)
        engine.handle_event("click")
        assert engine.first_interaction_ms == 700
        engine.stop()

    def test_independent_engines(self, clock, scheduler):
        """Test engines share no state."""
        first = start(clock=clock, scheduler=scheduler)
        second = start(clock=clock, scheduler=scheduler)
        first.handle_event("click", None, 5)

        assert first.buffers.actions.total == 1
        assert second.buffers.actions.total == 0
        first.stop()
        second.stop()


class TestEngineLifecycle:
    """Tests for stop semantics and subscriber isolation."""

    def test_stop_is_idempotent(self, engine, scheduler):
        engine.stop()
        engine.stop()

        assert engine.status == "STOPPED"
        assert engine.stopped
        assert scheduler.pending == 0

    def test_no_emissions_after_stop(self, engine, scheduler, states):
        scheduler.advance(400)
        emitted = len(states)
        engine.stop()
        scheduler.advance(2000)

        assert len(states) == emitted
        assert engine.tick() is None

    def test_events_after_stop_are_no_ops(self, engine):
        engine.stop()
        engine.handle_event("click", None, 10)

        assert engine.buffers.actions.total == 0
        assert engine.first_interaction_ms is None

    def test_subscribe_after_stop_never_called(self, engine, scheduler):
        engine.stop()
        late = []
        engine.subscribe(late.append)
        scheduler.advance(1000)

        assert late == []
        assert engine.subscriber_count == 2

    def test_reject_non_callable_subscriber(self, engine):
        with pytest.raises(TypeError):
            engine.subscribe("not a function")

    def test_failing_subscriber_isolated(self, engine, scheduler, states, caplog):
        """Test one failing subscriber neither blocks others nor the tick."""
        def broken(state):
            raise RuntimeError("boom")

        healthy = []
        engine.subscribe(broken)
        engine.subscribe(healthy.append)

        with caplog.at_level(logging.ERROR, logger="src.engine.controller"):
            scheduler.advance(400)

        assert len(healthy) == 2
        assert len(states) == 3
        assert "Subscriber" in caplog.text
        assert "boom" in caplog.text

    def test_constructor_does_not_start(self, clock, scheduler, host):
        """Test a bare CognitionEngine is inert until started."""
        engine = CognitionEngine(
            config=EngineConfig(),
            clock=clock,
            scheduler=scheduler,
            host=host,
        )
        assert host.listener_count() == 0
        assert scheduler.pending == 0
        assert engine.status == "IDLE"
