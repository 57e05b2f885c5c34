"""
Unit tests for sample buffers.

Tests cover:
- SampleBuffer: FIFO eviction, statistics
- ActionCounts / DwellTimes: accumulation
- SessionBuffers: velocity sampling, hesitation gaps, dwell regions
"""

import pytest

from src.buffers.sample_buffer import SampleBuffer, ActionCounts, DwellTimes
from src.buffers.session_buffers import SessionBuffers, region_for_ratio
from src.models.interaction_event import ViewportGeometry


@pytest.fixture
def buffers():
    """Fresh buffers for an engine started at t=0."""
    return SessionBuffers(start_ms=0.0)


# =============================================================================
# SampleBuffer Tests
# =============================================================================

class TestSampleBuffer:
    """Tests for the bounded FIFO window."""

    def test_evicts_oldest_when_full(self):
        """Test unbounded insertion keeps only the newest samples."""
        buffer = SampleBuffer(capacity=50)
        for i in range(1000):
            buffer.append(i)

        assert len(buffer) == 50
        assert buffer.is_full
        assert buffer.values() == [float(i) for i in range(950, 1000)]

    def test_mean_and_variance(self):
        """Test population statistics."""
        buffer = SampleBuffer(capacity=10)
        for value in [1, 2, 3, 4]:
            buffer.append(value)

        assert buffer.mean() == 2.5
        assert buffer.variance() == 1.25
        assert buffer.std() == pytest.approx(1.1180339887)

    def test_empty_statistics(self):
        """Test empty window statistics are zero."""
        buffer = SampleBuffer(capacity=5)
        assert buffer.mean() == 0.0
        assert buffer.variance() == 0.0

    def test_reject_non_positive_capacity(self):
        """Test that zero capacity raises ValueError."""
        with pytest.raises(ValueError):
            SampleBuffer(capacity=0)


class TestCounters:
    """Tests for ActionCounts and DwellTimes."""

    def test_action_counts(self):
        """Test counts accumulate per kind."""
        counts = ActionCounts()
        counts.increment("click")
        counts.increment("click")
        counts.increment("scroll")

        assert counts["click"] == 2
        assert counts["key_press"] == 0
        assert counts.total == 3

    def test_reject_unknown_action(self):
        """Test that an unknown kind raises ValueError."""
        with pytest.raises(ValueError):
            ActionCounts().increment("wheel")

    def test_dwell_ignores_non_positive_elapsed(self):
        """Test dwell never decreases."""
        dwell = DwellTimes()
        dwell.add("top", 300)
        dwell.add("top", -100)

        assert dwell["top"] == 300
        assert dwell.total == 300

    def test_reject_unknown_region(self):
        """Test that an unknown region raises ValueError."""
        with pytest.raises(ValueError):
            DwellTimes().add("sidebar", 10)


# =============================================================================
# SessionBuffers Tests
# =============================================================================

class TestSessionBuffers:
    """Tests for raw observation sampling."""

    def test_scroll_velocity(self, buffers):
        """Test scroll speed is distance over time since last scroll."""
        buffers.record_scroll(200, 100)

        assert buffers.scroll.values() == [2.0]
        assert buffers.actions["scroll"] == 1

    def test_scroll_with_zero_delta_discarded(self, buffers):
        """Test a zero time delta appends no sample but still counts."""
        buffers.record_scroll(100, 0)

        assert len(buffers.scroll) == 0
        assert buffers.actions["scroll"] == 1

    def test_scroll_velocity_uses_absolute_distance(self, buffers):
        """Test scrolling up yields a positive speed."""
        buffers.record_scroll(500, 100)
        buffers.record_scroll(300, 200)

        assert buffers.scroll.values() == [5.0, 2.0]

    def test_first_pointer_move_is_baseline(self, buffers):
        """Test the first pointer move appends no sample."""
        buffers.record_pointer(0, 0, 10)
        assert len(buffers.pointer) == 0

        buffers.record_pointer(30, 40, 20)
        assert buffers.pointer.values() == [5.0]
        assert buffers.actions["pointer_move"] == 2

    def test_pointer_with_same_timestamp_discarded(self, buffers):
        """Test a zero time delta pointer move appends no sample."""
        buffers.record_pointer(0, 0, 10)
        buffers.record_pointer(50, 50, 10)

        assert len(buffers.pointer) == 0

    def test_hesitation_from_second_discrete_action(self, buffers):
        """Test gaps start at the second click/key press."""
        buffers.record_discrete("click", 1000)
        assert len(buffers.hesitation) == 0

        buffers.record_discrete("key_press", 3000)
        buffers.record_discrete("click", 3500)
        assert buffers.hesitation.values() == [2000.0, 500.0]

    def test_scroll_does_not_reset_hesitation_gap(self, buffers):
        """Test only discrete actions open hesitation gaps."""
        buffers.record_discrete("click", 1000)
        buffers.record_scroll(100, 1500)
        buffers.record_discrete("click", 2000)

        assert buffers.hesitation.values() == [1000.0]

    def test_reject_non_discrete_action(self, buffers):
        """Test that scroll is not accepted as a discrete action."""
        with pytest.raises(ValueError):
            buffers.record_discrete("scroll", 10)

    @pytest.mark.parametrize("record,attr,capacity", [
        ("scroll", "scroll", 50),
        ("pointer", "pointer", 100),
        ("discrete", "hesitation", 20),
    ])
    def test_capacities_hold_under_unbounded_insertion(
        self, buffers, record, attr, capacity
    ):
        """Test buffers never exceed their fixed capacity."""
        for i in range(1, 5001):
            if record == "scroll":
                buffers.record_scroll(i * 10, i)
            elif record == "pointer":
                buffers.record_pointer(i, i, i)
            else:
                buffers.record_discrete("click", i * 100)

        assert len(getattr(buffers, attr)) == capacity

    def test_dwell_credits_current_region(self, buffers):
        """Test elapsed time goes to the region under the viewport."""
        top = ViewportGeometry(0, 800, 4000)
        middle = ViewportGeometry(1600, 800, 4000)
        bottom = ViewportGeometry(3200, 800, 4000)

        assert buffers.update_dwell(top, 200) == "top"
        assert buffers.update_dwell(middle, 500) == "middle"
        assert buffers.update_dwell(bottom, 1000) == "bottom"

        assert buffers.dwell.to_dict() == {'top': 200, 'middle': 300, 'bottom': 500}


class TestRegionForRatio:
    """Tests for page-third boundaries."""

    @pytest.mark.parametrize("ratio,region", [
        (0.0, "top"),
        (0.329, "top"),
        (0.33, "middle"),
        (0.659, "middle"),
        (0.66, "bottom"),
        (1.5, "bottom"),
    ])
    def test_boundaries(self, ratio, region):
        """Test upper bounds are exclusive."""
        assert region_for_ratio(ratio) == region
