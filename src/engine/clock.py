"""
Time sources for the engine.

The engine never reads wall-clock time directly; it asks an injected Clock.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Abstract millisecond time source."""

    @abstractmethod
    def now_ms(self) -> float:
        """Current time in milliseconds."""
        pass


class SystemClock(Clock):
    """Monotonic process clock."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock(Clock):
    """
    Virtual clock advanced explicitly by tests and trace replay.

    Example usage:
        clock = ManualClock(start_ms=0.0)
        clock.advance(200)
        clock.now_ms()  # 200.0
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)

    def now_ms(self) -> float:
        return self._now_ms

    def advance(self, delta_ms: float) -> float:
        """
        Move time forward.

        Raises:
            ValueError: If delta_ms is negative
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot move clock backwards by {delta_ms}ms")
        self._now_ms += delta_ms
        return self._now_ms

    def set(self, now_ms: float) -> None:
        """Jump to an absolute time; never backwards."""
        if now_ms < self._now_ms:
            raise ValueError(
                f"Cannot move clock backwards from {self._now_ms} to {now_ms}"
            )
        self._now_ms = float(now_ms)
