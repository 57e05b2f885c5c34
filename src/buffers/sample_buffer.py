"""
Bounded rolling windows for raw interaction measurements.

Each window is an append-only FIFO ring with fixed capacity; appending to a
full window evicts the oldest sample. Statistics are computed over whatever
the window currently holds.
"""

import math
from collections import deque
from typing import Deque, Dict, Iterator, List

from src.utils.constants import ACTION_KINDS, DWELL_REGIONS


class SampleBuffer:
    """
    Fixed-capacity FIFO window of float samples.

    Example usage:
        buffer = SampleBuffer(capacity=50)
        buffer.append(0.4)
        buffer.mean()
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got: {capacity}")
        self.capacity = capacity
        self._samples: Deque[float] = deque(maxlen=capacity)

    def append(self, value: float) -> None:
        """Append a sample, evicting the oldest one when full."""
        self._samples.append(float(value))

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[float]:
        return iter(self._samples)

    @property
    def is_full(self) -> bool:
        return len(self._samples) == self.capacity

    def values(self) -> List[float]:
        """Snapshot of current samples, oldest first."""
        return list(self._samples)

    def mean(self) -> float:
        """Arithmetic mean; 0.0 for an empty window."""
        if not self._samples:
            return 0.0
        return sum(self._samples) / len(self._samples)

    def variance(self) -> float:
        """
        Population variance of the window.

        Formula: Var = Σ(x_i - mean)² / n
        """
        if not self._samples:
            return 0.0
        mean = self.mean()
        return sum((x - mean) ** 2 for x in self._samples) / len(self._samples)

    def std(self) -> float:
        """Population standard deviation."""
        return math.sqrt(self.variance())


class ActionCounts:
    """
    Lifetime counters per action kind.

    Counts only ever increase; there is no reset for the session.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {kind: 0 for kind in ACTION_KINDS}

    def increment(self, kind: str) -> None:
        if kind not in self._counts:
            raise ValueError(
                f"Invalid action kind '{kind}'. Must be one of: {ACTION_KINDS}"
            )
        self._counts[kind] += 1

    def __getitem__(self, kind: str) -> int:
        return self._counts[kind]

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def to_dict(self) -> Dict[str, int]:
        return dict(self._counts)


class DwellTimes:
    """
    Accumulated milliseconds of presence per page third.
    """

    def __init__(self) -> None:
        self._dwell: Dict[str, float] = {region: 0.0 for region in DWELL_REGIONS}

    def add(self, region: str, elapsed_ms: float) -> None:
        if region not in self._dwell:
            raise ValueError(
                f"Invalid region '{region}'. Must be one of: {DWELL_REGIONS}"
            )
        # Dwell never decreases
        if elapsed_ms > 0:
            self._dwell[region] += elapsed_ms

    def __getitem__(self, region: str) -> float:
        return self._dwell[region]

    @property
    def total(self) -> float:
        return sum(self._dwell.values())

    def to_dict(self) -> Dict[str, float]:
        return dict(self._dwell)
