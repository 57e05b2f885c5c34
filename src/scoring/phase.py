"""
Phase computer for the post-interaction ramp.

Maps elapsed time since the first interaction through a quadratic
ease-out curve into [0, 1].
"""

from typing import Optional

from src.utils.constants import DEFAULT_PHASE_SECONDS


class PhaseComputer:
    """
    Quadratic ease-out ramp.

    Formula:
        linear = clamp(elapsed_ms / (phase_seconds × 1000), 0, 1)
        phase = 1 - (1 - linear)²

    Example usage:
        computer = PhaseComputer(phase_seconds=5)
        computer.compute(first_interaction_ms=1000.0, now_ms=3500.0)  # 0.75
    """

    def __init__(self, phase_seconds: float = DEFAULT_PHASE_SECONDS) -> None:
        if phase_seconds <= 0:
            raise ValueError(f"phase_seconds must be positive, got: {phase_seconds}")
        self.phase_seconds = phase_seconds

    @property
    def duration_ms(self) -> float:
        return self.phase_seconds * 1000.0

    def ease(self, elapsed_ms: float) -> float:
        """Phase for a given elapsed time."""
        linear = max(0.0, min(1.0, elapsed_ms / self.duration_ms))
        return 1.0 - (1.0 - linear) ** 2

    def compute(self, first_interaction_ms: Optional[float], now_ms: float) -> float:
        """
        Phase at now_ms.

        Returns:
            0.0 before the first interaction, otherwise the eased ramp
        """
        if first_interaction_ms is None:
            return 0.0
        return self.ease(now_ms - first_interaction_ms)


def compute_phase(
    first_interaction_ms: Optional[float],
    now_ms: float,
    phase_seconds: float = DEFAULT_PHASE_SECONDS,
) -> float:
    """
    Compute phase.

    Convenience function using a one-off computer.
    """
    return PhaseComputer(phase_seconds).compute(first_interaction_ms, now_ms)
