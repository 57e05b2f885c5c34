"""
Feature extractor for building signature vectors from session buffers.

Calculates the seven normalized behavioral features: scroll speed and
variability, pointer jitter, hesitation, dwell balance, interaction
entropy and time to first action.
"""

import math
from typing import Iterable, Optional

from src.buffers.session_buffers import SessionBuffers
from src.models.signature_vector import SignatureVector
from src.utils.constants import (
    ACTION_KINDS,
    DWELL_REGIONS,
    SCROLL_SPEED_SCALE,
    SCROLL_VARIABILITY_SCALE,
    POINTER_JITTER_SCALE,
    HESITATION_MAX_MS,
    FIRST_ACTION_MAX_MS,
    MIN_SCROLL_SAMPLES,
    MIN_POINTER_SAMPLES,
    MIN_HESITATION_SAMPLES,
    MIN_DWELL_TOTAL_MS,
    MIN_ACTIONS_FOR_ENTROPY,
    NEUTRAL_DWELL_BALANCE,
    NEUTRAL_INTERACTION_ENTROPY,
    NO_INTERACTION_TIME_TO_FIRST_ACTION,
)


def clamp_unit(value: float) -> float:
    """Clamp a value into the 0.0-1.0 range."""
    return max(0.0, min(1.0, value))


def normalized_entropy(values: Iterable[float], bins: int) -> float:
    """
    Shannon entropy of a distribution, normalized by its maximum.

    Formula: H = -Σ(p_i * ln(p_i)) / ln(bins)
    Zero-probability bins contribute nothing.

    Args:
        values: Non-negative weights (counts or durations)
        bins: Number of possible bins

    Returns:
        0.0 = all weight in one bin
        1.0 = weight spread evenly across all bins
    """
    values = list(values)
    total = sum(values)
    if total <= 0 or bins <= 1:
        return 0.0

    entropy = 0.0
    for value in values:
        p = value / total
        if p > 0:
            entropy -= p * math.log(p)

    return clamp_unit(entropy / math.log(bins))


class FeatureExtractor:
    """
    Calculator for signature vectors from session buffers.

    Every feature is clamped into [0, 1]; missing or insufficient data
    resolves to the documented default rather than an error.

    Example usage:
        extractor = FeatureExtractor(start_ms=0.0)
        signature = extractor.extract(buffers, first_interaction_ms=1200.0)
    """

    def __init__(self, start_ms: float) -> None:
        """
        Initialize extractor.

        Args:
            start_ms: Engine start time, the reference for time to first action
        """
        self.start_ms = start_ms

    def extract(
        self,
        buffers: SessionBuffers,
        first_interaction_ms: Optional[float] = None,
    ) -> SignatureVector:
        """
        Calculate all features from the current buffers.

        Args:
            buffers: Session buffers to read
            first_interaction_ms: Time of the first recorded interaction

        Returns:
            SignatureVector with all fields populated
        """
        scroll_speed, scroll_variability = self._scroll_features(buffers)

        return SignatureVector(
            scroll_speed=scroll_speed,
            scroll_variability=scroll_variability,
            mouse_jitter=self._mouse_jitter(buffers),
            hesitation=self._hesitation(buffers),
            dwell_balance=self._dwell_balance(buffers),
            interaction_entropy=self._interaction_entropy(buffers),
            time_to_first_action=self._time_to_first_action(first_interaction_ms),
        )

    def _scroll_features(self, buffers: SessionBuffers) -> tuple:
        """
        Scroll speed and variability.

        speed = mean × 100, variability = std × 50. Both 0 below 2 samples.
        """
        if len(buffers.scroll) < MIN_SCROLL_SAMPLES:
            return 0.0, 0.0

        speed = clamp_unit(buffers.scroll.mean() * SCROLL_SPEED_SCALE)
        variability = clamp_unit(buffers.scroll.std() * SCROLL_VARIABILITY_SCALE)
        return speed, variability

    def _mouse_jitter(self, buffers: SessionBuffers) -> float:
        """Pointer velocity std × 20. 0 below 5 samples."""
        if len(buffers.pointer) < MIN_POINTER_SAMPLES:
            return 0.0
        return clamp_unit(buffers.pointer.std() * POINTER_JITTER_SCALE)

    def _hesitation(self, buffers: SessionBuffers) -> float:
        """
        Mean gap between discrete actions, 5s = 1.0.

        Higher = more deliberate (Analyst/Philosopher),
        lower = more reactive (Engineer/Artist).
        """
        if len(buffers.hesitation) < MIN_HESITATION_SAMPLES:
            return 0.0
        return clamp_unit(buffers.hesitation.mean() / HESITATION_MAX_MS)

    def _dwell_balance(self, buffers: SessionBuffers) -> float:
        """
        How evenly attention is spread over the page thirds.

        High balance = explores all (Engineer/Analyst),
        low balance = focuses (Philosopher/Artist).
        """
        if buffers.dwell.total < MIN_DWELL_TOTAL_MS:
            return NEUTRAL_DWELL_BALANCE
        return normalized_entropy(
            (buffers.dwell[region] for region in DWELL_REGIONS),
            len(DWELL_REGIONS),
        )

    def _interaction_entropy(self, buffers: SessionBuffers) -> float:
        """Diversity of action kinds. Neutral below 5 actions."""
        if buffers.actions.total < MIN_ACTIONS_FOR_ENTROPY:
            return NEUTRAL_INTERACTION_ENTROPY
        return normalized_entropy(
            (buffers.actions[kind] for kind in ACTION_KINDS),
            len(ACTION_KINDS),
        )

    def _time_to_first_action(self, first_interaction_ms: Optional[float]) -> float:
        """0 = immediate, 1 = 10s+ or no interaction yet."""
        if first_interaction_ms is None:
            return NO_INTERACTION_TIME_TO_FIRST_ACTION
        return clamp_unit((first_interaction_ms - self.start_ms) / FIRST_ACTION_MAX_MS)


def extract_signature(
    buffers: SessionBuffers,
    start_ms: float,
    first_interaction_ms: Optional[float] = None,
) -> SignatureVector:
    """
    Calculate a signature vector from buffers.

    Convenience function using a one-off extractor.

    Args:
        buffers: Session buffers to read
        start_ms: Engine start time
        first_interaction_ms: Time of the first recorded interaction

    Returns:
        SignatureVector with all fields populated
    """
    extractor = FeatureExtractor(start_ms)
    return extractor.extract(buffers, first_interaction_ms)
