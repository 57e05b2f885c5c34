"""
Archetype classifier for scoring behavioral signatures.

Scores a signature against four archetypes (Analyst, Engineer,
Philosopher, Artist) with fixed weighted linear formulas.
"""

from typing import Dict, List, Tuple

from src.models.archetype_score import ArchetypeScore
from src.models.signature_vector import SignatureVector
from src.utils.constants import (
    ARCHETYPE_ANALYST,
    ARCHETYPE_ENGINEER,
    ARCHETYPE_PHILOSOPHER,
    ARCHETYPE_ARTIST,
    ARCHETYPE_WEIGHTS,
)


class ArchetypeClassifier:
    """
    Classifier for behavioral archetypes.

    Each archetype score is Σ weight × feature, where some features enter
    inverted as (1 - feature):
    - ANALYST: slow, balanced dwell, hesitant, smooth pointer
    - ENGINEER: fast, variable scroll, diverse actions, balanced dwell
    - PHILOSOPHER: slow, very hesitant, focused dwell, late first action
    - ARTIST: variable scroll, jittery pointer, focused, repetitive

    The coefficients are fixed; identical signatures always produce the
    identical archetype.

    Example usage:
        classifier = ArchetypeClassifier()
        archetype = classifier.classify(signature)
    """

    def __init__(
        self,
        weights: Dict[str, List[Tuple[str, float, bool]]] = ARCHETYPE_WEIGHTS,
    ) -> None:
        self.weights = weights

    def score(self, signature: SignatureVector) -> ArchetypeScore:
        """
        Score a signature against all archetypes.

        Args:
            signature: Normalized feature vector

        Returns:
            ArchetypeScore with the raw score for each archetype
        """
        return ArchetypeScore(
            analyst=self._score_archetype(signature, ARCHETYPE_ANALYST),
            engineer=self._score_archetype(signature, ARCHETYPE_ENGINEER),
            philosopher=self._score_archetype(signature, ARCHETYPE_PHILOSOPHER),
            artist=self._score_archetype(signature, ARCHETYPE_ARTIST),
        )

    def classify(self, signature: SignatureVector) -> str:
        """
        Pick the best-fitting archetype.

        Ties resolve to the archetype evaluated first in the order
        Analyst, Engineer, Philosopher, Artist.

        Returns:
            'Analyst', 'Engineer', 'Philosopher', or 'Artist'
        """
        return self.score(signature).primary_archetype

    def _score_archetype(self, signature: SignatureVector, archetype: str) -> float:
        """Weighted sum of features, summed in declaration order."""
        total = 0.0
        for feature, weight, inverted in self.weights[archetype]:
            value = getattr(signature, feature)
            if inverted:
                value = 1.0 - value
            total += value * weight
        return total


def classify_archetype(signature: SignatureVector) -> str:
    """
    Classify a signature.

    Convenience function using default classifier.

    Args:
        signature: Normalized feature vector

    Returns:
        Archetype name
    """
    classifier = ArchetypeClassifier()
    return classifier.classify(signature)
