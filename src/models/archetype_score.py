"""
ArchetypeScore model - Raw weighted scores for the four archetypes.

Each score is a weighted linear combination of SignatureVector features
whose weights sum to 1.0, so every score lies in the 0.0-1.0 range.
Scores are NOT normalized against each other.
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

from src.utils.constants import (
    ARCHETYPE_ANALYST,
    ARCHETYPE_ENGINEER,
    ARCHETYPE_PHILOSOPHER,
    ARCHETYPE_ARTIST,
)


@dataclass(frozen=True)
class ArchetypeScore:
    """
    Scores for each behavioral archetype.

    Attributes:
        analyst: Methodical, balanced dwell, low jitter
        engineer: Fast, exploratory, diverse actions
        philosopher: Slow, deliberate, focused
        artist: Variable, expressive, focused

    Properties:
        primary_archetype: Highest score, ties broken by evaluation order
        scores_ranked: All archetypes ranked by score
        margin: Gap between the best and the runner-up score
    """

    analyst: float
    engineer: float
    philosopher: float
    artist: float

    @property
    def scores(self) -> List[Tuple[str, float]]:
        """(archetype, score) pairs in fixed evaluation order."""
        return [
            (ARCHETYPE_ANALYST, self.analyst),
            (ARCHETYPE_ENGINEER, self.engineer),
            (ARCHETYPE_PHILOSOPHER, self.philosopher),
            (ARCHETYPE_ARTIST, self.artist),
        ]

    @property
    def primary_archetype(self) -> str:
        """
        Get the archetype with the highest score.

        Scores are walked in evaluation order and only a strictly greater
        score replaces the current best, so equal scores resolve to the
        archetype evaluated first.

        Returns:
            'Analyst', 'Engineer', 'Philosopher', or 'Artist'
        """
        best_score = -1.0
        best = ARCHETYPE_ANALYST
        for archetype, score in self.scores:
            if score > best_score:
                best_score = score
                best = archetype
        return best

    @property
    def scores_ranked(self) -> List[Tuple[str, float]]:
        """
        Get all archetypes ranked by score (highest first).

        sorted() is stable, so ties keep evaluation order.
        """
        return sorted(self.scores, key=lambda x: x[1], reverse=True)

    @property
    def margin(self) -> float:
        """Spread between the highest and second-highest scores."""
        ranked = self.scores_ranked
        return ranked[0][1] - ranked[1][1]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scores plus the derived primary archetype."""
        return {
            'analyst': self.analyst,
            'engineer': self.engineer,
            'philosopher': self.philosopher,
            'artist': self.artist,
            'primary_archetype': self.primary_archetype,
            'margin': self.margin,
        }

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"ArchetypeScore("
            f"primary={self.primary_archetype}, "
            f"analyst={self.analyst:.3f}, "
            f"engineer={self.engineer:.3f}, "
            f"philosopher={self.philosopher:.3f}, "
            f"artist={self.artist:.3f})"
        )
