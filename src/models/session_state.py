"""
SessionState model - The state emitted to subscribers on every tick.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

from src.models.signature_vector import SignatureVector
from src.utils.constants import ARCHETYPE_ORDER, DEFAULT_ARCHETYPE


@dataclass(frozen=True)
class SessionState:
    """
    Combined snapshot of the current session.

    This is the only entity visible outside the engine. It carries no
    raw samples, positions or timestamps.

    Attributes:
        signature: Current normalized feature vector
        archetype: Retained archetype (Analyst until enough actions)
        phase: Ramp-up progress since first interaction (0-1)
    """

    signature: SignatureVector = field(default_factory=SignatureVector)
    archetype: str = DEFAULT_ARCHETYPE
    phase: float = 0.0

    def __post_init__(self) -> None:
        """
        Raises:
            ValueError: If archetype is unknown or phase outside 0-1
        """
        if self.archetype not in ARCHETYPE_ORDER:
            raise ValueError(
                f"Invalid archetype '{self.archetype}'. "
                f"Must be one of: {ARCHETYPE_ORDER}"
            )
        if not 0.0 <= self.phase <= 1.0:
            raise ValueError(f"phase must be between 0 and 1, got: {self.phase}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'signature': self.signature.to_dict(),
            'archetype': self.archetype,
            'phase': self.phase,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionState':
        return cls(
            signature=SignatureVector.from_dict(data['signature']),
            archetype=data['archetype'],
            phase=float(data['phase']),
        )
