"""
SignatureVector model - Normalized snapshot of current session behavior.

Seven features derived from the rolling sample buffers on every tick.
All fields are normalized to the 0.0-1.0 range. The vector is ephemeral:
it is recomputed from scratch each tick and never persisted.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, List, Tuple


# Python field name -> wire name used by subscribers
FEATURE_WIRE_NAMES: Dict[str, str] = {
    'scroll_speed': 'scrollSpeed',
    'scroll_variability': 'scrollVariability',
    'mouse_jitter': 'mouseJitter',
    'hesitation': 'hesitation',
    'dwell_balance': 'dwellBalance',
    'interaction_entropy': 'interactionEntropy',
    'time_to_first_action': 'timeToFirstAction',
}


@dataclass(frozen=True)
class SignatureVector:
    """
    Seven-feature normalized behavioral signature.

    Attributes:
        scroll_speed: Mean scroll velocity (0=still, 1=fast)
        scroll_variability: Std dev of scroll velocity (0=steady, 1=erratic)
        mouse_jitter: Std dev of pointer velocity (0=smooth, 1=erratic)
        hesitation: Mean gap between discrete actions (1=5s or more)
        dwell_balance: Entropy of dwell across page thirds (0=focused, 1=even)
        interaction_entropy: Entropy of action kinds (0=single kind, 1=even mix)
        time_to_first_action: Delay before first interaction (1=10s+ or none yet)
    """

    scroll_speed: float = 0.0
    scroll_variability: float = 0.0
    mouse_jitter: float = 0.0
    hesitation: float = 0.0
    dwell_balance: float = 0.5
    interaction_entropy: float = 0.5
    time_to_first_action: float = 1.0

    def __post_init__(self) -> None:
        """
        Validate features after initialization.

        Raises:
            ValueError: If any feature is outside 0-1 range
        """
        for field_obj in fields(self):
            value = getattr(self, field_obj.name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(
                    f"{field_obj.name} must be between 0 and 1, got: {value}"
                )

    @property
    def features(self) -> List[Tuple[str, float]]:
        """All (feature_name, value) pairs in declaration order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to dictionary keyed by wire names (scrollSpeed, ...).

        Returns:
            Dictionary representation of the signature
        """
        return {
            FEATURE_WIRE_NAMES[name]: value for name, value in self.features
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SignatureVector':
        """
        Create SignatureVector from dictionary.

        Accepts either wire names (scrollSpeed) or field names
        (scroll_speed). Missing features take their defaults.

        Args:
            data: Dictionary with feature values

        Returns:
            New SignatureVector instance
        """
        values = {}
        for name, wire_name in FEATURE_WIRE_NAMES.items():
            if wire_name in data:
                values[name] = float(data[wire_name])
            elif name in data:
                values[name] = float(data[name])
        return cls(**values)
