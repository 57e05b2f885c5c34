"""Data models for the Helix cognition signal engine."""

from .signature_vector import SignatureVector
from .archetype_score import ArchetypeScore
from .session_state import SessionState
from .engine_config import EngineConfig, load_config
from .interaction_event import InteractionEvent, ViewportGeometry

__all__ = [
    'SignatureVector',
    'ArchetypeScore',
    'SessionState',
    'EngineConfig',
    'load_config',
    'InteractionEvent',
    'ViewportGeometry',
]
