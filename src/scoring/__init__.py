"""Feature extraction, archetype classification and phase."""

from .feature_extractor import (
    FeatureExtractor,
    extract_signature,
    normalized_entropy,
    clamp_unit,
)
from .archetype_classifier import ArchetypeClassifier, classify_archetype
from .phase import PhaseComputer, compute_phase

__all__ = [
    'FeatureExtractor',
    'extract_signature',
    'normalized_entropy',
    'clamp_unit',
    'ArchetypeClassifier',
    'classify_archetype',
    'PhaseComputer',
    'compute_phase',
]
