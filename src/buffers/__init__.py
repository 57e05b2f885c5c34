"""Bounded sample buffers and session counters."""

from .sample_buffer import SampleBuffer, ActionCounts, DwellTimes
from .session_buffers import SessionBuffers, region_for_ratio

__all__ = [
    'SampleBuffer',
    'ActionCounts',
    'DwellTimes',
    'SessionBuffers',
    'region_for_ratio',
]
