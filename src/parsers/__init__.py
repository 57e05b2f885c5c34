"""Recorded interaction trace parsing."""

from .trace_parser import TraceParser, parse_trace

__all__ = [
    'TraceParser',
    'parse_trace',
]
