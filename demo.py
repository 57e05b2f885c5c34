#!/usr/bin/env python3
"""
Helix Cognition Engine Demo

Demonstrates the complete pipeline on a recorded trace:
1. Parse trace CSV
2. Replay events through an engine on a virtual clock
3. Show the signature vector
4. Show archetype scores
5. Show the archetype timeline and phase

Usage:
    python demo.py [trace_file]
    python demo.py  # Uses sample trace
"""

import json
import logging
import sys
from pathlib import Path

from src.engine.replay import replay_trace, summarize_timeline
from src.parsers.trace_parser import TraceParser
from src.scoring.archetype_classifier import ArchetypeClassifier


def main(trace_path: str = None):
    """Run the demo pipeline."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 50)
    print("Helix Cognition Engine Demo")
    print("=" * 50)
    print()

    if trace_path is None:
        trace_path = Path(__file__).parent / "tests" / "fixtures" / "sample_trace.csv"
        print(f"Using sample trace: {trace_path.name}")
    else:
        trace_path = Path(trace_path)

    if not trace_path.exists():
        print(f"Error: File not found: {trace_path}")
        return 1

    # =========================================================================
    # Step 1: Parse trace
    # =========================================================================
    print()
    print("[1] Parsing trace...")

    parser = TraceParser()
    try:
        events = parser.parse(trace_path)
    except ValueError as e:
        print(f"    Error parsing trace: {e}")
        return 1

    print(f"    -> Parsed {len(events)} events")
    if events:
        span = events[-1].timestamp_ms - events[0].timestamp_ms
        print(f"    -> Span: {span / 1000:.1f}s")
    if parser.warnings:
        print(f"    -> Warnings: {len(parser.warnings)}")

    # =========================================================================
    # Step 2: Replay
    # =========================================================================
    print()
    print("[2] Replaying through engine...")

    states = replay_trace(events)
    final = states[-1]
    print(f"    -> Emissions: {len(states)}")

    # =========================================================================
    # Step 3: Signature
    # =========================================================================
    print()
    print("[3] Final signature vector...")

    for name, value in final.signature.to_dict().items():
        print(f"    -> {name}: {value:.3f}")

    # =========================================================================
    # Step 4: Archetype scores
    # =========================================================================
    print()
    print("[4] Archetype scores...")

    scores = ArchetypeClassifier().score(final.signature)
    for i, (archetype, score) in enumerate(scores.scores_ranked):
        marker = " (PRIMARY)" if i == 0 else ""
        print(f"    -> {archetype}: {score:.3f}{marker}")
    print(f"    -> Margin: {scores.margin:.3f}")

    # =========================================================================
    # Step 5: Timeline
    # =========================================================================
    print()
    print("[5] Archetype timeline...")

    summary = summarize_timeline(states)
    for transition in summary['transitions']:
        print(f"    -> emission {transition['emission']}: {transition['archetype']}")
    print(f"    -> Final phase: {final.phase:.2f}")

    print()
    print("Session State (JSON):")
    print("-" * 30)
    print(json.dumps(final.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    trace_file = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(trace_file))
