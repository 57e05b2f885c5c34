"""
Constants for the Helix cognition signal engine.

This module contains all magic numbers, string identifiers, and tuning
values used throughout the engine. Centralizing these makes the codebase
easier to maintain and keeps the classifier coefficients in one place.
"""

from typing import Dict, List, Set, Tuple


# =============================================================================
# ARCHETYPES
# =============================================================================

ARCHETYPE_ANALYST = "Analyst"
ARCHETYPE_ENGINEER = "Engineer"
ARCHETYPE_PHILOSOPHER = "Philosopher"
ARCHETYPE_ARTIST = "Artist"

# Evaluation order doubles as the tie-break order: first strictly greater wins
ARCHETYPE_ORDER: List[str] = [
    ARCHETYPE_ANALYST,
    ARCHETYPE_ENGINEER,
    ARCHETYPE_PHILOSOPHER,
    ARCHETYPE_ARTIST,
]

DEFAULT_ARCHETYPE = ARCHETYPE_ANALYST


# =============================================================================
# ACTION KINDS
# =============================================================================

ACTION_SCROLL = "scroll"
ACTION_CLICK = "click"
ACTION_POINTER_MOVE = "pointer_move"
ACTION_KEY_PRESS = "key_press"

ACTION_KINDS: List[str] = [
    ACTION_SCROLL,
    ACTION_CLICK,
    ACTION_POINTER_MOVE,
    ACTION_KEY_PRESS,
]

# Actions that open a new hesitation gap
DISCRETE_ACTIONS: Set[str] = {ACTION_CLICK, ACTION_KEY_PRESS}


# =============================================================================
# HOST EVENT TYPES
# =============================================================================

HOST_POINTER_MOVE = "pointermove"
HOST_SCROLL = "scroll"
HOST_CLICK = "click"
HOST_TOUCH_START = "touchstart"
HOST_TOUCH_MOVE = "touchmove"
HOST_KEY_PRESS = "keypress"

# Host event type -> engine action kind
HOST_EVENT_ACTIONS: Dict[str, str] = {
    HOST_POINTER_MOVE: ACTION_POINTER_MOVE,
    "mousemove": ACTION_POINTER_MOVE,
    HOST_SCROLL: ACTION_SCROLL,
    HOST_CLICK: ACTION_CLICK,
    HOST_TOUCH_START: ACTION_CLICK,
    HOST_TOUCH_MOVE: ACTION_POINTER_MOVE,
    HOST_KEY_PRESS: ACTION_KEY_PRESS,
}

# Host event types the adapter binds to
HOST_EVENT_TYPES: List[str] = [
    HOST_SCROLL,
    HOST_POINTER_MOVE,
    HOST_CLICK,
    HOST_KEY_PRESS,
    HOST_TOUCH_START,
    HOST_TOUCH_MOVE,
]


# =============================================================================
# BUFFER CAPACITIES
# =============================================================================

SCROLL_BUFFER_CAPACITY = 50
POINTER_BUFFER_CAPACITY = 100
HESITATION_BUFFER_CAPACITY = 20


# =============================================================================
# DWELL REGIONS
# =============================================================================

REGION_TOP = "top"
REGION_MIDDLE = "middle"
REGION_BOTTOM = "bottom"

DWELL_REGIONS: List[str] = [REGION_TOP, REGION_MIDDLE, REGION_BOTTOM]

# Scroll ratio upper bounds (exclusive) for top and middle thirds
REGION_TOP_LIMIT = 0.33
REGION_MIDDLE_LIMIT = 0.66


# =============================================================================
# FEATURE NORMALIZATION
# =============================================================================

SCROLL_SPEED_SCALE = 100.0        # px/ms mean -> [0, 1]
SCROLL_VARIABILITY_SCALE = 50.0   # px/ms std dev -> [0, 1]
POINTER_JITTER_SCALE = 20.0       # px/ms std dev -> [0, 1]
HESITATION_MAX_MS = 5000.0        # 5s = maximal deliberateness
FIRST_ACTION_MAX_MS = 10000.0     # 10s+ = cold start

# Minimum sample counts before a feature leaves its default
MIN_SCROLL_SAMPLES = 2
MIN_POINTER_SAMPLES = 5
MIN_HESITATION_SAMPLES = 2
MIN_DWELL_TOTAL_MS = 100.0
MIN_ACTIONS_FOR_ENTROPY = 5

# Neutral defaults used when data is insufficient
NEUTRAL_DWELL_BALANCE = 0.5
NEUTRAL_INTERACTION_ENTROPY = 0.5
NO_INTERACTION_TIME_TO_FIRST_ACTION = 1.0


# =============================================================================
# CLASSIFICATION
# =============================================================================

# Archetype only updates once this many actions were recorded
MIN_ACTIONS_FOR_CLASSIFICATION = 4

# (feature, weight, inverted) triples; weights sum to 1.0 per archetype
ARCHETYPE_WEIGHTS: Dict[str, List[Tuple[str, float, bool]]] = {
    # Methodical, balanced dwell, moderate pace, low jitter
    ARCHETYPE_ANALYST: [
        ('scroll_speed', 0.2, True),
        ('dwell_balance', 0.3, False),
        ('hesitation', 0.2, False),
        ('mouse_jitter', 0.2, True),
        ('interaction_entropy', 0.1, False),
    ],
    # Fast scroll, high entropy, explores broadly, less hesitation
    ARCHETYPE_ENGINEER: [
        ('scroll_speed', 0.25, False),
        ('scroll_variability', 0.15, False),
        ('interaction_entropy', 0.25, False),
        ('dwell_balance', 0.2, False),
        ('hesitation', 0.15, True),
    ],
    # Slow, deliberate, high hesitation, focused dwell
    ARCHETYPE_PHILOSOPHER: [
        ('scroll_speed', 0.25, True),
        ('hesitation', 0.3, False),
        ('dwell_balance', 0.2, True),
        ('time_to_first_action', 0.15, False),
        ('mouse_jitter', 0.1, True),
    ],
    # Variable scroll, high jitter, expressive movement, focused
    ARCHETYPE_ARTIST: [
        ('scroll_variability', 0.25, False),
        ('mouse_jitter', 0.25, False),
        ('dwell_balance', 0.2, True),
        ('interaction_entropy', 0.15, True),
        ('hesitation', 0.15, True),
    ],
}


# =============================================================================
# PHASE & TIMING
# =============================================================================

DEFAULT_PHASE_SECONDS = 5.0
MIN_PHASE_SECONDS = 3.0
MAX_PHASE_SECONDS = 7.0

TICK_INTERVAL_MS = 200

PHASE_SECONDS_ENV = "HELIX_PHASE_SECONDS"


# =============================================================================
# ENGINE STATUS
# =============================================================================

STATUS_IDLE = "IDLE"
STATUS_ACTIVE = "ACTIVE"
STATUS_STOPPED = "STOPPED"


# =============================================================================
# TRACE CSV COLUMNS
# =============================================================================

TRACE_COLUMN_TIMESTAMP = "timestamp_ms"
TRACE_COLUMN_EVENT = "event_type"
TRACE_COLUMN_X = "x"
TRACE_COLUMN_Y = "y"
TRACE_COLUMN_SCROLL_Y = "scroll_y"
TRACE_COLUMN_VIEWPORT_HEIGHT = "viewport_height"
TRACE_COLUMN_DOCUMENT_HEIGHT = "document_height"

TRACE_REQUIRED_COLUMNS: Set[str] = {
    TRACE_COLUMN_TIMESTAMP,
    TRACE_COLUMN_EVENT,
}

MAX_TRACE_SIZE = 10 * 1024 * 1024  # 10MB
