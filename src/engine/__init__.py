"""Engine controller, scheduling and host bindings."""

from .clock import Clock, SystemClock, ManualClock
from .scheduler import Scheduler, ScheduledTask, AsyncioScheduler, ManualScheduler
from .host import HostEnvironment, SimulatedHost, HostAdapter
from .controller import CognitionEngine, start
from .replay import replay_trace, summarize_timeline

__all__ = [
    'Clock',
    'SystemClock',
    'ManualClock',
    'Scheduler',
    'ScheduledTask',
    'AsyncioScheduler',
    'ManualScheduler',
    'HostEnvironment',
    'SimulatedHost',
    'HostAdapter',
    'CognitionEngine',
    'start',
    'replay_trace',
    'summarize_timeline',
]
