"""
engine/
-------
Interruptible stepping engine.

    from engine import Session, ControlSignals, StoppedError
"""

from engine.signals  import ControlSignals, StoppedError
from engine.pacer    import Pacer, SLICE_MS, PAUSE_POLL_MS
from engine.emitter  import StepEmitter
from engine.recorder import RunRecorder, RunMetrics
from engine.session  import (
    Session,
    RunState,
    SPEED_PRESETS,
    DEFAULT_DELAY_MS,
    ARRAY_SIZE,
    VALUE_MIN,
    VALUE_MAX,
)

__all__ = [
    "ControlSignals",
    "StoppedError",
    "Pacer",
    "SLICE_MS",
    "PAUSE_POLL_MS",
    "StepEmitter",
    "RunRecorder",
    "RunMetrics",
    "Session",
    "RunState",
    "SPEED_PRESETS",
    "DEFAULT_DELAY_MS",
    "ARRAY_SIZE",
    "VALUE_MIN",
    "VALUE_MAX",
]
