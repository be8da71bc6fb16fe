"""
pacer.py — Pace Controller
===========================
Turns a requested delay into a real-time suspension that

  • can be cut short at any moment by stop()    (raises StoppedError)
  • can be stretched indefinitely by pause()     (paused time is not counted)

The delay is consumed in small slices so a stop is noticed within one
slice, and a paused wait polls at a coarser interval until resumed.

    pacer = Pacer(signals)
    pacer.wait(500)          # 500 ms of UNPAUSED time
"""

import time
from typing import Callable

from engine.signals import ControlSignals


# ---------------------------------------------------------------------------
# Timing constants (milliseconds)
# ---------------------------------------------------------------------------
SLICE_MS      = 30     # delay budget consumed per sleep
PAUSE_POLL_MS = 100    # how often a paused wait re-checks the flags


class Pacer:
    """
    Attributes:
        signals       : Shared ControlSignals (read live on every slice).
        slice_ms      : Granularity of the stop check while running.
        pause_poll_ms : Granularity of the resume / stop check while paused.
        sleep         : Sleep function taking SECONDS (injectable for tests).
    """

    def __init__(
        self,
        signals: ControlSignals,
        slice_ms: int = SLICE_MS,
        pause_poll_ms: int = PAUSE_POLL_MS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if slice_ms <= 0 or pause_poll_ms <= 0:
            raise ValueError("slice_ms and pause_poll_ms must be positive")
        self.signals       = signals
        self.slice_ms      = slice_ms
        self.pause_poll_ms = pause_poll_ms
        self.sleep         = sleep

    def wait(self, target_ms: float) -> None:
        """
        Block until `target_ms` of unpaused time has elapsed.

        Raises:
            StoppedError – as soon as `signals.stopped` is seen.
        """
        remaining = target_ms
        while remaining > 0:
            self.signals.check()
            if self.signals.paused:
                self.sleep(self.pause_poll_ms / 1000.0)
                continue
            chunk = min(self.slice_ms, remaining)
            self.sleep(chunk / 1000.0)
            remaining -= chunk
