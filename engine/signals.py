"""
signals.py — Control Signal Plane
==================================
The only channel between the control API (HTTP handlers, tests) and a run
that is suspended inside the Pacer.

Both sides hold a reference to the SAME ControlSignals object and read
`paused` / `stopped` as live attributes at every check.  Nothing ever
copies the flags into a local before a suspension.
"""

import threading


class StoppedError(Exception):
    """
    Raised to unwind an in-flight run after stop().

    This is a cancellation signal, not a fault.  It is caught exactly once,
    at the Session boundary, which tells it apart from genuine runner errors.
    """


class ControlSignals:
    """
    Attributes:
        paused  : Pacer stops consuming the delay budget while True.
        stopped : Every check point raises StoppedError while True.
    """

    def __init__(self):
        self.paused:  bool = False
        self.stopped: bool = False
        self._lock = threading.Lock()

    def reset(self) -> None:
        with self._lock:
            self.paused  = False
            self.stopped = False

    def request_pause(self) -> None:
        self.paused = True

    def request_resume(self) -> None:
        self.paused = False

    def request_stop(self) -> None:
        # unpause together with the stop so a run never sits in the pause poll
        with self._lock:
            self.stopped = True
            self.paused  = False

    def check(self) -> None:
        if self.stopped:
            raise StoppedError("sorting stopped")

    def __repr__(self) -> str:
        return f"ControlSignals(paused={self.paused}, stopped={self.stopped})"
