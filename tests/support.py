"""
Shared fixtures for the engine / runner tests.
"""

from typing import Callable, List, Optional

from bars import BarArray
from algorithms.step import Step
from engine import ControlSignals, Pacer, StepEmitter, StoppedError


class FakeClock:
    """Stands in for time.sleep; records every requested sleep in seconds."""

    def __init__(self, on_sleep: Optional[Callable[["FakeClock"], None]] = None):
        self.sleeps: List[float] = []
        self.on_sleep = on_sleep

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.on_sleep:
            self.on_sleep(self)

    @property
    def total_ms(self) -> float:
        return round(sum(self.sleeps) * 1000, 6)


def make_emitter(values, delay=0, sleep=None, signals=None):
    """A real StepEmitter over `values` that never actually sleeps."""
    bars    = BarArray.from_values(values)
    signals = signals or ControlSignals()
    pacer   = Pacer(signals, sleep=sleep or (lambda seconds: None))
    steps: List[Step] = []
    emitter = StepEmitter(bars, signals, pacer, delay=lambda: delay, subscribers=[steps.append])
    return emitter, bars, steps


def stop_after(emitter: StepEmitter, steps: List[Step], count: int) -> None:
    """Request a stop from inside the subscriber once `count` steps were seen."""
    def _watch(step: Step) -> None:
        if len(steps) >= count:
            emitter.signals.request_stop()
    emitter.subscribers.append(_watch)


class CheckLimitEmitter:
    """
    Emitter double whose check() raises StoppedError after `limit` calls.
    Used to prove that loops which never emit still honour a stop.
    """

    def __init__(self, limit: int):
        self.limit   = limit
        self.checks  = 0
        self.applied: list = []

    def check(self) -> None:
        self.checks += 1
        if self.checks > self.limit:
            raise StoppedError("sorting stopped")

    def apply(self, index, value=None, state=None) -> None:
        self.applied.append((index, value, state))

    def apply_many(self, changes) -> None:
        self.applied.extend(changes)

    def wait(self) -> None:
        pass
