"""
emitter.py — Step Emitter
==========================
The mutation-reporting surface every runner calls into.

    emitter.apply(3, state="selected")           # highlight slot 3
    emitter.apply_many([(3, 8, "idle"),          # swap: both halves land
                        (4, 5, "idle")])         # as one atomic group
    emitter.wait()                               # pace at the CURRENT delay

Guarantees:
  - A write is refused with StoppedError once stop() has been requested,
    so no late writes reach the array after a stop.  The check and the
    write happen under the array lock, the same lock stop() contends on
    through Session.stop().
  - Subscribers see Steps in exactly the order runners issued them.
  - The delay is re-read on every wait(), so speed changes apply from the
    next suspension on.
"""

from typing import Callable, Iterable, List, Optional, Tuple, Union

from bars import BarArray, ElementState
from algorithms.step import Step
from engine.signals import ControlSignals
from engine.pacer import Pacer


StepCallback = Callable[[Step], None]
Change = Tuple[int, Optional[int], Optional[Union[ElementState, str]]]


class StepEmitter:
    """
    Attributes:
        bars        : The BarArray being visualised.
        signals     : Shared ControlSignals.
        pacer       : Pacer used by wait().
        delay       : Zero-arg callable returning the current delay in ms.
        subscribers : Callbacks fired once per Step, in issue order.
        step_count  : Number of Steps emitted so far.
    """

    def __init__(
        self,
        bars: BarArray,
        signals: ControlSignals,
        pacer: Pacer,
        delay: Callable[[], float],
        subscribers: Optional[List[StepCallback]] = None,
    ):
        self.bars        = bars
        self.signals     = signals
        self.pacer       = pacer
        self.delay       = delay
        self.subscribers: List[StepCallback] = list(subscribers or [])
        self.step_count  = 0

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def apply(
        self,
        index: int,
        value: Optional[int] = None,
        state: Optional[Union[ElementState, str]] = None,
    ) -> None:
        self.apply_many([(index, value, state)])

    def apply_many(self, changes: Iterable[Change]) -> None:
        """Apply a group of partial updates atomically with respect to stop()."""
        with self.bars.lock:
            self.signals.check()
            steps = []
            for index, value, state in changes:
                element = self.bars.apply(index, value=value, state=state)
                steps.append(Step(
                    step_number=self.step_count,
                    index=index,
                    value=value,
                    state=element.state.value if state is not None else None,
                ))
                self.step_count += 1
            for step in steps:
                self._notify(step)

    # ------------------------------------------------------------------
    # Pacing
    # ------------------------------------------------------------------
    def wait(self) -> None:
        self.pacer.wait(self.delay())

    def check(self) -> None:
        """Stop check for loops that emit nothing (e.g. quick-sort cursor skips)."""
        self.signals.check()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _notify(self, step: Step) -> None:
        for callback in self.subscribers:
            callback(step)
