"""
session.py — Session Coordinator
=================================
The Session is the ONLY object the host interacts with.  It owns the
bar array, the selected algorithm, the current delay and the run
lifecycle, and exposes the control API:

    generate(start_sorting)   start()   pause()   resume()   stop()
    set_speed(level)          set_algorithm(name)

State machine:
    IDLE     →  start()            →  RUNNING
    RUNNING  →  runner returns     →  FINISHED   (sorted = True)
    RUNNING  →  stop()             →  STOPPED    (sorted stays False)
    RUNNING  →  runner raises      →  FAILED     (logged, never re-raised)
    any      →  generate()         →  IDLE

Threading:
  start() runs the selected runner on a daemon worker thread and returns
  at once.  Exactly one run is in flight at a time.  Launching a run and
  swapping the array both happen under the lifecycle lock: start() refuses
  while sorting or while another start() holds that lock, and generate()
  waits for it.  Both join a run that is still unwinding from a stop before
  they clear the control signals, so an old run can never see a freshly
  cleared `stopped` flag.
"""

import logging
import random
import threading
import time
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from bars import BarArray
from algorithms import Algorithm
from algorithms.step import Step
from engine.signals import ControlSignals, StoppedError
from engine.pacer import Pacer, SLICE_MS, PAUSE_POLL_MS
from engine.emitter import StepEmitter
from engine.recorder import RunRecorder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,
    "normal": 500,
    "fast":   250,
}
DEFAULT_DELAY_MS = 500                       # unknown speed level
INITIAL_DELAY_MS = SPEED_PRESETS["slow"]

# ---------------------------------------------------------------------------
# Array generation
# ---------------------------------------------------------------------------
ARRAY_SIZE = 12
VALUE_MIN  = 60       # inclusive
VALUE_MAX  = 1000     # exclusive


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    FINISHED = "finished"
    STOPPED  = "stopped"
    FAILED   = "failed"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class Session:
    """
    Attributes:
        bars       : Current BarArray (replaced by generate() / load()).
        signals    : Shared ControlSignals read by the in-flight run.
        pacer      : Pacer used by every run of this session.
        algorithm  : Algorithm used by the NEXT start().
        sorted     : True once a run completed without being stopped.
        sorting    : True while a run is in flight (cleared at once by stop()).
        run_state  : Current RunState.
        last_error : repr of the last runner fault, or None.
        recorder   : RunRecorder for the current / last run.
    """

    def __init__(
        self,
        delay: int = INITIAL_DELAY_MS,
        algorithm: Union[Algorithm, str] = Algorithm.BUBBLE_SORT,
        size: int = ARRAY_SIZE,
        value_range: Tuple[int, int] = (VALUE_MIN, VALUE_MAX),
        slice_ms: int = SLICE_MS,
        pause_poll_ms: int = PAUSE_POLL_MS,
        sleep: Callable[[float], None] = time.sleep,
        seed: Optional[int] = None,
    ):
        self.signals   = ControlSignals()
        self.pacer     = Pacer(self.signals, slice_ms, pause_poll_ms, sleep)
        self.bars      = BarArray()
        self.algorithm = Algorithm.parse(algorithm)
        self.size      = size
        self.value_range = value_range

        self.sorted:     bool           = False
        self.sorting:    bool           = False
        self.run_state:  RunState       = RunState.IDLE
        self.last_error: Optional[str]  = None
        self.recorder = RunRecorder()

        self._delay = 0
        self.set_delay(delay)
        self._rng = random.Random(seed) if seed is not None else None
        self._subscribers: List[Callable[[Step], None]] = []
        self._thread: Optional[threading.Thread] = None
        self._runner: Optional[threading.Thread] = None
        self._idle = threading.Event()
        self._idle.set()
        self._lock = threading.Lock()
        # held while a run is launched or the array is swapped
        self._lifecycle = threading.Lock()

    # ------------------------------------------------------------------
    # Array lifecycle
    # ------------------------------------------------------------------
    def generate(self, start_sorting: bool = False) -> None:
        """Replace the array with fresh random values (all IDLE)."""
        low, high = self.value_range
        bars = BarArray.generate_random(self.size, low, high, rng=self._rng)
        self._install(bars, start_sorting)

    def load(self, values: Sequence[int], start_sorting: bool = False) -> None:
        """
        Replace the array with caller-supplied values (all IDLE).

        Raises ValueError on negative values: radix sort buckets by digit
        magnitude and would leave them out of order.
        """
        negatives = [v for v in values if v < 0]
        if negatives:
            raise ValueError(f"values must be non-negative, got {negatives}")
        self._install(BarArray.from_values(values), start_sorting)

    def _install(self, bars: BarArray, start_sorting: bool) -> None:
        with self._lifecycle:
            self._halt_worker()
            with self._lock:
                self.bars       = bars
                self.sorted     = False
                self.sorting    = False
                self.run_state  = RunState.IDLE
                self.last_error = None
                self.signals.reset()
        logger.info("New array of %d bars: %s", len(bars), bars.values())
        if start_sorting:
            self.start()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """
        Launch the selected algorithm on a worker thread.

        Returns False (and does nothing) if a run is already in flight or
        another start() is still launching one.
        """
        if not self._lifecycle.acquire(blocking=False):
            logger.warning("start() ignored: another run is being launched")
            return False
        try:
            prepared = self._prepare()
            if prepared is None:
                return False
            algorithm, values = prepared
            self._thread = threading.Thread(
                target=self._execute,
                args=(algorithm, values),
                name=f"sort-{algorithm.value}",
                daemon=True,
            )
            try:
                self._thread.start()
            except RuntimeError:
                # no worker will ever reconcile this run
                with self._lock:
                    self.sorting   = False
                    self.run_state = RunState.FAILED
                self._idle.set()
                raise
            return True
        finally:
            self._lifecycle.release()

    def run(self) -> Optional[RunState]:
        """Synchronous variant of start(): returns the final RunState."""
        if not self._lifecycle.acquire(blocking=False):
            logger.warning("run() ignored: another run is being launched")
            return None
        try:
            prepared = self._prepare()
        finally:
            self._lifecycle.release()
        if prepared is None:
            return None
        self._execute(*prepared)
        return self.run_state

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the in-flight run.  Returns True if no run is left alive."""
        if self._runner is threading.current_thread():
            return True
        return self._idle.wait(timeout)

    def _prepare(self) -> Optional[Tuple[Algorithm, List[int]]]:
        with self._lock:
            if self.sorting or self._runner is threading.current_thread():
                logger.warning("start() ignored: a run is already in flight")
                return None
        # a stopped run may still be unwinding toward its next check point
        self._idle.wait()
        with self._lock:
            if self.sorting:
                return None
            self.signals.reset()
            self.sorted     = False
            self.sorting    = True
            self.run_state  = RunState.RUNNING
            self.last_error = None
            self._idle.clear()
            return self.algorithm, self.bars.values()

    def _execute(self, algorithm: Algorithm, values: List[int]) -> None:
        self._runner = threading.current_thread()
        try:
            self._run_algorithm(algorithm, values)
        finally:
            self._runner = None
            self._idle.set()

    def _run_algorithm(self, algorithm: Algorithm, values: List[int]) -> None:
        self.recorder.begin(algorithm, len(values))
        emitter = StepEmitter(
            self.bars,
            self.signals,
            self.pacer,
            delay=lambda: self._delay,
            subscribers=[self.recorder.record_step] + list(self._subscribers),
        )
        logger.info(
            "Run started: %s on %d bars (delay=%dms)",
            algorithm.value, len(values), self._delay,
        )
        try:
            algorithm.run(values, emitter)
        except StoppedError:
            self._reconcile(RunState.STOPPED)
        except Exception as exc:
            logger.exception("Run failed: %s", algorithm.value)
            self.last_error = repr(exc)
            self._reconcile(RunState.FAILED)
        else:
            if self.signals.stopped:
                self._reconcile(RunState.STOPPED)
            else:
                self._reconcile(RunState.FINISHED)

    def _reconcile(self, outcome: RunState) -> None:
        with self._lock:
            self.sorting   = False
            self.run_state = outcome
            if outcome is RunState.FINISHED:
                self.sorted = True
        metrics = self.recorder.finish(outcome.value)
        logger.info(
            "Run %s: %s after %d steps (%.0fms)",
            outcome.value, metrics.algo_key, metrics.total_steps, metrics.wall_time_ms,
        )

    def _halt_worker(self) -> None:
        if not self._idle.is_set() and self._runner is not threading.current_thread():
            self.stop()
            self._idle.wait()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def pause(self) -> None:
        if not self.sorting:
            logger.debug("pause() ignored: not sorting")
            return
        if not self.signals.paused:
            self.signals.request_pause()
            logger.debug("Run paused")

    def resume(self) -> None:
        if self.signals.paused:
            self.signals.request_resume()
            logger.debug("Run resumed")

    def stop(self) -> None:
        # taken with the array lock so no write lands after stop() returns
        with self.bars.lock:
            self.signals.request_stop()
        with self._lock:
            was_sorting  = self.sorting
            self.sorting = False
        if was_sorting:
            logger.info("Stop requested")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_speed(self, level: Any) -> int:
        """Map a speed preset to a delay.  Unknown levels fall back to 500ms."""
        delay = SPEED_PRESETS.get(str(level), DEFAULT_DELAY_MS)
        self.set_delay(delay)
        return delay

    def set_delay(self, delay_ms: int) -> None:
        if delay_ms <= 0:
            raise ValueError(f"delay must be positive, got {delay_ms}")
        self._delay = int(delay_ms)
        logger.info("Delay set to %dms", self._delay)

    def set_algorithm(self, name: Union[Algorithm, str]) -> Algorithm:
        """Select the algorithm for the next start().  Unknown keys raise ValueError."""
        self.algorithm = Algorithm.parse(name)
        logger.info("Algorithm set to %s", self.algorithm.value)
        return self.algorithm

    def subscribe(self, callback: Callable[[Step], None]) -> None:
        """Register a renderer callback; applies from the next run on."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[Step], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def delay(self) -> int:
        return self._delay

    @property
    def paused(self) -> bool:
        return self.signals.paused

    @property
    def array(self) -> List[dict]:
        return self.bars.snapshot()

    def state(self) -> dict:
        """The observable state surface handed to renderers / the HTTP API."""
        metrics = self.recorder.get_metrics()
        return {
            "array":     self.bars.snapshot(),
            "delay":     self._delay,
            "algorithm": self.algorithm.value,
            "sorted":    self.sorted,
            "sorting":   self.sorting,
            "paused":    self.signals.paused,
            "run_state": self.run_state.value,
            "metrics":   metrics.to_dict() if metrics else None,
            "error":     self.last_error,
        }
