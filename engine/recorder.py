"""
recorder.py — Run Recorder & Analytics
========================================
Records every Step of one run, then computes the metrics the UI shows
in the Analytics panel.

Usage:
    rec = RunRecorder()
    rec.begin(Algorithm.MERGE_SORT, array_size=12)
    emitter.subscribers.append(rec.record_step)
    …run…
    metrics = rec.finish("finished")     # the analytics card
    rec.export()                         # serialisable snapshot for replay
"""

import threading
import time
from dataclasses import dataclass, asdict
from typing import Optional, List, Dict, Any

from algorithms import Algorithm
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    array_size:   int   = 0
    total_steps:  int   = 0          # every Step emitted
    writes:       int   = 0          # Steps that moved a value
    highlights:   int   = 0          # Steps that only changed a state
    wall_time_ms: float = 0.0        # includes pacing and paused time
    outcome:      str   = ""         # "running" / "finished" / "stopped" / "failed"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# RunRecorder
# ---------------------------------------------------------------------------
class RunRecorder:
    """
    Attributes:
        steps   : Every Step of the current run, in emission order.
        metrics : Running RunMetrics (final once finish() is called).
    """

    def __init__(self):
        self.steps:   List[Step] = []
        self.metrics: Optional[RunMetrics] = None
        self._lock = threading.Lock()
        self._start_time: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def begin(self, algorithm: Algorithm, array_size: int) -> None:
        info = algorithm.info
        with self._lock:
            self.steps = []
            self.metrics = RunMetrics(
                algo_key=info.key,
                algo_label=info.label,
                array_size=array_size,
                outcome="running",
            )
            self._start_time = time.monotonic()

    def record_step(self, step: Step) -> None:
        """Subscriber callback for the StepEmitter."""
        with self._lock:
            self.steps.append(step)
            if self.metrics is None:
                return
            self.metrics.total_steps += 1
            if step.is_write:
                self.metrics.writes += 1
            else:
                self.metrics.highlights += 1

    def finish(self, outcome: str) -> RunMetrics:
        with self._lock:
            if self.metrics is None:
                raise RuntimeError("Call begin() first.")
            wall_ms = (time.monotonic() - self._start_time) * 1000
            self.metrics.wall_time_ms = round(wall_ms, 2)
            self.metrics.outcome      = outcome
            return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        with self._lock:
            if self.metrics is None:
                return None
            return RunMetrics(**asdict(self.metrics))

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "metrics": self.metrics.to_dict() if self.metrics else {},
                "steps":   [s.to_dict() for s in self.steps],
            }
