"""
step.py — Bar Mutation Event
=============================
Every runner reports progress through the Step Emitter, and every
emitter write becomes one Step handed to subscribers (renderer,
recorder).  A Step is the smallest renderer-visible change:

    • which slot changed
    • its new value (or None when only the highlight changed)
    • its new state (or None when only the value changed)

Design decisions:
  - Step is a frozen dataclass.  It is a RECORD of something that already
    happened to the BarArray; subscribers never write back through it.
  - `step_number` is a per-run sequence number so subscribers can verify
    they observed writes in issue order.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0-based index of this write in the run.
        index       : Slot that changed.
        value       : New value, or None if unchanged.
        state       : New state string ("idle" / "selected"), or None if unchanged.
    """

    step_number: int           = 0
    index:       int           = 0
    value:       Optional[int] = None
    state:       Optional[str] = None

    @property
    def is_write(self) -> bool:
        """True when the step moved a value (not just a highlight)."""
        return self.value is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "index":       self.index,
            "value":       self.value,
            "state":       self.state,
        }
