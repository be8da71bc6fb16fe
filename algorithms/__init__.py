"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows
about.

    from algorithms import Algorithm, REGISTRY, get_algorithm

`Algorithm` is a closed enum of the six algorithm identities; its value
is the key the UI sends.  REGISTRY maps each member to an AlgoInfo card:
    {
        Algorithm.BUBBLE_SORT: AlgoInfo(key, label, fn, pseudocode, …),
        …
    }

Every runner has the same shape:

    fn(values: List[int], emitter: StepEmitter) -> List[int]

It sorts its own copy of `values`, reports every visible change through
the emitter and returns the sorted working buffer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Dict, Optional, Union

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc
from algorithms.radix_sort     import radix_sort     as _radix,     PSEUDOCODE as _radix_pc


# ---------------------------------------------------------------------------
# Algorithm — the closed set of identities
# ---------------------------------------------------------------------------
class Algorithm(Enum):
    BUBBLE_SORT    = "bubble_sort"
    INSERTION_SORT = "insertion_sort"
    SELECTION_SORT = "selection_sort"
    MERGE_SORT     = "merge_sort"
    QUICK_SORT     = "quick_sort"
    RADIX_SORT     = "radix_sort"

    @classmethod
    def parse(cls, key: Union["Algorithm", str]) -> "Algorithm":
        """Accept a member or its key.  Unknown keys raise ValueError."""
        if isinstance(key, cls):
            return key
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown algorithm: {key!r}") from None

    @property
    def info(self) -> "AlgoInfo":
        return REGISTRY[self]

    def run(self, values: List[int], emitter) -> List[int]:
        return self.info.fn(values, emitter)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bubble_sort"
    label:            str                    # human label, e.g. "Bubble Sort"
    fn:               Callable               # the runner
    pseudocode:       List[str]              # lines for the side-panel
    tags:             List[str] = field(default_factory=list)   # e.g. ["comparison", "in-place"]
    stable:           bool      = False
    complexity_time:  str       = ""         # e.g. "O(n²)"
    complexity_space: str       = ""         # e.g. "O(1)"
    description:      str       = ""         # one-liner for the UI card

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "stable":           self.stable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.BUBBLE_SORT: AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        tags=["comparison", "in-place"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs. Large values bubble to the end.",
    ),

    Algorithm.INSERTION_SORT: AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        tags=["comparison", "in-place"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shifts larger predecessors right and drops each value into its gap.",
    ),

    Algorithm.SELECTION_SORT: AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted suffix. At most one swap per pass.",
    ),

    Algorithm.MERGE_SORT: AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        tags=["comparison", "divide-and-conquer", "recursive"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in half, sorts each half, merges them back together.",
    ),

    Algorithm.QUICK_SORT: AlgoInfo(
        key="quick_sort", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        tags=["comparison", "divide-and-conquer", "recursive", "in-place"],
        complexity_time="O(n log n) avg", complexity_space="O(log n)",
        description="Partitions around the middle pivot with two inward cursors.",
    ),

    Algorithm.RADIX_SORT: AlgoInfo(
        key="radix_sort", label="Radix Sort (LSD)", fn=_radix, pseudocode=_radix_pc,
        tags=["non-comparison", "buckets"], stable=True,
        complexity_time="O(d · n)", complexity_space="O(n)",
        description="Distributes values into digit buckets, ones place first.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[Algorithm, str]) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key or member, or None."""
    try:
        return REGISTRY[Algorithm.parse(key)]
    except ValueError:
        return None


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in enum order."""
    return [REGISTRY[a] for a in Algorithm]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in list_algorithms() if tag in a.tags]


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
