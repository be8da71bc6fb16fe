"""
quick_sort.py — Quick Sort
===========================
Hoare-style partition with the middle element as pivot.

The two cursor skip loops never emit a Step, so they carry their own
stop check; otherwise a long skip could outlive a stop request.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def quick_sort(arr, start, end):",             # 0
    "    if start ≥ end: return",                   # 1
    "    pivot ← arr[(start + end) // 2]",          # 2
    "    i ← start; j ← end",                       # 3
    "    while i ≤ j:",                             # 4
    "        while arr[i] < pivot: i ← i + 1",      # 5
    "        while arr[j] > pivot: j ← j - 1",      # 6
    "        if i ≤ j: swap(arr[i], arr[j]); i++, j--",  # 7
    "    quick_sort(arr, start, j)",                # 8
    "    quick_sort(arr, i, end)",                  # 9
]


def quick_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)
    _sort(arr, 0, len(arr) - 1, emitter)
    return arr


def _sort(arr: List[int], start: int, end: int, emitter: "StepEmitter") -> None:
    if start >= end:
        return
    emitter.check()

    pivot = arr[(start + end) // 2]
    i, j  = start, end

    while i <= j:
        emitter.check()
        while arr[i] < pivot:
            emitter.check()
            i += 1
        while arr[j] > pivot:
            emitter.check()
            j -= 1

        if i <= j:
            arr[i], arr[j] = arr[j], arr[i]
            emitter.apply_many([(i, arr[i], "selected"), (j, arr[j], "selected")])
            emitter.wait()
            emitter.apply_many([(i, arr[i], "idle"), (j, arr[j], "idle")])
            i += 1
            j -= 1

    _sort(arr, start, j, emitter)
    _sort(arr, i, end, emitter)
