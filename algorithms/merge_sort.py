"""
merge_sort.py — Merge Sort
===========================
Top-down divide and conquer over the inclusive range [start, end].

The merge writes the range left to right, one wait per written slot,
then re-emits every slot of the range as IDLE with its final value so
no stale SELECTED highlight survives the merge.

Stop is checked on every recursive entry, every merge entry and every
merge-loop iteration; recursion depth alone never delays a stop.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, start, end):",             # 0
    "    if start ≥ end: return",                   # 1
    "    mid ← (start + end) // 2",                 # 2
    "    merge_sort(arr, start, mid)",              # 3
    "    merge_sort(arr, mid+1, end)",              # 4
    "    merge(arr, start, mid, end)",              # 5
    "def merge(arr, start, mid, end):",             # 6
    "    take the smaller head of left / right",    # 7
    "    copy whichever side remains",              # 8
]


def merge_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)
    _sort(arr, 0, len(arr) - 1, emitter)
    return arr


def _sort(arr: List[int], start: int, end: int, emitter: "StepEmitter") -> None:
    if start >= end:
        return
    emitter.check()

    middle = (start + end) // 2
    _sort(arr, start, middle, emitter)
    _sort(arr, middle + 1, end, emitter)
    _merge(arr, start, middle, end, emitter)


def _merge(arr: List[int], start: int, middle: int, end: int, emitter: "StepEmitter") -> None:
    emitter.check()
    left  = arr[start:middle + 1]
    right = arr[middle + 1:end + 1]

    i = j = 0
    k = start

    while i < len(left) and j < len(right):
        emitter.check()
        if left[i] < right[j]:
            arr[k] = left[i]
            i += 1
        else:
            arr[k] = right[j]
            j += 1
        emitter.apply(k, value=arr[k], state="selected")
        k += 1
        emitter.wait()

    while i < len(left):
        emitter.check()
        arr[k] = left[i]
        emitter.apply(k, value=arr[k], state="selected")
        i += 1
        k += 1
        emitter.wait()

    while j < len(right):
        emitter.check()
        arr[k] = right[j]
        emitter.apply(k, value=arr[k], state="selected")
        j += 1
        k += 1
        emitter.wait()

    emitter.apply_many([(idx, arr[idx], "idle") for idx in range(start, end + 1)])
