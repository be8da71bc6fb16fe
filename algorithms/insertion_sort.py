"""
insertion_sort.py — Insertion Sort
===================================
Grows a sorted prefix one element at a time.  The element being
inserted is lifted out, larger predecessors shift one slot right
(one wait per shift), then the element drops into the gap.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def insertion_sort(arr):",                     # 0
    "    for i in 1 .. n-1:",                       # 1
    "        current ← arr[i]",                     # 2
    "        j ← i - 1",                            # 3
    "        while j ≥ 0 and current < arr[j]:",    # 4
    "            arr[j+1] ← arr[j]",                # 5
    "            j ← j - 1",                        # 6
    "        arr[j+1] ← current",                   # 7
]


def insertion_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)

    for i in range(1, len(arr)):
        emitter.check()
        current = arr[i]
        j = i - 1

        emitter.apply(i, value=current, state="selected")

        while j > -1 and current < arr[j]:
            emitter.check()
            arr[j + 1] = arr[j]
            emitter.apply(j + 1, value=arr[j], state="selected")
            j -= 1
            emitter.wait()
            emitter.apply(j + 2, value=arr[j + 1], state="idle")

        arr[j + 1] = current
        emitter.apply(j + 1, value=current, state="idle")

    return arr
