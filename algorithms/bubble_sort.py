"""
bubble_sort.py — Bubble Sort
=============================
Adjacent compare-and-swap over shrinking passes.

Per comparison:
  1. Highlight slots j and j+1  →  SELECTED, wait
  2. If arr[j] > arr[j+1]       →  swap both values, wait again
  3. Return both slots to IDLE

Strict `>` keeps equal values in their original order.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                        # 0
    "    for i in 0 .. n-1:",                       # 1
    "        for j in 0 .. n-i-2:",                 # 2
    "            compare arr[j], arr[j+1]",         # 3
    "            if arr[j] > arr[j+1]:",            # 4
    "                swap(arr[j], arr[j+1])",       # 5
]


def bubble_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)
    n   = len(arr)

    for i in range(n):
        for j in range(n - i - 1):
            emitter.check()
            emitter.apply_many([(j, None, "selected"), (j + 1, None, "selected")])
            emitter.wait()

            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                emitter.apply_many([(j, arr[j], None), (j + 1, arr[j + 1], None)])
                emitter.wait()

            emitter.apply_many([(j, None, "idle"), (j + 1, None, "idle")])

    return arr
