"""
selection_sort.py — Selection Sort
===================================
For each position, scan the unsorted suffix for the minimum while
keeping the running minimum highlighted, then perform at most one swap.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                     # 0
    "    for i in 0 .. n-1:",                       # 1
    "        min ← i",                              # 2
    "        for j in i+1 .. n-1:",                 # 3
    "            if arr[j] < arr[min]:",            # 4
    "                min ← j",                      # 5
    "        if min ≠ i: swap(arr[i], arr[min])",   # 6
]


def selection_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)
    n   = len(arr)

    for i in range(n):
        emitter.check()
        smallest = i
        emitter.apply(smallest, state="selected")

        for j in range(i + 1, n):
            emitter.check()
            emitter.apply(j, state="selected")
            emitter.wait()

            if arr[j] < arr[smallest]:
                emitter.apply(smallest, state="idle")
                smallest = j
                emitter.apply(smallest, state="selected")
            else:
                emitter.apply(j, state="idle")

        if smallest != i:
            arr[i], arr[smallest] = arr[smallest], arr[i]
            emitter.apply_many([
                (i,        arr[i],        "idle"),
                (smallest, arr[smallest], "idle"),
            ])
        else:
            emitter.apply(i, state="idle")

    return arr
