"""
radix_sort.py — LSD Radix Sort
===============================
Least-significant-digit first.  Each pass distributes the values into
ten ordered buckets by decimal digit k (stable), concatenates them, and
re-emits every slot with its new value: SELECTED, wait, IDLE.

Radix sort never compares two elements, so the pacing is one wait per
slot per pass.
"""

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from engine.emitter import StepEmitter


PSEUDOCODE: List[str] = [
    "def radix_sort(arr):",                         # 0
    "    for k in 0 .. most_digits(arr)-1:",        # 1
    "        buckets ← 10 empty lists",             # 2
    "        for x in arr:",                        # 3
    "            buckets[digit(x, k)].append(x)",   # 4
    "        arr ← concat(buckets)",                # 5
]


# ---------------------------------------------------------------------------
# Digit helpers
# ---------------------------------------------------------------------------
def get_digit(num: int, place: int) -> int:
    """Decimal digit of |num| at `place` (0 = ones)."""
    return (abs(num) // 10 ** place) % 10


def digit_count(num: int) -> int:
    """Number of decimal digits in |num|; zero has one digit."""
    if num == 0:
        return 1
    return len(str(abs(num)))


def most_digits(values: Sequence[int]) -> int:
    return max((digit_count(v) for v in values), default=0)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------
def radix_sort(values: List[int], emitter: "StepEmitter") -> List[int]:
    arr = list(values)

    for k in range(most_digits(arr)):
        emitter.check()
        buckets: List[List[int]] = [[] for _ in range(10)]
        for num in arr:
            buckets[get_digit(num, k)].append(num)

        arr = [num for bucket in buckets for num in bucket]

        for i, num in enumerate(arr):
            emitter.check()
            emitter.apply(i, value=num, state="selected")
            emitter.wait()
            emitter.apply(i, value=num, state="idle")

    return arr
