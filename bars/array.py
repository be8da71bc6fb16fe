"""
array.py — Bar Array Container & Generator
===========================================
Single source of truth for the bars on screen.  The Step Emitter is the
only writer; the renderer and the HTTP state endpoint are readers.

Responsibilities:
  1. Partial, atomic per-slot updates         (apply)
  2. Read snapshots for renderers / runners   (values, snapshot)
  3. Array-generation factory methods         (random, from values)
  4. Serialisation round-trip                 (to_dict / from_dict)

Design decisions:
  - Slots are stable: sorting moves VALUES through slots, it never
    reorders Element objects.
  - One lock guards every mutation and every snapshot so a reader never
    sees half of a merge.  The lock is re-entrant so the emitter can hold
    it across a group of writes (a swap) and still call apply().
"""

import random
import threading
from typing import List, Optional, Sequence, Union

from bars.element import Element, ElementState


class BarArray:
    """
    Attributes:
        elements : [Element, …] — one per slot, position is identity.
        lock     : RLock guarding reads and writes of `elements`.
    """

    def __init__(self, elements: Optional[Sequence[Element]] = None):
        self.elements: List[Element] = list(elements or [])
        self.lock = threading.RLock()

    # ==================================================================
    # MUTATION
    # ==================================================================
    def apply(
        self,
        index: int,
        value: Optional[int] = None,
        state: Optional[Union[ElementState, str]] = None,
    ) -> Element:
        """Merge a partial update into slot `index`.  Negative indices are rejected."""
        if index < 0:
            raise IndexError(f"bar index out of range: {index}")
        with self.lock:
            element = self.elements[index]
            element.merge(value=value, state=state)
            return element

    def clear_states(self) -> None:
        """Reset every slot to IDLE, keeping values."""
        with self.lock:
            for element in self.elements:
                element.state = ElementState.IDLE

    # ==================================================================
    # READS
    # ==================================================================
    def values(self) -> List[int]:
        with self.lock:
            return [e.value for e in self.elements]

    def states(self) -> List[ElementState]:
        with self.lock:
            return [e.state for e in self.elements]

    def snapshot(self) -> List[dict]:
        """Plain-dict copy of every slot — safe to hand to another thread."""
        with self.lock:
            return [e.to_dict() for e in self.elements]

    def is_sorted(self) -> bool:
        vals = self.values()
        return all(vals[i] <= vals[i + 1] for i in range(len(vals) - 1))

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        size: int = 12,
        low: int = 60,
        high: int = 1000,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "BarArray":
        """
        `size` independent values drawn uniformly from [low, high),
        every slot IDLE.
        """
        if high <= low:
            raise ValueError(f"empty value range [{low}, {high})")
        if rng is None:
            rng = random.Random(seed) if seed is not None else random
        return cls(Element(rng.randrange(low, high)) for _ in range(size))

    @classmethod
    def from_values(cls, values: Sequence[int]) -> "BarArray":
        return cls(Element(int(v)) for v in values)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {"elements": self.snapshot()}

    @classmethod
    def from_dict(cls, data: dict) -> "BarArray":
        return cls(Element.from_dict(ed) for ed in data.get("elements", []))

    # ==================================================================
    # Dunder
    # ==================================================================
    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> Element:
        return self.elements[index]

    def __repr__(self) -> str:
        return f"BarArray(size={len(self.elements)}, values={self.values()})"
