from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Element State Enum — maps 1-to-1 with the bar colour palette
# ---------------------------------------------------------------------------
class ElementState(Enum):
    IDLE     = "idle"       # default bar colour
    SELECTED = "selected"   # highlighted — being compared / written RIGHT NOW

    @classmethod
    def coerce(cls, state: Union["ElementState", str]) -> "ElementState":
        """Accept either an enum member or its string value."""
        if isinstance(state, cls):
            return state
        return cls(state)


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------
class Element:
    """
    One array slot.  Position in the owning BarArray is the identity;
    the element itself only carries what the renderer draws.

    Attributes:
        value : Bar height.
        state : Current ElementState for visual encoding.
    """

    __slots__ = ("value", "state")

    def __init__(self, value: int, state: ElementState = ElementState.IDLE):
        self.value: int          = value
        self.state: ElementState = ElementState.coerce(state)

    def merge(
        self,
        value: Optional[int] = None,
        state: Optional[Union[ElementState, str]] = None,
    ) -> None:
        """Partial update: fields left as None keep their current value."""
        if value is not None:
            self.value = value
        if state is not None:
            self.state = ElementState.coerce(state)

    @property
    def selected(self) -> bool:
        return self.state is ElementState.SELECTED

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"value": self.value, "state": self.state.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Element":
        return cls(value=data["value"], state=data.get("state", ElementState.IDLE.value))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Element(value={self.value}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Element)
            and self.value == other.value
            and self.state == other.state
        )
