"""
bars/
-----
Core data layer.  Public API:

    from bars import BarArray, Element, ElementState
"""

from bars.element import Element, ElementState
from bars.array   import BarArray

__all__ = [
    "Element",  "ElementState",
    "BarArray",
]
