"""
ui/
---
Presentation layer.

    from ui import render_bars
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, bar_color, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    speed_selector,
    analytics_panel,
    pseudocode_viewer,
)

__all__ = [
    "render_bars",
    "bar_color",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "speed_selector",
    "analytics_panel",
    "pseudocode_viewer",
]
