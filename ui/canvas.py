"""
canvas.py — SVG Bar Renderer
=============================
Pure rendering function: bar snapshot → SVG string.

The renderer consumes:
  • array   – the observable array surface, a list of
              {"value": int, "state": "idle" | "selected"} dicts
              (Session.state()["array"] / BarArray.snapshot())
  • config  – visual config (canvas size, colours, fonts, …)

Design decisions:
  - NO mutation.  The caller passes a snapshot and gets back a string,
    so rendering never holds the array lock.
  - Bar height is scaled against the largest value on screen.
  - State-based colouring is a simple dict lookup: state → hex colour.
"""

from typing import Dict, List, Optional


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 500
    bg:     str = "#0d1117"

    # bar colours (state → fill)
    bar_colors: Dict[str, str] = {
        "idle":     "#0ea5e9",   # cyan blue
        "selected": "#f43f5e",   # rose — being compared / written
        "sorted":   "#10b981",   # emerald — whole array finished
    }

    # bars
    bar_gap:          int = 8
    margin:           int = 24
    label_color:      str = "#e6edf3"
    label_size:       int = 12
    min_bar_height:   int = 4


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    array: List[dict],
    config: CanvasConfig = CONFIG,
    sorted_: bool = False,
    show_values: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        array       : Snapshot of the bars.
        config      : Visual config.
        sorted_     : Paint every bar with the "sorted" colour.
        show_values : Draw each value above its bar.
    """

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]
    svg_parts.append(
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>'
    )

    if array:
        peak    = max(bar["value"] for bar in array) or 1
        usable  = config.width - 2 * config.margin
        slot_w  = usable / len(array)
        bar_w   = max(1.0, slot_w - config.bar_gap)
        for i, bar in enumerate(array):
            x = config.margin + i * slot_w + config.bar_gap / 2
            svg_parts.append(_render_bar(i, bar, x, bar_w, peak, config, sorted_, show_values))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Bar Rendering
# ---------------------------------------------------------------------------
def _render_bar(
    index: int,
    bar: dict,
    x: float,
    width: float,
    peak: int,
    config: CanvasConfig,
    sorted_: bool,
    show_values: bool,
) -> str:
    state_key = "sorted" if sorted_ else bar.get("state", "idle")
    fill = bar_color(state_key, config)

    usable_h = config.height - 2 * config.margin - config.label_size
    h = max(config.min_bar_height, usable_h * bar["value"] / peak)
    y = config.height - config.margin - h

    parts = [
        f'<g class="bar" data-index="{index}" data-state="{state_key}">',
        f'  <rect x="{x:.1f}" y="{y:.1f}" width="{width:.1f}" height="{h:.1f}" '
        f'rx="3" fill="{fill}"/>',
    ]
    if show_values:
        parts.append(
            f'  <text x="{x + width / 2:.1f}" y="{y - 4:.1f}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="\'DM Sans\', sans-serif" '
            f'fill="{config.label_color}">{bar["value"]}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def bar_color(state: Optional[str], config: CanvasConfig = CONFIG) -> str:
    return config.bar_colors.get(state or "idle", config.bar_colors["idle"])
