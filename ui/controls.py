"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start / pause / resume / stop / new array
  • algorithm_selector  – dropdown over the six algorithms
  • speed_selector      – slow / normal / fast
  • analytics_panel     – steps, writes, wall time of the last run
  • pseudocode_viewer   – pseudocode of the selected algorithm

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import Optional, List
from algorithms import AlgoInfo
from engine import RunMetrics, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    sorting: bool = False,
    paused: bool = False,
    sorted_: bool = False,
) -> str:
    if sorting and paused:
        status = '<span class="badge paused">PAUSED</span>'
    elif sorting:
        status = '<span class="badge running">SORTING</span>'
    elif sorted_:
        status = '<span class="badge finished">SORTED</span>'
    else:
        status = '<span class="badge idle">IDLE</span>'

    disabled = 'disabled' if sorting else ''
    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-generate" title="New array" {disabled}>🔀</button>
        <button id="btn-start" title="Start" {disabled}>▶</button>
        <button id="btn-pause" title="Pause">⏸</button>
        <button id="btn-resume" title="Resume">⏯</button>
        <button id="btn-stop" title="Stop">⏹</button>
      </div>
      <div class="step-info">Status: <span id="run-status">{status}</span></div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble_sort",
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed Selector
# ---------------------------------------------------------------------------
def speed_selector(delay: int = SPEED_PRESETS["slow"]) -> str:
    options = []
    for level, ms in SPEED_PRESETS.items():
        sel = 'selected' if ms == delay else ''
        options.append(f'<option value="{level}" {sel}>{level.capitalize()} ({ms} ms)</option>')

    return f"""
    <div class="panel speed-control">
      <h3>⏱ Speed</h3>
      <select id="speed-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Bars:</td><td><strong>{metrics.array_size}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Value Writes:</td><td><strong>{metrics.writes}</strong></td></tr>
        <tr><td>Highlights:</td><td><strong>{metrics.highlights}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.0f} ms</strong></td></tr>
        <tr><td>Outcome:</td><td><strong>{metrics.outcome}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    algo_label: str = "",
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        line_escaped = line.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
        lines_html.append(f'<div class="code-line" data-line="{i}">{line_escaped}</div>')

    return f"""
    <div class="code-block" title="{algo_label}">
      {''.join(lines_html)}
    </div>
    """
