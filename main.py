"""
main.py — Sorting Visualizer Flask App
========================================
The web server that hosts the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – current observable state (for polling)
  GET  /api/algorithms         – registry cards
  POST /api/generate           – new random (or supplied) array
  POST /api/start              – start a run with the selected algorithm
  POST /api/pause              – pause the in-flight run
  POST /api/resume             – resume a paused run
  POST /api/stop               – stop the in-flight run
  POST /api/config/speed       – change speed preset (applies mid-run)
  POST /api/config/algo        – change algorithm (applies on next start)

State management:
  One process-wide Session lives in app.config["SORT_SESSION"].  The
  page polls /api/state; the Session's worker thread mutates the bars
  while the request threads only read snapshots and flip control
  signals.
"""

import logging
import os

from flask import Flask, render_template_string, request, jsonify

from algorithms import get_algorithm, list_algorithms
from engine import Session
from ui import (
    render_bars,
    playback_controls,
    algorithm_selector,
    speed_selector,
    analytics_panel,
    pseudocode_viewer,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SORT_SESSION"] = Session()
app.config["SORT_SESSION"].generate()


# ---------------------------------------------------------------------------
# Session Helpers
# ---------------------------------------------------------------------------
def get_session() -> Session:
    return app.config["SORT_SESSION"]


def get_state() -> dict:
    """Observable state plus the rendered bars."""
    sess  = get_session()
    state = sess.state()
    state["svg"] = render_bars(state["array"], sorted_=state["sorted"])
    return state


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    sess  = get_session()
    state = sess.state()
    algo_info = get_algorithm(state["algorithm"])

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_bars(state["array"], sorted_=state["sorted"]),
        playback=playback_controls(
            sorting=state["sorting"],
            paused=state["paused"],
            sorted_=state["sorted"],
        ),
        algo_selector=algorithm_selector(list_algorithms(), selected_key=state["algorithm"]),
        speed=speed_selector(delay=state["delay"]),
        analytics=analytics_panel(sess.recorder.get_metrics()),
        pseudocode=pseudocode_viewer(
            pseudocode_lines=algo_info.pseudocode if algo_info else [],
            algo_label=algo_info.label if algo_info else "",
        ),
    )
    return html


# ---------------------------------------------------------------------------
# API: State
# ---------------------------------------------------------------------------
@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(get_state())


@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([a.to_dict() for a in list_algorithms()])


# ---------------------------------------------------------------------------
# API: Array Generation
# ---------------------------------------------------------------------------
@app.route("/api/generate", methods=["POST"])
def api_generate():
    data   = request.get_json(silent=True) or {}
    start  = bool(data.get("start", False))
    values = data.get("values")
    sess   = get_session()

    if values is not None:
        try:
            values = [int(v) for v in values]
        except (TypeError, ValueError):
            return jsonify({"error": "values must be a list of integers"}), 400
        if not values:
            return jsonify({"error": "values must not be empty"}), 400
        try:
            sess.load(values, start_sorting=start)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
    else:
        sess.generate(start_sorting=start)

    return jsonify(get_state())


# ---------------------------------------------------------------------------
# API: Transport
# ---------------------------------------------------------------------------
@app.route("/api/start", methods=["POST"])
def api_start():
    if not get_session().start():
        return jsonify({"error": "A sort is already running"}), 409
    return jsonify(get_state())


@app.route("/api/pause", methods=["POST"])
def api_pause():
    get_session().pause()
    return jsonify(get_state())


@app.route("/api/resume", methods=["POST"])
def api_resume():
    get_session().resume()
    return jsonify(get_state())


@app.route("/api/stop", methods=["POST"])
def api_stop():
    get_session().stop()
    return jsonify(get_state())


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data  = request.get_json(silent=True) or {}
    delay = get_session().set_speed(data.get("speed", "normal"))
    return jsonify({"delay": delay})


@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    data = request.get_json(silent=True) or {}
    try:
        algorithm = get_session().set_algorithm(data.get("algo_key", ""))
    except ValueError as e:
        logger.warning("Rejected algorithm change: %s", e)
        return jsonify({"error": str(e)}), 400

    info = algorithm.info
    return jsonify({
        "algorithm":  algorithm.value,
        "pseudocode": pseudocode_viewer(info.pseudocode, algo_label=info.label),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-rose: #f43f5e;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 320px;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }
    .panel h3 { font-size: 14px; margin-bottom: 12px; color: var(--text-secondary); }
    .button-row { display: flex; gap: 8px; margin-bottom: 12px; }
    button, select {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 8px 12px;
      cursor: pointer;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    select { width: 100%; }
    .badge { font-weight: 700; font-size: 12px; }
    .badge.running  { color: var(--accent-cyan); }
    .badge.paused   { color: var(--accent-amber); }
    .badge.finished { color: var(--accent-emerald); }
    .badge.idle     { color: var(--text-secondary); }
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 13px; }
    .code-line { padding: 2px 8px; white-space: pre; }
    table td { padding: 2px 8px; font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="playback">{{ playback|safe }}</div>
    {{ algo_selector|safe }}
    {{ speed|safe }}
  </div>
  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>
    <div id="bottom-panel">
      <div class="panel"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
      <div id="analytics">{{ analytics|safe }}</div>
    </div>
  </div>

  <script>
    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data),
      });
      return await res.json();
    }

    function applyState(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.run_state === undefined) return;
      let status = 'IDLE';
      if (data.sorting && data.paused) status = 'PAUSED';
      else if (data.sorting) status = 'SORTING';
      else if (data.sorted) status = 'SORTED';
      document.getElementById('run-status').textContent = status;
      document.getElementById('btn-start').disabled = data.sorting;
      document.getElementById('btn-generate').disabled = data.sorting;
    }

    // Transport
    document.getElementById('btn-generate')?.addEventListener('click', async () => {
      applyState(await post('/api/generate', {}));
    });
    document.getElementById('btn-start')?.addEventListener('click', async () => {
      applyState(await post('/api/start', {}));
    });
    document.getElementById('btn-pause')?.addEventListener('click', async () => {
      applyState(await post('/api/pause', {}));
    });
    document.getElementById('btn-resume')?.addEventListener('click', async () => {
      applyState(await post('/api/resume', {}));
    });
    document.getElementById('btn-stop')?.addEventListener('click', async () => {
      applyState(await post('/api/stop', {}));
    });

    // Algorithm selector
    document.getElementById('algo-selector')?.addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });

    // Speed selector
    document.getElementById('speed-selector')?.addEventListener('change', async (e) => {
      await post('/api/config/speed', {speed: e.target.value});
    });

    // Poll the bars while the page is open
    setInterval(async () => {
      const res = await fetch('/api/state');
      applyState(await res.json());
    }, 100);
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    host = os.environ.get("SORTVIZ_HOST", "127.0.0.1")
    port = int(os.environ.get("SORTVIZ_PORT", "5000"))
    print("=" * 60)
    print("  Sorting Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://{host}:{port}")
    print("=" * 60)
    app.run(host=host, port=port, debug=False, threaded=True)
