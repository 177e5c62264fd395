"""
main.py — LCS Visualizer Flask App
====================================
The web server that powers the visualizer.

Routes:
  GET  /                        – main UI
  GET  /api/state               – current app state
  POST /api/sequences           – set both input strings
  POST /api/sequences/random    – generate a random pair
  POST /api/step/next           – advance one step
  POST /api/step/prev           – rewind one step
  POST /api/step/play           – toggle play/pause
  POST /api/step/tick           – one auto-play beat (sent by the browser timer)
  POST /api/reset               – back to step 0
  POST /api/config/speed        – set the auto-play delay

State management:
  All state is stored in the Flask session.  Each user's session holds:
    • a / b      – the two (normalised) input strings
    • stepper    – serialised Stepper (cursor, show_path, is_playing, delay)
    • sid / rev  – session id and revision; requests from an older revision get 409
  The LCS result itself is NOT stored; it is recomputed per request
  through a small LRU cache keyed by (a, b).
"""

import argparse
import logging
import os
import random
import secrets
import sys
from collections import OrderedDict
from functools import lru_cache

from flask import Flask, render_template_string, request, jsonify, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import compute, LCS_INFO, LCSResult
from engine import Visualization
from sequences import normalize, random_pair, DEFAULT_PAIR, MAX_LENGTH
from ui import (
    render_table,
    sequence_inputs,
    playback_controls,
    progress_bar,
    result_panel,
    legend,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)


logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("LCS_VISUALIZER_SECRET_KEY") or secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Engine cache
# ---------------------------------------------------------------------------
@lru_cache(maxsize=64)
def cached_compute(a: str, b: str) -> LCSResult:
    return compute(a, b)


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_visualization() -> Visualization:
    """Rebuild the session's Visualization, or create the default one."""
    if "a" not in session or "b" not in session:
        session["a"], session["b"] = DEFAULT_PAIR
    return Visualization.restore(
        session["a"],
        session["b"],
        stepper_state=session.get("stepper"),
        compute_fn=cached_compute,
    )


def save_visualization(viz: Visualization) -> None:
    session["a"] = viz.a
    session["b"] = viz.b
    session["stepper"] = viz.stepper.to_dict()
    session["rev"] = session.get("rev", 0) + 1
    _remember_revision(session.setdefault("sid", secrets.token_hex(8)), session["rev"])


# ---------------------------------------------------------------------------
# Request ordering
#
# The session lives in a cookie, so a request built from an older cookie
# (a tick still in flight when Pause was clicked) would otherwise overwrite
# newer state.  The newest revision per session id is kept here and older
# ones are turned away.  One entry per live session, oldest evicted first;
# per-process only.
# ---------------------------------------------------------------------------
MAX_TRACKED_SESSIONS = 4096
_latest_revision: "OrderedDict[str, int]" = OrderedDict()


def _remember_revision(sid: str, rev: int) -> None:
    _latest_revision[sid] = rev
    _latest_revision.move_to_end(sid)
    while len(_latest_revision) > MAX_TRACKED_SESSIONS:
        _latest_revision.popitem(last=False)


def is_stale() -> bool:
    sid = session.get("sid")
    if sid is None:
        return False
    return session.get("rev", 0) < _latest_revision.get(sid, 0)


@app.before_request
def reject_stale_requests():
    if request.path.startswith("/api/") and is_stale():
        logger.info("dropped stale %s (rev %s)", request.path, session.get("rev"))
        return jsonify({"error": "stale session state, reload the current state"}), 409
    return None


def render_fragments(viz: Visualization) -> dict:
    """Every HTML fragment the page swaps in after a state change."""
    stepper = viz.stepper
    return {
        "table":       render_table(viz.result, viz.highlight()),
        "progress":    progress_bar(viz.progress()),
        "result":      result_panel(viz.result.lcs, viz.result.length),
        "controls":    playback_controls(
            is_playing=stepper.is_playing,
            can_prev=stepper.show_path or stepper.current_idx > 0,
            can_next=stepper.total_steps > 0 and not stepper.is_finished,
            delay_ms=stepper.delay_ms,
        ),
        "analytics":   analytics_panel(viz.metrics()),
        "pseudocode":  pseudocode_viewer(LCS_INFO.pseudocode, viz.pseudocode_line()),
        "explanation": explanation_panel(viz.explanation()),
    }


def respond(viz: Visualization):
    save_visualization(viz)
    payload = viz.export()
    payload["html"] = render_fragments(viz)
    payload["rev"] = session["rev"]
    return jsonify(payload)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    viz = get_visualization()
    save_visualization(viz)
    fragments = render_fragments(viz)

    html = render_template_string(INDEX_TEMPLATE,
        title=LCS_INFO.label,
        description=LCS_INFO.description,
        inputs=sequence_inputs(viz.a, viz.b, MAX_LENGTH),
        legend=legend(),
        **fragments,
    )
    return html


@app.route("/api/state")
def api_state():
    return respond(get_visualization())


# ---------------------------------------------------------------------------
# API: Sequences
# ---------------------------------------------------------------------------
@app.route("/api/sequences", methods=["POST"])
def api_sequences():
    data = _json_body()
    try:
        a = normalize(data.get("a", ""))
        b = normalize(data.get("b", ""))
    except TypeError as e:
        logger.debug("rejected sequences payload: %s", e)
        return jsonify({"error": str(e)}), 400

    viz = get_visualization()
    viz.set_sequences(a, b)
    return respond(viz)


@app.route("/api/sequences/random", methods=["POST"])
def api_sequences_random():
    data = _json_body()
    try:
        length = int(data.get("length", 8))
    except (TypeError, ValueError, OverflowError):
        return jsonify({"error": "length must be an integer"}), 400

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        return jsonify({"error": "seed must be an integer or a string"}), 400
    rng = random.Random(seed) if seed is not None else None
    a, b = random_pair(length, rng=rng)

    viz = get_visualization()
    viz.set_sequences(a, b)
    return respond(viz)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    viz = get_visualization()
    viz.stepper.step_forward()
    return respond(viz)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    viz = get_visualization()
    viz.stepper.step_backward()
    return respond(viz)


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    viz = get_visualization()
    viz.stepper.toggle_play()
    return respond(viz)


@app.route("/api/step/tick", methods=["POST"])
def api_step_tick():
    viz = get_visualization()
    viz.stepper.advance()
    return respond(viz)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    viz = get_visualization()
    viz.stepper.reset()
    return respond(viz)


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = _json_body()
    viz = get_visualization()
    try:
        if "speed" in data:
            viz.stepper.set_speed(data["speed"])
        else:
            viz.stepper.set_delay(data.get("delay_ms"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return respond(viz)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }} Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
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
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --glow-cyan: rgba(14, 165, 233, 0.4);
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
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; overflow: auto; }

    #table-container {
      flex: 1;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: center;
      gap: 16px;
      padding: 24px;
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      border-top: 1px solid var(--border);
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3, #bottom-panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      color: var(--accent-cyan);
    }

    .button-row { display: flex; gap: 8px; margin: 12px 0; flex-wrap: wrap; }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: default; }
    .btn-secondary { background: var(--bg-panel); border: 1px solid var(--border); }

    input[type="text"], input[type="range"] {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-family: 'JetBrains Mono', monospace;
      text-transform: uppercase;
    }

    label {
      display: block;
      margin: 10px 0 4px;
      font-size: 12px;
      color: var(--text-secondary);
      text-transform: uppercase;
    }

    .step-info {
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      color: var(--text-secondary);
    }
    .progress-track { width: 480px; height: 8px; background: var(--bg-panel); border-radius: 4px; }
    .progress-fill { height: 8px; background: var(--accent-cyan); border-radius: 4px; }

    .result { font-size: 16px; }

    .legend { display: flex; gap: 24px; font-size: 13px; color: var(--text-secondary); }
    .swatch { display: inline-block; width: 14px; height: 14px; border-radius: 3px; margin-right: 8px; vertical-align: middle; }

    .code-block {
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 16px;
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      line-height: 1.6;
      white-space: pre;
    }
    .code-line { padding: 2px 12px; border-radius: 6px; }
    .code-line.highlight {
      background: linear-gradient(90deg, rgba(6, 182, 212, 0.15) 0%, transparent 100%);
      border-left: 3px solid var(--accent-cyan);
      box-shadow: 0 0 20px var(--glow-cyan);
    }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); font-family: 'JetBrains Mono', monospace; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="inputs">{{ inputs|safe }}</div>
    <div id="controls">{{ controls|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="table-container">
      <div id="progress">{{ progress|safe }}</div>
      <div id="result">{{ result|safe }}</div>
      <div id="table">{{ table|safe }}</div>
      <div id="legend">{{ legend|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div>
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div>
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
        <p class="explanation-text" style="margin-top: 12px;">{{ description }}</p>
      </div>
    </div>
  </div>

  <script>
    let timer = null;
    let lastRev = 0;
    let queue = Promise.resolve();

    // one request in flight at a time, so each one carries the newest session cookie
    function post(url, data) {
      const send = async () => {
        const res = await fetch(url, {
          method: 'POST',
          headers: {'Content-Type': 'application/json'},
          body: JSON.stringify(data || {}),
        });
        return await res.json();
      };
      const result = queue.then(send);
      queue = result.catch(() => null);
      return result;
    }

    function stopTimer() {
      if (timer) { clearInterval(timer); timer = null; }
    }

    // user actions stop the browser timer before their request goes out
    async function act(url, data) {
      stopTimer();
      return apply(await post(url, data));
    }

    function apply(data) {
      if (!data || !data.html || data.rev <= lastRev) return data;
      lastRev = data.rev;
      for (const key of ['table', 'progress', 'result', 'controls', 'analytics', 'pseudocode', 'explanation']) {
        document.getElementById(key).innerHTML = data.html[key];
      }
      bindControls();
      syncTimer(data.stepper);
      return data;
    }

    // at most one browser timer; re-armed whenever the delay changes
    function syncTimer(stepper) {
      stopTimer();
      if (stepper && stepper.is_playing) {
        timer = setInterval(async () => apply(await post('/api/step/tick')), stepper.delay_ms);
      }
    }

    function bindControls() {
      document.getElementById('btn-prev').onclick = () => act('/api/step/prev');
      document.getElementById('btn-next').onclick = () => act('/api/step/next');
      document.getElementById('btn-play').onclick = () => act('/api/step/play');
      const slider = document.getElementById('delay-slider');
      slider.oninput = (e) => { document.getElementById('delay-val').textContent = e.target.value; };
      slider.onchange = (e) => act('/api/config/speed', {delay_ms: +e.target.value});
    }

    function sequencesChanged() {
      return act('/api/sequences', {
        a: document.getElementById('seq-a').value,
        b: document.getElementById('seq-b').value,
      });
    }

    document.getElementById('seq-a').addEventListener('input', sequencesChanged);
    document.getElementById('seq-b').addEventListener('input', sequencesChanged);

    document.getElementById('btn-random').addEventListener('click', async () => {
      stopTimer();
      const data = await post('/api/sequences/random', {length: 8});
      if (data && data.html && data.rev > lastRev) {
        document.getElementById('seq-a').value = data.a;
        document.getElementById('seq-b').value = data.b;
      }
      apply(data);
    });

    document.getElementById('btn-reset').addEventListener('click', () => act('/api/reset'));

    bindControls();
    window.addEventListener('beforeunload', stopTimer);
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="LCS Visualizer web server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("  LCS Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://{args.host}:{args.port}")
    print("=" * 60)
    app.run(host=args.host, port=args.port, debug=args.debug)
