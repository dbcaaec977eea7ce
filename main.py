"""
main.py — Algorithm Visualizer Flask App
==========================================
The web server that powers the visualizer.

Routes:
  GET  /                          – main UI
  GET  /api/algorithms            – the algorithm catalog
  POST /api/algorithm/operation   – stateless backend: {type, operation, value} → steps
  POST /api/select                – select an algorithm (clears the sequence)
  POST /api/operate               – run an operation on the selected algorithm
  POST /api/step/next             – advance one step
  POST /api/step/prev             – rewind one step
  POST /api/step/goto             – jump to step N
  POST /api/step/play             – toggle play/pause
  POST /api/step/reset            – back to step 1, paused
  POST /api/config/speed          – speed level 1–5
  POST /api/config/value          – operation input value
  POST /api/playback/tick         – fire due playback ticks (polled by the page)
  GET  /api/state                 – current view

State management:
  Each browser gets a Session (engine.session) held in an in-memory
  SessionStore; the Flask cookie session only carries its id.  Sessions
  use a PolledTimer, so playback advances when the page polls /tick.
  Every session endpoint answers with the same view payload, rendered
  from the Stepper's single cursor.  Flask serves requests on several
  threads (the tick poll included), so each route holds the session's
  lock while it mutates and renders.
"""

import asyncio
import logging
import math
import random

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import get_algorithm, list_algorithms, Operation
from algorithms.generator import generate
from config import settings
from engine import AlgoVizError, PolledTimer
from engine.backend import HttpBackend, LocalBackend
from engine.session import Session, SessionStore
from ui import (
    algorithm_card,
    algorithm_selector,
    code_panel,
    notification_panel,
    operation_panel,
    playback_controls,
    render_canvas,
)

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = settings.secret_key


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def make_backend():
    if settings.backend_url:
        return HttpBackend(settings.backend_url, timeout=settings.backend_timeout)
    seed = settings.sorting_seed
    return LocalBackend(rng=random.Random(seed) if seed is not None else None)


def _new_session(session_id=None) -> Session:
    return Session(backend=make_backend(), timer=PolledTimer(), settings=settings, session_id=session_id)


STORE = SessionStore(factory=_new_session)


def get_viz() -> Session:
    """The caller's visualizer session, created on first use."""
    viz = STORE.get_or_create(session.get("sid"))
    session["sid"] = viz.session_id
    return viz


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def view_payload(viz: Session) -> dict:
    """Everything the page shows, rendered from ONE cursor value."""
    stepper = viz.stepper
    step = stepper.current_step
    info = viz.algorithm
    return {
        "state":    viz.snapshot(),
        "step":     step.to_dict() if step else None,
        "svg":      render_canvas(step, info.category if info else None),
        "code":     code_panel(step),
        "card":     algorithm_card(info),
        "operations": operation_panel(
            info, viz.operation_value,
            settings.min_operation_value, settings.max_operation_value,
        ),
        "controls": playback_controls(
            is_playing=stepper.is_playing,
            cursor=stepper.cursor,
            total_steps=stepper.total_steps,
            speed=stepper.speed,
            can_step_backward=stepper.can_step_backward,
            can_step_forward=stepper.can_step_forward,
        ),
        "notifications": notification_panel([n.message for n in viz.drain_notifications()]),
    }


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    viz = get_viz()
    with viz.lock:
        view = view_payload(viz)
        selected = viz.algorithm.key if viz.algorithm else None
    return render_template_string(
        INDEX_TEMPLATE,
        title=settings.app_name,
        selector=algorithm_selector(list_algorithms(), selected),
        view=view,
    )


# ---------------------------------------------------------------------------
# API: Catalog & stateless backend
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([a.to_dict() for a in list_algorithms()])


@app.route("/api/algorithm/operation", methods=["POST"])
def api_algorithm_operation():
    data = _body()
    algo_type = data.get("type")
    raw_op = data.get("operation")
    if not algo_type or not raw_op:
        return jsonify({"success": False, "errorMessage": "Algorithm type and operation are required"}), 400

    info = get_algorithm(algo_type)
    if info is None:
        return jsonify({"success": False, "errorMessage": f"Unsupported algorithm type: {algo_type}"}), 400
    try:
        operation = Operation.parse(raw_op)
        value = float(data.get("value") or 0)
    except (TypeError, ValueError) as e:
        return jsonify({"success": False, "errorMessage": str(e)}), 400
    if not math.isfinite(value):
        return jsonify({"success": False, "errorMessage": f"Value must be a finite number, got {value}"}), 400
    value = max(settings.min_operation_value, min(settings.max_operation_value, value))

    try:
        steps = generate(info, operation, value)
    except AlgoVizError as e:
        logger.exception("error performing %s %s", algo_type, raw_op)
        return jsonify({"success": False, "errorMessage": str(e)}), 500

    return jsonify({"success": True, "executionSteps": [s.to_dict() for s in steps]})


# ---------------------------------------------------------------------------
# API: Session
# ---------------------------------------------------------------------------
@app.route("/api/select", methods=["POST"])
def api_select():
    viz = get_viz()
    with viz.lock:
        viz.select(_body().get("type", ""))
        return jsonify(view_payload(viz))


@app.route("/api/operate", methods=["POST"])
def api_operate():
    viz = get_viz()
    data = _body()
    value = data.get("value")
    if value is not None:
        try:
            value = int(value)
        except (TypeError, ValueError, OverflowError):
            return jsonify({"error": f"Invalid value: {value!r}"}), 400

    with viz.lock:
        asyncio.run(viz.operate(data.get("operation", ""), value))
        return jsonify(view_payload(viz))


@app.route("/api/state")
def api_state():
    viz = get_viz()
    with viz.lock:
        return jsonify(view_payload(viz))


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    viz = get_viz()
    with viz.lock:
        viz.stepper.step_forward()
        return jsonify(view_payload(viz))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    viz = get_viz()
    with viz.lock:
        viz.stepper.step_backward()
        return jsonify(view_payload(viz))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    viz = get_viz()
    idx = _body().get("index", 0)
    with viz.lock:
        if not isinstance(idx, int) or not viz.stepper.goto(idx):
            return jsonify({"error": "Invalid step index"}), 400
        return jsonify(view_payload(viz))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    viz = get_viz()
    with viz.lock:
        viz.stepper.toggle_play()
        return jsonify(view_payload(viz))


@app.route("/api/step/reset", methods=["POST"])
def api_step_reset():
    viz = get_viz()
    with viz.lock:
        viz.stepper.reset()
        return jsonify(view_payload(viz))


@app.route("/api/playback/tick", methods=["POST"])
def api_playback_tick():
    viz = get_viz()
    with viz.lock:
        viz.stepper.tick()
        return jsonify(view_payload(viz))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    viz = get_viz()
    try:
        speed = int(_body().get("speed", settings.default_speed))
    except (TypeError, ValueError, OverflowError):
        return jsonify({"error": "Speed must be an integer"}), 400
    with viz.lock:
        viz.stepper.set_speed(speed)
        return jsonify(view_payload(viz))


@app.route("/api/config/value", methods=["POST"])
def api_config_value():
    viz = get_viz()
    with viz.lock:
        try:
            viz.set_operation_value(_body().get("value", settings.default_operation_value))
        except (TypeError, ValueError, OverflowError):
            return jsonify({"error": "Value must be an integer"}), 400
        return jsonify(view_payload(viz))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-teal: #06b6d4;
      --accent-rose: #f43f5e;
    }
    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }
    #sidebar { width: 320px; background: var(--bg-dark); border-right: 1px solid var(--border); padding: 20px 16px; overflow-y: auto; }
    #main { flex: 1; display: flex; flex-direction: column; }
    #canvas-container { flex: 1; display: flex; align-items: center; justify-content: center; border-bottom: 1px solid var(--border); }
    #bottom-panel { display: grid; grid-template-columns: 2fr 1fr; gap: 16px; padding: 16px; max-height: 360px; }
    .panel { background: var(--bg-panel); border: 1px solid var(--border); border-radius: 10px; padding: 14px; margin-bottom: 12px; }
    .panel h2, .panel h3 { margin-bottom: 8px; }
    .muted { color: var(--text-secondary); }
    select, input, button { background: var(--bg-dark); color: var(--text-primary); border: 1px solid var(--border); border-radius: 6px; padding: 6px 10px; }
    button:disabled { opacity: 0.4; }
    .btn-op { margin: 0 6px 6px 0; }
    .complexity span { margin-right: 12px; color: var(--text-secondary); }
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 12px; overflow: auto; max-height: 300px; background: var(--bg-panel); border-radius: 10px; padding: 8px 0; }
    .code-line { white-space: pre; padding: 0 12px; }
    .code-line.highlight { background: rgba(6, 182, 212, 0.25); border-left: 3px solid var(--accent-teal); }
    .line-no { display: inline-block; width: 32px; color: var(--text-secondary); }
    .step-description { margin-top: 8px; color: var(--text-secondary); }
    .notice.error { background: rgba(244, 63, 94, 0.15); border: 1px solid var(--accent-rose); border-radius: 6px; padding: 8px; margin-bottom: 8px; }
    .button-row button { font-size: 16px; }
    .step-info, .speed-control { margin-top: 10px; }
  </style>
</head>
<body>
  <div id="sidebar">
    {{ selector | safe }}
    <div id="card">{{ view.card | safe }}</div>
    <div id="notifications">{{ view.notifications | safe }}</div>
  </div>
  <div id="main">
    <div id="operations">{{ view.operations | safe }}</div>
    <div id="canvas-container"><div id="canvas-svg">{{ view.svg | safe }}</div></div>
    <div id="bottom-panel">
      <div id="code">{{ view.code | safe }}</div>
      <div id="controls">{{ view.controls | safe }}</div>
    </div>
  </div>

  <script>
    let playing = {{ 'true' if view.state.playback.isPlaying else 'false' }};

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function apply(data) {
      if (!data || !data.state) return;
      document.getElementById('canvas-svg').innerHTML = data.svg;
      document.getElementById('code').innerHTML = data.code;
      document.getElementById('controls').innerHTML = data.controls;
      document.getElementById('card').innerHTML = data.card;
      document.getElementById('operations').innerHTML = data.operations;
      if (data.notifications) document.getElementById('notifications').innerHTML = data.notifications;
      playing = data.state.playback.isPlaying;
    }

    document.getElementById('algo-selector').addEventListener('change', async (e) => {
      apply(await post('/api/select', {type: e.target.value}));
    });

    document.addEventListener('click', async (e) => {
      const op = e.target.closest('.btn-op');
      if (op) {
        const value = +document.getElementById('op-value').value;
        apply(await post('/api/operate', {operation: op.dataset.op, value}));
        return;
      }
      const routes = {'btn-next': '/api/step/next', 'btn-prev': '/api/step/prev',
                      'btn-play': '/api/step/play', 'btn-reset': '/api/step/reset'};
      if (routes[e.target.id]) apply(await post(routes[e.target.id]));
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'speed-slider') apply(await post('/api/config/speed', {speed: +e.target.value}));
      if (e.target.id === 'op-value') apply(await post('/api/config/value', {value: +e.target.value}));
    });

    // the server owns the timer; we only ask it to fire what is due
    setInterval(async () => {
      if (playing) apply(await post('/api/playback/tick'));
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
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("%s listening on http://%s:%d", settings.app_name, settings.host, settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
