"""
Flask front end for the Grid Pathfinding Visualizer.

Serves a single page (grid editor + replay) and a small JSON API:
- GET  /api/algorithms          Algorithm catalogue
- POST /api/run                 Run a search and return its replay timeline
- GET  /api/layouts             List saved layouts
- POST /api/layouts             Save a layout
- GET  /api/layouts/<id>        Load a layout
- DELETE /api/layouts/<id>      Delete a layout

Errors come back as {"success": false, "error": "..."} with a 4xx status.
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template_string, request

from pathviz.config import (
    CELL_CHARS,
    DEFAULT_GRID_SIZE,
    DEFAULT_SPEED,
    LOG_DATEFMT,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_GRID_SIZE,
    MAX_SPEED,
    MIN_GRID_SIZE,
    MIN_SPEED,
    NO_PATH_MESSAGE,
    SECRET_KEY,
    SPEED_STEP,
    WEB_HOST,
    WEB_PORT,
    speed_to_delay,
)
from pathviz.errors import LayoutNotFound, PathvizError
from pathviz.grid import Grid
from pathviz.replay import record_timeline
from pathviz.search import ALGORITHMS, solve
from pathviz.storage import LayoutStore

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Pathfinding Visualizer</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body { font-family: system-ui, -apple-system, sans-serif; background: #f5f5f5; min-height: 100vh; }
        .header { background: #1a1a2e; color: white; padding: 15px 30px; }
        .header h1 { font-size: 1.5rem; }
        .container { max-width: 1000px; margin: 0 auto; padding: 20px; }
        .card { background: white; border-radius: 12px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); padding: 20px; margin-bottom: 20px; }
        .controls { display: flex; gap: 20px; flex-wrap: wrap; align-items: center; margin-bottom: 15px; }
        button { background: #4ecdc4; color: white; border: none; padding: 10px 20px; border-radius: 8px; font-size: 14px; cursor: pointer; }
        button:hover { background: #45b7aa; }
        button:disabled { background: #aaa; cursor: default; }
        select, input[type="text"] { padding: 8px 10px; border: 2px solid #ddd; border-radius: 8px; font-size: 14px; }
        #grid { display: grid; gap: 1px; justify-content: center; }
        .cell { border: 1px solid #e5e7eb; cursor: pointer; }
        .c0 { background: white; } .c1 { background: #1f2937; } .c2 { background: #22c55e; }
        .c3 { background: #ef4444; } .c4 { background: #93c5fd; } .c5 { background: #fde047; }
        #toast { position: fixed; top: 20px; right: 20px; background: #e74c3c; color: white; padding: 12px 20px; border-radius: 8px; display: none; }
        #toast.info { background: #27ae60; }
    </style>
</head>
<body>
<div class="header"><h1>Pathfinding Visualizer</h1></div>
<div class="container">
    <div class="card">
        <div class="controls">
            <select id="algorithm">
                <option value="">Select Algorithm</option>
                {% for name in algorithms %}<option value="{{ name }}">{{ name }}</option>{% endfor %}
            </select>
            <label>Grid Size: <span id="size-label">{{ size }}</span>
                <input type="range" id="size" min="{{ min_size }}" max="{{ max_size }}" value="{{ size }}"></label>
            <label>Speed: <span id="speed-label">{{ speed }}</span>%
                <input type="range" id="speed" min="{{ min_speed }}" max="{{ max_speed }}" value="{{ speed }}"></label>
        </div>
        <div id="grid"></div>
        <div class="controls" style="margin-top:15px;">
            <button id="reset">Reset Grid</button>
            <button id="visualize">Visualize</button>
            <button id="faster" style="display:none;">Increase Speed</button>
            <input type="text" id="layout-name" placeholder="Layout name">
            <button id="save">Save Layout</button>
            <select id="layouts"><option value="">Load Layout</option></select>
        </div>
    </div>
</div>
<div id="toast"></div>
<script>
const MAX_SPEED = {{ max_speed }}, SPEED_STEP = {{ speed_step }};
let grid = [], start = null, end = null, running = false, generation = 0;
const $ = (id) => document.getElementById(id);

function toast(message, kind) {
    const el = $('toast');
    el.textContent = message;
    el.className = kind || '';
    el.style.display = 'block';
    setTimeout(() => { el.style.display = 'none'; }, 3000);
}

function draw() {
    const n = grid.length, size = Math.min(Math.floor((window.innerWidth - 80) / n), 30);
    const el = $('grid');
    el.style.gridTemplateColumns = `repeat(${n}, ${size}px)`;
    el.innerHTML = '';
    grid.forEach((row, r) => row.forEach((v, c) => {
        const cell = document.createElement('div');
        cell.className = 'cell c' + v;
        cell.id = `cell-${r}-${c}`;
        cell.style.width = cell.style.height = size + 'px';
        cell.onclick = () => click(r, c);
        el.appendChild(cell);
    }));
}

function paint(r, c, v) { grid[r][c] = v; $(`cell-${r}-${c}`).className = 'cell c' + v; }

function clearMarks() {
    generation++;
    grid.forEach((row, r) => row.forEach((v, c) => { if (v > 3) paint(r, c, 0); }));
}

function reset() {
    const n = parseInt($('size').value);
    generation++;
    grid = Array.from({length: n}, () => Array(n).fill(0));
    start = end = null;
    draw();
}

function click(r, c) {
    if (running) return;
    clearMarks();
    const v = grid[r][c];
    if (v === 2) { paint(r, c, 0); start = null; }
    else if (v === 3) { paint(r, c, 0); end = null; }
    else if (!start) { paint(r, c, 2); start = [r, c]; }
    else if (!end) { paint(r, c, 3); end = [r, c]; }
    else paint(r, c, v === 1 ? 0 : 1);
}

function delay() { return MAX_SPEED + 1 - parseInt($('speed').value); }

async function visualize() {
    const algorithm = $('algorithm').value;
    if (!algorithm) return toast('Please select an algorithm before visualizing');
    if (!start || !end) return toast('Please set both start and end points before visualizing');
    clearMarks();
    const resp = await fetch('/api/run', {method: 'POST', headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({algorithm, grid, speed: parseInt($('speed').value)})});
    const data = await resp.json();
    if (!data.success) return toast(data.error);
    const visits = data.events.filter(e => e.cell_type === 4), path = data.events.filter(e => e.cell_type === 5);
    const mine = ++generation;
    running = true;
    $('faster').style.display = 'inline-block';
    const finish = () => {
        path.forEach(e => paint(e.row, e.col, 5));
        running = false;
        $('faster').style.display = 'none';
        if (!data.found) toast(data.message);
    };
    const step = (i) => {
        if (mine !== generation) return;
        if (i >= visits.length) return finish();
        paint(visits[i].row, visits[i].col, 4);
        if (i + 1 < visits.length) setTimeout(() => step(i + 1), delay());
        else finish();
    };
    setTimeout(() => step(0), 0);
}

async function refreshLayouts() {
    const data = await (await fetch('/api/layouts')).json();
    const select = $('layouts');
    select.replaceChildren(new Option('Load Layout', ''));
    data.layouts.forEach(l => {
        const option = document.createElement('option');
        option.value = l.id;
        option.textContent = l.name;
        select.appendChild(option);
    });
}

$('size').oninput = (e) => { $('size-label').textContent = e.target.value; reset(); };
$('speed').oninput = (e) => { $('speed-label').textContent = e.target.value; };
$('reset').onclick = () => { if (!running) reset(); };
$('visualize').onclick = visualize;
$('faster').onclick = () => {
    const speed = Math.min(parseInt($('speed').value) + SPEED_STEP, MAX_SPEED);
    $('speed').value = speed;
    $('speed-label').textContent = speed;
};
$('save').onclick = async () => {
    const resp = await fetch('/api/layouts', {method: 'POST', headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({name: $('layout-name').value, grid})});
    const data = await resp.json();
    if (!data.success) return toast(data.error);
    toast('Layout saved', 'info');
    refreshLayouts();
};
$('layouts').onchange = async (e) => {
    if (!e.target.value || running) return;
    const data = await (await fetch('/api/layouts/' + e.target.value)).json();
    if (!data.success) return toast(data.error);
    generation++;
    grid = data.layout.grid;
    start = end = null;
    grid.forEach((row, r) => row.forEach((v, c) => { if (v === 2) start = [r, c]; if (v === 3) end = [r, c]; }));
    $('size').value = grid.length;
    $('size-label').textContent = grid.length;
    draw();
};

reset();
refreshLayouts();
</script>
</body>
</html>
"""


def _error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def _json_body() -> dict:
    """Request JSON object, or {} when the body is missing or not an object."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def create_app(store: LayoutStore | None = None) -> Flask:
    """
    Build the Flask application.

    Args:
        store: Layout store to use (default: LayoutStore at LAYOUTS_PATH)
    """
    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    app.config["LAYOUT_STORE"] = store or LayoutStore()

    def layout_store() -> LayoutStore:
        return app.config["LAYOUT_STORE"]

    @app.get("/")
    def index():
        return render_template_string(
            PAGE_TEMPLATE,
            algorithms=list(ALGORITHMS),
            size=DEFAULT_GRID_SIZE,
            min_size=MIN_GRID_SIZE,
            max_size=MAX_GRID_SIZE,
            speed=DEFAULT_SPEED,
            min_speed=MIN_SPEED,
            max_speed=MAX_SPEED,
            speed_step=SPEED_STEP,
        )

    @app.get("/api/algorithms")
    def algorithms():
        return jsonify({
            "success": True,
            "algorithms": [info.to_dict() for info in ALGORITHMS.values()],
            "cell_chars": CELL_CHARS,
        })

    @app.post("/api/run")
    def run_search():
        payload = _json_body()
        try:
            speed = int(payload.get("speed", DEFAULT_SPEED))
        except (TypeError, ValueError):
            return _error(f"Invalid speed: {payload.get('speed')!r}")

        try:
            grid = Grid.from_rows(payload.get("grid") or [])
            result = solve(payload.get("algorithm", ""), grid)
        except PathvizError as e:
            logger.warning(f"Rejected run request: {e}")
            return _error(str(e))

        events, outcome = record_timeline(grid, result, delay_ms=speed_to_delay(speed))
        return jsonify({
            "success": True,
            "algorithm": result.algorithm,
            "found": result.found,
            "message": None if result.found else NO_PATH_MESSAGE,
            "path": [list(c) for c in result.path],
            "visited": [list(c) for c in result.visited],
            "path_length": outcome.path_length,
            "events": [event.to_dict() for event in events],
        })

    @app.get("/api/layouts")
    def list_layouts():
        return jsonify({
            "success": True,
            "layouts": [summary.to_dict() for summary in layout_store().list()],
        })

    @app.post("/api/layouts")
    def save_layout():
        payload = _json_body()
        try:
            grid = Grid.from_rows(payload.get("grid") or [])
            layout_id = layout_store().save(payload.get("name", ""), grid)
        except PathvizError as e:
            logger.warning(f"Failed to save layout: {e}")
            return _error(str(e))
        return jsonify({"success": True, "id": layout_id}), 201

    @app.get("/api/layouts/<layout_id>")
    def load_layout(layout_id: str):
        try:
            layout = layout_store().load(layout_id)
        except LayoutNotFound as e:
            return _error(str(e), 404)
        except PathvizError as e:
            logger.error(f"Stored layout {layout_id} is invalid: {e}")
            return _error(str(e))
        return jsonify({"success": True, "layout": layout.to_dict()})

    @app.delete("/api/layouts/<layout_id>")
    def delete_layout(layout_id: str):
        try:
            layout_store().delete(layout_id)
        except LayoutNotFound as e:
            return _error(str(e), 404)
        return jsonify({"success": True})

    return app


app = create_app()


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    app.run(host=WEB_HOST, port=WEB_PORT, debug=False)
