"""
main.py — Topology Viewer Flask App
===================================
The web server behind the topology canvas and its column filter panel.

Routes:
  GET  /                       – main UI
  POST /api/edge/class         – classify a composite edge id
  POST /api/edge/enter         – pointer entered an edge (highlight it)
  POST /api/edge/leave         – pointer left an edge
  GET  /api/filter/state       – checkboxes + committed columns
  POST /api/filter/toggle      – flip one column checkbox
  POST /api/filter/select_all  – check every column
  POST /api/filter/reset       – uncheck every column
  POST /api/filter/commit      – publish checked columns ("Show")
  POST /api/filter/withdraw    – drop one column from the committed list
  POST /api/filter/close       – dismiss the panel

State management:
  Per-user state lives in the Flask session:
    • filter            – checkbox mapping of the open filter panel
    • highlighted_edge  – id of the edge under the pointer
  The committed column list is process-wide (COMMITTED_COLUMNS), shared
  by every session.
"""

from flask import Flask, render_template_string, request, jsonify, session
import secrets
import sys
import os
import threading

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from topology import TopologyEdge, adjacency_class
from filters import FilterSelection, InvalidColumn, COMMITTED_COLUMNS
from ui import render_canvas, filter_panel, committed_list


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config.from_prefixed_env()

PANEL_MARGIN_TOP = 24

# serialises every read and write of COMMITTED_COLUMNS across request threads
COMMITTED_LOCK = threading.Lock()

SAMPLE_EDGES = [
    {"id": "pod-1;(pod)---pvc-1;(persistent_volume_claim)",
     "path": "M120,120L360,200", "source": "pod-1", "target": "pvc-1"},
    {"id": "pvc-1;(persistent_volume_claim)---pv-1;(persistent_volume)",
     "path": "M360,200L600,200", "source": "pvc-1", "target": "pv-1"},
    {"id": "pv-1;(persistent_volume)---sc-1;(storage_class)",
     "path": "M600,200L780,360", "source": "pv-1", "target": "sc-1"},
    {"id": "pod-1;(pod)---c-1;(container)",
     "path": "M120,120L220,420", "source": "pod-1", "target": "c-1"},
    {"id": "host-1---pod-1",
     "path": "M420,520L120,120", "source": "host-1", "target": "pod-1"},
]


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_selection() -> FilterSelection:
    """Rebuild the open panel's selection from the session."""
    return FilterSelection.from_dict(session.get("filter"), committed=COMMITTED_COLUMNS)


def save_selection(selection: FilterSelection):
    session["filter"] = selection.to_dict()


def get_edges():
    highlighted = session.get("highlighted_edge")
    edges = []
    for data in SAMPLE_EDGES:
        edge = TopologyEdge.from_dict(data)
        edge.highlighted = edge.id == highlighted
        edges.append(edge)
    return edges


def committed_columns() -> list:
    with COMMITTED_LOCK:
        return COMMITTED_COLUMNS.as_list()


def filter_state(selection: FilterSelection) -> dict:
    return {
        "checkboxes": selection.to_dict(),
        "selected":   selection.selected(),
        "committed":  committed_columns(),
    }


def json_field(name: str):
    data = request.get_json(silent=True) or {}
    return data.get(name)


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    selection = get_selection()
    html = render_template_string(INDEX_TEMPLATE,
        svg=render_canvas(get_edges()),
        filter=filter_panel(selection, margin_top=PANEL_MARGIN_TOP),
        committed=committed_list(committed_columns()),
    )
    return html


# ---------------------------------------------------------------------------
# API: Edges
# ---------------------------------------------------------------------------
@app.route("/api/edge/class", methods=["POST"])
def api_edge_class():
    edge_id = json_field("id")
    if edge_id is None:
        return jsonify({"error": "Missing edge id"}), 400
    return jsonify({"id": edge_id, "class": adjacency_class(edge_id)})


@app.route("/api/edge/enter", methods=["POST"])
def api_edge_enter():
    edge_id = json_field("id")
    if edge_id is None:
        return jsonify({"error": "Missing edge id"}), 400
    session["highlighted_edge"] = edge_id
    return jsonify({"highlighted": edge_id, "svg": render_canvas(get_edges())})


@app.route("/api/edge/leave", methods=["POST"])
def api_edge_leave():
    edge_id = json_field("id")
    if session.get("highlighted_edge") == edge_id:
        session.pop("highlighted_edge", None)
    return jsonify({"highlighted": session.get("highlighted_edge"), "svg": render_canvas(get_edges())})


# ---------------------------------------------------------------------------
# API: Filter Panel
# ---------------------------------------------------------------------------
@app.route("/api/filter/state", methods=["GET"])
def api_filter_state():
    return jsonify(filter_state(get_selection()))


@app.route("/api/filter/toggle", methods=["POST"])
def api_filter_toggle():
    column = json_field("column")
    selection = get_selection()
    try:
        checked = selection.toggle(column)
    except InvalidColumn as e:
        app.logger.warning("rejected toggle: %s", e)
        return jsonify({"error": str(e)}), 400
    save_selection(selection)
    return jsonify({"column": column, "checked": checked, **filter_state(selection)})


@app.route("/api/filter/select_all", methods=["POST"])
def api_filter_select_all():
    selection = get_selection()
    selection.select_all()
    save_selection(selection)
    return jsonify(filter_state(selection))


@app.route("/api/filter/reset", methods=["POST"])
def api_filter_reset():
    selection = get_selection()
    selection.reset_all()
    save_selection(selection)
    return jsonify(filter_state(selection))


@app.route("/api/filter/commit", methods=["POST"])
def api_filter_commit():
    selection = get_selection()
    with COMMITTED_LOCK:
        added = selection.commit()
    app.logger.info("filter commit added %d column(s)", len(added))
    return jsonify({"added": added, **filter_state(selection)})


@app.route("/api/filter/withdraw", methods=["POST"])
def api_filter_withdraw():
    column = json_field("column")
    selection = get_selection()
    try:
        with COMMITTED_LOCK:
            removed = selection.withdraw(column)
    except InvalidColumn as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"column": column, "removed": removed, **filter_state(selection)})


@app.route("/api/filter/close", methods=["POST"])
def api_filter_close():
    session.pop("filter", None)
    return jsonify({"closed": True})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Topology Viewer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: #010409;
      color: #e6edf3;
      display: flex;
      height: 100vh;
    }
    #sidebar { width: 340px; padding: 24px 16px; overflow-y: auto; border-right: 1px solid #30363d; }
    #main { flex: 1; display: flex; align-items: center; justify-content: center; }
    .panel { background: #161b22; border: 1px solid #30363d; border-radius: 8px; padding: 16px; margin-bottom: 16px; }
    .form-check { padding: 2px 0; }
    .button-row { display: flex; gap: 8px; margin-top: 12px; }
    .edge .link-storage { stroke-opacity: 0.6; }
    .edge.highlighted .link { stroke-width: 2; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="filter-container">{{ filter|safe }}</div>
    <div class="panel">
      <h3>Applied Columns</h3>
      <div id="committed-container">{{ committed|safe }}</div>
    </div>
  </div>
  <div id="main">
    <div id="canvas-container">{{ svg|safe }}</div>
  </div>
  <script>
    async function post(url, body) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {}),
      });
      return res.json();
    }

    function renderCommitted(columns) {
      const el = document.getElementById('committed-container');
      el.innerHTML = '<ul class="committed-columns">' +
        columns.map(c => '<li>' + c.replace(/</g, '&lt;') + '</li>').join('') + '</ul>';
    }

    function syncCheckboxes(state) {
      document.querySelectorAll('.filter-checkbox').forEach(cb => {
        cb.checked = !!state.checkboxes[cb.name];
      });
    }

    function bindEdges() {
      document.querySelectorAll('#canvas-container .edge').forEach(g => {
        g.addEventListener('mouseenter', async () => {
          g.classList.add('highlighted');
          await post('/api/edge/enter', {id: g.dataset.id});
        });
        g.addEventListener('mouseleave', async () => {
          const data = await post('/api/edge/leave', {id: g.dataset.id});
          document.getElementById('canvas-container').innerHTML = data.svg;
          bindEdges();
        });
      });
    }
    bindEdges();

    document.querySelectorAll('.filter-checkbox').forEach(cb => {
      cb.addEventListener('change', async () => {
        syncCheckboxes(await post('/api/filter/toggle', {column: cb.name}));
      });
    });
    document.getElementById('btn-select-all')?.addEventListener('click', async () => {
      syncCheckboxes(await post('/api/filter/select_all'));
    });
    document.getElementById('btn-reset')?.addEventListener('click', async () => {
      syncCheckboxes(await post('/api/filter/reset'));
    });
    document.getElementById('filter-form')?.addEventListener('submit', async (e) => {
      e.preventDefault();
      const data = await post('/api/filter/commit');
      renderCommitted(data.committed);
    });
    document.getElementById('btn-close-filter')?.addEventListener('click', async () => {
      await post('/api/filter/close');
      document.getElementById('filter-container').innerHTML = '';
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app.logger.info("Topology Viewer listening on http://localhost:5000")
    app.run(debug=app.config.get("DEBUG", False), port=5000)
