"""
controls.py — UI Control Panels
===============================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • filter_panel    – column checkboxes + Select All / Reset / Show
  • committed_list  – the columns currently applied to node tables

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import Iterable

from markupsafe import escape

from filters import FilterSelection


# ---------------------------------------------------------------------------
# Filter Panel
# ---------------------------------------------------------------------------
def filter_panel(selection: FilterSelection, margin_top: int = 0) -> str:
    checkboxes = []
    for column in selection.columns:
        checked = 'checked' if selection.is_selected(column) else ''
        name = escape(column)
        checkboxes.append(
            f'<div class="form-check">'
            f'<input type="checkbox" class="form-check-input filter-checkbox" name="{name}" {checked}>'
            f' {name}</div>'
        )

    return f"""
    <div class="panel filter-panel" style="margin-top: {margin_top}px;">
      <h3>Filter Columns</h3>
      <p class="hint">Filter columns in the currently selected topology:</p>
      <form id="filter-form">
        <div class="filter-columns">
          {''.join(checkboxes)}
        </div>
        <div class="button-row">
          <button type="button" id="btn-select-all" class="btn-secondary">Select All</button>
          <button type="button" id="btn-reset" class="btn-secondary">Reset</button>
          <button type="submit" id="btn-show" class="btn-primary">Show</button>
        </div>
      </form>
      <button id="btn-close-filter" title="Close details">✕</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Committed Columns
# ---------------------------------------------------------------------------
def committed_list(columns: Iterable[str]) -> str:
    items = [f'<li>{escape(c)}</li>' for c in columns]
    if not items:
        return '<p class="placeholder">No columns applied.</p>'
    return f'<ul class="committed-columns">{"".join(items)}</ul>'
