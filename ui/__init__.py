"""
ui/
---
Presentation layer.

    from ui import render_canvas, render_edge
    from ui import filter_panel, committed_list
"""

from ui.canvas import render_canvas, render_edge, CanvasConfig

from ui.controls import (
    filter_panel,
    committed_list,
)

__all__ = [
    "render_canvas",
    "render_edge",
    "CanvasConfig",
    "filter_panel",
    "committed_list",
]
