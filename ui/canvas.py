"""
canvas.py — SVG Edge Renderer
=============================
Pure rendering functions: TopologyEdge → SVG string.

Each edge is drawn as three stacked paths over the same geometry:
  • shadow   – wide, translucent hit area (scales with thickness)
  • adjacency – fixed-width band coloured by the edge's class
                (link-storage / link-none)
  • link     – the visible line, with an arrowhead when emphasised

Design decisions:
  - NO mutation.  The caller passes edges in and gets a string back.
  - Edge ids are escaped into a `data-id` attribute; the hover hooks
    send that id back verbatim.
"""

from typing import Dict, Iterable

from markupsafe import escape

from topology import TopologyEdge


# ---------------------------------------------------------------------------
# Visual Config
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 600
    bg:     str = "#0d1117"

    # adjacency band colour (class → stroke)
    adjacency_colors: Dict[str, str] = {
        "link-storage": "#f59e0b",   # amber — volume / claim / storage class
        "link-none":    "none",
    }

    # edge
    link_color:        str   = "#30363d"
    link_highlight:    str   = "#0ea5e9"
    shadow_color:      str   = "#0ea5e9"
    shadow_opacity:    float = 0.1
    shadow_width:      int   = 10    # multiplied by edge thickness
    adjacency_width:   int   = 5
    edge_arrow_size:   int   = 10


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(edges: Iterable[TopologyEdge], config: CanvasConfig = CONFIG) -> str:
    """Returns an SVG string with every edge and the shared arrow marker."""
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        _render_marker(config),
    ]
    for edge in edges:
        svg_parts.append(render_edge(edge, config))
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def render_edge(edge: TopologyEdge, config: CanvasConfig = CONFIG) -> str:
    adjacency = edge.adjacency
    css_class = "edge highlighted" if edge.highlighted else "edge"
    link_color = config.link_highlight if edge.highlighted else config.link_color
    marker = ' marker-end="url(#end-arrow)"' if edge.should_render_marker else ""
    d = escape(edge.path)

    parts = [
        f'<g class="{css_class}" data-id="{escape(edge.id)}">',
        f'  <path class="shadow" d="{d}" stroke="{config.shadow_color}" '
        f'stroke-opacity="{config.shadow_opacity}" '
        f'stroke-width="{config.shadow_width * edge.thickness}" fill="none"/>',
        f'  <path class="{adjacency}" d="{d}" '
        f'stroke="{config.adjacency_colors.get(adjacency, "none")}" '
        f'stroke-width="{config.adjacency_width}" fill="none"/>',
        f'  <path class="link" d="{d}"{marker} stroke="{link_color}" '
        f'stroke-width="{edge.thickness}" fill="none"/>',
        '</g>',
    ]
    return "\n".join(parts)


def _render_marker(config: CanvasConfig) -> str:
    size = config.edge_arrow_size
    return (
        '<defs>'
        f'<marker id="end-arrow" viewBox="0 -{size // 2} {size} {size}" '
        f'refX="{size}" markerWidth="{size // 2}" markerHeight="{size // 2}" orient="auto">'
        f'<path d="M0,-{size // 2}L{size},0L0,{size // 2}" fill="{config.link_highlight}"/>'
        '</marker>'
        '</defs>'
    )
