"""
edge.py — Topology Edge
=======================
Connects two topology nodes.  The edge id is a composite string built by
the report side that also carries the type of each endpoint:

    "<from_node>;(<from_type>)---<to_node>;(<to_type>)"

The renderer uses the decoded types to put each edge into a visual
bucket (storage links vs. everything else).

Design decisions:
  - The id is decoded on demand, never stored pre-split.  The composite
    id is the edge's identity and the only thing the hover hooks send back.
  - `adjacency_class` never raises.  It sits on the draw path, and a bad
    id should render as an unclassified edge, not break the whole canvas.
  - `path` is opaque drawable geometry (an SVG "d" string); nothing here
    interprets it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, FrozenSet

logger = logging.getLogger(__name__)


SEGMENT_SEPARATOR = "---"
TAG_SEPARATOR     = ";"

STORAGE_TYPES: FrozenSet[str] = frozenset({
    "persistent_volume",
    "storage_class",
    "persistent_volume_claim",
})


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class TopologyError(Exception):
    """Base class for topology edge errors."""


class MalformedIdentifier(TopologyError, ValueError):
    """The composite edge id could not be decoded."""

    def __init__(self, edge_id: Any, reason: str):
        super().__init__(f"malformed edge id {edge_id!r}: {reason}")
        self.edge_id = edge_id
        self.reason  = reason


# ---------------------------------------------------------------------------
# Edge Class Enum — visual bucket for the renderer
# ---------------------------------------------------------------------------
class EdgeClass(Enum):
    STORAGE = "link-storage"   # either endpoint is a volume / claim / storage class
    NONE    = "link-none"      # everything else, including undecodable ids


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class EdgeTopology:
    """Decoded composite id.  Types are unwrapped; None means no tag."""

    from_node: str
    from_type: Optional[str]
    to_node:   str
    to_type:   Optional[str]

    @property
    def fully_typed(self) -> bool:
        return self.from_type is not None and self.to_type is not None


def _split_segment(edge_id: str, segment: str):
    parts = segment.split(TAG_SEPARATOR)
    node = parts[0]
    if len(parts) < 2:
        return node, None
    raw = parts[1]
    if len(raw) < 2:
        raise MalformedIdentifier(edge_id, f"type tag {raw!r} has no wrapper to strip")
    return node, raw[1:-1]


def parse_edge_id(edge_id: str) -> EdgeTopology:
    """
    Decode a composite edge id.

    Raises MalformedIdentifier if `edge_id` is not a string, does not hold
    exactly two `---` separated segments, or carries a tag too short to
    unwrap.
    """
    if not isinstance(edge_id, str):
        raise MalformedIdentifier(edge_id, "not a string")

    segments = edge_id.split(SEGMENT_SEPARATOR)
    if len(segments) != 2:
        raise MalformedIdentifier(edge_id, f"expected 2 segments, got {len(segments)}")

    from_node, from_type = _split_segment(edge_id, segments[0])
    to_node,   to_type   = _split_segment(edge_id, segments[1])
    return EdgeTopology(from_node, from_type, to_node, to_type)


def is_storage_type(type_tag: Optional[str]) -> bool:
    return type_tag in STORAGE_TYPES


def adjacency_class(edge_id: str) -> str:
    """
    Classify an edge by its composite id.

    Returns "link-storage" when both endpoints are typed and at least one
    of them is a storage type, "link-none" otherwise.
    """
    try:
        topo = parse_edge_id(edge_id)
    except MalformedIdentifier as e:
        logger.debug("classifying as %s: %s", EdgeClass.NONE.value, e)
        return EdgeClass.NONE.value

    if topo.fully_typed and (is_storage_type(topo.from_type) or is_storage_type(topo.to_type)):
        return EdgeClass.STORAGE.value
    return EdgeClass.NONE.value


# ---------------------------------------------------------------------------
# TopologyEdge
# ---------------------------------------------------------------------------
class TopologyEdge:
    """
    Attributes:
        id          : Composite edge id (see module docstring).
        path        : Opaque SVG path data.
        source      : ID of the tail node.
        target      : ID of the head node.
        highlighted : Hover / search highlight.
        focused     : Part of the currently selected node's neighbourhood.
        thickness   : Base stroke width multiplier.
    """

    __slots__ = ("id", "path", "source", "target", "highlighted", "focused", "thickness")

    def __init__(
        self,
        edge_id: str,
        path: str = "",
        source: Optional[str] = None,
        target: Optional[str] = None,
        highlighted: bool = False,
        focused: bool = False,
        thickness: float = 1.0,
    ):
        self.id:          str           = edge_id
        self.path:        str           = path
        self.source:      Optional[str] = source
        self.target:      Optional[str] = target
        self.highlighted: bool          = highlighted
        self.focused:     bool          = focused
        self.thickness:   float         = thickness

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def adjacency(self) -> str:
        return adjacency_class(self.id)

    @property
    def should_render_marker(self) -> bool:
        """Arrowheads only on emphasised edges, never on self-loops."""
        return (self.focused or self.highlighted) and self.source != self.target

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":          self.id,
            "path":        self.path,
            "source":      self.source,
            "target":      self.target,
            "highlighted": self.highlighted,
            "focused":     self.focused,
            "thickness":   self.thickness,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TopologyEdge":
        return cls(
            edge_id=data["id"],
            path=data.get("path", ""),
            source=data.get("source"),
            target=data.get("target"),
            highlighted=data.get("highlighted", False),
            focused=data.get("focused", False),
            thickness=data.get("thickness", 1.0),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"TopologyEdge({self.source} → {self.target}, class={self.adjacency})"

    def __eq__(self, other) -> bool:
        return isinstance(other, TopologyEdge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
