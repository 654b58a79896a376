"""
topology/
---------
Edge model and classification.  Public API:

    from topology import TopologyEdge, adjacency_class
    from topology import parse_edge_id, EdgeClass, MalformedIdentifier
"""

from topology.edge import (
    TopologyEdge,
    EdgeTopology,
    EdgeClass,
    TopologyError,
    MalformedIdentifier,
    STORAGE_TYPES,
    parse_edge_id,
    is_storage_type,
    adjacency_class,
)

__all__ = [
    "TopologyEdge",        "EdgeTopology",
    "EdgeClass",           "STORAGE_TYPES",
    "TopologyError",       "MalformedIdentifier",
    "parse_edge_id",       "is_storage_type",
    "adjacency_class",
]
