"""Graph layer for exploring states combinations with networkx."""

from .builder import build_combination_graph
from .combination_graph import (
    END,
    START,
    CombinationGraph,
    combination_key,
    head,
    tail,
    vertex_key,
)
from .node_types import EdgeType, VertexType

__all__ = [
    "END",
    "START",
    "CombinationGraph",
    "EdgeType",
    "VertexType",
    "build_combination_graph",
    "combination_key",
    "head",
    "tail",
    "vertex_key",
]
