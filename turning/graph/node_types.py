"""Vertex and edge type definitions for the combination graph."""

from enum import Enum


class VertexType(str, Enum):
    """Types of vertices in the combination graph."""

    START = "start"
    END = "end"

    # Every states combination is split in two
    HEAD = "head"  # Arrived at the combination
    TAIL = "tail"  # Ready to leave the combination


class EdgeType(str, Enum):
    """Types of edges in the combination graph."""

    START = "start"  # start -> head, via an initialize node
    STAY = "stay"  # head -> tail of the same combination
    TRANSITION = "transition"  # tail -> head, via transition nodes
    FINISH = "finish"  # tail -> end

    @property
    def is_counted(self) -> bool:
        """Whether traversals of this edge are counted for coverage."""
        return self in (EdgeType.START, EdgeType.TRANSITION)
