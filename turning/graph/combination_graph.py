"""CombinationGraph wrapper around networkx for states combinations."""

import random
from typing import Any, Iterable, Iterator

import networkx as nx

from ..nodes import PathNode
from .node_types import EdgeType, VertexType

START = "start"
END = "end"

# Every edge costs a little so that, all else equal, shorter routes win
EDGE_EPSILON = 1e-9


def combination_key(states: Iterable[str]) -> str:
    """Canonical key of a states combination: sorted and comma-joined."""
    return ",".join(sorted(states))


def vertex_key(states: Iterable[str], blocked_aliases: Iterable[str] = ()) -> str:
    """Key of a search vertex: the combination plus the aliases blocked so far."""
    key = combination_key(states)
    blocked = sorted(blocked_aliases)
    if blocked:
        key += "|-" + ",".join(blocked)
    return key


def head(key: str) -> str:
    return f"{key}@head"


def tail(key: str) -> str:
    return f"{key}@tail"


class CombinationGraph:
    """A weighted graph over states combinations.

    Wraps a networkx DiGraph. Each combination is split into a head vertex
    (arrived) and a tail vertex (about to leave), connected by a free edge.
    Transitions connect tails to heads, initialize nodes connect ``start``
    to heads and every tail connects to ``end``. Shortest paths over this
    graph route from ``start`` to any transition and from there to ``end``.

    Start and transition edges carry per-node traversal counts; the weight
    of an edge grows as it gets used so later routes prefer fresh edges.
    """

    def __init__(self):
        """Initialize a graph holding only the start and end vertices."""
        self._graph = nx.DiGraph()
        self._graph.add_node(START, vertex_type=VertexType.START)
        self._graph.add_node(END, vertex_type=VertexType.END)
        self._counted_edges: list[tuple[str, str]] = []
        self._blocked_edges: list[tuple[str, str]] = []

    @property
    def graph(self) -> nx.DiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_combination(
        self,
        key: str,
        states: Iterable[str],
        blocked_aliases: Iterable[str] = (),
    ) -> bool:
        """Add the head and tail vertices of a combination.

        Args:
            key: The vertex key (see ``vertex_key``).
            states: The states of the combination, in path order.
            blocked_aliases: Transition aliases blocked on arrival.

        Returns:
            True if the combination is new.
        """
        if self._graph.has_node(head(key)):
            return False

        attrs = {
            "key": key,
            "states": tuple(states),
            "blocked": frozenset(blocked_aliases),
        }

        self._graph.add_node(head(key), vertex_type=VertexType.HEAD, **attrs)
        self._graph.add_node(tail(key), vertex_type=VertexType.TAIL, **attrs)

        self._graph.add_edge(
            head(key), tail(key), edge_type=EdgeType.STAY, weight=EDGE_EPSILON
        )
        self._graph.add_edge(
            tail(key), END, edge_type=EdgeType.FINISH, weight=EDGE_EPSILON
        )

        return True

    def add_root(self, key: str, node: PathNode) -> None:
        """Connect ``start`` to a combination through an initialize node."""
        self._add_counted_edge(START, head(key), EdgeType.START, node)

    def add_transition(self, source_key: str, destination_key: str, node: PathNode) -> None:
        """Connect two combinations through a transition node."""
        self._add_counted_edge(
            tail(source_key), head(destination_key), EdgeType.TRANSITION, node
        )

    def _add_counted_edge(
        self, source: str, destination: str, edge_type: EdgeType, node: PathNode
    ) -> None:
        if not self._graph.has_edge(source, destination):
            self._graph.add_edge(
                source,
                destination,
                edge_type=edge_type,
                weight=EDGE_EPSILON,
                counts={},
            )
            self._counted_edges.append((source, destination))

        self._graph.edges[source, destination]["counts"].setdefault(node, 0)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_combination(self, key: str) -> bool:
        return self._graph.has_node(head(key))

    def get_combination_keys(self) -> list[str]:
        """Get all combination keys in insertion order."""
        return [
            data["key"]
            for _, data in self._graph.nodes(data=True)
            if data.get("vertex_type") == VertexType.HEAD
        ]

    def get_states(self, vertex: str) -> tuple[str, ...]:
        """Get the states of a head or tail vertex."""
        return self._graph.nodes[vertex].get("states", ())

    def get_blocked_aliases(self, vertex: str) -> frozenset[str]:
        return self._graph.nodes[vertex].get("blocked", frozenset())

    def get_edge(self, source: str, destination: str) -> dict[str, Any] | None:
        """Get the data of an edge, or None if missing or blocked."""
        if self._graph.has_edge(source, destination):
            return self._graph.edges[source, destination]
        return None

    def iter_counted_edges(self) -> Iterator[tuple[str, str, dict[PathNode, int]]]:
        """Iterate over unblocked start and transition edges in insertion order.

        Yields:
            Tuples of (source, destination, counts).
        """
        for source, destination in self._counted_edges:
            data = self.get_edge(source, destination)
            if data is not None:
                yield source, destination, data["counts"]

    def get_transitions_from(self, key: str) -> list[dict[str, Any]]:
        """Get the transition edges leaving a combination."""
        transitions = []

        for _, destination, data in self._graph.out_edges(tail(key), data=True):
            if data.get("edge_type") == EdgeType.TRANSITION:
                transitions.append({
                    "from": key,
                    "to": self._graph.nodes[destination]["key"],
                    "nodes": list(data["counts"]),
                })

        return transitions

    @property
    def blocked_edges(self) -> list[tuple[str, str]]:
        return list(self._blocked_edges)

    # -------------------------------------------------------------------------
    # Coverage bookkeeping
    # -------------------------------------------------------------------------

    def least_used(self, source: str, destination: str) -> tuple[PathNode, int]:
        """Get the least traversed node of an edge; ties go to the earliest declared."""
        counts = self._graph.edges[source, destination]["counts"]
        return min(counts.items(), key=lambda item: (item[1], item[0].id))

    def record_use(
        self,
        source: str,
        destination: str,
        node: PathNode,
        rng: random.Random,
    ) -> int:
        """Count a traversal of an edge through a node and make the edge costlier.

        The weight grows by ``2 ** min_count`` scaled by a pseudo-random factor,
        so repeated routes back off exponentially while ties get shuffled.

        Returns:
            The least count on the edge after the update.
        """
        data = self._graph.edges[source, destination]
        counts = data["counts"]
        counts[node] += 1

        min_count = min(counts.values())
        data["weight"] += 2**min_count * rng.random()

        return min_count

    def block_edge(self, source: str, destination: str) -> None:
        """Remove an edge that cannot be part of any complete route."""
        if self._graph.has_edge(source, destination):
            self._graph.remove_edge(source, destination)
            self._blocked_edges.append((source, destination))

    def shortest_path(self, source: str, destination: str) -> list[str] | None:
        """Find the cheapest route between two vertices, or None."""
        try:
            return nx.dijkstra_path(self._graph, source, destination, weight="weight")
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None
