"""Builder exploring reachable states combinations into a CombinationGraph."""

import logging
from collections import deque
from collections.abc import Mapping

from ..nodes import InitializeNode, TransitionMatchOptions, TransitionNode
from ..patterns import StatePatternMatcher, default_matcher
from .combination_graph import CombinationGraph, head, vertex_key

logger = logging.getLogger(__name__)


def _has_larger_budget(budget: int | None, explored_budget: int | None) -> bool:
    """None stands for an unlimited budget."""
    if explored_budget is None:
        return False
    if budget is None:
        return True
    return budget > explored_budget


def build_combination_graph(
    initialize_nodes: list[InitializeNode],
    transition_nodes: list[TransitionNode],
    match_options_map: Mapping[str | None, TransitionMatchOptions],
    matcher: StatePatternMatcher = default_matcher,
) -> CombinationGraph:
    """Build the graph of combinations reachable from the initialize nodes.

    Explores breadth-first from every non-manual initialize node, applying
    every non-manual transition. Depth limits act as a budget of remaining
    transitions: an initialize node's depth caps exploration from it, a
    transition's depth resets the budget once taken. A combination reached
    again with a larger budget is explored again.

    Args:
        initialize_nodes: The declared initialize nodes.
        transition_nodes: The declared turn and spawn nodes.
        match_options_map: Preset match options by pattern name.
        matcher: Pattern matcher to use.

    Returns:
        The combination graph.
    """
    graph = CombinationGraph()
    automatic_transitions = [node for node in transition_nodes if not node.is_manual]

    queue: deque[tuple[str, int | None]] = deque()

    for node in initialize_nodes:
        if node.is_manual:
            continue

        blocked = frozenset(node.blocked_aliases)
        key = vertex_key(node.states, blocked)

        graph.add_combination(key, node.states, blocked)
        graph.add_root(key, node)

        queue.append((key, node.depth_limit))

    explored: dict[str, int | None] = {}

    while queue:
        key, budget = queue.popleft()

        if key in explored and not _has_larger_budget(budget, explored[key]):
            continue

        explored[key] = budget

        if budget is not None and budget <= 0:
            continue

        source = head(key)
        states = graph.get_states(source)
        blocked = graph.get_blocked_aliases(source)

        for transition in automatic_transitions:
            if transition.alias_name is not None and transition.alias_name in blocked:
                continue

            destination_states = transition.transit_states(
                states, match_options_map, matcher
            )

            if destination_states is None:
                continue

            destination_blocked = blocked | frozenset(transition.blocked_aliases)
            destination_key = vertex_key(destination_states, destination_blocked)

            graph.add_combination(destination_key, destination_states, destination_blocked)
            graph.add_transition(key, destination_key, transition)

            if transition.depth_limit is not None:
                next_budget = transition.depth_limit
            elif budget is None:
                next_budget = None
            else:
                next_budget = budget - 1

            queue.append((destination_key, next_budget))

    logger.debug(
        "Explored %d states combinations from %d initialize nodes",
        len(explored),
        len(initialize_nodes),
    )

    return graph
