"""Search a minimal covering set of paths through the combination graph."""

import logging
import random
from collections.abc import Iterable, Mapping

from ..graph import (
    END,
    START,
    CombinationGraph,
    build_combination_graph,
    head,
    tail,
    vertex_key,
)
from ..nodes import DefineNode, InitializeNode, PathNode, TransitionMatchOptions, TransitionNode
from ..patterns import StatePatternMatcher, default_matcher
from .assembler import assemble_paths
from .manual import realize_manual_case
from .models import ManualTestCase, Path, PathStep, SearchResult, path_signature

logger = logging.getLogger(__name__)


def search(
    initialize_nodes: list[InitializeNode],
    transition_nodes: list[TransitionNode],
    define_nodes: Mapping[str, DefineNode],
    match_options_map: Mapping[str | None, TransitionMatchOptions],
    manual_cases: list[ManualTestCase],
    min_transition_search_count: int,
    random_seed: str | int,
    matcher: StatePatternMatcher = default_matcher,
) -> SearchResult:
    """Search paths covering every transition at least a given number of times.

    Manual cases are realized first and counted towards coverage. Then, as
    long as some edge of the combination graph has been traversed less than
    ``min_transition_search_count`` times, the cheapest route from ``start``
    through that edge to ``end`` becomes a new path.

    Args:
        initialize_nodes: Declared initialize nodes.
        transition_nodes: Declared turn and spawn nodes.
        define_nodes: Declared states.
        match_options_map: Preset match options by pattern name.
        manual_cases: Manual cases with resolved nodes.
        min_transition_search_count: Required traversals per edge and node.
        random_seed: Seed of the pseudo-random tie breaking.
        matcher: Pattern matcher to use.

    Returns:
        The search result, with the assembled forest.

    Raises:
        DeclarationError: If a manual case cannot be realized.
    """
    rng = random.Random(random_seed)

    graph = build_combination_graph(
        initialize_nodes, transition_nodes, match_options_map, matcher
    )

    manual_paths = []
    for case in manual_cases:
        case.steps = realize_manual_case(case, match_options_map, matcher)
        manual_paths.append(case.steps)
        _credit_path(graph, case.steps, rng)

    generated_paths = generate_paths(graph, min_transition_search_count, rng)

    candidates = [*manual_paths, *generated_paths]

    reached_states: set[str] = set()
    reached_nodes: set[PathNode] = set()
    for path in candidates:
        for step in path:
            reached_states.update(step.states)
            reached_nodes.add(step.node)

    paths = sort_and_dedupe(candidates)
    paths = focus_paths(paths, define_nodes, [*initialize_nodes, *transition_nodes])

    logger.debug(
        "Searched %d paths (%d manual), kept %d",
        len(candidates),
        len(manual_paths),
        len(paths),
    )

    return SearchResult(
        path_initializes=assemble_paths(paths, manual_cases),
        paths=paths,
        reached_states=reached_states,
        reached_nodes=reached_nodes,
        blocked_edges=graph.blocked_edges,
    )


def generate_paths(
    graph: CombinationGraph,
    min_transition_search_count: int,
    rng: random.Random,
) -> list[Path]:
    """Generate routes until every counted edge reaches the minimum count.

    Each round picks the least traversed edge. An edge that cannot be routed
    from ``start`` or to ``end`` is blocked for good.
    """
    paths: list[Path] = []

    while True:
        least_covered = _find_least_covered(graph)

        if least_covered is None:
            break

        source, destination, count = least_covered

        if count >= min_transition_search_count:
            break

        starting_route = [START] if source == START else graph.shortest_path(START, source)
        ending_route = graph.shortest_path(destination, END)

        if starting_route is None or ending_route is None:
            logger.warning("Blocking unroutable edge %s -> %s", source, destination)
            graph.block_edge(source, destination)
            continue

        paths.append(_walk_route(graph, starting_route + ending_route, rng))

    return paths


def _find_least_covered(graph: CombinationGraph) -> tuple[str, str, int] | None:
    least_covered = None

    for source, destination, counts in graph.iter_counted_edges():
        count = min(counts.values())
        if least_covered is None or count < least_covered[2]:
            least_covered = (source, destination, count)

    return least_covered


def _walk_route(graph: CombinationGraph, route: list[str], rng: random.Random) -> Path:
    """Turn a vertex route into a path, taking the least used node of every counted edge."""
    steps = []

    for source, destination in zip(route, route[1:]):
        edge = graph.get_edge(source, destination)

        if not edge["edge_type"].is_counted:
            continue

        node, _ = graph.least_used(source, destination)
        graph.record_use(source, destination, node, rng)

        steps.append(
            PathStep(
                node,
                graph.get_states(destination),
                graph.get_blocked_aliases(destination),
            )
        )

    return tuple(steps)


def _credit_path(graph: CombinationGraph, path: Path, rng: random.Random) -> None:
    """Count the graph edges a manual path goes through."""
    previous_key = None

    for step in path:
        key = vertex_key(step.states, step.blocked)
        source = START if previous_key is None else tail(previous_key)
        destination = head(key)

        edge = graph.get_edge(source, destination)
        if edge is not None and step.node in edge["counts"]:
            graph.record_use(source, destination, step.node, rng)

        previous_key = key


def sort_and_dedupe(paths: Iterable[Path]) -> list[Path]:
    """Sort paths by node ids and drop the ones another kept path starts with.

    Sorting in descending order puts every path right after its longest
    neighbour sharing its prefix, so comparing with the last kept path is
    enough. Deduplicating twice is a no-op.
    """
    kept: list[Path] = []
    last_signature: tuple[int, ...] | None = None

    for path in sorted(paths, key=path_signature, reverse=True):
        signature = path_signature(path)

        if last_signature is not None and signature == last_signature[: len(signature)]:
            continue

        kept.append(path)
        last_signature = signature

    kept.reverse()
    return kept


def focus_paths(
    paths: list[Path],
    define_nodes: Mapping[str, DefineNode],
    path_nodes: Iterable[PathNode],
) -> list[Path]:
    """Keep only paths touching a node or state marked ``only``, if any is."""
    only_states = {state for state, node in define_nodes.items() if node.is_only}
    has_only_nodes = any(node.is_only for node in path_nodes)

    if not only_states and not has_only_nodes:
        return paths

    return [
        path
        for path in paths
        if any(step.node.is_only or only_states.intersection(step.states) for step in path)
    ]
