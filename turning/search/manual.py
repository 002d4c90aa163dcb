"""Manual test cases: paths declared by alias."""

from collections.abc import Iterable, Mapping

from ..errors import DeclarationError
from ..graph import combination_key
from ..nodes import NodeKind, PathNode, TransitionMatchOptions
from ..patterns import StatePatternMatcher, default_matcher
from .models import ManualTestCase, Path, PathStep


def build_manual_cases(
    cases: Mapping[str, list[str]],
    path_nodes: Iterable[PathNode],
) -> list[ManualTestCase]:
    """Resolve the aliases of declared cases into nodes.

    Args:
        cases: Aliases by case name, in declaration order.
        path_nodes: Every declared initialize and transition node.

    Returns:
        The manual test cases, in declaration order.

    Raises:
        DeclarationError: If an alias is unknown or a case is empty.
    """
    alias_map = {node.alias_name: node for node in path_nodes if node.alias_name}

    manual_cases = []

    for name, aliases in cases.items():
        if not aliases:
            raise DeclarationError(f'Case "{name}" has no nodes')

        nodes = []
        for alias in aliases:
            node = alias_map.get(alias)
            if node is None:
                raise DeclarationError(f'Unknown node alias "{alias}" in case "{name}"')
            nodes.append(node)

        manual_cases.append(ManualTestCase(name=name, nodes=nodes))

    return manual_cases


def realize_manual_case(
    case: ManualTestCase,
    match_options_map: Mapping[str | None, TransitionMatchOptions],
    matcher: StatePatternMatcher = default_matcher,
) -> Path:
    """Walk a manual case from its initialize node, checking every transition applies.

    Manual-only nodes may be used; blocked aliases are honoured.

    Raises:
        DeclarationError: If the case does not start with an initialize node,
            or a transition is not available where the case takes it.
    """
    first, *rest = case.nodes

    if first.kind is not NodeKind.INITIALIZE:
        raise DeclarationError(
            f'Case "{case.name}" must start with an initialize node, got "{first.label}"'
        )

    states = first.states
    blocked = frozenset(first.blocked_aliases)
    steps = [PathStep(first, states, blocked)]

    for node in rest:
        if not node.kind.is_transition:
            raise DeclarationError(
                f'Case "{case.name}" can only continue with transitions, got "{node.label}"'
            )

        destination_states = None
        if node.alias_name not in blocked:
            destination_states = node.transit_states(states, match_options_map, matcher)

        if destination_states is None:
            raise DeclarationError(
                f'Transition "{node.label}" in case "{case.name}" '
                f'is not available on states combination "{combination_key(states)}"'
            )

        states = destination_states
        blocked = blocked | frozenset(node.blocked_aliases)
        steps.append(PathStep(node, states, blocked))

    return tuple(steps)
