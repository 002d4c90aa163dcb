"""Validators for states and transitions the search never reached."""

from collections.abc import Iterable

from ..nodes import TransitionNode
from ..search import SearchResult
from .base import Severity, ValidationResult


def check_reachability(
    defined_states: Iterable[str],
    necessary_states: Iterable[str],
    transition_nodes: Iterable[TransitionNode],
    search_result: SearchResult,
    allow_unreachable: bool = False,
) -> ValidationResult:
    """Check that every defined state and transition appears on some path.

    Unreached states and transitions are errors, or warnings when
    ``allow_unreachable`` is set. States marked necessary stay errors.
    Manual transitions only count as reached through cases.

    Args:
        defined_states: Every defined state.
        necessary_states: States that must be reached regardless.
        transition_nodes: Every declared transition.
        search_result: The result of the search.
        allow_unreachable: Downgrade unreached nodes to warnings.

    Returns:
        ValidationResult with an issue per unreached state or transition.
    """
    result = ValidationResult()
    necessary = set(necessary_states)

    for state in defined_states:
        if state in search_result.reached_states:
            continue

        severity = (
            Severity.WARNING if allow_unreachable and state not in necessary else Severity.ERROR
        )
        result.add(severity, "UNREACHABLE_STATE", f'State "{state}" is unreachable', state=state)

    for node in transition_nodes:
        if node in search_result.reached_nodes:
            continue

        result.add(
            Severity.WARNING if allow_unreachable else Severity.ERROR,
            "UNREACHABLE_TRANSITION",
            f'Transition "{node.label}" is unreachable',
            node=node.label,
        )

    return result
