"""Validators for declared states, transitions and cases."""

from typing import TYPE_CHECKING

from ..errors import StatePatternSyntaxError
from ..nodes import NodeKind, PathNode
from .base import ValidationResult

if TYPE_CHECKING:
    from ..suite import Turning


def check_declarations(suite: "Turning") -> ValidationResult:
    """Check that every declaration only refers to what has been declared.

    - Initialize nodes and transition targets only use defined states.
    - Every state pattern is valid and matches at least one defined state.
    - Named patterns used by transitions exist.
    - Blocked aliases name a declared initialize or transition node.

    Args:
        suite: The suite holding the declarations.

    Returns:
        ValidationResult with an error per problem.
    """
    result = ValidationResult()
    defined_states = list(suite.define_nodes)
    path_nodes: list[PathNode] = [*suite.initialize_nodes, *suite.transition_nodes]
    aliases = {node.alias_name for node in path_nodes if node.alias_name}

    def check_state(state: str, node: PathNode) -> None:
        if state not in suite.define_nodes:
            result.add_error(
                code="UNDEFINED_STATE",
                message=f'State "{state}" is not defined',
                node=node.label,
                state=state,
            )

    def check_pattern(pattern: str, node: str | None) -> None:
        try:
            matched = suite.matcher.matches_any(defined_states, pattern)
        except StatePatternSyntaxError as e:
            result.add_error(
                code="INVALID_PATTERN",
                message=str(e),
                node=node,
                pattern=pattern,
            )
            return

        if not matched:
            result.add_error(
                code="UNMATCHED_PATTERN",
                message=f'State pattern "{pattern}" does not match any of the states defined',
                node=node,
                pattern=pattern,
            )

    for name, options in suite.match_options_map.items():
        for pattern in options.all_patterns:
            check_pattern(pattern, f"pattern {name}" if name else "default pattern")

    for node in path_nodes:
        if node.kind is NodeKind.INITIALIZE:
            for state in node.states:
                check_state(state, node)
        else:
            for pattern in node.obsolete_state_patterns:
                check_pattern(pattern, node.label)
            for pattern in node.related_state_patterns:
                check_pattern(pattern, node.label)

            if node.new_states is None:
                result.add_error(
                    code="MISSING_TARGET",
                    message=f'Transition "{node.label}" has no target states',
                    node=node.label,
                )
            else:
                for state in node.new_states:
                    check_state(state, node)

            if isinstance(node.pattern_name, str) and node.pattern_name not in suite.match_options_map:
                result.add_error(
                    code="UNKNOWN_PATTERN_NAME",
                    message=f'Pattern "{node.pattern_name}" is not defined',
                    node=node.label,
                )

        for alias in node.blocked_aliases:
            if alias not in aliases:
                result.add_error(
                    code="UNKNOWN_BLOCK_ALIAS",
                    message=f'Blocked alias "{alias}" does not name any node',
                    node=node.label,
                    alias=alias,
                )

    return result
