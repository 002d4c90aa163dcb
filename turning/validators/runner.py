"""Validation runner that orchestrates all validators."""

from typing import TYPE_CHECKING

from ..errors import TurningError
from .base import ValidationResult
from .declarations import check_declarations
from .reachability import check_reachability

if TYPE_CHECKING:
    from ..suite import Turning


def run_validators(suite: "Turning", allow_unreachable: bool = False) -> ValidationResult:
    """Run all validators on a suite.

    Declaration checks run first; the search runs only when they pass.

    Args:
        suite: The suite to validate.
        allow_unreachable: Downgrade unreached states and transitions to warnings.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = check_declarations(suite)

    if result.has_errors:
        return result

    try:
        search_result = suite.search_paths(min_transition_search_count=1)
    except TurningError as e:
        result.add_error(code="INVALID_CASE", message=str(e))
        return result

    result.merge(
        check_reachability(
            suite.define_nodes,
            suite.necessary_states,
            suite.transition_nodes,
            search_result,
            allow_unreachable,
        )
    )

    return result
