"""Build a suite from a parsed model file."""

from ..execution import Environment
from ..nodes import PathNode
from ..suite import Turning
from .models import DEFAULT_PATTERN, NodeDefinition, TurningModel


def build_suite(model: TurningModel, environment: Environment | None = None) -> Turning:
    """Declare everything a model file describes on a new suite.

    Model files carry no handlers: descriptions are kept, contexts are
    ``None`` and transitions only change states. This is enough to search
    and review the test cases.

    Args:
        model: The parsed model.
        environment: Environment of the suite, if it is going to be run.

    Returns:
        The suite.

    Raises:
        DeclarationError: If a case name is declared twice.
    """
    suite = Turning(environment)

    for state in model.states:
        node = suite.define(state.name)
        if state.only:
            node.only()
        if state.necessary:
            node.necessary()

    for name, patterns in model.patterns.items():
        if name == DEFAULT_PATTERN:
            suite.pattern(patterns)
        else:
            suite.pattern(name, patterns)

    for definition in model.initialize:
        _configure(suite.initialize(definition.states), definition)

    for definition in model.transitions:
        pattern = None if definition.pattern == DEFAULT_PATTERN else definition.pattern

        declare = suite.turn if definition.kind == "turn" else suite.spawn
        node = declare(
            definition.patterns,
            pattern=pattern,
            match=definition.match,
            matches=definition.matches,
        )
        _configure(node.to(definition.to), definition)

    for name, aliases in model.cases.items():
        suite.case(name, aliases)

    return suite


def _configure(node: PathNode, definition: NodeDefinition) -> None:
    if definition.description:
        node.by(definition.description)
    if definition.alias:
        node.alias(definition.alias)
    if definition.depth is not None:
        node.depth(definition.depth)
    if definition.manual:
        node.manual()
    if definition.only:
        node.only()
    if definition.block:
        node.block(definition.block)
