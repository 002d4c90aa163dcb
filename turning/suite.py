"""The Turning suite: declarations, search and execution in one place."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from .errors import DeclarationError, UnreachableError
from .execution import Environment, ExecutionDriver, ExecutionResult
from .nodes import (
    DefineNode,
    InitializeNode,
    MatchSpec,
    SpawnNode,
    TransitionMatchOptions,
    TransitionNode,
    TurnNode,
    build_match_options,
)
from .options import RunOptions, SearchOptions
from .patterns import StatePatternMatcher
from .search import SearchResult, build_manual_cases
from .search import search as search_paths
from .validators import (
    ValidationIssue,
    ValidationResult,
    check_declarations,
    check_reachability,
)

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=SearchOptions)


def _build_options(
    options_class: type[OptionsT],
    options: SearchOptions | Mapping[str, Any] | None,
    overrides: dict[str, Any],
) -> OptionsT:
    if isinstance(options, options_class) and not overrides:
        return options

    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, BaseModel):
        data = options.model_dump(include=set(options_class.model_fields))
    else:
        data = dict(options)

    data.update(overrides)
    return options_class(**data)


class Turning:
    """A model of the system under test and the cases generated from it.

    Declare states with ``define``, roots with ``initialize`` and
    transitions with ``turn`` and ``spawn``; then ``search`` the test cases
    or run them with ``test``.

    Example::

        turning = Turning(MyEnvironment())

        turning.define("pending")
        turning.define("fulfilled")

        turning.initialize(["pending"]).by("creating", create)
        turning.turn(["pending"]).to(["fulfilled"]).by("resolving", resolve)

        assert turning.run(min_transition_search_count=1)
    """

    def __init__(
        self,
        environment: Environment | None = None,
        matcher: StatePatternMatcher | None = None,
    ):
        self.environment = environment if environment is not None else Environment()
        self.matcher = matcher if matcher is not None else StatePatternMatcher()

        self.define_nodes: dict[str, DefineNode] = {}
        self.match_options_map: dict[str | None, TransitionMatchOptions] = {}
        self.initialize_nodes: list[InitializeNode] = []
        self.transition_nodes: list[TransitionNode] = []
        self.cases: dict[str, list[str]] = {}

        self._frozen = False

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def define(self, state: str) -> DefineNode:
        self._ensure_declaring()
        node = DefineNode(state)
        self.define_nodes[state] = node
        return node

    def pattern(
        self,
        name_or_patterns: str | MatchSpec | None,
        patterns: MatchSpec | None = None,
    ) -> None:
        """Set the match options applied to transitions.

        ``pattern(patterns)`` sets the default options, applied to every
        transition not opting out with ``pattern=False``;
        ``pattern(name, patterns)`` sets options transitions select with
        ``pattern=name``.
        """
        self._ensure_declaring()

        if patterns is None:
            name, patterns = None, name_or_patterns
        else:
            name = name_or_patterns

        self.match_options_map[name] = build_match_options(patterns)

    def initialize(self, states: list[str]) -> InitializeNode:
        self._ensure_declaring()
        node = InitializeNode(states)
        self.initialize_nodes.append(node)
        return node

    def turn(
        self,
        state_patterns: list[str],
        pattern: str | bool | None = None,
        match: MatchSpec | None = None,
        matches: list[MatchSpec] | None = None,
    ) -> TurnNode:
        self._ensure_declaring()
        node = TurnNode(state_patterns, pattern=pattern, match=match, matches=matches)
        self.transition_nodes.append(node)
        return node

    def spawn(
        self,
        state_patterns: list[str],
        pattern: str | bool | None = None,
        match: MatchSpec | None = None,
        matches: list[MatchSpec] | None = None,
    ) -> SpawnNode:
        self._ensure_declaring()
        node = SpawnNode(state_patterns, pattern=pattern, match=match, matches=matches)
        self.transition_nodes.append(node)
        return node

    def case(self, name: str, aliases: list[str]) -> None:
        """Declare a case that must be part of the generated ones.

        Args:
            name: Name of the case, shown next to its last node.
            aliases: Alias of an initialize node followed by transition aliases.

        Raises:
            DeclarationError: If the name is already taken.
        """
        self._ensure_declaring()

        if name in self.cases:
            raise DeclarationError(f'Case name "{name}" has already been taken')

        self.cases[name] = list(aliases)

    @property
    def necessary_states(self) -> list[str]:
        return [state for state, node in self.define_nodes.items() if node.is_necessary]

    def _ensure_declaring(self) -> None:
        if self._frozen:
            raise DeclarationError("Nodes cannot be declared after search has started")

    def freeze(self) -> None:
        """Lock every declaration; searching does this first."""
        self._frozen = True
        for node in [
            *self.define_nodes.values(),
            *self.initialize_nodes,
            *self.transition_nodes,
        ]:
            node.freeze()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self,
        options: SearchOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> SearchResult:
        """Search the test cases covering the declared transitions.

        Args:
            options: Search options, as a model or a mapping.
            **overrides: Individual options, taking precedence over ``options``.

        Returns:
            The search result; ``path_initializes`` is the test case forest.

        Raises:
            DeclarationError: If declarations or cases are inconsistent.
            UnreachableError: If a state or transition is never reached and
                unreachable ones are not allowed.
            pydantic.ValidationError: If an option is invalid.
        """
        options = _build_options(SearchOptions, options, overrides)

        declarations = check_declarations(self)
        if declarations.has_errors:
            raise DeclarationError(declarations.error_message(), declarations.errors)

        result = self.search_paths(
            min_transition_search_count=options.min_transition_search_count,
            random_seed=options.random_seed,
        )

        self._assert_reachability(
            check_reachability(
                self.define_nodes,
                self.necessary_states,
                self.transition_nodes,
                result,
                options.allow_unreachable,
            )
        )

        return result

    def search_paths(
        self,
        min_transition_search_count: int = 10,
        random_seed: str | int | None = None,
    ) -> SearchResult:
        """Run the path search alone, without checking declarations or reachability."""
        self.freeze()

        if random_seed is None:
            random_seed = SearchOptions().random_seed

        manual_cases = build_manual_cases(
            self.cases, [*self.initialize_nodes, *self.transition_nodes]
        )

        return search_paths(
            self.initialize_nodes,
            self.transition_nodes,
            self.define_nodes,
            self.match_options_map,
            manual_cases,
            min_transition_search_count,
            random_seed,
            self.matcher,
        )

    def _assert_reachability(self, validation: ValidationResult) -> None:
        message, _, _ = _describe_unreachable(validation.warnings)
        if message:
            logger.warning(message)

        message, states, transitions = _describe_unreachable(validation.errors)
        if message:
            raise UnreachableError(message, states, transitions)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    async def execute(
        self,
        options: RunOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> ExecutionResult:
        """Search the test cases and run them against the environment."""
        options = _build_options(RunOptions, options, overrides)
        result = self.search(options)

        driver = ExecutionDriver(self.define_nodes, self.environment, options)
        return await driver.run(result.path_initializes)

    async def test(
        self,
        options: RunOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> bool:
        """Search and run the test cases; True if all of them passed."""
        execution = await self.execute(options, **overrides)
        return execution.passed

    def run(
        self,
        options: RunOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> bool:
        """Blocking version of ``test``."""
        return asyncio.run(self.test(options, **overrides))


def _describe_unreachable(issues: list[ValidationIssue]) -> tuple[str, list[str], list[str]]:
    states = [i.state for i in issues if i.code == "UNREACHABLE_STATE" and i.state]
    transitions = [i.node for i in issues if i.code == "UNREACHABLE_TRANSITION" and i.node]

    sections = []
    if states:
        sections.append("Unreachable states:\n" + "\n".join(f"  {s}" for s in states))
    if transitions:
        sections.append(
            "Unreachable transitions:\n" + "\n".join(f"  {t}" for t in transitions)
        )

    return "\n".join(sections), states, transitions
