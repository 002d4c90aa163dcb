"""Transition nodes: turns and spawns."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable

from ..errors import DeclarationError
from ..patterns import StatePatternMatcher, default_matcher
from .common import PathNode
from .node_types import NodeKind

TransitionHandler = Callable[[Any, Any], Awaitable[Any] | Any]

# A pattern, "!pattern", {"not": pattern}, or a list of those
MatchSpec = str | Mapping[str, str] | list


@dataclass(frozen=True)
class TransitionMatchOptions:
    """Positive and negative patterns gating a transition."""

    patterns: tuple[str, ...] = ()
    negative_patterns: tuple[str, ...] = ()

    @property
    def all_patterns(self) -> tuple[str, ...]:
        return self.patterns + self.negative_patterns

    def test(self, states: Iterable[str], matcher: StatePatternMatcher) -> bool:
        """Every positive pattern matches some state and no state matches a negative one."""
        states = list(states)

        for pattern in self.patterns:
            if not matcher.matches_any(states, pattern):
                return False

        for pattern in self.negative_patterns:
            if matcher.matches_any(states, pattern):
                return False

        return True


def build_match_options(spec: MatchSpec) -> TransitionMatchOptions:
    """Build match options from a pattern, a negation or a list of them.

    Negations are written either as ``"!pattern"`` or ``{"not": "pattern"}``.
    """
    if isinstance(spec, (str, Mapping)):
        spec = [spec]

    patterns: list[str] = []
    negative_patterns: list[str] = []

    for item in spec:
        if isinstance(item, Mapping):
            try:
                negative_patterns.append(item["not"])
            except KeyError:
                raise DeclarationError(
                    f"Negative pattern mapping must have a 'not' key, got {dict(item)!r}"
                ) from None
        elif item.startswith("!"):
            negative_patterns.append(item[1:])
        else:
            patterns.append(item)

    return TransitionMatchOptions(tuple(patterns), tuple(negative_patterns))


class TransitionNode(PathNode):
    """Base class for turn and spawn nodes.

    A transition applies to a states combination when every obsolete state
    pattern matches at least one current state and the configured match
    options accept the combination. Taking it removes the states matched by
    the obsolete patterns and adds the new states.
    """

    prefix = ""

    def __init__(
        self,
        obsolete_state_patterns: list[str],
        pattern: str | bool | None = None,
        match: MatchSpec | None = None,
        matches: list[MatchSpec] | None = None,
    ):
        super().__init__()
        self.obsolete_state_patterns: tuple[str, ...] = tuple(obsolete_state_patterns)
        self.new_states: tuple[str, ...] | None = None
        self.handler: TransitionHandler | None = None

        # None selects the unnamed preset, False opts out of presets
        if pattern is True:
            pattern = None
        self.pattern_name: str | bool | None = pattern

        if match is not None:
            matches = [match]
        elif matches is None:
            matches = []

        self.match_options_list = [build_match_options(spec) for spec in matches]

    @property
    def description(self) -> str:
        obsolete = ",".join(self.obsolete_state_patterns)
        new = ",".join(self.new_states or ())
        return self._describe(f"{self.prefix} [{obsolete}] to [{new}]")

    @property
    def related_state_patterns(self) -> list[str]:
        """Patterns used by the node's own match options."""
        patterns: dict[str, None] = {}
        for options in self.match_options_list:
            patterns.update(dict.fromkeys(options.all_patterns))
        return list(patterns)

    def to(self, states: list[str]):
        """Set the states added by this transition."""
        self._ensure_mutable()
        self.new_states = tuple(dict.fromkeys(states))
        return self

    def transit_states(
        self,
        states: Iterable[str],
        match_options_map: Mapping[str | None, TransitionMatchOptions],
        matcher: StatePatternMatcher = default_matcher,
    ) -> tuple[str, ...] | None:
        """Return the combination after this transition, or None if it does not apply."""
        if self.new_states is None:
            raise DeclarationError(f"{self.description} has no target states")

        states = list(states)
        obsolete_patterns = self.obsolete_state_patterns

        for pattern in obsolete_patterns:
            if not matcher.matches_any(states, pattern):
                return None

        if self.pattern_name is not False:
            preset = match_options_map.get(self.pattern_name)
            if preset is not None and not preset.test(states, matcher):
                return None

        if self.match_options_list and not any(
            options.test(states, matcher) for options in self.match_options_list
        ):
            return None

        if obsolete_patterns:
            states = matcher.exclude(states, obsolete_patterns)

        return tuple(dict.fromkeys([*states, *self.new_states]))


class TurnNode(TransitionNode):
    """Moves the current context to a new states combination in place."""

    kind = NodeKind.TURN
    prefix = "Turn"


class SpawnNode(TransitionNode):
    """Forks a new context, leaving the parent path untouched."""

    kind = NodeKind.SPAWN
    prefix = "Spawn"
