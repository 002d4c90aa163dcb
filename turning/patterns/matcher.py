"""Compile glob-like state patterns into regular expressions.

Supported syntax:

- ``*`` matches a single segment (no ``:`` or ``/``).
- ``**`` matches anything, including the empty string.
- ``{a,b,c}`` matches any of the alternatives; alternatives are patterns
  themselves, may nest and may be empty.
- ``\\`` escapes the following character.
"""

import re
from typing import Callable, Iterable

from ..errors import StatePatternSyntaxError

SEGMENT_SOURCE = "[^:/]+"
ANYTHING_SOURCE = ".*"


class _PatternParser:
    """Recursive descent parser producing regex source for one pattern."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0

    def parse(self) -> str:
        source = self._sequence(in_braces=False)

        if self.pos != len(self.pattern):
            raise self._error(f'unexpected "{self.pattern[self.pos]}"')

        return source

    def _sequence(self, in_braces: bool) -> str:
        pattern = self.pattern
        parts: list[str] = []

        while self.pos < len(pattern):
            char = pattern[self.pos]

            if char == "*":
                if pattern.startswith("**", self.pos):
                    parts.append(ANYTHING_SOURCE)
                    self.pos += 2
                else:
                    parts.append(SEGMENT_SOURCE)
                    self.pos += 1
            elif char == "{":
                self.pos += 1
                parts.append(self._alternation())
            elif char == "}":
                if in_braces:
                    break
                raise self._error('unmatched "}"')
            elif char == "," and in_braces:
                break
            elif char == "\\":
                if self.pos + 1 >= len(pattern):
                    raise self._error("dangling escape")
                parts.append(re.escape(pattern[self.pos + 1]))
                self.pos += 2
            else:
                parts.append(re.escape(char))
                self.pos += 1

        return "".join(parts)

    def _alternation(self) -> str:
        alternatives = [self._sequence(in_braces=True)]

        while True:
            if self.pos >= len(self.pattern):
                raise self._error('unmatched "{"')

            char = self.pattern[self.pos]
            self.pos += 1

            if char == "}":
                break

            alternatives.append(self._sequence(in_braces=True))

        return "(?:" + "|".join(alternatives) + ")"

    def _error(self, reason: str) -> StatePatternSyntaxError:
        return StatePatternSyntaxError(
            f"Invalid state pattern {self.pattern!r}: {reason} at position {self.pos}",
            self.pattern,
        )


class StatePatternMatcher:
    """Matches states against glob-like patterns.

    Compiled expressions are cached per instance, keyed by the raw pattern.
    Patterns are static during a run, so entries are never invalidated;
    call ``clear()`` to start over.
    """

    def __init__(self):
        self._cache: dict[str, re.Pattern] = {}

    def compile(self, pattern: str) -> re.Pattern:
        """Compile a pattern, reusing a cached expression if present.

        Raises:
            StatePatternSyntaxError: If the pattern is malformed.
        """
        regex = self._cache.get(pattern)

        if regex is None:
            regex = re.compile(_PatternParser(pattern).parse(), re.DOTALL)
            self._cache[pattern] = regex

        return regex

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def test(self, state: str, pattern: str) -> bool:
        """Check whether a single state matches a pattern."""
        return self.compile(pattern).fullmatch(state) is not None

    def build_filter(self, patterns: str | Iterable[str]) -> Callable[[str], bool]:
        """Build a predicate that is true when any pattern matches a state."""
        if isinstance(patterns, str):
            patterns = [patterns]

        regexes = [self.compile(pattern) for pattern in patterns]

        return lambda state: any(regex.fullmatch(state) for regex in regexes)

    def match(self, states: Iterable[str], pattern: str) -> list[str]:
        """Return the states matched by a pattern, in order."""
        regex = self.compile(pattern)
        return [state for state in states if regex.fullmatch(state)]

    def matches_any(self, states: Iterable[str], pattern: str) -> bool:
        """Check whether at least one state matches the pattern."""
        regex = self.compile(pattern)
        return any(regex.fullmatch(state) for state in states)

    def exclude(self, states: Iterable[str], patterns: Iterable[str]) -> list[str]:
        """Return the states matched by none of the patterns."""
        predicate = self.build_filter(list(patterns))
        return [state for state in states if not predicate(state)]


default_matcher = StatePatternMatcher()
