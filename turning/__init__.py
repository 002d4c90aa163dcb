"""Turning: model-based test case generation and execution."""

from .errors import (
    DeclarationError,
    SpawnContextError,
    StatePatternSyntaxError,
    TurningError,
    UnreachableError,
)
from .execution import AfterEachData, Environment, ExecutionResult
from .options import RunOptions, SearchOptions
from .patterns import StatePatternMatcher
from .search import SearchResult
from .suite import Turning

__all__ = [
    "AfterEachData",
    "DeclarationError",
    "Environment",
    "ExecutionResult",
    "RunOptions",
    "SearchOptions",
    "SearchResult",
    "SpawnContextError",
    "StatePatternMatcher",
    "StatePatternSyntaxError",
    "Turning",
    "TurningError",
    "UnreachableError",
]
