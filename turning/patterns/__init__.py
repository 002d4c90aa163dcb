"""Glob-like state pattern matching."""

from .matcher import StatePatternMatcher, default_matcher

__all__ = [
    "StatePatternMatcher",
    "default_matcher",
]
