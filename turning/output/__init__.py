"""Formatting of results for the command line."""

from .formatter import format_search_result, format_validation_result

__all__ = [
    "format_search_result",
    "format_validation_result",
]
