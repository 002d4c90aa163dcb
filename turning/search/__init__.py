"""Path search: coverage of the combination graph and the test case forest."""

from .assembler import assemble_paths
from .engine import focus_paths, generate_paths, search, sort_and_dedupe
from .manual import build_manual_cases, realize_manual_case
from .models import (
    ManualTestCase,
    Path,
    PathInitialize,
    PathSpawn,
    PathStart,
    PathStep,
    PathTurn,
    PathVia,
    SearchResult,
    create_link,
    path_signature,
)

__all__ = [
    "ManualTestCase",
    "Path",
    "PathInitialize",
    "PathSpawn",
    "PathStart",
    "PathStep",
    "PathTurn",
    "PathVia",
    "SearchResult",
    "assemble_paths",
    "build_manual_cases",
    "create_link",
    "focus_paths",
    "generate_paths",
    "path_signature",
    "realize_manual_case",
    "search",
    "sort_and_dedupe",
]
