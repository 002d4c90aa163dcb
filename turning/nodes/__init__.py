"""Declared nodes: state definitions, initializers and transitions."""

from .common import PathNode, TestHandler, generate_node_id
from .define import DefineNode
from .initialize import InitializeHandler, InitializeNode
from .node_types import NodeKind
from .transition import (
    MatchSpec,
    SpawnNode,
    TransitionHandler,
    TransitionMatchOptions,
    TransitionNode,
    TurnNode,
    build_match_options,
)

__all__ = [
    "DefineNode",
    "InitializeHandler",
    "InitializeNode",
    "MatchSpec",
    "NodeKind",
    "PathNode",
    "SpawnNode",
    "TestHandler",
    "TransitionHandler",
    "TransitionMatchOptions",
    "TransitionNode",
    "TurnNode",
    "build_match_options",
    "generate_node_id",
]
