"""Initialize nodes: the roots of every path."""

from typing import Any, Awaitable, Callable

from .common import PathNode
from .node_types import NodeKind

InitializeHandler = Callable[[Any], Awaitable[Any] | Any]


class InitializeNode(PathNode):
    """Creates the first context of a path from the environment."""

    kind = NodeKind.INITIALIZE

    def __init__(self, states: list[str]):
        super().__init__()
        self.states: tuple[str, ...] = tuple(dict.fromkeys(states))
        self.handler: InitializeHandler | None = None

    @property
    def description(self) -> str:
        return self._describe(f"Initialize [{','.join(self.states)}]")
