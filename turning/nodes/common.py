"""Shared pieces of initialize and transition nodes."""

import itertools
from typing import Any, Awaitable, Callable

from ..errors import DeclarationError
from .node_types import NodeKind

TestHandler = Callable[[Any], Awaitable[None] | None]

_node_ids = itertools.count(1)


def generate_node_id() -> int:
    """Return a process-unique, increasing node id."""
    return next(_node_ids)


class FreezableNode:
    """A node whose declaration can be locked once searching starts."""

    kind: NodeKind

    def __init__(self):
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise DeclarationError(
                f"{self.kind.value.capitalize()} node cannot be modified after search has started"
            )


class PathNode(FreezableNode):
    """A node that can appear on a path: an initialize node or a transition.

    Setters return the node itself so declarations can be chained.
    """

    def __init__(self):
        super().__init__()
        self.id = generate_node_id()
        self.alias_name: str | None = None
        self.by_description: str | None = None
        self.handler: Callable[..., Any] | None = None
        self.test_handler: TestHandler | None = None
        self.depth_limit: int | None = None
        self.is_manual = False
        self.is_only = False
        self.blocked_aliases: tuple[str, ...] = ()

    @property
    def description(self) -> str:
        raise NotImplementedError

    @property
    def label(self) -> str:
        """Alias if any, description otherwise."""
        return self.alias_name or self.description

    def by(self, description: str, handler: Callable[..., Any] | None = None):
        """Attach the handler performing this node, with a description."""
        self._ensure_mutable()
        self.by_description = description
        self.handler = handler
        return self

    def test(self, handler: TestHandler):
        """Attach a handler verifying the context after this node ran."""
        self._ensure_mutable()
        self.test_handler = handler
        return self

    def alias(self, name: str):
        """Name this node so cases and block lists can refer to it."""
        self._ensure_mutable()
        self.alias_name = name
        return self

    def depth(self, depth: int):
        """Limit how many transitions the search follows after this node."""
        self._ensure_mutable()
        if depth < 0:
            raise DeclarationError(f"Depth must not be negative, got {depth}")
        self.depth_limit = depth
        return self

    def manual(self):
        """Exclude this node from automatic search; only cases use it."""
        self._ensure_mutable()
        self.is_manual = True
        return self

    def block(self, aliases: list[str]):
        """Disallow the aliased transitions on paths going through this node."""
        self._ensure_mutable()
        self.blocked_aliases = tuple(aliases)
        return self

    def only(self):
        """Restrict generated cases to the ones going through this node."""
        self._ensure_mutable()
        self.is_only = True
        return self

    def _describe(self, text: str) -> str:
        if self.by_description:
            return f"{text} by {self.by_description}"
        return text

    def __repr__(self) -> str:
        return f"<{type(self).__name__} #{self.id} {self.description!r}>"
