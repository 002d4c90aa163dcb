"""State definitions."""

from .common import FreezableNode, TestHandler
from .node_types import NodeKind


class DefineNode(FreezableNode):
    """Declares a state and, optionally, an invariant checked whenever it holds."""

    kind = NodeKind.DEFINE

    def __init__(self, state: str):
        super().__init__()
        self.state = state
        self.test_handler: TestHandler | None = None
        self.is_only = False
        self.is_necessary = False

    def test(self, handler: TestHandler) -> "DefineNode":
        self._ensure_mutable()
        self.test_handler = handler
        return self

    def only(self) -> "DefineNode":
        """Restrict generated cases to the ones reaching this state."""
        self._ensure_mutable()
        self.is_only = True
        return self

    def necessary(self) -> "DefineNode":
        """Require this state to be reached even when unreachable states are allowed."""
        self._ensure_mutable()
        self.is_necessary = True
        return self

    def __repr__(self) -> str:
        return f"<DefineNode {self.state!r}>"
