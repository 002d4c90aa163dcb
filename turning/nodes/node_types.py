"""Node kind definitions."""

from enum import Enum


class NodeKind(str, Enum):
    """Kinds of declared nodes."""

    DEFINE = "define"
    INITIALIZE = "initialize"

    # Transitions
    TURN = "turn"  # Moves the current context along the same path
    SPAWN = "spawn"  # Forks a child context from the current one

    @property
    def is_transition(self) -> bool:
        return self in (NodeKind.TURN, NodeKind.SPAWN)
