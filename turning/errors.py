"""Exceptions raised by Turning."""


class TurningError(Exception):
    """Base class for Turning errors."""


class DeclarationError(TurningError):
    """Raised when declared states, transitions or cases are inconsistent."""

    def __init__(self, message: str, issues: list | None = None):
        self.issues = issues or []
        super().__init__(message)


class UnreachableError(TurningError):
    """Raised when declared states or transitions are never reached."""

    def __init__(
        self,
        message: str,
        states: list[str] | None = None,
        transitions: list[str] | None = None,
    ):
        self.states = states or []
        self.transitions = transitions or []
        super().__init__(message)


class SpawnContextError(TurningError):
    """Raised when a spawn handler hands back its parent context."""


class StatePatternSyntaxError(SyntaxError):
    """Raised when a state pattern cannot be parsed."""

    def __init__(self, message: str, pattern: str):
        self.pattern = pattern
        super().__init__(message)
