"""Execution of searched test cases."""

from .driver import ExecutionDriver, call_handler, is_selected
from .environment import Environment
from .models import AfterEachData, ExecutionResult
from .reporter import Reporter, indent

__all__ = [
    "AfterEachData",
    "Environment",
    "ExecutionDriver",
    "ExecutionResult",
    "Reporter",
    "call_handler",
    "indent",
    "is_selected",
]
