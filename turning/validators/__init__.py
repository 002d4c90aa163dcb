"""Validators for declarations and search coverage."""

from .base import Severity, ValidationIssue, ValidationResult
from .declarations import check_declarations
from .reachability import check_reachability
from .runner import run_validators

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_declarations",
    "check_reachability",
    "run_validators",
]
