"""Issues found while checking a suite."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """A problem with a declaration or with the searched paths.

    ``node`` names the node or pattern at fault (alias or description),
    ``state`` the state at fault; either may be unset.
    """

    code: str
    message: str
    severity: Severity
    node: str | None = None
    state: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Issues collected by one or more checks, in the order they were found."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def _with_severity(self, severity: Severity) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity is severity]

    @property
    def errors(self) -> list[ValidationIssue]:
        return self._with_severity(Severity.ERROR)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self._with_severity(Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity is Severity.ERROR for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity is Severity.WARNING for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def add(
        self,
        severity: Severity,
        code: str,
        message: str,
        node: str | None = None,
        state: str | None = None,
        **details: Any,
    ) -> None:
        self.issues.append(ValidationIssue(code, message, severity, node, state, details))

    def add_error(self, code: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, code, message, **kwargs)

    def add_warning(self, code: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, code, message, **kwargs)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.issues.extend(other.issues)
        return self

    def error_message(self) -> str:
        """Messages of all errors, one per line, as raised by ``Turning.search``."""
        return "\n".join(issue.message for issue in self.errors)
