"""Data models for execution results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AfterEachData:
    """What happened to the test case ``after_each`` is called for.

    ``spawned`` tells whether the sub-cases ran, that is whether a failure
    happened before or after spawning.
    """

    test_case_id: str
    attempt: int
    passed: bool
    spawned: bool


@dataclass
class ExecutionResult:
    """Outcome of running a forest of test cases."""

    passed_test_case_ids: list[str] = field(default_factory=list)
    failed_test_case_ids: list[str] = field(default_factory=list)
    bailed: bool = False

    @property
    def passed(self) -> bool:
        return not self.failed_test_case_ids
