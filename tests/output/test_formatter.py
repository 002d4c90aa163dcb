"""Tests for output formatting."""

import json

from turning import Turning
from turning.output import format_search_result, format_validation_result
from turning.validators import Severity, ValidationResult


def _result_with_issues() -> ValidationResult:
    result = ValidationResult()
    result.add_error(
        "UNKNOWN_BLOCK_ALIAS",
        'Blocked alias "x" does not name any node',
        node="resolve",
        alias="x",
    )
    result.add(Severity.WARNING, "UNREACHABLE_STATE", 'State "b" is unreachable', state="b")
    return result


class TestFormatValidationResult:
    def test_text(self):
        output = format_validation_result(_result_with_issues())

        assert output.splitlines() == [
            '✘ UNKNOWN_BLOCK_ALIAS: [resolve] Blocked alias "x" does not name any node',
            '⚠ UNREACHABLE_STATE: State "b" is unreachable',
            "",
            "Validation failed: 1 error(s), 1 warning(s)",
        ]

    def test_text_without_issues(self):
        assert format_validation_result(ValidationResult()) == "Validation passed"

    def test_json(self):
        data = json.loads(format_validation_result(_result_with_issues(), "json"))

        assert data["valid"] is False
        assert data["errors"] == 1
        assert data["issues"][0] == {
            "code": "UNKNOWN_BLOCK_ALIAS",
            "severity": "error",
            "message": 'Blocked alias "x" does not name any node',
            "node": "resolve",
            "alias": "x",
        }
        assert data["issues"][1]["state"] == "b"


class TestFormatSearchResult:
    def test_text_nests_spawned_cases(self):
        turning = Turning()
        turning.define("page")
        turning.define("tab")
        turning.initialize(["page"]).by("opening")
        turning.spawn(["page"]).to(["tab"]).by("opening a tab")

        output = format_search_result(turning.search(min_transition_search_count=1))

        assert output.splitlines() == [
            "Test Case 1",
            "  Initialize [page] by opening",
            "  Test Case 1.1",
            "    Spawn [page] to [tab] by opening a tab",
            "",
            "2 test case(s)",
        ]
