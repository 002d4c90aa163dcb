"""Tests for the validation runner."""

from turning import Turning
from turning.validators import run_validators


class TestRunValidators:
    def test_valid_suite(self, promise_suite):
        result = run_validators(promise_suite)

        assert result.is_valid
        assert not result.has_warnings

    def test_declaration_errors_skip_search(self):
        turning = Turning()
        turning.initialize(["ghost"])

        result = run_validators(turning)

        assert [issue.code for issue in result.issues] == ["UNDEFINED_STATE"]
        assert not turning.initialize_nodes[0].frozen

    def test_unreachable_state(self, promise_suite):
        promise_suite.define("cancelled")

        result = run_validators(promise_suite)

        assert [issue.code for issue in result.errors] == ["UNREACHABLE_STATE"]

    def test_allow_unreachable(self, promise_suite):
        promise_suite.define("cancelled")

        result = run_validators(promise_suite, allow_unreachable=True)

        assert result.is_valid
        assert [issue.code for issue in result.warnings] == ["UNREACHABLE_STATE"]

    def test_invalid_case(self, promise_suite):
        promise_suite.case("broken", ["create", "resolve", "reject"])

        result = run_validators(promise_suite)

        assert [issue.code for issue in result.errors] == ["INVALID_CASE"]
        assert "is not available on states combination" in result.errors[0].message
