"""Integration tests for the command line."""

import json

import pytest
from click.testing import CliRunner

from turning.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestValidateCommand:
    def test_valid_model(self, runner, write_model, promise_model_yaml):
        result = runner.invoke(main, ["validate", str(write_model(promise_model_yaml))])

        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_declaration_errors(self, runner, write_model):
        path = write_model("states: [a]\ninitialize:\n  - states: [ghost]\n")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "UNDEFINED_STATE" in result.output

    def test_unreachable_warning_and_strict(self, runner, write_model, promise_model_yaml):
        path = write_model(promise_model_yaml.replace("  - rejected", "  - rejected\n  - cancelled"))

        lenient = runner.invoke(main, ["validate", str(path), "--allow-unreachable"])
        strict = runner.invoke(main, ["validate", str(path), "--allow-unreachable", "--strict"])
        failing = runner.invoke(main, ["validate", str(path)])

        assert lenient.exit_code == 0
        assert "UNREACHABLE_STATE" in lenient.output
        assert strict.exit_code == 1
        assert failing.exit_code == 1

    def test_json_output(self, runner, write_model, promise_model_yaml):
        result = runner.invoke(
            main, ["validate", str(write_model(promise_model_yaml)), "--format", "json"]
        )

        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["issues"] == []

    def test_schema_error(self, runner, write_model):
        result = runner.invoke(main, ["validate", str(write_model("transitions:\n  - to: [a]\n"))])

        assert result.exit_code == 2
        assert "Schema validation error" in result.output

    def test_missing_file(self, runner):
        result = runner.invoke(main, ["validate", "nonexistent.yaml"])

        assert result.exit_code == 2


class TestSearchCommand:
    def test_text_output(self, runner, write_model, promise_model_yaml):
        result = runner.invoke(
            main, ["search", str(write_model(promise_model_yaml)), "--min-count", "1"]
        )

        assert result.exit_code == 0
        assert "Test Case 1\n" in result.output
        assert "Turn [pending] to [fulfilled] by resolving <resolve-once>" in result.output
        assert "2 test case(s)" in result.output

    def test_json_output(self, runner, write_model, promise_model_yaml):
        result = runner.invoke(
            main,
            [
                "search",
                str(write_model(promise_model_yaml)),
                "--min-count",
                "1",
                "--seed",
                "fixed",
                "--format",
                "json",
            ],
        )

        data = json.loads(result.output)
        assert data["total_cases"] == 2
        assert [case["id"] for case in data["cases"]] == ["1", "2"]
        assert data["cases"][1]["steps"][1] == {
            "name": "Turn [pending] to [rejected] by rejecting",
            "states": ["rejected"],
        }

    def test_unreachable_fails(self, runner, write_model, promise_model_yaml):
        path = write_model(promise_model_yaml.replace("  - rejected", "  - rejected\n  - cancelled"))

        result = runner.invoke(main, ["search", str(path), "--min-count", "1"])
        allowed = runner.invoke(
            main, ["search", str(path), "--min-count", "1", "--allow-unreachable"]
        )

        assert result.exit_code == 1
        assert "Unreachable states" in result.output
        assert allowed.exit_code == 0

    def test_invalid_min_count(self, runner, write_model, promise_model_yaml):
        result = runner.invoke(
            main, ["search", str(write_model(promise_model_yaml)), "--min-count", "0"]
        )

        assert result.exit_code == 2
