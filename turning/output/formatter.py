"""Output formatting for validation results and searched test cases."""

import json
from typing import Literal

from ..search import PathStart, SearchResult
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Render validation issues, errors first, followed by a verdict line.

    JSON output flattens each issue's details into its object.
    """
    if format == "json":
        return _format_validation_json(result)
    return _format_validation_text(result)


def _format_validation_text(result: ValidationResult) -> str:
    lines = [_format_issue_text(issue) for issue in [*result.errors, *result.warnings]]
    if lines:
        lines.append("")

    counts = f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    if not result.is_valid:
        lines.append(f"Validation failed: {counts}")
    elif result.has_warnings:
        lines.append(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        lines.append("Validation passed")

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    symbol = "✘" if issue.severity is Severity.ERROR else "⚠"
    location = f"[{issue.node}] " if issue.node else ""
    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_validation_json(result: ValidationResult) -> str:
    def describe(issue: ValidationIssue) -> dict:
        data = {"code": issue.code, "severity": issue.severity.value, "message": issue.message}
        for key in ("node", "state"):
            if getattr(issue, key) is not None:
                data[key] = getattr(issue, key)
        data.update(issue.details)
        return data

    return json.dumps(
        {
            "valid": result.is_valid,
            "errors": len(result.errors),
            "warnings": len(result.warnings),
            "issues": [describe(issue) for issue in result.issues],
        },
        indent=2,
    )


def format_search_result(
    result: SearchResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the searched test cases, numbered the way they run.

    Args:
        result: The search result.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    cases = _collect_cases(result.path_initializes, None)

    if format == "json":
        data = {
            "total_cases": result.total_cases,
            "reached_states": sorted(result.reached_states),
            "cases": cases,
        }
        return json.dumps(data, indent=2)

    lines: list[str] = []
    _format_cases_text(cases, 0, lines)
    lines.append("")
    lines.append(f"{result.total_cases} test case(s)")
    return "\n".join(lines)


def _collect_cases(starts: list[PathStart] | None, parent_id: str | None) -> list[dict]:
    cases = []

    for index, start in enumerate(starts or (), 1):
        test_case_id = f"{parent_id}.{index}" if parent_id else str(index)
        turns, spawns = start.split()

        cases.append({
            "id": test_case_id,
            "steps": [
                {"name": link.name, "states": list(link.states)}
                for link in [start, *turns]
            ],
            "cases": _collect_cases(spawns, test_case_id),
        })

    return cases


def _format_cases_text(cases: list[dict], depth: int, lines: list[str]) -> None:
    indent = "  " * depth

    for case in cases:
        lines.append(f"{indent}Test Case {case['id']}")
        for step in case["steps"]:
            lines.append(f"{indent}  {step['name']}")
        _format_cases_text(case["cases"], depth + 1, lines)
