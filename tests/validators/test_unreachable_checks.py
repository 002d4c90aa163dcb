"""Tests for reachability validators."""

from turning.nodes import TurnNode
from turning.search import SearchResult
from turning.validators import Severity, check_reachability


def make_result(states=(), nodes=()):
    return SearchResult(reached_states=set(states), reached_nodes=set(nodes))


class TestCheckReachability:
    def test_everything_reached(self):
        turn = TurnNode(["a"]).to(["b"])

        result = check_reachability(["a", "b"], [], [turn], make_result(["a", "b"], [turn]))

        assert result.is_valid
        assert result.issues == []

    def test_unreached_state(self):
        result = check_reachability(["a", "b"], [], [], make_result(["a"]))

        assert [issue.code for issue in result.errors] == ["UNREACHABLE_STATE"]
        assert result.errors[0].state == "b"

    def test_unreached_transition(self):
        turn = TurnNode(["x"]).to(["y"]).alias("never")

        result = check_reachability([], [], [turn], make_result())

        assert result.errors[0].code == "UNREACHABLE_TRANSITION"
        assert result.errors[0].node == "never"
        assert result.errors[0].message == 'Transition "never" is unreachable'

    def test_allow_unreachable_downgrades_to_warnings(self):
        turn = TurnNode(["x"]).to(["y"])

        result = check_reachability(["a", "b"], [], [turn], make_result(["a"]), True)

        assert result.is_valid
        assert {issue.severity for issue in result.issues} == {Severity.WARNING}
        assert len(result.warnings) == 2

    def test_necessary_states_stay_errors(self):
        result = check_reachability(["a", "b", "c"], ["b"], [], make_result(["a"]), True)

        assert [issue.state for issue in result.errors] == ["b"]
        assert [issue.state for issue in result.warnings] == ["c"]
