"""Tests for building suites from model files."""

from turning.nodes import NodeKind
from turning.schema import build_suite, parse_model_from_string


class TestBuildSuite:
    def test_promise_suite(self, promise_model_yaml):
        suite = build_suite(parse_model_from_string(promise_model_yaml))

        assert list(suite.define_nodes) == ["pending", "fulfilled", "rejected"]
        assert suite.initialize_nodes[0].description == "Initialize [pending] by creating a promise"
        assert [node.alias_name for node in suite.transition_nodes] == ["resolve", "reject"]
        assert suite.cases == {"resolve-once": ["create", "resolve"]}

    def test_node_settings(self):
        suite = build_suite(parse_model_from_string("""
states:
  - a
  - name: b
    only: true
    necessary: true
initialize:
  - states: [a]
    depth: 2
    block: [back]
transitions:
  - spawn: [a]
    to: [b]
    alias: back
    manual: true
    only: true
    pattern: false
"""))

        define = suite.define_nodes["b"]
        assert define.is_only and define.is_necessary

        initialize = suite.initialize_nodes[0]
        assert initialize.depth_limit == 2
        assert initialize.blocked_aliases == ("back",)

        spawn = suite.transition_nodes[0]
        assert spawn.kind is NodeKind.SPAWN
        assert spawn.is_manual and spawn.is_only
        assert spawn.pattern_name is False

    def test_patterns(self):
        suite = build_suite(parse_model_from_string("""
states: [a, b, locked]
patterns:
  default: ["!locked"]
  unlocked-b: [b]
transitions:
  - turn: [a]
    to: [b]
    pattern: default
  - turn: [b]
    to: [a]
    pattern: unlocked-b
"""))

        assert set(suite.match_options_map) == {None, "unlocked-b"}
        assert suite.match_options_map[None].negative_patterns == ("locked",)
        assert [node.pattern_name for node in suite.transition_nodes] == [None, "unlocked-b"]

    def test_search_built_suite(self, promise_model_yaml):
        suite = build_suite(parse_model_from_string(promise_model_yaml))

        result = suite.search(min_transition_search_count=1, random_seed="seed")

        assert len(result.path_initializes) == 2
        assert result.path_initializes[0].turn.case_names == ["resolve-once"]
