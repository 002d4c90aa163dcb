"""Tests for the path search."""

import random

import pytest

from turning.graph import CombinationGraph, build_combination_graph, head, tail
from turning.nodes import DefineNode, InitializeNode, TurnNode
from turning.search import (
    PathStep,
    generate_paths,
    path_signature,
    search,
    sort_and_dedupe,
)


def run_search(initialize_nodes, transition_nodes, states=(), min_count=1, seed="seed"):
    define_nodes = {state: DefineNode(state) for state in states}
    return search(
        initialize_nodes,
        transition_nodes,
        define_nodes,
        {},
        [],
        min_count,
        seed,
    )


def signatures(result):
    return [path_signature(path) for path in result.paths]


class TestCoverage:
    def test_every_transition_is_exercised(self):
        initialize = InitializeNode(["a"])
        transitions = [
            TurnNode(["a"]).to(["a"]),
            TurnNode(["a"]).to(["b"]),
            TurnNode(["a"]).to(["c"]),
            TurnNode(["a"]).to(["b", "c"]),
            TurnNode(["b", "c"]).to(["d"]),
        ]

        result = run_search([initialize], transitions, ["a", "b", "c", "d"])

        used = {step.node for path in result.paths for step in path}
        assert set(transitions) <= used
        assert set(transitions) <= result.reached_nodes
        assert result.reached_states == {"a", "b", "c", "d"}

    def test_branches_become_separate_paths(self):
        initialize = InitializeNode(["pending"]).depth(1)
        fulfill = TurnNode(["pending"]).to(["fulfilled"])
        reject = TurnNode(["pending"]).to(["rejected"])

        result = run_search([initialize], [fulfill, reject])

        assert signatures(result) == [
            (initialize.id, fulfill.id),
            (initialize.id, reject.id),
        ]
        assert len(result.path_initializes) == 2

    def test_steps_carry_states(self):
        initialize = InitializeNode(["a"])
        turn = TurnNode(["a"]).to(["b"])

        result = run_search([initialize], [turn])

        assert result.paths == [
            (PathStep(initialize, ("a",)), PathStep(turn, ("b",)))
        ]

    def test_unreached_nodes_are_not_reported_reached(self):
        initialize = InitializeNode(["a"])
        orphan = TurnNode(["x"]).to(["y"])

        result = run_search([initialize], [orphan])

        assert orphan not in result.reached_nodes
        assert result.reached_states == {"a"}

    def test_same_seed_gives_same_paths(self):
        initialize = InitializeNode(["a"])
        transitions = [
            TurnNode(["a"]).to(["b"]),
            TurnNode(["a"]).to(["b"]),
            TurnNode(["b"]).to(["a"]),
        ]

        first = run_search([initialize], transitions, min_count=3, seed=42)
        second = run_search([initialize], transitions, min_count=3, seed=42)

        assert signatures(first) == signatures(second)


class TestGeneratePaths:
    def test_reaches_min_count_on_every_edge(self):
        initialize = InitializeNode(["a"])
        transitions = [
            TurnNode(["a"]).to(["b"]),
            TurnNode(["a"]).to(["b"]),
            TurnNode(["b"]).to(["c"]),
        ]
        graph = build_combination_graph([initialize], transitions, {})

        generate_paths(graph, 3, random.Random("seed"))

        for _, _, counts in graph.iter_counted_edges():
            assert min(counts.values()) >= 3

    def test_blocks_unroutable_edges(self):
        initialize = InitializeNode(["a"])
        stray = TurnNode(["x"]).to(["a"])

        graph = CombinationGraph()
        graph.add_combination("a", ["a"])
        graph.add_combination("x", ["x"])
        graph.add_root("a", initialize)
        graph.add_transition("x", "a", stray)

        paths = generate_paths(graph, 1, random.Random("seed"))

        assert graph.blocked_edges == [(tail("x"), head("a"))]
        assert [path_signature(path) for path in paths] == [(initialize.id,)]


class TestSortAndDedupe:
    def make_paths(self, *signatures):
        nodes = {}
        paths = []
        for signature in signatures:
            path = []
            for name in signature:
                node = nodes.setdefault(name, TurnNode([name]))
                path.append(PathStep(node, (name,)))
            paths.append(tuple(path))
        return paths, nodes

    def test_drops_prefixes_and_duplicates(self):
        paths, nodes = self.make_paths("ab", "a", "abc", "ad", "ab")

        kept = sort_and_dedupe(paths)

        assert [[step.node for step in path] for path in kept] == [
            [nodes["a"], nodes["b"], nodes["c"]],
            [nodes["a"], nodes["d"]],
        ]

    def test_is_idempotent(self):
        paths, _ = self.make_paths("ab", "a", "ba", "b", "abc", "ac")

        once = sort_and_dedupe(paths)

        assert sort_and_dedupe(once) == once
        for path in once:
            for other in once:
                if other is not path:
                    assert path_signature(other)[: len(path)] != path_signature(path)


class TestFocus:
    def test_only_state(self):
        initialize = InitializeNode(["pending"])
        fulfill = TurnNode(["pending"]).to(["fulfilled"])
        reject = TurnNode(["pending"]).to(["rejected"])
        define_nodes = {
            "pending": DefineNode("pending"),
            "fulfilled": DefineNode("fulfilled"),
            "rejected": DefineNode("rejected").only(),
        }

        result = search([initialize], [fulfill, reject], define_nodes, {}, [], 1, "seed")

        assert [path_signature(path) for path in result.paths] == [
            (initialize.id, reject.id)
        ]
        # Reachability still looks at every searched path
        assert fulfill in result.reached_nodes

    def test_only_node(self):
        initialize = InitializeNode(["pending"])
        fulfill = TurnNode(["pending"]).to(["fulfilled"]).only()
        reject = TurnNode(["pending"]).to(["rejected"])

        result = run_search([initialize], [fulfill, reject])

        assert signatures(result) == [(initialize.id, fulfill.id)]

    @pytest.mark.parametrize("min_count", [1, 2])
    def test_without_only_keeps_everything(self, min_count):
        initialize = InitializeNode(["pending"])
        fulfill = TurnNode(["pending"]).to(["fulfilled"])
        reject = TurnNode(["pending"]).to(["rejected"])

        result = run_search([initialize], [fulfill, reject], min_count=min_count)

        assert signatures(result) == [
            (initialize.id, fulfill.id),
            (initialize.id, reject.id),
        ]
