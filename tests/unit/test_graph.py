"""Unit tests for the dependency graph."""

import pytest

from toyen.core.exceptions import (
    CollectedErrors,
    CycleError,
    DuplicateNameError,
    UnresolvedDependencyError,
)
from toyen.graph import DependencyGraph


@pytest.fixture
def build_graph(make_module):
    """Build an unresolved graph of alias modules from a name -> deps mapping."""

    def _build(edges):
        graph = DependencyGraph()
        for name, deps in edges.items():
            graph.add_module(make_module("alias", name, deps))
        return graph

    return _build


class TestGraphConstruction:
    """Tests for adding modules."""

    def test_duplicate_name_rejected(self, make_module):
        """Test duplicate names.

        Verifies that two modules sharing a name raise DuplicateNameError,
        regardless of their kinds.
        """
        graph = DependencyGraph()
        graph.add_module(make_module("alias", "all"))
        with pytest.raises(DuplicateNameError) as exc_info:
            graph.add_module(make_module("clean", "all"))
        assert exc_info.value.name == "all"

    def test_modules_keep_insertion_order(self, build_graph):
        graph = build_graph({"c": [], "a": [], "b": []})
        assert [m.name for m in graph.modules()] == ["c", "a", "b"]
        assert len(graph) == 3
        assert "a" in graph


class TestResolve:
    """Tests for dependency resolution."""

    def test_missing_dependencies_all_reported(self, build_graph):
        """Test unresolved dependencies.

        Verifies that every missing name is reported, not just the first.
        """
        graph = build_graph({"a": ["nope"], "b": ["a", "gone"]})
        with pytest.raises(CollectedErrors) as exc_info:
            graph.resolve()

        errors = exc_info.value.errors
        assert all(isinstance(e, UnresolvedDependencyError) for e in errors)
        assert [(e.from_module, e.missing) for e in errors] == [("a", "nope"), ("b", "gone")]

    def test_two_node_cycle(self, build_graph):
        """Test cycle detection.

        Verifies that A -> B -> A is rejected with a CycleError naming the
        modules in the cycle.
        """
        graph = build_graph({"a": ["b"], "b": ["a"]})
        with pytest.raises(CollectedErrors) as exc_info:
            graph.resolve()

        cycles = [e for e in exc_info.value if isinstance(e, CycleError)]
        assert len(cycles) == 1
        assert cycles[0].cycle == ["a", "b", "a"]
        assert "a -> b -> a" in str(cycles[0])

    def test_self_dependency_is_a_cycle(self, build_graph):
        graph = build_graph({"a": ["a"]})
        with pytest.raises(CollectedErrors) as exc_info:
            graph.resolve()
        assert exc_info.value.errors[0].cycle == ["a", "a"]

    def test_missing_and_cycle_reported_together(self, build_graph):
        graph = build_graph({"a": ["b", "missing"], "b": ["c"], "c": ["a"]})
        with pytest.raises(CollectedErrors) as exc_info:
            graph.resolve()

        kinds = sorted(type(e).__name__ for e in exc_info.value)
        assert kinds == ["CycleError", "UnresolvedDependencyError"]

    def test_diamond_is_not_a_cycle(self, build_graph):
        graph = build_graph({"d": [], "b": ["d"], "c": ["d"], "a": ["b", "c"]})
        graph.resolve()

    def test_queries_require_resolution(self, build_graph):
        graph = build_graph({"a": []})
        with pytest.raises(RuntimeError):
            graph.direct_dependency_targets("a")


class TestQueries:
    """Tests for direct and transitive dependency queries."""

    def test_direct_targets_in_declaration_order(self, build_graph):
        """Test direct dependency ordering.

        Verifies that direct dependency targets come back in the order the
        module declared them, not in graph insertion order.
        """
        graph = build_graph({"x": [], "y": [], "z": [], "top": ["z", "x", "y"]})
        graph.resolve()
        assert graph.direct_dependency_targets("top") == ["z", "x", "y"]

    def test_direct_targets_deduplicated(self, build_graph):
        graph = build_graph({"x": [], "top": ["x", "x"]})
        graph.resolve()
        assert graph.direct_dependency_targets("top") == ["x"]

    def test_direct_targets_use_compiled_name(self, build_graph):
        graph = build_graph({"x": [], "top": ["x"]})
        graph.resolve()
        graph.get("x").compiled_target_name = "x_stamp"
        assert graph.direct_dependency_targets(graph.get("top")) == ["x_stamp"]

    def test_transitive_targets_depth_first(self, build_graph):
        """Test transitive closure ordering.

        Verifies depth-first, first-discovery order with every module
        visited once, even when reachable along several paths.
        """
        graph = build_graph(
            {
                "d": [],
                "e": [],
                "b": ["d", "e"],
                "c": ["d"],
                "a": ["b", "c"],
            }
        )
        graph.resolve()
        assert graph.transitive_dependency_targets("a") == ["b", "d", "e", "c"]
        assert graph.transitive_dependency_targets("c") == ["d"]
        assert graph.transitive_dependency_targets("d") == []

    def test_queries_are_repeatable(self, build_graph):
        graph = build_graph({"b": [], "c": [], "a": ["c", "b"]})
        graph.resolve()
        first = graph.transitive_dependency_targets("a")
        assert graph.transitive_dependency_targets("a") == first
