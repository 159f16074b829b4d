"""Tests for graph preprocessing utilities."""

from layered_layout import (
    Link,
    assign_layers_longest_path,
    count_crossings,
    detect_cycle,
    has_cycle,
    remove_cycles,
)


class TestCycleDetection:
    """Tests for cycle detection functions."""

    def test_detect_cycle_in_cyclic_graph(self):
        """Should detect cycle in a graph with a cycle."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 2, "target": 0},  # Back edge creating cycle
        ]
        cycle = detect_cycle(3, links)
        assert cycle is not None
        assert len(cycle) >= 2

    def test_detect_cycle_in_acyclic_graph(self):
        """Should return None for acyclic graph."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 0, "target": 2},
        ]
        cycle = detect_cycle(3, links)
        assert cycle is None

    def test_has_cycle_true(self):
        """has_cycle should return True for cyclic graph."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 0},
        ]
        assert has_cycle(2, links) is True

    def test_has_cycle_false(self):
        """has_cycle should return False for acyclic graph."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
        ]
        assert has_cycle(3, links) is False

    def test_detect_cycle_empty_graph(self):
        """Empty graph should have no cycles."""
        assert detect_cycle(0, []) is None
        assert detect_cycle(5, []) is None

    def test_detect_cycle_self_loop(self):
        """Self-loop should be detected as cycle."""
        links = [{"source": 0, "target": 0}]
        cycle = detect_cycle(1, links)
        assert cycle is not None


class TestCycleRemoval:
    """Tests for cycle removal function."""

    def test_remove_cycles_makes_acyclic(self):
        """Removing cycles should produce an acyclic graph."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 2, "target": 0},  # Creates cycle
        ]
        new_links, reversed_idx = remove_cycles(3, links)
        assert has_cycle(3, new_links) is False
        assert len(reversed_idx) >= 1

    def test_remove_cycles_preserves_acyclic(self):
        """Acyclic graph should remain unchanged."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
        ]
        new_links, reversed_idx = remove_cycles(3, links)
        assert len(reversed_idx) == 0
        assert has_cycle(3, new_links) is False

    def test_remove_cycles_bidirectional(self):
        """Should handle bidirectional edges."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 0},
        ]
        new_links, reversed_idx = remove_cycles(2, links)
        assert has_cycle(2, new_links) is False

    def test_remove_cycles_reports_back_edge(self):
        """The edge closing the cycle is the one reversed."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 2, "target": 0},
        ]
        new_links, reversed_idx = remove_cycles(3, links)
        assert reversed_idx == {2}
        assert new_links[2] == {"source": 0, "target": 2}

    def test_deep_graph_without_recursion(self):
        """Very long paths are searched iteratively."""
        n = 5000
        links = [{"source": i, "target": i + 1} for i in range(n - 1)]
        links.append({"source": n - 1, "target": 0})
        assert detect_cycle(n, links[:-1]) is None
        new_links, reversed_idx = remove_cycles(n, links)
        assert reversed_idx == {n - 1}
        assert has_cycle(n, new_links) is False


class TestLayerAssignment:
    """Tests for layer assignment."""

    def test_assign_layers_simple_chain(self):
        """Simple chain should have sequential layers."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
        ]
        layers = assign_layers_longest_path(3, links)
        assert len(layers) == 3
        assert layers[0] == [0]
        assert layers[1] == [1]
        assert layers[2] == [2]

    def test_assign_layers_fork(self):
        """Fork should put children in same layer."""
        links = [
            {"source": 0, "target": 1},
            {"source": 0, "target": 2},
        ]
        layers = assign_layers_longest_path(3, links)
        assert len(layers) == 2
        assert layers[0] == [0]
        assert set(layers[1]) == {1, 2}

    def test_assign_layers_diamond(self):
        """Diamond DAG should have correct layer assignment."""
        links = [
            {"source": 0, "target": 1},
            {"source": 0, "target": 2},
            {"source": 1, "target": 3},
            {"source": 2, "target": 3},
        ]
        layers = assign_layers_longest_path(4, links)
        assert len(layers) == 3
        assert 0 in layers[0]
        assert 3 in layers[2]

    def test_assign_layers_longest_path_wins(self):
        """A node sits below its deepest predecessor."""
        links = [
            {"source": 0, "target": 3},
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 2, "target": 3},
        ]
        assert assign_layers_longest_path(4, links) == [[0], [1], [2], [3]]

    def test_assign_layers_cycle_falls_back(self):
        """Nodes on a cycle are placed in the first layer."""
        links = [
            {"source": 0, "target": 1},
            {"source": 1, "target": 2},
            {"source": 2, "target": 1},
        ]
        assert assign_layers_longest_path(3, links) == [[0, 1, 2]]

    def test_assign_layers_empty(self):
        """Empty graph should return empty layers."""
        layers = assign_layers_longest_path(0, [])
        assert layers == []


class TestCountCrossings:
    """Tests for crossing counting."""

    def test_count_crossings_none(self):
        """Parallel edges should have no crossings."""
        layers = [[0, 1], [2, 3]]
        links = [
            {"source": 0, "target": 2},
            {"source": 1, "target": 3},
        ]
        assert count_crossings(layers, links) == 0

    def test_count_crossings_one(self):
        """Crossing edges should be counted."""
        layers = [[0, 1], [2, 3]]
        links = [
            {"source": 0, "target": 3},
            {"source": 1, "target": 2},
        ]
        assert count_crossings(layers, links) == 1

    def test_count_crossings_empty(self):
        """Empty graph should have no crossings."""
        assert count_crossings([], []) == 0
        assert count_crossings([[0, 1]], []) == 0

    def test_count_crossings_multiple_layers(self):
        """Crossings are summed over every pair of layers."""
        layers = [[0, 1], [2, 3], [4, 5]]
        links = [
            {"source": 0, "target": 3},
            {"source": 1, "target": 2},
            {"source": 2, "target": 5},
            {"source": 3, "target": 4},
        ]
        assert count_crossings(layers, links) == 2

    def test_count_crossings_shared_endpoint(self):
        """Edges sharing an endpoint do not cross."""
        layers = [[0, 1], [2, 3]]
        links = [
            {"source": 0, "target": 2},
            {"source": 0, "target": 3},
            {"source": 1, "target": 3},
        ]
        assert count_crossings(layers, links) == 0

    def test_count_crossings_complete_bipartite(self):
        """K(3,3) drawn in index order has 9 crossings."""
        layers = [[0, 1, 2], [3, 4, 5]]
        links = [{"source": s, "target": t} for s in range(3) for t in range(3, 6)]
        assert count_crossings(layers, links) == 9

    def test_count_crossings_link_objects(self):
        """Link objects are accepted as well as dicts."""
        layers = [[0, 1], [2, 3]]
        links = [Link(0, 3), Link(1, 2)]
        assert count_crossings(layers, links) == 1

    def test_count_crossings_custom_accessors(self):
        """Custom source/target accessors are honored."""
        layers = [[0, 1], [2, 3]]
        edges = [(0, 3), (1, 2)]
        count = count_crossings(
            layers, edges, get_source=lambda e: e[0], get_target=lambda e: e[1]
        )
        assert count == 1
