"""Tests for partial order strategies, the node comparator and sorting."""

import pytest

from layered_layout import (
    LaneStrategy,
    LayeredGraph,
    MissingModelOrderError,
    ModelOrderStrategy,
    Node,
    NodeKind,
    OrderComparator,
    OrderConstraintTracker,
    UnresolvedLaneError,
    insertion_sort,
)
from layered_layout.ordering import comparison_sort


def create_lane_graph():
    """Create a graph with real nodes and dummies of every kind."""
    #   layer 0:  0 (lane 0)   1 (lane 2)
    #   layer 1:  2 (long)     3 (label)   4 (north/south port)
    #   layer 2:  5 (lane 1)   6 (lane 2)
    #
    # 0 -> 2 -> 5 is a long edge from lane 0 to lane 1
    # 1 -> 3 -> 6 is a labeled edge from lane 2
    # 0 -> 4 attaches a port dummy to node 0
    nodes = [
        Node(lane=0),
        Node(lane=2),
        Node(kind=NodeKind.LONG_EDGE),
        Node(kind=NodeKind.LABEL),
        Node(kind=NodeKind.NORTH_SOUTH_PORT),
        Node(lane=1),
        Node(lane=2),
    ]
    layers = [[0, 1], [2, 3, 4], [5, 6]]
    edges = [(0, 2), (2, 5), (1, 3), (3, 6), (0, 4)]
    return LayeredGraph(nodes, layers, edges)


def create_model_order_graph():
    """Create one layer of real nodes, some without model order, and a dummy."""
    nodes = [
        Node(model_order=2),
        Node(model_order=1),
        Node(),
        Node(kind=NodeKind.LONG_EDGE, model_order=0),
    ]
    return LayeredGraph(nodes, [[0, 1, 2, 3]])


class TestModelOrderStrategy:
    """Tests for the model order partial order."""

    def test_constrains_real_nodes_with_order(self):
        """Only pairs of real nodes carrying a model order are constrained."""
        strategy = ModelOrderStrategy(create_model_order_graph())
        assert strategy.constrains(0, 1)
        assert not strategy.constrains(0, 2)
        assert not strategy.constrains(1, 3)

    def test_compare(self):
        """Lower model order comes first."""
        strategy = ModelOrderStrategy(create_model_order_graph())
        assert strategy.compare(0, 1) == 1
        assert strategy.compare(1, 0) == -1
        assert strategy.compare(0, 0) == 0

    def test_model_order_of(self):
        """Model order is read from the node."""
        strategy = ModelOrderStrategy(create_model_order_graph())
        assert strategy.model_order_of(1) == 1

    def test_missing_model_order_raises(self):
        """Nodes without a model order raise."""
        strategy = ModelOrderStrategy(create_model_order_graph())
        with pytest.raises(MissingModelOrderError):
            strategy.model_order_of(2)

    def test_dummy_model_order_ignored(self):
        """Dummies never have a model order, even if one is set."""
        strategy = ModelOrderStrategy(create_model_order_graph())
        with pytest.raises(MissingModelOrderError):
            strategy.model_order_of(3)


class TestLaneStrategy:
    """Tests for the lane partial order."""

    def test_real_node_lane(self):
        """Real nodes use their own lane."""
        strategy = LaneStrategy(create_lane_graph())
        assert strategy.lane_of(0) == 0
        assert strategy.lane_of(6) == 2

    def test_long_edge_uses_larger_endpoint_lane(self):
        """A long-edge dummy takes the larger lane of its endpoints."""
        strategy = LaneStrategy(create_lane_graph())
        assert strategy.lane_of(2) == 1

    def test_label_uses_source_lane(self):
        """A label dummy takes the lane of its source."""
        strategy = LaneStrategy(create_lane_graph())
        assert strategy.lane_of(3) == 2

    def test_port_dummy_uses_source_lane(self):
        """Other dummies take the lane of their source."""
        strategy = LaneStrategy(create_lane_graph())
        assert strategy.lane_of(4) == 0

    def test_every_pair_constrained(self):
        """Lanes constrain every pair, including dummies."""
        strategy = LaneStrategy(create_lane_graph())
        assert strategy.constrains(2, 3)
        assert strategy.compare(2, 3) == -1
        assert strategy.compare(3, 1) == 0

    def test_missing_lane_raises(self):
        """A real node without a lane cannot be compared."""
        graph = LayeredGraph([Node(), Node(lane=0)], [[0, 1]])
        with pytest.raises(UnresolvedLaneError, match="has no lane"):
            LaneStrategy(graph).lane_of(0)

    def test_dangling_dummy_raises(self):
        """A dummy with no real source cannot be compared."""
        graph = LayeredGraph([Node(kind=NodeKind.LABEL), Node(lane=0)], [[0], [1]], [(0, 1)])
        with pytest.raises(UnresolvedLaneError, match="does not end in a real node"):
            LaneStrategy(graph).lane_of(0)


class TestComparatorTiers:
    """Tests for the precedence of comparator tiers."""

    def test_tracker_wins_over_barycenters(self):
        """A recorded relation is returned even if barycenters disagree."""
        tracker = OrderConstraintTracker()
        tracker.record(0, 1)
        compare = OrderComparator(tracker, {0: 0.0, 1: 5.0})
        assert compare(0, 1) == 1
        assert compare(1, 0) == -1

    def test_tracker_wins_over_strategy(self):
        """A recorded relation is returned even if the strategy disagrees."""
        graph = create_model_order_graph()
        tracker = OrderConstraintTracker()
        tracker.record(1, 0)
        compare = OrderComparator(tracker, {}, ModelOrderStrategy(graph))
        assert compare(0, 1) == -1

    def test_strategy_wins_over_barycenters(self):
        """The partial order is consulted before barycenters and recorded."""
        graph = create_model_order_graph()
        tracker = OrderConstraintTracker()
        compare = OrderComparator(tracker, {0: 0.0, 1: 9.0}, ModelOrderStrategy(graph))
        assert compare(0, 1) == 1
        assert tracker.relation_of(0, 1) == 1

    def test_equal_strategy_falls_through(self):
        """Pairs the strategy places together are compared by barycenter."""
        graph = LayeredGraph([Node(lane=1), Node(lane=1)], [[0, 1]])
        tracker = OrderConstraintTracker()
        compare = OrderComparator(tracker, {0: 3.0, 1: 2.0}, LaneStrategy(graph))
        assert compare(0, 1) == 1
        assert tracker.relation_of(0, 1) == 1

    def test_unconstrained_pair_uses_barycenters(self):
        """Pairs the strategy does not constrain use barycenters."""
        graph = create_model_order_graph()
        compare = OrderComparator(OrderConstraintTracker(), {0: 1.0, 2: 4.0}, ModelOrderStrategy(graph))
        assert compare(0, 2) == -1


class TestBarycenterTier:
    """Tests for the barycenter comparison."""

    def test_numeric_comparison_recorded(self):
        """Strict barycenter answers are recorded."""
        tracker = OrderConstraintTracker()
        compare = OrderComparator(tracker, {"a": 1.0, "b": 2.0})
        assert compare("a", "b") == -1
        assert tracker.relation_of("b", "a") == 1

    def test_value_before_missing(self):
        """A node with a value sorts before one without."""
        compare = OrderComparator(OrderConstraintTracker(), {"a": None, "b": 7.0})
        assert compare("a", "b") == 1
        assert compare("b", "a") == -1

    def test_both_missing_are_equal(self):
        """Two missing values are equal and nothing is recorded."""
        tracker = OrderConstraintTracker()
        compare = OrderComparator(tracker, {"a": None, "b": None})
        assert compare("a", "b") == 0
        assert len(tracker) == 0

    def test_equal_values_not_recorded(self):
        """Equal values compare equal and nothing is recorded."""
        tracker = OrderConstraintTracker()
        compare = OrderComparator(tracker, {"a": 1.5, "b": 1.5})
        assert compare("a", "b") == 0
        assert tracker.relation_of("a", "b") == 0


class TestInsertionSort:
    """Tests for insertion_sort()."""

    def test_sorts(self):
        """Plain integers are sorted ascending."""
        values = [5, 2, 9, 1, 5, 6]
        insertion_sort(values, lambda a, b: (a > b) - (a < b))
        assert values == [1, 2, 5, 5, 6, 9]

    def test_stable(self):
        """Equal elements keep their input order."""
        items = [("b", 1), ("a", 0), ("c", 1), ("d", 0)]
        insertion_sort(items, lambda a, b: a[1] - b[1])
        assert items == [("a", 0), ("d", 0), ("b", 1), ("c", 1)]

    def test_empty_and_single(self):
        """Empty and single-element sequences are left alone."""
        empty: list = []
        insertion_sort(empty, lambda a, b: 0)
        single = [3]
        insertion_sort(single, lambda a, b: 1)
        assert empty == []
        assert single == [3]

    def test_comparator_with_history(self):
        """Sorting with a recording comparator never raises a contradiction."""
        barycenters = {n: float((n * 7) % 5) for n in range(10)}
        layer = list(range(10))
        insertion_sort(layer, OrderComparator(OrderConstraintTracker(), barycenters))
        assert [barycenters[n] for n in layer] == sorted(barycenters.values())

    def test_comparison_sort(self):
        """comparison_sort matches insertion_sort for total preorders."""
        key = {n: n % 3 for n in range(9)}
        a = list(range(9))
        b = list(range(9))
        insertion_sort(a, lambda x, y: key[x] - key[y])
        comparison_sort(b, lambda x, y: key[x] - key[y])
        assert a == b
