"""
Tests for edge derivation.
"""

import pytest

from forney.graph.edge import Edge, get_edges
from forney.graph.factor_graph import FactorGraph
from forney.messages import GAUSSIAN_MEAN_VARIANCE, Message
from forney.nodes import AdditionNode, EqualityNode, TerminalNode


@pytest.fixture
def eq_model():
    """T1 -- Eq -- T2, third Eq interface open."""
    g = FactorGraph("eq_model")
    t1 = TerminalNode(id="t1", graph=g)
    t2 = TerminalNode(id="t2", graph=g)
    eq = EqualityNode(id="eq", graph=g)
    g.connect(eq.interfaces[0], t1.i["out"])
    g.connect(eq.interfaces[1], t2.i["out"])
    return g, t1, t2, eq


class TestEdge:
    def test_requires_partnership(self, eq_model):
        _, t1, t2, _ = eq_model
        with pytest.raises(ValueError):
            Edge(t1.i["out"], t2.i["out"])

    def test_swap_invariance(self, eq_model):
        _, t1, _, eq = eq_model
        a = Edge(eq.interfaces[0], t1.i["out"])
        b = Edge(t1.i["out"], eq.interfaces[0])
        assert a == b
        assert hash(a) == hash(b)
        assert a.tail is b.tail and a.head is b.head

    def test_canonical_orientation(self, eq_model):
        _, t1, _, eq = eq_model
        e = Edge(t1.i["out"], eq.interfaces[0])
        # "eq" < "t1"
        assert e.tail is eq.interfaces[0]
        assert e.head is t1.i["out"]
        assert e.other(e.tail) is e.head

    def test_labels(self):
        g = FactorGraph()
        add = AdditionNode(id="add", graph=g)
        t = TerminalNode(id="t", graph=g)
        e = g.connect(add.i["out"], t.i["out"])
        assert e.label_for(add.i["out"]) == "2 out"
        assert e.label_for(t.i["out"]) == "0 out"

    def test_message_queries(self, eq_model):
        _, t1, _, eq = eq_model
        e = Edge(eq.interfaces[0], t1.i["out"])
        assert e.forward_message is None
        assert e.backward_message is None
        assert e.forward_payload_type is None

        e.head.message_payload_type = GAUSSIAN_MEAN_VARIANCE
        assert e.backward_payload_type == GAUSSIAN_MEAN_VARIANCE

        msg = Message.build(GAUSSIAN_MEAN_VARIANCE, 1.0, 2.0)
        e.tail.message = msg
        assert e.forward_message is msg
        assert e.forward_payload_type == GAUSSIAN_MEAN_VARIANCE

    def test_edges_from_different_graphs_differ(self):
        g1, g2 = FactorGraph("a"), FactorGraph("b")
        edges = []
        for g in (g1, g2):
            t1 = TerminalNode(id="x", graph=g)
            t2 = TerminalNode(id="y", graph=g)
            edges.append(g.connect(t1.i["out"], t2.i["out"]))
        assert edges[0].key == edges[1].key
        assert edges[0] != edges[1]


class TestGetEdges:
    def test_scenario_two_edges(self, eq_model):
        g, t1, t2, eq = eq_model
        edges = get_edges({t1, t2, eq})
        assert len(edges) == 2
        assert edges == g.edges()

    def test_closed_excludes_external(self, eq_model):
        _, t1, _, eq = eq_model
        edges = get_edges({t1, eq})
        assert edges == {Edge(eq.interfaces[0], t1.i["out"])}

    def test_open_includes_external(self, eq_model):
        _, t1, t2, eq = eq_model
        edges = get_edges({eq}, include_external=True)
        assert edges == {Edge(eq.interfaces[0], t1.i["out"]), Edge(eq.interfaces[1], t2.i["out"])}
        assert get_edges({eq}) == set()

    def test_single_node_without_edges(self):
        g = FactorGraph()
        eq = EqualityNode(graph=g)
        assert get_edges([eq], include_external=True) == set()

    def test_self_loop(self):
        g = FactorGraph()
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], eq.interfaces[2])
        edges = get_edges([eq])
        assert len(edges) == 1
        (e,) = edges
        assert e.tail is eq.interfaces[0]
        assert e.head is eq.interfaces[2]

    def test_independent_of_tail_head_labelling(self):
        def build(swap):
            g = FactorGraph()
            a = AdditionNode(id="a", graph=g)
            b = EqualityNode(id="b", graph=g)
            pairs = [(a.i["out"], b.interfaces[0]), (b.interfaces[1], a.i["in1"])]
            for x, y in pairs:
                if swap:
                    x, y = y, x
                g.connect(x, y)
            return {e.key for e in g.edges()}

        assert build(False) == build(True)
