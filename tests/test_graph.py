"""
Tests for the graph data model: registry, interfaces, nodes, graphs.
"""

import pytest

from forney.core.registry import IDRegistry
from forney.errors import GraphFrozenError, GraphInvariantError
from forney.graph.factor_graph import (
    FactorGraph,
    Subgraph,
    current_graph,
    new_graph,
    set_current_graph,
    validate_partition,
)
from forney.graph.interface import InterfaceRef
from forney.nodes import AdditionNode, EqualityNode, FactorNode, PointMassConstraint, TerminalNode


class TestIDRegistry:
    def test_generate_per_prefix(self):
        reg = IDRegistry()
        assert reg.generate("terminal") == "terminal1"
        assert reg.generate("terminal") == "terminal2"
        assert reg.generate("equality") == "equality1"

    def test_generate_skips_reserved(self):
        reg = IDRegistry()
        reg.reserve("delta1")
        assert reg.generate("delta") == "delta2"

    def test_duplicate_reservation(self):
        reg = IDRegistry()
        reg.reserve("x")
        with pytest.raises(ValueError):
            reg.reserve("x")

    def test_release(self):
        reg = IDRegistry()
        reg.reserve("x")
        reg.release("x")
        assert "x" not in reg
        reg.reserve("x")


class TestNodes:
    def test_interface_counts(self):
        g = FactorGraph()
        assert len(TerminalNode(graph=g).interfaces) == 1
        assert len(AdditionNode(graph=g).interfaces) == 3
        assert len(EqualityNode(graph=g).interfaces) == 3
        assert len(EqualityNode(5, graph=g).interfaces) == 5
        assert len(PointMassConstraint(graph=g).interfaces) == 1

    def test_named_interfaces(self):
        g = FactorGraph()
        add = AdditionNode(graph=g)
        assert add.i["in1"] is add.interfaces[0]
        assert add.i["out"] is add.interfaces[2]
        assert add.interface("in2") is add.interfaces[1]
        assert add.interface(2) is add.i["out"]
        with pytest.raises(KeyError):
            add.interface("missing")

    def test_equality_needs_three(self):
        g = FactorGraph()
        with pytest.raises(ValueError):
            EqualityNode(2, graph=g)

    def test_zero_interfaces_rejected(self):
        g = FactorGraph()
        with pytest.raises(ValueError):
            FactorNode([], graph=g)

    def test_duplicate_interface_names_rejected(self):
        g = FactorGraph()
        with pytest.raises(ValueError):
            FactorNode(["x", "x"], graph=g)

    def test_generated_ids(self):
        g = FactorGraph()
        t1 = TerminalNode(graph=g)
        t2 = TerminalNode(graph=g)
        pm = PointMassConstraint(graph=g)
        assert (t1.id, t2.id, pm.id) == ("terminal1", "terminal2", "delta1")

    def test_duplicate_id_rejected(self):
        g = FactorGraph()
        TerminalNode(id="t", graph=g)
        with pytest.raises(ValueError):
            TerminalNode(id="t", graph=g)

    def test_point_mass_capability(self):
        g = FactorGraph()
        assert PointMassConstraint(graph=g).is_point_mass_constraint
        assert PointMassConstraint(graph=g).slug == "δ"
        assert not EqualityNode(graph=g).is_point_mass_constraint
        assert not TerminalNode(graph=g).is_point_mass_constraint


class TestInterfaces:
    def test_connect_is_symmetric(self):
        g = FactorGraph()
        t = TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], t.i["out"])

        assert eq.interfaces[0].partner is t.i["out"]
        assert t.i["out"].partner is eq.interfaces[0]
        assert eq.interfaces[1].partner is None

    def test_symmetry_over_all_interfaces(self):
        g = FactorGraph()
        add = AdditionNode(graph=g)
        eq = EqualityNode(graph=g)
        t1, t2 = TerminalNode(graph=g), TerminalNode(graph=g)
        g.connect(add.i["out"], eq.interfaces[0])
        g.connect(add.i["in1"], t1.i["out"])
        g.connect(eq.interfaces[1], t2.i["out"])
        g.connect(add.i["in2"], eq.interfaces[2])
        g.disconnect(t1.i["out"])

        for node in g:
            for a in node.interfaces:
                for other in g:
                    for b in other.interfaces:
                        assert (a.partner is b) == (b.partner is a)

    def test_partner_stored_as_ref(self):
        g = FactorGraph()
        t = TerminalNode(id="t", graph=g)
        eq = EqualityNode(id="eq", graph=g)
        g.connect(eq.interfaces[1], t.i["out"])
        assert eq.interfaces[1].partner_ref == InterfaceRef("t", 0)
        assert t.i["out"].partner_ref == InterfaceRef("eq", 1)

    def test_cannot_double_partner(self):
        g = FactorGraph()
        t1, t2 = TerminalNode(graph=g), TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], t1.i["out"])
        with pytest.raises(ValueError):
            g.connect(eq.interfaces[0], t2.i["out"])

    def test_cannot_partner_with_itself(self):
        g = FactorGraph()
        eq = EqualityNode(graph=g)
        with pytest.raises(ValueError):
            g.connect(eq.interfaces[0], eq.interfaces[0])

    def test_cannot_connect_across_graphs(self):
        g1, g2 = FactorGraph("a"), FactorGraph("b")
        t1, t2 = TerminalNode(graph=g1), TerminalNode(graph=g2)
        with pytest.raises(ValueError):
            g1.connect(t1.i["out"], t2.i["out"])

    def test_self_loop_on_one_node(self):
        g = FactorGraph()
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], eq.interfaces[1])
        assert eq.interfaces[0].partner is eq.interfaces[1]
        assert eq.neighbors() == [eq, eq]

    def test_disconnect(self):
        g = FactorGraph()
        t = TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], t.i["out"])
        g.disconnect(t.i["out"])
        assert t.i["out"].partner is None
        assert eq.interfaces[0].partner is None
        g.disconnect(t.i["out"])  # no-op

    def test_position_is_exact(self):
        g = FactorGraph()
        eq = EqualityNode(4, graph=g)
        assert [iface.position() for iface in eq.interfaces] == [0, 1, 2, 3]

    def test_position_of_foreign_interface(self):
        g = FactorGraph()
        eq = EqualityNode(graph=g)
        stray = eq.interfaces.pop()
        with pytest.raises(GraphInvariantError):
            stray.position()

    def test_asymmetric_partner_detected(self):
        g = FactorGraph()
        t1, t2 = TerminalNode(graph=g), TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], t1.i["out"])
        t1.i["out"]._partner_ref = t2.i["out"].ref
        with pytest.raises(GraphInvariantError):
            eq.interfaces[0].partner

    def test_inbound_message(self):
        from forney.messages import GAUSSIAN_MEAN_VARIANCE, Message

        g = FactorGraph()
        t = TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.connect(eq.interfaces[0], t.i["out"])
        msg = Message.build(GAUSSIAN_MEAN_VARIANCE)
        t.i["out"].message = msg
        assert eq.interfaces[0].inbound_message is msg
        assert t.i["out"].inbound_message is None


class TestFactorGraph:
    def test_lookup(self):
        g = FactorGraph("g")
        t = TerminalNode(id="t", graph=g)
        assert g.node("t") is t
        assert t in g
        assert len(g) == 1
        assert g.resolve(InterfaceRef("t", 0)) is t.i["out"]
        with pytest.raises(KeyError):
            g.node("nope")
        with pytest.raises(GraphInvariantError):
            g.resolve(InterfaceRef("t", 3))

    def test_freeze_blocks_mutation(self):
        g = FactorGraph()
        t = TerminalNode(graph=g)
        eq = EqualityNode(graph=g)
        g.freeze()
        with pytest.raises(GraphFrozenError):
            g.connect(eq.interfaces[0], t.i["out"])
        with pytest.raises(GraphFrozenError):
            TerminalNode(graph=g)
        with pytest.raises(GraphFrozenError):
            g.disconnect(t.i["out"])


class TestCurrentGraph:
    @pytest.fixture(autouse=True)
    def restore_current(self):
        previous = current_graph()
        yield
        set_current_graph(previous)

    def test_nodes_join_current_graph(self):
        g = new_graph("ambient")
        assert current_graph() is g
        t = TerminalNode()
        assert t.graph is g
        assert t in g

    def test_switching(self):
        g1 = new_graph("one")
        g2 = FactorGraph("two")
        set_current_graph(g2)
        t = TerminalNode()
        assert t in g2
        assert t not in g1

    def test_explicit_graph_wins(self):
        new_graph("ambient")
        other = FactorGraph("explicit")
        t = TerminalNode(graph=other)
        assert t.graph is other
        assert t not in current_graph()


class TestSubgraph:
    @pytest.fixture
    def chain(self):
        g = FactorGraph("chain")
        t1 = TerminalNode(id="t1", graph=g)
        eq = EqualityNode(id="eq", graph=g)
        t2 = TerminalNode(id="t2", graph=g)
        g.connect(t1.i["out"], eq.interfaces[0])
        g.connect(eq.interfaces[1], t2.i["out"])
        return g, t1, eq, t2

    def test_internal_and_external_edges(self, chain):
        g, t1, eq, t2 = chain
        sg = Subgraph("left", [t1, eq], graph=g)
        assert len(sg.internal_edges()) == 1
        assert len(sg.external_edges()) == 1
        (ext,) = sg.external_edges()
        assert {ext.tail.node, ext.head.node} == {eq, t2}

    def test_graph_inferred(self, chain):
        g, t1, eq, _ = chain
        assert Subgraph("s", [t1, eq]).graph is g
        assert str(Subgraph("s", [t1])) == "s"

    def test_foreign_node_rejected(self, chain):
        g, t1, _, _ = chain
        other = FactorGraph("other")
        with pytest.raises(ValueError):
            Subgraph("s", [TerminalNode(graph=other)], graph=g)
        with pytest.raises(ValueError):
            Subgraph("s", [t1, TerminalNode(graph=other)])

    def test_validate_partition(self, chain):
        g, t1, eq, t2 = chain
        validate_partition(g, [Subgraph("a", [t1, eq], graph=g), Subgraph("b", [t2], graph=g)])

    def test_validate_partition_missing_node(self, chain):
        g, t1, eq, _ = chain
        with pytest.raises(ValueError, match="not covered"):
            validate_partition(g, [Subgraph("a", [t1, eq], graph=g)])

    def test_validate_partition_overlap(self, chain):
        g, t1, eq, t2 = chain
        with pytest.raises(ValueError, match="both"):
            validate_partition(
                g, [Subgraph("a", [t1, eq], graph=g), Subgraph("b", [eq, t2], graph=g)]
            )
