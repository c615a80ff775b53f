"""
forney/graph/factor_graph.py

Factor graphs, partition subgraphs, and the ambient current graph.

A FactorGraph owns its nodes by id and is the arena through which interface
partnerships are resolved. Construction (adding nodes, connecting and
disconnecting interfaces) is allowed until the graph is frozen.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Iterator, Optional, Set

from forney.core.registry import IDRegistry
from forney.errors import GraphFrozenError, GraphInvariantError
from forney.graph.edge import Edge, get_edges
from forney.graph.interface import Interface, InterfaceRef

if TYPE_CHECKING:
    from forney.graph.node import Node

logger = logging.getLogger(__name__)


class FactorGraph:
    """
    Container of the nodes of one model scope.

    Attributes:
        name: Display name
        nodes: Node id -> node
        ids: Identifier registry
        frozen: True once construction has ended
    """

    def __init__(self, name: str = "graph"):
        self.name = name
        self.nodes: Dict[str, "Node"] = {}
        self.ids = IDRegistry()
        self.frozen = False

    def _check_mutable(self) -> None:
        if self.frozen:
            raise GraphFrozenError(f"Graph {self.name!r} is frozen")

    def add_node(self, node: "Node", node_id: Optional[str] = None) -> str:
        """Register a node and assign its id (generated if not given)."""
        self._check_mutable()
        if node_id is None:
            node_id = self.ids.generate(node.id_prefix)
        else:
            self.ids.reserve(node_id)
        node.id = node_id
        node.graph = self
        self.nodes[node_id] = node
        return node_id

    def node(self, node_id: str) -> "Node":
        """Get a node by id."""
        try:
            return self.nodes[node_id]
        except KeyError:
            raise KeyError(f"Node {node_id!r} not found in graph {self.name!r}") from None

    def resolve(self, ref: InterfaceRef) -> Interface:
        """Get the interface addressed by a reference."""
        node = self.node(ref.node_id)
        if not 0 <= ref.index < len(node.interfaces):
            raise GraphInvariantError(f"Node {ref.node_id!r} has no interface at {ref.index}")
        return node.interfaces[ref.index]

    def connect(self, a: Interface, b: Interface) -> Edge:
        """
        Partner two free interfaces, forming an edge.

        Both interfaces must belong to nodes of this graph. They may belong
        to the same node (a self-loop), but must be distinct.
        """
        self._check_mutable()
        if a is b:
            raise ValueError(f"Cannot partner {a!r} with itself")
        for iface in (a, b):
            if iface.node.graph is not self or self.nodes.get(iface.node.id) is not iface.node:
                raise ValueError(f"{iface!r} does not belong to graph {self.name!r}")
            if iface.partner_ref is not None:
                raise ValueError(f"{iface!r} is already partnered with {iface.partner_ref}")
        a._partner_ref = b.ref
        b._partner_ref = a.ref
        logger.debug("Connected %r and %r in %s", a, b, self.name)
        return Edge(a, b)

    def disconnect(self, interface: Interface) -> None:
        """Remove the edge at an interface (no-op when it is free)."""
        self._check_mutable()
        partner = interface.partner
        if partner is None:
            return
        interface._partner_ref = None
        partner._partner_ref = None
        logger.debug("Disconnected %r and %r in %s", interface, partner, self.name)

    def freeze(self) -> None:
        """End construction; subsequent structural mutation raises."""
        if not self.frozen:
            self.frozen = True
            logger.debug("Froze graph %s with %d nodes", self.name, len(self.nodes))

    def get_nodes(self, open_composites: bool = False) -> Set["Node"]:
        """
        Get all nodes in scope.

        Args:
            open_composites: Replace composite nodes by their internal nodes,
                recursively. Edges crossing a composite boundary end at the
                composite's own interfaces, so they are not part of the
                open view; only edges inside the composite remain.
        """
        return expand_nodes(self.nodes.values(), open_composites)

    def edges(self, open_composites: bool = False) -> Set[Edge]:
        """Get all edges of the graph; see get_nodes for the open view."""
        return get_edges(self.get_nodes(open_composites), include_external=False)

    def __contains__(self, node: object) -> bool:
        node_id = getattr(node, "id", None)
        return node_id is not None and self.nodes.get(node_id) is node

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"FactorGraph(name={self.name!r}, nodes={len(self.nodes)})"


def expand_nodes(nodes: Iterable["Node"], open_composites: bool) -> Set["Node"]:
    """Collect a node set, optionally replacing composites by their internals."""
    from forney.graph.composite import CompositeNode

    out: Set["Node"] = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if open_composites and isinstance(node, CompositeNode):
            stack.extend(node.internal_nodes())
        else:
            out.add(node)
    return out


class Subgraph:
    """
    A named subset of a graph's nodes: one factor of a structured partition.

    Attributes:
        name: Subgraph name, used for labelling
        graph: Graph the nodes belong to
        nodes: Member nodes
    """

    def __init__(self, name: str, nodes: Iterable["Node"], graph: Optional[FactorGraph] = None):
        members = frozenset(nodes)
        if graph is None:
            graphs = {id(n.graph): n.graph for n in members}
            if len(graphs) > 1:
                raise ValueError(f"Subgraph {name!r} mixes nodes of several graphs")
            graph = next(iter(graphs.values())) if graphs else current_graph()
        for n in members:
            if n not in graph:
                raise ValueError(f"{n!r} is not a node of graph {graph.name!r}")
        self.name = name
        self.graph = graph
        self.nodes: FrozenSet["Node"] = members

    def get_nodes(self, open_composites: bool = False) -> Set["Node"]:
        """Nodes of the subgraph; opened composites drop their boundary edges."""
        return expand_nodes(self.nodes, open_composites)

    def internal_edges(self) -> Set[Edge]:
        """Edges with both endpoints inside the subgraph."""
        return get_edges(self.nodes, include_external=False)

    def external_edges(self) -> Set[Edge]:
        """Edges crossing the subgraph boundary."""
        return get_edges(self.nodes, include_external=True) - self.internal_edges()

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Subgraph(name={self.name!r}, nodes={len(self.nodes)})"


def validate_partition(graph: FactorGraph, subgraphs: Iterable[Subgraph]) -> None:
    """
    Check that subgraphs partition the nodes of a graph.

    Raises:
        ValueError: if a node is covered zero or several times, or a
            subgraph belongs to another graph
    """
    owner: Dict[str, str] = {}
    for sg in subgraphs:
        if sg.graph is not graph:
            raise ValueError(f"Subgraph {sg.name!r} does not belong to graph {graph.name!r}")
        for n in sg.nodes:
            if n.id in owner:
                raise ValueError(
                    f"Node {n.id!r} belongs to both {owner[n.id]!r} and {sg.name!r}"
                )
            owner[n.id] = sg.name
    missing = sorted(set(graph.nodes) - set(owner))
    if missing:
        raise ValueError(f"Nodes not covered by any subgraph: {missing}")


# Ambient construction context: exactly one graph is current at a time.
_current_graph: Optional[FactorGraph] = None


def current_graph() -> FactorGraph:
    """Get the current graph, creating an empty one if there is none."""
    global _current_graph
    if _current_graph is None:
        _current_graph = FactorGraph()
    return _current_graph


def set_current_graph(graph: FactorGraph) -> FactorGraph:
    """Make a graph the current one."""
    global _current_graph
    _current_graph = graph
    return graph


def new_graph(name: str = "graph") -> FactorGraph:
    """Create an empty graph and make it current."""
    return set_current_graph(FactorGraph(name))
