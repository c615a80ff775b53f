"""
forney/graph/composite.py

Composite nodes: a node wrapping a private internal sub-network.

The internal nodes are declared explicitly at construction and live in
their own FactorGraph, which the composite owns and freezes. Each external
interface of the composite stands for one free interface of an internal
node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple

from forney.errors import MalformedCompositeError
from forney.graph.capabilities import NodeKind
from forney.graph.interface import Interface
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class CompositeNode(Node):
    """
    Node aggregating an internal sub-network.

    Args:
        internal_nodes: The wrapped nodes; all must belong to one internal
            graph that is not the composite's own graph
        exposed: External interface name -> internal interface, in order
        id: Node id (generated if omitted)
        graph: Graph the composite belongs to (default: current graph)
    """
    kind = NodeKind.COMPOSITE
    id_prefix = "composite"

    def __init__(
        self,
        internal_nodes: Sequence[Node],
        exposed: Mapping[str, Interface],
        *,
        id: Optional[str] = None,
        graph: Optional["FactorGraph"] = None,
    ):
        members = tuple(internal_nodes)
        if not members:
            raise MalformedCompositeError("CompositeNode does not contain any internal nodes.")
        internal_graph = members[0].graph
        for n in members:
            if n.graph is not internal_graph:
                raise ValueError("Internal nodes of a composite must share one internal graph")
        for name, iface in exposed.items():
            if iface.node not in members:
                raise ValueError(f"Exposed interface {name!r} does not belong to an internal node")
            if iface.is_connected():
                raise ValueError(f"Exposed interface {name!r} is already connected internally")

        if graph is None:
            from forney.graph.factor_graph import current_graph
            graph = current_graph()
        if graph is internal_graph:
            raise ValueError("A composite cannot live in the graph holding its internal nodes")

        self._internal_nodes: Tuple[Node, ...] = members
        self.internal_graph = internal_graph
        super().__init__(list(exposed.keys()), id=id, graph=graph)

        self._exposed: Dict[int, Interface] = {
            k: iface for k, iface in enumerate(exposed.values())
        }
        internal_graph.freeze()

    def internal_nodes(self) -> FrozenSet[Node]:
        """
        Get the internal nodes, one representative each.

        Raises:
            MalformedCompositeError: if there are none
        """
        if not self._internal_nodes:
            raise MalformedCompositeError("CompositeNode does not contain any internal nodes.")
        return frozenset(self._internal_nodes)

    def internal_interface(self, external: Interface) -> Interface:
        """Get the internal interface an external interface stands for."""
        if external.node is not self:
            raise ValueError(f"{external!r} is not an interface of {self!r}")
        return self._exposed[external.position()]

    def external_interfaces(self) -> Dict[str, Interface]:
        return dict(self.i)
