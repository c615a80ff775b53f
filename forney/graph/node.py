"""
forney/graph/node.py

Base class of all factor nodes.

A node owns an ordered, fixed-size sequence of interfaces. The position of
an interface in that sequence is its identity within the node; the optional
symbolic names are an index into the same objects (``node.i["out"]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from forney.graph.capabilities import NodeCapabilities, NodeKind, default_registry
from forney.graph.interface import Interface

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class Node:
    """
    A computational unit with a fixed number of interfaces.

    Subclasses set ``kind`` (the variant tag used for capability lookup) and
    ``id_prefix`` (used for generated ids).

    Attributes:
        id: Identifier, unique within the graph
        graph: Graph the node belongs to
        interfaces: Ordered interfaces
        i: Symbolic name -> interface
    """
    kind: NodeKind = NodeKind.FACTOR
    id_prefix: str = "node"

    def __init__(
        self,
        interface_names: Sequence[Optional[str]],
        *,
        id: Optional[str] = None,
        graph: Optional["FactorGraph"] = None,
    ):
        if len(interface_names) < 1:
            raise ValueError(f"{type(self).__name__} needs at least one interface")
        named = [n for n in interface_names if n is not None]
        if len(named) != len(set(named)):
            raise ValueError(f"Duplicate interface names: {list(interface_names)}")

        if graph is None:
            from forney.graph.factor_graph import current_graph
            graph = current_graph()

        self.id: str = ""
        self.graph: "FactorGraph" = graph
        self.interfaces: List[Interface] = [
            Interface(self, k, name) for k, name in enumerate(interface_names)
        ]
        self.i: Dict[str, Interface] = {
            iface.name: iface for iface in self.interfaces if iface.name is not None
        }
        graph.add_node(self, id)

    @property
    def capabilities(self) -> NodeCapabilities:
        return default_registry().lookup(self.kind)

    @property
    def slug(self) -> str:
        return self.capabilities.slug

    @property
    def is_point_mass_constraint(self) -> bool:
        return self.capabilities.is_point_mass_constraint

    def interface(self, key) -> Interface:
        """Get an interface by symbolic name or by position."""
        if isinstance(key, int):
            return self.interfaces[key]
        try:
            return self.i[key]
        except KeyError:
            raise KeyError(f"Node {self.id!r} has no interface named {key!r}") from None

    def neighbors(self) -> List["Node"]:
        """Nodes partnered through any interface, in interface order."""
        out: List[Node] = []
        for iface in self.interfaces:
            partner = iface.partner
            if partner is not None:
                out.append(partner.node)
        return out

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"
