"""
forney/graph/edge.py

Edges derived from interface partnerships.

Edges are never stored: an edge exists iff two interfaces are mutually
partnered. Edge identity is the unordered pair of the two InterfaceRefs, so
an edge compares equal regardless of which side is called tail or head.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Set, Tuple

from forney.graph.interface import Interface, InterfaceRef
from forney.messages import Message, PayloadType

if TYPE_CHECKING:
    from forney.graph.node import Node


class Edge:
    """
    A pair of mutually partnered interfaces.

    The interface with the smaller InterfaceRef becomes the tail. The
    forward message is the tail's outbound message, the backward message
    the head's outbound message.
    """
    __slots__ = ("tail", "head")

    def __init__(self, a: Interface, b: Interface):
        if a.partner is not b or b.partner is not a:
            raise ValueError(f"{a!r} and {b!r} are not partnered")
        if b.ref < a.ref:
            a, b = b, a
        self.tail = a
        self.head = b

    @property
    def key(self) -> Tuple[InterfaceRef, InterfaceRef]:
        return (self.tail.ref, self.head.ref)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key and self.tail.node.graph is other.tail.node.graph

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def forward_message(self) -> Optional[Message]:
        return self.tail.message

    @property
    def backward_message(self) -> Optional[Message]:
        return self.head.message

    @property
    def forward_payload_type(self) -> Optional[PayloadType]:
        if self.tail.message is not None:
            return self.tail.message.payload_type
        return self.tail.message_payload_type

    @property
    def backward_payload_type(self) -> Optional[PayloadType]:
        if self.head.message is not None:
            return self.head.message.payload_type
        return self.head.message_payload_type

    def label_for(self, interface: Interface) -> str:
        """Diagnostic label "<position> <name>" of one endpoint."""
        return f"{interface.position()} {interface.get_name()}".rstrip()

    def other(self, interface: Interface) -> Interface:
        """Get the endpoint opposite to the given interface."""
        if interface is self.tail:
            return self.head
        if interface is self.head:
            return self.tail
        raise ValueError(f"{interface!r} is not an endpoint of {self!r}")

    def __repr__(self) -> str:
        return f"Edge({self.tail!r} -> {self.head!r})"


def get_edges(nodes: Iterable["Node"], include_external: bool = False) -> Set[Edge]:
    """
    Get the edges connecting a set of nodes.

    Args:
        nodes: Node set to inspect
        include_external: Also return edges whose far endpoint lies outside
            the node set

    Returns:
        Set of edges
    """
    node_set = set(nodes)
    edges: Set[Edge] = set()
    for node in node_set:
        for iface in node.interfaces:
            partner = iface.partner
            if partner is None:
                continue
            if include_external or partner.node in node_set:
                edges.add(Edge(iface, partner))
    return edges
