"""
forney/graph/interface.py

Interfaces: the connection points of nodes.

An interface belongs to exactly one node for its lifetime. Partnership is
stored as an InterfaceRef (node id, position) and resolved through the
owning graph, so interfaces never hold references to each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from forney.errors import GraphInvariantError
from forney.messages import Message, PayloadType

if TYPE_CHECKING:
    from forney.graph.node import Node


@dataclass(frozen=True, order=True)
class InterfaceRef:
    """Arena address of an interface: owning node id and position."""
    node_id: str
    index: int


class Interface:
    """
    A node's connection point.

    Attributes:
        node: Owning node
        index: Position in the owner's interface sequence
        name: Symbolic name (e.g. "out"), or None
        message: Outbound message sent along the edge from this interface
        message_payload_type: Expected family of the outbound message
        breaker_seed: Breaker message installed on this slot, if any
    """

    def __init__(self, node: "Node", index: int, name: Optional[str] = None):
        self.node = node
        self.index = index
        self.name = name
        self.message: Optional[Message] = None
        self.message_payload_type: Optional[PayloadType] = None
        self.breaker_seed: Optional[Message] = None
        self._partner_ref: Optional[InterfaceRef] = None

    @property
    def ref(self) -> InterfaceRef:
        return InterfaceRef(self.node.id, self.index)

    @property
    def partner_ref(self) -> Optional[InterfaceRef]:
        return self._partner_ref

    @property
    def partner(self) -> Optional["Interface"]:
        """Resolve the partner interface through the owning graph."""
        if self._partner_ref is None:
            return None
        partner = self.node.graph.resolve(self._partner_ref)
        if partner._partner_ref != self.ref:
            raise GraphInvariantError(
                f"Partner relation of {self!r} is not symmetric: "
                f"{partner!r} is partnered with {partner._partner_ref}"
            )
        return partner

    def is_connected(self) -> bool:
        return self._partner_ref is not None

    @property
    def inbound_message(self) -> Optional[Message]:
        """Message travelling towards this interface (the partner's outbound)."""
        partner = self.partner
        return None if partner is None else partner.message

    def position(self) -> int:
        """
        Exact position of this interface within its owner's interfaces.

        Raises:
            GraphInvariantError: if the interface is not in that sequence
        """
        matches = [k for k, iface in enumerate(self.node.interfaces) if iface is self]
        if len(matches) != 1:
            raise GraphInvariantError(
                f"Interface {self.name or self.index!r} is not a member of node {self.node.id!r}"
            )
        return matches[0]

    def get_name(self) -> str:
        return self.name or ""

    def __repr__(self) -> str:
        label = self.name if self.name is not None else self.index
        return f"Interface({self.node.id}.{label})"
