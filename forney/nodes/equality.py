"""
forney/nodes/equality.py

Equality node: constrains all connected variables to be equal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from forney.graph.capabilities import NodeKind
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class EqualityNode(Node):
    """
    Equality constraint with ``n_interfaces`` (>= 3) unnamed interfaces,
    addressed by position.
    """
    kind = NodeKind.EQUALITY
    id_prefix = "equality"

    def __init__(
        self,
        n_interfaces: int = 3,
        *,
        id: Optional[str] = None,
        graph: Optional["FactorGraph"] = None,
    ):
        if n_interfaces < 3:
            raise ValueError(f"EqualityNode needs at least 3 interfaces, got {n_interfaces}")
        super().__init__([None] * n_interfaces, id=id, graph=graph)
