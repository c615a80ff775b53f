"""
forney/nodes/addition.py

Addition node: out = in1 + in2.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from forney.graph.capabilities import NodeKind
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class AdditionNode(Node):
    """
    Interfaces:
        0. in1
        1. in2
        2. out
    """
    kind = NodeKind.ADDITION
    id_prefix = "addition"

    def __init__(self, *, id: Optional[str] = None, graph: Optional["FactorGraph"] = None):
        super().__init__(["in1", "in2", "out"], id=id, graph=graph)
