"""
forney/nodes/terminal.py

Terminal (leaf) node: a single interface closing off an edge.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from forney.graph.capabilities import NodeKind
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class TerminalNode(Node):
    """
    Leaf node with one interface ``out``.

    Interfaces:
        0. out

    Attributes:
        value: Optional clamped value the terminal represents
    """
    kind = NodeKind.TERMINAL
    id_prefix = "terminal"

    def __init__(self, value: Any = None, *, id: Optional[str] = None, graph: Optional["FactorGraph"] = None):
        super().__init__(["out"], id=id, graph=graph)
        self.value = value
