"""
forney/nodes/factor.py

Generic ordinary factor node with caller-defined interfaces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from forney.graph.capabilities import NodeKind
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class FactorNode(Node):
    """
    Ordinary factor, e.g. a likelihood or prior, treated abstractly.

    Args:
        interface_names: Names of the interfaces, in order
        label: Optional display label (defaults to the slug)
    """
    kind = NodeKind.FACTOR
    id_prefix = "factor"

    def __init__(
        self,
        interface_names: Sequence[str] = ("out",),
        *,
        label: Optional[str] = None,
        id: Optional[str] = None,
        graph: Optional["FactorGraph"] = None,
    ):
        super().__init__(list(interface_names), id=id, graph=graph)
        self.label = label
