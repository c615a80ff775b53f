"""
forney/nodes/point_mass.py

Point-mass constraint: constrains the marginal of the connected variable to
a point mass.

Messages sent out of this node would depend on the very message they are
meant to produce, so every interface partnered with it receives a breaker
message (see forney.inference.breaker).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from forney.graph.capabilities import NodeKind
from forney.graph.node import Node

if TYPE_CHECKING:
    from forney.graph.factor_graph import FactorGraph


class PointMassConstraint(Node):
    """
    Interfaces:
        0. out
    """
    kind = NodeKind.POINT_MASS_CONSTRAINT
    id_prefix = "delta"

    def __init__(self, *, id: Optional[str] = None, graph: Optional["FactorGraph"] = None):
        super().__init__(["out"], id=id, graph=graph)
