"""
Nodes module: concrete node variants.
"""

from forney.nodes.terminal import TerminalNode
from forney.nodes.addition import AdditionNode
from forney.nodes.equality import EqualityNode
from forney.nodes.point_mass import PointMassConstraint
from forney.nodes.factor import FactorNode

__all__ = [
    "TerminalNode",
    "AdditionNode",
    "EqualityNode",
    "PointMassConstraint",
    "FactorNode",
]
