"""
forney/graph/capabilities.py

Node variant tags and the capability table looked up by tag.

Behaviour that depends on the node variant (display slug, whether the node is
a deterministic constraint, whether it needs a breaker message and which
one) is read from a NodeCapabilities record keyed by NodeKind. Dispatch goes
through this table, never through the Python class of the node.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from forney.messages import GAUSSIAN_MEAN_VARIANCE, PayloadType


class NodeKind(Enum):
    """Closed set of node variants."""
    TERMINAL = "terminal"
    ADDITION = "addition"
    EQUALITY = "equality"
    POINT_MASS_CONSTRAINT = "point_mass_constraint"
    COMPOSITE = "composite"
    FACTOR = "factor"


class BreakerParameters(NamedTuple):
    """Message family and constructor arguments of a breaker message."""
    payload_type: PayloadType
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class NodeCapabilities:
    """
    Capabilities declared by a node variant.

    Attributes:
        slug: Short display label
        is_point_mass_constraint: Node fixes its variable to an exact value
        requires_breaker: Messages arriving from this node must be seeded
        breaker_parameters: Seed message family and arguments
    """
    slug: str
    is_point_mass_constraint: bool = False
    requires_breaker: bool = False
    breaker_parameters: Optional[BreakerParameters] = None


DEFAULT_CAPABILITIES: Dict[NodeKind, NodeCapabilities] = {
    NodeKind.TERMINAL: NodeCapabilities(slug="T"),
    NodeKind.ADDITION: NodeCapabilities(slug="+"),
    NodeKind.EQUALITY: NodeCapabilities(slug="="),
    NodeKind.COMPOSITE: NodeCapabilities(slug="composite"),
    NodeKind.FACTOR: NodeCapabilities(slug="f"),
    # Univariate only
    NodeKind.POINT_MASS_CONSTRAINT: NodeCapabilities(
        slug="δ",
        is_point_mass_constraint=True,
        requires_breaker=True,
        breaker_parameters=BreakerParameters(GAUSSIAN_MEAN_VARIANCE, ()),
    ),
}


class CapabilityRegistry:
    """
    Mapping from NodeKind to NodeCapabilities.

    The stock table is shared through default_registry(); callers that need
    a different policy build their own registry and pass it explicitly.
    """

    def __init__(self, table: Optional[Dict[NodeKind, NodeCapabilities]] = None):
        self._table: Dict[NodeKind, NodeCapabilities] = dict(
            DEFAULT_CAPABILITIES if table is None else table
        )

    def lookup(self, kind: NodeKind) -> NodeCapabilities:
        """Get the capabilities of a node variant."""
        try:
            return self._table[kind]
        except KeyError:
            raise KeyError(f"No capabilities registered for node kind {kind}") from None

    def register(self, kind: NodeKind, capabilities: NodeCapabilities) -> None:
        """Set (or replace) the capabilities of a node variant."""
        self._table[kind] = capabilities

    def copy(self) -> "CapabilityRegistry":
        """Get an independent copy of this registry."""
        return CapabilityRegistry(self._table)

    def __contains__(self, kind: NodeKind) -> bool:
        return kind in self._table


_DEFAULT_REGISTRY = CapabilityRegistry()


def default_registry() -> CapabilityRegistry:
    """Get the process-wide stock capability registry."""
    return _DEFAULT_REGISTRY
