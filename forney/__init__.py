"""
Forney: factor-graph data model with breaker-message cycle resolution

Represents probabilistic models as Forney-style factor graphs: nodes with
ordered interfaces, edges derived from interface partnerships, partition
subgraphs, and the breaker messages that break the message cycles created
by deterministic (point-mass) constraints.

Key components:
- graph: Nodes, interfaces, edges, graphs, subgraphs, composites, traversal
- nodes: Concrete node variants (terminal, addition, equality, point mass)
- inference: Factorization lookup and breaker resolution
- messages: Message objects and payload-type descriptors
- visualization: DOT export
- core: ID registry
"""

__version__ = "1.0.0"
__author__ = "Forney Team"

from forney.errors import (
    GraphInvariantError,
    MalformedCompositeError,
    BreakerConfigurationError,
    GraphFrozenError,
    GraphvizNotInstalledError,
)
from forney.messages import Variate, PayloadType, Message, GAUSSIAN_MEAN_VARIANCE
from forney.graph import (
    NodeKind,
    NodeCapabilities,
    BreakerParameters,
    CapabilityRegistry,
    default_registry,
    Interface,
    InterfaceRef,
    Node,
    Edge,
    get_edges,
    FactorGraph,
    Subgraph,
    validate_partition,
    current_graph,
    set_current_graph,
    new_graph,
    CompositeNode,
)
from forney.nodes import (
    TerminalNode,
    AdditionNode,
    EqualityNode,
    PointMassConstraint,
    FactorNode,
)
from forney.inference import (
    Factorization,
    BreakerSite,
    requires_breaker,
    breaker_parameters,
    validate_breakers,
    seed_breakers,
)
from forney.visualization import graph2dot

__all__ = [
    # Errors
    "GraphInvariantError",
    "MalformedCompositeError",
    "BreakerConfigurationError",
    "GraphFrozenError",
    "GraphvizNotInstalledError",
    # Messages
    "Variate",
    "PayloadType",
    "Message",
    "GAUSSIAN_MEAN_VARIANCE",
    # Graph
    "NodeKind",
    "NodeCapabilities",
    "BreakerParameters",
    "CapabilityRegistry",
    "default_registry",
    "Interface",
    "InterfaceRef",
    "Node",
    "Edge",
    "get_edges",
    "FactorGraph",
    "Subgraph",
    "validate_partition",
    "current_graph",
    "set_current_graph",
    "new_graph",
    "CompositeNode",
    # Nodes
    "TerminalNode",
    "AdditionNode",
    "EqualityNode",
    "PointMassConstraint",
    "FactorNode",
    # Inference
    "Factorization",
    "BreakerSite",
    "requires_breaker",
    "breaker_parameters",
    "validate_breakers",
    "seed_breakers",
    # Visualization
    "graph2dot",
]
