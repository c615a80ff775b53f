"""
Graph module: nodes, interfaces, derived edges, graphs and subgraphs.
"""

from forney.graph.capabilities import (
    NodeKind,
    NodeCapabilities,
    BreakerParameters,
    CapabilityRegistry,
    default_registry,
)
from forney.graph.interface import Interface, InterfaceRef
from forney.graph.node import Node
from forney.graph.edge import Edge, get_edges
from forney.graph.factor_graph import (
    FactorGraph,
    Subgraph,
    validate_partition,
    current_graph,
    set_current_graph,
    new_graph,
)
from forney.graph.composite import CompositeNode
from forney.graph.traversal import (
    to_networkx,
    reachable_nodes,
    connected_components,
    has_loops,
)

__all__ = [
    # capabilities
    "NodeKind",
    "NodeCapabilities",
    "BreakerParameters",
    "CapabilityRegistry",
    "default_registry",
    # data model
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
    # traversal
    "to_networkx",
    "reachable_nodes",
    "connected_components",
    "has_loops",
]
