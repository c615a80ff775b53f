"""
forney/graph/traversal.py

Traversal helpers built on a networkx view of the graph.

The networkx graph is a MultiGraph whose nodes are Node objects and whose
edges carry the Edge they came from, so parallel edges and self-loops are
preserved.
"""

from __future__ import annotations

from typing import Iterable, List, Set

import networkx as nx

from forney.graph.edge import get_edges
from forney.graph.node import Node


def to_networkx(nodes: Iterable[Node], include_external: bool = False) -> nx.MultiGraph:
    """
    Build a networkx MultiGraph of a node set.

    Args:
        nodes: Nodes to include
        include_external: Also include edges (and far endpoint nodes)
            leaving the node set

    Returns:
        MultiGraph with attribute "edge" on every edge
    """
    node_list = list(nodes)
    g = nx.MultiGraph()
    for n in node_list:
        g.add_node(n)
    for e in get_edges(node_list, include_external=include_external):
        g.add_edge(e.tail.node, e.head.node, key=e.key, edge=e)
    return g


def reachable_nodes(node: Node) -> Set[Node]:
    """Get every node connected to a node (including itself)."""
    g = to_networkx(node.graph.nodes.values())
    return set(nx.node_connected_component(g, node))


def connected_components(nodes: Iterable[Node]) -> List[Set[Node]]:
    """Get the connected components of a node set, largest first."""
    g = to_networkx(nodes)
    return sorted((set(c) for c in nx.connected_components(g)), key=len, reverse=True)


def has_loops(nodes: Iterable[Node]) -> bool:
    """
    Check whether the edges among a node set contain a cycle.

    A multigraph is acyclic iff |E| = |V| - #components; parallel edges and
    self-loops both count as cycles.
    """
    g = to_networkx(nodes)
    if g.number_of_nodes() == 0:
        return False
    return g.number_of_edges() > g.number_of_nodes() - nx.number_connected_components(g)
