"""
forney/inference/factorization.py

Factorization: assignment of edges to the subgraph that computes their
messages in structured inference.

The assignment is supplied by a planner; this module only stores it and
answers lookups. An edge without an entry belongs to the default,
unpartitioned scope.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Set

from forney.graph.edge import Edge
from forney.graph.factor_graph import Subgraph


class Factorization:
    """
    Read-only mapping Edge -> Subgraph.

    Args:
        assignment: Edge -> owning subgraph
    """

    def __init__(self, assignment: Optional[Mapping[Edge, Subgraph]] = None):
        table: Dict[Edge, Subgraph] = dict(assignment or {})
        self._table = MappingProxyType(table)

    def lookup(self, edge: Edge) -> Optional[Subgraph]:
        """Get the subgraph owning an edge, or None when unassigned."""
        return self._table.get(edge)

    subgraph_for = lookup

    def edges_of(self, subgraph: Subgraph) -> Set[Edge]:
        """Get every edge assigned to a subgraph."""
        return {e for e, sg in self._table.items() if sg is subgraph}

    def subgraphs(self) -> Set[Subgraph]:
        return set(self._table.values())

    def __contains__(self, edge: object) -> bool:
        return edge in self._table

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"Factorization(edges={len(self._table)}, subgraphs={len(self.subgraphs())})"
