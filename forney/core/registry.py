"""
forney/core/registry.py

ID registry for nodes of a factor graph.

Generated ids take the form ``<prefix><n>`` with an independent counter per
prefix, so ids are deterministic for a given construction order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set


@dataclass
class IDRegistry:
    """
    Registry of node identifiers within one graph.

    Attributes:
        taken: Every id handed out or reserved so far
        counters: Prefix -> last counter value used
    """
    taken: Set[str] = field(default_factory=set)
    counters: Dict[str, int] = field(default_factory=dict)

    def generate(self, prefix: str) -> str:
        """Allocate the next free id for a prefix."""
        n = self.counters.get(prefix, 0)
        while True:
            n += 1
            candidate = f"{prefix}{n}"
            if candidate not in self.taken:
                break
        self.counters[prefix] = n
        self.taken.add(candidate)
        return candidate

    def reserve(self, node_id: str) -> str:
        """Record a user supplied id; duplicates are rejected."""
        if node_id in self.taken:
            raise ValueError(f"Node id {node_id!r} already exists in this graph")
        self.taken.add(node_id)
        return node_id

    def release(self, node_id: str) -> None:
        """Forget an id so it can be reserved again."""
        self.taken.discard(node_id)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.taken
