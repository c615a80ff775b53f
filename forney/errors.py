"""
forney/errors.py

Error types raised by the graph core.

None of these are recoverable at this layer: they signal malformed input
graphs or broken invariants and propagate to the caller unchanged.
"""

from __future__ import annotations


class GraphInvariantError(RuntimeError):
    """
    Raised when a structural invariant of the graph is violated.

    Examples are an interface that is missing from its owner's interface
    sequence, or a partner relation that is not symmetric.
    """


class MalformedCompositeError(ValueError):
    """Raised when a composite node holds no internal nodes."""


class BreakerConfigurationError(RuntimeError):
    """
    Raised during graph validation when a node variant requires a breaker
    message but supplies no breaker parameters.
    """


class GraphFrozenError(RuntimeError):
    """Raised when a frozen graph is mutated."""


class GraphvizNotInstalledError(RuntimeError):
    """Raised when the Graphviz ``dot`` executable cannot be run."""
