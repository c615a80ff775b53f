"""
forney/inference/breaker.py

Breaker messages: resolving message cycles created by deterministic
constraints.

A deterministic constraint (e.g. a point-mass constraint) fixes its
variable exactly, so the message it sends depends on the message it
receives, which in turn needs the one it sends. No schedule can order such
a pair. Every interface partnered with such a node is therefore seeded with
a fixed-form breaker message before iterative message passing starts.

Policy is resolved by node variant through a CapabilityRegistry:
- requires_breaker: does the interface need a seed?
- breaker_parameters: which message family and constructor arguments?

Configuration errors (a variant that requires a breaker but declares no
parameters, or parameters no message can be built from) are reported by
validate_breakers, before any message slot is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from forney.errors import BreakerConfigurationError, GraphInvariantError
from forney.graph.capabilities import BreakerParameters, CapabilityRegistry, default_registry
from forney.graph.composite import CompositeNode
from forney.graph.factor_graph import FactorGraph, Subgraph
from forney.graph.interface import Interface
from forney.graph.node import Node
from forney.messages import Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakerSite:
    """
    An interface that must receive a breaker message.

    Attributes:
        interface: Receiving interface
        partner_interface: Its partner, whose outbound slot holds the seed
        breaker_node: Node whose variant demanded the breaker (the internal
            node when the partner is a composite)
        parameters: Seed family and constructor arguments
    """
    interface: Interface
    partner_interface: Interface
    breaker_node: Node
    parameters: BreakerParameters

    def build_message(self) -> Message:
        return Message.build(self.parameters.payload_type, *self.parameters.args)


def _check_triple(interface: Interface, partner_interface: Interface, partner_node: Node) -> None:
    if partner_interface.node is not partner_node:
        raise GraphInvariantError(f"{partner_interface!r} does not belong to {partner_node!r}")
    if interface.partner is not partner_interface and not _stands_for(interface.partner, partner_interface):
        raise GraphInvariantError(f"{interface!r} is not partnered with {partner_interface!r}")


def _stands_for(external: Optional[Interface], internal: Interface) -> bool:
    """True if a (possibly nested) composite interface wraps `internal`."""
    while external is not None and isinstance(external.node, CompositeNode):
        external = external.node.internal_interface(external)
        if external is internal:
            return True
    return False


def requires_breaker(
    interface: Interface,
    partner_interface: Interface,
    partner_node: Node,
    registry: Optional[CapabilityRegistry] = None,
) -> bool:
    """
    Decide whether `interface` must receive a breaker message from
    `partner_node`.

    Ordinary factors never need one; deterministic constraints always do.

    The triple must describe an existing edge: `partner_interface` belongs to
    `partner_node` and is the partner of `interface` (directly or behind a
    composite interface). Any other combination is not a valid query and
    raises GraphInvariantError instead of returning False.
    """
    _check_triple(interface, partner_interface, partner_node)
    reg = registry if registry is not None else default_registry()
    return reg.lookup(partner_node.kind).requires_breaker


def breaker_parameters(
    interface: Interface,
    partner_interface: Interface,
    partner_node: Node,
    registry: Optional[CapabilityRegistry] = None,
) -> Optional[BreakerParameters]:
    """
    Get the seed message family and constructor arguments.

    Returns:
        BreakerParameters, or None when the variant needs no breaker

    Raises:
        BreakerConfigurationError: if the variant requires a breaker but
            declares no parameters, or parameters that cannot be built
            into a message
    """
    _check_triple(interface, partner_interface, partner_node)
    reg = registry if registry is not None else default_registry()
    caps = reg.lookup(partner_node.kind)
    if not caps.requires_breaker:
        return None
    params = caps.breaker_parameters
    if params is None or params.payload_type is None:
        raise BreakerConfigurationError(
            f"Node kind {partner_node.kind.value!r} ({partner_node.id!r}) requires a breaker "
            f"message but declares no breaker parameters"
        )
    try:
        Message.build(params.payload_type, *params.args)
    except ValueError as e:
        raise BreakerConfigurationError(
            f"Breaker parameters of node kind {partner_node.kind.value!r} "
            f"({partner_node.id!r}) cannot build a message: {e}"
        ) from e
    return params


def effective_partner(interface: Interface) -> Optional[Interface]:
    """
    Get the interface that actually sends messages to `interface`,
    looking through composite nodes to the wrapped internal interface.
    """
    partner = interface.partner
    while partner is not None and isinstance(partner.node, CompositeNode):
        partner = partner.node.internal_interface(partner)
    return partner


def _scope_nodes(target: Union[FactorGraph, Subgraph, Iterable[Node]]) -> List[Node]:
    """Collect nodes, keeping composites alongside their internal nodes."""
    if isinstance(target, (FactorGraph, Subgraph)):
        roots = target.get_nodes(open_composites=False)
    else:
        roots = set(target)
    nodes = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        nodes.add(node)
        if isinstance(node, CompositeNode):
            stack.extend(node.internal_nodes())
    return sorted(nodes, key=lambda n: (n.graph.name, n.id))


def validate_breakers(
    target: Union[FactorGraph, Subgraph, Iterable[Node]],
    registry: Optional[CapabilityRegistry] = None,
) -> List[BreakerSite]:
    """
    Find every interface that needs a breaker and check its configuration.

    Composite nodes are opened: their internal nodes are visited as well,
    and an interface partnered with a composite is judged by the internal
    node behind the composite's interface.

    Args:
        target: Graph, subgraph or node collection to validate
        registry: Capability table (default: stock registry)

    Returns:
        Breaker sites in deterministic (graph name, node id, position) order

    Raises:
        BreakerConfigurationError: on the first misconfigured variant
    """
    sites: List[BreakerSite] = []
    for node in _scope_nodes(target):
        for iface in node.interfaces:
            partner = iface.partner
            if partner is None:
                continue
            source = effective_partner(iface)
            if not requires_breaker(iface, source, source.node, registry):
                continue
            params = breaker_parameters(iface, source, source.node, registry)
            sites.append(BreakerSite(iface, partner, source.node, params))
    return sites


def seed_breakers(
    graph: FactorGraph,
    registry: Optional[CapabilityRegistry] = None,
) -> List[BreakerSite]:
    """
    Validate a graph, freeze it, and install breaker messages.

    Each seed is written once to the outbound slot of the partner interface
    (the message the receiving interface will consume). Slots that already
    hold a message are left untouched. All seeds are built before the graph
    is frozen, so a failure leaves the graph unfrozen and no slot written.

    Returns:
        The breaker sites found by validate_breakers
    """
    sites = validate_breakers(graph, registry)
    pending = [(site, site.build_message()) for site in sites]
    graph.freeze()

    seeded = 0
    for site, seed in pending:
        slot = site.partner_interface
        if slot.message is not None:
            if slot.message is slot.breaker_seed:
                logger.debug("Breaker slot %r already seeded", slot)
            else:
                logger.warning("Breaker slot %r already holds %r; left untouched", slot, slot.message)
            continue
        slot.message = seed
        slot.breaker_seed = seed
        slot.message_payload_type = site.parameters.payload_type
        seeded += 1
        logger.debug("Seeded breaker %s towards %r", site.parameters.payload_type, site.interface)

    logger.info("Seeded %d breaker message(s) in graph %s", seeded, graph.name)
    return sites
