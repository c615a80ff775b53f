"""
Example: point-mass constraint inside a loop.

    prior -- Eq == likelihood
              |
              δ

The equality node ties a variable to a prior, to both ends of a likelihood
(a loop), and to a point-mass constraint. The message Eq receives from δ
cannot be computed from the loop itself, so it is seeded with a breaker
message.
"""

import numpy as np

from forney import (
    EqualityNode,
    FactorGraph,
    FactorNode,
    Factorization,
    PointMassConstraint,
    Subgraph,
    graph2dot,
    seed_breakers,
)
from forney.graph.traversal import has_loops


def main():
    g = FactorGraph("point_mass_loop")
    prior = FactorNode(["out"], label="prior", id="prior", graph=g)
    likelihood = FactorNode(["in", "out"], label="lik", id="lik", graph=g)
    eq = EqualityNode(4, id="eq", graph=g)
    delta = PointMassConstraint(id="delta", graph=g)

    e_prior = g.connect(prior.i["out"], eq.interfaces[0])
    e_lik = g.connect(eq.interfaces[1], likelihood.i["in"])
    e_delta = g.connect(eq.interfaces[2], delta.i["out"])
    # Close the loop: the likelihood feeds back into the equality node
    e_loop = g.connect(likelihood.i["out"], eq.interfaces[3])

    print(f"Graph: {g}")
    print(f"Edges: {len(g.edges())}")
    print(f"Has loops: {has_loops(g.get_nodes())}")

    q_x = Subgraph("q(x)", [eq, delta], graph=g)
    q_prior = Subgraph("q(prior)", [prior, likelihood], graph=g)
    factorization = Factorization({e_prior: q_prior, e_lik: q_prior, e_loop: q_prior, e_delta: q_x})

    sites = seed_breakers(g)
    print(f"\nBreaker sites: {len(sites)}")
    for site in sites:
        msg = site.partner_interface.message
        print(f"  {site.interface!r}: {msg.payload_type} "
              f"m={float(msg.parameters['m'])}, v={float(msg.parameters['v'])}")
        assert np.isclose(msg.parameters["v"], 1.0)

    print("\nDOT:")
    print(graph2dot(g, factorization))


if __name__ == "__main__":
    main()
