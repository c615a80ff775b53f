"""
Example: composite node export.

A composite wraps an equality node and a point-mass constraint and exposes
two of the equality node's interfaces. The outer graph sees a single node;
the DOT export of the composite shows its internals.
"""

from forney import (
    CompositeNode,
    EqualityNode,
    FactorGraph,
    PointMassConstraint,
    TerminalNode,
    graph2dot,
    validate_breakers,
)


def main():
    inner = FactorGraph("inner")
    eq = EqualityNode(id="eq", graph=inner)
    delta = PointMassConstraint(id="delta", graph=inner)
    inner.connect(eq.interfaces[2], delta.i["out"])

    outer = FactorGraph("outer")
    comp = CompositeNode([eq, delta], {"in": eq.interfaces[0], "out": eq.interfaces[1]},
                         id="constrained", graph=outer)
    a = TerminalNode(id="a", graph=outer)
    b = TerminalNode(id="b", graph=outer)
    outer.connect(a.i["out"], comp.i["in"])
    outer.connect(comp.i["out"], b.i["out"])

    print(f"Outer nodes (closed): {sorted(n.id for n in outer.get_nodes())}")
    print(f"Outer nodes (open):   {sorted(n.id for n in outer.get_nodes(open_composites=True))}")

    for site in validate_breakers(outer):
        print(f"Breaker needed at {site.interface!r} ({site.parameters.payload_type})")

    print("\nOuter graph:")
    print(graph2dot(outer))
    print("\nComposite internals:")
    print(graph2dot(comp))


if __name__ == "__main__":
    main()
