#!/usr/bin/env python3
"""
Forney: factor graphs with breaker-message cycle resolution

Command-line front end for building the demo models, validating their
breaker configuration and exporting them as DOT.

Usage:
    # Run demos
    python main.py demo --example point-mass

    # Export a demo model as DOT
    python main.py dot --example equality --output graph.dot

    # Validate breaker configuration and list the breaker sites
    python main.py validate --example composite

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Tuple

import networkx
import numpy as np

# Handle imports whether running as package or directly
try:
    from forney import (
        CompositeNode,
        EqualityNode,
        FactorGraph,
        FactorNode,
        Factorization,
        PointMassConstraint,
        Subgraph,
        TerminalNode,
        graph2dot,
        seed_breakers,
        validate_breakers,
        __version__,
    )
    from forney.errors import BreakerConfigurationError
    from forney.graph.traversal import has_loops
except ImportError:
    sys.path.insert(0, str(Path(__file__).parent))
    from forney import (
        CompositeNode,
        EqualityNode,
        FactorGraph,
        FactorNode,
        Factorization,
        PointMassConstraint,
        Subgraph,
        TerminalNode,
        graph2dot,
        seed_breakers,
        validate_breakers,
        __version__,
    )
    from forney.errors import BreakerConfigurationError
    from forney.graph.traversal import has_loops

logger = logging.getLogger("forney.cli")

Model = Tuple[FactorGraph, Factorization]


def build_equality_model() -> Model:
    """T1 -- Eq -- T2 with the third equality interface left open."""
    g = FactorGraph("equality")
    t1 = TerminalNode(id="t1", graph=g)
    t2 = TerminalNode(id="t2", graph=g)
    eq = EqualityNode(id="eq", graph=g)
    g.connect(eq.interfaces[0], t1.i["out"])
    g.connect(eq.interfaces[1], t2.i["out"])
    return g, Factorization()


def build_point_mass_model() -> Model:
    """Ordinary factor V constrained by a point mass, split into two subgraphs."""
    g = FactorGraph("point_mass")
    v = FactorNode(["out"], label="V", id="v", graph=g)
    pm = PointMassConstraint(id="pm", graph=g)
    edge = g.connect(v.i["out"], pm.i["out"])
    sg = Subgraph("q(x)", [v, pm], graph=g)
    return g, Factorization({edge: sg})


def build_composite_model() -> Model:
    """A composite wrapping Eq + delta, exposed through two interfaces."""
    inner = FactorGraph("composite_inner")
    eq = EqualityNode(id="eq", graph=inner)
    pm = PointMassConstraint(id="pm", graph=inner)
    inner.connect(eq.interfaces[2], pm.i["out"])

    g = FactorGraph("composite")
    comp = CompositeNode(
        [eq, pm],
        {"in": eq.interfaces[0], "out": eq.interfaces[1]},
        id="constrained",
        graph=g,
    )
    t_in = TerminalNode(id="t_in", graph=g)
    t_out = TerminalNode(id="t_out", graph=g)
    g.connect(t_in.i["out"], comp.i["in"])
    g.connect(comp.i["out"], t_out.i["out"])
    return g, Factorization()


MODELS: Dict[str, Callable[[], Model]] = {
    "equality": build_equality_model,
    "point-mass": build_point_mass_model,
    "composite": build_composite_model,
}


def describe_model(name: str, graph: FactorGraph) -> None:
    nodes = graph.get_nodes(open_composites=True)
    print(f"  Model: {name}")
    print(f"  Nodes (closed): {len(graph)}")
    print(f"  Nodes (open composites): {len(nodes)}")
    print(f"  Edges: {len(graph.edges())}")
    print(f"  Has loops: {has_loops(graph.get_nodes())}")


def run_demo(name: str) -> bool:
    print("=" * 60)
    print(f"Demo: {name}")
    print("=" * 60)

    graph, factorization = MODELS[name]()
    describe_model(name, graph)

    sites = seed_breakers(graph)
    print(f"\n  Breaker sites: {len(sites)}")
    for site in sites:
        print(f"    {site.interface!r} <- {site.breaker_node.id} : {site.parameters.payload_type}")
        print(f"      seed = {site.partner_interface.message!r}")

    print()
    print(graph2dot(graph, factorization))
    return True


def cmd_demo(args):
    """Execute the demo command."""
    names = list(MODELS) if args.example == "all" else [args.example]
    results = []
    for name in names:
        try:
            results.append((name, run_demo(name)))
        except BreakerConfigurationError as e:
            print(f"Error in {name}: {e}")
            results.append((name, False))
        print()

    if len(results) > 1:
        print("=" * 60)
        print("Summary")
        print("=" * 60)
        for name, passed in results:
            status = "✓ PASS" if passed else "✗ FAIL"
            print(f"  {name}: {status}")

    return 0 if all(passed for _, passed in results) else 1


def cmd_dot(args):
    """Execute the dot command."""
    graph, factorization = MODELS[args.example]()
    if args.seed:
        seed_breakers(graph)
    dot = graph2dot(graph, factorization)
    if args.output:
        Path(args.output).write_text(dot + "\n", encoding="utf-8")
        print(f"DOT graph saved to: {args.output}")
    else:
        print(dot)
    return 0


def cmd_validate(args):
    """Execute the validate command."""
    graph, _ = MODELS[args.example]()
    try:
        sites = validate_breakers(graph)
    except BreakerConfigurationError as e:
        print(f"Invalid breaker configuration: {e}")
        return 1

    print(f"Graph {graph.name!r}: {len(sites)} breaker site(s)")
    for site in sites:
        print(f"  {site.interface!r} from {site.breaker_node!r}: "
              f"{site.parameters.payload_type} args={site.parameters.args}")
    return 0


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=forney", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    print(f"Forney v{__version__}")
    print("Factor graphs with breaker-message cycle resolution")
    print()
    print("Demo models:")
    for name, builder in MODELS.items():
        print(f"  {name:<11} - {builder.__doc__}")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)
    print("NetworkX:", networkx.__version__)
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="forney",
        description="Forney: factor graphs with breaker-message cycle resolution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run demos
  forney demo --example point-mass
  forney demo --example all

  # Export DOT, with breaker messages seeded
  forney dot --example composite --seed --output composite.dot

  # Validate breaker configuration
  forney validate --example point-mass

  # Run tests
  forney test -v
"""
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"Forney {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demonstration models")
    demo_parser.add_argument(
        "--example", "-e",
        choices=list(MODELS) + ["all"],
        default="all",
        help="Which model to run (default: all)"
    )

    # Dot command
    dot_parser = subparsers.add_parser("dot", help="Export a demo model as DOT")
    dot_parser.add_argument("--example", "-e", choices=list(MODELS), default="point-mass")
    dot_parser.add_argument("--output", "-o", type=str, help="Output .dot file")
    dot_parser.add_argument("--seed", action="store_true", help="Seed breaker messages first")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate breaker configuration")
    validate_parser.add_argument("--example", "-e", choices=list(MODELS), default="point-mass")

    # Test command
    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    # Info command
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "demo": cmd_demo,
        "dot": cmd_dot,
        "validate": cmd_validate,
        "test": cmd_test,
        "info": cmd_info,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
