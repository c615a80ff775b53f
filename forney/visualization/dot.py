"""
forney/visualization/dot.py

DOT export of factor graphs.

graph2dot only reads the finished graph and returns a string; rendering is
delegated to the Graphviz ``dot`` executable.
http://en.wikipedia.org/wiki/DOT_(graph_description_language)
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Union

from forney.errors import GraphvizNotInstalledError
from forney.graph.capabilities import NodeKind
from forney.graph.composite import CompositeNode
from forney.graph.edge import Edge, get_edges
from forney.graph.factor_graph import FactorGraph, Subgraph, current_graph
from forney.graph.node import Node
from forney.inference.factorization import Factorization

logger = logging.getLogger(__name__)

NODE_TYPE_SYMBOLS = {
    NodeKind.ADDITION: "+",
    NodeKind.EQUALITY: "=",
}

FILLED_CIRCLE = "&#9679;"
EMPTY_CIRCLE = "&#9675;"

Target = Union[FactorGraph, Subgraph, CompositeNode, Iterable[Node], None]


@dataclass(frozen=True)
class DotStyle:
    """DOT attribute strings for the graph, nodes, edges and terminals."""
    graph_attrs: str = 'splines=true;sep="+25,25";overlap=scalexy;nodesep=1.6;compound=true;'
    node_attrs: str = "shape=box, width=1.0, height=1.0, fontsize=9"
    edge_attrs: str = "fontsize=8, arrowhead=onormal"
    terminal_attrs: str = "style=filled, width=0.75, height=0.75"


def _target_nodes(target: Target) -> Set[Node]:
    if target is None:
        target = current_graph()
    if isinstance(target, (FactorGraph, Subgraph)):
        return target.get_nodes(open_composites=False)
    if isinstance(target, CompositeNode):
        return set(target.internal_nodes())
    return set(target)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _node_label(node: Node) -> str:
    if node.kind in NODE_TYPE_SYMBOLS:
        return f"{NODE_TYPE_SYMBOLS[node.kind]}\\n{_escape(node.id)}"
    if node.kind is NodeKind.TERMINAL:
        return _escape(node.id)
    if node.kind is NodeKind.COMPOSITE:
        label = type(node).__name__
    else:
        label = getattr(node, "label", None) or node.slug
    return f"{_escape(label)}\\n{_escape(node.id)}"


def _edge_label(edge: Edge, factorization: Optional[Factorization]) -> str:
    fw = FILLED_CIRCLE if edge.forward_message is not None else EMPTY_CIRCLE
    bw = FILLED_CIRCLE if edge.backward_message is not None else EMPTY_CIRCLE
    fw_type = edge.forward_payload_type or ""
    bw_type = edge.backward_payload_type or ""
    label = f"FW: {fw} {fw_type}\\nBW: {bw} {bw_type}\\n"
    if factorization is not None:
        subgraph = factorization.lookup(edge)
        if subgraph is not None:
            label += f"Subgraph: {_escape(str(subgraph))}"
    return label


def graph2dot(
    target: Target = None,
    factorization: Optional[Factorization] = None,
    style: Optional[DotStyle] = None,
) -> str:
    """
    Render the nodes of a target and the edges between them as DOT.

    Args:
        target: Graph, subgraph, composite node (its internal nodes) or node
            collection; defaults to the current graph
        factorization: Optional edge -> subgraph assignment shown on edges
        style: Attribute defaults

    Returns:
        DOT source text
    """
    style = style or DotStyle()
    nodes = sorted(_target_nodes(target), key=lambda n: n.id)
    edges = sorted(get_edges(nodes, include_external=False), key=lambda e: e.key)

    lines: List[str] = [f"digraph G{{{style.graph_attrs}"]
    lines.append(f"\tnode [{style.node_attrs}];")
    lines.append(f"\tedge [{style.edge_attrs}];")
    for node in nodes:
        if node.kind is NodeKind.TERMINAL:
            lines.append(f'\t"{_escape(node.id)}" [label="{_node_label(node)}", {style.terminal_attrs}]')
        else:
            lines.append(f'\t"{_escape(node.id)}" [label="{_node_label(node)}"]')

    for edge in edges:
        tail_label = _escape(edge.label_for(edge.tail))
        head_label = _escape(edge.label_for(edge.head))
        lines.append(
            f'\t"{_escape(edge.tail.node.id)}" -> "{_escape(edge.head.node.id)}" '
            f'[taillabel="{tail_label}", headlabel="{head_label}", '
            f'label="{_edge_label(edge, factorization)}"]'
        )
    lines.append("}")
    return "\n".join(lines)


def validate_graphviz_installed() -> None:
    """Raise GraphvizNotInstalledError unless ``dot`` can be executed."""
    try:
        result = subprocess.run(["dot", "-V"], capture_output=True, text=True)
    except OSError as e:
        raise GraphvizNotInstalledError(
            "GraphViz is not installed correctly. Make sure GraphViz is installed "
            "and that 'dot' can be run from the command line."
        ) from e
    if result.returncode != 0:
        raise GraphvizNotInstalledError(f"'dot -V' failed: {result.stderr.strip()}")


def dot2svg(dot_graph: str) -> str:
    """Render DOT source to SVG text."""
    validate_graphviz_installed()
    result = subprocess.run(
        ["dot", "-Tsvg"], input=dot_graph, capture_output=True, text=True, check=True
    )
    return result.stdout


def graph_pdf(target: Target, filename: str, factorization: Optional[Factorization] = None) -> None:
    """Render a target to a PDF file."""
    validate_graphviz_installed()
    dot_graph = graph2dot(target, factorization)
    subprocess.run(["dot", "-Tpdf", f"-o{filename}"], input=dot_graph, text=True, check=True)
    logger.info("Wrote graph PDF to %s", filename)
