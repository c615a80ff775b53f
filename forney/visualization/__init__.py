"""
Visualization module: DOT export and Graphviz rendering.
"""

from forney.visualization.dot import (
    DotStyle,
    graph2dot,
    dot2svg,
    graph_pdf,
    validate_graphviz_installed,
)

__all__ = [
    "DotStyle",
    "graph2dot",
    "dot2svg",
    "graph_pdf",
    "validate_graphviz_installed",
]
