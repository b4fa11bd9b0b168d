"""Graphviz visualization helpers for derivation trees.

Provides `render_tree_dot(node)` which returns a `graphviz.Digraph` object
(not rendered). `write_and_render` writes and renders it to disk.

Layout: productions are drawn as ellipses labelled with the rule name (and
the computed type for expressions); consumed tokens are drawn as boxes in
their wire form. Edges run top-down from a production to its children in
source order.
"""

from typing import Optional

from graphviz import Digraph

from parse_tree import NodeKind, ParseNode


def _add_node(dot: Digraph, node: ParseNode, counter: list) -> str:
    node_id = f"n{counter[0]}"
    counter[0] += 1

    if node.kind == NodeKind.TOKEN:
        dot.node(node_id, label=node.name, shape="box", style="filled", fillcolor="#efefff")
    else:
        # expression nodes carry a type; highlight them
        fill = "#efffef" if node.symbol_type is not None else "white"
        dot.node(node_id, label=node.label, shape="ellipse", style="filled", fillcolor=fill)

    for child in node.children:
        child_id = _add_node(dot, child, counter)
        dot.edge(node_id, child_id)
    return node_id


def render_tree_dot(node: Optional[ParseNode], title: Optional[str] = None) -> Digraph:
    """Return a graphviz.Digraph for the given derivation tree.

    The caller may inspect `dot.source`, or call `dot.render(filename, format=...)`
    to write files (requires the Graphviz binaries).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", fontname="Helvetica", fontsize="10")
    if title:
        dot.attr(label=title, labelloc="t")

    if node is not None:
        _add_node(dot, node, [0])
    return dot


def write_and_render(
    node: Optional[ParseNode], out_path: str, fmt: str = "svg", title: Optional[str] = None
) -> str:
    """Write and render the tree to `out_path` (without extension).

    Example: write_and_render(tree, 'out/tree', fmt='png') creates out/tree.png.
    Returns the path of the rendered file.
    """
    dot = render_tree_dot(node, title=title)
    dot.format = fmt
    # render appends the extension
    return dot.render(out_path, cleanup=True)
