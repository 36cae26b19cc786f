"""
Lightweight visualization utilities decoupled from any UI toolkit to enable testing.
"""

from __future__ import annotations

from typing import List, Dict, Any

from itree_core.engine import InteractiveTree


def build_cytoscape_elements(tree: InteractiveTree) -> List[Dict[str, Any]]:
    """Convert the last render pass of a tree into Cytoscape-compatible elements.

    Nodes carry preset positions from the layout, so the widget should be
    configured with the `preset` layout. Collapsed nodes are flagged and
    colored so users can tell which nodes hide children.
    """
    elements: List[Dict[str, Any]] = []

    # Nodes
    for key, n in tree.render_set.nodes.items():
        tree_node = tree.visibility.node(key)
        collapsed = bool(tree_node is not None and tree_node.hidden_children)
        elements.append({
            "data": {
                "id": key,
                "label": n.name,
                "depth": n.depth,
                "collapsed": collapsed,
                "color": _color_for_node(collapsed, tree_node is not None and tree_node.is_leaf()),
            },
            "position": {"x": float(n.x), "y": float(n.y)},
        })

    # Edges
    for (src, dst) in tree.render_set.links:
        elements.append({
            "data": {
                "id": f"{src}->{dst}",
                "source": src,
                "target": dst,
            }
        })

    return elements


def _color_for_node(collapsed: bool, leaf: bool) -> str:
    if collapsed:
        return "#1F5FAA"
    if leaf:
        return "#9CA3AF"
    return "#4A90E2"
