"""
Tree data structures for the interactive tree.

This module defines the caller-owned hierarchy that the rest of the core reads:
- Expanded / Collapsed: the two branch states a node can hold its descendants in
- TreeNode: a named, keyed node whose branch is exactly one of the two states
- Helpers to walk the whole tree and export it to NetworkX / GraphML
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from .enums import Visibility

try:
    import networkx as nx

    HAS_NETWORKX = True
except ImportError:
    HAS_NETWORKX = False


@dataclass
class Expanded:
    """Branch state whose children are visible."""

    children: List["TreeNode"] = field(default_factory=list)
    """Visible children in display order."""


@dataclass
class Collapsed:
    """Branch state whose children are stashed out of the layout."""

    hidden: List["TreeNode"] = field(default_factory=list)
    """Hidden children in display order, restored verbatim on expand."""


Branch = Union[Expanded, Collapsed]


@dataclass
class TreeNode:
    """
    A node of the caller-supplied hierarchy.

    Nodes own their descendants exclusively through `branch`, which is either
    `Expanded` or `Collapsed`, so a node can never show and hide children at the
    same time. A leaf is an expanded node with no children.

    Attributes:
        name: Display label
        key: Identity used to match nodes across render passes (defaults to name)
        branch: Current branch state holding the node's descendants
    """

    name: str
    """Display label drawn next to the node."""

    key: Optional[str] = None
    """Unique identity; falls back to `name` when not supplied."""

    branch: Branch = field(default_factory=Expanded)
    """Expanded(children) or Collapsed(hidden)."""

    def __post_init__(self):
        if self.key is None:
            self.key = self.name

    @property
    def visibility(self) -> Visibility:
        if isinstance(self.branch, Collapsed):
            return Visibility.COLLAPSED
        return Visibility.EXPANDED

    @property
    def children(self) -> List["TreeNode"]:
        """Visible children; empty when collapsed."""
        if isinstance(self.branch, Expanded):
            return self.branch.children
        return []

    @property
    def hidden_children(self) -> List["TreeNode"]:
        """Hidden children; empty when expanded."""
        if isinstance(self.branch, Collapsed):
            return self.branch.hidden
        return []

    @property
    def descendants_holder(self) -> List["TreeNode"]:
        """Children regardless of branch state."""
        if isinstance(self.branch, Collapsed):
            return self.branch.hidden
        return self.branch.children

    def is_leaf(self) -> bool:
        return not self.descendants_holder

    def add_child(self, child: "TreeNode") -> "TreeNode":
        """Append `child` to whichever list currently holds the descendants."""
        self.descendants_holder.append(child)
        return child


def iter_all(root: TreeNode) -> Iterator[TreeNode]:
    """
    Pre-order walk over every node, including those below collapsed nodes.

    The walk does not guard against cycles; use `build_hierarchy` to validate a
    tree before trusting this traversal.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.descendants_holder))


def find_node(root: TreeNode, key: str) -> Optional[TreeNode]:
    """Return the first node with `key` anywhere in the tree, or None."""
    for node in iter_all(root):
        if node.key == key:
            return node
    return None


def to_networkx(root: TreeNode) -> "nx.DiGraph":
    """
    Convert the full tree (visible and hidden nodes) to a NetworkX DiGraph.

    Node attributes: name, visibility, hidden (True when below a collapsed
    ancestor). Edge attributes: order (child index under its parent).

    Raises:
        ImportError: If NetworkX is not available
    """
    if not HAS_NETWORKX:
        raise ImportError(
            "NetworkX is required for graph conversion. Install with: pip install networkx"
        )

    G = nx.DiGraph()
    stack = [(root, False)]
    while stack:
        node, hidden = stack.pop()
        G.add_node(
            node.key,
            name=node.name,
            visibility=node.visibility.name,
            hidden=hidden,
        )
        below_hidden = hidden or node.visibility == Visibility.COLLAPSED
        for order, child in enumerate(node.descendants_holder):
            G.add_edge(node.key, child.key, order=order)
        stack.extend((c, below_hidden) for c in reversed(node.descendants_holder))
    return G


def export_graphml(root: TreeNode, filepath: str) -> None:
    """
    Export the full tree to GraphML so it can be opened in graph tools.

    Args:
        root: Root of the tree to export
        filepath: Path where to save the GraphML file

    Raises:
        ImportError: If NetworkX is not available
    """
    nx_graph = to_networkx(root)
    nx.write_graphml(nx_graph, filepath)
