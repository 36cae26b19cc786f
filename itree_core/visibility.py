"""
Expand/collapse state machine.

Each node is either Expanded(children) or Collapsed(hidden). A toggle flips a
single node and leaves the states of its descendants untouched, so a subtree
that was partially collapsed comes back exactly as it was.

The module-level helpers edit a tree in place and know nothing about render
passes. Once a tree is shown by an `InteractiveTree`, change it through the
controller (`on_interaction`, `expand_all`, ...) so every change yields a
draw plan.
"""

from __future__ import annotations

import logging
from typing import Optional

from .enums import Visibility
from .hierarchy import Hierarchy
from .tree import Collapsed, Expanded, TreeNode, iter_all

logger = logging.getLogger(__name__)


def toggle(node: TreeNode) -> bool:
    """
    Flip `node` between expanded and collapsed.

    Returns:
        True if the node changed state, False for a leaf (no-op)
    """
    if node.is_leaf():
        return False
    if isinstance(node.branch, Expanded):
        node.branch = Collapsed(node.branch.children)
    else:
        node.branch = Expanded(node.branch.hidden)
    return True


def collapse(node: TreeNode) -> bool:
    if node.visibility == Visibility.EXPANDED:
        return toggle(node)
    return False


def expand(node: TreeNode) -> bool:
    if node.visibility == Visibility.COLLAPSED:
        return toggle(node)
    return False


def expand_all(root: TreeNode) -> int:
    """Expand every node in the tree; returns how many changed."""
    return sum(expand(n) for n in list(iter_all(root)))


def collapse_all(root: TreeNode) -> int:
    """Collapse every node except the root; returns how many changed."""
    return sum(collapse(n) for n in list(iter_all(root)) if n is not root)


def collapse_to_depth(root: TreeNode, depth: int) -> int:
    """
    Show nodes down to `depth` and collapse everything at that depth.

    Nodes above `depth` are expanded; nodes at exactly `depth` are
    collapsed. Deeper nodes keep their own state for when they are
    revealed later.
    """
    changed = 0
    stack = [(root, 0)]
    while stack:
        node, d = stack.pop()
        if d < depth:
            changed += expand(node)
            stack.extend((c, d + 1) for c in node.children)
        else:
            changed += collapse(node)
    return changed


class VisibilityStateMachine:
    """
    Owns expand/collapse toggles for one tree.

    Only nodes of the most recently indexed hierarchy can be toggled: a click
    on a key that is not visible (unknown, hidden, or animating out) is an
    ordinary double click and is ignored.

    Attributes:
        root: Root of the tree being toggled
        source_key: Key of the last node that was successfully toggled
    """

    def __init__(self, root: TreeNode):
        self.root = root
        self.source_key: Optional[str] = None
        self._visible = {}

    def index(self, hierarchy: Hierarchy) -> None:
        """Remember which nodes are currently visible."""
        self._visible = dict(hierarchy.tree_nodes)

    def is_visible(self, key: str) -> bool:
        return key in self._visible

    def node(self, key: str) -> Optional[TreeNode]:
        return self._visible.get(key)

    def toggle(self, key: str) -> Optional[TreeNode]:
        """
        Toggle the visible node with `key`.

        Returns:
            The toggled node, or None if the key is not visible or is a leaf
        """
        node = self._visible.get(key)
        if node is None:
            logger.debug("Ignoring toggle of non-visible node %r", key)
            return None
        if not toggle(node):
            logger.debug("Ignoring toggle of leaf node %r", key)
            return None
        self.source_key = key
        return node
