"""
Hierarchy builder: derives the visible part of a tree for one layout pass.

The traversal is pre-order with children in stored order. Layout assigns
breadth slots in traversal order, so the order here is part of the contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .enums import Visibility
from .errors import DuplicateKeyError, MalformedTreeError
from .models import LayoutNode
from .tree import TreeNode


@dataclass
class Hierarchy:
    """
    Visible nodes of a tree, ready for layout.

    Attributes:
        nodes: Placeholder layout nodes in pre-order (x/y not yet assigned)
        links: (parent_key, child_key) pairs in pre-order of the child
        children_of: parent key -> ordered visible child keys
        tree_nodes: key -> the TreeNode each placeholder was derived from
    """

    nodes: List[LayoutNode] = field(default_factory=list)
    links: List[Tuple[str, str]] = field(default_factory=list)
    children_of: Dict[str, List[str]] = field(default_factory=dict)
    tree_nodes: Dict[str, TreeNode] = field(default_factory=dict)

    @property
    def root(self) -> LayoutNode:
        return self.nodes[0]

    def max_depth(self) -> int:
        return max((n.depth for n in self.nodes), default=0)


def build_hierarchy(root: TreeNode) -> Hierarchy:
    """
    Walk the expanded part of `root` into a `Hierarchy`.

    A collapsed node is itself included; its hidden descendants are not.

    Raises:
        MalformedTreeError: If a node has no key, or the same node object is
            reached twice (a cycle or a subtree shared between parents)
        DuplicateKeyError: If two visible nodes share a key
    """
    h = Hierarchy()
    seen_objects = set()
    # (node, depth, parent_key, sibling index)
    stack: List[Tuple[TreeNode, int, str | None, int]] = [(root, 0, None, 0)]

    while stack:
        node, depth, parent_key, index = stack.pop()
        if id(node) in seen_objects:
            raise MalformedTreeError(
                f"Node {node.key!r} is reachable more than once (cycle or shared subtree)"
            )
        seen_objects.add(id(node))

        if not node.key:
            raise MalformedTreeError(
                f"Node under {parent_key!r} at depth {depth} has no key"
            )
        if node.key in h.tree_nodes:
            raise DuplicateKeyError(node.key)

        h.tree_nodes[node.key] = node
        h.nodes.append(
            LayoutNode(
                key=node.key,
                name=node.name,
                depth=depth,
                parent_key=parent_key,
                index=index,
            )
        )
        h.children_of[node.key] = []
        if parent_key is not None:
            h.links.append((parent_key, node.key))
            h.children_of[parent_key].append(node.key)

        if node.visibility == Visibility.EXPANDED:
            children = node.children
            for i in range(len(children) - 1, -1, -1):
                stack.append((children[i], depth + 1, node.key, i))

    return h
