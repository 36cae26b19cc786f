"""
Tidy tree layout (Reingold-Tilford, in Buchheim/Junger/Leipert linear time).

Positions are computed in two walks over a wrapper tree:

1. A post-order walk assigns each node a preliminary breadth `prelim` relative
   to its left sibling and pushes subtrees apart along their contours.
2. A pre-order walk sums modifiers down the tree to get final breadths.

The breadth extent is then scaled into `[0, width]`. Depth is banded: every
node sits at `depth * band_height`, however deep or shallow the tree is.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .errors import LayoutBoundsError
from .hierarchy import Hierarchy
from .models import LayoutNode

Separation = Callable[[LayoutNode, LayoutNode], float]


def default_separation(a: LayoutNode, b: LayoutNode) -> float:
    """One slot between siblings, two between cousins."""
    return 1.0 if a.parent_key == b.parent_key else 2.0


class _WalkNode:
    """Per-node bookkeeping for the two layout walks."""

    __slots__ = (
        "node", "parent", "children", "index",
        "ancestor", "default_ancestor", "thread",
        "prelim", "mod", "change", "shift",
    )

    def __init__(self, node: Optional[LayoutNode], index: int):
        self.node = node
        self.parent: Optional[_WalkNode] = None
        self.children: List[_WalkNode] = []
        self.index = index
        self.ancestor: _WalkNode = self
        self.default_ancestor: Optional[_WalkNode] = None
        self.thread: Optional[_WalkNode] = None
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0


def _next_left(v: _WalkNode) -> Optional[_WalkNode]:
    return v.children[0] if v.children else v.thread


def _next_right(v: _WalkNode) -> Optional[_WalkNode]:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wm: _WalkNode, wp: _WalkNode, shift: float) -> None:
    change = shift / (wp.index - wm.index)
    wp.change -= change
    wp.shift += shift
    wm.change += change
    wp.prelim += shift
    wp.mod += shift


def _execute_shifts(v: _WalkNode) -> None:
    shift = 0.0
    change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _post_order(root: _WalkNode) -> List[_WalkNode]:
    """Children left to right, then the parent."""
    out: List[_WalkNode] = []
    stack = [root]
    while stack:
        v = stack.pop()
        out.append(v)
        stack.extend(v.children)
    out.reverse()
    return out


def _next_ancestor(vim: _WalkNode, v: _WalkNode, ancestor: _WalkNode) -> _WalkNode:
    return vim.ancestor if vim.ancestor.parent is v.parent else ancestor


class TreeLayout:
    """
    Assigns breadth (`x`) and banded depth (`y`) to the nodes of a hierarchy.

    The layout is a pure function of the hierarchy and the configured extent:
    no randomness, no state carried between runs.

    Attributes:
        width: Drawable breadth extent
        height: Drawable depth extent
        band_height: Vertical distance between depth levels; None spreads the
            levels proportionally over `height` instead
        separation: Gap function between two adjacent nodes, in slots
    """

    def __init__(
        self,
        width: float,
        height: float,
        band_height: float | None = 60.0,
        separation: Separation | None = None,
    ):
        if width <= 0 or height <= 0:
            raise LayoutBoundsError(width, height)
        self.width = float(width)
        self.height = float(height)
        self.band_height = None if band_height is None else float(band_height)
        self.separation = separation or default_separation

    def run(self, hierarchy: Hierarchy) -> List[LayoutNode]:
        """
        Lay out every node of `hierarchy`.

        Returns:
            New layout nodes, in the hierarchy's pre-order, with x and y set
        """
        if not hierarchy.nodes:
            return []

        wrapped = self._wrap(hierarchy)
        order = [wrapped[n.key] for n in hierarchy.nodes]
        root = order[0]

        for v in _post_order(root):
            self._first_walk(v)
        root.parent.mod = -root.prelim
        breadth: Dict[str, float] = {}
        for v in order:
            breadth[v.node.key] = v.prelim + v.parent.mod
            v.mod += v.parent.mod

        return self._fit(hierarchy.nodes, breadth)

    # ----- walks -----
    def _wrap(self, hierarchy: Hierarchy) -> Dict[str, _WalkNode]:
        wrapped = {n.key: _WalkNode(n, n.index) for n in hierarchy.nodes}
        for n in hierarchy.nodes:
            w = wrapped[n.key]
            w.children = [wrapped[c] for c in hierarchy.children_of[n.key]]
            for c in w.children:
                c.parent = w
        # Sentinel above the root so the root has a sibling list like any node
        sentinel = _WalkNode(None, 0)
        root = wrapped[hierarchy.nodes[0].key]
        sentinel.children = [root]
        root.parent = sentinel
        return wrapped

    def _first_walk(self, v: _WalkNode) -> None:
        siblings = v.parent.children
        w = siblings[v.index - 1] if v.index else None
        if v.children:
            _execute_shifts(v)
            midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
            if w is not None:
                v.prelim = w.prelim + self.separation(v.node, w.node)
                v.mod = v.prelim - midpoint
            else:
                v.prelim = midpoint
        elif w is not None:
            v.prelim = w.prelim + self.separation(v.node, w.node)
        v.parent.default_ancestor = self._apportion(
            v, w, v.parent.default_ancestor or siblings[0]
        )

    def _apportion(
        self, v: _WalkNode, w: Optional[_WalkNode], ancestor: _WalkNode
    ) -> _WalkNode:
        if w is None:
            return ancestor

        # i = inner, o = outer, p = right contour, m = left contour
        vip = vop = v
        vim = w
        vom = v.parent.children[0]
        sip = vip.mod
        sop = vop.mod
        sim = vim.mod
        som = vom.mod

        vim = _next_right(vim)
        vip = _next_left(vip)
        while vim is not None and vip is not None:
            vom = _next_left(vom)
            vop = _next_right(vop)
            vop.ancestor = v
            shift = vim.prelim + sim - vip.prelim - sip + self.separation(vim.node, vip.node)
            if shift > 0:
                _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
                sip += shift
                sop += shift
            sim += vim.mod
            sip += vip.mod
            som += vom.mod
            sop += vop.mod
            vim = _next_right(vim)
            vip = _next_left(vip)

        if vim is not None and _next_right(vop) is None:
            vop.thread = vim
            vop.mod += sim - sop
        if vip is not None and _next_left(vom) is None:
            vom.thread = vip
            vom.mod += sop - som
            ancestor = v
        return ancestor

    # ----- scaling -----
    def _fit(self, nodes: List[LayoutNode], breadth: Dict[str, float]) -> List[LayoutNode]:
        left = right = bottom = nodes[0]
        for n in nodes:
            if breadth[n.key] < breadth[left.key]:
                left = n
            if breadth[n.key] > breadth[right.key]:
                right = n
            if n.depth > bottom.depth:
                bottom = n

        s = 1.0 if left is right else self.separation(left, right) / 2
        tx = s - breadth[left.key]
        kx = self.width / (breadth[right.key] + s + tx)
        ky = self.height / (bottom.depth or 1)
        band = ky if self.band_height is None else self.band_height

        placed = []
        for n in nodes:
            x = (breadth[n.key] + tx) * kx
            placed.append(n.placed(x, n.depth * band))
        return placed
