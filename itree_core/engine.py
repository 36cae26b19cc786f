"""
Interactive tree controller.

This module ties the core together. One render pass runs:

1. Hierarchy: derive the visible nodes of the tree
2. Layout: assign x (breadth) and banded y (depth)
3. Reconciliation: diff against the previous render set around an anchor
4. Hand-off: store the new render set and forward the draw plan

Everything is synchronous. There is no notion of an in-flight animation: the
"previous" position of a node is always its last computed target, so a click
that arrives mid-transition restarts from targets rather than from where the
presentation boundary happens to be drawing.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .config import TreeConfig
from .hierarchy import build_hierarchy
from .layout import TreeLayout
from .models import Anchor, DrawPlan, RenderSet
from .reconcile import reconcile
from .tree import TreeNode, iter_all
from .visibility import (
    VisibilityStateMachine,
    collapse_all,
    collapse_to_depth,
    expand_all,
    toggle,
)

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    def render_frame(self, plan: DrawPlan) -> None:
        ...


class InteractiveTree:
    """
    Collapsible tree that turns clicks into draw plans.

    Attributes:
        root: Caller-supplied tree, mutated in place by toggles
        config: Canvas extent, margins, band height and transition duration
        render_set: Render set of the last completed pass
        anchor: Anchor used by the last completed pass
        visibility: Expand/collapse state machine for `root`
    """

    def __init__(
        self,
        root: TreeNode,
        config: TreeConfig | None = None,
        presenter: Presenter | None = None,
    ):
        """
        Args:
            root: Tree to display
            config: Layout configuration (defaults to `TreeConfig()`)
            presenter: Optional sink receiving every draw plan

        Raises:
            LayoutBoundsError: If the margins leave no drawable area
        """
        self.root = root
        self.config = config or TreeConfig()
        self.config.validate()
        self.presenter = presenter
        self.layout = TreeLayout(
            self.config.drawable_width,
            self.config.drawable_height,
            band_height=self.config.band_height,
        )
        self.visibility = VisibilityStateMachine(root)
        self.render_set = RenderSet.empty()
        self.anchor: Optional[Anchor] = None
        self.passes = 0

    @property
    def mounted(self) -> bool:
        return self.anchor is not None

    def mount(self) -> DrawPlan:
        """
        Run the first render pass.

        Every node enters from the root's position at depth 0.
        """
        current = self._layout_pass()
        root = next(iter(current.nodes.values()))
        anchor = Anchor(root.key, root.x, 0.0, root.x, 0.0)
        return self._commit(current, anchor)

    def on_interaction(self, key: str) -> Optional[DrawPlan]:
        """
        Handle a click on the node with `key`.

        Returns:
            The draw plan of the resulting pass, or None when the click is a
            no-op (leaf, unknown key, or a node that is no longer visible)

        Raises:
            MalformedTreeError, DuplicateKeyError: If the re-derived tree is
                invalid; the toggle is reverted before the error propagates
        """
        if not self.mounted:
            self.mount()

        last = self.render_set.nodes.get(key)
        if last is None:
            logger.debug("Click on %r ignored: not in the current render set", key)
            return None

        # Snapshot before the tree changes
        anchor = Anchor.at(last)
        node = self.visibility.toggle(key)
        if node is None:
            return None

        try:
            current = self._layout_pass()
        except Exception:
            toggle(node)
            raise
        logger.info("Toggled %r to %s", key, node.visibility.name)
        return self._commit(current, anchor)

    # ----- bulk changes -----
    def expand_all(self) -> Optional[DrawPlan]:
        """Expand every node and re-render; None if nothing changed."""
        return self._apply_bulk("expand all", expand_all)

    def collapse_all(self) -> Optional[DrawPlan]:
        """Collapse everything below the root and re-render; None if nothing changed."""
        return self._apply_bulk("collapse all", collapse_all)

    def collapse_to_depth(self, depth: int) -> Optional[DrawPlan]:
        """Show nodes down to `depth` only and re-render; None if nothing changed."""
        return self._apply_bulk(
            f"collapse to depth {depth}", lambda root: collapse_to_depth(root, depth)
        )

    def _apply_bulk(self, label: str, change: Callable[[TreeNode], int]) -> Optional[DrawPlan]:
        if not self.mounted:
            self.mount()

        # Bulk changes transition around the root
        anchor = Anchor.at(self.render_set.nodes[self.root.key])
        before = [(n, n.branch) for n in iter_all(self.root)]
        changed = change(self.root)
        if not changed:
            return None

        try:
            current = self._layout_pass()
        except Exception:
            for n, branch in before:
                n.branch = branch
            raise
        logger.info("Applied %s (%d nodes changed)", label, changed)
        return self._commit(current, anchor)

    # ----- internals -----
    def _layout_pass(self) -> RenderSet:
        hierarchy = build_hierarchy(self.root)
        nodes = self.layout.run(hierarchy)
        current = RenderSet.from_layout(nodes)
        self.visibility.index(hierarchy)
        return current

    def _commit(self, current: RenderSet, anchor: Anchor) -> DrawPlan:
        plan, anchor = reconcile(self.render_set, current, anchor, self.config.duration)
        self.render_set = current
        self.anchor = anchor
        self.passes += 1
        logger.debug("Render pass %d: %s", self.passes, plan.summary())
        if self.presenter is not None:
            self.presenter.render_frame(plan)
        return plan
