from __future__ import annotations

from typing import Iterable, Iterator

from itree_core.config import TreeConfig
from itree_core.engine import InteractiveTree
from itree_core.tree import TreeNode

from itree_anim.adapters.base import FramePresenter
from itree_anim.models.events import RenderPass


class TreeStepper:
    """Drives an `InteractiveTree` through a sequence of clicks."""

    def __init__(
        self,
        root: TreeNode,
        config: TreeConfig | None = None,
        presenter: FramePresenter | None = None,
    ):
        self.tree = InteractiveTree(root, config or TreeConfig(), presenter=presenter)

    def stream_passes(self, clicks: Iterable[str]) -> Iterator[RenderPass]:
        # Initial mount first, then one pass per effective click
        idx = 0
        if not self.tree.mounted:
            yield RenderPass(index=idx, trigger=None, plan=self.tree.mount())
        for key in clicks:
            plan = self.tree.on_interaction(key)
            if plan is None:
                continue
            idx += 1
            yield RenderPass(index=idx, trigger=key, plan=plan)
