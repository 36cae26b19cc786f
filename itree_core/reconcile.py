"""
Keyed enter/update/exit reconciliation between two render sets.

Nodes are classified first so that the anchor can be advanced to the
interacted node's new position before exiting nodes and links pick their
destination from it.
"""

from __future__ import annotations

from typing import List, Tuple

from .enums import DiffGroup
from .models import (
    Anchor,
    DrawPlan,
    LinkTransition,
    NodeTransition,
    RenderSet,
    Segment,
)


def reconcile(
    previous: RenderSet,
    current: RenderSet,
    anchor: Anchor,
    duration: float = 750.0,
) -> Tuple[DrawPlan, Anchor]:
    """
    Diff `current` against `previous` and describe the transition between them.

    Args:
        previous: Render set of the last completed pass (empty on first render)
        current: Render set of the new pass
        anchor: Position snapshot of the interacted node
        duration: Transition length handed to the presentation boundary

    Returns:
        (plan, anchor) where anchor's current position has been advanced if the
        anchor node survived into `current`
    """
    entering: List[NodeTransition] = []
    updating: List[NodeTransition] = []
    exiting: List[NodeTransition] = []

    for key, node in current.nodes.items():
        old = previous.nodes.get(key)
        if old is None:
            entering.append(
                NodeTransition(key, node.name, DiffGroup.ENTERING, anchor.origin, node.pos)
            )
            continue
        updating.append(
            NodeTransition(key, node.name, DiffGroup.UPDATING, old.pos, node.pos)
        )
        if key == anchor.key:
            anchor = anchor.advance(node.pos)

    for key, old in previous.nodes.items():
        if key not in current.nodes:
            exiting.append(
                NodeTransition(key, old.name, DiffGroup.EXITING, old.pos, anchor.current)
            )

    entering_links: List[LinkTransition] = []
    updating_links: List[LinkTransition] = []
    exiting_links: List[LinkTransition] = []

    for key, link in current.links.items():
        old_link = previous.links.get(key)
        if old_link is None:
            entering_links.append(
                LinkTransition(
                    link.source_key,
                    link.target_key,
                    DiffGroup.ENTERING,
                    Segment.degenerate(anchor.origin),
                    link.segment,
                )
            )
        else:
            updating_links.append(
                LinkTransition(
                    link.source_key,
                    link.target_key,
                    DiffGroup.UPDATING,
                    old_link.segment,
                    link.segment,
                )
            )

    for key, old_link in previous.links.items():
        if key not in current.links:
            exiting_links.append(
                LinkTransition(
                    old_link.source_key,
                    old_link.target_key,
                    DiffGroup.EXITING,
                    old_link.segment,
                    Segment.degenerate(anchor.current),
                )
            )

    plan = DrawPlan(
        entering=entering,
        updating=updating,
        exiting=exiting,
        entering_links=entering_links,
        updating_links=updating_links,
        exiting_links=exiting_links,
        duration=duration,
    )
    return plan, anchor
