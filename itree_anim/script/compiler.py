from __future__ import annotations

import math
from typing import Dict, List

import numpy as np

from itree_core.enums import DiffGroup
from itree_core.models import DrawPlan, LinkKey

from itree_anim.models.frames import Frame, LinkSprite, NodeSprite
from itree_anim.utils.easing import ease_cubic_in_out, lerp, lerp_point
from itree_anim.utils.paths import link_vertical

NODE_RADIUS = 10.0

# (start, end) of radius and opacity per group
_NODE_STYLE = {
    DiffGroup.ENTERING: ((0.0, NODE_RADIUS), (0.0, 1.0)),
    DiffGroup.UPDATING: ((NODE_RADIUS, NODE_RADIUS), (1.0, 1.0)),
    DiffGroup.EXITING: ((NODE_RADIUS, 0.0), (1.0, 0.0)),
}


def compile_plan_to_frames(plan: DrawPlan, fps: float = 60.0, time_unit: float = 1000.0) -> List[Frame]:
    """Sample a draw plan into eased frames.

    `plan.duration` is measured in `time_unit` per second (milliseconds by
    default). The first frame shows every start position, the last frame the
    end positions; exiting nodes and links are dropped from the last frame.
    """
    n = max(1, int(math.ceil(plan.duration / time_unit * fps)))
    times = np.linspace(0.0, plan.duration, n + 1)
    progress = times / plan.duration if plan.duration > 0 else np.ones_like(times)
    eased = ease_cubic_in_out(progress)
    eased = np.atleast_1d(eased)

    frames: List[Frame] = []
    for i, (t, p, k) in enumerate(zip(times, progress, eased)):
        final = i == n
        nodes: Dict[str, NodeSprite] = {}
        for tr in plan.node_transitions():
            if final and tr.group == DiffGroup.EXITING:
                continue
            (r0, r1), (o0, o1) = _NODE_STYLE[tr.group]
            x, y = lerp_point((tr.start.x, tr.start.y), (tr.end.x, tr.end.y), float(k))
            nodes[tr.key] = NodeSprite(tr.key, tr.name, x, y, lerp(r0, r1, float(k)), lerp(o0, o1, float(k)))

        links: Dict[LinkKey, LinkSprite] = {}
        for lt in plan.link_transitions():
            if final and lt.group == DiffGroup.EXITING:
                continue
            a, b = lt.start_edge, lt.end_edge
            src = lerp_point((a.source.x, a.source.y), (b.source.x, b.source.y), float(k))
            dst = lerp_point((a.target.x, a.target.y), (b.target.x, b.target.y), float(k))
            links[lt.key] = LinkSprite(lt.source_key, lt.target_key, link_vertical(src, dst))

        frames.append(Frame(t=float(t), progress=float(p), nodes=nodes, links=links))
    return frames
