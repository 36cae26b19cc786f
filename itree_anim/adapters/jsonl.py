from __future__ import annotations

import json
import logging
from typing import IO, Iterator

from itree_core.models import DrawPlan

from itree_anim.adapters.base import FramePresenter, InteractionSource
from itree_anim.script.compiler import compile_plan_to_frames

logger = logging.getLogger(__name__)


class JsonlPlanRecorder(FramePresenter):
    """
    Appends each draw plan as one JSON line to an open text stream.

    With `fps` > 0 every record also carries the plan sampled into eased
    frames under `"frames"`.
    """

    def __init__(self, stream: IO[str], fps: float = 0.0):
        self.stream = stream
        self.fps = fps
        self.count = 0

    def render_frame(self, plan: DrawPlan) -> None:
        record = {"type": "DrawPlan", "index": self.count, **plan.to_dict()}
        if self.fps > 0:
            record["frames"] = [f.to_dict() for f in compile_plan_to_frames(plan, fps=self.fps)]
        self.stream.write(json.dumps(record))
        self.stream.write("\n")
        self.count += 1


class JsonlInteractionSource(InteractionSource):
    """
    Reads clicks from a JSONL file.

    Each line is `{"type": "Click", "key": "..."}`; blank lines and other
    record types are skipped.
    """

    def __init__(self, path: str):
        self.path = path

    def stream_interactions(self) -> Iterator[str]:
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                obj = json.loads(line)
                if obj.get("type") != "Click" or "key" not in obj:
                    logger.debug("Skipping non-click record: %s", line)
                    continue
                yield str(obj["key"])
