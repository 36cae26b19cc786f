from __future__ import annotations

from typing import Iterable, Iterator, List

from itree_core.models import DrawPlan

from itree_anim.adapters.base import FramePresenter, InteractionSource


class RecordingPresenter(FramePresenter):
    def __init__(self):
        self.plans: List[DrawPlan] = []

    def render_frame(self, plan: DrawPlan) -> None:
        self.plans.append(plan)

    @property
    def last(self) -> DrawPlan | None:
        return self.plans[-1] if self.plans else None


class ListInteractionSource(InteractionSource):
    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)

    def stream_interactions(self) -> Iterator[str]:
        yield from self.keys
