from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from itree_core.models import DrawPlan


class FramePresenter(ABC):
    """Receives every draw plan an `InteractiveTree` produces."""

    @abstractmethod
    def render_frame(self, plan: DrawPlan) -> None:
        ...


class InteractionSource(ABC):
    """Yields the keys of clicked nodes, in order."""

    @abstractmethod
    def stream_interactions(self) -> Iterator[str]:
        ...
