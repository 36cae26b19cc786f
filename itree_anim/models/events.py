from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from itree_core.models import DrawPlan


@dataclass(frozen=True)
class RenderPass:
    """One completed render pass; `trigger` is None for the initial mount."""

    index: int
    trigger: Optional[str]
    plan: DrawPlan

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "trigger": self.trigger, "plan": self.plan.to_dict()}
