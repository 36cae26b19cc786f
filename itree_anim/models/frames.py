from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from itree_core.models import LinkKey


@dataclass(frozen=True)
class NodeSprite:
    key: str
    name: str
    x: float
    y: float
    radius: float
    opacity: float


@dataclass(frozen=True)
class LinkSprite:
    source_key: str
    target_key: str
    path: str


@dataclass(frozen=True)
class Frame:
    t: float
    progress: float
    nodes: Dict[str, NodeSprite] = field(default_factory=dict)
    links: Dict[LinkKey, LinkSprite] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t": self.t,
            "progress": self.progress,
            "nodes": [
                {"key": s.key, "name": s.name, "x": s.x, "y": s.y, "r": s.radius, "opacity": s.opacity}
                for s in self.nodes.values()
            ],
            "links": [
                {"sourceKey": s.source_key, "targetKey": s.target_key, "d": s.path}
                for s in self.links.values()
            ],
        }
