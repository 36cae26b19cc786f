"""
Derived layout and draw-plan records.

Everything here is produced by a layout pass and is immutable: a new pass
builds new records instead of editing old ones, which is what lets the
previous render set serve as the "before" picture of the next transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .enums import DiffGroup
from .errors import DuplicateKeyError

# Links are identified by their (source_key, target_key) endpoints
LinkKey = Tuple[str, str]


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Segment:
    """A connector between two points; zero-length when both ends coincide."""

    source: Point
    target: Point

    @classmethod
    def degenerate(cls, at: Point) -> "Segment":
        return cls(at, at)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {"source": self.source.to_dict(), "target": self.target.to_dict()}


@dataclass(frozen=True)
class LayoutNode:
    """
    One visible node of one layout pass.

    `x` and `y` are 0.0 until the layout engine fills them in.
    """

    key: str
    name: str
    depth: int
    parent_key: Optional[str] = None
    index: int = 0
    """Position among its siblings."""
    x: float = 0.0
    y: float = 0.0

    @property
    def pos(self) -> Point:
        return Point(self.x, self.y)

    def placed(self, x: float, y: float) -> "LayoutNode":
        return replace(self, x=x, y=y)


@dataclass(frozen=True)
class LinkEdge:
    source_key: str
    target_key: str
    source: Point
    target: Point

    @property
    def key(self) -> LinkKey:
        return (self.source_key, self.target_key)

    @property
    def segment(self) -> Segment:
        return Segment(self.source, self.target)


@dataclass(frozen=True)
class RenderSet:
    """
    Keyed nodes and links of one layout pass, in pre-order.

    Use `from_layout` to build one; it rejects key collisions.
    """

    nodes: Dict[str, LayoutNode] = field(default_factory=dict)
    links: Dict[LinkKey, LinkEdge] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "RenderSet":
        return cls()

    @classmethod
    def from_layout(cls, nodes: Iterable[LayoutNode]) -> "RenderSet":
        """
        Key laid-out nodes and derive their parent-child links.

        Raises:
            DuplicateKeyError: If two nodes share a key
        """
        keyed: Dict[str, LayoutNode] = {}
        for n in nodes:
            if n.key in keyed:
                raise DuplicateKeyError(n.key)
            keyed[n.key] = n

        links: Dict[LinkKey, LinkEdge] = {}
        for n in keyed.values():
            if n.parent_key is None:
                continue
            parent = keyed[n.parent_key]
            links[(parent.key, n.key)] = LinkEdge(parent.key, n.key, parent.pos, n.pos)
        return cls(nodes=keyed, links=links)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, key: object) -> bool:
        return key in self.nodes

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {k: (n.x, n.y) for k, n in self.nodes.items()}


@dataclass(frozen=True)
class Anchor:
    """
    Birth/death position for the nodes of one transition.

    `(x0, y0)` is where the interacted node was last rendered; entering nodes
    start there. `(x, y)` is where it is now; exiting nodes end there.
    """

    key: str
    x0: float
    y0: float
    x: float
    y: float

    @classmethod
    def at(cls, node: LayoutNode) -> "Anchor":
        return cls(node.key, node.x, node.y, node.x, node.y)

    @property
    def origin(self) -> Point:
        return Point(self.x0, self.y0)

    @property
    def current(self) -> Point:
        return Point(self.x, self.y)

    def advance(self, to: Point) -> "Anchor":
        return replace(self, x=to.x, y=to.y)


@dataclass(frozen=True)
class NodeTransition:
    key: str
    name: str
    group: DiffGroup
    start: Point
    end: Point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "startPos": self.start.to_dict(),
            "endPos": self.end.to_dict(),
        }


@dataclass(frozen=True)
class LinkTransition:
    source_key: str
    target_key: str
    group: DiffGroup
    start_edge: Segment
    end_edge: Segment

    @property
    def key(self) -> LinkKey:
        return (self.source_key, self.target_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceKey": self.source_key,
            "targetKey": self.target_key,
            "startEdge": self.start_edge.to_dict(),
            "endEdge": self.end_edge.to_dict(),
        }


@dataclass(frozen=True)
class DrawPlan:
    """Declarative description of one animated transition."""

    entering: List[NodeTransition] = field(default_factory=list)
    updating: List[NodeTransition] = field(default_factory=list)
    exiting: List[NodeTransition] = field(default_factory=list)
    entering_links: List[LinkTransition] = field(default_factory=list)
    updating_links: List[LinkTransition] = field(default_factory=list)
    exiting_links: List[LinkTransition] = field(default_factory=list)
    duration: float = 750.0

    def node_transitions(self) -> List[NodeTransition]:
        return self.entering + self.updating + self.exiting

    def link_transitions(self) -> List[LinkTransition]:
        return self.entering_links + self.updating_links + self.exiting_links

    def keys(self, group: DiffGroup) -> List[str]:
        return [t.key for t in self.node_transitions() if t.group == group]

    def summary(self) -> Dict[str, int]:
        return {
            "entering": len(self.entering),
            "updating": len(self.updating),
            "exiting": len(self.exiting),
            "entering_links": len(self.entering_links),
            "updating_links": len(self.updating_links),
            "exiting_links": len(self.exiting_links),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form handed across the presentation boundary."""
        return {
            "duration": self.duration,
            "entering": {
                "nodes": [t.to_dict() for t in self.entering],
                "links": [t.to_dict() for t in self.entering_links],
            },
            "updating": {
                "nodes": [t.to_dict() for t in self.updating],
                "links": [t.to_dict() for t in self.updating_links],
            },
            "exiting": {
                "nodes": [t.to_dict() for t in self.exiting],
                "links": [t.to_dict() for t in self.exiting_links],
            },
        }
