"""
Configuration objects for the interactive tree.

Exposes the canvas extent, margins and transition parameters so that callers
can size a tree without touching layout or reconciliation code.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict

from .errors import LayoutBoundsError


@dataclass
class Margin:
    """Space reserved around the drawable area, in canvas units."""

    top: float = 20.0
    right: float = 20.0
    bottom: float = 20.0
    left: float = 20.0


@dataclass
class TreeConfig:
    """
    Configuration for `InteractiveTree` layout and transitions.

    Defaults give an 800x400 canvas, 20 unit margins on every side, 60 unit
    depth bands and 750 unit transitions.
    """

    # Overall canvas extent
    width: float = 800.0
    height: float = 400.0
    margin: Margin = field(default_factory=Margin)

    # Vertical spacing assigned per depth level
    band_height: float = 60.0

    # Transition length handed to the presentation boundary
    duration: float = 750.0

    @property
    def drawable_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def drawable_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    def validate(self) -> None:
        """
        Check that margins leave a usable drawable area.

        Raises:
            LayoutBoundsError: If drawable width or height is zero or negative
        """
        if self.drawable_width <= 0 or self.drawable_height <= 0:
            raise LayoutBoundsError(self.drawable_width, self.drawable_height)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeConfig":
        """Build a config from a plain mapping, e.g. a parsed YAML section."""
        data = dict(data or {})
        margin = data.pop("margin", None) or {}
        cfg = cls(**data)
        cfg.margin = Margin(**margin)
        return cfg
