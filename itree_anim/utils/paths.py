from __future__ import annotations

from typing import Tuple


def link_vertical(source: Tuple[float, float], target: Tuple[float, float]) -> str:
    """SVG path of a vertical cubic Bezier from `source` to `target`.

    Both control points sit at the vertical midpoint, so the curve leaves the
    parent and enters the child vertically.
    """
    x0, y0 = source
    x1, y1 = target
    ym = (y0 + y1) / 2
    return f"M{_fmt(x0)},{_fmt(y0)}C{_fmt(x0)},{_fmt(ym)} {_fmt(x1)},{_fmt(ym)} {_fmt(x1)},{_fmt(y1)}"


def _fmt(v: float) -> str:
    # Trim float noise so identical geometry yields identical strings
    s = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if s in ("-0", "") else s
