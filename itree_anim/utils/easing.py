from __future__ import annotations

from typing import Tuple

import numpy as np


def ease_cubic_in_out(t):
    """Symmetric cubic easing on [0,1]; accepts scalars or arrays.

    Clamps out-of-range input.
    """
    t = np.clip(np.asarray(t, dtype=float), 0.0, 1.0) * 2.0
    out = np.where(t <= 1.0, t ** 3, (t - 2.0) ** 3 + 2.0) / 2.0
    return float(out) if out.ndim == 0 else out


def lerp(a: float, b: float, k: float) -> float:
    return a + (b - a) * k


def lerp_point(a: Tuple[float, float], b: Tuple[float, float], k: float) -> Tuple[float, float]:
    return (lerp(a[0], b[0], k), lerp(a[1], b[1], k))
