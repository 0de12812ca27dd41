"""
Geometric helper functions shared by the model and the scatter engine.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def triangle_area(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    c: npt.ArrayLike,
) -> float:
    """
    Calculate the area of a triangle from its three vertices (Heron's formula).

    Args:
        a: First vertex [x, y, z].
        b: Second vertex [x, y, z].
        c: Third vertex [x, y, z].

    Returns:
        Area of the triangle. Collinear vertices give 0.0.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    c = np.asarray(c, dtype=np.float64)

    d1 = float(np.linalg.norm(b - a))
    d2 = float(np.linalg.norm(c - b))
    d3 = float(np.linalg.norm(a - c))

    s = (d1 + d2 + d3) / 2.0
    radicand = s * (s - d1) * (s - d2) * (s - d3)

    # Rounding can push the radicand of a collinear triangle just below zero
    return math.sqrt(max(radicand, 0.0))
