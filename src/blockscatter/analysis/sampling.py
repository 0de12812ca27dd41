"""
Barycentric Sampler
===================
Uniform random points inside a triangle.

Two numbers r1, r2 are drawn from [0, 1). They address a point in the
parallelogram spanned by the edges AC and AB; points that land in the far half
are folded back into the triangle, which keeps the density uniform.
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

import numpy as np

from blockscatter.errors import InvalidConfiguration

if TYPE_CHECKING:
    import numpy.typing as npt
    from blockscatter.model.geometry_primitives import Triangle


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the random generator for one scatter invocation.

    Args:
        seed: Fixed seed for reproducible runs, None for fresh OS entropy.
    """
    return np.random.default_rng(seed)


def sample_triangle(
    triangle: Triangle,
    n: int,
    rng: np.random.Generator,
) -> npt.NDArray[np.float64]:
    """
    Draw ``n`` points uniformly distributed over the triangle's area.

    Args:
        triangle: Triangle (a, b, c) to sample.
        n: Number of points.
        rng: Random generator; the only state this function touches.

    Returns:
        Array of shape (n, 3).
    """
    if n < 0:
        raise InvalidConfiguration(f"Sample count must not be negative, got {n}.")
    if n == 0:
        return np.empty((0, 3), dtype=np.float64)

    ab = triangle.b - triangle.a
    ac = triangle.c - triangle.a

    r = rng.random((n, 2))
    r1 = r[:, 0]
    r2 = r[:, 1]

    # Fold the far half of the parallelogram back onto the triangle
    outside = r1 + r2 >= 1.0
    r1 = np.where(outside, 1.0 - r1, r1)
    r2 = np.where(outside, 1.0 - r2, r2)

    return triangle.a + r1[:, None] * ac + r2[:, None] * ab
