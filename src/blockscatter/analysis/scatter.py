"""
Scatter Orchestrator
====================
Distributes a requested number of points over a triangle mesh with a density
proportional to area.

The emitted count is the authoritative result. It approximates the requested
count but is not forced to match it.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from blockscatter.analysis.allocation import AreaAllocator
from blockscatter.analysis.sampling import make_rng, sample_triangle
from blockscatter.errors import InvalidConfiguration, InvalidGeometry

if TYPE_CHECKING:
    import numpy.typing as npt
    from blockscatter.model.mesh import TriangleMesh

logger = logging.getLogger(__name__)


def validate_scatter_input(mesh: TriangleMesh, target_count: int) -> None:
    """Raise before any sampling if the mesh or the count cannot be scattered."""
    if isinstance(target_count, bool) or not isinstance(target_count, (int, np.integer)):
        raise InvalidConfiguration(f"Target count must be an integer, got {target_count!r}.")
    if target_count <= 0:
        raise InvalidConfiguration(f"Target count must be positive, got {target_count}.")
    if len(mesh) == 0:
        raise InvalidGeometry("Mesh contains no triangles.")
    if not mesh.total_area > 0.0:
        raise InvalidGeometry(f"Mesh total area must be positive, got {mesh.total_area}.")


def scatter(
    mesh: TriangleMesh,
    target_count: int,
    rng: Optional[np.random.Generator] = None,
) -> npt.NDArray[np.float64]:
    """
    Sample points over the whole mesh.

    Args:
        mesh: Triangles to scatter on, visited in their stored order.
        target_count: Requested number of points.
        rng: Random generator. A fresh unseeded one is created when omitted.

    Returns:
        Array of shape (M, 3) with the sample points, triangle by triangle.
    """
    validate_scatter_input(mesh, target_count)
    rng = rng if rng is not None else make_rng()

    logger.info(
        f"Scattering {target_count} points over {len(mesh)} triangles "
        f"(total area {mesh.total_area:.6g})."
    )

    allocator = AreaAllocator(mesh.total_area, target_count)
    chunks: list[npt.NDArray[np.float64]] = []

    for index, (triangle, area) in enumerate(zip(mesh.triangles, mesh.areas)):
        count = allocator.allocate(float(area))
        if count == 0:
            continue
        logger.debug(f"Triangle {index}: area={area:.6g}, points={count}")
        chunks.append(sample_triangle(triangle, count, rng))

    if not chunks:
        points = np.empty((0, 3), dtype=np.float64)
    else:
        points = np.vstack(chunks)

    if len(points) != target_count:
        logger.warning(f"Requested {target_count} points, emitted {len(points)}.")
    logger.info(f"Scatter finished: {len(points)} points.")
    return points
