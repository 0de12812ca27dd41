"""
Distribution Assigner
=====================
Hands the scattered points out to the items.

The points are shuffled, cut into ``len(items)`` chunks of
``len(points) // len(items)`` points, and chunk ``i`` goes to item ``i``.
The last chunk also takes the leftover points.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from blockscatter.analysis.sampling import make_rng
from blockscatter.errors import InvalidConfiguration
from blockscatter.model.placement import PlacementCommand

if TYPE_CHECKING:
    import numpy.typing as npt
    from blockscatter.model.placement import Item

logger = logging.getLogger(__name__)


def partition(
    points: npt.ArrayLike,
    n_chunks: int,
) -> list[npt.NDArray[np.float64]]:
    """
    Split points into ``n_chunks`` consecutive chunks.

    All chunks have ``len(points) // n_chunks`` points except the last one,
    which absorbs the remainder.
    """
    if n_chunks <= 0:
        raise InvalidConfiguration(f"Cannot partition points into {n_chunks} chunks.")

    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    chunk_size = len(points) // n_chunks

    chunks = [points[i * chunk_size:(i + 1) * chunk_size] for i in range(n_chunks - 1)]
    chunks.append(points[(n_chunks - 1) * chunk_size:])
    return chunks


def assign(
    points: npt.ArrayLike,
    items: Sequence[Item],
    rng: Optional[np.random.Generator] = None,
) -> list[PlacementCommand]:
    """
    Create one placement command per point, spread over the items.

    Args:
        points: Sample points, shape (N, 3).
        items: Non-empty ordered sequence of items.
        rng: Random generator used for the shuffle.

    Returns:
        Commands grouped by item, in item order.
    """
    if not items:
        raise InvalidConfiguration("At least one item is required to place points.")

    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if len(points) == 0:
        return []

    rng = rng if rng is not None else make_rng()
    shuffled = points[rng.permutation(len(points))]

    commands: list[PlacementCommand] = []
    for item, chunk in zip(items, partition(shuffled, len(items))):
        logger.debug(f"Item '{item.name}': {len(chunk)} placements")
        commands.extend(PlacementCommand(item=item, target=point) for point in chunk)

    logger.info(f"Assigned {len(commands)} placements to {len(items)} items.")
    return commands
