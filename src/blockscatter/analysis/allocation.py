"""
Area Allocator
==============
Turns per-triangle area shares into integer point counts.

A triangle too small to earn a whole point keeps its share in a running
``bucket`` that is handed to the next triangle. Once the bucket reaches one
point, the current triangle takes ``floor(bucket)`` points and the bucket is
emptied (the fractional part left at that moment is dropped).

Known property: the bucket makes the result depend on triangle order. Many
tiny triangles followed by a large one give the large triangle a burst of
everything accumulated so far. This is the intended behaviour.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable

from blockscatter.errors import InvalidConfiguration, InvalidGeometry

logger = logging.getLogger(__name__)


class AreaAllocator:
    """
    Stateful allocator for one scatter pass.

    Call :meth:`allocate` once per triangle, in mesh order.
    """
    def __init__(self, total_area: float, target_count: int) -> None:
        """
        Args:
            total_area: Sum of all triangle areas of the mesh.
            target_count: Number of points requested for the whole mesh.
        """
        if target_count <= 0:
            raise InvalidConfiguration(f"Target count must be positive, got {target_count}.")
        if not total_area > 0.0:
            raise InvalidGeometry(f"Total mesh area must be positive, got {total_area}.")

        self.total_area = float(total_area)
        self.target_count = int(target_count)
        # Area represented by one point, constant for the whole pass
        self.units_per_point = self.total_area / self.target_count
        self.bucket = 0.0
        self.emitted = 0

    def allocate(self, triangle_area: float) -> int:
        """
        Number of points for the next triangle.

        Args:
            triangle_area: Area of the triangle being visited.
        """
        self.bucket += triangle_area / self.units_per_point

        if self.bucket < 1.0:
            return 0

        count = math.floor(self.bucket)
        self.bucket = 0.0
        self.emitted += count
        return count


def allocate_counts(
    areas: Iterable[float],
    total_area: float,
    target_count: int,
) -> list[int]:
    """
    Run a full allocation pass over a sequence of triangle areas.

    Returns:
        One integer count per area, in the same order.
    """
    allocator = AreaAllocator(total_area, target_count)
    counts = [allocator.allocate(area) for area in areas]
    logger.debug(f"Allocated {allocator.emitted} of {target_count} points over {len(counts)} triangles.")
    return counts
