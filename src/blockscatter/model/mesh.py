"""
Triangle Mesh
=============
An ordered list of triangles with its precomputed total area.

The mesh is the only geometry the scatter engine consumes. Any surface
(NURBS, polysurface, outline) has to be triangulated first, see
``blockscatter.controller.mesher``.
"""
from __future__ import annotations

import logging
from typing import Iterator, Sequence, TYPE_CHECKING

import numpy as np

from blockscatter.errors import InvalidGeometry
from blockscatter.model.geometry_primitives import Triangle, PointLike, as_point

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class TriangleMesh:
    def __init__(self, triangles: Sequence[Triangle]) -> None:
        """
        Initialize the mesh.

        Args:
            triangles: Triangles in the order the allocator will visit them.
        """
        self.triangles: tuple[Triangle, ...] = tuple(triangles)
        self.areas: npt.NDArray[np.float64] = np.array(
            [triangle.area for triangle in self.triangles], dtype=np.float64
        )
        self.total_area: float = float(self.areas.sum())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n_triangles={len(self)}, total_area={self.total_area:.6g})"

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.triangles)

    def __getitem__(self, index: int) -> Triangle:
        return self.triangles[index]

    @property
    def n_degenerate(self) -> int:
        """Number of triangles with zero area."""
        return int(np.count_nonzero(self.areas == 0.0))

    @property
    def bounds(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Axis-aligned bounding box as (min_corner, max_corner)."""
        if not self.triangles:
            raise InvalidGeometry("An empty mesh has no bounds.")
        vertices = np.vstack([triangle.vertices for triangle in self.triangles])
        return vertices.min(axis=0), vertices.max(axis=0)

    @classmethod
    def from_arrays(
        cls,
        vertices: npt.ArrayLike,
        faces: npt.ArrayLike,
    ) -> TriangleMesh:
        """
        Build a mesh from an indexed vertex/face representation.

        Args:
            vertices: Array of shape (N, 3), or (N, 2) for planar meshes.
            faces: Integer array of shape (M, 3) with zero-based vertex indices.
        """
        vertices = np.asarray(vertices, dtype=np.float64)
        faces = np.asarray(faces)

        if vertices.ndim != 2 or vertices.shape[1] not in (2, 3):
            raise InvalidGeometry(f"Expected vertices of shape (N, 3), got {vertices.shape}.")
        if vertices.shape[1] == 2:
            vertices = np.c_[vertices, np.zeros(len(vertices))]

        if faces.size == 0:
            return cls([])
        if faces.ndim != 2 or faces.shape[1] != 3:
            raise InvalidGeometry(f"Expected faces of shape (M, 3), got {faces.shape}.")
        if not np.issubdtype(faces.dtype, np.integer):
            raise InvalidGeometry("Face indices must be integers.")
        if faces.min() < 0 or faces.max() >= len(vertices):
            raise InvalidGeometry(
                f"Face index out of range for {len(vertices)} vertices "
                f"(min={faces.min()}, max={faces.max()})."
            )

        triangles = [Triangle(*vertices[face]) for face in faces]
        logger.debug(f"Built mesh from {len(vertices)} vertices and {len(faces)} faces.")
        return cls(triangles)

    @classmethod
    def rectangle(
        cls,
        width: float,
        height: float,
        divisions: int = 1,
        origin: PointLike = (0.0, 0.0, 0.0),
    ) -> TriangleMesh:
        """
        Structured triangulation of a flat rectangle in the XY plane.

        Every grid cell is split into two triangles, so the mesh holds
        ``2 * divisions**2`` triangles of equal area.

        Args:
            width: Extent along X.
            height: Extent along Y.
            divisions: Number of cells along each side.
            origin: Lower-left corner; its z is used for the whole plane.
        """
        if width <= 0.0 or height <= 0.0:
            raise InvalidGeometry(f"Rectangle needs positive sides, got {width} x {height}.")
        if divisions < 1:
            raise InvalidGeometry(f"Rectangle needs at least one division, got {divisions}.")

        base = as_point(origin)
        xs = np.linspace(0.0, width, divisions + 1)
        ys = np.linspace(0.0, height, divisions + 1)
        grid_x, grid_y = np.meshgrid(xs, ys, indexing="xy")
        vertices = np.c_[grid_x.ravel(), grid_y.ravel(), np.zeros(grid_x.size)] + base

        faces = []
        row = divisions + 1
        for j in range(divisions):
            for i in range(divisions):
                p0 = j * row + i
                p1 = p0 + 1
                p2 = p0 + row
                p3 = p2 + 1
                faces.append((p0, p1, p3))
                faces.append((p0, p3, p2))

        return cls.from_arrays(vertices, np.array(faces, dtype=np.int64))
