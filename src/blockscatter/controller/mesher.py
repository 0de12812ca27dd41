"""
Surface Triangulation (Gmsh Adapter)
====================================
This module turns a planar boundary outline into a TriangleMesh.

Why is this file needed?
------------------------
1. Density: The scatter engine needs triangles of roughly equal size so that
   the allocation bucket does not swing between huge and tiny triangles.
   Gmsh is asked for a uniform characteristic length.
2. Seam: Surface-to-mesh conversion is a black box for the engine. Anything
   able to produce a TriangleMesh can replace this adapter.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple, TYPE_CHECKING

import gmsh
import numpy as np

from blockscatter import config
from blockscatter.errors import InvalidGeometry
from blockscatter.model.geometry_primitives import PointLike, as_point
from blockscatter.model.mesh import TriangleMesh

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Gmsh element type of the 3-node triangle
GMSH_TRIANGLE = 2


class PointCache:
    """
    Helper to prevent duplicate points in Gmsh.
    Maps (x, y, z) coordinates to Gmsh point tags.
    """
    def __init__(self, decimals: int = 9):
        self.cache: Dict[Tuple[float, float, float], int] = {}
        self.decimals = decimals

    def get_or_create(self, pt: npt.NDArray[np.float64], mesh_size: float) -> int:
        key = tuple(round(float(v), self.decimals) for v in pt)
        if key in self.cache:
            return self.cache[key]

        tag = gmsh.model.geo.add_point(pt[0], pt[1], pt[2], mesh_size)
        self.cache[key] = tag
        return tag


class GmshTriangulator:
    def __init__(self):
        self._initialized = False

    def _ensure_init(self):
        """Initialize Gmsh if not already initialized."""
        if not self._initialized or not gmsh.is_initialized():
            gmsh.initialize()
            gmsh.option.set_number("General.Terminal", 0)
            self._initialized = True

    def triangulate(
        self,
        outline: Sequence[PointLike],
        mesh_size: Optional[float] = None,
    ) -> TriangleMesh:
        """
        Mesh a closed planar polygon into triangles of near-constant size.

        Args:
            outline: Polygon corners in order. A repeated closing point is ignored.
            mesh_size: Target edge length of the triangles.

        Returns:
            TriangleMesh covering the polygon.
        """
        mesh_size = config.DEFAULT_MESH_SIZE if mesh_size is None else float(mesh_size)
        if mesh_size <= 0.0:
            raise InvalidGeometry(f"Mesh size must be positive, got {mesh_size}.")

        points = [as_point(p) for p in outline]
        if len(points) > 1 and np.allclose(points[0], points[-1]):
            points = points[:-1]
        if len(points) < 3:
            raise InvalidGeometry(f"Outline needs at least 3 distinct points, got {len(points)}.")

        self._ensure_init()
        try:
            gmsh.clear()
            gmsh.model.add("Scatter")
            logger.info(f"Triangulating outline with {len(points)} corners, mesh size {mesh_size:.4g}.")

            point_cache = PointCache()
            point_tags = [point_cache.get_or_create(pt, mesh_size) for pt in points]
            if len(set(point_tags)) < 3:
                raise InvalidGeometry("Outline collapses to fewer than 3 distinct points.")

            curve_tags = [
                gmsh.model.geo.add_line(p1, p2)
                for p1, p2 in zip(point_tags, point_tags[1:] + point_tags[:1])
                if p1 != p2
            ]
            loop_tag = gmsh.model.geo.add_curve_loop(curve_tags)
            gmsh.model.geo.add_plane_surface([loop_tag])
            gmsh.model.geo.synchronize()

            # Uniform mesh size
            gmsh.option.set_number("Mesh.CharacteristicLengthMin", mesh_size * (1.0 - config.MESH_SIZE_TOLERANCE))
            gmsh.option.set_number("Mesh.CharacteristicLengthMax", mesh_size * (1.0 + config.MESH_SIZE_TOLERANCE))

            gmsh.model.mesh.generate(2)
            mesh = self._extract_triangles()

        except InvalidGeometry:
            raise
        except Exception as e:
            logger.exception("Gmsh triangulation failed")
            raise InvalidGeometry(f"Gmsh could not triangulate the outline: {e}") from e

        finally:
            # Release memory and reset state
            if self._initialized:
                try:
                    gmsh.finalize()
                except Exception as finalize_error:
                    logger.warning(f"Failed to finalize Gmsh: {finalize_error}")
                finally:
                    self._initialized = False

        if len(mesh) == 0:
            raise InvalidGeometry("Gmsh produced no triangles for the outline.")

        logger.info(f"Triangulation done: {len(mesh)} triangles, area {mesh.total_area:.6g}.")
        return mesh

    @staticmethod
    def _extract_triangles() -> TriangleMesh:
        """Read the 3-node triangles of the current Gmsh model."""
        node_tags, flat_coords, _ = gmsh.model.mesh.get_nodes()
        coords = np.asarray(flat_coords, dtype=np.float64).reshape(-1, 3)
        # Gmsh tags are 1-based and not necessarily contiguous
        index_of_tag = {int(tag): i for i, tag in enumerate(node_tags)}

        element_types, _, element_node_tags = gmsh.model.mesh.get_elements(dim=2)
        faces = []
        for element_type, flat_node_tags in zip(element_types, element_node_tags):
            if element_type != GMSH_TRIANGLE:
                continue
            for tags in np.asarray(flat_node_tags).reshape(-1, 3):
                faces.append([index_of_tag[int(tag)] for tag in tags])

        return TriangleMesh.from_arrays(coords, np.array(faces, dtype=np.int64).reshape(-1, 3))
