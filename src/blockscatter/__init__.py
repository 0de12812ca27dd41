"""
Area-weighted block scattering over triangulated surfaces.

The pipeline is pure: a mesh, a target count and a list of items go in,
placement commands come out. Applying them to a document is up to the host.
"""
from blockscatter.errors import ScatterError, InvalidGeometry, InvalidConfiguration
from blockscatter.model.geometry_primitives import Triangle
from blockscatter.model.mesh import TriangleMesh
from blockscatter.model.placement import Item, PlacementCommand
from blockscatter.model.geometry_utils import triangle_area
from blockscatter.analysis.allocation import AreaAllocator, allocate_counts
from blockscatter.analysis.sampling import make_rng, sample_triangle
from blockscatter.analysis.scatter import scatter
from blockscatter.analysis.distribution import assign, partition

__all__ = [
    "ScatterError", "InvalidGeometry", "InvalidConfiguration",
    "Triangle", "TriangleMesh", "Item", "PlacementCommand",
    "triangle_area", "AreaAllocator", "allocate_counts",
    "make_rng", "sample_triangle", "scatter", "assign", "partition",
]
