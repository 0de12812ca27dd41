"""
Configuration & Global Constants
================================
Central registry for the limits and defaults used by the scatter commands.

Exports:
    MAX_TARGET_COUNT (int): Largest number of blocks a single command may request.
    DEFAULT_TARGET_COUNT (int): Count used when the caller does not provide one.
    DEFAULT_MESH_SIZE (float): Characteristic length for surface triangulation.
    MESH_SIZE_TOLERANCE (float): Relative band gmsh may vary the element size in.
    ROTATION_RANGE_DEG (tuple): Half-open range of random rotation angles in degrees.
"""
from typing import Tuple

MAX_TARGET_COUNT: int = 10000
DEFAULT_TARGET_COUNT: int = 1

DEFAULT_MESH_SIZE: float = 1.0
# gmsh is allowed to vary the element size by +-10 % around the requested value
MESH_SIZE_TOLERANCE: float = 0.1

ROTATION_RANGE_DEG: Tuple[int, int] = (-180, 180)
