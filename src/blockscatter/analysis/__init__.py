"""
Scatter Engine
==============
The core implementation of area-weighted point scattering.

1. Allocation: per-triangle point counts with a carried fractional bucket.
2. Sampling: uniform points inside a triangle.
3. Distribution: shuffling points and handing them out to items.

Triangle areas come from the model (``blockscatter.model.geometry_utils``).

Note: This package should be pure Python/NumPy and should NOT talk to gmsh
or to the host document.
"""
