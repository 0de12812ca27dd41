"""Unit tests for the triangle area calculation."""

from __future__ import annotations

import itertools
import math
import unittest

import numpy as np

from blockscatter.model.geometry_utils import triangle_area
from blockscatter.model.geometry_primitives import Triangle


def rotation_matrix(axis, angle: float) -> np.ndarray:
    """Rodrigues rotation matrix around a unit axis."""
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    k = np.array([
        [0.0, -axis[2], axis[1]],
        [axis[2], 0.0, -axis[0]],
        [-axis[1], axis[0], 0.0],
    ])
    return np.eye(3) + math.sin(angle) * k + (1.0 - math.cos(angle)) * (k @ k)


class TestTriangleArea(unittest.TestCase):
    def test_unit_right_triangle(self):
        self.assertAlmostEqual(triangle_area((0, 0, 0), (1, 0, 0), (0, 1, 0)), 0.5, places=12)

    def test_scaled_triangle(self):
        self.assertAlmostEqual(triangle_area((0, 0, 0), (4, 0, 0), (0, 3, 0)), 6.0, places=12)

    def test_equilateral_triangle(self):
        area = triangle_area((0, 0, 0), (1, 0, 0), (0.5, math.sqrt(3) / 2, 0))
        self.assertAlmostEqual(area, math.sqrt(3) / 4, places=12)

    def test_permutation_invariant(self):
        a, b, c = (0.3, -1.2, 2.0), (4.1, 0.7, -0.5), (-2.2, 3.3, 1.1)
        reference = triangle_area(a, b, c)
        for p, q, r in itertools.permutations((a, b, c)):
            self.assertAlmostEqual(triangle_area(p, q, r), reference, places=9)

    def test_rigid_motion_invariant(self):
        pts = np.array([(0.3, -1.2, 2.0), (4.1, 0.7, -0.5), (-2.2, 3.3, 1.1)])
        reference = triangle_area(*pts)
        rot = rotation_matrix((1.0, 2.0, -0.5), 0.83)
        moved = pts @ rot.T + np.array([10.0, -7.5, 3.25])
        self.assertAlmostEqual(triangle_area(*moved), reference, places=9)


class TestDegenerateTriangles(unittest.TestCase):
    def test_collinear_exact_zero(self):
        self.assertEqual(triangle_area((0, 0, 0), (1, 0, 0), (2, 0, 0)), 0.0)

    def test_coincident_points(self):
        self.assertEqual(triangle_area((1, 1, 1), (1, 1, 1), (1, 1, 1)), 0.0)

    def test_collinear_in_space_not_nan_or_negative(self):
        area = triangle_area((0, 0, 0), (1, 1, 1), (2, 2, 2))
        self.assertFalse(math.isnan(area))
        self.assertGreaterEqual(area, 0.0)
        self.assertAlmostEqual(area, 0.0, places=6)

    def test_nearly_collinear_many(self):
        rng = np.random.default_rng(5)
        for _ in range(200):
            a = rng.normal(size=3)
            d = rng.normal(size=3)
            t1, t2 = rng.random(2) * 10
            area = triangle_area(a, a + t1 * d, a + t2 * d)
            self.assertFalse(math.isnan(area))
            self.assertGreaterEqual(area, 0.0)


class TestTriangleArea3DProperty(unittest.TestCase):
    def test_triangle_area_property(self):
        triangle = Triangle((0, 0, 5), (2, 0, 5), (0, 2, 5))
        self.assertAlmostEqual(triangle.area, 2.0, places=12)

    def test_2d_points_are_lifted(self):
        triangle = Triangle((0, 0), (1, 0), (0, 1))
        self.assertEqual(triangle.a.shape, (3,))
        self.assertAlmostEqual(triangle.area, 0.5, places=12)


if __name__ == "__main__":
    unittest.main()
