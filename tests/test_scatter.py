"""Unit tests for the scatter orchestrator."""

from __future__ import annotations

import unittest

import numpy as np

from blockscatter import config
from blockscatter.analysis.sampling import make_rng
from blockscatter.analysis.scatter import scatter
from blockscatter.errors import InvalidConfiguration, InvalidGeometry
from blockscatter.model.geometry_primitives import Triangle
from blockscatter.model.mesh import TriangleMesh

TOL = 1e-12


def unit_square() -> TriangleMesh:
    vertices = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
    return TriangleMesh.from_arrays(vertices, [(0, 1, 2), (0, 2, 3)])


class TestUnitSquare(unittest.TestCase):
    def test_count_close_to_target(self):
        points = scatter(unit_square(), 100, make_rng(11))
        self.assertEqual(points.shape[1], 3)
        self.assertLessEqual(abs(len(points) - 100), 3)

    def test_points_inside_square(self):
        points = scatter(unit_square(), 100, make_rng(12))
        self.assertTrue(np.all(points[:, :2] >= -TOL))
        self.assertTrue(np.all(points[:, :2] <= 1.0 + TOL))
        self.assertTrue(np.all(points[:, 2] == 0.0))

    def test_deterministic_for_seed(self):
        first = scatter(unit_square(), 100, make_rng(3))
        second = scatter(unit_square(), 100, make_rng(3))
        np.testing.assert_array_equal(first, second)

    def test_default_rng(self):
        points = scatter(unit_square(), 20)
        self.assertLessEqual(abs(len(points) - 20), 2)


class TestDensity(unittest.TestCase):
    def test_grid_count_within_triangle_count(self):
        mesh = TriangleMesh.rectangle(10.0, 5.0, divisions=4)
        points = scatter(mesh, 200, make_rng(5))
        self.assertLessEqual(abs(len(points) - 200), len(mesh))

    def test_density_follows_area(self):
        # Left triangle has three times the area of the right one
        mesh = TriangleMesh([
            Triangle((0, 0, 0), (3, 0, 0), (0, 2, 0)),
            Triangle((10, 0, 0), (11, 0, 0), (10, 2, 0)),
        ])
        points = scatter(mesh, 256, make_rng(6))
        left = np.count_nonzero(points[:, 0] < 5.0)
        right = np.count_nonzero(points[:, 0] >= 5.0)
        self.assertAlmostEqual(left, 192, delta=1)
        self.assertAlmostEqual(right, 64, delta=1)

    def test_degenerate_triangle_receives_no_points(self):
        mesh = TriangleMesh([
            Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)),
            Triangle((5, 5, 0), (6, 5, 0), (7, 5, 0)),
            Triangle((1, 0, 0), (1, 1, 0), (0, 1, 0)),
        ])
        points = scatter(mesh, 50, make_rng(9))
        self.assertGreater(len(points), 0)
        self.assertTrue(np.all(points[:, 0] <= 1.0 + TOL))

    def test_points_on_tilted_surface(self):
        mesh = TriangleMesh.from_arrays(
            [(0, 0, 0), (4, 0, 2), (4, 4, 2), (0, 4, 0)],
            [(0, 1, 2), (0, 2, 3)],
        )
        points = scatter(mesh, 80, make_rng(10))
        # Plane z = x / 2
        np.testing.assert_allclose(points[:, 2], points[:, 0] / 2.0, atol=1e-9)


class TestScatterErrors(unittest.TestCase):
    def test_empty_mesh(self):
        with self.assertRaises(InvalidGeometry):
            scatter(TriangleMesh([]), 10, make_rng(0))

    def test_zero_area_mesh(self):
        mesh = TriangleMesh([Triangle((0, 0, 0), (1, 0, 0), (2, 0, 0))])
        with self.assertRaises(InvalidGeometry):
            scatter(mesh, 10, make_rng(0))

    def test_non_positive_count(self):
        with self.assertRaises(InvalidConfiguration):
            scatter(unit_square(), 0, make_rng(0))
        with self.assertRaises(InvalidConfiguration):
            scatter(unit_square(), -5, make_rng(0))

    def test_non_integer_count(self):
        for count in (10.5, True, "10"):
            with self.assertRaises(InvalidConfiguration):
                scatter(unit_square(), count, make_rng(0))

    def test_numpy_integer_count(self):
        points = scatter(unit_square(), np.int64(20), make_rng(0))
        self.assertLessEqual(abs(len(points) - 20), 2)

    def test_validation_before_sampling(self):
        rng = make_rng(42)
        with self.assertRaises(InvalidGeometry):
            scatter(TriangleMesh([]), 10, rng)
        self.assertEqual(rng.random(), make_rng(42).random())


class TestNoCountCap(unittest.TestCase):
    def test_scatter_above_command_limit(self):
        # The command limit belongs to scatter_blocks; the engine itself never caps
        mesh = TriangleMesh.rectangle(1.0, 1.0, divisions=2)
        target = config.MAX_TARGET_COUNT * 2
        points = scatter(mesh, target, make_rng(0))
        self.assertGreater(len(points), config.MAX_TARGET_COUNT)
        self.assertLessEqual(abs(len(points) - target), len(mesh))


class TestScatterLogging(unittest.TestCase):
    def test_summary_logged(self):
        with self.assertLogs("blockscatter.analysis.scatter", level="INFO") as cm:
            scatter(unit_square(), 10, make_rng(1))
        self.assertIn("Scatter finished", " ".join(cm.output))


if __name__ == "__main__":
    unittest.main()
