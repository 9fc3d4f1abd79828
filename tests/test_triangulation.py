"""
Tests for the public triangulation entry points.
"""
import numpy as np
import pytest

from tinmesh import (
    InvalidDimensionsError,
    TriangulationConfig,
    Triangulator,
    triangulate,
    triangulate_heightmap,
)
from tinmesh.core.estimator import max_deviation
from tinmesh.core.legalizer import is_legal
from tinmesh.core.predicates import orient2d

CORNERS_2X2 = [(0, 0), (1, 0), (1, 1), (0, 1)]


def _boundary_vertex_count(points, width, height):
    return sum(1 for x, y in points if x in (0, width - 1) or y in (0, height - 1))


class TestScenarios:
    """Fixed inputs with known results."""

    @pytest.mark.parametrize("max_error", [0.0, 0.5, 1e9])
    def test_flat_two_by_two(self, max_error):
        points, triangles = triangulate([0, 0, 0, 0], 2, 2, max_error)
        assert points == CORNERS_2X2
        assert len(triangles) == 2

    def test_checkerboard_needs_every_sample(self):
        points, triangles = triangulate([0, 10, 0, 10, 0, 10, 0, 10, 0], 3, 3, 0.0)
        assert len(points) == 9
        assert set(points) == {(x, y) for x in range(3) for y in range(3)}
        assert len(triangles) == 8

    def test_sample_count_mismatch(self):
        with pytest.raises(InvalidDimensionsError):
            triangulate([0, 0, 0], 2, 2, 1.0)

    def test_grid_too_small(self):
        with pytest.raises(InvalidDimensionsError):
            triangulate([0, 0, 0], 3, 1, 1.0)

    def test_nan_threshold(self):
        with pytest.raises(ValueError):
            triangulate([0, 0, 0, 0], 2, 2, float("nan"))

    def test_negative_threshold_behaves_like_zero(self):
        samples = [0, 10, 0, 10, 0, 10, 0, 10, 0]
        assert triangulate(samples, 3, 3, -5.0) == triangulate(samples, 3, 3, 0.0)

    def test_dimensions_checked_before_threshold(self):
        with pytest.raises(InvalidDimensionsError):
            triangulate([0, 0, 0], 2, 2, float("nan"))


class TestMeshProperties:
    """Invariants that hold for every output mesh."""

    def test_first_points_are_corners(self, peak_field):
        points, _ = triangulate(peak_field.grid.reshape(-1), 13, 9, 0.5)
        assert points[:4] == [(0, 0), (12, 0), (12, 8), (0, 8)]

    def test_indices_in_range_and_counter_clockwise(self, noise_field):
        points, triangles = triangulate(noise_field.grid.reshape(-1), 11, 7, 1.0)
        for a, b, c in triangles:
            assert all(0 <= i < len(points) for i in (a, b, c))
            assert orient2d(points[a], points[b], points[c]) > 0

    def test_points_are_unique_grid_samples(self, noise_field):
        points, _ = triangulate(noise_field.grid.reshape(-1), 11, 7, 0.0)
        assert len(points) == len(set(points))
        assert all(0 <= x < 11 and 0 <= y < 7 for x, y in points)

    @pytest.mark.parametrize("max_error", [0.0, 1.0, 5.0])
    def test_error_bound_holds(self, peak_field, max_error):
        points, triangles = triangulate(peak_field.grid.reshape(-1), 13, 9, max_error)
        for a, b, c in triangles:
            assert max_deviation(peak_field, points[a], points[b], points[c]) <= max_error

    def test_triangles_tile_the_rectangle(self, noise_field):
        """Twice the summed area equals twice the rectangle's area."""
        points, triangles = triangulate(noise_field.grid.reshape(-1), 11, 7, 2.0)
        total = sum(orient2d(points[a], points[b], points[c]) for a, b, c in triangles)
        assert total == 2 * 10 * 6

    def test_euler_count(self, noise_field):
        """T = 2n - h - 2 for a triangulated convex region."""
        points, triangles = triangulate(noise_field.grid.reshape(-1), 11, 7, 1.5)
        hull = _boundary_vertex_count(points, 11, 7)
        assert len(triangles) == 2 * len(points) - hull - 2

    def test_result_is_delaunay(self, peak_field):
        triangulator = Triangulator(peak_field, TriangulationConfig(max_error=0.25))
        triangulator.run()
        mesh = triangulator.refiner.mesh
        mesh.validate()
        assert all(is_legal(mesh, e) for e in range(len(mesh.halfedges)))

    def test_deterministic(self, noise_field):
        samples = noise_field.grid.reshape(-1)
        assert triangulate(samples, 11, 7, 0.7) == triangulate(samples, 11, 7, 0.7)

    def test_input_not_modified(self):
        samples = np.arange(20, dtype=np.float64) ** 2
        before = samples.copy()
        triangulate(samples, 5, 4, 0.0)
        np.testing.assert_array_equal(samples, before)

    def test_lower_threshold_gives_more_vertices(self, peak_field):
        samples = peak_field.grid.reshape(-1)
        coarse, _ = triangulate(samples, 13, 9, 10.0)
        fine, _ = triangulate(samples, 13, 9, 0.1)
        assert len(fine) > len(coarse)


class TestTriangulator:
    """Statistics and caps of the Triangulator class."""

    def test_statistics(self, peak_field):
        triangulator = Triangulator(peak_field, TriangulationConfig(max_error=1.0))
        points, triangles = triangulator.run()
        stats = triangulator.get_statistics()

        assert stats["original_points"] == 13 * 9
        assert stats["final_vertices"] == len(points)
        assert stats["final_triangles"] == len(triangles)
        assert stats["steps"] == len(points) - 4
        assert stats["converged"] is True
        assert stats["processing_time"] >= 0.0
        assert stats["compression_ratio"] > 0.0

    def test_statistics_are_a_copy(self, peak_field):
        triangulator = Triangulator(peak_field)
        triangulator.run()
        triangulator.get_statistics()["steps"] = -1
        assert triangulator.get_statistics()["steps"] >= 0

    def test_vertex_cap(self, noise_field):
        config = TriangulationConfig(max_error=0.0, max_vertices=10)
        triangulator = Triangulator(noise_field, config)
        points, _ = triangulator.run()
        assert len(points) == 10
        assert triangulator.get_statistics()["converged"] is False

    def test_progress_callback(self, peak_field):
        reports = []
        Triangulator(peak_field, progress_callback=reports.append).run()
        assert reports[-1] == 1.0


class TestTriangulateHeightmap:
    """The 2D-array convenience wrapper."""

    def test_returns_statistics(self):
        height_map = np.zeros((4, 6))
        height_map[2, 3] = 8.0
        points, triangles, stats = triangulate_heightmap(height_map, max_error=0.5)
        assert (3, 2) in points
        assert stats["final_triangles"] == len(triangles)

    def test_shape_is_rows_by_columns(self):
        points, _, _ = triangulate_heightmap(np.zeros((3, 7)))
        assert points == [(0, 0), (6, 0), (6, 2), (0, 2)]

    def test_rejects_1d_input(self):
        with pytest.raises(InvalidDimensionsError):
            triangulate_heightmap(np.zeros(9))

    def test_matches_flat_entry_point(self, noise_field):
        flat = triangulate(noise_field.grid.reshape(-1), 11, 7, 1.0)
        points, triangles, _ = triangulate_heightmap(noise_field.grid, max_error=1.0)
        assert (points, triangles) == flat
