"""Tests for mesh export helpers."""
import os
import shutil
import tempfile
import unittest

import numpy as np

from tinmesh.core.heightfield import HeightField
from tinmesh.exceptions import TinMeshIOError
from tinmesh.export import read_obj, to_numpy, to_vertices_3d, write_obj
from tinmesh.triangulation import triangulate


class TestExport(unittest.TestCase):
    """Test conversion and OBJ output."""

    def setUp(self):
        """Set up test fixtures."""
        self.samples = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 20.0]
        self.field = HeightField(self.samples, 3, 3)
        self.points, self.triangles = triangulate(self.samples, 3, 3, 0.0)

        # Create a temporary directory for output
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up after tests."""
        shutil.rmtree(self.temp_dir)

    def test_to_vertices_3d(self):
        vertices = to_vertices_3d([(0, 0), (2, 2), (1, 0)], self.field, z_scale=2.0)
        self.assertEqual(vertices, [[0.0, 0.0, 0.0], [2.0, 2.0, 40.0], [1.0, 0.0, 2.0]])

    def test_to_numpy(self):
        points, triangles = to_numpy(self.points, self.triangles)
        self.assertEqual(points.shape, (len(self.points), 2))
        self.assertEqual(triangles.shape, (len(self.triangles), 3))
        self.assertEqual(points.dtype, np.int64)

    def test_to_numpy_empty_triangles(self):
        _, triangles = to_numpy([(0, 0)], [])
        self.assertEqual(triangles.shape, (0, 3))

    def test_write_obj(self):
        """Faces are written 1-based and read back 0-based."""
        path = write_obj(os.path.join(self.temp_dir, "mesh.obj"), self.points, self.triangles, self.field)

        self.assertTrue(os.path.exists(path))
        vertices, faces = read_obj(path)
        self.assertEqual(len(vertices), len(self.points))
        self.assertEqual(faces, list(self.triangles))
        for (x, y), vertex in zip(self.points, vertices):
            self.assertEqual(vertex[:2], [float(x), float(y)])
            self.assertAlmostEqual(vertex[2], self.field.lookup(x, y))

        with open(path, "r") as f:
            content = f.read()
        self.assertIn("o TIN", content)
        self.assertNotIn("f 0 ", content)

    def test_write_obj_appends_extension(self):
        path = write_obj(os.path.join(self.temp_dir, "mesh"), self.points, self.triangles, self.field)
        self.assertTrue(path.endswith("mesh.obj"))
        self.assertTrue(os.path.exists(path))

    def test_write_obj_keeps_other_suffix(self):
        """An existing non-OBJ suffix is kept and .obj appended after it."""
        path = write_obj(os.path.join(self.temp_dir, "mesh.v2"), self.points, self.triangles, self.field)
        self.assertTrue(path.endswith("mesh.v2.obj"))
        self.assertTrue(os.path.exists(path))

    def test_write_obj_uppercase_suffix_kept(self):
        path = write_obj(os.path.join(self.temp_dir, "MESH.OBJ"), self.points, self.triangles, self.field)
        self.assertTrue(path.endswith("MESH.OBJ"))

    def test_write_obj_rejects_non_positive_scale(self):
        for z_scale in (0.0, -1.0):
            with self.subTest(z_scale=z_scale):
                with self.assertRaises(ValueError):
                    write_obj(os.path.join(self.temp_dir, "mesh.obj"), self.points, self.triangles,
                              self.field, z_scale=z_scale)
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "mesh.obj")))

    def test_write_obj_creates_directories(self):
        target = os.path.join(self.temp_dir, "nested", "dir", "mesh.obj")
        write_obj(target, self.points, self.triangles, self.field, z_scale=0.5)
        vertices, _ = read_obj(target)
        self.assertAlmostEqual(vertices[2][2], 10.0)

    def test_read_obj_missing_file(self):
        with self.assertRaises(TinMeshIOError):
            read_obj(os.path.join(self.temp_dir, "missing.obj"))

    def test_read_obj_malformed(self):
        path = os.path.join(self.temp_dir, "bad.obj")
        with open(path, "w") as f:
            f.write("v 1 2 three\n")
        with self.assertRaises(TinMeshIOError):
            read_obj(path)


if __name__ == '__main__':
    unittest.main()
