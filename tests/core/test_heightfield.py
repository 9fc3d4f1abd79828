"""Unit tests for the height field accessor."""

import unittest

import numpy as np

from tinmesh.core.heightfield import HeightField
from tinmesh.exceptions import InvalidDimensionsError, OutOfBoundsError


class TestHeightField(unittest.TestCase):
    """Test validation and lookups of HeightField."""

    def setUp(self):
        """3 columns x 2 rows, value = 10 * y + x."""
        self.samples = [0.0, 1.0, 2.0, 10.0, 11.0, 12.0]
        self.field = HeightField(self.samples, 3, 2)

    def test_dimensions(self):
        self.assertEqual(self.field.width, 3)
        self.assertEqual(self.field.height, 2)
        self.assertEqual(self.field.grid.shape, (2, 3))

    def test_lookup_is_row_major(self):
        """index = y * width + x"""
        self.assertEqual(self.field.lookup(0, 0), 0.0)
        self.assertEqual(self.field.lookup(2, 0), 2.0)
        self.assertEqual(self.field.lookup(1, 1), 11.0)

    def test_lookup_out_of_bounds(self):
        for x, y in [(-1, 0), (3, 0), (0, 2), (0, -1)]:
            with self.assertRaises(OutOfBoundsError):
                self.field.lookup(x, y)

    def test_sample_count_mismatch(self):
        with self.assertRaises(InvalidDimensionsError):
            HeightField([0.0, 0.0, 0.0], 2, 2)

    def test_too_small(self):
        with self.assertRaises(InvalidDimensionsError):
            HeightField([0.0, 0.0], 1, 2)
        with self.assertRaises(InvalidDimensionsError):
            HeightField([0.0, 0.0], 2, 1)

    def test_caller_buffer_untouched(self):
        """The field is read-only and doesn't lock the caller's array."""
        samples = np.arange(6, dtype=np.float64)
        field = HeightField(samples, 3, 2)
        self.assertFalse(field.grid.flags.writeable)
        samples[0] = 42.0
        self.assertTrue(samples.flags.writeable)

    def test_from_array(self):
        field = HeightField.from_array(np.arange(12).reshape(3, 4))
        self.assertEqual((field.width, field.height), (4, 3))
        self.assertEqual(field.lookup(3, 2), 11.0)

    def test_from_array_rejects_1d(self):
        with self.assertRaises(InvalidDimensionsError):
            HeightField.from_array(np.zeros(4))

    def test_window(self):
        window = self.field.window(1, 0, 2, 1)
        np.testing.assert_array_equal(window, [[1.0, 2.0], [11.0, 12.0]])
        with self.assertRaises(OutOfBoundsError):
            self.field.window(0, 0, 3, 1)

    def test_stats(self):
        stats = self.field.stats()
        self.assertEqual(stats["min"], 0.0)
        self.assertEqual(stats["max"], 12.0)
        self.assertEqual(stats["range"], 12.0)
        self.assertAlmostEqual(stats["mean"], 6.0)


if __name__ == '__main__':
    unittest.main()
