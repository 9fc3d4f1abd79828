"""
Per-triangle approximation error.

For a triangle of the mesh, every grid sample inside its footprint is
compared against the plane through the triangle's three corner heights.
The scan covers the triangle's bounding box with vectorised numpy
arithmetic; the edge functions are evaluated on integers so the inside
test is exact.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .heightfield import HeightField
from .predicates import Point, orient2d

# Set up logging
logger = logging.getLogger(__name__)

Candidate = Tuple[Point, float]


def _edge_function(a: Point, b: Point, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """``orient2d(a, b, p)`` for every grid point ``p`` of the window."""
    return (b[0] - a[0]) * (ys - a[1]) - (b[1] - a[1]) * (xs - a[0])


def find_candidate(field: HeightField, a: Point, b: Point, c: Point) -> Optional[Candidate]:
    """
    Find the sample inside triangle (a, b, c) worst approximated by its plane.

    Samples on the triangle's edges belong to the footprint; the corners
    themselves don't. Ties go to the first sample in row-major order.

    Args:
        field: Height samples
        a, b, c: Counter-clockwise corner coordinates

    Returns:
        ``((x, y), error)`` or None when no sample besides the corners lies
        in the footprint
    """
    area = orient2d(a, b, c)
    if area <= 0:
        return None

    min_x = min(a[0], b[0], c[0])
    max_x = max(a[0], b[0], c[0])
    min_y = min(a[1], b[1], c[1])
    max_y = max(a[1], b[1], c[1])

    ys, xs = np.mgrid[min_y:max_y + 1, min_x:max_x + 1]
    xs = xs.astype(np.int64)
    ys = ys.astype(np.int64)

    # weight of each corner is the edge function of the opposite edge
    w_a = _edge_function(b, c, xs, ys)
    w_b = _edge_function(c, a, xs, ys)
    w_c = _edge_function(a, b, xs, ys)

    inside = (w_a >= 0) & (w_b >= 0) & (w_c >= 0)
    for corner in (a, b, c):
        inside[corner[1] - min_y, corner[0] - min_x] = False
    if not inside.any():
        return None

    z_a = field.lookup(*a)
    z_b = field.lookup(*b)
    z_c = field.lookup(*c)
    interpolated = (w_a * z_a + w_b * z_b + w_c * z_c) / float(area)

    actual = field.window(min_x, min_y, max_x, max_y)
    errors = np.where(inside, np.abs(actual - interpolated), -1.0)

    flat_index = int(np.argmax(errors))
    row, col = divmod(flat_index, errors.shape[1])
    return (min_x + col, min_y + row), float(errors[row, col])


def max_deviation(field: HeightField, a: Point, b: Point, c: Point) -> float:
    """Largest vertical error inside the triangle, 0.0 if it holds no samples."""
    candidate = find_candidate(field, a, b, c)
    return 0.0 if candidate is None else candidate[1]
