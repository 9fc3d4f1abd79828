"""
Geometric predicates on integer grid coordinates.

Both predicates work on plain Python ints, so results are exact and the
sign of a determinant is never decided by floating-point noise.
"""

from typing import Tuple

Point = Tuple[int, int]


def orient2d(a: Point, b: Point, c: Point) -> int:
    """
    Twice the signed area of triangle (a, b, c).

    Positive when a, b, c turn counter-clockwise in a y-up frame, negative
    when clockwise, zero when collinear.
    """
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def in_circle(a: Point, b: Point, c: Point, d: Point) -> int:
    """
    In-circle determinant for point d against triangle (a, b, c).

    For a triangle with ``orient2d(a, b, c) > 0`` the result is positive when
    d lies strictly inside the circumcircle, negative when outside and zero
    when the four points are cocircular.
    """
    adx = a[0] - d[0]
    ady = a[1] - d[1]
    bdx = b[0] - d[0]
    bdy = b[1] - d[1]
    cdx = c[0] - d[0]
    cdy = c[1] - d[1]

    ad = adx * adx + ady * ady
    bd = bdx * bdx + bdy * bdy
    cd = cdx * cdx + cdy * cdy

    return (
        ad * (bdx * cdy - cdx * bdy)
        + bd * (cdx * ady - adx * cdy)
        + cd * (adx * bdy - bdx * ady)
    )
