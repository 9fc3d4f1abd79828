"""
Arena-indexed triangle mesh with half-edge adjacency.

Vertices, triangles and half-edges live in parallel flat lists indexed by
integer id. Half-edge ``e = 3 * t + i`` runs from vertex ``triangles[e]`` to
vertex ``triangles[next_edge(e)]``; ``halfedges[e]`` holds the opposite
half-edge or ``BOUNDARY``. Every live triangle is counter-clockwise
(``orient2d > 0``).

Triangle ids are never removed. When a split or flip replaces a triangle its
slot is rewritten and its generation counter bumped, which is how queued
work detects that the triangle it was computed for is gone.
"""

import logging
from typing import List, Tuple

from .predicates import Point, orient2d
from ..exceptions import InconsistentTopologyError, InvalidInsertionError

# Set up logging
logger = logging.getLogger(__name__)

BOUNDARY = -1

Triangle = Tuple[int, int, int]


def next_edge(e: int) -> int:
    """Next half-edge around the same triangle."""
    return e - 2 if e % 3 == 2 else e + 1


def prev_edge(e: int) -> int:
    """Previous half-edge around the same triangle."""
    return e + 2 if e % 3 == 0 else e - 1


class MeshStore:
    """Growable triangulation of integer grid points."""

    def __init__(self):
        self.coords: List[Point] = []
        self.triangles: List[int] = []
        self.halfedges: List[int] = []
        self.generations: List[int] = []
        self.max_x = 0
        self.max_y = 0

    @property
    def vertex_count(self) -> int:
        return len(self.coords)

    @property
    def triangle_count(self) -> int:
        return len(self.generations)

    def add_vertex(self, x: int, y: int) -> int:
        """
        Append a vertex.

        Args:
            x: Grid column
            y: Grid row

        Returns:
            Id of the new vertex
        """
        self.coords.append((int(x), int(y)))
        return len(self.coords) - 1

    def triangle_vertices(self, t: int) -> Triangle:
        """Vertex ids of triangle ``t``."""
        e = 3 * t
        return self.triangles[e], self.triangles[e + 1], self.triangles[e + 2]

    def triangle_points(self, t: int) -> Tuple[Point, Point, Point]:
        """Grid coordinates of triangle ``t``'s corners."""
        a, b, c = self.triangle_vertices(t)
        return self.coords[a], self.coords[b], self.coords[c]

    def generation(self, t: int) -> int:
        return self.generations[t]

    def edge_endpoints(self, e: int) -> Tuple[int, int]:
        """Start and end vertex ids of half-edge ``e``."""
        return self.triangles[e], self.triangles[next_edge(e)]

    def _link(self, a: int, b: int) -> None:
        self.halfedges[a] = b
        if b != BOUNDARY:
            self.halfedges[b] = a

    def _write_triangle(
        self,
        t,
        i0: int,
        i1: int,
        i2: int,
        h0: int,
        h1: int,
        h2: int,
    ) -> int:
        """
        Write a triangle and link its half-edges.

        ``t=None`` appends a new triangle; an existing id is overwritten and
        its generation bumped.
        """
        if t is None:
            t = len(self.generations)
            self.triangles.extend((i0, i1, i2))
            self.halfedges.extend((BOUNDARY, BOUNDARY, BOUNDARY))
            self.generations.append(0)
        else:
            e = 3 * t
            self.triangles[e:e + 3] = [i0, i1, i2]
            self.generations[t] += 1

        e = 3 * t
        self._link(e, h0)
        self._link(e + 1, h1)
        self._link(e + 2, h2)
        return t

    def seed_rectangle(self, width: int, height: int) -> Tuple[int, int, int, int, int, int]:
        """
        Cover the ``width x height`` grid with two triangles.

        Corners are created in the order (0, 0), (w-1, 0), (w-1, h-1),
        (0, h-1) and the rectangle is split along the v0-v2 diagonal.

        Returns:
            Tuple of (v0, v1, v2, v3, t0, t1)
        """
        if self.coords:
            raise InconsistentTopologyError("Mesh is already seeded")

        max_x = self.max_x = width - 1
        max_y = self.max_y = height - 1
        v0 = self.add_vertex(0, 0)
        v1 = self.add_vertex(max_x, 0)
        v2 = self.add_vertex(max_x, max_y)
        v3 = self.add_vertex(0, max_y)

        t0 = self._write_triangle(None, v0, v2, v3, BOUNDARY, BOUNDARY, BOUNDARY)
        # edge 2 -> 0 of t1 is the shared diagonal
        t1 = self._write_triangle(None, v0, v1, v2, BOUNDARY, BOUNDARY, 3 * t0)

        logger.debug(f"Seeded {width}x{height} rectangle with triangles {t0}, {t1}")
        return v0, v1, v2, v3, t0, t1

    def split_triangle(self, t: int, v: int) -> List[int]:
        """
        Fan triangle ``t`` out into three triangles around vertex ``v``.

        The slot ``t`` is reused for the first child; the other two are
        appended.

        Args:
            t: Id of a live triangle
            v: Id of a vertex strictly inside ``t``

        Returns:
            Ids of the three new triangles; edge ``3 * id`` of each is the
            outer edge opposite ``v``

        Raises:
            InvalidInsertionError: If ``t`` is unknown or ``v`` isn't strictly inside it
        """
        if not 0 <= t < self.triangle_count:
            raise InvalidInsertionError(f"Triangle {t} does not exist")

        a, b, c = self.triangle_vertices(t)
        pa, pb, pc = self.coords[a], self.coords[b], self.coords[c]
        p = self.coords[v]
        if orient2d(pa, pb, p) <= 0 or orient2d(pb, pc, p) <= 0 or orient2d(pc, pa, p) <= 0:
            raise InvalidInsertionError(
                f"Vertex {v} at {p} is not strictly inside triangle {t} ({pa}, {pb}, {pc})"
            )

        e = 3 * t
        hab = self.halfedges[e]
        hbc = self.halfedges[e + 1]
        hca = self.halfedges[e + 2]

        t0 = self._write_triangle(t, a, b, v, hab, BOUNDARY, BOUNDARY)
        t1 = self._write_triangle(None, b, c, v, hbc, BOUNDARY, 3 * t0 + 1)
        t2 = self._write_triangle(None, c, a, v, hca, 3 * t0 + 2, 3 * t1 + 1)
        return [t0, t1, t2]

    def split_edge(self, e: int, v: int) -> List[int]:
        """
        Insert vertex ``v`` lying on half-edge ``e``.

        An interior edge turns its two triangles into four; a boundary edge
        turns its single triangle into two.

        Args:
            e: Half-edge id
            v: Id of a vertex strictly between the edge's endpoints

        Returns:
            Ids of the new triangles; edge ``3 * id`` of each is the outer
            edge opposite ``v``

        Raises:
            InvalidInsertionError: If ``v`` isn't strictly inside the edge segment
        """
        x, y = self.edge_endpoints(e)
        px, py, p = self.coords[x], self.coords[y], self.coords[v]
        if orient2d(px, py, p) != 0 or not _strictly_between(px, py, p):
            raise InvalidInsertionError(
                f"Vertex {v} at {p} does not lie inside edge {e} ({px}, {py})"
            )

        en = next_edge(e)
        ep = prev_edge(e)
        apex = self.triangles[ep]
        h_an = self.halfedges[en]
        h_ap = self.halfedges[ep]
        t = e // 3
        opposite = self.halfedges[e]

        if opposite == BOUNDARY:
            t0 = self._write_triangle(t, apex, x, v, h_ap, BOUNDARY, BOUNDARY)
            t1 = self._write_triangle(None, y, apex, v, h_an, 3 * t0 + 2, BOUNDARY)
            return [t0, t1]

        bn = next_edge(opposite)
        bp = prev_edge(opposite)
        far = self.triangles[bp]
        h_bn = self.halfedges[bn]
        h_bp = self.halfedges[bp]
        u = opposite // 3

        t0 = self._write_triangle(t, apex, x, v, h_ap, BOUNDARY, BOUNDARY)
        t1 = self._write_triangle(u, x, far, v, h_bn, BOUNDARY, 3 * t0 + 1)
        t2 = self._write_triangle(None, far, y, v, h_bp, BOUNDARY, 3 * t1 + 1)
        t3 = self._write_triangle(None, y, apex, v, h_an, 3 * t0 + 2, 3 * t2 + 1)
        return [t0, t1, t2, t3]

    def flip_edge(self, e: int) -> Tuple[int, int]:
        """
        Swap the diagonal shared by the two triangles on half-edge ``e``.

        With ``e`` running x -> y in triangle (x, y, p) and its twin in
        (y, x, q), the pair becomes (p, x, q) and (q, y, p). Both slots are
        rewritten in place.

        Returns:
            The two outer edges of the new pair opposite ``p``: (x -> q, q -> y)

        Raises:
            InconsistentTopologyError: If ``e`` is a boundary edge or its twin
                doesn't point back
        """
        opposite = self.halfedges[e]
        if opposite == BOUNDARY:
            raise InconsistentTopologyError(f"Cannot flip boundary edge {e}")
        if self.halfedges[opposite] != e:
            raise InconsistentTopologyError(
                f"Half-edge {e} points to {opposite}, which points to {self.halfedges[opposite]}"
            )

        an = next_edge(e)
        ap = prev_edge(e)
        bn = next_edge(opposite)
        bp = prev_edge(opposite)

        x = self.triangles[e]
        y = self.triangles[an]
        p = self.triangles[ap]
        q = self.triangles[bp]
        if self.triangles[opposite] != y or self.triangles[bn] != x:
            raise InconsistentTopologyError(f"Half-edges {e} and {opposite} don't share endpoints")

        h_an = self.halfedges[an]
        h_ap = self.halfedges[ap]
        h_bn = self.halfedges[bn]
        h_bp = self.halfedges[bp]

        t0 = e // 3
        t1 = opposite // 3
        self._write_triangle(t0, p, x, q, h_ap, h_bn, BOUNDARY)
        self._write_triangle(t1, q, y, p, h_bp, h_an, 3 * t0 + 2)
        return 3 * t0 + 1, 3 * t1

    def locate_edge(self, t: int, point: Point) -> int:
        """
        Find the edge of triangle ``t`` that ``point`` lies on.

        Returns:
            Half-edge id, or ``BOUNDARY`` if the point is off every edge line
        """
        a, b, c = self.triangle_points(t)
        e = 3 * t
        if orient2d(a, b, point) == 0:
            return e
        if orient2d(b, c, point) == 0:
            return e + 1
        if orient2d(c, a, point) == 0:
            return e + 2
        return BOUNDARY

    def points(self) -> List[Point]:
        """Copy of the vertex coordinates in creation order."""
        return list(self.coords)

    def triangle_list(self) -> List[Triangle]:
        """Copy of the triangles as vertex-id triples."""
        tris = self.triangles
        return [(tris[i], tris[i + 1], tris[i + 2]) for i in range(0, len(tris), 3)]

    def snapshot(self) -> Tuple[List[Point], List[Triangle]]:
        """Independent ``(points, triangles)`` copy of the current mesh."""
        return self.points(), self.triangle_list()

    def validate(self) -> None:
        """
        Check winding and half-edge symmetry of the whole mesh.

        Raises:
            InconsistentTopologyError: On the first broken invariant found
        """
        for t in range(self.triangle_count):
            a, b, c = self.triangle_points(t)
            if orient2d(a, b, c) <= 0:
                raise InconsistentTopologyError(f"Triangle {t} ({a}, {b}, {c}) is not counter-clockwise")

        for e, twin in enumerate(self.halfedges):
            if twin == BOUNDARY:
                x, y = (self.coords[v] for v in self.edge_endpoints(e))
                on_hull = (x[0] == y[0] and x[0] in (0, self.max_x)) or (
                    x[1] == y[1] and x[1] in (0, self.max_y)
                )
                if not on_hull:
                    raise InconsistentTopologyError(f"Boundary edge {e} is not on the bounding rectangle")
                continue
            if self.halfedges[twin] != e:
                raise InconsistentTopologyError(f"Half-edge {e} -> {twin} is not mutual")
            if self.edge_endpoints(twin) != self.edge_endpoints(e)[::-1]:
                raise InconsistentTopologyError(f"Half-edges {e} and {twin} don't share endpoints")


def _strictly_between(a: Point, b: Point, p: Point) -> bool:
    """Whether collinear point ``p`` lies strictly between ``a`` and ``b``."""
    dot = (p[0] - a[0]) * (b[0] - a[0]) + (p[1] - a[1]) * (b[1] - a[1])
    length = (b[0] - a[0]) ** 2 + (b[1] - a[1]) ** 2
    return 0 < dot < length
