"""
Delaunay legalization by edge flipping.

After a vertex is inserted, the edges opposite it are checked against the
in-circle predicate. A flip replaces an illegal edge and hands back the two
edges that now face the new vertex, which are checked in turn. The worklist
is explicit so pathological inputs can't exhaust the call stack.
"""

import logging
from typing import Iterable, List

from .mesh import BOUNDARY, MeshStore, next_edge, prev_edge
from .predicates import in_circle

# Set up logging
logger = logging.getLogger(__name__)


def is_legal(mesh: MeshStore, e: int) -> bool:
    """
    Check the local Delaunay property of half-edge ``e``.

    Boundary edges are always legal. Cocircular configurations count as
    legal, so they never trigger a flip.
    """
    opposite = mesh.halfedges[e]
    if opposite == BOUNDARY:
        return True

    coords = mesh.coords
    tris = mesh.triangles
    x = coords[tris[e]]
    y = coords[tris[next_edge(e)]]
    apex = coords[tris[prev_edge(e)]]
    far = coords[tris[prev_edge(opposite)]]
    return in_circle(x, y, apex, far) <= 0


def legalize(mesh: MeshStore, edges: Iterable[int]) -> List[int]:
    """
    Flip edges until every edge reachable from ``edges`` is locally Delaunay.

    Args:
        mesh: Mesh to repair in place
        edges: Half-edges opposite the freshly inserted vertex

    Returns:
        Ids of the triangles rewritten by flips, in the order they were touched
    """
    stack = list(edges)
    touched: List[int] = []
    flips = 0

    while stack:
        e = stack.pop()
        if is_legal(mesh, e):
            continue

        opposite = mesh.halfedges[e]
        touched.append(e // 3)
        touched.append(opposite // 3)

        edge_a, edge_b = mesh.flip_edge(e)
        flips += 1
        stack.append(edge_b)
        stack.append(edge_a)

    if flips:
        logger.debug(f"Legalization performed {flips} flips")
    return touched
