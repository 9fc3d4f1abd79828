"""
Mesh output helpers.

Turns the ``(points, triangles)`` result of a triangulation into 3D vertex
lists, numpy arrays or a Wavefront OBJ file. Heights are looked up in the
height field the mesh was built from.
"""

import os
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .core.heightfield import HeightField
from .exceptions import TinMeshIOError

# Set up logging
logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Triangle = Tuple[int, int, int]


def to_vertices_3d(
    points: Sequence[Point],
    field: HeightField,
    z_scale: float = 1.0
) -> List[List[float]]:
    """
    Attach heights to grid points.

    Args:
        points: ``(x, y)`` grid coordinates
        field: Height field the points index into
        z_scale: Scale factor for Z-axis values

    Returns:
        List of ``[x, y, z]`` vertices
    """
    return [[float(x), float(y), field.lookup(x, y) * z_scale] for x, y in points]


def to_numpy(
    points: Sequence[Point],
    triangles: Sequence[Triangle]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert a mesh to arrays.

    Returns:
        Tuple of an Nx2 int array of points and an Mx3 int array of triangles
    """
    points_array = np.asarray(points, dtype=np.int64).reshape(-1, 2)
    triangles_array = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    return points_array, triangles_array


def ensure_directory_exists(filename: str) -> None:
    """Create the parent directory of ``filename`` if needed."""
    directory = os.path.dirname(os.path.abspath(filename))
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise TinMeshIOError(f"Failed to create directory for {filename}: {e}") from e


def write_obj(
    filename: str,
    points: Sequence[Point],
    triangles: Sequence[Triangle],
    field: HeightField,
    z_scale: float = 1.0
) -> str:
    """
    Write a mesh to a Wavefront OBJ file.

    Args:
        filename: Output filename; ``.obj`` is appended unless it already
            ends with it
        points: ``(x, y)`` grid coordinates
        triangles: Vertex index triples
        field: Height field supplying the Z values
        z_scale: Scale factor for Z-axis values (must be positive)

    Returns:
        Path to the created file

    Raises:
        ValueError: If z_scale is not positive
        TinMeshIOError: If the file can't be written
    """
    if z_scale <= 0:
        raise ValueError(f"z_scale must be positive, got {z_scale}")
    if not filename.lower().endswith('.obj'):
        filename = f"{filename}.obj"

    ensure_directory_exists(filename)
    vertices = to_vertices_3d(points, field, z_scale)

    try:
        with open(filename, 'w') as f:
            f.write("# OBJ file generated by tinmesh\n")
            f.write(f"# {len(vertices)} vertices, {len(triangles)} faces\n")
            f.write("o TIN\n")

            for x, y, z in vertices:
                f.write(f"v {x:g} {y:g} {z:.6f}\n")

            # OBJ uses 1-based indexing
            for a, b, c in triangles:
                f.write(f"f {a + 1} {b + 1} {c + 1}\n")
    except OSError as e:
        raise TinMeshIOError(f"Error writing OBJ file {filename}: {e}") from e

    logger.info(f"Exported OBJ file to {filename}")
    return filename


def read_obj(filename: str) -> Tuple[List[List[float]], List[Triangle]]:
    """
    Read vertices and triangular faces back from an OBJ file.

    Only ``v`` and ``f`` records are interpreted; face indices are returned
    0-based.
    """
    vertices: List[List[float]] = []
    faces: List[Triangle] = []
    try:
        with open(filename, 'r') as f:
            for line in f:
                parts = line.split()
                if not parts:
                    continue
                if parts[0] == 'v':
                    vertices.append([float(v) for v in parts[1:4]])
                elif parts[0] == 'f':
                    a, b, c = (int(p.split('/')[0]) - 1 for p in parts[1:4])
                    faces.append((a, b, c))
    except (OSError, ValueError) as e:
        raise TinMeshIOError(f"Error reading OBJ file {filename}: {e}") from e
    return vertices, faces
