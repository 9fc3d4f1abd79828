"""
tinmesh Package.

Greedy Delaunay refinement of regular height grids into Triangulated
Irregular Networks (TINs) that stay within a maximum vertical error.
"""

__version__ = "0.1.0"

# Import the main exception classes for easy access
from tinmesh.exceptions import (
    TinMeshException,
    InvalidDimensionsError,
    OutOfBoundsError,
    TopologyError,
    InconsistentTopologyError,
    InvalidInsertionError,
    TinMeshIOError
)

from tinmesh.config import TriangulationConfig
from tinmesh.core.heightfield import HeightField
from tinmesh.triangulation import Triangulator, triangulate, triangulate_heightmap

__all__ = [
    '__version__',
    'TinMeshException',
    'InvalidDimensionsError',
    'OutOfBoundsError',
    'TopologyError',
    'InconsistentTopologyError',
    'InvalidInsertionError',
    'TinMeshIOError',
    'TriangulationConfig',
    'HeightField',
    'Triangulator',
    'triangulate',
    'triangulate_heightmap'
]
