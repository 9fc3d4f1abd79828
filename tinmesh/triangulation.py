"""
Greedy Delaunay triangulation of height fields.

This module provides the public entry points: the ``Triangulator`` class,
which runs one refinement and keeps statistics about it, and the
``triangulate`` / ``triangulate_heightmap`` convenience functions.
"""

import time
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import TriangulationConfig
from .core.heightfield import HeightField
from .core.refiner import Refiner
from .utils.logging import mesh_logger

# Set up logging
logger = logging.getLogger(__name__)

Point = Tuple[int, int]
Triangle = Tuple[int, int, int]
Mesh = Tuple[List[Point], List[Triangle]]


class Triangulator:
    """
    Builds a TIN approximating a height field within a vertical error.

    The mesh starts as two triangles over the grid corners and is refined
    greedily: the sample with the largest error anywhere in the mesh is
    inserted next, and the Delaunay property is restored after each
    insertion.
    """

    def __init__(
        self,
        field: HeightField,
        config: Optional[TriangulationConfig] = None,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        """
        Initialize the triangulator.

        Args:
            field: Height samples to approximate
            config: Triangulation parameters (defaults if omitted)
            progress_callback: Optional callback function for progress reporting
        """
        self.field = field
        self.config = config or TriangulationConfig()
        self.progress_callback = progress_callback
        self.stats = self._init_stats()
        self.refiner: Optional[Refiner] = None

        logger.debug(f"Triangulator initialized for {field}")

    def _init_stats(self) -> Dict[str, Any]:
        """Initialize statistics dictionary."""
        return {
            "original_points": self.field.width * self.field.height,
            "max_error": self.config.max_error,
            "final_vertices": 0,
            "final_triangles": 0,
            "steps": 0,
            "converged": False,
            "processing_time": 0.0,
            "compression_ratio": 0.0
        }

    def run(self) -> Mesh:
        """
        Run the refinement to convergence.

        Returns:
            Tuple of (points, triangles) where points is a list of ``(x, y)``
            grid coordinates in creation order and triangles a list of
            counter-clockwise ``(a, b, c)`` indices into points.
        """
        start_time = time.perf_counter()

        self.refiner = Refiner(
            self.field,
            self.config.max_error,
            max_vertices=self.config.max_vertices,
            max_triangles=self.config.max_triangles,
            progress_callback=self.progress_callback,
        )
        mesh = self.refiner.run()
        points, triangles = mesh.snapshot()

        self.finalize_stats(points, triangles, time.perf_counter() - start_time)
        return points, triangles

    def finalize_stats(self, points: List[Point], triangles: List[Triangle], elapsed: float) -> None:
        """Update statistics after triangulation is complete."""
        self.stats["final_vertices"] = len(points)
        self.stats["final_triangles"] = len(triangles)
        self.stats["steps"] = self.refiner.steps
        self.stats["converged"] = self.refiner.converged
        self.stats["processing_time"] = elapsed

        # input size / output size
        output_size = len(points) + len(triangles) * 3
        self.stats["compression_ratio"] = self.stats["original_points"] / max(1, output_size)

        mesh_logger.info("Triangulation complete", **self.stats)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the triangulation.

        Returns:
            Dictionary with statistics
        """
        return self.stats.copy()


def triangulate(
    samples: Union[Sequence[float], np.ndarray],
    width: int,
    height: int,
    max_error: float
) -> Mesh:
    """
    Triangulate a grid of height samples within a maximum vertical error.

    Args:
        samples: Row-major heights, ``len(samples) == width * height``
        width: Grid width (at least 2)
        height: Grid height (at least 2)
        max_error: Largest vertical deviation left in the mesh; negative values
            behave like 0

    Returns:
        Tuple of (points, triangles). The first four points are the corners
        (0, 0), (width-1, 0), (width-1, height-1), (0, height-1).

    Raises:
        InvalidDimensionsError: If the grid is smaller than 2x2 or the
            sample count doesn't match
        ValueError: If max_error is NaN
    """
    field = HeightField(samples, width, height)
    config = TriangulationConfig(max_error=max_error)
    return Triangulator(field, config).run()


def triangulate_heightmap(
    height_map: np.ndarray,
    max_error: float = 1.0,
    max_vertices: Optional[int] = None,
    max_triangles: Optional[int] = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> Tuple[List[Point], List[Triangle], Dict[str, Any]]:
    """
    Convenience function to triangulate a 2D heightmap in one call.

    Args:
        height_map: 2D array of shape (height, width)
        max_error: Largest vertical deviation left in the mesh
        max_vertices: Optional cap on the vertex count
        max_triangles: Optional cap on the triangle count
        progress_callback: Optional callback function for progress reporting

    Returns:
        Tuple of (points, triangles, statistics)
    """
    field = HeightField.from_array(height_map)
    config = TriangulationConfig(
        max_error=max_error,
        max_vertices=max_vertices,
        max_triangles=max_triangles
    )
    triangulator = Triangulator(field, config, progress_callback=progress_callback)
    points, triangles = triangulator.run()
    return points, triangles, triangulator.get_statistics()
