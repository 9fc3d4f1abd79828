"""
Greedy refinement loop.

The refiner owns one mesh for the duration of a triangulation. It keeps
inserting the worst-approximated sample of the whole mesh until no sample
deviates from the surface by more than the error threshold.
"""

import logging
import math
from typing import Callable, Iterable, List, Optional

from .estimator import find_candidate
from .heightfield import HeightField
from .legalizer import legalize
from .mesh import BOUNDARY, MeshStore
from .queue import Candidate, CandidateQueue

# Set up logging
logger = logging.getLogger(__name__)


class Refiner:
    """
    Refines a two-triangle seed mesh until it fits the height field.

    Each accepted step inserts exactly one vertex, repairs the Delaunay
    property around it and re-scores the triangles it changed.
    """

    def __init__(
        self,
        field: HeightField,
        max_error: float,
        max_vertices: Optional[int] = None,
        max_triangles: Optional[int] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
    ):
        """
        Seed the mesh and score its two triangles.

        Args:
            field: Validated height field
            max_error: Largest vertical error left unrefined
            max_vertices: Optional cap on the vertex count
            max_triangles: Optional cap on the triangle count
            progress_callback: Optional callable receiving progress in [0, 1]
        """
        if math.isnan(max_error):
            raise ValueError("max_error must be a number, got NaN")

        self.field = field
        # errors are never negative, so any threshold below zero means zero
        self.max_error = max(0.0, float(max_error))
        self.max_vertices = max_vertices
        self.max_triangles = max_triangles
        self.progress_callback = progress_callback

        self.mesh = MeshStore()
        self.queue = CandidateQueue(self.mesh.generation)
        self.steps = 0
        self.converged = False
        self.last_error: Optional[float] = None

        _, _, _, _, t0, t1 = self.mesh.seed_rectangle(field.width, field.height)
        self._score([t0, t1])

    def _score(self, triangles: Iterable[int]) -> None:
        """Estimate the error of each triangle and queue its candidate."""
        for t in dict.fromkeys(triangles):
            a, b, c = self.mesh.triangle_points(t)
            result = find_candidate(self.field, a, b, c)
            if result is None:
                continue
            point, error = result
            self.queue.push(t, self.mesh.generation(t), point, error)

    def _insert(self, candidate: Candidate) -> List[int]:
        """
        Insert a candidate's sample into its triangle.

        Returns:
            Ids of every triangle created or rewritten
        """
        mesh = self.mesh
        v = mesh.add_vertex(*candidate.point)

        edge = mesh.locate_edge(candidate.triangle, candidate.point)
        if edge == BOUNDARY:
            new_triangles = mesh.split_triangle(candidate.triangle, v)
        else:
            new_triangles = mesh.split_edge(edge, v)

        flipped = legalize(mesh, [3 * t for t in new_triangles])
        return new_triangles + flipped

    def _within_caps(self) -> bool:
        if self.max_vertices is not None and self.mesh.vertex_count >= self.max_vertices:
            logger.info(f"Reached maximum vertex count ({self.max_vertices})")
            return False
        # a single insertion adds at most two triangles
        if self.max_triangles is not None and self.mesh.triangle_count + 2 > self.max_triangles:
            logger.info(f"Reached maximum triangle count ({self.max_triangles})")
            return False
        return True

    def step(self) -> bool:
        """
        Perform one refinement step.

        Returns:
            True if a vertex was inserted, False once the mesh has converged
            or a size cap was reached
        """
        candidate = self.queue.peek()
        if candidate is None or candidate.error <= self.max_error:
            self.converged = True
            return False
        if not self._within_caps():
            return False

        self.queue.pop()
        self.last_error = candidate.error
        touched = self._insert(candidate)
        self._score(touched)
        self.steps += 1
        return True

    def run(self) -> MeshStore:
        """
        Refine until convergence (or until a cap stops it).

        Returns:
            The refined mesh
        """
        logger.info(
            f"Refining {self.field.width}x{self.field.height} height field "
            f"with max_error={self.max_error}"
        )
        total = self.field.width * self.field.height
        interval = max(1, total // 100)

        while self.step():
            if self.steps % interval == 0:
                logger.debug(
                    f"Step {self.steps}: {self.mesh.vertex_count} vertices, "
                    f"{self.mesh.triangle_count} triangles, error {self.last_error:.6f}"
                )
                self.report_progress(self.mesh.vertex_count / total)

        self.report_progress(1.0)
        logger.info(
            f"Refinement finished after {self.steps} steps: "
            f"{self.mesh.vertex_count} vertices, {self.mesh.triangle_count} triangles"
        )
        return self.mesh

    def report_progress(self, progress: float) -> None:
        """Report progress to callback if provided."""
        if self.progress_callback:
            self.progress_callback(max(0.0, min(1.0, progress)))
