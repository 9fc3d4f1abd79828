"""
Greedy Delaunay refinement engine.

This package holds the pieces the triangulation is built from: the height
field accessor, the half-edge mesh store, the Delaunay legalizer, the error
estimator, the candidate queue and the refinement driver.
"""

from .heightfield import HeightField
from .mesh import BOUNDARY, MeshStore
from .legalizer import legalize, is_legal
from .estimator import find_candidate
from .queue import Candidate, CandidateQueue
from .refiner import Refiner

# Define package exports
__all__ = [
    'HeightField',
    'MeshStore',
    'BOUNDARY',
    'legalize',
    'is_legal',
    'find_candidate',
    'Candidate',
    'CandidateQueue',
    'Refiner'
]
