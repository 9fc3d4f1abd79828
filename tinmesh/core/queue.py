"""
Max-priority queue of refinement candidates with lazy invalidation.

Entries are never removed when their triangle changes. Each one carries the
triangle's generation at the time it was scored, and ``pop`` drops entries
whose generation no longer matches.
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .predicates import Point


@dataclass(order=True)
class Candidate:
    """Worst-approximated sample of one triangle."""
    sort_key: Tuple[float, int] = field(init=False, repr=False)
    triangle: int = field(compare=False)
    generation: int = field(compare=False)
    point: Point = field(compare=False)
    error: float = field(compare=False)
    sequence: int = field(default=0, compare=False)

    def __post_init__(self):
        # heapq is a min-heap: negate the error, then earliest discovery wins ties
        self.sort_key = (-self.error, self.sequence)


class CandidateQueue:
    """Heap of candidates keyed by error, largest first."""

    def __init__(self, current_generation: Callable[[int], int]):
        """
        Args:
            current_generation: Returns the live generation of a triangle id
        """
        self._heap: List[Candidate] = []
        self._counter = itertools.count()
        self._current_generation = current_generation
        self.discarded = 0

    def push(self, triangle: int, generation: int, point: Point, error: float) -> Candidate:
        """Queue a freshly scored candidate."""
        candidate = Candidate(
            triangle=triangle,
            generation=generation,
            point=point,
            error=error,
            sequence=next(self._counter),
        )
        heapq.heappush(self._heap, candidate)
        return candidate

    def _is_stale(self, candidate: Candidate) -> bool:
        return candidate.generation != self._current_generation(candidate.triangle)

    def _drop_stale(self) -> None:
        while self._heap and self._is_stale(self._heap[0]):
            heapq.heappop(self._heap)
            self.discarded += 1

    def pop(self) -> Optional[Candidate]:
        """Remove and return the live candidate with the largest error."""
        self._drop_stale()
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[Candidate]:
        """Live candidate with the largest error, left in the queue."""
        self._drop_stale()
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)
