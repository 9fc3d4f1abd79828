"""
Read-only access to a grid of height samples.

The height field wraps the caller's flat, row-major sample buffer as a
``(height, width)`` numpy view. It is never written to.
"""

import logging
from typing import Any, Dict, Sequence, Union

import numpy as np

from ..exceptions import InvalidDimensionsError, OutOfBoundsError

# Set up logging
logger = logging.getLogger(__name__)

Samples = Union[Sequence[float], np.ndarray]


class HeightField:
    """Bounds-checked view over ``width * height`` row-major height samples."""

    def __init__(self, samples: Samples, width: int, height: int):
        """
        Validate the buffer and build the grid view.

        Args:
            samples: Flat row-major heights, ``index = y * width + x``
            width: Number of samples per row (at least 2)
            height: Number of rows (at least 2)

        Raises:
            InvalidDimensionsError: If the grid is smaller than 2x2 or the
                sample count doesn't equal ``width * height``
        """
        if width < 2 or height < 2:
            raise InvalidDimensionsError(
                f"Grid must be at least 2x2, got width={width}, height={height}"
            )

        data = np.asarray(samples, dtype=np.float64)
        if data.ndim != 1:
            data = data.reshape(-1)
        if data.size != width * height:
            raise InvalidDimensionsError(
                f"Length of height data ({data.size}) is not equal to "
                f"width * height ({width} * {height} = {width * height})"
            )

        # reshape gives a fresh view, so locking it leaves the caller's array alone
        grid = data.reshape(height, width)
        grid.flags.writeable = False

        self.width = int(width)
        self.height = int(height)
        self._grid = grid

    @classmethod
    def from_array(cls, array: Any) -> "HeightField":
        """
        Build a height field from a 2D array of shape ``(height, width)``.

        Args:
            array: 2D array-like of height values

        Returns:
            New HeightField instance
        """
        data = np.asarray(array, dtype=np.float64)
        if data.ndim != 2:
            raise InvalidDimensionsError(f"Expected a 2D height map, got {data.ndim} dimensions")
        rows, cols = data.shape
        return cls(data.reshape(-1), cols, rows)

    @property
    def grid(self) -> np.ndarray:
        """Read-only ``(height, width)`` array of samples."""
        return self._grid

    def contains(self, x: int, y: int) -> bool:
        """Check whether ``(x, y)`` is a valid grid coordinate."""
        return 0 <= x < self.width and 0 <= y < self.height

    def lookup(self, x: int, y: int) -> float:
        """
        Get the height sample at a grid coordinate.

        Raises:
            OutOfBoundsError: If ``(x, y)`` lies outside the grid
        """
        if not self.contains(x, y):
            raise OutOfBoundsError(
                f"Point ({x}, {y}) is outside the {self.width}x{self.height} height field"
            )
        return float(self._grid[y, x])

    def window(self, min_x: int, min_y: int, max_x: int, max_y: int) -> np.ndarray:
        """
        Get the inclusive block of samples ``[min_y..max_y] x [min_x..max_x]``.

        Raises:
            OutOfBoundsError: If either corner lies outside the grid
        """
        if not (self.contains(min_x, min_y) and self.contains(max_x, max_y)):
            raise OutOfBoundsError(
                f"Window ({min_x}, {min_y})-({max_x}, {max_y}) exceeds the "
                f"{self.width}x{self.height} height field"
            )
        return self._grid[min_y:max_y + 1, min_x:max_x + 1]

    def stats(self) -> Dict[str, Any]:
        """
        Summary statistics of the samples.

        Returns:
            Dictionary with width, height, min, max, mean and range
        """
        min_val = float(np.min(self._grid))
        max_val = float(np.max(self._grid))
        return {
            "width": self.width,
            "height": self.height,
            "min": min_val,
            "max": max_val,
            "mean": float(np.mean(self._grid)),
            "range": max_val - min_val,
        }

    def __repr__(self) -> str:
        return f"HeightField(width={self.width}, height={self.height})"
