"""
Synthetic height fields and timing of the triangulation.

Used by the ``bench`` CLI command and handy for profiling: generates
reproducible height fields and measures wall-clock cost of triangulating
them.
"""

import time
import logging
from typing import Any, Dict, List, Optional

import numpy as np

from .config import TriangulationConfig
from .core.heightfield import HeightField
from .triangulation import Triangulator

# Set up logging
logger = logging.getLogger(__name__)

FIELD_KINDS = ("flat", "slope", "peak", "waves", "noise")


def synthetic_field(kind: str, width: int, height: int, seed: Optional[int] = 0) -> np.ndarray:
    """
    Generate a synthetic height map.

    Args:
        kind: One of "flat", "slope", "peak", "waves", "noise"
        width: Number of columns
        height: Number of rows
        seed: Random seed for "noise"

    Returns:
        Array of shape (height, width)
    """
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    u = xs / max(1, width - 1)
    v = ys / max(1, height - 1)

    if kind == "flat":
        return np.zeros((height, width))
    if kind == "slope":
        return 100.0 * v
    if kind == "peak":
        return 100.0 * np.exp(-((u - 0.5) ** 2 + (v - 0.5) ** 2) / 0.05)
    if kind == "waves":
        return 50.0 + 50.0 * np.sin(u * 4 * np.pi) * np.cos(v * 4 * np.pi)
    if kind == "noise":
        rng = np.random.default_rng(seed)
        return rng.uniform(0.0, 100.0, size=(height, width))
    raise ValueError(f"Unknown field kind: {kind}. Available kinds: {list(FIELD_KINDS)}")


def run_benchmark(
    width: int = 256,
    height: int = 256,
    max_error: float = 1.0,
    kind: str = "waves",
    repeat: int = 3,
    seed: Optional[int] = 0
) -> Dict[str, Any]:
    """
    Time repeated triangulations of a synthetic field.

    Returns:
        Dictionary with the timings and the size of the produced mesh
    """
    field = HeightField.from_array(synthetic_field(kind, width, height, seed))
    config = TriangulationConfig(max_error=max_error)

    timings: List[float] = []
    stats: Dict[str, Any] = {}
    for run in range(repeat):
        triangulator = Triangulator(field, config)
        start = time.perf_counter()
        triangulator.run()
        timings.append(time.perf_counter() - start)
        stats = triangulator.get_statistics()
        logger.debug(f"Benchmark run {run + 1}/{repeat}: {timings[-1]:.4f}s")

    result = {
        "kind": kind,
        "width": width,
        "height": height,
        "max_error": max_error,
        "repeat": repeat,
        "best": min(timings),
        "mean": float(np.mean(timings)),
        "vertices": stats.get("final_vertices", 0),
        "triangles": stats.get("final_triangles", 0),
    }
    logger.info(
        f"Benchmark {kind} {width}x{height} max_error={max_error}: "
        f"best {result['best']:.4f}s over {repeat} runs"
    )
    return result
