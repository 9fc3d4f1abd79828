#!/usr/bin/env python3
"""
Matplotlib rendering of triangulated meshes.

Draws the triangle edges of a TIN in grid coordinates, optionally over the
height field it approximates.
"""

import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .core.heightfield import HeightField
from .export import ensure_directory_exists

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_COLORMAP = "terrain"


def plot_mesh(
    points: Sequence[Tuple[int, int]],
    triangles: Sequence[Tuple[int, int, int]],
    width: int,
    height: int,
    filename: Optional[str] = None,
    field: Optional[HeightField] = None,
    **kwargs
) -> Any:
    """
    Plot the edges of a triangulated mesh.

    Args:
        points: ``(x, y)`` grid coordinates
        triangles: Vertex index triples
        width: Grid width
        height: Grid height
        filename: Optional image path to save the figure to
        field: Optional height field drawn underneath the mesh
        **kwargs: Additional options such as:
            - colormap: Colormap for the height background (default: "terrain")
            - figsize: Figure size in inches (default: (8, 8))
            - dpi: Resolution when saving (default: 150)
            - title: Plot title (default: "<n> triangles")
            - line_color: Colour of the triangle edges (default: "tab:blue")

    Returns:
        Matplotlib Figure object.
    """
    import matplotlib
    if filename is not None:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    figsize = kwargs.get("figsize", (8, 8))
    colormap = kwargs.get("colormap", DEFAULT_COLORMAP)
    title = kwargs.get("title", f"{len(triangles)} triangles")
    line_color = kwargs.get("line_color", "tab:blue")

    fig, ax = plt.subplots(figsize=figsize)

    if field is not None:
        image = ax.imshow(
            field.grid,
            cmap=colormap,
            origin="lower",
            extent=(-0.5, width - 0.5, -0.5, height - 0.5),
        )
        fig.colorbar(image, ax=ax, label="Height")

    if len(triangles) > 0:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        ax.triplot(pts[:, 0], pts[:, 1], np.asarray(triangles), color=line_color, linewidth=0.5)

    ax.set_xlim(-0.5, width - 0.5)
    ax.set_ylim(-0.5, height - 0.5)
    ax.set_aspect("equal")
    ax.set_title(title)

    if filename is not None:
        ensure_directory_exists(filename)
        fig.savefig(filename, dpi=kwargs.get("dpi", 150), bbox_inches="tight")
        logger.info(f"Saved mesh plot to {filename}")
        plt.close(fig)

    return fig
