"""
Height data loaders.

Decodes height data from files into the flat, row-major sample buffer the
triangulation consumes. Supported inputs are JSON (a flat list or a list
of rows), numpy ``.npy`` arrays and greyscale images read with Pillow.
"""

import os
import json
import logging
from typing import Optional, Tuple

import numpy as np

from .exceptions import TinMeshIOError

# Set up logging
logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.png', '.tif', '.tiff', '.jpg', '.jpeg', '.bmp')

LoadedHeights = Tuple[np.ndarray, int, int]


def _from_flat(data: np.ndarray, width: Optional[int], height: Optional[int], source: str) -> LoadedHeights:
    """Resolve the grid size of a flat buffer."""
    if width is None and height is None:
        side = int(round(np.sqrt(data.size)))
        if side * side != data.size:
            raise TinMeshIOError(
                f"{source}: flat data of length {data.size} needs an explicit width or height"
            )
        width = height = side
    elif width is None:
        width = data.size // height
    elif height is None:
        height = data.size // width
    return data, int(width), int(height)


def _from_array(data: np.ndarray, width: Optional[int], height: Optional[int], source: str) -> LoadedHeights:
    if data.ndim == 1:
        return _from_flat(data, width, height, source)
    if data.ndim != 2:
        raise TinMeshIOError(f"{source}: expected 1D or 2D height data, got {data.ndim} dimensions")
    rows, cols = data.shape
    if (width is not None and width != cols) or (height is not None and height != rows):
        raise TinMeshIOError(
            f"{source}: data is {cols}x{rows} but {width}x{height} was requested"
        )
    return data.reshape(-1), cols, rows


def load_json(path: str, width: Optional[int] = None, height: Optional[int] = None) -> LoadedHeights:
    """Load heights from a JSON list (flat or nested rows)."""
    try:
        with open(path, 'r') as f:
            raw = json.load(f)
        data = np.asarray(raw, dtype=np.float64)
    except (OSError, ValueError) as e:
        raise TinMeshIOError(f"Could not read heights from {path}: {e}") from e
    return _from_array(data, width, height, path)


def load_npy(path: str, width: Optional[int] = None, height: Optional[int] = None) -> LoadedHeights:
    """Load heights from a numpy ``.npy`` file."""
    try:
        data = np.load(path, allow_pickle=False).astype(np.float64)
    except (OSError, ValueError) as e:
        raise TinMeshIOError(f"Could not read heights from {path}: {e}") from e
    return _from_array(data, width, height, path)


def load_image(path: str, width: Optional[int] = None, height: Optional[int] = None) -> LoadedHeights:
    """
    Load heights from an image, converting colour images to greyscale.

    A given width or height must match the image size.
    """
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(path) as img:
            if img.mode not in ('I', 'I;16', 'F', 'L'):
                img = img.convert('L')
            data = np.asarray(img, dtype=np.float64)
    except (OSError, UnidentifiedImageError) as e:
        raise TinMeshIOError(f"Could not read image {path}: {e}") from e
    return _from_array(data, width, height, path)


def load_heights(path: str, width: Optional[int] = None, height: Optional[int] = None) -> LoadedHeights:
    """
    Load height samples from a file, dispatching on its extension.

    Args:
        path: Input file
        width: Grid width, needed for flat non-square data
        height: Grid height, needed for flat non-square data

    Returns:
        Tuple of (samples, width, height) with samples flat and row-major

    Raises:
        TinMeshIOError: If the file is missing, unreadable or malformed
    """
    if not os.path.exists(path):
        raise TinMeshIOError(f"File not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext == '.json':
        result = load_json(path, width, height)
    elif ext == '.npy':
        result = load_npy(path, width, height)
    elif ext in IMAGE_EXTENSIONS:
        result = load_image(path, width, height)
    else:
        raise TinMeshIOError(f"Unsupported height data format: {ext or path}")

    samples, w, h = result
    logger.info(f"Loaded {w}x{h} height samples from {path}")
    return samples, w, h
