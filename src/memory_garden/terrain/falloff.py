"""Garden shaping: soft square falloff toward the terrain border."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .heightmap import as_grid
from .noise import smoothstep


def _centered_axis(count: int) -> NDArray[np.float64]:
    """Normalized coordinates in [-1, 1] along one axis."""
    if count == 1:
        return np.zeros(1)
    return np.arange(count, dtype=np.float64) / (count - 1) * 2.0 - 1.0


def distance_from_edge(width: int, height: int) -> NDArray[np.float64]:
    """Square (Chebyshev) distance field: 1 at the centre, 0 on the border.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.

    Returns:
        2D array of shape (height, width).
    """
    nx = np.abs(_centered_axis(width))
    ny = np.abs(_centered_axis(height))
    return 1.0 - np.maximum(nx[np.newaxis, :], ny[:, np.newaxis])


def apply_edge_falloff(
    heightmap: ArrayLike,
    width: int,
    height: int,
    falloff_distance: float = 0.15,
) -> NDArray[np.float32]:
    """Taper heights smoothly to zero at the terrain border.

    Cells closer to the border than ``falloff_distance`` (as a fraction of
    the half-extent) are scaled by a smoothstep of their distance; all
    other cells keep their height. The input buffer is not modified.

    Args:
        heightmap: Flat heightmap buffer.
        width: Heightmap width in cells.
        height: Heightmap height in cells.
        falloff_distance: Width of the tapered band, 0.15 = 15% of the way
            from the border to the centre.

    Returns:
        New flat float32 heightmap.
    """
    grid = as_grid(heightmap, width, height)

    if falloff_distance <= 0:
        return grid.astype(np.float32).ravel()

    multiplier = smoothstep(0.0, falloff_distance, distance_from_edge(width, height))
    result = grid * multiplier

    return result.astype(np.float32).ravel()
