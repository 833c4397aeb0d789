"""Per-vertex ground fields: grass/dirt blend weights and vertex colours."""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from PIL import ImageColor

from ..exceptions import TerrainParameterError

# Dirt appears where blend noise exceeds this, raised on higher ground
DIRT_THRESHOLD_BASE = 0.58
DIRT_THRESHOLD_HEIGHT_GAIN = 0.12
DIRT_STRENGTH_GAIN = 1.2


def color_to_rgb(color: str) -> NDArray[np.float64]:
    """Parse a CSS colour string into RGB floats in [0, 1]."""
    return np.array(ImageColor.getrgb(color)[:3], dtype=np.float64) / 255.0


def _finite01(values: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.clip(np.nan_to_num(values, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0)


def normalized_heights(heightmap: ArrayLike, amplitude: float) -> NDArray[np.float64]:
    """Heights mapped to [0, 1] with a little headroom below zero.

    Args:
        heightmap: Flat heightmap buffer.
        amplitude: Amplitude the heightmap was generated with.

    Returns:
        Flat array in [0, 1].
    """
    heights = np.asarray(heightmap, dtype=np.float64)
    if amplitude <= 0:
        return np.zeros_like(heights)
    return _finite01((heights + amplitude * 0.2) / (amplitude * 1.2))


def compute_blend_weights(
    heightmap: ArrayLike,
    blend_noise: ArrayLike,
    amplitude: float,
) -> NDArray[np.float32]:
    """Derive the grass (0) to dirt (1) blend weight per vertex.

    A second noise field carves wide dirt paths wherever it rises above a
    threshold; the threshold climbs with terrain height so hilltops stay
    grassy.

    Args:
        heightmap: Flat terrain heightmap.
        blend_noise: Flat noise field in [0, 1], same length.
        amplitude: Terrain amplitude.

    Returns:
        Flat float32 weights in [0, 1].

    Raises:
        TerrainParameterError: If the buffers differ in length.
    """
    blend = _finite01(np.asarray(blend_noise, dtype=np.float64))
    heights = normalized_heights(heightmap, amplitude)
    if blend.shape != heights.shape:
        raise TerrainParameterError(
            f"Blend noise has {blend.size} values, heightmap has {heights.size}"
        )

    threshold = DIRT_THRESHOLD_BASE + heights * DIRT_THRESHOLD_HEIGHT_GAIN
    strength = (blend - threshold) / (1.0 - threshold)
    weights = np.where(blend > threshold, np.minimum(1.0, strength * DIRT_STRENGTH_GAIN), 0.0)

    return _finite01(weights).astype(np.float32)


def compute_vertex_colors(
    heightmap: ArrayLike,
    slopes: ArrayLike,
    grass_color: str,
    dirt_color: str,
    amplitude: float,
) -> NDArray[np.float32]:
    """Tint vertices from grass toward dirt on slopes, lighter on high ground.

    Returns:
        Float32 array of shape (n, 3) in [0, 1].
    """
    slope = _finite01(np.asarray(slopes, dtype=np.float64))[:, np.newaxis]
    brightness = 0.85 + 0.15 * normalized_heights(heightmap, amplitude)

    grass = color_to_rgb(grass_color)
    dirt = color_to_rgb(dirt_color)
    colors = (grass * (1.0 - slope) + dirt * slope) * brightness[:, np.newaxis]

    return _finite01(colors).astype(np.float32)
