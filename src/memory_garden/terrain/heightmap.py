"""Heightmap synthesis, sampling and slope analysis.

Heightmaps are flat float32 buffers indexed row-major (``y * width + x``),
which is the layout the mesh builder and the renderer consume.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import ndimage

from ..exceptions import TerrainParameterError
from .config import HeightmapOptions
from .noise import TerrainNoise

logger = logging.getLogger(__name__)


def as_grid(heightmap: ArrayLike, width: int, height: int) -> NDArray[np.float64]:
    """View a flat heightmap buffer as a (height, width) float64 grid.

    Raises:
        TerrainParameterError: If the dimensions are not positive or the
            buffer length does not match them.
    """
    if width < 1 or height < 1:
        raise TerrainParameterError(f"Grid must be at least 1x1, got {width}x{height}")
    values = np.asarray(heightmap, dtype=np.float64)
    if values.size != width * height:
        raise TerrainParameterError(
            f"Heightmap has {values.size} values, expected {width}x{height}"
        )
    return values.reshape(height, width)


def generate_heightmap(
    width: int,
    height: int,
    options: HeightmapOptions | None = None,
    **overrides: float,
) -> NDArray[np.float32]:
    """Generate a normalized multi-octave noise heightmap.

    Each octave doubles (by ``lacunarity``) the frequency and halves (by
    ``persistence``) the weight of the previous one. The sum is divided by
    the total weight, remapped to [0, 1] with the observed min/max, raised
    to ``redistribution`` and scaled by ``amplitude``.

    Args:
        width: Cells per row.
        height: Number of rows.
        options: Noise parameters (defaults when omitted).
        **overrides: Individual option fields, e.g. ``seed=7``.

    Returns:
        Flat float32 array of ``width * height`` values in [0, amplitude].

    Raises:
        TerrainParameterError: If the grid is empty.
    """
    if width < 1 or height < 1:
        raise TerrainParameterError(f"Grid must be at least 1x1, got {width}x{height}")

    options = options or HeightmapOptions()
    if overrides:
        options = HeightmapOptions.model_validate({**options.model_dump(), **overrides})

    noise = TerrainNoise(options.seed)
    xs, ys = np.meshgrid(
        np.arange(width, dtype=np.float64), np.arange(height, dtype=np.float64)
    )

    field = np.zeros((height, width), dtype=np.float64)
    amplitude = 1.0
    frequency = options.scale
    amplitude_sum = 0.0

    for _ in range(options.octaves):
        field += noise.noise_2d(xs * frequency, ys * frequency) * amplitude
        amplitude_sum += amplitude
        amplitude *= options.persistence
        frequency *= options.lacunarity

    if amplitude_sum != 0.0:
        field /= amplitude_sum

    low = float(field.min())
    high = float(field.max())
    if high > low:
        normalized = np.clip((field - low) / (high - low), 0.0, 1.0)
    else:
        # Flat noise (single cell, or scale 0): nothing to remap
        logger.debug(f"Degenerate noise range {low:.4f} for seed {options.seed}")
        normalized = np.zeros_like(field)

    result = np.power(normalized, options.redistribution) * options.amplitude
    result = np.nan_to_num(result, nan=0.0, posinf=options.amplitude, neginf=0.0)

    return result.astype(np.float32).ravel()


def sample_height(
    heightmap: ArrayLike,
    width: int,
    height: int,
    x: float,
    z: float,
    terrain_size: float,
) -> float:
    """Sample terrain height at a world position with bilinear interpolation.

    The terrain is centred on the origin and spans ``terrain_size`` on
    both axes. Positions beyond the border are clamped to the edge cells.

    Args:
        heightmap: Flat heightmap buffer.
        width: Heightmap width in cells.
        height: Heightmap height in cells.
        x: World X position.
        z: World Z position (maps to heightmap rows).
        terrain_size: World-space edge length of the terrain.

    Returns:
        Interpolated height.
    """
    grid = as_grid(heightmap, width, height)

    half_size = terrain_size / 2
    u = ((x + half_size) / terrain_size) * (width - 1)
    v = ((z + half_size) / terrain_size) * (height - 1)

    u = max(0.0, min(width - 1, u))
    v = max(0.0, min(height - 1, v))

    x0 = int(np.floor(u))
    y0 = int(np.floor(v))
    x1 = min(x0 + 1, width - 1)
    y1 = min(y0 + 1, height - 1)

    fx = u - x0
    fy = v - y0

    h00 = grid[y0, x0]
    h10 = grid[y0, x1]
    h01 = grid[y1, x0]
    h11 = grid[y1, x1]

    h0 = h00 * (1 - fx) + h10 * fx
    h1 = h01 * (1 - fx) + h11 * fx
    return float(h0 * (1 - fy) + h1 * fy)


def sample_heights(
    heightmap: ArrayLike,
    width: int,
    height: int,
    xs: ArrayLike,
    zs: ArrayLike,
    terrain_size: float,
) -> NDArray[np.float64]:
    """Vectorized :func:`sample_height` over arrays of world positions.

    Args:
        heightmap: Flat heightmap buffer.
        width: Heightmap width in cells.
        height: Heightmap height in cells.
        xs: World X positions.
        zs: World Z positions (same shape as ``xs``).
        terrain_size: World-space edge length of the terrain.

    Returns:
        Heights with the shape of ``xs``.
    """
    grid = as_grid(heightmap, width, height)
    xs, zs = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(zs, dtype=np.float64)
    )

    half_size = terrain_size / 2
    u = np.clip(((xs + half_size) / terrain_size) * (width - 1), 0, width - 1)
    v = np.clip(((zs + half_size) / terrain_size) * (height - 1), 0, height - 1)

    # map_coordinates takes (row, col) order
    coords = np.array([v.ravel(), u.ravel()])
    sampled = ndimage.map_coordinates(grid, coords, order=1, mode="nearest")
    return sampled.reshape(xs.shape)


def calculate_slopes(
    heightmap: ArrayLike,
    width: int,
    height: int,
    terrain_size: float,
) -> NDArray[np.float32]:
    """Compute a bounded slope magnitude per cell.

    Uses forward differences to the +X and +Y neighbours; the last column
    and row reuse their own height, so their difference along that axis is
    zero.

    Args:
        heightmap: Flat heightmap buffer.
        width: Heightmap width in cells.
        height: Heightmap height in cells.
        terrain_size: World-space edge length of the terrain.

    Returns:
        Flat float32 array of slopes in [0, 1].
    """
    grid = as_grid(heightmap, width, height)
    cell_size = terrain_size / width

    right = np.concatenate([grid[:, 1:], grid[:, -1:]], axis=1)
    below = np.concatenate([grid[1:, :], grid[-1:, :]], axis=0)

    dx = (right - grid) / cell_size
    dy = (below - grid) / cell_size

    slope = np.minimum(1.0, np.sqrt(dx**2 + dy**2) * 0.5)
    slope = np.clip(np.nan_to_num(slope, nan=0.0, posinf=1.0), 0.0, 1.0)

    return slope.astype(np.float32).ravel()
