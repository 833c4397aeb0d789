"""Terrain mesh baking: displaced plane grid with render attributes."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import TerrainParameterError

logger = logging.getLogger(__name__)


@dataclass
class TerrainMesh:
    """Vertex buffers for a square terrain grid.

    Vertex ``i`` sits at grid row ``i // resolution`` and column
    ``i % resolution``, matching the heightmap layout.
    """

    positions: NDArray[np.float32]  # (n, 3)
    normals: NDArray[np.float32]  # (n, 3)
    uvs: NDArray[np.float32]  # (n, 2)
    indices: NDArray[np.uint32]  # (triangles, 3)
    blend_weights: NDArray[np.float32]  # (n,)
    colors: NDArray[np.float32]  # (n, 3)
    resolution: int
    size: float

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)


def grid_indices(resolution: int) -> NDArray[np.uint32]:
    """Two counter-clockwise (seen from +Y) triangles per grid quad."""
    cols, rows = np.meshgrid(np.arange(resolution - 1), np.arange(resolution - 1))
    a = (rows * resolution + cols).ravel()
    b = a + resolution
    c = b + 1
    d = a + 1

    first = np.stack([a, b, d], axis=1)
    second = np.stack([b, c, d], axis=1)
    return np.concatenate([first, second]).astype(np.uint32)


def compute_vertex_normals(
    positions: NDArray[np.float64],
    indices: NDArray[np.uint32],
) -> NDArray[np.float32]:
    """Area-weighted vertex normals, normalized.

    Vertices touched by no triangle (or only degenerate ones) point up.
    """
    pa = positions[indices[:, 0]]
    pb = positions[indices[:, 1]]
    pc = positions[indices[:, 2]]

    face_normals = np.cross(pc - pb, pa - pb)

    normals = np.zeros_like(positions)
    for corner in range(3):
        np.add.at(normals, indices[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    up = np.array([0.0, 1.0, 0.0])
    normals = np.where(lengths > 1e-12, normals / np.maximum(lengths, 1e-12), up)

    return normals.astype(np.float32)


def build_terrain_mesh(
    heightmap: ArrayLike,
    resolution: int,
    size: float,
    blend_weights: ArrayLike | None = None,
    colors: ArrayLike | None = None,
) -> TerrainMesh:
    """Bake a heightmap into a render-ready square mesh.

    The plane spans ``[-size/2, size/2]`` on X and Z with heights on Y.
    Non-finite heights are written as 0 so they never reach the vertex
    buffer.

    Args:
        heightmap: Flat heightmap of ``resolution * resolution`` values.
        resolution: Vertices per edge (at least 2).
        size: World-space edge length.
        blend_weights: Optional per-vertex grass/dirt weights (default 0).
        colors: Optional per-vertex RGB (default white).

    Returns:
        TerrainMesh with positions, normals, UVs, indices and attributes.

    Raises:
        TerrainParameterError: If the resolution or buffer lengths are wrong.
    """
    if resolution < 2:
        raise TerrainParameterError(f"Mesh resolution must be at least 2, got {resolution}")

    count = resolution * resolution
    heights = np.asarray(heightmap, dtype=np.float64).ravel()
    if heights.size != count:
        raise TerrainParameterError(
            f"Heightmap has {heights.size} values, expected {resolution}x{resolution}"
        )

    bad = ~np.isfinite(heights)
    if bad.any():
        logger.warning(f"Replacing {int(bad.sum())} non-finite heights with 0")
        heights = np.where(bad, 0.0, heights)

    steps = np.arange(resolution, dtype=np.float64) / (resolution - 1)
    cols, rows = np.meshgrid(steps, steps)
    xs = (cols.ravel() - 0.5) * size
    zs = (rows.ravel() - 0.5) * size
    positions = np.stack([xs, heights, zs], axis=1)

    uvs = np.stack([cols.ravel(), 1.0 - rows.ravel()], axis=1)
    indices = grid_indices(resolution)
    normals = compute_vertex_normals(positions, indices)

    if blend_weights is None:
        weights = np.zeros(count, dtype=np.float32)
    else:
        weights = np.asarray(blend_weights, dtype=np.float32).ravel()
        if weights.size != count:
            raise TerrainParameterError(
                f"Blend weights have {weights.size} values, expected {count}"
            )
        weights = np.clip(np.nan_to_num(weights, nan=0.0), 0.0, 1.0)

    if colors is None:
        vertex_colors = np.ones((count, 3), dtype=np.float32)
    else:
        vertex_colors = np.asarray(colors, dtype=np.float32).reshape(-1, 3)
        if len(vertex_colors) != count:
            raise TerrainParameterError(
                f"Colors have {len(vertex_colors)} entries, expected {count}"
            )

    logger.debug(f"Baked mesh: {count} vertices, {len(indices)} triangles")

    return TerrainMesh(
        positions=positions.astype(np.float32),
        normals=normals,
        uvs=uvs.astype(np.float32),
        indices=indices,
        blend_weights=weights,
        colors=vertex_colors,
        resolution=resolution,
        size=size,
    )
