"""Main terrain generation orchestration."""

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from .blend import compute_blend_weights, compute_vertex_colors
from .config import TerrainConfig
from .falloff import apply_edge_falloff
from .heightmap import calculate_slopes, generate_heightmap, sample_height
from .mesh import TerrainMesh, build_terrain_mesh

logger = logging.getLogger(__name__)


class TerrainResult:
    """Result of terrain generation with all intermediate data."""

    def __init__(
        self,
        heightmap: NDArray[np.float32],
        blend_noise: NDArray[np.float32],
        slopes: NDArray[np.float32],
        blend_weights: NDArray[np.float32],
        colors: NDArray[np.float32],
        mesh: TerrainMesh,
        config: TerrainConfig,
    ):
        self.heightmap = heightmap
        self.blend_noise = blend_noise
        self.slopes = slopes
        self.blend_weights = blend_weights
        self.colors = colors
        self.mesh = mesh
        self.config = config

    def height_at(self, x: float, z: float) -> float:
        """Terrain height at a world position."""
        res = self.config.resolution
        return sample_height(self.heightmap, res, res, x, z, self.config.size)


def generate_terrain(config: TerrainConfig) -> TerrainResult:
    """Generate garden terrain from configuration.

    Args:
        config: Terrain generation configuration.

    Returns:
        TerrainResult with heightmap, derived fields and baked mesh.
    """
    res = config.resolution

    logger.info(f"Generating terrain {res}x{res} with seed {config.seed}")

    # Stage A: Relief
    logger.info("Stage A: Generating heightmap...")
    heightmap = generate_heightmap(res, res, config.relief_options())

    # Stage B: Border shaping
    logger.info("Stage B: Applying edge falloff...")
    heightmap = apply_edge_falloff(heightmap, res, res, config.falloff_distance)

    # Stage C: Ground fields
    logger.info("Stage C: Deriving blend weights and colours...")
    blend_noise = generate_heightmap(res, res, config.blend_options())
    blend_weights = compute_blend_weights(heightmap, blend_noise, config.amplitude)
    slopes = calculate_slopes(heightmap, res, res, config.size)
    colors = compute_vertex_colors(
        heightmap, slopes, config.grass_color, config.dirt_color, config.amplitude
    )

    # Stage D: Mesh
    logger.info("Stage D: Baking mesh...")
    mesh = build_terrain_mesh(
        heightmap, res, config.size, blend_weights=blend_weights, colors=colors
    )

    _log_terrain_stats(heightmap, blend_weights, slopes)

    # Debug output if enabled
    if config.debug_output_dir:
        _dump_debug_images(
            Path(config.debug_output_dir),
            res,
            heightmap=heightmap,
            blend_noise=blend_noise,
            blend_weights=blend_weights,
            slopes=slopes,
        )

    return TerrainResult(
        heightmap=heightmap,
        blend_noise=blend_noise,
        slopes=slopes,
        blend_weights=blend_weights,
        colors=colors,
        mesh=mesh,
        config=config,
    )


def _log_terrain_stats(
    heightmap: NDArray[np.float32],
    blend_weights: NDArray[np.float32],
    slopes: NDArray[np.float32],
) -> None:
    """Log terrain generation statistics."""
    total = heightmap.size
    dirt = int(np.sum(blend_weights > 0))

    logger.info(f"Terrain stats ({total:,} vertices):")
    logger.info(f"  height: min {heightmap.min():.3f}, max {heightmap.max():.3f}")
    logger.info(f"  dirt coverage: {dirt:,} ({dirt / total * 100:.1f}%)")
    logger.info(f"  mean slope: {slopes.mean():.3f}")


def _dump_debug_images(output_dir: Path, resolution: int, **fields: NDArray) -> None:
    """Save flat fields as grayscale images for debugging.

    Args:
        output_dir: Directory to save images.
        resolution: Grid edge length of every field.
        **fields: Named flat arrays to save.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, values in fields.items():
        grid = np.asarray(values, dtype=np.float64).reshape(resolution, resolution)
        low, high = grid.min(), grid.max()
        scaled = (grid - low) / (high - low) if high > low else np.zeros_like(grid)
        Image.fromarray((scaled * 255).astype(np.uint8)).save(output_dir / f"{name}.png")

    logger.info(f"Debug images saved to {output_dir}")
