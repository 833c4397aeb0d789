"""Procedural terrain generation package.

This package implements noise-based ground generation for gardens,
including relief, edge falloff, grass/dirt blending, mesh baking and
prop placement.
"""

from .config import HeightmapOptions, TerrainConfig
from .falloff import apply_edge_falloff
from .generator import TerrainResult, generate_terrain
from .heightmap import calculate_slopes, generate_heightmap, sample_height, sample_heights
from .mesh import TerrainMesh, build_terrain_mesh
from .noise import TerrainNoise
from .persistence import load_terrain, save_terrain
from .validation import ValidationResult, validate_terrain

__all__ = [
    "HeightmapOptions",
    "TerrainConfig",
    "TerrainMesh",
    "TerrainNoise",
    "TerrainResult",
    "ValidationResult",
    "apply_edge_falloff",
    "build_terrain_mesh",
    "calculate_slopes",
    "generate_heightmap",
    "generate_terrain",
    "load_terrain",
    "sample_height",
    "sample_heights",
    "save_terrain",
    "validate_terrain",
]
