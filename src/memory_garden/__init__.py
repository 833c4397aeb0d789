"""Memory garden ground generation."""

from .config import GardenConfig, Tier, load_garden_config
from .exceptions import GardenError, GardenNotFoundError, TerrainParameterError
from .gardens import GARDEN_CONFIGS, get_garden, get_gardens_for_tier, resolve_garden
from .shading import ShadingConfig, render_preview, shade_terrain
from .terrain import (
    HeightmapOptions,
    TerrainConfig,
    TerrainResult,
    apply_edge_falloff,
    calculate_slopes,
    generate_heightmap,
    generate_terrain,
    sample_height,
)
from .textures import (
    TerrainTextures,
    Texture,
    create_dirt_texture,
    create_grass_stroke_texture,
    create_grass_texture,
    create_terrain_textures,
)

__all__ = [
    # Terrain
    "HeightmapOptions",
    "TerrainConfig",
    "TerrainResult",
    "generate_heightmap",
    "sample_height",
    "apply_edge_falloff",
    "calculate_slopes",
    "generate_terrain",
    # Textures
    "Texture",
    "TerrainTextures",
    "create_grass_texture",
    "create_dirt_texture",
    "create_grass_stroke_texture",
    "create_terrain_textures",
    # Shading
    "ShadingConfig",
    "shade_terrain",
    "render_preview",
    # Gardens
    "GardenConfig",
    "Tier",
    "GARDEN_CONFIGS",
    "get_garden",
    "get_gardens_for_tier",
    "load_garden_config",
    "resolve_garden",
    # Exceptions
    "GardenError",
    "GardenNotFoundError",
    "TerrainParameterError",
]
