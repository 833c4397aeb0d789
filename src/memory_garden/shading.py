"""CPU reference of the terrain ground shader.

Mirrors what the GPU material does so terrain can be previewed offline:
grass and dirt textures are sampled with mesh UVs and mixed by the
per-vertex blend weight, the stroke overlay is sampled from world XZ
(so its strokes keep the same size on the ground however the mesh is
displaced), and a soft diffuse term with a warm ambient lights the result.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from PIL import Image
from pydantic import BaseModel, Field
from scipy import ndimage

from .terrain.blend import color_to_rgb
from .terrain.mesh import TerrainMesh
from .textures import TerrainTextures, Texture

LUMINANCE = np.array([0.299, 0.587, 0.114])


class ShadingConfig(BaseModel):
    """Lighting and overlay parameters of the ground material."""

    light_direction: tuple[float, float, float] = Field(
        default=(0.5, 1.0, 0.5), description="Direction toward the light"
    )
    ambient_color: str = Field(default="#F5F0E8", description="Ambient light colour")
    ambient_intensity: float = Field(default=0.5, description="Ambient light strength")
    stroke_tile_size: float = Field(
        default=2.0, gt=0.0, description="World units covered by one stroke tile"
    )
    stroke_strength: float = Field(
        default=0.35, ge=0.0, le=1.0, description="How much strokes darken the ground"
    )


def world_space_uv(positions: ArrayLike, tile_size: float) -> NDArray[np.float64]:
    """Overlay coordinates derived from world X and Z.

    Args:
        positions: (n, 3) world positions.
        tile_size: World units per texture repeat.

    Returns:
        (n, 2) texture coordinates.
    """
    positions = np.asarray(positions, dtype=np.float64)
    return positions[:, [0, 2]] / tile_size


def sample_texture(texture: Texture, u: ArrayLike, v: ArrayLike) -> NDArray[np.float64]:
    """Nearest-texel lookup honouring the texture's repeat and wrap mode.

    ``v = 0`` is the bottom row of the image, as in GL texture space.

    Returns:
        RGBA values in [0, 1] with shape ``u.shape + (4,)``.
    """
    pixels = texture.to_array().astype(np.float64) / 255.0
    height, width = pixels.shape[:2]

    su = np.asarray(u, dtype=np.float64) * texture.repeat[0]
    sv = np.asarray(v, dtype=np.float64) * texture.repeat[1]
    if texture.wrap == "repeat":
        su = su - np.floor(su)
        sv = sv - np.floor(sv)
    else:
        su = np.clip(su, 0.0, 1.0)
        sv = np.clip(sv, 0.0, 1.0)

    cols = np.clip((su * width).astype(np.int64), 0, width - 1)
    rows = np.clip(((1.0 - sv) * height).astype(np.int64), 0, height - 1)
    return pixels[rows, cols]


def shade_fragments(
    uvs: ArrayLike,
    world_xz: ArrayLike,
    blend: ArrayLike,
    normals: ArrayLike,
    textures: TerrainTextures,
    config: ShadingConfig | None = None,
) -> NDArray[np.float32]:
    """Shade a batch of surface points.

    Args:
        uvs: (n, 2) mesh texture coordinates.
        world_xz: (n, 2) world X and Z.
        blend: (n,) grass (0) to dirt (1) weights.
        normals: (n, 3) surface normals.
        textures: Grass, dirt and stroke textures.
        config: Lighting parameters.

    Returns:
        (n, 3) RGB in [0, 1].
    """
    config = config or ShadingConfig()
    uvs = np.asarray(uvs, dtype=np.float64)
    world_xz = np.asarray(world_xz, dtype=np.float64)
    weight = np.clip(np.asarray(blend, dtype=np.float64), 0.0, 1.0)[:, np.newaxis]

    grass = sample_texture(textures.grass, uvs[:, 0], uvs[:, 1])[:, :3]
    dirt = sample_texture(textures.dirt, uvs[:, 0], uvs[:, 1])[:, :3]
    base = grass * (1.0 - weight) + dirt * weight

    overlay_uv = world_xz / config.stroke_tile_size
    stroke = sample_texture(textures.stroke, overlay_uv[:, 0], overlay_uv[:, 1])[:, :3]
    darkening = 1.0 - config.stroke_strength * (1.0 - stroke @ LUMINANCE)
    base = base * darkening[:, np.newaxis]

    light = np.asarray(config.light_direction, dtype=np.float64)
    light = light / np.linalg.norm(light)
    # Soft shadows: never darker than 40%
    diffuse = np.maximum(np.asarray(normals, dtype=np.float64) @ light, 0.0) * 0.6 + 0.4
    ambient = color_to_rgb(config.ambient_color) * config.ambient_intensity

    color = base * (diffuse[:, np.newaxis] + ambient)
    return np.clip(color, 0.0, 1.0).astype(np.float32)


def shade_terrain(
    mesh: TerrainMesh,
    textures: TerrainTextures,
    config: ShadingConfig | None = None,
) -> NDArray[np.float32]:
    """Shade every mesh vertex, (n, 3) RGB in [0, 1]."""
    return shade_fragments(
        mesh.uvs,
        mesh.positions[:, [0, 2]],
        mesh.blend_weights,
        mesh.normals,
        textures,
        config,
    )


def render_preview(
    mesh: TerrainMesh,
    textures: TerrainTextures,
    image_size: int = 512,
    config: ShadingConfig | None = None,
) -> Image.Image:
    """Render the terrain from straight above, one fragment per pixel.

    Per-vertex attributes are bilinearly interpolated across the grid the
    way a rasterizer would, then every pixel runs through the shader.

    Returns:
        RGB image; the top row is the ``z = -size/2`` edge.
    """
    res = mesh.resolution
    t = (np.arange(image_size, dtype=np.float64) + 0.5) / image_size
    tx, tz = np.meshgrid(t, t)

    coords = np.array([(tz * (res - 1)).ravel(), (tx * (res - 1)).ravel()])

    def interpolate(values: NDArray) -> NDArray[np.float64]:
        grid = np.asarray(values, dtype=np.float64).reshape(res, res)
        return ndimage.map_coordinates(grid, coords, order=1, mode="nearest")

    blend = interpolate(mesh.blend_weights)
    normals = np.stack([interpolate(mesh.normals[:, axis]) for axis in range(3)], axis=1)
    normals /= np.maximum(np.linalg.norm(normals, axis=1, keepdims=True), 1e-12)

    uvs = np.stack([tx.ravel(), 1.0 - tz.ravel()], axis=1)
    world_xz = (np.stack([tx.ravel(), tz.ravel()], axis=1) - 0.5) * mesh.size

    colors = shade_fragments(uvs, world_xz, blend, normals, textures, config)
    pixels = (colors.reshape(image_size, image_size, 3) * 255).round().astype(np.uint8)
    return Image.fromarray(pixels)
