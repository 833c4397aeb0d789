"""Tests for the CPU ground shader."""

import numpy as np
import pytest
from PIL import Image

from memory_garden.shading import (
    ShadingConfig,
    render_preview,
    sample_texture,
    shade_fragments,
    shade_terrain,
    world_space_uv,
)
from memory_garden.terrain.mesh import build_terrain_mesh
from memory_garden.textures import TerrainTextures, Texture

# Straight overhead light, no ambient: flat ground shades to its base colour
OVERHEAD = ShadingConfig(light_direction=(0.0, 1.0, 0.0), ambient_intensity=0.0)


def _solid(color: str, size: int = 4, repeat=(1.0, 1.0)) -> Texture:
    return Texture(image=Image.new("RGBA", (size, size), color), repeat=repeat)


@pytest.fixture
def solid_textures() -> TerrainTextures:
    """Grey grass, black dirt, white (no-op) strokes."""
    return TerrainTextures(
        grass=_solid("#808080"), dirt=_solid("#000000"), stroke=_solid("#FFFFFF")
    )


@pytest.fixture
def split_texture() -> Texture:
    """2x2 texture: top row red, bottom row blue."""
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    pixels[0, :] = [255, 0, 0, 255]
    pixels[1, :] = [0, 0, 255, 255]
    return Texture(image=Image.fromarray(pixels))


class TestSampleTexture:
    """Tests for texel lookup."""

    def test_v_zero_is_bottom_row(self, split_texture: Texture) -> None:
        """Low v reads the bottom of the image."""
        bottom = sample_texture(split_texture, np.array([0.25]), np.array([0.25]))
        top = sample_texture(split_texture, np.array([0.25]), np.array([0.75]))
        np.testing.assert_allclose(bottom[0], [0.0, 0.0, 1.0, 1.0])
        np.testing.assert_allclose(top[0], [1.0, 0.0, 0.0, 1.0])

    def test_repeat_wraps(self, split_texture: Texture) -> None:
        """Coordinates outside [0, 1) wrap around."""
        u = np.array([0.25, 1.25, -0.75])
        v = np.array([0.75, 1.75, -0.25])
        a = sample_texture(split_texture, u, v)
        np.testing.assert_allclose(a[1], a[0])
        np.testing.assert_allclose(a[2], a[0])

    def test_clamp_mode(self, split_texture: Texture) -> None:
        """Clamped textures hold their edge texels."""
        clamped = Texture(image=split_texture.image, wrap="clamp")
        result = sample_texture(clamped, np.array([5.0]), np.array([5.0]))
        np.testing.assert_allclose(result[0], [1.0, 0.0, 0.0, 1.0])

    def test_repeat_factor(self, split_texture: Texture) -> None:
        """The repeat factor scales coordinates before wrapping."""
        tiled = Texture(image=split_texture.image, repeat=(2.0, 2.0))
        # v 0.375 * 2 = 0.75: top row
        result = sample_texture(tiled, np.array([0.1]), np.array([0.375]))
        np.testing.assert_allclose(result[0], [1.0, 0.0, 0.0, 1.0])


class TestShadeFragments:
    """Tests for the fragment shader."""

    def test_flat_grass(self, solid_textures: TerrainTextures) -> None:
        """Lit flat grass shows the grass colour."""
        color = shade_fragments(
            np.zeros((1, 2)), np.zeros((1, 2)), np.zeros(1), [[0.0, 1.0, 0.0]],
            solid_textures, OVERHEAD,
        )
        np.testing.assert_allclose(color[0], 128 / 255, atol=1e-6)

    def test_full_dirt(self, solid_textures: TerrainTextures) -> None:
        """Blend weight 1 shows only dirt."""
        color = shade_fragments(
            np.zeros((1, 2)), np.zeros((1, 2)), np.ones(1), [[0.0, 1.0, 0.0]],
            solid_textures, OVERHEAD,
        )
        np.testing.assert_allclose(color[0], 0.0)

    def test_soft_shadow_floor(self, solid_textures: TerrainTextures) -> None:
        """Faces turned away from the light keep 40% of their colour."""
        color = shade_fragments(
            np.zeros((1, 2)), np.zeros((1, 2)), np.zeros(1), [[0.0, -1.0, 0.0]],
            solid_textures, OVERHEAD,
        )
        np.testing.assert_allclose(color[0], 0.4 * 128 / 255, atol=1e-6)

    def test_strokes_darken(self) -> None:
        """A black stroke texel darkens by the stroke strength."""
        textures = TerrainTextures(
            grass=_solid("#FFFFFF"), dirt=_solid("#FFFFFF"), stroke=_solid("#000000")
        )
        color = shade_fragments(
            np.zeros((1, 2)), np.zeros((1, 2)), np.zeros(1), [[0.0, 1.0, 0.0]],
            textures, OVERHEAD,
        )
        np.testing.assert_allclose(color[0], 1.0 - OVERHEAD.stroke_strength, atol=1e-6)

    def test_output_clipped(self, solid_textures: TerrainTextures) -> None:
        """Strong ambient light saturates at 1."""
        config = ShadingConfig(ambient_color="#FFFFFF", ambient_intensity=5.0)
        color = shade_fragments(
            np.zeros((1, 2)), np.zeros((1, 2)), np.zeros(1), [[0.0, 1.0, 0.0]],
            solid_textures, config,
        )
        np.testing.assert_allclose(color[0], 1.0)


def test_world_space_uv() -> None:
    """Overlay UVs are world XZ divided by the tile size."""
    uv = world_space_uv([[2.0, 9.0, -4.0]], 2.0)
    np.testing.assert_allclose(uv, [[1.0, -2.0]])


def test_shade_terrain_per_vertex(solid_textures: TerrainTextures) -> None:
    """One colour per mesh vertex."""
    mesh = build_terrain_mesh(np.zeros(9), 3, 4.0)
    colors = shade_terrain(mesh, solid_textures, OVERHEAD)
    assert colors.shape == (9, 3)
    np.testing.assert_allclose(colors, 128 / 255, atol=1e-6)


def test_render_preview(solid_textures: TerrainTextures) -> None:
    """The preview is an RGB image of the requested size."""
    rng = np.random.default_rng(0)
    mesh = build_terrain_mesh(rng.random(25), 5, 10.0, blend_weights=rng.random(25))
    image = render_preview(mesh, solid_textures, image_size=24)
    assert image.size == (24, 24)
    assert image.mode == "RGB"
