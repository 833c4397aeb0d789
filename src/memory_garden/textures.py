"""Procedural ground textures painted with brush strokes and noise.

All textures are square and tile seamlessly: strokes and patches that
cross an edge are repeated on the opposite side. Randomness comes from a
``numpy.random.Generator``; pass a seeded one for reproducible assets,
otherwise every call paints a fresh variation.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageColor, ImageDraw

from .exceptions import TerrainParameterError

logger = logging.getLogger(__name__)

# Muted olive grass palette
GRASS_BASE = "#7A8A4F"
GRASS_DARK = "#5A6A3C"
GRASS_LIGHT = "#8A9A5C"

# Reddish-brown earth palette
DIRT_BASE = "#9B6B5A"
DIRT_DARK = "#8B5A4A"
DIRT_LIGHT = "#B89968"

# Feature counts at the reference resolution; scaled with texture area
REFERENCE_SIZE = 512
GRASS_STROKES = 800
GRASS_TUFTS = 1000
DIRT_PATCHES = 300
STROKE_REFERENCE_SIZE = 256
STROKE_PRIMARY = 1400
STROKE_SECONDARY = 500


@dataclass(frozen=True)
class Texture:
    """A painted RGBA image plus how the renderer should tile it."""

    image: Image.Image
    repeat: tuple[float, float] = (1.0, 1.0)
    wrap: str = "repeat"

    @property
    def size(self) -> int:
        return self.image.width

    def to_array(self) -> NDArray[np.uint8]:
        """Pixels as an (h, w, 4) uint8 array."""
        return np.asarray(self.image.convert("RGBA"))

    def save(self, path: Path) -> None:
        self.image.save(path)


@dataclass(frozen=True)
class TerrainTextures:
    """The texture set consumed by the terrain shader."""

    grass: Texture
    dirt: Texture
    stroke: Texture


def _check_size(size: int) -> None:
    if size < 1:
        raise TerrainParameterError(f"Texture size must be positive, got {size}")


def _scaled_count(count: int, size: int, reference: int) -> int:
    return max(1, round(count * (size / reference) ** 2))


def _rgba(color: str | tuple[int, int, int], alpha: float) -> tuple[int, int, int, int]:
    if isinstance(color, str):
        color = ImageColor.getrgb(color)[:3]
    return (*color, round(alpha * 255))


def _pick_color(rng: np.random.Generator, palette: tuple[tuple[float, str], ...]) -> str:
    """Pick from (cumulative probability, colour) pairs."""
    choice = rng.random()
    for threshold, color in palette:
        if choice < threshold:
            return color
    return palette[-1][1]


def _wrapped_line(
    draw: ImageDraw.ImageDraw,
    start: tuple[float, float],
    end: tuple[float, float],
    fill: tuple[int, int, int, int],
    width: float,
    size: int,
) -> None:
    """Draw a segment, repeated across any edge it crosses."""
    pad = width
    low_x, high_x = min(start[0], end[0]) - pad, max(start[0], end[0]) + pad
    low_y, high_y = min(start[1], end[1]) - pad, max(start[1], end[1]) + pad
    line_width = max(1, round(width))

    for dx in (-size, 0, size):
        if high_x + dx < 0 or low_x + dx > size:
            continue
        for dy in (-size, 0, size):
            if high_y + dy < 0 or low_y + dy > size:
                continue
            draw.line(
                [(start[0] + dx, start[1] + dy), (end[0] + dx, end[1] + dy)],
                fill=fill,
                width=line_width,
            )


def _jitter(image: Image.Image, amount: float, rng: np.random.Generator) -> Image.Image:
    """Shift each pixel's luminance by a uniform offset in +-amount/2."""
    pixels = np.asarray(image, dtype=np.float32).copy()
    offsets = (rng.random(pixels.shape[:2], dtype=np.float32) - 0.5) * amount
    pixels[..., :3] += offsets[..., np.newaxis]
    return Image.fromarray(np.clip(np.rint(pixels), 0, 255).astype(np.uint8))


def _radial_patch(
    pixels: NDArray[np.float64],
    cx: float,
    cy: float,
    radius: float,
    color: NDArray[np.float64],
    alpha: float,
) -> None:
    """Blend a soft disc that fades from ``color`` at the centre to nothing."""
    size = pixels.shape[0]
    xs = np.arange(math.floor(cx - radius), math.ceil(cx + radius))
    ys = np.arange(math.floor(cy - radius), math.ceil(cy + radius))

    dist = np.sqrt((xs[np.newaxis, :] + 0.5 - cx) ** 2 + (ys[:, np.newaxis] + 0.5 - cy) ** 2)
    weight = (np.clip(1.0 - dist / radius, 0.0, 1.0) * alpha)[..., np.newaxis]

    window = np.ix_(ys % size, xs % size)
    pixels[window] = pixels[window] * (1.0 - weight) + color * weight


def paint_grass_tufts(
    image: Image.Image,
    count: int | None = None,
    color: str = GRASS_LIGHT,
    rng: np.random.Generator | None = None,
) -> Image.Image:
    """Paint clumps of two or three diverging blades onto an image in place.

    Args:
        image: RGB image to paint on.
        count: Number of tufts (scaled to the image area when omitted).
        color: Blade colour.
        rng: Random generator.

    Returns:
        The same image.
    """
    rng = rng if rng is not None else np.random.default_rng()
    size = image.width
    if count is None:
        count = _scaled_count(GRASS_TUFTS, size, REFERENCE_SIZE)

    draw = ImageDraw.Draw(image, "RGBA")
    for _ in range(count):
        x, y = rng.random(2) * size
        tuft_size = 2 + rng.random() * 4
        rotation = rng.random() * math.tau
        width = 1.5 + rng.random()
        fill = _rgba(color, 0.3 + rng.random() * 0.2)

        leaves = 2 + int(rng.random() * 2)
        for j in range(leaves):
            leaf_angle = rotation + (j / leaves) * math.pi - math.pi / 2
            spread = 0.4 + rng.random() * 0.3
            end = (
                x + math.cos(leaf_angle) * tuft_size * spread,
                y + math.sin(leaf_angle) * tuft_size,
            )
            _wrapped_line(draw, (x, y), end, fill, width, size)

    return image


def create_grass_texture(
    size: int = 512,
    repeat: tuple[float, float] = (4.0, 4.0),
    rng: np.random.Generator | None = None,
) -> Texture:
    """Paint a grass texture with brushstrokes, fine noise and blade tufts.

    Args:
        size: Edge length in pixels.
        repeat: Tile repeat factors for the renderer.
        rng: Random generator (unseeded when omitted).

    Returns:
        RGBA Texture.
    """
    _check_size(size)
    rng = rng if rng is not None else np.random.default_rng()

    image = Image.new("RGB", (size, size), GRASS_BASE)
    draw = ImageDraw.Draw(image, "RGBA")
    palette = ((0.3, GRASS_DARK), (0.7, GRASS_BASE), (1.0, GRASS_LIGHT))

    for _ in range(_scaled_count(GRASS_STROKES, size, REFERENCE_SIZE)):
        x, y = rng.random(2) * size
        length = 8 + rng.random() * 20
        angle = rng.random() * math.tau
        width = 1 + rng.random() * 3
        fill = _rgba(_pick_color(rng, palette), 0.15 + rng.random() * 0.15)

        end = (x + math.cos(angle) * length, y + math.sin(angle) * length)
        _wrapped_line(draw, (x, y), end, fill, width, size)

    image = _jitter(image, 12.0, rng)
    paint_grass_tufts(image, rng=rng)

    return Texture(image=image.convert("RGBA"), repeat=repeat)


def create_dirt_texture(
    size: int = 512,
    repeat: tuple[float, float] = (4.0, 4.0),
    rng: np.random.Generator | None = None,
) -> Texture:
    """Paint an earth texture from soft radial patches and granular noise.

    Args:
        size: Edge length in pixels.
        repeat: Tile repeat factors for the renderer.
        rng: Random generator (unseeded when omitted).

    Returns:
        RGBA Texture.
    """
    _check_size(size)
    rng = rng if rng is not None else np.random.default_rng()

    pixels = np.empty((size, size, 3), dtype=np.float64)
    pixels[:] = ImageColor.getrgb(DIRT_BASE)[:3]
    palette = ((0.35, DIRT_DARK), (0.7, DIRT_BASE), (1.0, DIRT_LIGHT))

    for _ in range(_scaled_count(DIRT_PATCHES, size, REFERENCE_SIZE)):
        cx, cy = rng.random(2) * size
        radius = 5 + rng.random() * 25
        color = np.array(ImageColor.getrgb(_pick_color(rng, palette))[:3], dtype=np.float64)
        _radial_patch(pixels, cx, cy, radius, color, 0.2 + rng.random() * 0.2)

    image = Image.fromarray(np.clip(np.rint(pixels), 0, 255).astype(np.uint8))
    image = _jitter(image, 15.0, rng)

    return Texture(image=image.convert("RGBA"), repeat=repeat)


def _paint_stroke_population(
    draw: ImageDraw.ImageDraw,
    size: int,
    count: int,
    angle: float,
    alpha_range: tuple[float, float],
    rng: np.random.Generator,
) -> None:
    for _ in range(count):
        x, y = rng.random(2) * size
        length = 6 + rng.random() * 8
        direction = angle + (rng.random() - 0.5) * 0.3
        tone = int(70 + rng.random() * 40)
        alpha = alpha_range[0] + rng.random() * (alpha_range[1] - alpha_range[0])

        end = (x + math.cos(direction) * length, y + math.sin(direction) * length)
        _wrapped_line(draw, (x, y), end, _rgba((tone, tone, tone), alpha), 1, size)


def create_grass_stroke_texture(
    size: int = 256,
    rng: np.random.Generator | None = None,
) -> Texture:
    """Paint the fine diagonal stroke overlay.

    A dominant stroke direction plus a sparser cross direction gives a
    brushed, anisotropic look. The repeat stays at (1, 1): the shader tiles
    this texture from world XZ positions, not mesh UVs, so the strokes keep
    a constant apparent size however the heightmap stretches the mesh.

    Args:
        size: Edge length in pixels.
        rng: Random generator (unseeded when omitted).

    Returns:
        RGBA Texture, light background with darker strokes.
    """
    _check_size(size)
    rng = rng if rng is not None else np.random.default_rng()

    image = Image.new("RGB", (size, size), "#FFFFFF")
    draw = ImageDraw.Draw(image, "RGBA")

    _paint_stroke_population(
        draw,
        size,
        _scaled_count(STROKE_PRIMARY, size, STROKE_REFERENCE_SIZE),
        math.pi / 4,
        (0.25, 0.45),
        rng,
    )
    _paint_stroke_population(
        draw,
        size,
        _scaled_count(STROKE_SECONDARY, size, STROKE_REFERENCE_SIZE),
        3 * math.pi / 4,
        (0.12, 0.25),
        rng,
    )

    return Texture(image=image.convert("RGBA"))


def create_terrain_textures(
    size: int = 512,
    stroke_size: int = 256,
    rng: np.random.Generator | None = None,
) -> TerrainTextures:
    """Paint the full grass, dirt and stroke set for one terrain."""
    rng = rng if rng is not None else np.random.default_rng()

    logger.info(f"Painting terrain textures ({size}px, stroke {stroke_size}px)")
    return TerrainTextures(
        grass=create_grass_texture(size, rng=rng),
        dirt=create_dirt_texture(size, rng=rng),
        stroke=create_grass_stroke_texture(stroke_size, rng=rng),
    )
