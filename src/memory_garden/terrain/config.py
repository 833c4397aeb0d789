"""Terrain generation configuration models."""

from pydantic import BaseModel, Field


class HeightmapOptions(BaseModel):
    """Noise parameters for a single heightmap."""

    seed: int = Field(default=42, description="Seed for the noise permutation table")
    scale: float = Field(default=0.1, description="Base frequency in cycles per cell")
    octaves: int = Field(default=4, ge=1, description="Number of noise layers to sum")
    persistence: float = Field(
        default=0.5, description="Amplitude multiplier between octaves"
    )
    lacunarity: float = Field(
        default=2.0, description="Frequency multiplier between octaves"
    )
    amplitude: float = Field(
        default=0.5, ge=0.0, description="Height of the tallest cell after scaling"
    )
    redistribution: float = Field(
        default=1.2,
        gt=0.0,
        description="Power curve (>1 flattens valleys and sharpens peaks, <1 the opposite)",
    )


def _relief_defaults() -> HeightmapOptions:
    return HeightmapOptions(
        scale=0.025, octaves=2, persistence=0.4, lacunarity=2.0, redistribution=1.0
    )


def _blend_defaults() -> HeightmapOptions:
    return HeightmapOptions(
        scale=0.1,
        octaves=2,
        persistence=0.45,
        lacunarity=2.0,
        amplitude=1.0,
        redistribution=1.0,
    )


class TerrainConfig(BaseModel):
    """Complete terrain generation configuration."""

    seed: int = Field(default=42, description="Random seed for reproducibility")
    size: float = Field(default=40.0, gt=0.0, description="World-space edge length")
    resolution: int = Field(
        default=150, ge=2, description="Vertices per edge of the terrain grid"
    )
    amplitude: float = Field(default=0.9, ge=0.0, description="Maximum terrain height")
    falloff_distance: float = Field(
        default=0.2, description="Fraction of the half-extent that tapers to zero"
    )

    # seed and amplitude on these are overridden from the top-level fields
    relief: HeightmapOptions = Field(default_factory=_relief_defaults)
    blend: HeightmapOptions = Field(default_factory=_blend_defaults)
    blend_seed_offset: int = Field(
        default=100, description="Offset added to seed for the grass/dirt blend noise"
    )

    grass_color: str = Field(default="#8B9B5C", description="Vertex tint for flat ground")
    dirt_color: str = Field(default="#9B6B5A", description="Vertex tint for steep ground")

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )

    def relief_options(self) -> HeightmapOptions:
        """Relief noise options with the terrain seed and amplitude applied."""
        return self.relief.model_copy(
            update={"seed": self.seed, "amplitude": self.amplitude}
        )

    def blend_options(self) -> HeightmapOptions:
        """Blend noise options seeded apart from the relief noise."""
        return self.blend.model_copy(
            update={"seed": self.seed + self.blend_seed_offset}
        )
