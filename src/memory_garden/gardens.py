"""Built-in garden catalogue."""

import logging

from .config import (
    DirectionalLightConfig,
    EnvironmentConfig,
    FogConfig,
    GardenColors,
    GardenConfig,
    LightConfig,
    LightingConfig,
    ParticleConfig,
    Tier,
    TreeConfig,
    find_garden_config,
    load_garden_config,
)
from .exceptions import GardenNotFoundError
from .terrain.config import TerrainConfig

logger = logging.getLogger(__name__)


# Experimental garden: rolling terrain with rich greens
TEST_GARDEN = GardenConfig(
    key="test_garden",
    display_name="Test Garden",
    description="An experimental garden showcasing rolling hills",
    tier_access=Tier.FREE,
    colors=GardenColors(
        primary="#5A8F67",
        secondary="#7FB88D",
        sky=("#87CEEB", "#B0D4E8"),
        ground="#6B5744",
        ambient="#F5F0E8",
    ),
    lighting=LightingConfig(
        ambient=LightConfig(color="#F5F0E8", intensity=0.65),
        directional=DirectionalLightConfig(
            color="#FFF5E6", intensity=0.85, position=(10, 18, 8)
        ),
    ),
    environment=EnvironmentConfig(
        ground="lush_grass",
        trees=TreeConfig(type="mixed", count=6, spacing="medium"),
        details=["rocks", "stones", "grass_tufts", "flower_patches"],
    ),
    particles=ParticleConfig(type="breeze", density="light", speed=0.4),
    terrain=TerrainConfig(seed=42, amplitude=0.9),
)

# Peaceful sanctuary for contemplation
QUIET_GARDEN = GardenConfig(
    key="quiet_garden",
    display_name="Quiet Garden",
    description="A peaceful, timeless garden space for quiet reflection",
    tier_access=Tier.FREE,
    colors=GardenColors(
        primary="#A8B89F",
        secondary="#D4C5B9",
        sky=("#E8D4C8", "#F5E8DD"),
        ground="#C8D4B8",
        ambient="#FFF4E0",
    ),
    lighting=LightingConfig(
        ambient=LightConfig(color="#FFF4E0", intensity=0.6),
        directional=DirectionalLightConfig(
            color="#FFFAF0", intensity=0.7, position=(10, 15, 5)
        ),
    ),
    environment=EnvironmentConfig(
        ground="moss_grass",
        trees=TreeConfig(type="birch", count=4, spacing="sparse"),
        details=["pebbles", "stone_path", "bench", "grass_tufts"],
    ),
    particles=ParticleConfig(type="breeze", density="minimal", speed=0.3),
    terrain=TerrainConfig(seed=7, amplitude=0.5, grass_color="#A8B89F"),
)

SPRING_MEADOW = GardenConfig(
    key="spring_meadow",
    display_name="Spring Meadow",
    description="A vibrant garden shaped by renewal and fresh beginnings",
    tier_access=Tier.PREMIUM,
    colors=GardenColors(
        primary="#4A7C59",
        secondary="#FFE66D",
        sky=("#87CEEB", "#E0F7FA"),
        ground="#5A8F67",
        ambient="#FFFACD",
    ),
    lighting=LightingConfig(
        ambient=LightConfig(color="#FFFACD", intensity=0.7),
        directional=DirectionalLightConfig(
            color="#FFFFFF", intensity=0.9, position=(5, 20, 5)
        ),
    ),
    environment=EnvironmentConfig(
        ground="lush_grass",
        trees=TreeConfig(type="maple", count=6, spacing="medium"),
        details=["flower_patches", "bushes", "stone_path", "grass_tufts"],
    ),
    particles=ParticleConfig(type="petals", density="light", speed=0.5),
    terrain=TerrainConfig(seed=311, amplitude=1.0, grass_color="#5A8F67"),
)

AUTUMN_GROVE = GardenConfig(
    key="autumn_grove",
    display_name="Autumn Grove",
    description="A warm, golden garden made for cherished memories",
    tier_access=Tier.PREMIUM,
    colors=GardenColors(
        primary="#A67C52",
        secondary="#C1666B",
        sky=("#D4A574", "#F5DEB3"),
        ground="#8B7355",
        ambient="#E8C4A0",
    ),
    lighting=LightingConfig(
        ambient=LightConfig(color="#FFAA70", intensity=0.65),
        directional=DirectionalLightConfig(
            color="#FFA500", intensity=0.75, position=(15, 10, 8)
        ),
    ),
    environment=EnvironmentConfig(
        ground="fallen_leaves",
        trees=TreeConfig(type="maple", count=6, spacing="medium"),
        details=["leaf_piles", "bare_branches", "fence", "pumpkins"],
    ),
    particles=ParticleConfig(type="leaves", density="medium", speed=0.4),
    terrain=TerrainConfig(seed=1024, amplitude=0.8, grass_color="#8B7355"),
)

WINTER_WONDERLAND = GardenConfig(
    key="winter_wonderland",
    display_name="Winter Wonderland",
    description="A serene, frost-touched garden of peaceful stillness",
    tier_access=Tier.PREMIUM,
    colors=GardenColors(
        primary="#E8F4F8",
        secondary="#B8C5D6",
        sky=("#D6E4F0", "#F0F8FF"),
        ground="#F0F8FF",
        ambient="#E8F4F8",
    ),
    lighting=LightingConfig(
        ambient=LightConfig(color="#E8F4F8", intensity=0.8),
        directional=DirectionalLightConfig(
            color="#FFFFFF", intensity=0.6, position=(10, 20, 10)
        ),
    ),
    environment=EnvironmentConfig(
        ground="snow",
        trees=TreeConfig(type="pine", count=5, spacing="medium"),
        details=["icicles", "snow_drifts", "frosted_bushes", "tracks"],
    ),
    particles=ParticleConfig(type="snow", density="light", speed=0.2),
    fog=FogConfig(color="#E0F0FF", near=10, far=50),
    terrain=TerrainConfig(
        seed=2024, amplitude=0.6, grass_color="#F0F8FF", dirt_color="#B8C5D6"
    ),
)

GARDEN_CONFIGS: dict[str, GardenConfig] = {
    garden.key: garden
    for garden in (
        TEST_GARDEN,
        QUIET_GARDEN,
        SPRING_MEADOW,
        AUTUMN_GROVE,
        WINTER_WONDERLAND,
    )
}


def get_garden(key: str) -> GardenConfig:
    """Look up a built-in garden by key.

    Raises:
        GardenNotFoundError: If no built-in garden has this key.
    """
    try:
        return GARDEN_CONFIGS[key]
    except KeyError:
        raise GardenNotFoundError(
            f"Unknown garden '{key}'. Available gardens: {sorted(GARDEN_CONFIGS)}"
        ) from None


def get_gardens_for_tier(tier: Tier | str) -> list[GardenConfig]:
    """Built-in gardens a user on ``tier`` may open, in catalogue order."""
    return [garden for garden in GARDEN_CONFIGS.values() if garden.accessible_at(tier)]


def resolve_garden(name: str) -> GardenConfig:
    """Resolve a built-in key, a bundled config name or a TOML path.

    Raises:
        GardenNotFoundError: If nothing matches.
    """
    if name in GARDEN_CONFIGS:
        return GARDEN_CONFIGS[name]

    try:
        path = find_garden_config(name)
    except FileNotFoundError as e:
        raise GardenNotFoundError(str(e)) from e

    logger.info(f"Loading garden config from {path}")
    return load_garden_config(path)
