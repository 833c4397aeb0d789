"""Garden configuration models and TOML loading."""

import tomllib
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from .shading import ShadingConfig
from .terrain.config import TerrainConfig

CONFIGS_DIR = Path(__file__).parent / "configs"


class Tier(str, Enum):
    """Subscription tiers, lowest first."""

    FREE = "FREE"
    PRO = "PRO"
    PREMIUM = "PREMIUM"


TIER_LEVELS = {Tier.FREE: 0, Tier.PRO: 1, Tier.PREMIUM: 2}


class GardenColors(BaseModel):
    """Palette of a garden theme."""

    primary: str
    secondary: str
    sky: tuple[str, str]  # gradient top, bottom
    ground: str
    ambient: str


class LightConfig(BaseModel):
    color: str
    intensity: float


class DirectionalLightConfig(LightConfig):
    position: tuple[float, float, float]


class LightingConfig(BaseModel):
    ambient: LightConfig
    directional: DirectionalLightConfig


class TreeConfig(BaseModel):
    type: Literal["birch", "maple", "pine", "mixed"]
    count: int
    spacing: Literal["sparse", "medium", "dense"]


class EnvironmentConfig(BaseModel):
    ground: Literal["moss_grass", "lush_grass", "fallen_leaves", "snow"]
    trees: TreeConfig
    details: list[str] = Field(default_factory=list)  # pebbles, stones, bushes...


class ParticleConfig(BaseModel):
    type: Literal["breeze", "petals", "leaves", "snow", "none"] = "none"
    density: Literal["minimal", "light", "medium", "heavy"] = "minimal"
    speed: float = 0.0


class FogConfig(BaseModel):
    color: str
    near: float
    far: float


class GardenConfig(BaseModel):
    """Visual theme, lighting and terrain of one garden."""

    key: str
    display_name: str
    description: str = ""
    tier_access: Tier = Tier.FREE

    colors: GardenColors
    lighting: LightingConfig
    environment: EnvironmentConfig
    particles: ParticleConfig = Field(default_factory=ParticleConfig)
    fog: FogConfig | None = None

    terrain: TerrainConfig = Field(default_factory=TerrainConfig)

    def accessible_at(self, tier: Tier | str) -> bool:
        """Whether a user on ``tier`` may open this garden."""
        return TIER_LEVELS[self.tier_access] <= TIER_LEVELS[Tier(tier)]

    def shading(self) -> ShadingConfig:
        """Ground shader parameters derived from the garden lighting."""
        return ShadingConfig(
            light_direction=self.lighting.directional.position,
            ambient_color=self.lighting.ambient.color,
            ambient_intensity=self.lighting.ambient.intensity,
        )


def load_garden_config(config_path: Path) -> GardenConfig:
    """Load a garden from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GardenConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If fields are missing or invalid.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GardenConfig.model_validate(data)


def find_garden_config(name: str) -> Path:
    """Find a garden config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends with .toml
    2. memory_garden/configs/{name}.toml

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    config_path = CONFIGS_DIR / f"{name}.toml"
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {CONFIGS_DIR}. "
        f"Available configs: {list_garden_configs()}"
    )


def list_garden_configs() -> list[str]:
    """List bundled garden config names."""
    if not CONFIGS_DIR.exists():
        return []
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
