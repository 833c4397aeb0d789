"""Shared test fixtures for garden tests."""

import numpy as np
import pytest

from memory_garden.terrain.config import TerrainConfig
from memory_garden.terrain.generator import TerrainResult, generate_terrain


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so painted and scattered output is repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_config() -> TerrainConfig:
    """Default terrain at a resolution small enough for fast tests."""
    return TerrainConfig(resolution=16)


@pytest.fixture
def small_terrain(small_config: TerrainConfig) -> TerrainResult:
    """Generated 16x16 terrain."""
    return generate_terrain(small_config)


@pytest.fixture
def ramp_2x2() -> np.ndarray:
    """2x2 heightmap, row-major:

        0 1
        2 3
    """
    return np.array([0.0, 1.0, 2.0, 3.0], dtype=np.float32)
