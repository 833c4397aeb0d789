"""Terrain persistence: save and load generated ground."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .config import TerrainConfig
from .generator import TerrainResult

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def save_terrain(path: Path, result: TerrainResult) -> Path:
    """Save generated terrain to disk.

    Uses numpy's compressed .npz format for efficient storage. The full
    config is stored so the mesh can be rebuilt without regenerating noise.

    Args:
        path: Output path; a missing or different suffix becomes .npz.
        result: Generated terrain.

    Returns:
        The path actually written.
    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")

    config = result.config
    metadata = {
        "version": FORMAT_VERSION,
        "seed": config.seed,
        "resolution": config.resolution,
        "size": config.size,
        "amplitude": config.amplitude,
        "config": config.model_dump(),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        heightmap=result.heightmap,
        blend_weights=result.blend_weights,
        metadata=np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
    )

    file_size = path.stat().st_size / 1024
    logger.info(f"Saved terrain to {path} ({file_size:.1f} KB)")
    return path


def load_terrain(
    path: Path,
) -> tuple[NDArray[np.float32], NDArray[np.float32], dict]:
    """Load terrain from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (heightmap, blend weights, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Terrain file not found: {path}")

    with np.load(path) as data:
        if "heightmap" not in data:
            raise ValueError("Invalid terrain file: missing 'heightmap' array")
        heightmap = data["heightmap"].astype(np.float32)

        if "blend_weights" in data:
            blend_weights = data["blend_weights"].astype(np.float32)
        else:
            blend_weights = np.zeros_like(heightmap)

        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        else:
            metadata = {}

    version = metadata.get("version", FORMAT_VERSION)
    if version > FORMAT_VERSION:
        raise ValueError(f"Unsupported terrain file version {version}")

    resolution = metadata.get("resolution")
    if resolution is not None and heightmap.size != resolution * resolution:
        raise ValueError(
            f"Invalid terrain file: {heightmap.size} heights for resolution {resolution}"
        )

    logger.info(f"Loaded terrain from {path}: {heightmap.size:,} heights")
    return heightmap, blend_weights, metadata


def config_from_metadata(metadata: dict) -> TerrainConfig:
    """Rebuild the generation config stored alongside a terrain file."""
    if "config" in metadata:
        return TerrainConfig.model_validate(metadata["config"])
    return TerrainConfig(
        seed=metadata.get("seed", 42),
        resolution=metadata.get("resolution", 150),
        size=metadata.get("size", 40.0),
        amplitude=metadata.get("amplitude", 0.9),
    )
