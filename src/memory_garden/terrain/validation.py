"""Post-generation validation of terrain fields and mesh."""

import logging

import numpy as np
from numpy.typing import NDArray

from .falloff import distance_from_edge
from .generator import TerrainResult

logger = logging.getLogger(__name__)


class ValidationResult:
    """Result of terrain validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_terrain(result: TerrainResult) -> ValidationResult:
    """Validate generated terrain against its invariants.

    Args:
        result: Generated terrain.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()
    config = result.config

    # Check 1: Heights finite and within [0, amplitude]
    _check_range("heightmap", result.heightmap, 0.0, config.amplitude, validation)

    # Check 2: Derived fields within [0, 1]
    _check_range("blend_weights", result.blend_weights, 0.0, 1.0, validation)
    _check_range("slopes", result.slopes, 0.0, 1.0, validation)

    # Check 3: Border tapered to ground level
    _check_border(result, validation)

    # Check 4: Mesh buffers sane
    _check_mesh(result, validation)

    # Log results
    if validation.passed:
        logger.info("Terrain validation passed")
    else:
        logger.warning(f"Terrain validation failed with {len(validation.errors)} errors")
        for error in validation.errors:
            logger.error(f"  - {error}")

    for warning in validation.warnings:
        logger.warning(f"  - {warning}")

    return validation


def _check_range(
    name: str,
    values: NDArray[np.float32],
    low: float,
    high: float,
    validation: ValidationResult,
) -> None:
    """Check a field is finite and bounded."""
    finite = np.isfinite(values)
    if not finite.all():
        validation.add_error(f"{name} has {int(np.sum(~finite))} non-finite values")
        return

    tolerance = 1e-6
    outside = np.sum((values < low - tolerance) | (values > high + tolerance))
    if outside > 0:
        validation.add_error(f"{name} has {int(outside)} values outside [{low}, {high}]")


def _check_border(result: TerrainResult, validation: ValidationResult) -> None:
    """Check the falloff band brings the border down to zero."""
    config = result.config
    if config.falloff_distance <= 0:
        return

    res = config.resolution
    border = distance_from_edge(res, res).ravel() == 0.0
    border_max = float(np.max(result.heightmap[border]))
    if border_max > 1e-6:
        validation.add_error(f"Border height {border_max:.4f} is above ground level")

    if config.falloff_distance > 0.5:
        validation.add_warning(
            f"Falloff distance {config.falloff_distance:.2f} flattens most of the garden"
        )


def _check_mesh(result: TerrainResult, validation: ValidationResult) -> None:
    """Check vertex buffers match the heightmap and normals are unit length."""
    mesh = result.mesh

    if mesh.vertex_count != result.heightmap.size:
        validation.add_error(
            f"Mesh has {mesh.vertex_count} vertices for {result.heightmap.size} heights"
        )
        return

    if not np.isfinite(mesh.positions).all():
        validation.add_error("Mesh positions contain non-finite values")

    lengths = np.linalg.norm(mesh.normals, axis=1)
    if not np.allclose(lengths, 1.0, atol=1e-4):
        validation.add_error("Mesh normals are not unit length")

    if np.any(mesh.normals[:, 1] < 0):
        validation.add_warning("Some mesh normals point downward")
