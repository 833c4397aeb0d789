"""Tests for heightmap synthesis, sampling and slopes."""

import numpy as np
import pytest

from memory_garden.exceptions import TerrainParameterError
from memory_garden.terrain.config import HeightmapOptions
from memory_garden.terrain.heightmap import (
    calculate_slopes,
    generate_heightmap,
    sample_height,
    sample_heights,
)

SINGLE_OCTAVE = dict(seed=42, scale=0.1, octaves=1, amplitude=1.0, redistribution=1.0)


class TestGenerateHeightmap:
    """Tests for multi-octave heightmap generation."""

    def test_known_values(self) -> None:
        """Single-octave 4x4 map for seed 42 matches recorded output."""
        expected = [
            1.0, 0.831381977, 0.629535198, 0.423623234,
            0.831381977, 0.664415419, 0.471935391, 0.285587609,
            0.629535198, 0.465496689, 0.288998336, 0.134442508,
            0.423623234, 0.263904363, 0.110392094, 0.0,
        ]
        result = generate_heightmap(4, 4, **SINGLE_OCTAVE)
        np.testing.assert_allclose(result, expected, atol=1e-6)

    def test_output_shape_and_dtype(self) -> None:
        """Output is a flat float32 buffer of width * height values."""
        result = generate_heightmap(30, 20)
        assert result.shape == (600,)
        assert result.dtype == np.float32

    def test_deterministic_with_same_seed(self) -> None:
        """Same options produce identical output."""
        options = HeightmapOptions(seed=123)
        np.testing.assert_array_equal(
            generate_heightmap(32, 32, options), generate_heightmap(32, 32, options)
        )

    def test_different_seed_different_output(self) -> None:
        """Different seeds produce different maps."""
        assert not np.allclose(
            generate_heightmap(32, 32, seed=1), generate_heightmap(32, 32, seed=2)
        )

    @pytest.mark.parametrize("octaves", [1, 2, 4, 8])
    @pytest.mark.parametrize("seed", [-1000, -97, 0, 42, 555, 1000])
    def test_range(self, seed: int, octaves: int) -> None:
        """Values span exactly [0, amplitude]."""
        result = generate_heightmap(24, 24, seed=seed, octaves=octaves, amplitude=0.7)
        assert result.min() >= 0.0
        assert result.max() <= np.float32(0.7)
        assert result.min() == 0.0
        assert result.max() == pytest.approx(0.7)

    def test_options_and_overrides_combine(self) -> None:
        """Keyword overrides replace individual option fields."""
        options = HeightmapOptions(seed=5, octaves=3)
        np.testing.assert_array_equal(
            generate_heightmap(16, 16, options, seed=6),
            generate_heightmap(16, 16, HeightmapOptions(seed=6, octaves=3)),
        )

    def test_zero_scale_is_flat(self) -> None:
        """A degenerate noise range yields an all-zero map, not NaN."""
        result = generate_heightmap(8, 8, scale=0.0)
        np.testing.assert_array_equal(result, 0.0)

    def test_single_cell(self) -> None:
        """A 1x1 map is a single zero."""
        np.testing.assert_array_equal(generate_heightmap(1, 1), [0.0])

    def test_non_rectangular_grid(self) -> None:
        """Wide grids are row-major: rows of ``width`` values."""
        wide = generate_heightmap(8, 3, **SINGLE_OCTAVE)
        assert wide.shape == (24,)

    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-1, 3)])
    def test_empty_grid_raises(self, width: int, height: int) -> None:
        """Zero or negative dimensions are rejected."""
        with pytest.raises(TerrainParameterError):
            generate_heightmap(width, height)

    def test_invalid_override_rejected(self) -> None:
        """Option validation applies to overrides."""
        with pytest.raises(ValueError):
            generate_heightmap(4, 4, octaves=0)


class TestSampleHeight:
    """Tests for bilinear height sampling."""

    def test_corners(self, ramp_2x2: np.ndarray) -> None:
        """Terrain corners return the corner cells."""
        assert sample_height(ramp_2x2, 2, 2, -1.0, -1.0, 2.0) == pytest.approx(0.0)
        assert sample_height(ramp_2x2, 2, 2, 1.0, -1.0, 2.0) == pytest.approx(1.0)
        assert sample_height(ramp_2x2, 2, 2, -1.0, 1.0, 2.0) == pytest.approx(2.0)
        assert sample_height(ramp_2x2, 2, 2, 1.0, 1.0, 2.0) == pytest.approx(3.0)

    def test_centre_is_average(self, ramp_2x2: np.ndarray) -> None:
        """Origin blends all four cells equally."""
        assert sample_height(ramp_2x2, 2, 2, 0.0, 0.0, 2.0) == pytest.approx(1.5)

    def test_edge_midpoint(self, ramp_2x2: np.ndarray) -> None:
        """Halfway along the top edge interpolates linearly."""
        assert sample_height(ramp_2x2, 2, 2, 0.0, -1.0, 2.0) == pytest.approx(0.5)

    def test_midpoint_of_equal_corners(self) -> None:
        """Between equal corners the sample equals the corner value."""
        flat = np.full(4, 0.25)
        assert sample_height(flat, 2, 2, 0.0, 0.0, 2.0) == pytest.approx(0.25)

    def test_clamped_outside(self, ramp_2x2: np.ndarray) -> None:
        """Positions beyond the border read the nearest edge."""
        assert sample_height(ramp_2x2, 2, 2, 50.0, -50.0, 2.0) == pytest.approx(1.0)
        assert sample_height(ramp_2x2, 2, 2, -50.0, 0.0, 2.0) == pytest.approx(1.0)

    def test_exact_at_grid_points(self) -> None:
        """Sampling a vertex position returns that vertex's height."""
        res, size = 9, 40.0
        heightmap = generate_heightmap(res, res)
        grid = heightmap.reshape(res, res)
        for row, col in [(0, 0), (3, 5), (8, 2), (8, 8)]:
            x = col / (res - 1) * size - size / 2
            z = row / (res - 1) * size - size / 2
            assert sample_height(heightmap, res, res, x, z, size) == pytest.approx(
                grid[row, col], abs=1e-6
            )

    def test_length_mismatch_raises(self) -> None:
        """Buffer and dimensions must agree."""
        with pytest.raises(TerrainParameterError):
            sample_height(np.zeros(5), 2, 2, 0.0, 0.0, 1.0)


class TestSampleHeights:
    """Tests for vectorized sampling."""

    def test_matches_scalar(self) -> None:
        """Vectorized sampling agrees with the scalar sampler."""
        res, size = 12, 40.0
        heightmap = generate_heightmap(res, res, seed=3)
        rng = np.random.default_rng(5)
        xs = rng.uniform(-25, 25, 50)
        zs = rng.uniform(-25, 25, 50)

        result = sample_heights(heightmap, res, res, xs, zs, size)
        expected = [sample_height(heightmap, res, res, x, z, size) for x, z in zip(xs, zs)]
        np.testing.assert_allclose(result, expected, atol=1e-9)

    def test_preserves_shape(self, ramp_2x2: np.ndarray) -> None:
        """Output has the shape of the query arrays."""
        result = sample_heights(ramp_2x2, 2, 2, np.zeros((3, 4)), np.zeros((3, 4)), 2.0)
        assert result.shape == (3, 4)
        np.testing.assert_allclose(result, 1.5)


class TestCalculateSlopes:
    """Tests for slope magnitude."""

    def test_flat_is_zero(self) -> None:
        """Flat terrain has no slope."""
        np.testing.assert_array_equal(calculate_slopes(np.full(16, 0.4), 4, 4, 10.0), 0.0)

    def test_steep_ramp_saturates(self) -> None:
        """Steep ramps clamp at 1, and the last column has no +X neighbour."""
        heights = np.tile(np.arange(4, dtype=np.float64) * 10.0, 4)
        slopes = calculate_slopes(heights, 4, 4, 4.0).reshape(4, 4)
        np.testing.assert_array_equal(slopes[:, :3], 1.0)
        np.testing.assert_array_equal(slopes[:, 3], 0.0)

    def test_gentle_ramp(self) -> None:
        """Slope is half the gradient magnitude."""
        # cell size 1, height change 0.2 per cell along X
        heights = np.tile(np.arange(4, dtype=np.float64) * 0.2, 4)
        slopes = calculate_slopes(heights, 4, 4, 4.0).reshape(4, 4)
        np.testing.assert_allclose(slopes[:, :3], 0.1, atol=1e-6)

    def test_bounded(self) -> None:
        """Slopes of a generated map stay in [0, 1]."""
        heightmap = generate_heightmap(32, 32, amplitude=5.0, scale=0.3)
        slopes = calculate_slopes(heightmap, 32, 32, 8.0)
        assert slopes.dtype == np.float32
        assert slopes.min() >= 0.0
        assert slopes.max() <= 1.0

    def test_non_finite_input(self) -> None:
        """NaN heights never leak into slopes."""
        heights = np.zeros(9)
        heights[4] = np.nan
        slopes = calculate_slopes(heights, 3, 3, 3.0)
        assert np.all(np.isfinite(slopes))
