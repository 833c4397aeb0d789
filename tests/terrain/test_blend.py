"""Tests for grass/dirt blend weights and vertex colours."""

import numpy as np
import pytest

from memory_garden.exceptions import TerrainParameterError
from memory_garden.terrain.blend import (
    color_to_rgb,
    compute_blend_weights,
    compute_vertex_colors,
    normalized_heights,
)


class TestNormalizedHeights:
    """Tests for height normalization."""

    def test_headroom(self) -> None:
        """Zero height maps above zero, full amplitude to one."""
        result = normalized_heights(np.array([0.0, 1.0]), 1.0)
        np.testing.assert_allclose(result, [0.2 / 1.2, 1.0])

    def test_zero_amplitude(self) -> None:
        """Zero amplitude yields zeros instead of dividing by zero."""
        np.testing.assert_array_equal(normalized_heights(np.ones(3), 0.0), 0.0)


class TestComputeBlendWeights:
    """Tests for dirt path weights."""

    def test_below_threshold_is_grass(self) -> None:
        """Blend noise under the threshold gives pure grass."""
        weights = compute_blend_weights(np.zeros(3), np.array([0.0, 0.3, 0.55]), 1.0)
        np.testing.assert_array_equal(weights, 0.0)

    def test_above_threshold_is_dirt(self) -> None:
        """Noise past the threshold ramps toward dirt, saturating at 1."""
        # zero height: normalized 1/6, threshold 0.6
        weights = compute_blend_weights(np.zeros(2), np.array([0.7, 1.0]), 1.0)
        np.testing.assert_allclose(weights, [0.3, 1.0], atol=1e-6)

    def test_hilltops_stay_grassy(self) -> None:
        """The same noise gives less dirt on higher ground."""
        low, high = compute_blend_weights(np.array([0.0, 1.0]), np.array([0.68, 0.68]), 1.0)
        assert high < low

    def test_range(self) -> None:
        """Weights stay in [0, 1] even for noisy inputs."""
        rng = np.random.default_rng(2)
        weights = compute_blend_weights(rng.random(500), rng.uniform(-1, 2, 500), 1.0)
        assert weights.dtype == np.float32
        assert weights.min() >= 0.0
        assert weights.max() <= 1.0

    def test_non_finite_noise(self) -> None:
        """NaN noise is treated as grass."""
        weights = compute_blend_weights(np.zeros(2), np.array([np.nan, np.inf]), 1.0)
        assert np.all(np.isfinite(weights))
        assert weights[0] == 0.0

    def test_length_mismatch_raises(self) -> None:
        """Heightmap and noise must have the same length."""
        with pytest.raises(TerrainParameterError):
            compute_blend_weights(np.zeros(4), np.zeros(5), 1.0)


class TestComputeVertexColors:
    """Tests for slope/height tinting."""

    def test_flat_low_ground_is_dimmed_grass(self) -> None:
        """Flat ground at zero height is grass at 85% plus a little."""
        colors = compute_vertex_colors(np.zeros(1), np.zeros(1), "#FFFFFF", "#000000", 1.0)
        brightness = 0.85 + 0.15 * (0.2 / 1.2)
        np.testing.assert_allclose(colors[0], brightness, atol=1e-6)

    def test_steep_is_dirt(self) -> None:
        """Full slope uses the dirt colour."""
        colors = compute_vertex_colors(np.ones(1), np.ones(1), "#FFFFFF", "#FF0000", 1.0)
        np.testing.assert_allclose(colors[0], [1.0, 0.0, 0.0], atol=1e-6)

    def test_shape(self) -> None:
        """One RGB triple per vertex."""
        colors = compute_vertex_colors(np.zeros(10), np.zeros(10), "#8B9B5C", "#9B6B5A", 0.9)
        assert colors.shape == (10, 3)
        assert colors.dtype == np.float32


def test_color_to_rgb() -> None:
    """Hex colours parse to unit floats."""
    np.testing.assert_allclose(color_to_rgb("#FF8000"), [1.0, 128 / 255, 0.0])
