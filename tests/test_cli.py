"""Tests for the command-line interface."""

from pathlib import Path

import numpy as np

from memory_garden.cli import main
from memory_garden.config import CONFIGS_DIR


class TestCli:
    """Tests for ``memory-garden``."""

    def test_list(self, capsys) -> None:
        """--list prints every garden."""
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "test_garden" in out
        assert "lantern_walk" in out

    def test_generate(self, tmp_path: Path) -> None:
        """A small bake writes terrain, textures and a preview."""
        output = tmp_path / "out" / "terrain.npz"
        code = main(
            [
                "--resolution", "12",
                "--seed", "5",
                "--output", str(output),
                "--textures", str(tmp_path / "textures"),
                "--texture-seed", "1",
                "--preview", str(tmp_path / "preview.png"),
                "--preview-size", "32",
            ]
        )
        assert code == 0
        assert output.exists()
        assert sorted(p.name for p in (tmp_path / "textures").iterdir()) == [
            "dirt.png", "grass.png", "stroke.png"
        ]
        assert (tmp_path / "preview.png").exists()

        with np.load(output) as data:
            assert data["heightmap"].size == 144

    def test_unknown_garden(self, tmp_path: Path) -> None:
        """An unknown garden exits with an error code."""
        assert main(["--garden", "nowhere", "--output", str(tmp_path / "t.npz")]) == 1

    def test_config_path(self, tmp_path: Path) -> None:
        """--config loads a garden TOML directly."""
        output = tmp_path / "lantern.npz"
        code = main(
            [
                "--config", str(CONFIGS_DIR / "lantern_walk.toml"),
                "--resolution", "10",
                "--output", str(output),
            ]
        )
        assert code == 0
        assert output.exists()

    def test_output_without_suffix(self, tmp_path: Path) -> None:
        """An output name without .npz is saved with the suffix added."""
        code = main(["--resolution", "8", "--output", str(tmp_path / "garden")])
        assert code == 0
        assert (tmp_path / "garden.npz").exists()
