"""Command-line interface for baking garden terrain."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO

    # Library modules log through the standard library
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for terrain baking."""
    parser = argparse.ArgumentParser(
        description="Generate terrain, textures and previews for a memory garden"
    )
    parser.add_argument(
        "--garden",
        "-g",
        type=str,
        default="test_garden",
        help="Built-in garden key, bundled config name or TOML path (default: test_garden)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a garden TOML file (overrides --garden)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Terrain seed (overrides the garden)"
    )
    parser.add_argument(
        "--resolution",
        type=int,
        default=None,
        help="Vertices per terrain edge (overrides the garden)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="out/terrain.npz",
        help="Terrain output path (default: out/terrain.npz)",
    )
    parser.add_argument(
        "--textures",
        type=str,
        default=None,
        help="Directory to write grass/dirt/stroke PNGs (optional)",
    )
    parser.add_argument(
        "--texture-seed",
        type=int,
        default=None,
        help="Seed for texture painting (random when omitted)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Path for a top-down shaded preview PNG (optional)",
    )
    parser.add_argument(
        "--preview-size", type=int, default=512, help="Preview edge in pixels"
    )
    parser.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug field images (optional)",
    )
    parser.add_argument(
        "--list", action="store_true", help="List available gardens and exit"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    import numpy as np

    from .config import list_garden_configs, load_garden_config
    from .exceptions import GardenError
    from .gardens import GARDEN_CONFIGS, resolve_garden
    from .shading import render_preview
    from .terrain.generator import generate_terrain
    from .terrain.persistence import save_terrain
    from .terrain.validation import validate_terrain
    from .textures import create_terrain_textures

    if args.list:
        for garden in GARDEN_CONFIGS.values():
            print(f"{garden.key:20} {garden.tier_access.value:8} {garden.display_name}")
        for name in list_garden_configs():
            print(f"{name:20} {'config':8} (bundled TOML)")
        return 0

    try:
        if args.config:
            garden = load_garden_config(Path(args.config))
        else:
            garden = resolve_garden(args.garden)
    except (GardenError, FileNotFoundError) as e:
        logger.error("garden_not_found", garden=args.config or args.garden, error=str(e))
        return 1

    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.resolution is not None:
        overrides["resolution"] = args.resolution
    if args.debug_images is not None:
        overrides["debug_output_dir"] = args.debug_images
    config = garden.terrain.model_validate({**garden.terrain.model_dump(), **overrides})

    logger.info(
        "generating_terrain",
        garden=garden.key,
        seed=config.seed,
        resolution=config.resolution,
    )

    start_time = time.time()
    result = generate_terrain(config)
    logger.info("terrain_generated", duration_s=round(time.time() - start_time, 2))

    validation = validate_terrain(result)
    if not validation.passed:
        logger.error("terrain_invalid", errors=validation.errors)
        return 1

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    saved_path = save_terrain(output_path, result)
    logger.info("terrain_saved", path=str(saved_path))

    if args.textures or args.preview:
        rng = np.random.default_rng(args.texture_seed)
        textures = create_terrain_textures(rng=rng)

        if args.textures:
            texture_dir = Path(args.textures)
            texture_dir.mkdir(parents=True, exist_ok=True)
            for name in ("grass", "dirt", "stroke"):
                getattr(textures, name).save(texture_dir / f"{name}.png")
            logger.info("textures_saved", directory=str(texture_dir))

        if args.preview:
            preview_path = Path(args.preview)
            preview_path.parent.mkdir(parents=True, exist_ok=True)
            image = render_preview(
                result.mesh, textures, args.preview_size, garden.shading()
            )
            image.save(preview_path)
            logger.info("preview_saved", path=str(preview_path))

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
