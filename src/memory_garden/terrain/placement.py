"""Prop layout: fences, pathways, scattered rocks and grass patches."""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import TerrainParameterError
from .heightmap import sample_heights

# Fence walls are spaced to look connected
FENCE_SPACING = 3.5
FENCE_INSET = -1.65

# Fountain at the hub of the spring pathways
FOUNTAIN_Z = -5.0
PATHWAY_SPACING = 9.0
PATHWAY_SEGMENTS = 3

GRASS_PATCH_SPACING = {
    "sparse": 4.0,
    "medium": 2.5,
    "dense": 2.0,
}
GRASS_PATCH_JITTER = 0.3


class PropKind(str, Enum):
    """Kinds of decorative props laid out on the terrain."""

    ROCKS = "rocks"
    STONES = "stones"
    FOUNTAIN = "fountain"
    PATH = "path"
    SPRING_PATHWAYS = "spring_pathways"
    FENCE = "fence"
    GRASS_PATCH = "grass_patch"


@dataclass
class PropLayout:
    """Positions (x, y, z) and yaw rotations for one kind of prop."""

    kind: PropKind
    positions: NDArray[np.float64]  # (n, 3)
    rotations: NDArray[np.float64]  # (n,)

    def __len__(self) -> int:
        return len(self.positions)


def _ground(xs: list[float], zs: list[float]) -> NDArray[np.float64]:
    return np.stack(
        [np.asarray(xs, dtype=np.float64), np.zeros(len(xs)), np.asarray(zs, dtype=np.float64)],
        axis=1,
    ).reshape(-1, 3)


def _fence(garden_size: float) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    walls_per_side = int(garden_size // FENCE_SPACING)
    if walls_per_side < 1:
        return np.zeros((0, 3)), np.zeros(0)

    spacing = garden_size / walls_per_side
    radius = garden_size / 2 - FENCE_INSET
    along = [-(garden_size / 2) + (i + 0.5) * spacing for i in range(walls_per_side)]

    xs, zs, rotations = [], [], []
    # North, south, east, west; each side faces inward
    for side_x, side_z, yaw in (
        (None, radius, math.pi),
        (None, -radius, 0.0),
        (radius, None, -math.pi / 2),
        (-radius, None, math.pi / 2),
    ):
        for offset in along:
            xs.append(offset if side_x is None else side_x)
            zs.append(offset if side_z is None else side_z)
            rotations.append(yaw)

    return _ground(xs, zs), np.array(rotations)


def _spring_pathways() -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    xs, zs, rotations = [], [], []
    steps = [(i + 1) * PATHWAY_SPACING for i in range(PATHWAY_SEGMENTS)]

    for step in steps:  # north
        xs.append(0.0)
        zs.append(FOUNTAIN_Z + step)
        rotations.append(0.0)
    for step in steps:  # south
        xs.append(0.0)
        zs.append(FOUNTAIN_Z - step)
        rotations.append(0.0)
    for step in steps:  # east
        xs.append(step)
        zs.append(FOUNTAIN_Z)
        rotations.append(math.pi / 2)
    for step in steps:  # west
        xs.append(-step)
        zs.append(FOUNTAIN_Z)
        rotations.append(math.pi / 2)

    return _ground(xs, zs), np.array(rotations)


def layout_props(
    kind: PropKind | str,
    count: int = 5,
    spread: float = 12.0,
    garden_size: float = 60.0,
    rng: np.random.Generator | None = None,
) -> PropLayout:
    """Lay out one kind of prop on flat ground (y = 0).

    Args:
        kind: Prop kind.
        count: Number of props for scattered kinds and paths.
        spread: Maximum scatter radius for rocks and stones.
        garden_size: Garden edge length, used to size the fence.
        rng: Random generator for scatter (unseeded when omitted).

    Returns:
        PropLayout with positions and rotations.
    """
    kind = PropKind(kind)
    rng = rng if rng is not None else np.random.default_rng()

    if kind == PropKind.FOUNTAIN:
        positions, rotations = _ground([8.0], [-8.0]), rng.random(1) * math.tau
    elif kind == PropKind.SPRING_PATHWAYS:
        positions, rotations = _spring_pathways()
    elif kind == PropKind.FENCE:
        positions, rotations = _fence(garden_size)
    elif kind == PropKind.GRASS_PATCH:
        return grass_patch_grid(area_size=garden_size, rng=rng)
    elif kind == PropKind.PATH:
        positions = _ground([i * 2.0 - 4.0 for i in range(count)], [FOUNTAIN_Z] * count)
        rotations = rng.random(count) * math.tau
    else:
        angles = rng.random(count) * math.tau
        distances = rng.random(count) * spread
        positions = _ground(
            list(np.cos(angles) * distances), list(np.sin(angles) * distances)
        )
        rotations = rng.random(count) * math.tau

    return PropLayout(kind=kind, positions=positions, rotations=rotations)


def grass_patch_grid(
    density: str = "dense",
    area_size: float = 40.0,
    rng: np.random.Generator | None = None,
) -> PropLayout:
    """Cover the garden with a jittered grid of grass patches.

    Raises:
        TerrainParameterError: If the density is unknown.
    """
    if density not in GRASS_PATCH_SPACING:
        raise TerrainParameterError(
            f"Unknown grass density '{density}', expected one of {list(GRASS_PATCH_SPACING)}"
        )
    rng = rng if rng is not None else np.random.default_rng()

    spacing = GRASS_PATCH_SPACING[density]
    count = int(area_size // spacing)
    offset = count * spacing / 2

    grid = np.arange(count) * spacing - offset
    xs, zs = np.meshgrid(grid, grid, indexing="ij")
    jitter = (rng.random((2, count * count)) - 0.5) * GRASS_PATCH_JITTER

    positions = _ground(list(xs.ravel() + jitter[0]), list(zs.ravel() + jitter[1]))
    rotations = rng.random(count * count) * math.tau
    return PropLayout(kind=PropKind.GRASS_PATCH, positions=positions, rotations=rotations)


def snap_to_terrain(
    layout: PropLayout,
    heightmap: ArrayLike,
    resolution: int,
    terrain_size: float,
) -> PropLayout:
    """Return a copy of the layout with Y set to the terrain height."""
    positions = layout.positions.copy()
    positions[:, 1] = sample_heights(
        heightmap, resolution, resolution, positions[:, 0], positions[:, 2], terrain_size
    )
    return PropLayout(kind=layout.kind, positions=positions, rotations=layout.rotations.copy())
