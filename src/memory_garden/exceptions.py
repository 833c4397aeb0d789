"""Custom exceptions for garden generation."""


class GardenError(Exception):
    """Base exception for garden errors."""

    pass


class TerrainParameterError(GardenError, ValueError):
    """Raised when a generation call gets an unusable parameter.

    Zero-sized grids, non-positive texture sizes and buffers whose length
    does not match the declared grid are caller errors, not runtime faults.
    """

    pass


class GardenNotFoundError(GardenError, KeyError):
    """Raised when a garden key is not in the catalogue."""

    pass
