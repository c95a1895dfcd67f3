"""
Elevation grid validation and shared numeric helpers.

Every engine entry point funnels its input through `as_elevation_grid`,
which accepts nested Python lists (as stored in DEM records) or numpy
arrays and returns a float64 (H, W) array.
"""

from typing import Sequence, Union
import math
import numpy as np

from sitegrade.core.errors import InvalidGridError, InvalidParameterError

GridLike = Union[np.ndarray, Sequence[Sequence[float]]]


def as_elevation_grid(data: GridLike) -> np.ndarray:
    """
    Validate and convert elevation data to a 2D float64 array.

    Args:
        data: Row-major elevation values, either an (H, W) array or a
            sequence of equal-length rows.

    Returns:
        grid: float64 array (H, W). The input array itself is returned
            when it already has the right dtype; callers must not mutate it.

    Raises:
        InvalidGridError: If the grid is empty, ragged, not 2D,
            non-numeric (strings, booleans, complex), or contains NaN/Inf.
    """
    if not isinstance(data, np.ndarray):
        try:
            rows = [list(row) for row in data]
        except TypeError:
            raise InvalidGridError("Elevation grid must be a sequence of rows")

        if not rows:
            raise InvalidGridError("Elevation grid has no rows")

        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidGridError(
                f"Elevation grid rows have differing lengths: {sorted(widths)}"
            )
        data = rows

    try:
        grid = np.asarray(data)
    except (TypeError, ValueError) as e:
        raise InvalidGridError(f"Elevation grid is not numeric: {e}")

    # bool is not an np.number subtype; strings and objects are rejected too
    if (
        not np.issubdtype(grid.dtype, np.number)
        or np.issubdtype(grid.dtype, np.complexfloating)
    ):
        raise InvalidGridError(f"Elevation grid is not numeric: dtype {grid.dtype}")
    grid = grid.astype(np.float64, copy=False)

    if grid.ndim != 2:
        raise InvalidGridError(f"Elevation grid must be 2D, got {grid.ndim}D")

    if grid.size == 0:
        raise InvalidGridError(f"Elevation grid is empty: shape {grid.shape}")

    if not np.isfinite(grid).all():
        bad = int((~np.isfinite(grid)).sum())
        raise InvalidGridError(f"Elevation grid contains {bad} non-finite cell(s)")

    return grid


def require_positive(name: str, value: float) -> float:
    """Return `value` as float, raising InvalidParameterError unless finite and > 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


def require_finite(name: str, value: float) -> float:
    """Return `value` as float, raising InvalidParameterError unless finite."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


def round_half_up(
    values: Union[np.ndarray, float],
    decimals: int = 0,
) -> Union[np.ndarray, float]:
    """
    Round to `decimals` places with ties going toward +inf.

    numpy's `round` uses banker's rounding; stored DEMs and analysis
    outputs are rounded half-up so that 0.125 -> 0.13 and 2.5 -> 3.
    """
    scale = 10.0 ** decimals
    rounded = np.floor(np.asarray(values, dtype=np.float64) * scale + 0.5) / scale
    if np.ndim(rounded) == 0:
        return float(rounded)
    return rounded
