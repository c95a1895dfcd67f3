"""
Descriptive statistics over an elevation grid.
"""

from dataclasses import dataclass
import numpy as np

from sitegrade.core.grid import GridLike, as_elevation_grid, round_half_up


@dataclass(frozen=True)
class GridStats:
    """
    Summary statistics of an elevation grid, in feet.

    All values are rounded to 2 decimals after full-precision computation.
    Stats describe exactly one grid; recompute them whenever the grid changes.

    Attributes:
        min: Lowest cell value
        max: Highest cell value
        mean: Arithmetic mean of all cells
        stddev: Population standard deviation
    """
    min: float
    max: float
    mean: float
    stddev: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "stddev": self.stddev,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GridStats":
        """Create from dictionary."""
        return cls(
            min=float(data["min"]),
            max=float(data["max"]),
            mean=float(data["mean"]),
            stddev=float(data["stddev"]),
        )


def compute_stats(grid: GridLike) -> GridStats:
    """
    Compute min, max, mean and population standard deviation of a grid.

    Args:
        grid: Elevation grid (H, W), at least one cell

    Returns:
        GridStats rounded to 2 decimals

    Example:
        >>> compute_stats([[1, 2], [3, 4]])
        GridStats(min=1.0, max=4.0, mean=2.5, stddev=1.12)
    """
    grid = as_elevation_grid(grid)
    values = grid.ravel()

    mean = values.sum() / values.size
    variance = np.square(values - mean).sum() / values.size

    return GridStats(
        min=round_half_up(values.min(), 2),
        max=round_half_up(values.max(), 2),
        mean=round_half_up(mean, 2),
        stddev=round_half_up(np.sqrt(variance), 2),
    )
