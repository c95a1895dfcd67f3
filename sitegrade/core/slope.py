"""
Slope and aspect from centred finite differences.
"""

from dataclasses import dataclass
import numpy as np

from sitegrade.core.grid import GridLike, as_elevation_grid, require_positive, round_half_up


@dataclass
class SlopeField:
    """
    Per-cell slope and aspect grids, congruent to the input DEM.

    Attributes:
        gradient: (H, W) slope in percent, 1 decimal
        aspect: (H, W) integer degrees in [0, 359]. Meaningless where the
            gradient is zero.
    """
    gradient: np.ndarray
    aspect: np.ndarray

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "gradient": self.gradient.tolist(),
            "aspect": self.aspect.tolist(),
        }


def compute_slope(grid: GridLike, cell_size_ft: float = 5.0) -> SlopeField:
    """
    Compute percent slope and aspect for every cell.

    Neighbours outside the grid are clamped to the border cell, so border
    cells fall back to a one-sided difference (halved) and a 1x1 grid has
    zero gradient.

        dx = (right - left) / (2 * cell_size_ft)
        dy = (down - up) / (2 * cell_size_ft)
        slope = hypot(dx, dy) * 100
        aspect = (degrees(atan2(-dy, dx)) + 360) mod 360

    Args:
        grid: Elevation grid (H, W) in feet
        cell_size_ft: Horizontal spacing between cells in feet

    Returns:
        SlopeField with gradient (percent) and aspect (degrees)

    Raises:
        InvalidGridError: If the grid is malformed
        InvalidParameterError: If cell_size_ft is not positive
    """
    grid = as_elevation_grid(grid)
    cell_size_ft = require_positive("cell_size_ft", cell_size_ft)

    padded = np.pad(grid, 1, mode='edge')
    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    up = padded[:-2, 1:-1]
    down = padded[2:, 1:-1]

    dx = (right - left) / (2 * cell_size_ft)
    dy = (down - up) / (2 * cell_size_ft)

    slope_percent = np.hypot(dx, dy) * 100
    aspect_deg = (np.degrees(np.arctan2(-dy, dx)) + 360) % 360

    # Rounding can push 359.5+ up to 360, which is north again.
    aspect = round_half_up(aspect_deg).astype(np.int64) % 360

    return SlopeField(
        gradient=round_half_up(slope_percent, 1),
        aspect=aspect,
    )
