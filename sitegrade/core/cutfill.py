"""
Cut/fill earthwork volumes against a flat design pad elevation.
"""

from dataclasses import dataclass
import numpy as np

from sitegrade.core.grid import (
    GridLike,
    as_elevation_grid,
    require_finite,
    require_positive,
    round_half_up,
)

CUBIC_FEET_PER_CUBIC_YARD = 27.0


@dataclass
class CutFillResult:
    """
    Result of a cut/fill analysis.

    Attributes:
        cut_volume: Material above grade to remove, cubic yards
        fill_volume: Material below grade to add, cubic yards
        net_volume: cut_volume - fill_volume (from the rounded values)
        heatmap: (H, W) existing minus design elevation in feet, 2 decimals.
            Positive = cut, negative = fill.
    """
    cut_volume: int
    fill_volume: int
    net_volume: int
    heatmap: np.ndarray

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "cut_volume": self.cut_volume,
            "fill_volume": self.fill_volume,
            "net_volume": self.net_volume,
            "heatmap": self.heatmap.tolist(),
        }


def compute_cut_fill(
    existing: GridLike,
    design_elevation_ft: float = 845.0,
    cell_size_ft: float = 5.0,
) -> CutFillResult:
    """
    Compute earthwork volumes to bring a surface to a flat design elevation.

    Each cell contributes (existing - design) * cell_size_ft**2 cubic feet.
    Positive differences accumulate as cut, zero and negative ones as fill.
    Both totals are converted to cubic yards and rounded to the nearest
    whole yard before the net is taken.

    Args:
        existing: Existing ground elevation grid (H, W) in feet
        design_elevation_ft: Target pad elevation in feet
        cell_size_ft: Side length of one grid cell in feet

    Returns:
        CutFillResult with volumes in cubic yards and the per-cell heatmap

    Raises:
        InvalidGridError: If the grid is malformed
        InvalidParameterError: If cell_size_ft is not positive or the
            design elevation is not finite

    Example:
        >>> result = compute_cut_fill([[850.0, 840.0]], 845.0, cell_size_ft=3.0)
        >>> result.cut_volume, result.fill_volume, result.net_volume
        (2, 2, 0)
    """
    existing = as_elevation_grid(existing)
    design_elevation_ft = require_finite("design_elevation_ft", design_elevation_ft)
    cell_size_ft = require_positive("cell_size_ft", cell_size_ft)

    diff = existing - design_elevation_ft
    volume = diff * (cell_size_ft * cell_size_ft)

    cut_mask = diff > 0
    cut_cubic_ft = volume[cut_mask].sum()
    fill_cubic_ft = np.abs(volume[~cut_mask]).sum()

    cut_volume = int(round_half_up(cut_cubic_ft / CUBIC_FEET_PER_CUBIC_YARD))
    fill_volume = int(round_half_up(fill_cubic_ft / CUBIC_FEET_PER_CUBIC_YARD))

    return CutFillResult(
        cut_volume=cut_volume,
        fill_volume=fill_volume,
        net_volume=cut_volume - fill_volume,
        heatmap=round_half_up(diff, 2),
    )
