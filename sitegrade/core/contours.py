"""
Iso-elevation contour point extraction.

For each level the tracer scans every unit cell and tests only two of its
four edges (top and left) for a sign change of `value - level`. The result
is an unconnected scatter of crossing points per level, not polylines;
renderers draw it as a point cloud. The bottom row's bottom edges and the
last column's right edges are never tested.
"""

from dataclasses import dataclass, field
from typing import List
import logging
import math
import numpy as np

from sitegrade.core.grid import GridLike, as_elevation_grid, require_positive
from sitegrade.core.statistics import compute_stats

logger = logging.getLogger(__name__)


@dataclass
class ContourLevel:
    """
    Crossing points for a single contour elevation.

    Attributes:
        elevation: Contour elevation in feet (a multiple of the interval)
        points: (N, 2) float array of fractional (x, y) grid coordinates
    """
    elevation: float
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "elevation": self.elevation,
            "points": self.points.tolist(),
        }


def contour_levels(min_ft: float, max_ft: float, interval_ft: float) -> List[float]:
    """
    Multiples of `interval_ft` within [min_ft, max_ft], ascending.

    Example:
        >>> contour_levels(821.3, 838.0, 5)
        [825.0, 830.0, 835.0]
    """
    interval_ft = require_positive("interval_ft", interval_ft)
    first = math.ceil(min_ft / interval_ft)
    last = math.floor(max_ft / interval_ft)
    return [k * interval_ft for k in range(first, last + 1)]


def _edge_crossings(grid: np.ndarray, level: float) -> np.ndarray:
    """Crossing points on the top and left edge of every unit cell, row-major."""
    tl = grid[:-1, :-1]
    tr = grid[:-1, 1:]
    bl = grid[1:, :-1]

    rows, cols = np.mgrid[0:tl.shape[0], 0:tl.shape[1]].astype(np.float64)

    top_hit = (tl - level) * (tr - level) < 0
    left_hit = (tl - level) * (bl - level) < 0

    # Divisions only matter where an edge crosses, and a crossing implies
    # distinct endpoints, so the masked-out zeros are harmless.
    with np.errstate(divide='ignore', invalid='ignore'):
        t_top = (level - tl) / (tr - tl)
        t_left = (level - tl) / (bl - tl)

    # Stack as (rows, cols, edge, xy) so flattening keeps the per-cell
    # order: top edge first, then left edge.
    candidates = np.stack([
        np.stack([cols + t_top, rows], axis=-1),
        np.stack([cols, rows + t_left], axis=-1),
    ], axis=2)
    hits = np.stack([top_hit, left_hit], axis=2)

    return candidates[hits]


def compute_contours(grid: GridLike, interval_ft: float = 5.0) -> List[ContourLevel]:
    """
    Extract contour crossing points at a fixed vertical interval.

    Candidate levels are the multiples of `interval_ft` between the grid's
    rounded min and max. A level with no crossing points is omitted.

    Args:
        grid: Elevation grid (H, W) in feet
        interval_ft: Vertical spacing between contour levels in feet

    Returns:
        List of ContourLevel in ascending elevation order

    Raises:
        InvalidGridError: If the grid is malformed
        InvalidParameterError: If interval_ft is not a positive number

    Example:
        >>> levels = compute_contours([[0, 10], [10, 20]], interval_ft=5)
        >>> [c.elevation for c in levels]
        [5.0]
    """
    grid = as_elevation_grid(grid)
    interval_ft = require_positive("interval_ft", interval_ft)

    stats = compute_stats(grid)
    levels = contour_levels(stats.min, stats.max, interval_ft)

    contours = []
    if grid.shape[0] < 2 or grid.shape[1] < 2:
        return contours

    for level in levels:
        points = _edge_crossings(grid, level)
        if len(points) > 0:
            contours.append(ContourLevel(elevation=level, points=points))

    logger.debug(
        "Traced %d of %d contour levels at %.2f ft interval",
        len(contours), len(levels), interval_ft,
    )
    return contours
