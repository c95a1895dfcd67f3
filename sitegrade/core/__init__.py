"""
Terrain analysis engine.

Pure functions over in-memory elevation grids:
    - Grid validation and statistics
    - Contour point tracing
    - Cut/fill earthwork volumes
    - Slope/aspect from finite differences
"""

from sitegrade.core.errors import (
    TerrainError,
    InvalidGridError,
    InvalidParameterError,
    RecordNotFoundError,
)
from sitegrade.core.grid import as_elevation_grid
from sitegrade.core.statistics import GridStats, compute_stats
from sitegrade.core.contours import ContourLevel, compute_contours, contour_levels
from sitegrade.core.cutfill import CutFillResult, compute_cut_fill
from sitegrade.core.slope import SlopeField, compute_slope

__all__ = [
    # Errors
    "TerrainError",
    "InvalidGridError",
    "InvalidParameterError",
    "RecordNotFoundError",
    # Grid
    "as_elevation_grid",
    "GridStats",
    "compute_stats",
    # Analyses
    "ContourLevel",
    "compute_contours",
    "contour_levels",
    "CutFillResult",
    "compute_cut_fill",
    "SlopeField",
    "compute_slope",
]
