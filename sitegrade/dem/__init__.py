"""
DEM (Digital Elevation Model) generation and record handling.

This module provides tools for working with terrain data:
    - Generating the synthetic demo site terrain
    - The stored DEM record model (grid, stats, lat/lon bounds)
    - Grid <-> lon/lat coordinate mapping for the viewer
"""

from sitegrade.dem.synthetic import (
    synthesize_terrain,
    generate_synthetic_dem,
)

from sitegrade.dem.records import (
    DEMRecord,
    GeoBounds,
)

from sitegrade.dem.coordinates import (
    grid_to_lonlat,
    lonlat_to_grid,
)

__all__ = [
    # Synthetic generation
    "synthesize_terrain",
    "generate_synthetic_dem",
    # Records
    "DEMRecord",
    "GeoBounds",
    # Coordinates
    "grid_to_lonlat",
    "lonlat_to_grid",
]
