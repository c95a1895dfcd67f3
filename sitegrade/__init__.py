"""
sitegrade - terrain analysis for site grading projects.

This package creates projects seeded with a synthetic elevation grid
(DEM) and runs earthwork analyses against it.

Main modules:
    - sitegrade.core: Grid statistics, contours, cut/fill and slope/aspect
    - sitegrade.dem: Synthetic terrain, DEM records and coordinates
    - sitegrade.storage: Project/DEM record stores
    - sitegrade.api: Request schemas and the TerrainService dispatcher
    - sitegrade.visualization: Plotting utilities
    - sitegrade.config: Configuration management

Quick start:
    >>> from sitegrade import synthesize_terrain, compute_cut_fill
    >>>
    >>> dem = synthesize_terrain(200, 200)
    >>> result = compute_cut_fill(dem, design_elevation_ft=845.0, cell_size_ft=5.0)
    >>> print(f"Cut {result.cut_volume} yd3, fill {result.fill_volume} yd3")
"""

__version__ = "0.1.0"

# Core exports
from sitegrade.core.errors import (
    TerrainError,
    InvalidGridError,
    InvalidParameterError,
    RecordNotFoundError,
)
from sitegrade.core.statistics import GridStats, compute_stats
from sitegrade.core.contours import ContourLevel, compute_contours
from sitegrade.core.cutfill import CutFillResult, compute_cut_fill
from sitegrade.core.slope import SlopeField, compute_slope

# DEM exports
from sitegrade.dem.synthetic import synthesize_terrain, generate_synthetic_dem
from sitegrade.dem.records import DEMRecord, GeoBounds

# Service exports
from sitegrade.storage.store import InMemoryStore, JsonFileStore
from sitegrade.api.service import TerrainService

# Config exports
from sitegrade.config.settings import SitegradeConfig, load_config

__all__ = [
    # Version
    "__version__",
    # Errors
    "TerrainError",
    "InvalidGridError",
    "InvalidParameterError",
    "RecordNotFoundError",
    # Engine
    "GridStats",
    "compute_stats",
    "ContourLevel",
    "compute_contours",
    "CutFillResult",
    "compute_cut_fill",
    "SlopeField",
    "compute_slope",
    # DEM
    "synthesize_terrain",
    "generate_synthetic_dem",
    "DEMRecord",
    "GeoBounds",
    # Service
    "InMemoryStore",
    "JsonFileStore",
    "TerrainService",
    # Config
    "SitegradeConfig",
    "load_config",
]
