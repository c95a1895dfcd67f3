"""
Request layer: schemas and the analysis service.

This module provides the dataclass schemas exchanged with front ends and
the `TerrainService` that dispatches requests to the analysis engine.
"""

from sitegrade.api.schemas import (
    # Project schemas
    CreateProjectRequest,
    ProjectSchema,
    # DEM schemas
    DEMSchema,
    DEMStatsSchema,
    # Analysis schemas
    AnalysisRequest,
    CutFillResponse,
    ContourSchema,
    ContourResponse,
    SlopeResponse,
    # Errors
    APIError,
)
from sitegrade.api.service import TerrainService

__all__ = [
    # Projects
    "CreateProjectRequest",
    "ProjectSchema",
    # DEMs
    "DEMSchema",
    "DEMStatsSchema",
    # Analyses
    "AnalysisRequest",
    "CutFillResponse",
    "ContourSchema",
    "ContourResponse",
    "SlopeResponse",
    # Errors
    "APIError",
    # Service
    "TerrainService",
]
