"""
Request and response schemas for the sitegrade request layer.

These schemas define the JSON contracts between the analysis service
and its front ends. Field names are snake_case; `to_dict` output is
JSON-serializable.
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field, asdict

from sitegrade.core.contours import ContourLevel
from sitegrade.core.cutfill import CutFillResult
from sitegrade.core.slope import SlopeField
from sitegrade.dem.records import DEMRecord
from sitegrade.storage.store import Project

ANALYSIS_TYPES = ("cutfill", "contours", "slope")


@dataclass
class CreateProjectRequest:
    """Request to create a project."""
    name: str = "Untitled Project"
    description: str = ""
    location: str = ""
    generate_demo: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "CreateProjectRequest":
        """Create from a request payload, treating empty strings as unset."""
        return cls(
            name=data.get("name") or "Untitled Project",
            description=data.get("description") or "",
            location=data.get("location") or "",
            generate_demo=data.get("generate_demo", True) is not False,
        )


@dataclass
class ProjectSchema:
    """Project as returned to clients."""
    id: str = ""
    name: str = ""
    description: str = ""
    location: str = ""
    created_at: str = ""
    updated_at: str = ""
    bounds: Optional[Dict[str, float]] = None
    dem_count: int = 0
    image_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DEMStatsSchema:
    """Elevation statistics in feet."""
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    stddev: float = 0.0


@dataclass
class DEMSchema:
    """DEM record as returned to clients, grid included."""
    id: str = ""
    project_id: str = ""
    name: str = ""
    type: str = "existing"
    created_at: str = ""
    resolution_m: float = 1.0
    width: int = 0
    height: int = 0
    bounds: Dict[str, float] = field(default_factory=dict)
    elevation_data: List[List[float]] = field(default_factory=list)
    stats: DEMStatsSchema = field(default_factory=DEMStatsSchema)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AnalysisRequest:
    """Request to run one analysis against a stored DEM."""
    project_id: str = ""
    dem_id: str = ""
    type: str = ""  # "cutfill", "contours", "slope"
    design_elevation: Optional[float] = None  # feet
    contour_interval: Optional[float] = None  # feet

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisRequest":
        """Create from a request payload."""
        return cls(
            project_id=data.get("project_id") or "",
            dem_id=data.get("dem_id") or "",
            type=data.get("type") or "",
            design_elevation=data.get("design_elevation"),
            contour_interval=data.get("contour_interval"),
        )


@dataclass
class CutFillResponse:
    """Cut/fill volumes in cubic yards plus the per-cell heatmap in feet."""
    cut_volume: int = 0
    fill_volume: int = 0
    net_volume: int = 0
    design_elevation: float = 0.0
    heatmap: List[List[float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ContourSchema:
    """Crossing points of one contour level."""
    elevation: float = 0.0
    points: List[List[float]] = field(default_factory=list)  # [[x, y], ...]


@dataclass
class ContourResponse:
    """All non-empty contour levels, ascending."""
    interval: float = 0.0
    contours: List[ContourSchema] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SlopeResponse:
    """Percent slope and aspect grids."""
    gradient: List[List[float]] = field(default_factory=list)
    aspect: List[List[int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class APIError:
    """API error response."""
    error: str = ""
    code: str = "unknown_error"
    status: int = 500
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> dict:
        return asdict(self)


# Helper functions for conversion

def project_to_schema(project: Project) -> ProjectSchema:
    """Convert internal Project to schema."""
    return ProjectSchema(**project.to_dict())


def dem_to_schema(dem: DEMRecord) -> DEMSchema:
    """Convert internal DEMRecord to schema."""
    data = dem.to_dict()
    data["stats"] = DEMStatsSchema(**data["stats"])
    return DEMSchema(**data)


def cut_fill_to_schema(result: CutFillResult, design_elevation: float) -> CutFillResponse:
    """Convert a cut/fill result to schema."""
    return CutFillResponse(
        cut_volume=result.cut_volume,
        fill_volume=result.fill_volume,
        net_volume=result.net_volume,
        design_elevation=design_elevation,
        heatmap=result.heatmap.tolist(),
    )


def contours_to_schema(contours: List[ContourLevel], interval: float) -> ContourResponse:
    """Convert a contour set to schema."""
    return ContourResponse(
        interval=interval,
        contours=[
            ContourSchema(elevation=c.elevation, points=c.points.tolist())
            for c in contours
        ],
    )


def slope_to_schema(field_: SlopeField) -> SlopeResponse:
    """Convert a slope field to schema."""
    return SlopeResponse(
        gradient=field_.gradient.tolist(),
        aspect=field_.aspect.tolist(),
    )
