"""
Request layer: project management and analysis dispatch.

`TerrainService` wires a `ProjectStore` to the analysis engine. Its typed
methods raise sitegrade errors; `handle` wraps them for front ends that
speak plain dicts and translates errors to `APIError` payloads with an
HTTP-style status code.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging
import uuid

from sitegrade.api.schemas import (
    ANALYSIS_TYPES,
    AnalysisRequest,
    APIError,
    ContourResponse,
    CreateProjectRequest,
    CutFillResponse,
    DEMSchema,
    ProjectSchema,
    SlopeResponse,
    contours_to_schema,
    cut_fill_to_schema,
    dem_to_schema,
    project_to_schema,
    slope_to_schema,
)
from sitegrade.config.settings import SitegradeConfig
from sitegrade.core.contours import compute_contours
from sitegrade.core.cutfill import compute_cut_fill
from sitegrade.core.errors import InvalidParameterError, RecordNotFoundError, TerrainError
from sitegrade.core.slope import compute_slope
from sitegrade.dem.records import DEMRecord, GeoBounds, utc_timestamp
from sitegrade.dem.synthetic import synthesize_terrain
from sitegrade.storage.store import Project, ProjectStore

logger = logging.getLogger(__name__)

AnalysisResponse = Union[CutFillResponse, ContourResponse, SlopeResponse]


class TerrainService:
    """
    Project and analysis operations over an injected record store.

    Args:
        store: Repository holding projects and DEMs
        config: Defaults for analyses and demo terrain

    Example:
        >>> service = TerrainService(InMemoryStore())
        >>> project = service.create_project(CreateProjectRequest(name="Pad A"))
        >>> dem = service.list_dems(project.id)[0]
        >>> result = service.analyze(AnalysisRequest(project.id, dem.id, "cutfill"))
    """

    def __init__(self, store: ProjectStore, config: Optional[SitegradeConfig] = None):
        self.store = store
        self.config = config or SitegradeConfig()

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create_project(self, request: CreateProjectRequest) -> ProjectSchema:
        """Create a project, seeding it with the demo DEM unless disabled."""
        now = utc_timestamp()
        project = Project(
            id=str(uuid.uuid4()),
            name=request.name,
            description=request.description,
            location=request.location,
            created_at=now,
            updated_at=now,
            dem_count=0,
            image_count=0,
        )

        if request.generate_demo:
            dem = self._build_demo_dem(project.id, now)
            self.store.save_dems(project.id, [dem])
            project.dem_count = 1
            project.bounds = dem.bounds

        projects = self.store.list_projects()
        projects.append(project)
        self.store.save_projects(projects)

        logger.info("Created project %s (%s), %d DEM(s)", project.id, project.name, project.dem_count)
        return project_to_schema(project)

    def _build_demo_dem(self, project_id: str, created_at: str) -> DEMRecord:
        demo = self.config.demo_terrain
        terrain = synthesize_terrain(demo.width, demo.height)
        return DEMRecord.from_grid(
            terrain,
            project_id=project_id,
            name=demo.name,
            type="existing",
            resolution_m=demo.resolution_m,
            bounds=GeoBounds(
                north=demo.north,
                south=demo.south,
                east=demo.east,
                west=demo.west,
            ),
            created_at=created_at,
        )

    def list_projects(self) -> List[ProjectSchema]:
        return [project_to_schema(p) for p in self.store.list_projects()]

    def delete_project(self, project_id: str) -> None:
        """
        Remove a project and its DEMs. Unknown ids are ignored.

        Raises:
            InvalidParameterError: If project_id is empty
        """
        if not project_id:
            raise InvalidParameterError("Missing id")

        projects = self.store.list_projects()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) == len(projects):
            logger.warning("Delete requested for unknown project %s", project_id)

        self.store.save_projects(remaining)
        self.store.delete_dems(project_id)

    # ------------------------------------------------------------------
    # DEMs and analyses
    # ------------------------------------------------------------------

    def list_dems(self, project_id: str) -> List[DEMSchema]:
        """
        Raises:
            InvalidParameterError: If project_id is empty
        """
        if not project_id:
            raise InvalidParameterError("Missing project_id")
        return [dem_to_schema(d) for d in self.store.list_dems(project_id)]

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        """
        Run the requested analysis against a stored DEM.

        Raises:
            RecordNotFoundError: If the DEM does not exist
            InvalidParameterError: If the analysis type or a parameter is invalid
            InvalidGridError: If the stored grid is malformed
        """
        dem = self.store.get_dem(request.project_id, request.dem_id)
        defaults = self.config.analysis

        if request.type == "cutfill":
            design = request.design_elevation
            if design is None:
                design = defaults.design_elevation_ft
            result = compute_cut_fill(dem.elevation_data, design, defaults.cell_size_ft)
            logger.info(
                "Cut/fill on DEM %s at %s ft: cut=%d fill=%d net=%d yd3",
                dem.id, design, result.cut_volume, result.fill_volume, result.net_volume,
            )
            return cut_fill_to_schema(result, float(design))

        if request.type == "contours":
            interval = request.contour_interval
            if interval is None:
                interval = defaults.contour_interval_ft
            contours = compute_contours(dem.elevation_data, interval)
            logger.info("Contours on DEM %s at %s ft: %d level(s)", dem.id, interval, len(contours))
            return contours_to_schema(contours, float(interval))

        if request.type == "slope":
            field_ = compute_slope(dem.elevation_data, defaults.cell_size_ft)
            logger.info("Slope/aspect on DEM %s", dem.id)
            return slope_to_schema(field_)

        raise InvalidParameterError(
            f"Unknown analysis type: {request.type!r}. Choose from: {', '.join(ANALYSIS_TYPES)}"
        )

    # ------------------------------------------------------------------
    # Dict-level dispatch
    # ------------------------------------------------------------------

    def handle(self, action: str, payload: Optional[Dict[str, Any]] = None) -> Tuple[int, Any]:
        """
        Dispatch a plain-dict request and return (status, body).

        Actions: 'create_project', 'list_projects', 'delete_project',
        'list_dems', 'analyze'. Bad input maps to 400, missing records to
        404. Any other exception propagates.
        """
        payload = payload or {}
        handlers: Dict[str, Callable[[], Tuple[int, Any]]] = {
            "create_project": lambda: (
                201, self.create_project(CreateProjectRequest.from_dict(payload)).to_dict()
            ),
            "list_projects": lambda: (
                200, [p.to_dict() for p in self.list_projects()]
            ),
            "delete_project": lambda: self._handle_delete(payload),
            "list_dems": lambda: (
                200, [d.to_dict() for d in self.list_dems(payload.get("project_id") or "")]
            ),
            "analyze": lambda: (
                200, self.analyze(AnalysisRequest.from_dict(payload)).to_dict()
            ),
        }

        handler = handlers.get(action)
        if handler is None:
            error = APIError(error=f"Unknown action: {action}", code="unknown_action", status=400)
            return error.status, error.to_dict()

        try:
            return handler()
        except RecordNotFoundError as e:
            error = APIError(
                error=f"{e.kind} not found",
                code="not_found",
                status=404,
                details={"id": e.record_id},
            )
        except TerrainError as e:
            error = APIError(error=str(e), code="bad_request", status=400)

        logger.warning("%s failed: %s", action, error.error)
        return error.status, error.to_dict()

    def _handle_delete(self, payload: Dict[str, Any]) -> Tuple[int, Any]:
        self.delete_project(payload.get("id") or "")
        return 200, {"ok": True}
