"""
Project and DEM record storage.

`ProjectStore` is the repository interface the request layer depends on.
`JsonFileStore` keeps one `projects.json` plus one `dems-<project_id>.json`
per project and rewrites whole files on every save; `InMemoryStore` keeps
everything in dictionaries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging

from sitegrade.core.errors import RecordNotFoundError
from sitegrade.dem.records import DEMRecord, GeoBounds

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """
    A site project.

    Attributes:
        id: Unique project identifier
        name: Display name
        description: Free-text description
        location: Free-text site location
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last-modified timestamp
        bounds: Optional lat/lon box of the site
        dem_count: Number of DEMs attached
        image_count: Number of survey images attached
    """
    id: str
    name: str = "Untitled Project"
    description: str = ""
    location: str = ""
    created_at: str = ""
    updated_at: str = ""
    bounds: Optional[GeoBounds] = None
    dem_count: int = 0
    image_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "bounds": self.bounds.to_dict() if self.bounds else None,
            "dem_count": self.dem_count,
            "image_count": self.image_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled Project"),
            description=data.get("description", ""),
            location=data.get("location", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
            bounds=GeoBounds.from_dict(data["bounds"]) if data.get("bounds") else None,
            dem_count=int(data.get("dem_count", 0)),
            image_count=int(data.get("image_count", 0)),
        )


class ProjectStore(ABC):
    """Repository of projects and their DEMs, keyed by id."""

    @abstractmethod
    def list_projects(self) -> List[Project]:
        """All projects, in insertion order."""

    @abstractmethod
    def save_projects(self, projects: List[Project]) -> None:
        """Replace the full project list."""

    @abstractmethod
    def list_dems(self, project_id: str) -> List[DEMRecord]:
        """DEMs of a project; empty if the project has none."""

    @abstractmethod
    def save_dems(self, project_id: str, dems: List[DEMRecord]) -> None:
        """Replace the full DEM list of a project."""

    @abstractmethod
    def delete_dems(self, project_id: str) -> None:
        """Drop all DEMs of a project. No-op if there are none."""

    def get_project(self, project_id: str) -> Project:
        """
        Look up a project by id.

        Raises:
            RecordNotFoundError: If no project has this id
        """
        for project in self.list_projects():
            if project.id == project_id:
                return project
        raise RecordNotFoundError("Project", project_id)

    def get_dem(self, project_id: str, dem_id: str) -> DEMRecord:
        """
        Look up a DEM by project and DEM id.

        Raises:
            RecordNotFoundError: If the project has no DEM with this id
        """
        for dem in self.list_dems(project_id):
            if dem.id == dem_id:
                return dem
        raise RecordNotFoundError("DEM", dem_id)


class InMemoryStore(ProjectStore):
    """Dictionary-backed store. Records are shared, not copied."""

    def __init__(self):
        self._projects: List[Project] = []
        self._dems: Dict[str, List[DEMRecord]] = {}

    def list_projects(self) -> List[Project]:
        return list(self._projects)

    def save_projects(self, projects: List[Project]) -> None:
        self._projects = list(projects)

    def list_dems(self, project_id: str) -> List[DEMRecord]:
        return list(self._dems.get(project_id, []))

    def save_dems(self, project_id: str, dems: List[DEMRecord]) -> None:
        self._dems[project_id] = list(dems)

    def delete_dems(self, project_id: str) -> None:
        self._dems.pop(project_id, None)


class JsonFileStore(ProjectStore):
    """
    JSON file store rooted at `data_dir`.

    The directory is created on first write. A missing file reads as an
    empty list; a corrupt one raises.
    """

    PROJECTS_FILE = "projects.json"

    def __init__(self, data_dir: Union[str, Path] = "data"):
        self.data_dir = Path(data_dir)

    def _dems_path(self, project_id: str) -> Path:
        return self.data_dir / f"dems-{project_id}.json"

    def _read(self, path: Path) -> list:
        if not path.exists():
            return []
        with open(path, 'r') as f:
            return json.load(f)

    def _write(self, path: Path, records: list) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(records, f, indent=2)
        logger.debug("Wrote %d record(s) to %s", len(records), path)

    def list_projects(self) -> List[Project]:
        return [Project.from_dict(d) for d in self._read(self.data_dir / self.PROJECTS_FILE)]

    def save_projects(self, projects: List[Project]) -> None:
        self._write(self.data_dir / self.PROJECTS_FILE, [p.to_dict() for p in projects])

    def list_dems(self, project_id: str) -> List[DEMRecord]:
        return [DEMRecord.from_dict(d) for d in self._read(self._dems_path(project_id))]

    def save_dems(self, project_id: str, dems: List[DEMRecord]) -> None:
        self._write(self._dems_path(project_id), [d.to_dict() for d in dems])

    def delete_dems(self, project_id: str) -> None:
        path = self._dems_path(project_id)
        if path.exists():
            path.unlink()
            logger.info("Deleted DEM file %s", path)
