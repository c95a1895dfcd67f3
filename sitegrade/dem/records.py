"""
DEM record model shared by the store, the request layer and the viewer.

A record wraps an elevation grid with its stats and the geospatial
metadata (resolution, lat/lon bounds) that only the viewer uses.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid
import numpy as np

from sitegrade.core.grid import GridLike, as_elevation_grid
from sitegrade.core.statistics import GridStats, compute_stats

DEM_TYPES = ('existing', 'design')


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string, e.g. '2024-05-01T12:00:00.000Z'."""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


@dataclass
class GeoBounds:
    """
    Lat/lon bounding box of a DEM, in decimal degrees.

    Attributes:
        north: Latitude of the top edge (row 0)
        south: Latitude of the bottom edge
        east: Longitude of the right edge
        west: Longitude of the left edge (column 0)
    """
    north: float
    south: float
    east: float
    west: float

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "north": self.north,
            "south": self.south,
            "east": self.east,
            "west": self.west,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeoBounds":
        """Create from dictionary."""
        return cls(
            north=float(data["north"]),
            south=float(data["south"]),
            east=float(data["east"]),
            west=float(data["west"]),
        )


@dataclass
class DEMRecord:
    """
    A stored digital elevation model.

    Attributes:
        id: Unique DEM identifier
        project_id: Owning project
        name: Display name
        type: 'existing' ground or a 'design' surface
        created_at: ISO-8601 creation timestamp
        resolution_m: Ground size of one cell in meters
        width: Number of columns
        height: Number of rows
        bounds: Lat/lon box covered by the grid
        elevation_data: (height, width) elevations in feet
        stats: Statistics of elevation_data
    """
    id: str
    project_id: str
    name: str
    type: str
    created_at: str
    resolution_m: float
    width: int
    height: int
    bounds: GeoBounds
    elevation_data: np.ndarray = field(repr=False)
    stats: GridStats

    @classmethod
    def from_grid(
        cls,
        grid: GridLike,
        project_id: str,
        name: str = "Existing Terrain",
        type: str = "existing",
        resolution_m: float = 1.524,
        bounds: Optional[GeoBounds] = None,
        id: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> "DEMRecord":
        """
        Build a record from a grid, deriving width, height and stats from it.

        Raises:
            InvalidGridError: If the grid is malformed
            ValueError: If type is not 'existing' or 'design'
        """
        if type not in DEM_TYPES:
            raise ValueError(f"DEM type must be one of {DEM_TYPES}, got {type!r}")

        grid = as_elevation_grid(grid)
        height, width = grid.shape

        return cls(
            id=id or str(uuid.uuid4()),
            project_id=project_id,
            name=name,
            type=type,
            created_at=created_at or utc_timestamp(),
            resolution_m=resolution_m,
            width=width,
            height=height,
            bounds=bounds or GeoBounds(north=0.0, south=0.0, east=0.0, west=0.0),
            elevation_data=grid,
            stats=compute_stats(grid),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "type": self.type,
            "created_at": self.created_at,
            "resolution_m": self.resolution_m,
            "width": self.width,
            "height": self.height,
            "bounds": self.bounds.to_dict(),
            "elevation_data": np.asarray(self.elevation_data).tolist(),
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DEMRecord":
        """
        Create from dictionary.

        The grid is validated; stored width and height must agree with it.
        """
        grid = as_elevation_grid(data["elevation_data"])
        height, width = grid.shape
        if (data.get("width", width), data.get("height", height)) != (width, height):
            raise ValueError(
                f"DEM {data.get('id')} declares {data.get('width')}x{data.get('height')} "
                f"but its grid is {width}x{height}"
            )

        stats = data.get("stats")
        return cls(
            id=data["id"],
            project_id=data["project_id"],
            name=data.get("name", ""),
            type=data.get("type", "existing"),
            created_at=data.get("created_at", ""),
            resolution_m=float(data.get("resolution_m", 1.0)),
            width=width,
            height=height,
            bounds=GeoBounds.from_dict(data["bounds"]),
            elevation_data=grid,
            stats=GridStats.from_dict(stats) if stats else compute_stats(grid),
        )
