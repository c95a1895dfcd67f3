"""
Project and DEM record storage.
"""

from sitegrade.storage.store import (
    Project,
    ProjectStore,
    InMemoryStore,
    JsonFileStore,
)

__all__ = [
    "Project",
    "ProjectStore",
    "InMemoryStore",
    "JsonFileStore",
]
