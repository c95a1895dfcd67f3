"""
Exception types raised by the terrain analysis engine and its collaborators.

Validation failures subclass ValueError so callers that only care about
"bad input" can keep catching ValueError.
"""


class TerrainError(Exception):
    """Base class for all sitegrade errors."""


class InvalidGridError(TerrainError, ValueError):
    """Elevation grid is empty, ragged, non-numeric or contains non-finite cells."""


class InvalidParameterError(TerrainError, ValueError):
    """A scalar analysis parameter is out of range."""


class RecordNotFoundError(TerrainError, LookupError):
    """A project or DEM record does not exist in the store."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")
