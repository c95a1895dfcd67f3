"""
Mapping between fractional grid coordinates and a DEM's lat/lon box.

The mapping is a flat linear interpolation across the record's bounds;
no map projection is applied. Column 0 is the west edge and row 0 the
north edge. Grid coordinates follow the contour tracer's convention:
(x, y) = (column, row) at cell centres.
"""

from typing import Tuple, Union
import numpy as np

from sitegrade.dem.records import GeoBounds

Number = Union[float, np.ndarray]


def _check_shape(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Grid shape must be at least 1x1, got {width}x{height}")


def grid_to_lonlat(
    x: Number,
    y: Number,
    bounds: GeoBounds,
    width: int,
    height: int,
) -> Tuple[Number, Number]:
    """
    Convert grid coordinates (x, y) to (lon, lat).

    Args:
        x: Column coordinate(s), may be fractional
        y: Row coordinate(s), may be fractional
        bounds: Lat/lon box of the DEM
        width: Number of grid columns
        height: Number of grid rows

    Returns:
        lon: Longitude(s) in degrees
        lat: Latitude(s) in degrees

    Example:
        >>> b = GeoBounds(north=1.0, south=0.0, east=1.0, west=0.0)
        >>> grid_to_lonlat(0, 0, b, 10, 10)
        (0.05, 0.95)
    """
    _check_shape(width, height)
    lon_res = (bounds.east - bounds.west) / width
    lat_res = (bounds.north - bounds.south) / height

    lon = bounds.west + (x + 0.5) * lon_res
    lat = bounds.north - (y + 0.5) * lat_res

    return lon, lat


def lonlat_to_grid(
    lon: Number,
    lat: Number,
    bounds: GeoBounds,
    width: int,
    height: int,
    clamp: bool = False,
) -> Tuple[Number, Number]:
    """
    Convert (lon, lat) to fractional grid coordinates (x, y).

    Args:
        lon: Longitude(s) in degrees
        lat: Latitude(s) in degrees
        bounds: Lat/lon box of the DEM
        width: Number of grid columns
        height: Number of grid rows
        clamp: If True, clamp coordinates to the valid grid range

    Returns:
        x: Column coordinate(s)
        y: Row coordinate(s)
    """
    _check_shape(width, height)
    lon_res = (bounds.east - bounds.west) / width
    lat_res = (bounds.north - bounds.south) / height
    if lon_res == 0 or lat_res == 0:
        raise ValueError("Bounds must span a non-zero area")

    x = (lon - bounds.west) / lon_res - 0.5
    y = (bounds.north - lat) / lat_res - 0.5

    if clamp:
        x = np.clip(x, 0, width - 1)
        y = np.clip(y, 0, height - 1)

    return x, y
