"""
Synthetic DEM generation for demo projects and testing.

The site terrain imitates rolling hill country between roughly 820 and
870 ft: a hill, a ridge, a meandering drainage channel, a pond and a
partially graded building pad. It is a pure function of cell position,
so the same (width, height) always gives the same grid.
"""

import numpy as np

from sitegrade.core.errors import InvalidParameterError
from sitegrade.core.grid import round_half_up

BASE_ELEVATION_FT = 845.0

# Building pad region, in normalized coordinates
PAD_CENTER = (0.4, 0.65)
PAD_RADIUS = 0.12
PAD_ELEVATION_FT = 842.0


def _check_dimensions(width: int, height: int):
    if int(width) != width or int(height) != height or width < 1 or height < 1:
        raise InvalidParameterError(
            f"DEM dimensions must be positive integers, got {width}x{height}"
        )
    return int(width), int(height)


def synthesize_terrain(width: int = 200, height: int = 200) -> np.ndarray:
    """
    Generate the demo site terrain.

    Args:
        width: Number of columns.
        height: Number of rows.

    Returns:
        dem: read-only float64 array (height, width) of elevations in feet,
            rounded to 2 decimals.

    Example:
        >>> dem = synthesize_terrain(200, 200)
        >>> print(f"Elevation range: [{dem.min():.1f}, {dem.max():.1f}] ft")
    """
    width, height = _check_dimensions(width, height)

    y, x = np.mgrid[0:height, 0:width].astype(np.float64)
    nx = x / width
    ny = y / height

    dem = np.full((height, width), BASE_ELEVATION_FT)

    # Hill in the NW quadrant
    dem += 15 * np.exp(-((nx - 0.3)**2 + (ny - 0.3)**2) / 0.04)

    # Ridge running NE-SW
    ridge_dist = np.abs((nx - ny) * 0.7 + 0.1)
    dem += 10 * np.exp(-ridge_dist**2 / 0.01)

    # Rolling texture
    dem += 5 * np.sin(nx * np.pi * 3) * np.cos(ny * np.pi * 2.5)
    dem += 3 * np.sin(nx * np.pi * 7 + 1.2) * np.cos(ny * np.pi * 5.3 + 0.8)

    # Drainage channel, roughly N-S with some meandering
    channel_x = 0.6 + 0.08 * np.sin(ny * np.pi * 3)
    dem -= 12 * np.exp(-(nx - channel_x)**2 / 0.002)

    # Pond
    dem -= 6 * np.exp(-((nx - 0.75)**2 + (ny - 0.7)**2) / 0.005)

    # Building pad: blend halfway toward a gently N-S sloped surface,
    # strongest at the pad centre
    pad_dist = np.sqrt((nx - PAD_CENTER[0])**2 + (ny - PAD_CENTER[1])**2)
    blend = np.where(pad_dist < PAD_RADIUS, 1 - pad_dist / PAD_RADIUS, 0.0)
    pad_elev = PAD_ELEVATION_FT + (ny - PAD_CENTER[1]) * 20
    dem = dem * (1 - blend * 0.5) + pad_elev * blend * 0.5

    # Micro noise
    dem += 0.5 * (np.sin(x * 13.7 + y * 7.3) + np.cos(x * 9.1 - y * 11.9))

    dem = round_half_up(dem, 2)
    dem.setflags(write=False)
    return dem


def generate_synthetic_dem(
    width: int = 200,
    height: int = 200,
    mode: str = 'site',
    elevation_ft: float = BASE_ELEVATION_FT,
    slope_ft_per_cell: float = 1.0,
) -> np.ndarray:
    """
    Generate a synthetic DEM.

    Args:
        width: Number of columns.
        height: Number of rows.
        mode: Type of terrain:
            - 'site': Demo site terrain from `synthesize_terrain` (default)
            - 'flat': Constant `elevation_ft` everywhere
            - 'ramp': Plane rising `slope_ft_per_cell` per column from
              `elevation_ft` at x=0
        elevation_ft: Base elevation for 'flat' and 'ramp'.
        slope_ft_per_cell: Rise per column for 'ramp'.

    Returns:
        dem: read-only float64 array (height, width) in feet.
    """
    width, height = _check_dimensions(width, height)

    if mode == 'site':
        return synthesize_terrain(width, height)

    if mode == 'flat':
        dem = np.full((height, width), float(elevation_ft))
    elif mode == 'ramp':
        x = np.arange(width, dtype=np.float64)
        dem = np.tile(elevation_ft + slope_ft_per_cell * x, (height, 1))
    else:
        raise InvalidParameterError(
            f"Unknown DEM mode: {mode}. Choose from: 'site', 'flat', 'ramp'"
        )

    dem.setflags(write=False)
    return dem
