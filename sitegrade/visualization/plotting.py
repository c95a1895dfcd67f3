"""
Static plotting functions for terrain analyses.

Each `plot_*` function draws onto the given axes (or a new figure) and
returns the axes. Grid coordinates are drawn with row 0 at the top, the
same orientation as the contour points.
"""

from typing import List, Optional, Union
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt
from matplotlib import colormaps
from matplotlib.colors import TwoSlopeNorm

from sitegrade.core.contours import ContourLevel, compute_contours
from sitegrade.core.cutfill import compute_cut_fill
from sitegrade.core.grid import GridLike, as_elevation_grid
from sitegrade.core.slope import SlopeField, compute_slope
from sitegrade.dem.coordinates import grid_to_lonlat
from sitegrade.dem.records import GeoBounds


def plot_elevation(
    grid: GridLike,
    ax: Optional[plt.Axes] = None,
    cmap: str = 'terrain',
    title: Optional[str] = None,
    show_colorbar: bool = True,
    bounds: Optional[GeoBounds] = None,
    num_ticks: int = 5,
) -> plt.Axes:
    """
    Plot an elevation grid as a shaded image.

    Args:
        grid: 2D array of elevations in feet
        ax: Matplotlib axes (creates new figure if None)
        cmap: Colormap for terrain
        title: Optional title
        show_colorbar: Whether to show colorbar
        bounds: Lat/lon box of the DEM. When it spans a non-zero area the
            axes are labelled in longitude/latitude instead of cells.
        num_ticks: Ticks per axis when labelling with bounds

    Returns:
        Matplotlib axes
    """
    grid = as_elevation_grid(grid)
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    im = ax.imshow(grid, cmap=cmap, origin='upper', aspect='equal')

    if title:
        ax.set_title(title, fontweight='bold')

    if bounds is not None and bounds.east != bounds.west and bounds.north != bounds.south:
        height, width = grid.shape
        xs = np.linspace(0, width - 1, num_ticks)
        ys = np.linspace(0, height - 1, num_ticks)
        lons, _ = grid_to_lonlat(xs, 0.0, bounds, width, height)
        _, lats = grid_to_lonlat(0.0, ys, bounds, width, height)

        ax.set_xticks(xs)
        ax.set_xticklabels([f'{lon:.4f}' for lon in lons], rotation=30)
        ax.set_yticks(ys)
        ax.set_yticklabels([f'{lat:.4f}' for lat in lats])
        ax.set_xlabel('Longitude')
        ax.set_ylabel('Latitude')
    else:
        ax.set_xlabel('X (cells)')
        ax.set_ylabel('Y (cells)')

    if show_colorbar:
        plt.colorbar(im, ax=ax, label='Elevation (ft)', shrink=0.7)

    return ax


def plot_contours(
    contours: List[ContourLevel],
    ax: Optional[plt.Axes] = None,
    grid: Optional[GridLike] = None,
    cmap: str = 'viridis',
    point_size: float = 1.0,
    title: Optional[str] = None,
) -> plt.Axes:
    """
    Plot contour crossing points, one colour per elevation.

    Args:
        contours: Contour levels from `compute_contours`
        ax: Matplotlib axes (creates new figure if None)
        grid: Optional elevation grid drawn faintly underneath
        cmap: Colormap mapping elevation to point colour
        point_size: Marker size
        title: Optional title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    if grid is not None:
        ax.imshow(as_elevation_grid(grid), cmap='gray', origin='upper', aspect='equal', alpha=0.3)

    if contours:
        elevations = [c.elevation for c in contours]
        colormap = colormaps[cmap]
        lo, hi = min(elevations), max(elevations)
        span = hi - lo if hi > lo else 1.0

        for level in contours:
            ax.scatter(
                level.points[:, 0], level.points[:, 1],
                s=point_size,
                color=colormap((level.elevation - lo) / span),
                label=f'{level.elevation:g} ft',
            )

    if grid is None:
        ax.invert_yaxis()
        ax.set_aspect('equal')

    if title:
        ax.set_title(title, fontweight='bold')

    ax.set_xlabel('X (cells)')
    ax.set_ylabel('Y (cells)')

    return ax


def plot_cut_fill(
    heatmap: np.ndarray,
    ax: Optional[plt.Axes] = None,
    cmap: str = 'RdBu_r',
    title: Optional[str] = None,
    show_colorbar: bool = True,
) -> plt.Axes:
    """
    Plot a cut/fill heatmap with a diverging colormap centred on grade.

    Cut (positive) is drawn red and fill (negative) blue with the default map.

    Args:
        heatmap: 2D array of existing minus design elevation in feet
        ax: Matplotlib axes (creates new figure if None)
        cmap: Diverging colormap
        title: Optional title
        show_colorbar: Whether to show colorbar

    Returns:
        Matplotlib axes
    """
    heatmap = np.asarray(heatmap, dtype=np.float64)
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    extent = max(float(np.abs(heatmap).max()), 1e-6)
    norm = TwoSlopeNorm(vmin=-extent, vcenter=0.0, vmax=extent)

    im = ax.imshow(heatmap, cmap=cmap, norm=norm, origin='upper', aspect='equal')

    if title:
        ax.set_title(title, fontweight='bold')

    ax.set_xlabel('X (cells)')
    ax.set_ylabel('Y (cells)')

    if show_colorbar:
        plt.colorbar(im, ax=ax, label='Cut (+) / Fill (-) (ft)', shrink=0.7)

    return ax


def plot_slope(
    slope: SlopeField,
    ax: Optional[plt.Axes] = None,
    cmap: str = 'magma_r',
    title: Optional[str] = None,
    show_colorbar: bool = True,
) -> plt.Axes:
    """
    Plot percent slope.

    Args:
        slope: SlopeField from `compute_slope`
        ax: Matplotlib axes (creates new figure if None)
        cmap: Colormap for slope
        title: Optional title
        show_colorbar: Whether to show colorbar

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    im = ax.imshow(slope.gradient, cmap=cmap, origin='upper', aspect='equal', vmin=0)

    if title:
        ax.set_title(title, fontweight='bold')

    ax.set_xlabel('X (cells)')
    ax.set_ylabel('Y (cells)')

    if show_colorbar:
        plt.colorbar(im, ax=ax, label='Slope (%)', shrink=0.7)

    return ax


def save_analysis_figure(
    grid: GridLike,
    output_path: Union[str, Path],
    design_elevation_ft: float = 845.0,
    contour_interval_ft: float = 5.0,
    cell_size_ft: float = 5.0,
    dpi: int = 150,
    bounds: Optional[GeoBounds] = None,
) -> Path:
    """
    Run all three analyses and save a four-panel summary figure.

    Panels: elevation, contours, cut/fill heatmap, slope.

    Args:
        grid: Elevation grid in feet
        output_path: Destination image file (format from extension)
        design_elevation_ft: Pad elevation for the cut/fill panel
        contour_interval_ft: Contour spacing
        cell_size_ft: Cell size for cut/fill and slope
        dpi: Output resolution
        bounds: Optional lat/lon box used to label the elevation panel

    Returns:
        Path of the written file
    """
    grid = as_elevation_grid(grid)
    contours = compute_contours(grid, contour_interval_ft)
    cut_fill = compute_cut_fill(grid, design_elevation_ft, cell_size_ft)
    slope = compute_slope(grid, cell_size_ft)

    fig, axes = plt.subplots(2, 2, figsize=(14, 12))

    plot_elevation(grid, ax=axes[0, 0], title='Elevation', bounds=bounds)
    plot_contours(contours, ax=axes[0, 1], grid=grid,
                  title=f'Contours ({contour_interval_ft:g} ft)')
    plot_cut_fill(
        cut_fill.heatmap, ax=axes[1, 0],
        title=(f'Cut/Fill @ {design_elevation_ft:g} ft: '
               f'cut {cut_fill.cut_volume:,} / fill {cut_fill.fill_volume:,} yd³'),
    )
    plot_slope(slope, ax=axes[1, 1], title='Slope')

    plt.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return output_path
