"""
Visualization tools for terrain analyses.

This module provides static matplotlib plots of elevation, contour
points, cut/fill heatmaps and slope, plus a four-panel summary figure.
"""

from sitegrade.visualization.plotting import (
    plot_elevation,
    plot_contours,
    plot_cut_fill,
    plot_slope,
    save_analysis_figure,
)

__all__ = [
    "plot_elevation",
    "plot_contours",
    "plot_cut_fill",
    "plot_slope",
    "save_analysis_figure",
]
