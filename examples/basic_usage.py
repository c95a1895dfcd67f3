#!/usr/bin/env python3
"""
Basic usage example for the sitegrade terrain analysis engine.

This script demonstrates the core functionality of the sitegrade package:
1. Generating synthetic terrain
2. Computing grid statistics
3. Running cut/fill, contour and slope analyses
4. Visualizing results
"""

import sys
import os

# Add sitegrade package to path (for development)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from pathlib import Path

from sitegrade import (
    synthesize_terrain,
    compute_stats,
    compute_contours,
    compute_cut_fill,
    compute_slope,
)
from sitegrade.visualization import save_analysis_figure


def example_engine():
    """Example: Run every analysis on the demo terrain."""
    print("=" * 60)
    print("TERRAIN ANALYSIS EXAMPLE")
    print("=" * 60)

    print("\n1. Generating synthetic terrain...")
    dem = synthesize_terrain(200, 200)
    stats = compute_stats(dem)
    print(f"   DEM shape: {dem.shape}")
    print(f"   Elevation: min {stats.min} / mean {stats.mean} / max {stats.max} ft")
    print(f"   Std dev: {stats.stddev} ft")

    print("\n2. Cut/fill against candidate pad elevations...")
    for design in (840.0, 845.0, stats.mean):
        result = compute_cut_fill(dem, design_elevation_ft=design, cell_size_ft=5.0)
        print(f"   {design:7.2f} ft: cut {result.cut_volume:>8,} yd³  "
              f"fill {result.fill_volume:>8,} yd³  net {result.net_volume:>+9,} yd³")

    print("\n3. Contours at 5 ft...")
    contours = compute_contours(dem, interval_ft=5.0)
    for level in contours:
        print(f"   {level.elevation:g} ft: {level.num_points} points")

    print("\n4. Slope/aspect...")
    slope = compute_slope(dem, cell_size_ft=5.0)
    print(f"   Mean slope: {slope.gradient.mean():.1f}%")
    print(f"   Max slope: {slope.gradient.max():.1f}%")
    steep = (slope.gradient > 15).mean()
    print(f"   Cells steeper than 15%: {steep:.1%}")

    output_dir = Path(__file__).parent.parent / 'outputs'
    path = save_analysis_figure(dem, output_dir / 'basic_usage.png')
    print(f"\n   Figure saved to {path}")


if __name__ == '__main__':
    example_engine()
