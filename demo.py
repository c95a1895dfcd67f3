#!/usr/bin/env python3
"""
Demo script for the sitegrade request layer.

This script demonstrates:
1. Creating a project, which seeds it with the synthetic site DEM
2. Running cut/fill, contour and slope analyses through TerrainService
3. Rendering the four-panel summary figure

Records are kept in outputs/demo_data and the figure is saved to
outputs/demo.png
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pathlib import Path

import numpy as np

from sitegrade.api import AnalysisRequest, CreateProjectRequest, TerrainService
from sitegrade.storage import JsonFileStore
from sitegrade.visualization import save_analysis_figure


def main():
    output_dir = Path(__file__).parent / 'outputs'
    output_dir.mkdir(exist_ok=True)

    service = TerrainService(JsonFileStore(output_dir / 'demo_data'))

    print("Creating demo project...")
    project = service.create_project(CreateProjectRequest(
        name="Hill Country Pad",
        description="Building pad grading study",
        location="Austin, TX",
    ))
    dem = service.list_dems(project.id)[0]
    print(f"  Project: {project.name} ({project.id})")
    print(f"  DEM: {dem.name}, {dem.width}x{dem.height} @ {dem.resolution_m} m")
    print(f"  Elevation: {dem.stats.min} - {dem.stats.max} ft (mean {dem.stats.mean})")

    print("\nCut/fill at 845 ft...")
    cut_fill = service.analyze(AnalysisRequest(project.id, dem.id, "cutfill"))
    print(f"  Cut:  {cut_fill.cut_volume:,} yd³")
    print(f"  Fill: {cut_fill.fill_volume:,} yd³")
    print(f"  Net:  {cut_fill.net_volume:+,} yd³")

    print("\nContours at 5 ft...")
    contours = service.analyze(AnalysisRequest(project.id, dem.id, "contours"))
    for level in contours.contours:
        print(f"  {level.elevation:g} ft: {len(level.points)} points")

    print("\nSlope...")
    slope = service.analyze(AnalysisRequest(project.id, dem.id, "slope"))
    gradient = np.asarray(slope.gradient)
    print(f"  Mean {gradient.mean():.1f}%, max {gradient.max():.1f}%")

    path = save_analysis_figure(dem.elevation_data, output_dir / 'demo.png')
    print(f"\nOutputs saved to: {path}")
    print("\nDone!")


if __name__ == '__main__':
    main()
