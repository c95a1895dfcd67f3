"""
Configuration settings for sitegrade.

This module provides typed configuration classes for analysis defaults,
demo terrain generation and storage, loadable from YAML or JSON files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import json
import math

import yaml

from sitegrade.core.errors import InvalidParameterError


@dataclass
class AnalysisConfig:
    """
    Defaults applied when an analysis request leaves a parameter unset.

    Attributes:
        cell_size_ft: Grid cell side length in feet
        contour_interval_ft: Vertical spacing between contours in feet
        design_elevation_ft: Design pad elevation for cut/fill in feet
    """
    cell_size_ft: float = 5.0
    contour_interval_ft: float = 5.0
    design_elevation_ft: float = 845.0


@dataclass
class DemoTerrainConfig:
    """
    Synthetic DEM attached to newly created projects.

    Attributes:
        width: Grid columns
        height: Grid rows
        resolution_m: Cell size in meters (5 ft)
        north, south, east, west: Lat/lon box of the demo site
        name: DEM display name
    """
    width: int = 200
    height: int = 200
    resolution_m: float = 1.524
    north: float = 30.2672
    south: float = 30.2642
    east: float = -97.7391
    west: float = -97.7421
    name: str = "Existing Terrain"


@dataclass
class StorageConfig:
    """
    Record store settings.

    Attributes:
        data_dir: Directory holding projects.json and per-project DEM files
    """
    data_dir: str = "data"


@dataclass
class SitegradeConfig:
    """
    Main sitegrade configuration.

    Attributes:
        analysis: Analysis parameter defaults
        demo_terrain: Demo DEM generation settings
        storage: Record store settings
        log_level: Logging level name for the CLI
    """
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    demo_terrain: DemoTerrainConfig = field(default_factory=DemoTerrainConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"

    def validate(self) -> None:
        """
        Check that numeric settings are usable.

        Raises:
            InvalidParameterError: If a setting is out of range
        """
        for name in ("cell_size_ft", "contour_interval_ft"):
            value = getattr(self.analysis, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(f"analysis.{name} must be positive, got {value}")

        if not math.isfinite(self.analysis.design_elevation_ft):
            raise InvalidParameterError(
                f"analysis.design_elevation_ft must be finite, got {self.analysis.design_elevation_ft}"
            )

        if self.demo_terrain.width < 1 or self.demo_terrain.height < 1:
            raise InvalidParameterError(
                f"demo_terrain size must be at least 1x1, "
                f"got {self.demo_terrain.width}x{self.demo_terrain.height}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        def convert(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(v) for v in obj]
            else:
                return obj
        return convert(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SitegradeConfig":
        """Create from dictionary."""
        data = data or {}
        config = cls(
            analysis=AnalysisConfig(**data.get('analysis', {})),
            demo_terrain=DemoTerrainConfig(**data.get('demo_terrain', {})),
            storage=StorageConfig(**data.get('storage', {})),
            log_level=data.get('log_level', 'INFO'),
        )
        config.validate()
        return config

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SitegradeConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "SitegradeConfig":
        """Load configuration from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_json(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(path: Optional[Union[str, Path]] = None) -> SitegradeConfig:
    """
    Load configuration from file or return defaults.

    Supports YAML and JSON files based on extension.

    Args:
        path: Path to configuration file (optional)

    Returns:
        SitegradeConfig instance
    """
    if path is None:
        return SitegradeConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ['.yaml', '.yml']:
        return SitegradeConfig.from_yaml(path)
    elif suffix == '.json':
        return SitegradeConfig.from_json(path)
    else:
        raise ValueError(f"Unsupported configuration format: {suffix}")
