"""
Configuration management for sitegrade.

Dataclass-based configuration with validation, loadable from YAML or JSON.
"""

from sitegrade.config.settings import (
    SitegradeConfig,
    AnalysisConfig,
    DemoTerrainConfig,
    StorageConfig,
    load_config,
)

__all__ = [
    "SitegradeConfig",
    "AnalysisConfig",
    "DemoTerrainConfig",
    "StorageConfig",
    "load_config",
]
