"""Configuration management for sweep-voronoi.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- DiagnosticsConfig: Invariant checking settings
- SiteConfig: Input site handling
- LoggingConfig: Logging settings
- VoronoiSettings: Main application settings
"""

from sweepvoronoi.config.settings import (
    DiagnosticsConfig,
    DuplicatePolicy,
    LoggingConfig,
    SiteConfig,
    VoronoiSettings,
    get_default_settings,
)

__all__ = [
    "DiagnosticsConfig",
    "DuplicatePolicy",
    "LoggingConfig",
    "SiteConfig",
    "VoronoiSettings",
    "get_default_settings",
]
