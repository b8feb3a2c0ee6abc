"""Utility functions for sweep-voronoi.

This module provides utility functions including:

- Logging setup and configuration
- Sweep statistics tracking
"""

from sweepvoronoi.utils.logging import (
    SweepLogger,
    SweepStats,
    configure_logging,
)

__all__ = [
    "SweepLogger",
    "SweepStats",
    "configure_logging",
]
