"""Configuration settings for sweep-voronoi."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DuplicatePolicy(str, Enum):
    """What to do with a site equal to an earlier one."""

    ERROR = "error"
    IGNORE = "ignore"


class DiagnosticsConfig(BaseModel):
    """Configuration for the optional self-checking mode.

    Checking walks the whole edge list after every step, so it is off by
    default and meant for debugging the topological edits.
    """

    check_invariants: bool = Field(
        default=False,
        description="Validate the edge list after every step",
    )
    max_walk_steps: int | None = Field(
        default=None,
        ge=10,
        description="Optional hard bound on face and vertex walks. Walks already stop "
        "at the first edge they visit twice, so this is only needed to cap work",
    )


class SiteConfig(BaseModel):
    """Configuration for input site handling."""

    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.ERROR,
        description="Reject duplicate sites, or silently drop later copies",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VoronoiSettings(BaseModel):
    """Main application settings."""

    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    sites: SiteConfig = Field(default_factory=SiteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VoronoiSettings:
    """Get default application settings."""
    return VoronoiSettings()
