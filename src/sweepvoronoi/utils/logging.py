"""Logging utilities for sweep-voronoi."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import structlog

from sweepvoronoi.domain import Point

_installed_handlers: list[logging.Handler] = []


@dataclass
class SweepStats:
    """Statistics from a sweep run."""

    site_events: int = 0
    circle_events: int = 0
    circle_events_queued: int = 0
    candidates_rejected: int = 0
    events_invalidated: int = 0
    top_border_splits: int = 0
    edges_collapsed: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def events_processed(self) -> int:
        return self.site_events + self.circle_events

    @property
    def duration_seconds(self) -> float:
        """Calculate sweep duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _installed_handlers.append(console_handler)

    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("sweepvoronoi")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class SweepLogger:
    """Logger for tracking sweep progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("sweepvoronoi.sweep")
        self._stats = SweepStats()

    def log_start(self, site_count: int) -> None:
        """Log construction of a sweep."""
        self._stats.start_time = time.perf_counter()
        self._logger.debug("sweep_started", sites=site_count)

    def log_site_event(self, point: Point) -> None:
        self._logger.debug("site_event", x=point.x, y=point.y)
        self._stats.site_events += 1

    def log_circle_event(self, center: Point, radius: float) -> None:
        self._logger.debug("circle_event", x=center.x, y=center.y, radius=radius)
        self._stats.circle_events += 1

    def log_circle_event_queued(self, center: Point, trigger_y: float) -> None:
        self._logger.debug("circle_event_queued", x=center.x, y=center.y, trigger_y=trigger_y)
        self._stats.circle_events_queued += 1

    def log_candidate_rejected(self, center: Point) -> None:
        self._logger.debug("circle_event_rejected", x=center.x, y=center.y)
        self._stats.candidates_rejected += 1

    def log_events_invalidated(self, count: int) -> None:
        if count:
            self._logger.debug("circle_events_invalidated", count=count)
            self._stats.events_invalidated += count

    def log_top_border_split(self, face_id: int, closed: bool) -> None:
        """Log a crossing of the top border being recorded or closed off."""
        self._logger.debug("top_border_split", face=face_id, closed=closed)
        self._stats.top_border_splits += 1

    def log_duplicate_dropped(self, point: Point) -> None:
        self._logger.info("duplicate_site_dropped", x=point.x, y=point.y)

    def log_zero_length_collapsed(self, point: Point) -> None:
        self._logger.debug("zero_length_edge_collapsed", x=point.x, y=point.y)
        self._stats.edges_collapsed += 1

    def log_finished(self, face_count: int) -> None:
        """Log finalization of the diagram."""
        self._stats.end_time = time.perf_counter()
        self._logger.debug(
            "finalized",
            faces=face_count,
            events=self._stats.events_processed,
            duration_ms=round(self._stats.duration_seconds * 1000, 2),
        )

    @property
    def stats(self) -> SweepStats:
        """Get current sweep statistics."""
        return self._stats
