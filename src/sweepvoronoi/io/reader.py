"""Site file reader.

This module loads input sites from disk. Two formats are understood:

- JSON: either ``{"bounds": {...}, "points": [[x, y], ...]}`` or a bare list
  of point records
- Text: one point per line, coordinates separated by a comma and/or
  whitespace; blank lines and ``#`` comments are ignored

The format is chosen by content, not extension: a file whose first
non-blank character is ``{`` or ``[`` is parsed as JSON.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from sweepvoronoi.domain import Bounds, Point
from sweepvoronoi.exceptions import InputError, SiteFileError
from sweepvoronoi.io.converter import record_to_bounds, record_to_point

logger = structlog.get_logger(__name__)

# Margin added around the sites when a file does not specify bounds
DEFAULT_MARGIN_RATIO = 0.1
MIN_MARGIN = 1.0


@dataclass
class SiteSet:
    """Sites loaded from a file, with the rectangle the file declares.

    Attributes:
        points: Sites in file order
        bounds: Clipping rectangle, None if the file does not give one
    """

    points: list[Point] = field(default_factory=list)
    bounds: Bounds | None = None

    def __len__(self) -> int:
        return len(self.points)

    def resolve_bounds(self, margin_ratio: float = DEFAULT_MARGIN_RATIO) -> Bounds:
        """Return the declared bounds, or the padded bounding box of the points.

        The padding is ``margin_ratio`` times the larger extent of the
        points, but never less than MIN_MARGIN, so every site ends up
        strictly inside.

        Args:
            margin_ratio: Padding relative to the larger extent

        Returns:
            Rectangle to clip the diagram to
        """
        if self.bounds is not None:
            return self.bounds
        if not self.points:
            return Bounds(0.0, 0.0, 1.0, 1.0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        extent = max(max(xs) - min(xs), max(ys) - min(ys))
        margin = max(extent * margin_ratio, MIN_MARGIN)
        return Bounds(min(xs) - margin, min(ys) - margin, max(xs) + margin, max(ys) + margin)


def read_sites(path: Path) -> SiteSet:
    """Read a site file.

    Args:
        path: Path to a JSON or text site file

    Returns:
        The loaded sites and optional bounds

    Raises:
        SiteFileError: If the file is missing, unreadable or malformed
    """
    if not path.exists():
        raise SiteFileError(str(path), "file not found")
    if not path.is_file():
        raise SiteFileError(str(path), "not a file")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SiteFileError(str(path), str(e)) from e

    stripped = text.lstrip()
    try:
        if stripped.startswith(("{", "[")):
            sites = _parse_json(text)
        else:
            sites = _parse_text(text)
    except (ValueError, InputError) as e:
        raise SiteFileError(str(path), str(e)) from e

    logger.debug(
        "sites_loaded",
        path=str(path),
        count=len(sites.points),
        has_bounds=sites.bounds is not None,
    )
    return sites


def _parse_json(text: str) -> SiteSet:
    # json.JSONDecodeError is a ValueError subclass
    data: Any = json.loads(text)

    if isinstance(data, list):
        return SiteSet(points=[record_to_point(record) for record in data])

    if not isinstance(data, dict):
        raise ValueError("top-level JSON value must be an object or a list")
    if "points" not in data:
        raise ValueError("JSON object has no 'points' entry")

    records = data["points"]
    if not isinstance(records, list):
        raise ValueError("'points' must be a list")

    bounds = data.get("bounds")
    return SiteSet(
        points=[record_to_point(record) for record in records],
        bounds=record_to_bounds(bounds) if bounds is not None else None,
    )


def _parse_text(text: str) -> SiteSet:
    points: list[Point] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        fields = line.replace(",", " ").split()
        try:
            points.append(record_to_point(fields))
        except ValueError as e:
            raise ValueError(f"line {line_number}: {e}") from e
    return SiteSet(points=points)
