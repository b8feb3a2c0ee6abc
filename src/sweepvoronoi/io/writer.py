"""Diagram writer.

This module serializes a finished diagram to JSON: the rectangle, the
sites, and one entry per site face with its outline and measurements.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from sweepvoronoi.core.analysis import face_area, face_centroid, face_polygon
from sweepvoronoi.core.sweep import VoronoiSweep
from sweepvoronoi.io.converter import point_to_record, polygon_to_records

logger = structlog.get_logger(__name__)

FORMAT_VERSION = 1


def diagram_to_dict(sweep: VoronoiSweep) -> dict[str, Any]:
    """Convert a sweep's faces to a JSON-ready dictionary.

    Faces are listed in site order. A sweep that has not finished yet is
    serialized as-is; faces still touching the beach line then report
    partial outlines.

    Args:
        sweep: The sweep to serialize

    Returns:
        Dictionary with version, bounds, points, finished and faces entries
    """
    site_faces = sweep.site_faces()
    faces: list[dict[str, Any]] = []

    for index, point in enumerate(sweep.points()):
        face = site_faces.get(point)
        if face is None:
            continue
        faces.append(
            {
                "site_index": index,
                "site": point_to_record(point),
                "polygon": polygon_to_records(face_polygon(face)),
                "area": face_area(face),
                "centroid": point_to_record(face_centroid(face)),
            }
        )

    return {
        "version": FORMAT_VERSION,
        "bounds": sweep.bounds.to_dict(),
        "points": [point_to_record(point) for point in sweep.points()],
        "finished": sweep.top_border is None,
        "faces": faces,
    }


def write_diagram(sweep: VoronoiSweep, path: Path, indent: int | None = 2) -> None:
    """Write a sweep's faces to a JSON file.

    Args:
        sweep: The sweep to serialize
        path: Destination file, parent directories must exist
        indent: JSON indentation, None for a compact file

    Raises:
        OSError: If the file cannot be written
    """
    document = diagram_to_dict(sweep)
    path.write_text(json.dumps(document, indent=indent) + "\n", encoding="utf-8")
    logger.debug("diagram_written", path=str(path), faces=len(document["faces"]))
