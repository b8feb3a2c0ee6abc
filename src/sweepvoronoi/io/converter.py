"""Conversion between raw records and domain models.

Site files describe points and rectangles as plain JSON values or text
rows. This module turns those records into Point and Bounds instances and
back into JSON-ready values.
"""

from collections.abc import Sequence
from typing import Any

from sweepvoronoi.domain import Bounds, Point


def record_to_point(record: Any) -> Point:
    """Convert a raw point record to a Point.

    Accepted shapes are a two-element sequence ``[x, y]`` or a mapping
    with ``x`` and ``y`` keys.

    Args:
        record: Raw record from a site file

    Returns:
        Point with float coordinates

    Raises:
        ValueError: If the record has the wrong shape or non-numeric values
    """
    if isinstance(record, dict):
        if "x" not in record or "y" not in record:
            raise ValueError(f"point record needs 'x' and 'y': {record!r}")
        return Point(_to_float(record["x"]), _to_float(record["y"]))

    if isinstance(record, Sequence) and not isinstance(record, str):
        if len(record) != 2:
            raise ValueError(f"point record needs two coordinates: {record!r}")
        return Point(_to_float(record[0]), _to_float(record[1]))

    raise ValueError(f"unsupported point record: {record!r}")


def record_to_bounds(record: Any) -> Bounds:
    """Convert a raw bounds record to Bounds.

    Accepts a mapping with ``min_x``/``min_y``/``max_x``/``max_y`` keys or a
    four-element sequence in the same order.

    Raises:
        ValueError: If the record has the wrong shape or non-numeric values
        InvalidBoundsError: If the rectangle is empty or non-finite
    """
    if isinstance(record, dict):
        missing = [key for key in ("min_x", "min_y", "max_x", "max_y") if key not in record]
        if missing:
            raise ValueError(f"bounds record is missing {', '.join(missing)}")
        return Bounds(
            _to_float(record["min_x"]),
            _to_float(record["min_y"]),
            _to_float(record["max_x"]),
            _to_float(record["max_y"]),
        )

    if isinstance(record, Sequence) and not isinstance(record, str) and len(record) == 4:
        return Bounds(*(_to_float(value) for value in record))

    raise ValueError(f"unsupported bounds record: {record!r}")


def point_to_record(point: Point) -> list[float]:
    """Convert a Point to a compact ``[x, y]`` record."""
    return [point.x, point.y]


def polygon_to_records(polygon: list[Point]) -> list[list[float]]:
    """Convert a polygon to a list of ``[x, y]`` records."""
    return [point_to_record(point) for point in polygon]


def _to_float(value: Any) -> float:
    # bool is an int subclass; true/false in a coordinate is a file error
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)
