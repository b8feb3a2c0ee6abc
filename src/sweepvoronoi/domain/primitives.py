"""Core geometric types for the diagram.

This module defines the plain value types used throughout sweep-voronoi:
- Point: A 2D point (a site, a vertex location, a focus)
- Bounds: The axis-aligned clipping rectangle
- Line: A directed line segment
- Circle: A circle with center and radius

Coordinates follow screen convention: y grows downward, so the "top" of a
rectangle is its minimum y.
"""

import math
from dataclasses import dataclass
from typing import Any

from sweepvoronoi.exceptions import InvalidBoundsError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate (grows downward)
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def translate(self, dx: float, dy: float) -> "Point":
        """Return this point offset by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def is_finite(self) -> bool:
        """True if both coordinates are finite numbers."""
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True, slots=True)
class Bounds:
    """An axis-aligned rectangle.

    Attributes:
        min_x: Left edge
        min_y: Top edge (screen convention)
        max_x: Right edge
        max_y: Bottom edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        values = (self.min_x, self.min_y, self.max_x, self.max_y)
        if not all(math.isfinite(v) for v in values):
            raise InvalidBoundsError(values, "coordinates must be finite")
        if self.max_x <= self.min_x:
            raise InvalidBoundsError(values, "width must be positive")
        if self.max_y <= self.min_y:
            raise InvalidBoundsError(values, "height must be positive")

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Bounds":
        """Create bounds from a corner and a size."""
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def top_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def top_right(self) -> Point:
        return Point(self.max_x, self.min_y)

    @property
    def bottom_right(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def bottom_left(self) -> Point:
        return Point(self.min_x, self.max_y)

    def contains(self, point: Point, strict: bool = True, tolerance: float = 0.0) -> bool:
        """Check whether a point lies in the rectangle.

        Args:
            point: The point to test
            strict: If True, points on the edge are outside
            tolerance: Slack added around the rectangle (non-strict test only)

        Returns:
            True if point is inside
        """
        if strict:
            return (
                self.min_x < point.x < self.max_x
                and self.min_y < point.y < self.max_y
            )
        return (
            self.min_x - tolerance <= point.x <= self.max_x + tolerance
            and self.min_y - tolerance <= point.y <= self.max_y + tolerance
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bounds":
        """Deserialize from dictionary."""
        return cls(
            min_x=float(data["min_x"]),
            min_y=float(data["min_y"]),
            max_x=float(data["max_x"]),
            max_y=float(data["max_y"]),
        )


@dataclass(frozen=True, slots=True)
class Line:
    """A directed line segment from start to end."""

    start: Point
    end: Point

    @property
    def length(self) -> float:
        """Distance between start and end."""
        return self.start.distance(self.end)


@dataclass(frozen=True, slots=True)
class Circle:
    """A circle with a center and radius."""

    center: Point
    radius: float
