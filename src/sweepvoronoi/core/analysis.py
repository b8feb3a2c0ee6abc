"""Measurements over finished faces.

This module provides the polygon views a renderer needs:
- Face outline, area and area-weighted centroid (the label anchor)
- Point-in-polygon testing (ray casting)
- Polygon inset by a fixed distance

Face outlines come out in ``next`` order, which for the faces of a finished
diagram runs clockwise on screen (positive ``signed_area``).
"""

import heapq
import itertools
import math
from dataclasses import dataclass, field

from sweepvoronoi.core.dcel import Face
from sweepvoronoi.core.kernel import (
    circle_tangent_to_lines,
    offset_intersection,
    polygon_centroid,
    signed_area,
)
from sweepvoronoi.domain import Line, Point


def face_polygon(face: Face) -> list[Point]:
    """Outline of a face as a list of vertex locations."""
    return face.polygon()


def face_area(face: Face) -> float:
    """Unsigned area of a face."""
    return abs(signed_area(face.polygon()))


def face_centroid(face: Face) -> Point:
    """Area-weighted centroid of a face."""
    return polygon_centroid(face.polygon())


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


@dataclass(eq=False)
class _Side:
    """Node of the circular list of polygon sides used while insetting."""

    line: Line
    prev: "_Side | None" = field(default=None, repr=False)
    next: "_Side | None" = field(default=None, repr=False)


def _collapse_radius(side: _Side) -> float:
    radius = circle_tangent_to_lines(side.prev.line, side.line, side.next.line).radius
    return radius if math.isfinite(radius) else -1.0


def inset_polygon(points: list[Point], distance: float) -> list[Point]:
    """Shrink a polygon by moving every side inward by ``distance``.

    Sides that would vanish before reaching ``distance`` are removed first,
    smallest tangent circle first: a side disappears once the circle tangent
    to it and both neighbours is no larger than the inset. The remaining
    sides are offset and intersected pairwise.

    Args:
        points: Polygon vertices, clockwise on screen
        distance: Inset distance

    Returns:
        Vertices of the inset polygon, empty if it vanishes entirely
    """
    n = len(points)
    if n < 2:
        return []

    # Sides are stored reversed so that "left of the line" is the interior.
    head = _Side(Line(points[0], points[n - 1]))
    current = head
    for i in range(n - 1):
        side = _Side(Line(points[i + 1], points[i]))
        current.next = side
        side.prev = current
        current = side
    current.next = head
    head.prev = current

    counter = itertools.count()
    queue: list[tuple[float, int, _Side, _Side, _Side]] = []

    def push(side: _Side) -> None:
        heapq.heappush(queue, (_collapse_radius(side), next(counter), side, side.prev, side.next))

    current = head
    while True:
        push(current)
        current = current.next
        if current is head:
            break

    while head.next.next is not head and queue:
        radius, _, mid, prev, nxt = heapq.heappop(queue)
        if radius > distance:
            break
        if mid.prev is not prev or mid.next is not nxt or prev.next is not mid or nxt.prev is not mid:
            continue

        prev.next = nxt
        nxt.prev = prev
        push(prev)
        push(nxt)
        if head is mid:
            head = nxt

    if head.next.next is head:
        return []

    inset: list[Point] = []
    current = head
    while True:
        inset.append(offset_intersection(current.line, current.next.line, distance))
        current = current.next
        if current is head:
            break
    return inset


def face_inset(face: Face, distance: float) -> list[Point]:
    """Inset outline of a face."""
    return inset_polygon(face.polygon(), distance)
