"""Exact geometry used by the sweep and by face analysis.

This module provides the closed-form formulas the construction relies on:
- Beach line parabola heights and arc breakpoints
- Line / horizontal line intersection
- Circle centers through two or three points
- Circle tangent to three oriented lines
- Offset-line intersection and signed distance from a line
- Polygon signed area and centroid

All functions are pure and never raise on degenerate input. Division by zero
yields +/-inf or nan the way IEEE arithmetic does, so callers decide what a
non-finite result means.
"""

import math
from typing import TYPE_CHECKING

from sweepvoronoi.domain import Circle, Line, Point

if TYPE_CHECKING:
    from sweepvoronoi.core.dcel import Edge


def _div(num: float, denom: float) -> float:
    """Divide with IEEE semantics instead of raising ZeroDivisionError."""
    if denom == 0.0:
        if num == 0.0 or math.isnan(num):
            return math.nan
        negative = (num < 0) != (math.copysign(1.0, denom) < 0)
        return -math.inf if negative else math.inf
    return num / denom


def _sqrt(value: float) -> float:
    """Square root returning nan for negative input."""
    if math.isnan(value) or value < 0:
        return math.nan
    return math.sqrt(value)


def parabola_height(x: float, focus: Point, sweep_y: float) -> float:
    """Height of the beach line parabola with the given focus at ``x``.

    The parabola is the locus of points equidistant from ``focus`` and the
    directrix ``y = sweep_y``.

    Args:
        x: X coordinate to evaluate at
        focus: Focus of the parabola (a site)
        sweep_y: Height of the sweep line

    Returns:
        Y coordinate of the parabola at ``x``
    """
    px, py = focus.x, focus.y
    return 0.5 * (_div((x - px) * (x - px), py - sweep_y) + py + sweep_y)


def beach_line_intersection_x(left: "Edge", right: "Edge", sweep_y: float) -> float:
    """X coordinate where two adjacent beach line pieces meet.

    ``left`` precedes ``right`` in the beach line face walk. Four cases:
    - Both are parabolas: the quadratic root with the positive radical, which
      is the breakpoint with ``left`` on its left-hand side.
    - One parabola and a horizontal straight edge: ``x0 -/+ sqrt(...)``, the
      sign chosen by which side is parabolic.
    - One parabola and a non-horizontal straight edge: the straight edge is
      vertical, so its x is returned directly.
    - Neither is a parabola: the right edge's origin x.

    Args:
        left: The earlier edge in the walk
        right: The later edge in the walk
        sweep_y: Height of the sweep line (directrix)

    Returns:
        X coordinate of the breakpoint
    """
    if left.is_parabola and right.is_parabola:
        xl, yl = left.focus.x, left.focus.y
        xr, yr = right.focus.x, right.focus.y
        det = _sqrt(
            (yl - sweep_y) * (yr - sweep_y) * ((xl - xr) * (xl - xr) + (yl - yr) * (yl - yr))
        )
        nb = xr * (yl - sweep_y) - xl * (yr - sweep_y)
        return _div(nb + det, yl - yr)

    if left.is_parabola:
        if not right.horizontal:
            return right.origin.x
        on_left = True
        focus = left.focus
        y = right.origin.y
    elif right.is_parabola:
        if not left.horizontal:
            return left.origin.x
        on_left = False
        focus = right.focus
        y = left.origin.y
    else:
        return right.origin.x

    det = _sqrt((sweep_y - focus.y) * (sweep_y + focus.y - 2 * y))
    if math.isnan(det):
        return right.origin.x if on_left else left.origin.x
    return focus.x - det if on_left else focus.x + det


def intersect_line_horizontal(a: Point, b: Point, y: float) -> Point:
    """Intersect the line through ``a`` and ``b`` with the horizontal ``y``."""
    return Point(_div(b.x - a.x, b.y - a.y) * (y - a.y) + a.x, y)


def circle_center_x(a: Point, b: Point, center_y: float) -> float:
    """X coordinate of the center of a circle through ``a`` and ``b``.

    Args:
        a: First point on the circle
        b: Second point on the circle
        center_y: Known y coordinate of the center

    Returns:
        X coordinate of the center
    """
    x1, y1 = a.x, a.y
    x2, y2 = b.x, b.y
    return 0.5 * (_div(y1 * y1 - y2 * y2 - 2 * center_y * (y1 - y2), x1 - x2) + x1 + x2)


def circle_center_y(a: Point, b: Point, center_x: float) -> float:
    """Y coordinate of the center of a circle through ``a`` and ``b``.

    Args:
        a: First point on the circle
        b: Second point on the circle
        center_x: Known x coordinate of the center

    Returns:
        Y coordinate of the center
    """
    x1, y1 = a.x, a.y
    x2, y2 = b.x, b.y
    return 0.5 * (_div(x1 * x1 - x2 * x2 - 2 * center_x * (x1 - x2), y1 - y2) + y1 + y2)


def circle_center(a: Point, b: Point, c: Point) -> Point:
    """Center of the circle through three points.

    Collinear points give a zero determinant and therefore a non-finite
    result.

    Examples:
        >>> circle_center(Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, 10.0))
        Point(x=5.0, y=3.75)
    """
    ax, ay = a.x, a.y
    bx, by = b.x, b.y
    cx, cy = c.x, c.y
    a2 = ax * ax + ay * ay
    b2 = bx * bx + by * by
    c2 = cx * cx + cy * cy

    m11 = ax * by + ay * cx + bx * cy - ax * cy - ay * bx - by * cx
    m12 = a2 * by + ay * c2 + b2 * cy - a2 * cy - ay * b2 - by * c2
    m13 = a2 * bx + ax * c2 + b2 * cx - a2 * cx - ax * b2 - bx * c2

    return Point(_div(0.5 * m12, m11), _div(-0.5 * m13, m11))


def determinant3(
    a: float, b: float, c: float, d: float, e: float, f: float, g: float, h: float, i: float
) -> float:
    """Determinant of the row-major 3x3 matrix ``[[a, b, c], [d, e, f], [g, h, i]]``."""
    return a * e * i - a * f * h - b * d * i + b * f * g + c * d * h - c * e * g


def distance_off_line(line: Line, point: Point) -> float:
    """Signed perpendicular distance from ``point`` to ``line``.

    Positive values lie to the left of the line's direction as seen on
    screen (y down), the same side ``offset_intersection`` moves toward.
    """
    x1, y1 = line.start.x, line.start.y
    x2, y2 = line.end.x, line.end.y
    return _div((x2 - x1) * (y1 - point.y) - (y2 - y1) * (x1 - point.x), line.length)


def offset_intersection(line1: Line, line2: Line, offset: float) -> Point:
    """Intersection of two lines after each is offset by ``offset``.

    Positive offsets move a line to its left, negative to its right.

    Args:
        line1: First line
        line2: Second line
        offset: Offset distance applied to both lines

    Returns:
        The intersection of the offset lines (non-finite if parallel)
    """
    x11, y11 = line1.start.x, line1.start.y
    x12, y12 = line1.end.x, line1.end.y
    x21, y21 = line2.start.x, line2.start.y
    x22, y22 = line2.end.x, line2.end.y
    len1 = offset * line1.length
    len2 = offset * line2.length

    denom = (
        x21 * y11 - x22 * y11 - x21 * y12 + x22 * y12
        - x11 * y21 + x12 * y21 + x11 * y22 - x12 * y22
    )
    num_x = (
        len2 * x11 - len2 * x12 - len1 * x21 + len1 * x22
        - x21 * x11 * y12 + x22 * x11 * y12 - x22 * x11 * y21 + x21 * x11 * y22
        + x12 * x21 * y11 - x12 * x22 * y11 + x12 * x22 * y21 - x12 * x21 * y22
    )
    num_y = (
        len2 * y11 - len2 * y12 - len1 * y21 + len1 * y22
        + x12 * y21 * y11 - x22 * y21 * y11 - x12 * y22 * y11 + x21 * y22 * y11
        - x11 * y12 * y21 + x22 * y12 * y21 + x11 * y12 * y22 - x21 * y12 * y22
    )
    return Point(_div(num_x, denom), _div(num_y, denom))


def circle_tangent_to_lines(line1: Line, line2: Line, line3: Line) -> Circle:
    """Circle tangent to three oriented lines, on the left of each.

    A zero-length line makes the system singular and the result non-finite.

    Args:
        line1: First line
        line2: Second line
        line3: Third line

    Returns:
        The tangent circle
    """
    x1, y1, x2, y2 = line1.start.x, line1.start.y, line1.end.x, line1.end.y
    x3, y3, x4, y4 = line2.start.x, line2.start.y, line2.end.x, line2.end.y
    x5, y5, x6, y6 = line3.start.x, line3.start.y, line3.end.x, line3.end.y
    d12 = line1.length
    d34 = line2.length
    d56 = line3.length
    det = determinant3

    denom = (
        -det(x1, x3, x5, y1, y3, y5, d12, d34, d56)
        + det(x1, x3, x5, y2, y4, y6, d12, d34, d56)
        + det(x2, x4, x6, y1, y3, y5, d12, d34, d56)
        - det(x2, x4, x6, y2, y4, y6, d12, d34, d56)
    )
    num_x = (
        -det(x1, x3, x5, x2 * y1, x4 * y3, x6 * y5, d12, d34, d56)
        + det(x1, x3, x5, x1 * y2, x3 * y4, x5 * y6, d12, d34, d56)
        + det(x2, x4, x6, x2 * y1, x4 * y3, x6 * y5, d12, d34, d56)
        - det(x2, x4, x6, x1 * y2, x3 * y4, x5 * y6, d12, d34, d56)
    )
    num_y = (
        -det(x1 * y2, x3 * y4, x5 * y6, y1, y3, y5, d12, d34, d56)
        + det(x1 * y2, x3 * y4, x5 * y6, y2, y4, y6, d12, d34, d56)
        + det(x2 * y1, x4 * y3, x6 * y5, y1, y3, y5, d12, d34, d56)
        - det(x2 * y1, x4 * y3, x6 * y5, y2, y4, y6, d12, d34, d56)
    )
    num_rad = (
        det(x1 * y2, x3 * y4, x5 * y6, x1, x3, x5, y1, y3, y5)
        - det(x1 * y2, x3 * y4, x5 * y6, x1, x3, x5, y2, y4, y6)
        - det(x1 * y2, x3 * y4, x5 * y6, x2, x4, x6, y1, y3, y5)
        + det(x1 * y2, x3 * y4, x5 * y6, x2, x4, x6, y2, y4, y6)
        - det(x2 * y1, x4 * y3, x6 * y5, x1, x3, x5, y1, y3, y5)
        + det(x2 * y1, x4 * y3, x6 * y5, x1, x3, x5, y2, y4, y6)
        + det(x2 * y1, x4 * y3, x6 * y5, x2, x4, x6, y1, y3, y5)
        - det(x2 * y1, x4 * y3, x6 * y5, x2, x4, x6, y2, y4, y6)
    )
    return Circle(
        Point(_div(num_x, denom), _div(num_y, denom)),
        abs(_div(num_rad, denom)),
    )


def signed_area(points: list[Point]) -> float:
    """Signed area of a polygon using the shoelace formula.

    With y growing downward, a positive area means the vertices run
    clockwise on screen.

    Args:
        points: Polygon vertices in order

    Returns:
        Signed area. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def polygon_centroid(points: list[Point]) -> Point:
    """Area-weighted centroid of a simple polygon.

    Falls back to the vertex average when the polygon has no area.

    Args:
        points: Polygon vertices in order

    Returns:
        The centroid
    """
    if not points:
        return Point(math.nan, math.nan)

    area = signed_area(points)
    if area == 0.0:
        n = len(points)
        return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)

    cx = 0.0
    cy = 0.0
    n = len(points)
    for i in range(n):
        j = (i + 1) % n
        cross = points[i].x * points[j].y - points[j].x * points[i].y
        cx += (points[i].x + points[j].x) * cross
        cy += (points[i].y + points[j].y) * cross

    return Point(cx / (6.0 * area), cy / (6.0 * area))
