"""Unit tests for face measurements and polygon insetting."""

import math

from sweepvoronoi.core.analysis import (
    face_area,
    face_centroid,
    face_inset,
    face_polygon,
    inset_polygon,
    point_in_polygon,
)
from sweepvoronoi.domain import Point

# Face outlines run clockwise on screen, the way finished faces report them
SQUARE = [Point(0.0, 10.0), Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 10.0)]
THIN = [Point(0.0, 2.0), Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 2.0)]


def assert_points_close(actual: list[Point], expected: list[Point]) -> None:
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert math.isclose(a.x, e.x, abs_tol=1e-9), (a, e)
        assert math.isclose(a.y, e.y, abs_tol=1e-9), (a, e)


class TestFaceMeasurements:
    """Tests for face_polygon, face_area and face_centroid."""

    def test_face_polygon(self, square) -> None:
        """Test the outline follows the boundary walk."""
        dcel = square[0]
        assert face_polygon(dcel.faces[0]) == SQUARE

    def test_face_area(self, square) -> None:
        """Test unsigned area of the square."""
        dcel = square[0]
        assert face_area(dcel.faces[0]) == 100.0

    def test_face_centroid(self, square) -> None:
        """Test the centroid of the square is its center."""
        dcel = square[0]
        assert face_centroid(dcel.faces[0]) == Point(5.0, 5.0)


class TestPointInPolygon:
    """Tests for point_in_polygon."""

    def test_inside(self) -> None:
        """Test a point inside the square."""
        assert point_in_polygon(Point(5.0, 5.0), SQUARE)

    def test_outside(self) -> None:
        """Test a point outside the square."""
        assert not point_in_polygon(Point(15.0, 5.0), SQUARE)
        assert not point_in_polygon(Point(5.0, -1.0), SQUARE)

    def test_degenerate_polygon(self) -> None:
        """Test fewer than three vertices contain nothing."""
        assert not point_in_polygon(Point(0.0, 0.0), [Point(0.0, 0.0), Point(1.0, 1.0)])


class TestInsetPolygon:
    """Tests for inset_polygon."""

    def test_square_inset(self) -> None:
        """Every side moves inward by the distance."""
        inset = inset_polygon(SQUARE, 1.0)
        assert_points_close(
            inset,
            [Point(1.0, 9.0), Point(1.0, 1.0), Point(9.0, 1.0), Point(9.0, 9.0)],
        )

    def test_zero_inset_keeps_polygon(self) -> None:
        """Test a zero distance returns the original corners."""
        assert_points_close(inset_polygon(SQUARE, 0.0), SQUARE)

    def test_thin_rectangle_vanishes(self) -> None:
        """An inset wider than half the rectangle's height leaves nothing."""
        assert inset_polygon(THIN, 3.0) == []

    def test_square_vanishes(self) -> None:
        """An inset beyond the inscribed circle leaves nothing."""
        assert inset_polygon(SQUARE, 6.0) == []

    def test_too_few_points(self) -> None:
        """Test polygons with fewer than two points have no inset."""
        assert inset_polygon([Point(1.0, 1.0)], 0.5) == []

    def test_face_inset(self, square) -> None:
        """Test insetting a face uses its outline."""
        dcel = square[0]
        assert_points_close(
            face_inset(dcel.faces[0], 1.0),
            [Point(1.0, 9.0), Point(1.0, 1.0), Point(9.0, 1.0), Point(9.0, 9.0)],
        )
