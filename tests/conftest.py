"""Shared fixtures for sweep-voronoi tests."""

import pytest

from sweepvoronoi.core.dcel import Edge
from sweepvoronoi.core.faces import DCEL
from sweepvoronoi.domain import Point


@pytest.fixture
def square() -> tuple[DCEL, Edge, Edge, Edge, Edge]:
    """The 10x10 square at the origin, built the way the sweep builds its rectangle.

    Returns:
        (dcel, top, right, bottom, left); ``dcel.faces[0]`` is the interior
    """
    dcel = DCEL.new()
    top = dcel.faces[0].boundary
    top.origin.point = Point(0.0, 0.0)
    right = dcel.subdivide(top, Point(10.0, 0.0))
    bottom = dcel.subdivide(right, Point(10.0, 10.0))
    left = dcel.subdivide(bottom, Point(0.0, 10.0))
    top.set_horizontal(True)
    bottom.set_horizontal(True)
    return dcel, top, right, bottom, left
