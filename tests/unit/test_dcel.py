"""Unit tests for the edge list and its topological edits."""

import pytest

from sweepvoronoi.core.dcel import Edge, EdgeKind, Vertex
from sweepvoronoi.core.faces import DCEL
from sweepvoronoi.core.kernel import signed_area
from sweepvoronoi.core.validation import element_counts, euler_characteristic, validate_dcel
from sweepvoronoi.domain import Point
from sweepvoronoi.exceptions import InvariantViolationError, PreconditionError


class TestNewDCEL:
    """Tests for the initial structure."""

    def test_single_loop(self) -> None:
        """One edge loops on one vertex between two faces."""
        dcel = DCEL.new()
        assert len(dcel) == 2

        edge = dcel.faces[0].boundary
        assert edge.next is edge
        assert edge.twin.next is edge.twin
        assert edge.origin is edge.twin.origin
        assert edge.twin.face is dcel.faces[1]

    def test_single_loop_is_valid(self) -> None:
        """The initial structure passes validation."""
        dcel = DCEL.new()
        assert validate_dcel(dcel.faces) == []
        assert element_counts(dcel.faces) == (1, 1, 2)
        assert euler_characteristic(dcel.faces) == 2


class TestSubdivide:
    """Tests for Edge.subdivide."""

    def test_subdivide_inserts_successor(self) -> None:
        """The new edge follows the split one and starts at the new point."""
        dcel = DCEL.new()
        edge = dcel.faces[0].boundary
        edge.origin.point = Point(0.0, 0.0)

        other = dcel.subdivide(edge, Point(5.0, 0.0))

        assert edge.next is other
        assert other.origin.point == Point(5.0, 0.0)
        assert edge.twin.origin is other.origin
        assert other.twin.next is edge.twin
        assert other.face is edge.face
        assert other.twin.face is edge.twin.face
        assert validate_dcel(dcel.faces) == []

    def test_subdivide_inherits_kind(self) -> None:
        """Parabola edges split into parabola edges with the same focus."""
        dcel = DCEL.new()
        edge = dcel.faces[0].boundary
        edge.origin.point = Point(0.0, 0.0)
        edge.kind = edge.twin.kind = EdgeKind.PARABOLA
        edge.focus = edge.twin.focus = Point(1.0, 1.0)

        other = dcel.subdivide(edge, Point(5.0, 0.0))

        assert other.is_parabola
        assert other.focus == Point(1.0, 1.0)

    def test_rectangle(self, square) -> None:
        """Three subdivisions of the loop give a rectangle."""
        dcel, top, right, bottom, left = square
        interior = dcel.faces[0]

        assert [edge.id for edge in interior.edges()] == [left.id, top.id, right.id, bottom.id]
        assert interior.polygon() == [
            Point(0.0, 10.0),
            Point(0.0, 0.0),
            Point(10.0, 0.0),
            Point(10.0, 10.0),
        ]
        assert signed_area(interior.polygon()) == 100.0
        assert top.twin.horizontal
        assert not right.horizontal
        assert element_counts(dcel.faces) == (4, 4, 2)

    def test_vertex_degree(self, square) -> None:
        """Every rectangle corner has two outgoing half-edges."""
        dcel, top, right, bottom, left = square
        for edge in (top, right, bottom, left):
            assert edge.origin.degree == 2


class TestSplitFace:
    """Tests for face splitting."""

    def test_split_face_between(self, square) -> None:
        """A diagonal splits the square into two triangles."""
        dcel, top, right, bottom, left = square

        split = dcel.split_face_between(top, bottom)

        assert len(dcel) == 3
        assert split.origin is bottom.origin
        assert split.twin.origin is top.origin
        assert split.next is top
        assert split.twin.next is bottom
        assert split.face is dcel.faces[0]
        assert split.twin.face is dcel.faces[2]
        assert signed_area(split.face.polygon()) == 50.0
        assert signed_area(split.twin.face.polygon()) == 50.0
        assert validate_dcel(dcel.faces) == []
        assert euler_characteristic(dcel.faces) == 2

    def test_split_face_with_parabola(self, square) -> None:
        """The split edge carries the focus."""
        dcel, top, right, bottom, left = square

        arc = dcel.split_face_with_parabola(Point(5.0, 5.0), top, bottom)

        assert arc.is_parabola
        assert arc.focus == Point(5.0, 5.0)
        assert arc.twin.focus == Point(5.0, 5.0)

    def test_split_different_faces(self, square) -> None:
        """Edges on different faces cannot be joined."""
        dcel, top, right, bottom, left = square

        with pytest.raises(PreconditionError, match="different faces"):
            dcel.split_face_between(top, bottom.twin)


class TestDissolve:
    """Tests for Edge.dissolve."""

    def test_dissolve_undoes_split(self, square) -> None:
        """Dissolving a diagonal merges the triangles back into the square."""
        dcel, top, right, bottom, left = square
        split = dcel.split_face_between(top, bottom)
        removed = split.twin.face

        joined = dcel.dissolve(split)

        assert joined is dcel.faces[0]
        assert len(dcel) == 2
        assert not removed.is_alive
        assert signed_area(joined.polygon()) == 100.0
        assert validate_dcel(dcel.faces) == []
        assert element_counts(dcel.faces) == (4, 4, 2)


class TestCollapse:
    """Tests for Edge.collapse."""

    def test_collapse_merges_endpoints(self, square) -> None:
        """The destination vertex is absorbed into the origin."""
        dcel, top, right, bottom, left = square
        mid = dcel.subdivide(top, Point(5.0, 0.0))

        kept = dcel.collapse(mid)

        assert kept.point == Point(5.0, 0.0)
        assert top.next is right
        assert right.origin is kept
        assert Point(10.0, 0.0) not in dcel.faces[0].polygon()
        assert validate_dcel(dcel.faces) == []
        assert element_counts(dcel.faces) == (4, 4, 2)


class TestRipVertex:
    """Tests for rip_vertex."""

    def test_rip_vertex(self, square) -> None:
        """Ripping a corner adds one vertex and one edge."""
        dcel, top, right, bottom, left = square
        corner = top.origin

        new = dcel.rip_vertex(Point(0.0, 5.0), top, left.twin)

        assert new.next is top
        assert new.twin.origin is corner
        assert new.origin.point == Point(0.0, 5.0)
        assert left.twin.origin is new.origin
        assert validate_dcel(dcel.faces) == []
        assert element_counts(dcel.faces) == (5, 5, 2)

    def test_rip_vertex_requires_shared_origin(self, square) -> None:
        """Edges from different vertices are rejected."""
        dcel, top, right, bottom, left = square

        with pytest.raises(PreconditionError, match="different origins"):
            dcel.rip_vertex(Point(1.0, 1.0), top, bottom)


class TestConvertToStraight:
    """Tests for Edge.convert_to_straight."""

    def test_convert_in_place(self) -> None:
        """Both halves lose their focus but keep their identity."""
        edge = Edge.pair(EdgeKind.PARABOLA, Point(1.0, 2.0))
        twin = edge.twin

        assert edge.convert_to_straight() is edge
        assert edge.twin is twin
        assert not edge.is_parabola
        assert not twin.is_parabola
        assert edge.focus is None
        assert twin.focus is None

    def test_convert_straight_edge(self) -> None:
        """Converting a straight edge is a precondition failure."""
        edge = Edge.pair()
        with pytest.raises(PreconditionError):
            edge.convert_to_straight()


class TestWalks:
    """Tests for bounded walks."""

    def test_runaway_vertex_ring(self) -> None:
        """A vertex ring that never closes is reported."""
        vertex = Vertex(Point(0.0, 0.0))
        first = Edge.pair()
        loop = Edge.pair()
        first.set_origin(vertex)
        first.twin.next = loop
        loop.origin = vertex
        loop.twin.next = loop

        with pytest.raises(InvariantViolationError, match="runaway_walk"):
            list(vertex.incident_edges())

    def test_runaway_face_cycle(self) -> None:
        """A face cycle that never returns to its start is reported."""
        start = Edge.pair()
        loop = Edge.pair()
        start.next = loop
        loop.next = loop

        with pytest.raises(InvariantViolationError):
            list(start.face_edges())

    def test_long_face_cycle(self, square) -> None:
        """A face with thousands of edges is walked in full without a bound."""
        dcel, top, right, bottom, left = square
        edge = top
        for i in range(1, 2500):
            edge = dcel.subdivide(edge, Point(i / 250.0, 0.0))

        assert sum(1 for _ in top.face_edges()) == 2503
        assert next(top.face_edges()) is top

    def test_explicit_bound(self, square) -> None:
        """An explicit bound still cuts a valid but long walk short."""
        dcel, top, right, bottom, left = square
        with pytest.raises(InvariantViolationError, match="runaway_walk"):
            list(top.face_edges(max_steps=3))
