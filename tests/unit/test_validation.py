"""Unit tests for edge list validation."""

from sweepvoronoi.core.dcel import Vertex
from sweepvoronoi.core.faces import DCEL
from sweepvoronoi.core.validation import Violation, element_counts, validate_dcel
from sweepvoronoi.domain import Point


def kinds(violations: list[Violation]) -> set[str]:
    return {violation.kind for violation in violations}


class TestValidateDCEL:
    """Tests for validate_dcel."""

    def test_valid_rectangle(self, square) -> None:
        """A freshly built rectangle has no violations."""
        dcel = square[0]
        assert validate_dcel(dcel.faces) == []

    def test_wrong_face_pointer(self, square) -> None:
        """An edge pointing at another face is reported."""
        dcel, top, right, bottom, left = square
        right.face = dcel.faces[1]

        assert "face" in kinds(validate_dcel(dcel.faces))

    def test_broken_prev_link(self, square) -> None:
        """A next pointer without a matching prev is reported."""
        dcel, top, right, bottom, left = square
        top.next = bottom

        assert "next_prev" in kinds(validate_dcel(dcel.faces))

    def test_vertex_without_incident_edge(self, square) -> None:
        """An origin vertex with no incident edge is reported."""
        dcel, top, right, bottom, left = square
        top.origin = Vertex(Point(0.0, 0.0))

        assert "vertex" in kinds(validate_dcel(dcel.faces))

    def test_dissolved_face(self) -> None:
        """A face without a boundary is reported."""
        dcel = DCEL.new()
        face = dcel.faces[0]
        face.boundary = None

        violations = validate_dcel([face])
        assert [v.kind for v in violations] == ["face"]
        assert violations[0].element_id == face.id

    def test_runaway_walk(self, square) -> None:
        """A cycle longer than an explicit walk bound is reported."""
        dcel = square[0]

        assert "runaway_walk" in kinds(validate_dcel(dcel.faces, max_steps=2))

    def test_runaway_walk_without_bound(self, square) -> None:
        """A boundary that loops back past its start is caught with no bound set."""
        dcel, top, right, bottom, left = square
        dcel.faces[0].boundary = top
        left.next = right

        assert "runaway_walk" in kinds(validate_dcel(dcel.faces))

    def test_long_boundary_is_not_runaway(self, square) -> None:
        """Faces far larger than any fixed walk budget validate cleanly."""
        dcel, top, right, bottom, left = square
        edge = top
        for i in range(1, 3000):
            edge = dcel.subdivide(edge, Point(i / 300.0, 0.0))

        assert validate_dcel(dcel.faces) == []
        assert element_counts(dcel.faces) == (3003, 3003, 2)

    def test_zero_length_edge(self, square) -> None:
        """Edges with coincident endpoints are reported only when asked for."""
        dcel, top, right, bottom, left = square
        dcel.subdivide(right, Point(10.0, 0.0))

        assert validate_dcel(dcel.faces) == []
        violations = validate_dcel(dcel.faces, check_lengths=True)
        assert kinds(violations) == {"zero_length"}
        assert violations[0].element_id in (right.id, right.twin.id)

    def test_loop_edge_has_zero_length(self) -> None:
        """The single loop of a new edge list starts and ends at one vertex."""
        dcel = DCEL.new()
        violations = validate_dcel(dcel.faces, check_lengths=True)
        assert kinds(violations) == {"zero_length"}

    def test_violation_str(self) -> None:
        """Violations print their kind first."""
        assert str(Violation("twin", "edge 3 twin is not symmetric", 3)) == (
            "[twin] edge 3 twin is not symmetric"
        )


class TestElementCounts:
    """Tests for element_counts."""

    def test_rectangle_counts(self, square) -> None:
        """Four corners, four edges, inside and outside."""
        dcel = square[0]
        assert element_counts(dcel.faces) == (4, 4, 2)
