"""Face-tracking wrapper around the edge list primitives.

The primitives in ``dcel`` only rewire links. ``DCEL`` routes every edit
through itself so that the list of live faces stays current: splits add
the face they create, dissolves drop the face they destroy.
"""

from collections.abc import Iterator

from sweepvoronoi.core import dcel as primitives
from sweepvoronoi.core.dcel import Edge, Face, Vertex
from sweepvoronoi.domain import Point


class DCEL:
    """An edge list together with its live faces, in creation order."""

    def __init__(self) -> None:
        self._faces: list[Face] = []

    @classmethod
    def new(cls) -> "DCEL":
        """Build the initial structure: one edge, an interior and an exterior face.

        Returns:
            The wrapper; ``faces[0]`` is the interior, ``faces[1]`` the exterior
        """
        dcel = cls()
        edge = primitives.new_dcel()
        dcel._faces.append(edge.face)
        dcel._faces.append(edge.twin.face)
        return dcel

    @property
    def faces(self) -> list[Face]:
        """Snapshot of the live faces."""
        return list(self._faces)

    def __iter__(self) -> Iterator[Face]:
        return iter(list(self._faces))

    def __len__(self) -> int:
        return len(self._faces)

    def subdivide(self, edge: Edge, point: Point) -> Edge:
        return edge.subdivide(point)

    def collapse(self, edge: Edge) -> Vertex:
        return edge.collapse()

    def dissolve(self, edge: Edge) -> Face:
        """Dissolve ``edge`` and forget whichever face did not survive."""
        interior = edge.face
        exterior = edge.twin.face

        joined = edge.dissolve()
        self._faces.remove(exterior if joined is interior else interior)
        return joined

    def split_face_between(self, edge1: Edge, edge2: Edge) -> Edge:
        split = primitives.split_face_between(edge1, edge2)
        self._faces.append(split.twin.face)
        return split

    def split_face_with_parabola(self, focus: Point, edge1: Edge, edge2: Edge) -> Edge:
        split = primitives.split_face_with_parabola(focus, edge1, edge2)
        self._faces.append(split.twin.face)
        return split

    def rip_vertex(self, point: Point, fixed: Edge, moving: Edge) -> Edge:
        return primitives.rip_vertex(point, fixed, moving)

    def convert_to_straight(self, edge: Edge) -> Edge:
        return edge.convert_to_straight()
