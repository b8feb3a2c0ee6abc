"""Doubly-connected edge list used to build the diagram.

The edge list is a cyclic graph of three entity kinds:
- Vertex: a location plus one outgoing half-edge
- Edge: one oriented side of an edge, with twin/next/prev links, an origin
  and the face it bounds
- Face: one boundary half-edge and the site it represents, if any

Edges come in two kinds. Straight edges are ordinary segments; parabola
edges are beach line arcs and carry the site that generates them as their
focus. Both kinds share one class and are told apart by ``EdgeKind``.

Every topological edit in this module leaves twin, next/prev, face and
vertex rings consistent on return. Callers that need the face list kept in
step should go through ``sweepvoronoi.core.faces.DCEL`` instead of calling
these directly.
"""

import itertools
from collections.abc import Iterator
from enum import Enum, auto

from sweepvoronoi.core.validation import Violation
from sweepvoronoi.domain import Point
from sweepvoronoi.exceptions import InvariantViolationError, PreconditionError


class EdgeKind(Enum):
    """Geometric kind of a half-edge."""

    STRAIGHT = auto()
    PARABOLA = auto()


class Vertex:
    """A point in the edge list with one outgoing half-edge.

    The point of a beach line breakpoint is only meaningful once the
    breakpoint has been fixed by an event.
    """

    __slots__ = ("id", "point", "incident")

    _ids = itertools.count(1)

    def __init__(self, point: Point | None = None) -> None:
        self.id = next(Vertex._ids)
        self.point = point
        self.incident: Edge | None = None

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def incident_edges(self, max_steps: int | None = None) -> Iterator["Edge"]:
        """Iterate the half-edges leaving this vertex.

        The ring is walked through ``twin.next``. The starting edge is
        captured up front, so callers may re-point ``incident`` while
        iterating. A ring that reaches an edge it has already visited,
        other than the start, can never close and is reported.

        Args:
            max_steps: Optional hard bound on the ring size

        Yields:
            Each outgoing half-edge once

        Raises:
            InvariantViolationError: If the ring revisits an edge or grows past max_steps
        """
        end = self.incident
        if end is None:
            return
        seen: set[int] = set()
        edge = end
        while True:
            yield edge
            seen.add(edge.id)
            edge = edge.twin.next
            if edge is end:
                return
            if edge.id in seen or (max_steps is not None and len(seen) >= max_steps):
                raise InvariantViolationError(
                    [Violation("runaway_walk", f"edges around vertex {self.id} do not close", self.id)]
                )

    @property
    def degree(self) -> int:
        """Number of half-edges leaving this vertex."""
        return sum(1 for _ in self.incident_edges())

    def __repr__(self) -> str:
        incident = self.incident.id if self.incident is not None else None
        return f"Vertex#{self.id}(point={self.point}, incident={incident})"


class Face:
    """A face of the subdivision.

    Attributes:
        boundary: One half-edge on the boundary, None once dissolved
        contained: The site this face represents, if any
    """

    __slots__ = ("id", "boundary", "contained")

    _ids = itertools.count(1)

    def __init__(self) -> None:
        self.id = next(Face._ids)
        self.boundary: Edge | None = None
        self.contained: Point | None = None

    @property
    def is_alive(self) -> bool:
        return self.boundary is not None

    def edges(self, max_steps: int | None = None) -> Iterator["Edge"]:
        """Iterate the boundary half-edges in ``next`` order."""
        if self.boundary is None:
            return iter(())
        return self.boundary.face_edges(max_steps)

    def vertices(self) -> list[Vertex]:
        """Origins of the boundary half-edges in order."""
        return [edge.origin for edge in self.edges()]

    def polygon(self) -> list[Point]:
        """Boundary vertex locations in order."""
        return [vertex.point for vertex in self.vertices()]

    def __repr__(self) -> str:
        boundary = self.boundary.id if self.boundary is not None else None
        return f"Face#{self.id}(boundary={boundary}, contained={self.contained})"


class Edge:
    """One oriented half of an edge.

    Attributes:
        origin: Vertex this half-edge leaves from
        twin: The oppositely oriented half
        next: Following half-edge around ``face``
        prev: Preceding half-edge around ``face``
        face: The face this half-edge bounds
        horizontal: Marks the rectangle's top and bottom borders
        kind: STRAIGHT or PARABOLA
        focus: Generating site of a parabola edge, None otherwise
    """

    __slots__ = ("id", "origin", "twin", "next", "prev", "face", "horizontal", "kind", "focus")

    _ids = itertools.count(1)

    def __init__(self, kind: EdgeKind = EdgeKind.STRAIGHT, focus: Point | None = None) -> None:
        self.id = next(Edge._ids)
        self.origin: Vertex | None = None
        self.twin: Edge | None = None
        self.next: Edge | None = None
        self.prev: Edge | None = None
        self.face: Face | None = None
        self.horizontal = False
        self.kind = kind
        self.focus = focus

    @classmethod
    def pair(cls, kind: EdgeKind = EdgeKind.STRAIGHT, focus: Point | None = None) -> "Edge":
        """Create a half-edge together with its twin."""
        edge = cls(kind, focus)
        edge.set_twin(cls(kind, focus))
        return edge

    @property
    def is_parabola(self) -> bool:
        return self.kind is EdgeKind.PARABOLA

    @property
    def destination(self) -> Vertex:
        return self.twin.origin

    # Link helpers. Each keeps the reverse pointer in step.

    def set_origin(self, vertex: Vertex) -> None:
        self.origin = vertex
        vertex.incident = self

    def set_twin(self, twin: "Edge") -> None:
        self.twin = twin
        twin.twin = self

    def set_next(self, edge: "Edge") -> None:
        self.next = edge
        edge.prev = self

    def set_prev(self, edge: "Edge") -> None:
        self.prev = edge
        edge.next = self

    def set_face(self, face: Face | None) -> None:
        self.face = face
        if face is not None:
            face.boundary = self

    def set_horizontal(self, horizontal: bool) -> None:
        self.horizontal = horizontal
        self.twin.horizontal = horizontal

    def insert_successor(self, edge: "Edge") -> None:
        edge.set_next(self.next)
        self.set_next(edge)

    def insert_predecessor(self, edge: "Edge") -> None:
        edge.set_prev(self.prev)
        self.set_prev(edge)

    def remove(self) -> None:
        self.prev.set_next(self.next)

    def face_edges(self, max_steps: int | None = None) -> Iterator["Edge"]:
        """Iterate the half-edges around this edge's face, starting here.

        The walk needs no size bound: a broken cycle shows up as an edge
        visited twice before the start comes round again.

        Args:
            max_steps: Optional hard bound on the cycle length

        Raises:
            InvariantViolationError: If the cycle revisits an edge or grows past max_steps
        """
        seen: set[int] = set()
        edge = self
        while True:
            yield edge
            seen.add(edge.id)
            edge = edge.next
            if edge is self:
                return
            if edge.id in seen or (max_steps is not None and len(seen) >= max_steps):
                raise InvariantViolationError(
                    [Violation("runaway_walk", f"face cycle from edge {self.id} does not close", self.id)]
                )

    def subdivide(self, point: Point) -> "Edge":
        """Split this edge and its twin at a new vertex.

        This edge keeps its origin and now ends at ``point``; the returned
        successor runs from ``point`` to the old destination. Kind, focus,
        horizontal flag and faces are inherited.

        Args:
            point: Location of the new vertex

        Returns:
            The new successor edge
        """
        other = Edge.pair(self.kind, self.focus)
        other.twin.set_origin(self.twin.origin)

        vertex = Vertex(point)
        self.twin.set_origin(vertex)
        other.set_origin(vertex)

        self.insert_successor(other)
        self.twin.insert_predecessor(other.twin)

        if not self.is_parabola:
            other.set_horizontal(self.horizontal)

        other.set_face(self.face)
        other.twin.set_face(self.twin.face)

        return other

    def collapse(self) -> Vertex:
        """Remove this edge and its twin, merging their endpoints.

        Every edge leaving the destination vertex is re-pointed to this
        edge's origin, which survives.

        Returns:
            The surviving vertex
        """
        kept = self.origin
        for edge in list(self.twin.origin.incident_edges()):
            edge.set_origin(kept)

        self.next.face.boundary = self.next
        self.twin.next.face.boundary = self.twin.next

        self.remove()
        self.twin.remove()

        kept.incident = self.next
        return kept

    def dissolve(self) -> Face:
        """Remove this edge, merging the faces on either side.

        The twin's face is absorbed into this edge's face. Edges left
        dangling by the merge (chains reaching a degree-one vertex) are
        removed as well.

        Returns:
            The joined face
        """
        joined = self.face
        self.twin.face.boundary = None
        for edge in list(self.twin.face_edges()):
            edge.face = joined

        e1, e2 = self, self.twin
        while True:
            e1.face = e2.face = None
            e1 = e1.next
            e2 = e2.prev
            if e1 is not e2.twin:
                break
        e2.set_next(e1)
        e1.origin.incident = e1

        e1, e2 = self.twin, self
        while True:
            e1.face = e2.face = None
            e1 = e1.next
            e2 = e2.prev
            if e1 is not e2.twin:
                break
        e2.set_next(e1)
        e1.origin.incident = e1

        e2.face.boundary = e2
        return e2.face

    def convert_to_straight(self) -> "Edge":
        """Turn this parabola edge and its twin into straight edges in place.

        All links are kept, so references held elsewhere stay valid.

        Raises:
            PreconditionError: If the edge is not a parabola
        """
        if not self.is_parabola:
            raise PreconditionError("convert edge to straight", f"edge {self.id} is not a parabola")
        for edge in (self, self.twin):
            edge.kind = EdgeKind.STRAIGHT
            edge.focus = None
        return self

    def __repr__(self) -> str:
        def ref(item: "Edge | Vertex | Face | None") -> str:
            return "-" if item is None else f"#{item.id}"

        kind = f"PARABOLA(focus={self.focus})" if self.is_parabola else "STRAIGHT"
        flag = " H" if self.horizontal else ""
        return (
            f"Edge#{self.id} {kind}{flag} [origin={ref(self.origin)}, twin={ref(self.twin)}, "
            f"next={ref(self.next)}, prev={ref(self.prev)}, face={ref(self.face)}]"
        )


def _split_face(edge1: Edge, edge2: Edge, kind: EdgeKind, focus: Point | None) -> Edge:
    if edge1.face is not edge2.face:
        raise PreconditionError("split face", "edges bound different faces")

    split = Edge.pair(kind, focus)
    split.twin.set_origin(edge1.origin)
    split.set_origin(edge2.origin)

    edge1.prev.set_next(split.twin)
    edge2.prev.set_next(split)
    edge1.set_prev(split)
    edge2.set_prev(split.twin)

    split.set_face(edge1.face)

    new_face = Face()
    for edge in list(split.twin.face_edges()):
        edge.set_face(new_face)

    if split.face is new_face:
        raise InvariantViolationError(
            [Violation("face", f"split edge {split.id} ended up in the new face", split.id)]
        )
    return split


def split_face_between(edge1: Edge, edge2: Edge) -> Edge:
    """Split a face with a straight edge from ``edge2.origin`` to ``edge1.origin``.

    The returned edge keeps the original face (and leads into ``edge1``);
    its twin bounds the newly created face.

    Args:
        edge1: A boundary edge of the face
        edge2: Another boundary edge of the same face

    Returns:
        The new edge

    Raises:
        PreconditionError: If the edges bound different faces
    """
    return _split_face(edge1, edge2, EdgeKind.STRAIGHT, None)


def split_face_with_parabola(focus: Point, edge1: Edge, edge2: Edge) -> Edge:
    """Like ``split_face_between`` but inserts a parabola edge with ``focus``."""
    return _split_face(edge1, edge2, EdgeKind.PARABOLA, focus)


def rip_vertex(point: Point, fixed: Edge, moving: Edge) -> Edge:
    """Split the vertex shared by two edges into two joined by a new edge.

    ``fixed`` keeps the old vertex. ``moving`` and the edges found by
    continuing around from it move to a new vertex at ``point``.

    Args:
        point: Location of the new vertex
        fixed: Edge keeping the original vertex
        moving: Edge moved onto the new vertex

    Returns:
        The new edge, leaving the new vertex and leading into ``fixed``

    Raises:
        PreconditionError: If the edges do not share an origin
    """
    if fixed.origin is not moving.origin:
        raise PreconditionError("rip vertex", "edges have different origins")

    new = Edge.pair()
    vertex = Vertex(point)

    moving.set_origin(vertex)
    new.twin.set_origin(fixed.origin)

    fixed.insert_predecessor(new)
    moving.insert_predecessor(new.twin)

    new.set_face(fixed.face)
    new.twin.set_face(moving.face)

    for edge in list(vertex.incident_edges()):
        edge.set_origin(vertex)

    return new


def new_dcel() -> Edge:
    """Create the smallest edge list: one edge looping on one vertex.

    The edge bounds an interior face and its twin an exterior one.

    Returns:
        The single edge, whose face is the interior
    """
    edge = Edge.pair()
    edge.set_next(edge)
    edge.twin.set_next(edge.twin)

    vertex = Vertex()
    edge.set_origin(vertex)
    edge.twin.set_origin(vertex)

    edge.set_face(Face())
    edge.twin.set_face(Face())
    return edge
