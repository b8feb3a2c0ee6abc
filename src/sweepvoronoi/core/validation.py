"""Structural checks for the edge list.

Validation is a diagnostic pass: it walks every live face and vertex and
reports what is wrong instead of raising, so callers decide whether a
broken structure is fatal. The sweep runs it after every step only when
``DiagnosticsConfig.check_invariants`` is enabled.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sweepvoronoi.core.dcel import Edge, Face, Vertex


@dataclass(frozen=True, slots=True)
class Violation:
    """One broken relationship in the edge list.

    Attributes:
        kind: Category (twin, next_prev, face, vertex, zero_length, runaway_walk)
        message: Human readable description
        element_id: Id of the offending vertex, edge or face
    """

    kind: str
    message: str
    element_id: int | None = None

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"


def _face_cycle(face: "Face", max_steps: int | None, violations: list[Violation]) -> list["Edge"]:
    cycle: list[Edge] = []
    seen: set[int] = set()
    start = face.boundary
    edge = start
    while True:
        cycle.append(edge)
        seen.add(edge.id)
        edge = edge.next
        if edge is None:
            violations.append(
                Violation("next_prev", f"edge {cycle[-1].id} has no next edge", cycle[-1].id)
            )
            return cycle
        if edge is start:
            return cycle
        if edge.id in seen or (max_steps is not None and len(cycle) >= max_steps):
            violations.append(
                Violation("runaway_walk", f"face {face.id} boundary does not close", face.id)
            )
            return cycle


def _check_vertex(vertex: "Vertex", max_steps: int | None, violations: list[Violation]) -> None:
    start = vertex.incident
    if start is None:
        violations.append(Violation("vertex", f"vertex {vertex.id} has no incident edge", vertex.id))
        return
    seen: set[int] = set()
    edge = start
    while True:
        if edge.origin is not vertex:
            violations.append(
                Violation(
                    "vertex",
                    f"edge {edge.id} around vertex {vertex.id} has origin "
                    f"{edge.origin.id if edge.origin else None}",
                    vertex.id,
                )
            )
            return
        seen.add(edge.id)
        if edge.twin is None or edge.twin.next is None:
            return
        edge = edge.twin.next
        if edge is start:
            return
        if edge.id in seen or (max_steps is not None and len(seen) >= max_steps):
            violations.append(
                Violation("runaway_walk", f"edges around vertex {vertex.id} do not close", vertex.id)
            )
            return


def _check_edge_length(edge: "Edge", violations: list[Violation]) -> None:
    if edge.origin is edge.twin.origin:
        violations.append(
            Violation("zero_length", f"edge {edge.id} starts and ends at one vertex", edge.id)
        )
    elif edge.origin.point is not None and edge.origin.point == edge.twin.origin.point:
        violations.append(
            Violation("zero_length", f"edge {edge.id} has zero length at {edge.origin.point}", edge.id)
        )


def validate_dcel(
    faces: Iterable["Face"],
    max_steps: int | None = None,
    check_lengths: bool = False,
) -> list[Violation]:
    """Check the twin, next/prev, face and vertex relationships.

    Face and vertex walks stop at the first edge they visit twice, so no
    bound is needed for them to terminate.

    Args:
        faces: The live faces of the edge list
        max_steps: Optional hard bound on every face or vertex walk
        check_lengths: Also require distinct endpoints for every edge. Only
            meaningful once the diagram is finished, since beach line
            breakpoints sit on top of each other while the sweep runs.

    Returns:
        Every violation found, empty when the structure is consistent
    """
    violations: list[Violation] = []
    vertices: dict[int, Vertex] = {}

    for face in faces:
        if face.boundary is None:
            violations.append(Violation("face", f"face {face.id} has been dissolved", face.id))
            continue

        for edge in _face_cycle(face, max_steps, violations):
            if edge.twin is None or edge.twin.twin is not edge:
                violations.append(Violation("twin", f"edge {edge.id} twin is not symmetric", edge.id))
            if edge.next is not None and edge.next.prev is not edge:
                violations.append(
                    Violation("next_prev", f"edge {edge.id} next does not point back", edge.id)
                )
            if edge.prev is None or edge.prev.next is not edge:
                violations.append(
                    Violation("next_prev", f"edge {edge.id} prev does not point back", edge.id)
                )
            if edge.face is not face:
                violations.append(
                    Violation("face", f"edge {edge.id} on face {face.id} has another face", edge.id)
                )
            if edge.origin is None:
                violations.append(Violation("vertex", f"edge {edge.id} has no origin", edge.id))
            else:
                vertices.setdefault(edge.origin.id, edge.origin)
                if check_lengths and edge.twin is not None and edge.twin.origin is not None:
                    _check_edge_length(edge, violations)

    for vertex in vertices.values():
        _check_vertex(vertex, max_steps, violations)

    return violations


def element_counts(faces: Iterable["Face"]) -> tuple[int, int, int]:
    """Count live vertices, edges (twin pairs) and faces.

    Returns:
        Tuple of (vertices, edges, faces)
    """
    vertex_ids: set[int] = set()
    half_edges = 0
    face_count = 0
    for face in faces:
        face_count += 1
        for edge in face.edges():
            half_edges += 1
            vertex_ids.add(edge.origin.id)
    return len(vertex_ids), half_edges // 2, face_count


def euler_characteristic(faces: Iterable["Face"]) -> int:
    """``V - E + F`` for the edge list; 2 for any connected planar subdivision."""
    v, e, f = element_counts(faces)
    return v - e + f
