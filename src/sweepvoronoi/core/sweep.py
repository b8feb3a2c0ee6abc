"""Sweep-line construction of a clipped Voronoi diagram.

This module drives Fortune's algorithm over the edge list:
1. Sites are queued and processed from the bottom of the rectangle upward
   (decreasing y)
2. A site event inserts a new arc into the beach line face
3. A circle event collapses a vanishing arc into a diagram vertex
4. Vertices found beyond the provisional top border get their edges cut at
   the border and the pieces above it merged away
5. When the queue empties, the remaining arcs are stitched to the left and
   right borders and all scratch faces are dissolved

The beach line is represented by the boundary of a dedicated face: walking
``next`` from the right border visits the beach pieces right to left and
ends at the left border and the top border.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from sweepvoronoi.config import DuplicatePolicy, VoronoiSettings, get_default_settings
from sweepvoronoi.core.dcel import Edge, Face
from sweepvoronoi.core.events import (
    CircleEvent,
    Event,
    EventQueue,
    SiteEvent,
    can_generate_event,
    is_valid_event,
)
from sweepvoronoi.core.faces import DCEL
from sweepvoronoi.core.kernel import (
    beach_line_intersection_x,
    circle_center_x,
    intersect_line_horizontal,
)
from sweepvoronoi.core.validation import Violation, euler_characteristic, validate_dcel
from sweepvoronoi.domain import Bounds, Point
from sweepvoronoi.exceptions import DegenerateSitesError, InvalidSiteError, InvariantViolationError
from sweepvoronoi.utils.logging import SweepLogger, SweepStats

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BeachArc:
    """One piece of the beach line at a given sweep height.

    Attributes:
        edge: The beach line edge
        focus: Generating site, None for a straight piece
        left_x: X of the breakpoint with the piece on the left
        right_x: X of the breakpoint with the piece on the right
    """

    edge: Edge
    focus: Point | None
    left_x: float
    right_x: float


class VoronoiSweep:
    """Incremental construction of the Voronoi diagram of sites in a rectangle.

    Each call to ``step`` processes one event and leaves the edge list
    consistent. The object has a single writer: callers that read faces
    from another thread must serialize those reads with ``step`` (one lock
    around each call is enough). No locking is done internally.

    Example:
        >>> sweep = VoronoiSweep([Point(0, 0), Point(10, 0)], Bounds(-5, -5, 15, 15))
        >>> while sweep.step() is not None:
        ...     pass
        >>> sorted(p.x for p in sweep.site_faces())
        [0, 10]
    """

    def __init__(
        self,
        points: Iterable[Point],
        bounds: Bounds,
        settings: VoronoiSettings | None = None,
        sweep_logger: SweepLogger | None = None,
    ) -> None:
        """Set up the rectangle and queue one site event per point.

        Args:
            points: Sites, each strictly inside ``bounds``
            bounds: Clipping rectangle
            settings: Application settings (defaults if None)
            sweep_logger: Logger collecting statistics (new one if None)

        Raises:
            InvalidSiteError: If a site is outside the bounds, non-finite, or a
                duplicate under the ``error`` policy
        """
        self._bounds = bounds
        self._settings = settings or get_default_settings()
        self._log = sweep_logger or SweepLogger()
        self._points = self._prepare_points(points)

        self._dcel = DCEL.new()
        top = self._dcel.faces[0].boundary
        top.origin.point = bounds.top_left
        right = self._dcel.subdivide(top, bounds.top_right)
        bottom = self._dcel.subdivide(right, bounds.bottom_right)
        left = self._dcel.subdivide(bottom, bounds.bottom_left)
        top.set_horizontal(True)
        bottom.set_horizontal(True)

        self._top_border: Edge | None = top
        self._right_border = right
        self._left_border = left
        self._beach_line = top.face
        self._infinite_face = top.twin.face
        self._top_points: dict[Face, Edge] = {}

        self._queue = EventQueue()
        for point in self._points:
            self._queue.push(SiteEvent(point))

        self._events_processed = 0
        self._log.log_start(len(self._points))

    def _prepare_points(self, points: Iterable[Point]) -> list[Point]:
        policy = self._settings.sites.duplicate_policy
        prepared: list[Point] = []
        seen: set[Point] = set()

        for raw in points:
            point = raw if isinstance(raw, Point) else Point(float(raw[0]), float(raw[1]))
            if not point.is_finite():
                raise InvalidSiteError(point, "coordinates must be finite")
            if not self._bounds.contains(point):
                raise InvalidSiteError(point, "site must lie strictly inside the bounds")
            if point in seen:
                if policy == DuplicatePolicy.ERROR:
                    raise InvalidSiteError(point, "duplicate site")
                self._log.log_duplicate_dropped(point)
                continue
            seen.add(point)
            prepared.append(point)

        return prepared

    # Query surface

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def top_border(self) -> Edge | None:
        """The provisional top border edge, None once the diagram is finalized."""
        return self._top_border

    @property
    def is_finished(self) -> bool:
        return not self._queue

    @property
    def events_processed(self) -> int:
        return self._events_processed

    @property
    def stats(self) -> SweepStats:
        return self._log.stats

    def has_events(self) -> bool:
        return bool(self._queue)

    def next_event(self) -> Event | None:
        """The event ``step`` would process next, without removing it."""
        return self._queue.peek()

    def faces(self) -> list[Face]:
        """Snapshot of the live faces, including the special ones."""
        return self._dcel.faces

    def is_special_face(self, face: Face) -> bool:
        """True for the beach line face and the infinite face."""
        return face is self._beach_line or face is self._infinite_face

    def points(self) -> list[Point]:
        """The input sites, in input order, without dropped duplicates."""
        return list(self._points)

    def pending_events(self) -> list[Event]:
        """Snapshot of the queue in processing order."""
        return self._queue.snapshot()

    def site_faces(self) -> dict[Point, Face]:
        """Map each site to the face containing it."""
        return {
            face.contained: face
            for face in self._dcel.faces
            if not self.is_special_face(face) and face.contained is not None
        }

    def beach_line(self, sweep_y: float) -> list[BeachArc]:
        """Pieces of the beach line and their breakpoints at ``sweep_y``.

        Args:
            sweep_y: Sweep line height to evaluate breakpoints at

        Returns:
            Beach line pieces ordered left to right (empty once finalized)
        """
        if self._top_border is None:
            return []

        arcs: list[BeachArc] = []
        edge = self._right_border.next
        while edge is not self._left_border:
            arcs.append(
                BeachArc(
                    edge=edge,
                    focus=edge.focus,
                    left_x=beach_line_intersection_x(edge, edge.next, sweep_y),
                    right_x=beach_line_intersection_x(edge.prev, edge, sweep_y),
                )
            )
            edge = edge.next
        arcs.reverse()
        return arcs

    def dump(self, sweep_y: float | None = None) -> dict[str, Any]:
        """Structured snapshot of the beach line, queue and faces.

        Purely diagnostic; state is not modified.

        Args:
            sweep_y: If given, each beach line edge also reports the x of its
                breakpoint with the following edge at this height

        Returns:
            Dictionary with beach_line, events and faces entries
        """
        borders = {
            id(self._top_border): "top",
            id(self._left_border): "left",
            id(self._right_border): "right",
        }

        beach: list[dict[str, Any]] = []
        if self._top_border is not None:
            edge = self._top_border
            while True:
                entry: dict[str, Any] = {
                    "edge": edge.id,
                    "border": borders.get(id(edge)),
                    "kind": edge.kind.name.lower(),
                    "focus": edge.focus.to_dict() if edge.focus else None,
                    "horizontal": edge.horizontal,
                    "origin": edge.origin.point.to_dict(),
                }
                if sweep_y is not None and edge is not self._left_border:
                    entry["x"] = beach_line_intersection_x(edge, edge.next, sweep_y)
                beach.append(entry)
                edge = edge.next
                if edge is self._top_border:
                    break

        faces: list[dict[str, Any]] = []
        for face in self._dcel.faces:
            if face is self._beach_line:
                role = "beach_line"
            elif face is self._infinite_face:
                role = "outside"
            else:
                role = None
            contained = face.contained
            faces.append(
                {
                    "face": face.id,
                    "role": role,
                    "point": contained.to_dict() if contained else None,
                    "site_index": self._points.index(contained) if contained in self._points else None,
                    "edges": [edge.id for edge in face.edges()],
                }
            )

        return {
            "sweep_y": sweep_y,
            "finished": self.is_finished,
            "events_processed": self._events_processed,
            "beach_line": beach,
            "events": [event.to_dict() for event in self._queue.snapshot()],
            "faces": faces,
        }

    # Driving

    def step(self) -> Event | None:
        """Process the next event.

        Returns:
            The processed event, or None if there was nothing left to do

        Raises:
            InvariantViolationError: If invariant checking is enabled and the
                edge list is inconsistent after the step
            DegenerateSitesError: If this step finalized the diagram and an
                exact tie left a site without a face
        """
        if not self._queue:
            return None

        event = self._queue.pop()
        if isinstance(event, CircleEvent):
            self._handle_circle_event(event)
        else:
            self._handle_site_event(event)
        self._events_processed += 1

        if not self._queue and self._top_border is not None:
            self._finish(event)

        if self._settings.diagnostics.check_invariants:
            self._check_invariants()

        return event

    def run(self) -> int:
        """Step until the queue is empty.

        Returns:
            Number of events processed by this call
        """
        count = 0
        while self.step() is not None:
            count += 1
        return count

    def advance_to(self, sweep_y: float) -> list[Event]:
        """Process every event whose trigger point is at or below ``sweep_y``.

        Args:
            sweep_y: Sweep height to advance to

        Returns:
            The processed events, in order
        """
        processed: list[Event] = []
        while self._queue and self._queue.peek().point.y >= sweep_y:
            processed.append(self.step())
        return processed

    def _check_invariants(self) -> None:
        faces = self._dcel.faces
        violations = validate_dcel(
            faces,
            self._settings.diagnostics.max_walk_steps,
            check_lengths=self._top_border is None,
        )
        if not violations:
            euler = euler_characteristic(faces)
            if euler != 2:
                violations.append(Violation("euler", f"V - E + F is {euler}, expected 2"))
        if violations:
            logger.error("invariant_violation", count=len(violations), first=str(violations[0]))
            raise InvariantViolationError(violations)

    # Event handling

    def _queue_circle_event(self, generating: Event, mid: Edge) -> None:
        if not can_generate_event(mid):
            return
        candidate = CircleEvent(mid)
        if is_valid_event(generating, candidate):
            self._queue.push(candidate)
            self._log.log_circle_event_queued(candidate.center, candidate.point.y)
        else:
            self._log.log_candidate_rejected(candidate.center)

    def _handle_site_event(self, event: SiteEvent) -> None:
        point = event.point
        self._log.log_site_event(point)

        top = self._top_border
        edge = top.next
        while edge is not top:
            if beach_line_intersection_x(edge, edge.next, point.y) < point.x:
                break
            edge = edge.next
        else:
            raise InvariantViolationError(
                [Violation("beach_line", f"no beach line piece above site {point}", None)]
            )

        removed = self._queue.remove_if(
            lambda queued: isinstance(queued, CircleEvent) and queued.mid is edge
        )
        self._log.log_events_invalidated(removed)

        next_edge = self._dcel.subdivide(edge, edge.origin.point)
        mid = self._dcel.subdivide(edge, edge.origin.point)

        arc = self._dcel.split_face_with_parabola(point, next_edge, mid)
        arc.twin.face.contained = point

        if mid.is_parabola:
            self._dcel.convert_to_straight(mid)

        self._queue_circle_event(event, arc.prev)
        self._queue_circle_event(event, arc.next)

    def _handle_circle_event(self, event: CircleEvent) -> None:
        mid = event.mid
        self._log.log_circle_event(event.center, event.radius)

        removed = self._queue.remove_if(
            lambda queued: isinstance(queued, CircleEvent)
            and (queued.mid.prev is mid or queued.mid.next is mid)
        )
        self._log.log_events_invalidated(removed)

        prev = mid.prev
        nxt = mid.next
        next_origin = nxt.origin.point

        twin_next = mid.twin.next
        twin_prev = mid.twin.prev

        fixed = mid.prev.twin
        moving = mid.next.twin.next
        if moving is mid.twin:
            moving = moving.next

        self._dcel.collapse(mid)
        self._dcel.rip_vertex(event.center, fixed, moving)

        if not nxt.is_parabola:
            fixed.origin.point = next_origin

        for neighbour in (prev, nxt):
            if neighbour is not self._left_border and neighbour is not self._right_border:
                self._queue_circle_event(event, neighbour)

        if event.center.y < self._top_border.origin.y:
            self._split_top(twin_prev, right=False)
            self._split_top(twin_next, right=True)
            twin_next.face.contained = None
            self._join_faces_above_top(twin_next)

    def _join_faces_above_top(self, start: Edge) -> None:
        """Dissolve site-less faces around ``start``'s face into it."""
        infinite = self._top_border.twin.face
        limit = self._settings.diagnostics.max_walk_steps
        seen: set[int] = set()
        edge = start
        while True:
            neighbour = edge.twin.face
            if neighbour is not infinite and neighbour.contained is None:
                self._dcel.dissolve(edge)
                while edge.face is None:
                    edge = edge.next
                seen.clear()
            else:
                seen.add(edge.id)
                edge = edge.next
            if edge is start:
                return
            if edge.id in seen or (limit is not None and len(seen) >= limit):
                raise InvariantViolationError(
                    [Violation("runaway_walk", "joining faces above the top border does not end", start.id)]
                )

    def _split_top(self, edge: Edge, right: bool) -> bool:
        """Cut ``edge`` where it crosses the top border and stitch the border.

        Each face crossing the border is recorded the first time one of its
        edges is cut. The second cut on the same face closes it off with a
        new edge along the border, leaving the part above the border as a
        separate face.

        A vertex lying exactly on the border counts as below it. When the
        edge ends on such a vertex, that vertex is used as the cut instead of
        subdividing, so no zero-length edge is created.

        Args:
            edge: Edge that may cross the top border
            right: True if ``edge`` runs along the right side of its face's
                crossing, False for the left side

        Returns:
            True if the edge crossed the border and was cut
        """
        top_y = self._top_border.origin.y
        if (edge.origin.y < top_y) == (edge.next.origin.y < top_y):
            return False

        left_face = (edge if right else edge.twin).face
        right_face = (edge.twin if right else edge).face
        infinite = self._top_border.twin.face

        # outgoing and incoming leave the cut vertex on edge's side and on
        # its twin's side respectively
        if edge.next.origin.y == top_y:
            outgoing, incoming = edge.next, edge.twin
        elif edge.origin.y == top_y:
            outgoing, incoming = edge, edge.twin.next
        else:
            crossing = intersect_line_horizontal(edge.origin.point, edge.next.origin.point, top_y)
            outgoing, incoming = self._dcel.subdivide(edge, crossing), edge.twin

        if left_face in self._top_points and left_face is not infinite:
            opened = self._top_points.pop(left_face)
            border = self._dcel.split_face_between(opened, outgoing if right else incoming)
            border.twin.face.contained = border.face.contained
            self._log.log_top_border_split(left_face.id, closed=True)
        else:
            self._top_points[left_face] = outgoing if right else incoming
            self._log.log_top_border_split(left_face.id, closed=False)

        if right_face in self._top_points and right_face is not infinite:
            o1 = incoming if right else outgoing
            o2 = self._top_points.pop(right_face).prev
            border = self._dcel.split_face_between(o1, o2.next)
            border.twin.face.contained = border.face.contained
            self._log.log_top_border_split(right_face.id, closed=True)
        else:
            self._top_points[right_face] = incoming if right else outgoing
            self._log.log_top_border_split(right_face.id, closed=False)

        return True

    def _finish(self, last: Event) -> None:
        """Stitch the remaining arcs to the borders and drop scratch faces.

        The arcs left in the beach line belong to the sites with the
        smallest y. Their breakpoints are pinned at a height above the top
        border so that every remaining edge crosses it and gets cut, after
        which the top border, the beach line and everything above the border
        are merged into one outer face.
        """
        top = self._top_border
        top_y = top.origin.y
        y_end = min(last.point.y, top_y - self._bounds.height)

        arcs: list[Edge] = []
        edge = self._right_border.next
        while edge is not self._left_border:
            if not edge.is_parabola:
                raise InvariantViolationError(
                    [Violation("finalize", f"straight edge {edge.id} left in the beach line", edge.id)]
                )
            arcs.append(edge)
            edge = edge.next

        arcs[0].origin.point = Point(self._right_border.origin.x, y_end)
        arcs[-1].twin.origin.point = Point(self._left_border.origin.x, y_end)
        for arc, following in zip(arcs, arcs[1:]):
            arc.twin.origin.point = Point(circle_center_x(arc.focus, following.focus, y_end), y_end)

        self._split_top(arcs[0].twin.next, right=True)
        for arc in arcs:
            self._split_top(arc.twin.prev, right=False)
        for arc in arcs:
            arc.twin.face.contained = None

        self._dcel.dissolve(top)
        self._top_border = None

        outer = self._dcel.dissolve(arcs[0])
        start = outer.boundary
        edge = start
        limit = self._settings.diagnostics.max_walk_steps
        seen: set[int] = set()
        while edge is not start.prev:
            if edge.twin.face.contained is None:
                outer = self._dcel.dissolve(edge)
                edge = start = outer.boundary
                seen.clear()
            else:
                seen.add(edge.id)
                edge = edge.next
                if edge.id in seen or (limit is not None and len(seen) >= limit):
                    raise InvariantViolationError(
                        [Violation("runaway_walk", "dissolving scratch faces does not end", start.id)]
                    )

        self._top_points.clear()
        self._collapse_zero_length_edges()
        self._check_complete()
        self._log.log_finished(len(self._dcel))

    def _collapse_zero_length_edges(self) -> None:
        """Merge the endpoints of edges that start and end at the same point.

        Vertices from different events land on the same spot when sites are
        co-circular with a corner of the rectangle or with each other.
        """
        while True:
            edge = next(
                (
                    edge
                    for face in self._dcel.faces
                    for edge in face.edges()
                    if edge.origin is not edge.twin.origin
                    and edge.origin.point == edge.twin.origin.point
                ),
                None,
            )
            if edge is None:
                return
            self._log.log_zero_length_collapsed(edge.origin.point)
            self._dcel.collapse(edge)

    def _check_complete(self) -> None:
        covered = set(self.site_faces())
        missing = [point for point in self._points if point not in covered]
        if missing:
            logger.error("sites_without_face", count=len(missing), first=str(missing[0]))
            raise DegenerateSitesError(missing, f"{len(missing)} site(s) lost their face")

        euler = euler_characteristic(self._dcel.faces)
        if euler != 2:
            logger.error("disconnected_diagram", euler=euler)
            raise DegenerateSitesError(self._points, f"V - E + F is {euler}, expected 2")


def compute_diagram(
    points: Sequence[Point],
    bounds: Bounds,
    settings: VoronoiSettings | None = None,
) -> VoronoiSweep:
    """Build the complete diagram in one call.

    Args:
        points: Sites strictly inside ``bounds``
        bounds: Clipping rectangle
        settings: Application settings (defaults if None)

    Returns:
        The finished sweep
    """
    sweep = VoronoiSweep(points, bounds, settings)
    sweep.run()
    return sweep
