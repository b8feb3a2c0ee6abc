"""Sweep events and their priority queue.

Key classes:
- SiteEvent: The sweep reaching an input site
- CircleEvent: A beach line arc about to vanish at a diagram vertex
- EventQueue: Max-priority queue on the trigger point's y

The sweep moves toward decreasing y, so the event with the largest y is
processed first. Events with equal y come out in insertion order.
"""

import heapq
import itertools
import math
from collections.abc import Callable

from sweepvoronoi.core.dcel import Edge
from sweepvoronoi.core.kernel import circle_center, circle_center_x, circle_center_y
from sweepvoronoi.domain import Point


class SiteEvent:
    """The sweep line reaching an input site."""

    __slots__ = ("point",)

    def __init__(self, point: Point) -> None:
        self.point = point

    def to_dict(self) -> dict:
        return {"type": "site", "point": self.point.to_dict()}

    def __repr__(self) -> str:
        return f"SiteEvent(point={self.point})"


class CircleEvent:
    """The vanishing of the beach line piece ``mid``.

    The center is the circle through the foci of ``mid`` and its neighbours,
    with a straight neighbour fixing one coordinate of the center (a corner
    of the rectangle when only one piece is parabolic). The event triggers
    when the sweep reaches the top of that circle.

    Attributes:
        mid: The beach line edge that disappears
        center: Center of the circle, the new diagram vertex
        radius: Circle radius
        point: Trigger point, ``radius`` above the center
    """

    __slots__ = ("mid", "center", "radius", "point")

    def __init__(self, mid: Edge) -> None:
        foci: list[Point] = []
        straight: Edge | None = None
        for edge in (mid.prev, mid, mid.next):
            if edge.is_parabola:
                foci.append(edge.focus)
            else:
                straight = edge

        if len(foci) == 1:
            center = straight.origin.point
        elif len(foci) == 2 and straight.horizontal:
            y = straight.origin.y
            center = Point(circle_center_x(foci[0], foci[1], y), y)
        elif len(foci) == 2:
            x = straight.origin.x
            center = Point(x, circle_center_y(foci[0], foci[1], x))
        else:
            center = circle_center(foci[0], foci[1], foci[2])

        self.mid = mid
        self.center = center
        self.radius = center.distance(foci[0])
        self.point = Point(center.x, center.y - self.radius)

    def to_dict(self) -> dict:
        return {
            "type": "circle",
            "point": self.point.to_dict(),
            "center": self.center.to_dict(),
            "radius": self.radius,
            "edges": [self.mid.prev.id, self.mid.id, self.mid.next.id],
        }

    def __repr__(self) -> str:
        return (
            f"CircleEvent(point={self.point}, edges=({self.mid.prev.id}, "
            f"{self.mid.id}, {self.mid.next.id}))"
        )


Event = SiteEvent | CircleEvent


def can_generate_event(mid: Edge) -> bool:
    """Whether the beach line piece ``mid`` could ever vanish.

    A piece with no parabolic neighbour never shrinks, and one flanked by
    two pieces of the same arc would only produce a self-event.
    """
    prev_par = mid.prev.is_parabola
    next_par = mid.next.is_parabola
    if not prev_par and not next_par:
        return False
    if prev_par and next_par and mid.prev.focus == mid.next.focus:
        return False
    return True


def is_valid_event(generating: Event, candidate: CircleEvent) -> bool:
    """Whether a freshly built circle event should be queued.

    Non-finite circles never fire. When the middle piece and a neighbour
    are parabolic, the three reference points (foci, or points offset from
    the center along a straight neighbour) must turn clockwise; otherwise
    the breakpoints are diverging and the circle is spurious.

    Args:
        generating: The event being processed when the candidate was built
        candidate: The circle event to check

    Returns:
        True if the candidate belongs in the queue
    """
    if not (math.isfinite(candidate.radius) and candidate.point.is_finite()):
        return False

    mid = candidate.mid
    prev_par = mid.prev.is_parabola
    next_par = mid.next.is_parabola
    if not prev_par and not next_par:
        return False
    if not mid.is_parabola:
        return True

    center = candidate.center
    radius = candidate.radius
    pm = mid.focus
    if prev_par:
        pp = mid.prev.focus
    elif mid.prev.horizontal:
        pp = center.translate(radius, 0)
    else:
        pp = center.translate(0, radius)

    if next_par:
        pn = mid.next.focus
    elif mid.next.horizontal:
        pn = center.translate(-radius, 0)
    else:
        pn = center.translate(0, radius)

    return (pp.y - pn.y) * (pm.x - pp.x) - (pp.x - pn.x) * (pm.y - pp.y) <= 0


class EventQueue:
    """Binary heap of events keyed on decreasing trigger y."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Event]] = []
        self._counter = itertools.count()

    def push(self, event: Event) -> None:
        heapq.heappush(self._heap, (-event.point.y, next(self._counter), event))

    def pop(self) -> Event:
        """Remove and return the event with the largest y.

        Raises:
            IndexError: If the queue is empty
        """
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Event | None:
        return self._heap[0][2] if self._heap else None

    def remove_if(self, predicate: Callable[[Event], bool]) -> int:
        """Drop every event matching ``predicate``.

        Returns:
            Number of events removed
        """
        kept = [entry for entry in self._heap if not predicate(entry[2])]
        removed = len(self._heap) - len(kept)
        if removed:
            heapq.heapify(kept)
            self._heap = kept
        return removed

    def snapshot(self) -> list[Event]:
        """All queued events in the order they would be processed."""
        return [entry[2] for entry in sorted(self._heap, key=lambda entry: entry[:2])]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
