"""Core algorithms for sweep-voronoi.

This module contains the core algorithms for:

- Exact geometry (parabola breakpoints, circle centers, offset lines)
- The doubly-connected edge list and its topological edits
- Sweep events and their validity predicates
- The sweep-line driver that builds the diagram
- Face measurements (area, centroid, inset)

Key functions:
- beach_line_intersection_x: Breakpoint between two beach line pieces
- circle_center: Center of the circle through three points
- validate_dcel: Structural check of the edge list
- inset_polygon: Shrink a face outline by a fixed distance

Key classes:
- Edge, Vertex, Face: Edge list entities
- DCEL: Face-tracking wrapper around the edits
- SiteEvent, CircleEvent, EventQueue: Sweep events
- VoronoiSweep: Incremental diagram construction
"""

from sweepvoronoi.core.analysis import (
    face_area,
    face_centroid,
    face_inset,
    face_polygon,
    inset_polygon,
    point_in_polygon,
)
from sweepvoronoi.core.dcel import (
    Edge,
    EdgeKind,
    Face,
    Vertex,
    rip_vertex,
    split_face_between,
    split_face_with_parabola,
)
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
    circle_center,
    circle_center_x,
    circle_center_y,
    circle_tangent_to_lines,
    determinant3,
    distance_off_line,
    intersect_line_horizontal,
    offset_intersection,
    parabola_height,
    polygon_centroid,
    signed_area,
)
from sweepvoronoi.core.sweep import BeachArc, VoronoiSweep, compute_diagram
from sweepvoronoi.core.validation import (
    Violation,
    element_counts,
    euler_characteristic,
    validate_dcel,
)

__all__ = [
    # Edge list
    "DCEL",
    "Edge",
    "EdgeKind",
    "Face",
    "Vertex",
    "rip_vertex",
    "split_face_between",
    "split_face_with_parabola",
    # Events
    "CircleEvent",
    "Event",
    "EventQueue",
    "SiteEvent",
    "can_generate_event",
    "is_valid_event",
    # Sweep
    "BeachArc",
    "VoronoiSweep",
    "compute_diagram",
    # Validation
    "Violation",
    "element_counts",
    "euler_characteristic",
    "validate_dcel",
    # Geometry
    "beach_line_intersection_x",
    "circle_center",
    "circle_center_x",
    "circle_center_y",
    "circle_tangent_to_lines",
    "determinant3",
    "distance_off_line",
    "intersect_line_horizontal",
    "offset_intersection",
    "parabola_height",
    "polygon_centroid",
    "signed_area",
    # Analysis
    "face_area",
    "face_centroid",
    "face_inset",
    "face_polygon",
    "inset_polygon",
    "point_in_polygon",
]
