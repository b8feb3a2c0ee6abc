"""Domain models for sweep-voronoi.

This module contains the value types the diagram is expressed in. All
models are immutable frozen dataclasses, independent of the edge list that
references them.

Key classes:
- Point: A 2D point
- Bounds: The axis-aligned clipping rectangle
- Line: A directed segment
- Circle: A circle with center and radius
"""

from sweepvoronoi.domain.primitives import Bounds, Circle, Line, Point

__all__: list[str] = [
    "Bounds",
    "Circle",
    "Line",
    "Point",
]
