"""Sweep-voronoi - clipped planar Voronoi diagrams by Fortune's sweep.

Computes the Voronoi diagram of a finite set of sites clipped to an
axis-aligned rectangle. The diagram is built incrementally in a
doubly-connected edge list, one site or circle event at a time, so callers
can observe every intermediate beach line.

Example:
    >>> from sweepvoronoi import Bounds, Point, VoronoiSweep
    >>> sweep = VoronoiSweep([Point(0, 0), Point(10, 0)], Bounds(-5, -5, 15, 15))
    >>> _ = sweep.run()
    >>> len(sweep.site_faces())
    2
"""

from sweepvoronoi.core.sweep import VoronoiSweep
from sweepvoronoi.domain import Bounds, Point

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["Bounds", "Point", "VoronoiSweep", "__author__", "__version__"]
