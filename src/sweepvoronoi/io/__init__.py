"""Site and diagram I/O layer for sweep-voronoi.

This module handles reading site files and writing finished diagrams.
It keeps file formats out of the core algorithms.

Key responsibilities:
- Load sites (and optional bounds) from JSON or text files
- Convert raw records to domain models
- Serialize site faces with outlines, areas and centroids

Key functions:
- read_sites: Load a site file into a SiteSet
- diagram_to_dict: JSON-ready view of a sweep's faces
- write_diagram: Save that view to disk
"""

from sweepvoronoi.io.reader import SiteSet, read_sites
from sweepvoronoi.io.writer import diagram_to_dict, write_diagram

__all__ = [
    "SiteSet",
    "diagram_to_dict",
    "read_sites",
    "write_diagram",
]
