"""Exception hierarchy for sweep-voronoi."""

from typing import Any


class VoronoiError(Exception):
    """Base exception for all sweep-voronoi errors."""

    pass


class InputError(VoronoiError):
    """Errors caused by invalid input to diagram construction."""

    pass


class InvalidBoundsError(InputError):
    """The clipping rectangle is unusable."""

    def __init__(self, bounds: Any, reason: str) -> None:
        self.bounds = bounds
        self.reason = reason
        super().__init__(f"Invalid bounds {bounds}: {reason}")


class InvalidSiteError(InputError):
    """An input site cannot be placed in the diagram."""

    def __init__(self, point: Any, reason: str) -> None:
        self.point = point
        self.reason = reason
        super().__init__(f"Invalid site {point}: {reason}")


class SiteFileError(InputError):
    """Error reading a site file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read sites from '{path}': {reason}")


class DegenerateSitesError(InputError):
    """The sites form an exact tie the sweep could not resolve.

    Raised from finalization when some site ended up without a face, or the
    finished edge list does not form one connected subdivision. Only exact
    coincidences between circle events, site events and the rectangle's
    borders can cause this. Moving the sites by a tiny amount breaks the tie.
    """

    def __init__(self, points: list[Any], reason: str) -> None:
        self.points = list(points)
        self.reason = reason
        shown = ", ".join(str(point) for point in self.points[:5])
        super().__init__(f"Degenerate sites ({shown}): {reason}")


class TopologyError(VoronoiError):
    """Errors raised by edge list operations."""

    pass


class PreconditionError(TopologyError):
    """A topological edit was called with arguments it cannot accept."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot {operation}: {reason}")


class InvariantViolationError(TopologyError):
    """The edge list is internally inconsistent.

    This is never caused by bad input; it means an edit left the structure
    broken and the construction cannot continue.
    """

    def __init__(self, violations: list[Any]) -> None:
        self.violations = list(violations)
        count = len(self.violations)
        first = self.violations[0] if self.violations else "unknown"
        super().__init__(f"{count} invariant violation(s), first: {first}")
