"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sweepvoronoi.domain import Bounds, Point

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Sweep-Voronoi[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_site_info(path: str, site_count: int, bounds: Bounds, declared: bool) -> None:
    """Print information about the loaded sites.

    Args:
        path: Path to the site file
        site_count: Number of sites read
        bounds: Clipping rectangle in use
        declared: Whether the rectangle came from the file or the command line
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)

    origin = "given" if declared else "padded"
    console.print(
        f"  {site_count:,} sites {SYM_DOT} bounds ({bounds.min_x:g}, {bounds.min_y:g}) "
        f"to ({bounds.max_x:g}, {bounds.max_y:g}) {origin}"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_face_table(rows: list[tuple[int, Point, float, Point]]) -> None:
    """Print one row per site face.

    Args:
        rows: (site index, site, area, centroid) tuples
    """
    table = Table(show_edge=False, box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("site")
    table.add_column("area", justify="right")
    table.add_column("centroid")

    for index, site, area, centroid in rows:
        table.add_row(
            str(index),
            f"({site.x:g}, {site.y:g})",
            f"{area:.4g}",
            f"({centroid.x:.4g}, {centroid.y:.4g})",
        )

    console.print(table)


def print_success(
    output_path: str | None,
    total_time_s: float,
    faces: int,
    events: int,
    circle_events: int,
    rejected: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file, None if nothing was written
        total_time_s: Total sweep time in seconds
        faces: Number of site faces
        events: Number of events processed
        circle_events: Number of circle events among them
        rejected: Number of circle event candidates rejected
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    console.print(f"  {faces} faces {SYM_DOT} {events} events {SYM_DOT} {circle_events} circle")
    console.print(f"  {rejected} candidates rejected")


def print_check_result(euler: int, violations: int) -> None:
    """Print the outcome of the structural check.

    Args:
        euler: V - E + F of the finished edge list
        violations: Number of invariant violations found
    """
    style = "green" if violations == 0 and euler == 2 else "red"
    console.print(
        f"  [{style}]{violations} violations[/{style}] {SYM_DOT} euler characteristic {euler}"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
