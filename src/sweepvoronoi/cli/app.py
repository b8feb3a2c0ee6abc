"""CLI application entry point for sweep-voronoi.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from sweepvoronoi import __version__
from sweepvoronoi.cli.output import (
    console,
    print_check_result,
    print_error,
    print_face_table,
    print_header,
    print_site_info,
    print_step,
    print_success,
)
from sweepvoronoi.config import (
    DiagnosticsConfig,
    DuplicatePolicy,
    LoggingConfig,
    SiteConfig,
    VoronoiSettings,
)
from sweepvoronoi.core import (
    VoronoiSweep,
    euler_characteristic,
    face_area,
    face_centroid,
    validate_dcel,
)
from sweepvoronoi.domain import Bounds
from sweepvoronoi.exceptions import InvariantViolationError, SiteFileError, VoronoiError
from sweepvoronoi.io import read_sites, write_diagram
from sweepvoronoi.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="sweep-voronoi",
    help="Compute Voronoi diagrams of point sites clipped to a rectangle.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Sweep-Voronoi[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compute Voronoi diagrams of point sites clipped to a rectangle."""


def _resolve_bounds(
    declared: Bounds | None, override: tuple[float | None, ...]
) -> tuple[Bounds | None, bool]:
    """Pick the rectangle given on the command line over the file's one."""
    if None not in override:
        return Bounds(*override), True
    return declared, declared is not None


@app.command()
def compute(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Site file (JSON, or text with one 'x,y' per line)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the diagram as JSON to this path",
        ),
    ] = None,
    bounds: Annotated[
        tuple[float, float, float, float],
        typer.Option(
            "--bounds",
            "-b",
            help="Clipping rectangle MINX MINY MAXX MAXY (default: from file, or padded)",
            show_default=False,
        ),
    ] = (None, None, None, None),
    duplicates: Annotated[
        DuplicatePolicy,
        typer.Option(
            "--duplicates",
            help="Reject duplicate sites or drop later copies",
            case_sensitive=False,
        ),
    ] = DuplicatePolicy.ERROR,
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Validate the edge list after every step and at the end",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List every face",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build the Voronoi diagram of the sites in INPUT_FILE.

    Example:
        sweep-voronoi compute sites.json -o diagram.json

    Prints a summary of the finished diagram and, with --output, writes every
    site's face outline, area and centroid as JSON.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = VoronoiSettings(
        diagnostics=DiagnosticsConfig(check_invariants=check),
        sites=SiteConfig(duplicate_policy=duplicates),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper() if not quiet else "WARNING",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading sites")

        sites = read_sites(input_file)
        declared, is_declared = _resolve_bounds(sites.bounds, bounds)
        rect = declared if declared is not None else sites.resolve_bounds()

        if not quiet:
            print_site_info(str(input_file), len(sites), rect, is_declared)
            print_step("Sweeping")

        sweep = VoronoiSweep(sites.points, rect, settings)
        sweep.run()

        if check:
            violations = validate_dcel(
                sweep.faces(), settings.diagnostics.max_walk_steps, check_lengths=True
            )
            euler = euler_characteristic(sweep.faces())
            if not quiet:
                print_check_result(euler, len(violations))
            if violations:
                raise InvariantViolationError(violations)

        if output is not None:
            write_diagram(sweep, output)

        site_faces = sweep.site_faces()
        if verbose:
            rows = [
                (index, point, face_area(site_faces[point]), face_centroid(site_faces[point]))
                for index, point in enumerate(sweep.points())
                if point in site_faces
            ]
            print_face_table(rows)

        if not quiet:
            stats = sweep.stats
            print_success(
                output_path=str(output) if output is not None else None,
                total_time_s=stats.duration_seconds,
                faces=len(site_faces),
                events=stats.events_processed,
                circle_events=stats.circle_events,
                rejected=stats.candidates_rejected,
            )

    except SiteFileError as e:
        print_error(f"Could not read sites: {e.reason}")
        raise typer.Exit(code=1)
    except VoronoiError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write diagram: {e}")
        raise typer.Exit(code=1)


@app.command()
def dump(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Site file (JSON, or text with one 'x,y' per line)",
            show_default=False,
        ),
    ],
    steps: Annotated[
        int | None,
        typer.Option(
            "--steps",
            "-n",
            help="Number of events to process before dumping (default: all)",
            min=0,
        ),
    ] = None,
    bounds: Annotated[
        tuple[float, float, float, float],
        typer.Option(
            "--bounds",
            "-b",
            help="Clipping rectangle MINX MINY MAXX MAXY (default: from file, or padded)",
            show_default=False,
        ),
    ] = (None, None, None, None),
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
) -> None:
    """Print the sweep state after a number of events as JSON.

    Breakpoints are evaluated at the trigger height of the last processed
    event.
    """
    # stdout carries the JSON document, so only errors reach the console
    configure_logging(log_file=log_file, quiet=True)

    try:
        sites = read_sites(input_file)
        declared, _ = _resolve_bounds(sites.bounds, bounds)
        rect = declared if declared is not None else sites.resolve_bounds()

        sweep = VoronoiSweep(sites.points, rect)
        last = None
        while steps is None or sweep.events_processed < steps:
            event = sweep.step()
            if event is None:
                break
            last = event

        sweep_y = last.point.y if last is not None else None
        typer.echo(json.dumps(sweep.dump(sweep_y), indent=2))

    except SiteFileError as e:
        print_error(f"Could not read sites: {e.reason}")
        raise typer.Exit(code=1)
    except VoronoiError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
