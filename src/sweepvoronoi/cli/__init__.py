"""Command-line interface for sweep-voronoi.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Site files in JSON or plain text
- Optional JSON output of every face
- Structural checking of the finished diagram
- Step-by-step state dumps for debugging
"""

from sweepvoronoi.cli.app import app, cli

__all__ = ["app", "cli"]
