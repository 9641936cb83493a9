"""geomeasure CLI.

Usage:
    python -m geomeasure distance <a.json> <b.json>
    python -m geomeasure area <geometry.json>

Geometries are JSON objects tagged with "kind", for example
{"kind": "point", "coordinate": [3, 4, 0]}. Output is always JSON.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from geomeasure.config import MeasureSettings
from geomeasure.measure import MeasureError, MeasureOperator
from geomeasure.models.geometry import Geometry, load_geometry

app = typer.Typer(
    name="geomeasure",
    help="Distance and area measurement for JSON geometries.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _load(path: Path) -> Geometry:
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        return load_geometry(path)
    except ValidationError as e:
        _fail(f"Invalid geometry in {path}: {e.error_count()} error(s): {e.errors()[0]['msg']}")
    except (UnicodeDecodeError, OSError) as e:
        _fail(f"Cannot read {path}: {e}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@app.command()
def distance(
    first: Path = typer.Argument(..., help="JSON file of the first geometry"),
    second: Path = typer.Argument(..., help="JSON file of the second geometry"),
):
    """Distance between two geometries."""
    a, b = _load(first), _load(second)
    try:
        with MeasureOperator(MeasureSettings.from_env()) as op:
            result = op.distance(a, b)
    except MeasureError as e:
        _fail(str(e))
    _output({"ok": True, "kinds": [a.kind, b.kind], "distance": result})


@app.command()
def area(
    geometry: Path = typer.Argument(..., help="JSON file of a surface, multi-surface or collection"),
):
    """Area of a surface geometry."""
    g = _load(geometry)
    try:
        with MeasureOperator(MeasureSettings.from_env()) as op:
            result = op.area(g)
    except MeasureError as e:
        _fail(str(e))
    _output({"ok": True, "kind": g.kind, "area": result})


@app.command()
def version() -> None:
    """Show version."""
    from geomeasure import __version__

    _output({"ok": True, "version": __version__})


if __name__ == "__main__":
    app()
