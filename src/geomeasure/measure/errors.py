"""Measurement errors.

Degenerate geometries (zero-length curves, surfaces with fewer than three
distinct vertices) are not errors; they measure to well-defined numbers.
"""

from __future__ import annotations


class MeasureError(ValueError):
    """Base class for measurement failures."""


class MissingGeometryError(MeasureError):
    """An operand is None."""

    def __init__(self, name: str):
        super().__init__(f"The {name} geometry is None")
        self.name = name


class UnsupportedGeometryError(MeasureError):
    """No algorithm is registered for the operand kinds."""

    def __init__(self, *kinds: str):
        if len(kinds) == 1:
            message = f"Unsupported geometry type: {kinds[0]}"
        else:
            message = f"Unsupported geometry type pair: {kinds[0]} and {kinds[1]}"
        super().__init__(message)
        self.kinds = kinds


class EmptyGeometryError(MeasureError):
    """Distance to a geometry with no coordinates is undefined."""

    def __init__(self, kind: str):
        super().__init__(f"Cannot measure distance to an empty {kind}")
        self.kind = kind


class OperatorClosedError(RuntimeError):
    """The operator was used after close()."""
