"""Measurement: distance dispatch, area aggregation and the operator facade."""

from geomeasure.measure.errors import (
    EmptyGeometryError,
    MeasureError,
    MissingGeometryError,
    OperatorClosedError,
    UnsupportedGeometryError,
)
from geomeasure.measure.dispatch import DistanceResolver
from geomeasure.measure.operator import EnvelopeCache, MeasureOperator, area, distance

__all__ = [
    "MeasureError",
    "MissingGeometryError",
    "UnsupportedGeometryError",
    "EmptyGeometryError",
    "OperatorClosedError",
    "DistanceResolver",
    "EnvelopeCache",
    "MeasureOperator",
    "area",
    "distance",
]
