"""Geometry data models."""

from geomeasure.models.coordinate import Coordinate, Envelope
from geomeasure.models.metadata import MetadataCollection, MetadataFactory
from geomeasure.models.geometry import (
    COLLECTION_KINDS,
    AnyGeometry,
    Curve,
    Geometry,
    GeometryCollection,
    GeometryKind,
    MultiCurve,
    MultiPoint,
    MultiSurface,
    Point,
    Surface,
    load_geometry,
    parse_geometry,
)

__all__ = [
    "Coordinate",
    "Envelope",
    "MetadataCollection",
    "MetadataFactory",
    "COLLECTION_KINDS",
    "AnyGeometry",
    "Geometry",
    "GeometryKind",
    "Point",
    "Curve",
    "Surface",
    "MultiPoint",
    "MultiCurve",
    "MultiSurface",
    "GeometryCollection",
    "load_geometry",
    "parse_geometry",
]
