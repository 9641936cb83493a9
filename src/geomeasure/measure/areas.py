"""Area aggregation over surfaces and surface collections."""

from __future__ import annotations

from geomeasure.measure.errors import MissingGeometryError, UnsupportedGeometryError
from geomeasure.models.geometry import Geometry, GeometryCollection, MultiSurface, Surface


def surface_area(surface: Surface) -> float:
    return surface.area


def multi_surface_area(multi_surface: MultiSurface) -> float:
    """Plain sum of element areas; overlapping elements are counted twice."""
    return multi_surface.area


def collection_area(collection: GeometryCollection) -> float:
    """Sum of the areas of all areal members, searching nested collections."""
    total = 0.0
    for geometry in collection.geometries:
        if isinstance(geometry, (Surface, MultiSurface, GeometryCollection)):
            total += area(geometry)
    return total


def area(geometry: Geometry) -> float:
    """Area of a Surface, MultiSurface or GeometryCollection.

    Raises:
        MissingGeometryError: geometry is None.
        UnsupportedGeometryError: geometry has no area (points, curves).
    """
    if geometry is None:
        raise MissingGeometryError("first")
    if isinstance(geometry, Surface):
        return surface_area(geometry)
    if isinstance(geometry, MultiSurface):
        return multi_surface_area(geometry)
    if isinstance(geometry, GeometryCollection):
        return collection_area(geometry)
    kind = getattr(geometry, "kind", type(geometry).__name__)
    raise UnsupportedGeometryError(str(kind))
