"""Geometry variants: points, curves, surfaces and their collections.

Each variant carries a ``kind`` tag. The tag is both the JSON
discriminator and the key the distance dispatch matrix is built on.
Curves, surfaces and collections are frozen; a Point may have its
coordinate replaced after construction.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from geomeasure.algorithms import polygons
from geomeasure.models.coordinate import Coordinate, Envelope
from geomeasure.models.metadata import MetadataCollection


class GeometryKind(str, Enum):
    """The closed set of geometry variants."""

    POINT = "point"
    CURVE = "curve"
    SURFACE = "surface"
    MULTI_POINT = "multi_point"
    MULTI_CURVE = "multi_curve"
    MULTI_SURFACE = "multi_surface"
    GEOMETRY_COLLECTION = "geometry_collection"

    @property
    def is_collection(self) -> bool:
        return self in COLLECTION_KINDS


COLLECTION_KINDS = frozenset(
    {
        GeometryKind.MULTI_POINT,
        GeometryKind.MULTI_CURVE,
        GeometryKind.MULTI_SURFACE,
        GeometryKind.GEOMETRY_COLLECTION,
    }
)


def _envelope(coordinates: list[tuple[float, float, float]]) -> Envelope | None:
    box = polygons.bounds(coordinates)
    if box is None:
        return None
    return Envelope.from_bounds(*box)


class Geometry(BaseModel):
    """Common base of all geometry variants."""

    metadata: MetadataCollection | None = Field(default=None, exclude=True, repr=False)

    @property
    def geometry_kind(self) -> GeometryKind:
        return GeometryKind(self.kind)

    @property
    def dimension(self) -> int:
        raise NotImplementedError

    @property
    def is_empty(self) -> bool:
        raise NotImplementedError

    @property
    def envelope(self) -> Envelope | None:
        raise NotImplementedError

    @property
    def centroid(self) -> Coordinate | None:
        raise NotImplementedError

    def distance_to(self, other: Geometry) -> float:
        """Distance to another geometry, measured by a short-lived operator."""
        from geomeasure.measure.operator import distance

        return distance(self, other)


class Point(Geometry):
    """A single location. ``x``, ``y`` and ``z`` write through to the coordinate."""

    model_config = ConfigDict(validate_assignment=True)

    kind: Literal["point"] = "point"
    coordinate: Coordinate

    @model_validator(mode="before")
    @classmethod
    def fold_components(cls, data: Any) -> Any:
        if isinstance(data, dict) and "coordinate" not in data and "x" in data:
            data = dict(data)
            data["coordinate"] = {axis: data.pop(axis) for axis in ("x", "y", "z") if axis in data}
        return data

    @property
    def x(self) -> float:
        return self.coordinate.x

    @x.setter
    def x(self, value: float) -> None:
        self.coordinate = self.coordinate.model_copy(update={"x": float(value)})

    @property
    def y(self) -> float:
        return self.coordinate.y

    @y.setter
    def y(self, value: float) -> None:
        self.coordinate = self.coordinate.model_copy(update={"y": float(value)})

    @property
    def z(self) -> float:
        return self.coordinate.z

    @z.setter
    def z(self, value: float) -> None:
        self.coordinate = self.coordinate.model_copy(update={"z": float(value)})

    @property
    def dimension(self) -> int:
        return 0

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def envelope(self) -> Envelope:
        return Envelope(minimum=self.coordinate, maximum=self.coordinate)

    @property
    def centroid(self) -> Coordinate:
        return self.coordinate


class Curve(Geometry):
    """An open polyline. One vertex or fewer is a zero-length curve."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["curve"] = "curve"
    coordinates: tuple[Coordinate, ...] = ()

    @property
    def dimension(self) -> int:
        return 1

    @property
    def is_empty(self) -> bool:
        return not self.coordinates

    @property
    def is_degenerate(self) -> bool:
        return len(set(self.coordinates)) <= 1

    @property
    def is_closed(self) -> bool:
        return len(self.coordinates) > 1 and self.coordinates[0] == self.coordinates[-1]

    @property
    def length(self) -> float:
        """Sum of segment lengths."""
        return sum(a.distance_to(b) for a, b in zip(self.coordinates, self.coordinates[1:]))

    def segments(self) -> list[tuple[tuple[float, float, float], tuple[float, float, float]]]:
        """Consecutive-vertex segments as coordinate tuples."""
        if not self.coordinates:
            return []
        return polygons.path_segments(polygons.as_tuples(self.coordinates))

    @property
    def envelope(self) -> Envelope | None:
        return _envelope(polygons.as_tuples(self.coordinates))

    @property
    def centroid(self) -> Coordinate | None:
        return Coordinate.centroid(self.coordinates)


class Surface(Geometry):
    """A polygon: one outer ring (the shell) and any number of holes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["surface"] = "surface"
    shell: tuple[Coordinate, ...] = ()
    holes: tuple[tuple[Coordinate, ...], ...] = ()

    @property
    def dimension(self) -> int:
        return 2

    @property
    def is_empty(self) -> bool:
        return not self.shell

    @property
    def is_degenerate(self) -> bool:
        """Fewer than 3 distinct shell vertices: no interior, zero area."""
        return len(set(self.shell)) < 3

    def rings(self) -> list[tuple[Coordinate, ...]]:
        return [self.shell, *self.holes]

    @property
    def area(self) -> float:
        """Shell area minus hole areas (XY plane)."""
        return polygons.surface_area(
            polygons.as_tuples(self.shell),
            [polygons.as_tuples(hole) for hole in self.holes],
        )

    @property
    def perimeter(self) -> float:
        """Total boundary length of the shell and all holes."""
        return sum(polygons.ring_length(polygons.as_tuples(ring)) for ring in self.rings())

    @property
    def envelope(self) -> Envelope | None:
        return _envelope([c for ring in self.rings() for c in polygons.as_tuples(ring)])

    @property
    def centroid(self) -> Coordinate | None:
        return Coordinate.centroid(polygons.open_ring(list(self.shell)))


class _GeometryList(Geometry):
    """Shared behaviour of the collection variants."""

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.geometries)

    def __getitem__(self, index: int) -> Geometry:
        return self.geometries[index]

    @property
    def dimension(self) -> int:
        return max((g.dimension for g in self.geometries), default=0)

    @property
    def is_empty(self) -> bool:
        return all(g.is_empty for g in self.geometries)

    @property
    def envelope(self) -> Envelope | None:
        result = None
        for geometry in self.geometries:
            envelope = geometry.envelope
            if envelope is not None:
                result = envelope if result is None else result.union(envelope)
        return result

    @property
    def centroid(self) -> Coordinate | None:
        return Coordinate.centroid(
            g.centroid for g in self.geometries if g.centroid is not None
        )


class MultiPoint(_GeometryList):
    kind: Literal["multi_point"] = "multi_point"
    geometries: tuple[Point, ...] = ()


class MultiCurve(_GeometryList):
    kind: Literal["multi_curve"] = "multi_curve"
    geometries: tuple[Curve, ...] = ()

    @property
    def length(self) -> float:
        return sum(curve.length for curve in self.geometries)


class MultiSurface(_GeometryList):
    """Surfaces measured independently; overlaps are not merged."""

    kind: Literal["multi_surface"] = "multi_surface"
    geometries: tuple[Surface, ...] = ()

    @property
    def area(self) -> float:
        """Sum of element areas; 0 for an empty collection."""
        return sum(surface.area for surface in self.geometries)


class GeometryCollection(_GeometryList):
    """Heterogeneous collection of any geometry variants."""

    kind: Literal["geometry_collection"] = "geometry_collection"
    geometries: tuple[AnyGeometry, ...] = ()


AnyGeometry = Annotated[
    Union[Point, Curve, Surface, MultiPoint, MultiCurve, MultiSurface, GeometryCollection],
    Field(discriminator="kind"),
]

GeometryCollection.model_rebuild()

_GEOMETRY_ADAPTER: TypeAdapter = TypeAdapter(AnyGeometry)


def parse_geometry(data: Any) -> Geometry:
    """Validate a JSON-like object into the matching geometry variant."""
    return _GEOMETRY_ADAPTER.validate_python(data)


def load_geometry(path: str | Path) -> Geometry:
    """Load a geometry from a JSON file."""
    path = Path(path)
    return _GEOMETRY_ADAPTER.validate_json(path.read_text(encoding="utf-8"))
