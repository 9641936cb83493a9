"""Coordinates and axis-aligned envelopes."""

from __future__ import annotations

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator


class Coordinate(BaseModel):
    """A location in 3D space.

    Equality is exact component equality. Accepts a 2- or 3-element
    sequence as input, so ``Coordinate.model_validate((1, 2))`` works.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def from_sequence(cls, data):
        if isinstance(data, (list, tuple)):
            if len(data) not in (2, 3):
                raise ValueError("Coordinate needs 2 or 3 components")
            return dict(zip(("x", "y", "z"), data))
        return data

    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, factor: float) -> Coordinate:
        return Coordinate(x=self.x * factor, y=self.y * factor, z=self.z * factor)

    __rmul__ = __mul__

    def dot(self, other: Coordinate) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Coordinate) -> Coordinate:
        return Coordinate(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    @property
    def is_valid(self) -> bool:
        """True if no component is NaN."""
        return not (math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, other: Coordinate) -> float:
        """Euclidean distance to another coordinate."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    @staticmethod
    def centroid(coordinates: Iterable[Coordinate]) -> Coordinate | None:
        """Arithmetic mean of the coordinates, None when there are none."""
        coords = list(coordinates)
        if not coords:
            return None
        n = len(coords)
        return Coordinate(
            x=sum(c.x for c in coords) / n,
            y=sum(c.y for c in coords) / n,
            z=sum(c.z for c in coords) / n,
        )


class Envelope(BaseModel):
    """Axis-aligned bounding box of a geometry."""

    model_config = ConfigDict(frozen=True)

    minimum: Coordinate
    maximum: Coordinate

    @classmethod
    def from_bounds(
        cls, lower: Iterable[float], upper: Iterable[float]
    ) -> Envelope:
        return cls(minimum=tuple(lower), maximum=tuple(upper))

    def union(self, other: Envelope) -> Envelope:
        return Envelope.from_bounds(
            map(min, self.minimum.as_tuple(), other.minimum.as_tuple()),
            map(max, self.maximum.as_tuple(), other.maximum.as_tuple()),
        )

    def distance_to(self, other: Envelope) -> float:
        """Gap between two boxes; a lower bound for the distance of their contents."""
        gaps = [
            max(0.0, lo_b - hi_a, lo_a - hi_b)
            for lo_a, hi_a, lo_b, hi_b in zip(
                self.minimum.as_tuple(),
                self.maximum.as_tuple(),
                other.minimum.as_tuple(),
                other.maximum.as_tuple(),
            )
        ]
        return math.sqrt(sum(g * g for g in gaps))
