"""Distance dispatch matrix.

The matrix maps an unordered pair of geometry kinds to one algorithm.
Each entry remembers which kind the algorithm expects first, so both
argument orders reach the same code and distances are symmetric.
Collections reduce to the minimum over their elements.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterator, Optional

from geomeasure.measure import pairwise
from geomeasure.measure.errors import (
    EmptyGeometryError,
    MissingGeometryError,
    UnsupportedGeometryError,
)
from geomeasure.models.coordinate import Envelope
from geomeasure.models.geometry import Geometry, GeometryKind

logger = logging.getLogger(__name__)

DistanceAlgorithm = Callable[[Geometry, Geometry], float]
EnvelopeProvider = Callable[[Geometry], Optional[Envelope]]

# relative slack so floating-point rounding in the box gap never prunes the true minimum
_PRUNE_SLACK = 1e-9

PRIMITIVE_ALGORITHMS: dict[tuple[GeometryKind, GeometryKind], DistanceAlgorithm] = {
    (GeometryKind.POINT, GeometryKind.POINT): pairwise.point_point,
    (GeometryKind.POINT, GeometryKind.CURVE): pairwise.point_curve,
    (GeometryKind.POINT, GeometryKind.SURFACE): pairwise.point_surface,
    (GeometryKind.CURVE, GeometryKind.CURVE): pairwise.curve_curve,
    (GeometryKind.CURVE, GeometryKind.SURFACE): pairwise.curve_surface,
    (GeometryKind.SURFACE, GeometryKind.SURFACE): pairwise.surface_surface,
}


def kind_of(geometry: object) -> GeometryKind | None:
    """The variant tag of a geometry, or None for anything else."""
    if not isinstance(geometry, Geometry):
        return None
    try:
        return geometry.geometry_kind
    except (AttributeError, ValueError):
        return None


def _kind_name(geometry: object, kind: GeometryKind | None) -> str:
    return kind.value if kind is not None else type(geometry).__name__


class DistanceResolver:
    """Classifies both operands and runs the registered algorithm.

    Args:
        envelope_of: Returns the envelope of a geometry; the operator
            passes its cache here.
        envelope_pruning: Skip collection elements whose envelope is
            farther than the best distance found so far.
        with_defaults: Start from the full matrix. With False the matrix
            starts empty and every pair must be registered.
    """

    def __init__(
        self,
        envelope_of: EnvelopeProvider | None = None,
        envelope_pruning: bool = True,
        with_defaults: bool = True,
    ):
        self._envelope_of = envelope_of or (lambda geometry: geometry.envelope)
        self._pruning = envelope_pruning
        self._matrix: dict[frozenset[GeometryKind], tuple[GeometryKind, DistanceAlgorithm]] = {}
        if with_defaults:
            for (first, second), algorithm in PRIMITIVE_ALGORITHMS.items():
                self.register(first, second, algorithm)
            for collection in (kind for kind in GeometryKind if kind.is_collection):
                for other in GeometryKind:
                    if frozenset((collection, other)) not in self._matrix:
                        self.register(collection, other, self.collection_distance)

    def register(self, first: GeometryKind, second: GeometryKind, algorithm: DistanceAlgorithm) -> None:
        """Register ``algorithm(a, b)`` for kind pair; ``a`` is always of kind ``first``."""
        key = frozenset((GeometryKind(first), GeometryKind(second)))
        if key in self._matrix:
            logger.debug("Replacing distance algorithm for %s/%s", first, second)
        self._matrix[key] = (GeometryKind(first), algorithm)

    def supports(self, first: GeometryKind, second: GeometryKind) -> bool:
        return frozenset((GeometryKind(first), GeometryKind(second))) in self._matrix

    def supported_pairs(self) -> Iterator[tuple[GeometryKind, ...]]:
        """Registered pairs, each as a (first, second) kind tuple."""
        for key, (first, _) in self._matrix.items():
            others = key - {first}
            yield (first, next(iter(others)) if others else first)

    def distance(self, a: Geometry, b: Geometry) -> float:
        """Distance between two geometries.

        Raises:
            MissingGeometryError: Either operand is None.
            UnsupportedGeometryError: No algorithm is registered for the pair.
            EmptyGeometryError: Either operand has no coordinates.
        """
        if a is None:
            raise MissingGeometryError("first")
        if b is None:
            raise MissingGeometryError("second")

        kind_a, kind_b = kind_of(a), kind_of(b)
        entry = None
        if kind_a is not None and kind_b is not None:
            entry = self._matrix.get(frozenset((kind_a, kind_b)))
        if entry is None:
            raise UnsupportedGeometryError(_kind_name(a, kind_a), _kind_name(b, kind_b))

        if a.is_empty:
            raise EmptyGeometryError(kind_a.value)
        if b.is_empty:
            raise EmptyGeometryError(kind_b.value)

        first, algorithm = entry
        if kind_a is first:
            return algorithm(a, b)
        logger.debug("Swapping operands for %s/%s", kind_a.value, kind_b.value)
        return algorithm(b, a)

    def collection_distance(self, collection: Geometry, other: Geometry) -> float:
        """Minimum distance from any non-empty element of ``collection`` to ``other``."""
        other_envelope = self._envelope_of(other) if self._pruning else None
        best = math.inf
        skipped = 0
        for element in collection.geometries:
            if element.is_empty:
                continue
            if other_envelope is not None and best < math.inf:
                envelope = self._envelope_of(element)
                if envelope is not None and envelope.distance_to(other_envelope) > best * (1 + _PRUNE_SLACK):
                    skipped += 1
                    continue
            result = self.distance(element, other)
            if result < best:
                best = result
                if best == 0.0:
                    break
        if best == math.inf:
            raise EmptyGeometryError(collection.geometry_kind.value)
        if skipped:
            logger.debug("Pruned %d of %d elements by envelope", skipped, len(collection))
        return best
