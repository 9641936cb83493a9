"""Measurement operator: the public entry point for distance and area.

An operator owns an envelope cache for the immutable geometries it sees.
Use it as a context manager, or call close() yourself, so the cache is
released on every exit path:

    with MeasureOperator() as op:
        d = op.distance(a, b)

distance() and area() are safe to call from several threads at once.
close() belongs to the thread that owns the operator.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from geomeasure.config import MeasureSettings
from geomeasure.measure import areas
from geomeasure.measure.dispatch import DistanceAlgorithm, DistanceResolver
from geomeasure.measure.errors import OperatorClosedError
from geomeasure.models.coordinate import Envelope
from geomeasure.models.geometry import Geometry, GeometryKind

logger = logging.getLogger(__name__)

_IMMUTABLE_KINDS = frozenset(
    {
        GeometryKind.CURVE,
        GeometryKind.SURFACE,
        GeometryKind.MULTI_CURVE,
        GeometryKind.MULTI_SURFACE,
    }
)


def _is_immutable(geometry: Geometry) -> bool:
    """Points can be moved, so anything holding one is never cached."""
    kind = geometry.geometry_kind
    if kind is GeometryKind.GEOMETRY_COLLECTION:
        return all(_is_immutable(g) for g in geometry.geometries)
    return kind in _IMMUTABLE_KINDS


class EnvelopeCache:
    """Thread-safe, bounded map from geometry identity to its envelope.

    Entries keep a reference to their geometry so an id cannot be reused
    while the entry is alive. Envelopes are computed outside the lock and
    published whole.
    """

    def __init__(self, limit: int = 4096):
        self._limit = limit
        self._lock = threading.Lock()
        self._entries: OrderedDict[int, tuple[Geometry, Envelope | None]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, geometry: Geometry) -> Envelope | None:
        if self._limit == 0 or not _is_immutable(geometry):
            return geometry.envelope

        key = id(geometry)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] is geometry:
                self.hits += 1
                return entry[1]
            self.misses += 1

        envelope = geometry.envelope
        with self._lock:
            self._entries[key] = (geometry, envelope)
            while len(self._entries) > self._limit:
                self._entries.popitem(last=False)
        return envelope

    def clear(self) -> int:
        """Drop all entries; returns how many were held."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count


class MeasureOperator:
    """Computes distances and areas of geometries.

    Args:
        settings: Tuning options; defaults to ``MeasureSettings()``.
    """

    def __init__(self, settings: MeasureSettings | None = None):
        self.settings = settings or MeasureSettings()
        self._cache: EnvelopeCache | None = None
        if self.settings.cache_envelopes:
            self._cache = EnvelopeCache(self.settings.cache_limit)
        if not self.settings.envelope_pruning:
            logger.warning("Envelope pruning disabled; collection distances scan every element")
        self._resolver = DistanceResolver(
            envelope_of=self._cache.get if self._cache is not None else None,
            envelope_pruning=self.settings.envelope_pruning,
        )
        self._closed = False
        logger.debug("Opened measure operator (%s)", self.settings)

    def __enter__(self) -> MeasureOperator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cache(self) -> EnvelopeCache | None:
        return self._cache

    @property
    def resolver(self) -> DistanceResolver:
        return self._resolver

    def _ensure_open(self) -> None:
        if self._closed:
            raise OperatorClosedError("The measure operator is closed")

    def distance(self, a: Geometry, b: Geometry) -> float:
        """Distance between two geometries; symmetric, finite and non-negative."""
        self._ensure_open()
        return self._resolver.distance(a, b)

    def area(self, geometry: Geometry) -> float:
        """Area of a Surface, MultiSurface or GeometryCollection."""
        self._ensure_open()
        return areas.area(geometry)

    def register(self, first: GeometryKind, second: GeometryKind, algorithm: DistanceAlgorithm) -> None:
        """Add or replace the distance algorithm for a pair of kinds."""
        self._ensure_open()
        self._resolver.register(first, second, algorithm)

    def close(self) -> None:
        """Release the envelope cache. Safe to call more than once."""
        if self._closed:
            logger.debug("Measure operator already closed")
            return
        self._closed = True
        if self._cache is None:
            return
        try:
            released = self._cache.clear()
        except Exception:
            logger.exception("Failed to release envelope cache")
            raise
        logger.debug("Closed measure operator, released %d cached envelopes", released)


def distance(a: Geometry, b: Geometry, settings: MeasureSettings | None = None) -> float:
    """Distance between two geometries using a short-lived operator."""
    with MeasureOperator(settings) as op:
        return op.distance(a, b)


def area(geometry: Geometry, settings: MeasureSettings | None = None) -> float:
    """Area of a geometry using a short-lived operator."""
    with MeasureOperator(settings) as op:
        return op.area(geometry)
