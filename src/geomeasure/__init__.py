"""Distance and area measurement for points, curves, surfaces and collections."""

__version__ = "0.1.0"

from geomeasure.config import MeasureSettings
from geomeasure.measure import MeasureOperator, area, distance

__all__ = ["__version__", "MeasureSettings", "MeasureOperator", "area", "distance"]
