"""
Domain service: Spherical area and perimeter of a coordinate ring.

This module provides the geometry engine behind every measurement:
- Great-circle distance (haversine)
- Perimeter as the sum of great-circle edge lengths
- Enclosed area via the spherical shoelace sum

All three share one sphere radius so area and perimeter stay consistent.
"""
from typing import Optional
from dataclasses import dataclass
import math
import numpy as np
import logging

from land_measure.domain.errors import ComputationError
from land_measure.domain.models import Coordinate, CoordinateRing
from land_measure.utils.spherical import haversine_m, ring_area_m2, ring_edge_lengths_m
from land_measure.config import settings

logger = logging.getLogger(__name__)

SQUARE_METERS_PER_HECTARE = 10_000.0


@dataclass(frozen=True)
class SphereConfig:
    """Configuration for spherical Earth calculations."""

    radius_m: float = 6378137.0
    """Sphere radius in meters"""


def _default_config() -> SphereConfig:
    return SphereConfig(radius_m=settings.earth_radius_m)


def _ensure_finite(value: float, quantity: str) -> float:
    if not math.isfinite(value):
        raise ComputationError(f"{quantity} is not a finite number ({value})")
    return value


class GreatCircleDistance:
    """Shortest surface distance between two coordinates."""

    def __init__(self, config: Optional[SphereConfig] = None):
        self.config = config or _default_config()

    def __call__(self, start: Coordinate, end: Coordinate) -> float:
        """
        Distance in meters between two (longitude, latitude) points.

        Raises:
            ComputationError: If the result is not finite
        """
        distance = haversine_m(start, end, self.config.radius_m)
        return _ensure_finite(distance, "Distance")

    def edges(self, ring: CoordinateRing) -> np.ndarray:
        """Length in meters of each consecutive edge, closing edge last."""
        return ring_edge_lengths_m(ring.coordinates, self.config.radius_m)


class PerimeterCalculator:
    """Boundary length of a ring, closing edge included."""

    def __init__(self, distance: Optional[GreatCircleDistance] = None):
        self.distance = distance or GreatCircleDistance()

    def perimeter_meters(self, ring: CoordinateRing) -> float:
        """
        Sum great-circle distances over consecutive vertex pairs.

        Args:
            ring: Validated coordinate ring

        Returns:
            Perimeter in meters

        Raises:
            ComputationError: If the result is not finite
        """
        perimeter = float(np.sum(self.distance.edges(ring)))
        return _ensure_finite(perimeter, "Perimeter")


class GeodesicAreaCalculator:
    """
    Enclosed surface area of a ring on a sphere.

    The result is winding-order independent and zero for rings with fewer
    than three distinct vertices.
    """

    def __init__(self, config: Optional[SphereConfig] = None):
        self.config = config or _default_config()
        logger.debug(f"Initialized GeodesicAreaCalculator with radius={self.config.radius_m}m")

    def area_square_meters(self, ring: CoordinateRing) -> float:
        """
        Compute absolute enclosed area.

        Args:
            ring: Validated coordinate ring

        Returns:
            Area in square meters

        Raises:
            ComputationError: If the result is not finite
        """
        area = ring_area_m2(ring.coordinates, self.config.radius_m)
        return _ensure_finite(area, "Area")

    def area_hectares(self, ring: CoordinateRing) -> float:
        return self.area_square_meters(ring) / SQUARE_METERS_PER_HECTARE
