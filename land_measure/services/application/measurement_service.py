"""
Application service: Orchestration layer for boundary measurements.
"""
from datetime import datetime, timezone
from typing import Any, Callable, Optional
import logging

from land_measure.config import settings
from land_measure.domain.models import (
    CoordinateRing,
    MeasurementRecord,
    MeasurementResult,
)
from land_measure.infrastructure.measurement_store import MeasurementStore
from land_measure.services.domain.geodesic_calculator import (
    GeodesicAreaCalculator,
    PerimeterCalculator,
)
from land_measure.utils.ring_diagnostics import describe_ring_issues

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MeasurementService:
    """
    Application service for measurement operations.

    Coordinates validation, the geometry engine and the store. The
    contract is persist-then-report: a result is only returned once its
    record has been appended.
    """

    def __init__(
        self,
        store: MeasurementStore,
        area_calculator: Optional[GeodesicAreaCalculator] = None,
        perimeter_calculator: Optional[PerimeterCalculator] = None,
        history_limit: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the service with dependencies.

        Args:
            store: Measurement store receiving every successful result
            area_calculator: Spherical area calculator
            perimeter_calculator: Spherical perimeter calculator
            history_limit: Maximum records returned by get_history
            clock: Source of record creation timestamps
        """
        self.store = store
        self.area_calculator = area_calculator or GeodesicAreaCalculator()
        self.perimeter_calculator = perimeter_calculator or PerimeterCalculator()
        self.history_limit = settings.history_limit if history_limit is None else history_limit
        self.clock = clock

    async def calculate(self, coordinates: Any) -> MeasurementResult:
        """
        Measure a boundary and record the result.

        This method orchestrates:
        1. Validating the vertex sequence into a CoordinateRing
        2. Computing area (hectares) and perimeter (meters)
        3. Appending a MeasurementRecord to the store

        Args:
            coordinates: Sequence of [longitude, latitude] pairs

        Returns:
            MeasurementResult with area and perimeter

        Raises:
            ValidationError: If the coordinates are not a valid ring
            ComputationError: If the math produced a non-finite result
            PersistenceError: If the record could not be stored
        """
        ring = CoordinateRing.from_candidate(coordinates)

        area_hectares = self.area_calculator.area_hectares(ring)
        perimeter_meters = self.perimeter_calculator.perimeter_meters(ring)
        describe_ring_issues(ring.coordinates)

        record = MeasurementRecord.from_ring(
            ring,
            area_hectares=area_hectares,
            perimeter_meters=perimeter_meters,
            timestamp=self.clock(),
        )
        stored = await self.store.append(record)

        logger.info(
            f"Measured {len(ring)}-vertex ring: {area_hectares:.4f} ha, "
            f"{perimeter_meters:.2f} m (record {stored.id})"
        )
        return MeasurementResult(
            area_hectares=area_hectares,
            perimeter_meters=perimeter_meters,
        )

    async def get_history(self) -> list[MeasurementRecord]:
        """
        Most recent measurements, newest first.

        Raises:
            PersistenceError: If the store could not be read
        """
        return await self.store.recent(self.history_limit)
