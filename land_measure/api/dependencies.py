"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends, Request

from land_measure.infrastructure.measurement_store import MeasurementStore
from land_measure.services.domain.geodesic_calculator import (
    GeodesicAreaCalculator,
    PerimeterCalculator,
)
from land_measure.services.application.measurement_service import MeasurementService


def get_measurement_store(request: Request) -> MeasurementStore:
    """
    Dependency factory for the process-scoped MeasurementStore.

    The store is connected in the application lifespan and kept on
    app.state until shutdown.

    Returns:
        MeasurementStore instance
    """
    return request.app.state.measurement_store


def get_area_calculator() -> GeodesicAreaCalculator:
    return GeodesicAreaCalculator()


def get_perimeter_calculator() -> PerimeterCalculator:
    return PerimeterCalculator()


def get_measurement_service(
    store: Annotated[MeasurementStore, Depends(get_measurement_store)],
    area_calculator: Annotated[GeodesicAreaCalculator, Depends(get_area_calculator)],
    perimeter_calculator: Annotated[PerimeterCalculator, Depends(get_perimeter_calculator)],
) -> MeasurementService:
    """
    Dependency factory for MeasurementService.

    Args:
        store: Measurement store (injected)
        area_calculator: Area calculator (injected)
        perimeter_calculator: Perimeter calculator (injected)

    Returns:
        MeasurementService instance
    """
    return MeasurementService(
        store=store,
        area_calculator=area_calculator,
        perimeter_calculator=perimeter_calculator,
    )


# Type aliases for cleaner route signatures
MeasurementServiceDep = Annotated[MeasurementService, Depends(get_measurement_service)]
