"""
API router for measurement endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from land_measure.api.dependencies import MeasurementServiceDep
from land_measure.api.rate_limit import DEFAULT_LIMIT, limiter
from land_measure.api.v1.models.requests import CalculateAreaRequest
from land_measure.api.v1.models.responses import (
    CalculateAreaResponse,
    MeasurementRecordResponse,
)
from land_measure.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


router = APIRouter(
    tags=["measurements"],
)


@router.post(
    "/calculate-area",
    response_model=CalculateAreaResponse,
    summary="Measure a traced boundary",
    description="""
    Compute the surface area and perimeter of a closed boundary on a spherical Earth.

    This endpoint:
    1. Validates that the coordinates form a ring of at least 4 [longitude, latitude] pairs
    2. Computes the enclosed area with the spherical shoelace sum
    3. Computes the perimeter as the sum of haversine edge lengths
    4. Stores the measurement, then returns area and perimeter

    The first and last pair are conventionally identical; unclosed or
    self-intersecting rings are still measured.
    """,
    responses={
        200: {
            "description": "Measurement computed and stored",
            "content": {
                "application/json": {
                    "example": {"areaHectares": 123.9, "perimeterMeters": 4452.8}
                }
            }
        },
        400: {
            "description": "Coordinates are not a valid ring",
        },
        429: {
            "description": "Rate limit exceeded",
        },
        500: {
            "description": "Calculation produced a non-finite result",
        },
        503: {
            "description": "Measurement could not be stored",
        },
    }
)
@limiter.limit(DEFAULT_LIMIT)
async def calculate_area(
    request: Request,
    payload: CalculateAreaRequest,
    measurement_service: MeasurementServiceDep,
) -> CalculateAreaResponse:
    """
    Measure a boundary.

    Domain errors propagate to the error handling middleware.
    """
    result = await measurement_service.calculate(payload.coordinates)
    return CalculateAreaResponse.from_result(result)


@router.get(
    "/history",
    response_model=List[MeasurementRecordResponse],
    summary="Recent measurements",
    description="Return the most recent measurements (at most 10), newest first.",
    responses={
        429: {
            "description": "Rate limit exceeded",
        },
        503: {
            "description": "History could not be read; body carries an empty list",
        },
    }
)
@limiter.limit(DEFAULT_LIMIT)
async def get_history(
    request: Request,
    measurement_service: MeasurementServiceDep,
):
    """
    Get recent measurement history.

    A failed read answers with an empty list and the error instead of
    stale data.
    """
    try:
        records = await measurement_service.get_history()
    except PersistenceError as e:
        logger.error(f"History fetch error: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": "Failed to fetch history",
                "detail": str(e),
                "measurements": [],
            }
        )

    return [MeasurementRecordResponse.from_record(record) for record in records]
