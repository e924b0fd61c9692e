"""
API response models using Pydantic.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from land_measure.domain.models import MeasurementRecord, MeasurementResult


class CalculateAreaResponse(BaseModel):
    """Response model for the area calculation endpoint."""
    area_hectares: float = Field(
        alias="areaHectares",
        description="Enclosed area in hectares",
        examples=[123.9],
    )
    perimeter_meters: float = Field(
        alias="perimeterMeters",
        description="Boundary length in meters",
        examples=[4452.8],
    )

    class Config:
        populate_by_name = True

    @classmethod
    def from_result(cls, result: MeasurementResult) -> "CalculateAreaResponse":
        return cls(
            area_hectares=result.area_hectares,
            perimeter_meters=result.perimeter_meters,
        )


class MeasurementRecordResponse(BaseModel):
    """Single stored measurement."""
    id: Optional[int] = None
    coordinates: List[List[List[float]]] = Field(
        description="Single-ring polygon of [longitude, latitude] pairs"
    )
    area_hectares: float = Field(alias="areaHectares")
    perimeter_meters: float = Field(alias="perimeterMeters")
    timestamp: datetime

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "coordinates": [[[0.0, 0.0], [0.0, 0.01], [0.01, 0.01], [0.01, 0.0], [0.0, 0.0]]],
                "areaHectares": 123.9,
                "perimeterMeters": 4452.8,
                "timestamp": "2024-01-15T10:00:00Z",
            }
        }

    @classmethod
    def from_record(cls, record: MeasurementRecord) -> "MeasurementRecordResponse":
        return cls(
            id=record.id,
            coordinates=[[list(pair) for pair in ring] for ring in record.coordinates],
            area_hectares=record.area_hectares,
            perimeter_meters=record.perimeter_meters,
            timestamp=record.timestamp,
        )
