"""
API request models using Pydantic.
"""
from typing import Any
from pydantic import BaseModel, Field


class CalculateAreaRequest(BaseModel):
    """Request body for the area calculation endpoint."""
    # Shape is checked by the domain validator so bad rings get a 400
    coordinates: Any = Field(
        default=None,
        description="Closed ring of [longitude, latitude] pairs, at least 4 entries",
        examples=[[[0.0, 0.0], [0.0, 0.01], [0.01, 0.01], [0.01, 0.0], [0.0, 0.0]]],
    )
