"""
Domain models for coordinate rings and measurement records.

These models represent the core domain entities and should be independent
of any infrastructure concerns (HTTP, databases, etc.).
"""
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Optional

from pydantic import BaseModel, Field

from land_measure.domain.errors import ValidationError


MIN_RING_LENGTH = 4

Coordinate = tuple[float, float]
"""A (longitude, latitude) pair in decimal degrees."""


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray, Mapping))


@dataclass(frozen=True)
class CoordinateRing:
    """
    Validated closed boundary of a single polygon without holes.

    Closure (first == last), self-intersection and coordinate ranges are
    not checked; only the shape of the input is.
    """
    coordinates: tuple[Coordinate, ...]

    @classmethod
    def from_candidate(cls, candidate: Any) -> "CoordinateRing":
        """
        Validate a caller-supplied vertex sequence and wrap it as a ring.

        Args:
            candidate: Sequence of [longitude, latitude] pairs

        Returns:
            CoordinateRing holding the pairs unchanged

        Raises:
            ValidationError: If the candidate is missing, not a sequence,
                shorter than 4 entries, or holds a malformed pair
        """
        if candidate is None or not _is_sequence(candidate):
            raise ValidationError(
                f"Invalid input. A closed polygon needs at least {MIN_RING_LENGTH} points."
            )
        if len(candidate) < MIN_RING_LENGTH:
            raise ValidationError(
                f"Invalid input. A closed polygon needs at least {MIN_RING_LENGTH} points, "
                f"got {len(candidate)}."
            )

        pairs = []
        for index, pair in enumerate(candidate):
            if not _is_sequence(pair) or len(pair) != 2 or not all(_is_number(v) for v in pair):
                raise ValidationError(
                    f"Coordinate at index {index} must be a [longitude, latitude] pair of numbers"
                )
            try:
                pairs.append((float(pair[0]), float(pair[1])))
            except OverflowError as e:
                raise ValidationError(
                    f"Coordinate at index {index} is too large to represent as a number"
                ) from e

        return cls(coordinates=tuple(pairs))

    def __len__(self) -> int:
        return len(self.coordinates)

    @property
    def is_closed(self) -> bool:
        return self.coordinates[0] == self.coordinates[-1]

    def as_polygon(self) -> tuple[tuple[Coordinate, ...], ...]:
        """Wrap the ring as a single-ring polygon (one ring, no holes)."""
        return (self.coordinates,)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MeasurementRecord(BaseModel):
    """Immutable result of one successful calculation."""
    id: Optional[int] = None
    coordinates: tuple[tuple[Coordinate, ...], ...] = Field(
        description="Single-ring polygon: a sequence containing exactly one ring"
    )
    area_hectares: float = Field(ge=0, description="Enclosed area in hectares")
    perimeter_meters: float = Field(ge=0, description="Boundary length in meters")
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True

    @classmethod
    def from_ring(
        cls,
        ring: CoordinateRing,
        area_hectares: float,
        perimeter_meters: float,
        timestamp: Optional[datetime] = None,
    ) -> "MeasurementRecord":
        fields = {
            "coordinates": ring.as_polygon(),
            "area_hectares": area_hectares,
            "perimeter_meters": perimeter_meters,
        }
        if timestamp is not None:
            fields["timestamp"] = timestamp
        return cls(**fields)


class MeasurementResult(BaseModel):
    """Area and perimeter reported back to the caller."""
    area_hectares: float
    perimeter_meters: float
