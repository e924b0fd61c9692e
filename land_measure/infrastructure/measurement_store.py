"""
Infrastructure layer: Measurement store interface and in-memory implementation.

A store is an append-only log of MeasurementRecord entries with a bounded
"most recent first" query. Handles are process-scoped: connect once at
startup, close once at shutdown.
"""
from abc import ABC, abstractmethod
import asyncio
import logging

from land_measure.config import Settings
from land_measure.domain.errors import PersistenceError
from land_measure.domain.models import MeasurementRecord

logger = logging.getLogger(__name__)


class MeasurementStore(ABC):
    """
    Append-only record log.

    Implementations must make each append atomic and return recent
    records ordered by descending timestamp, ties broken by insertion
    order (latest insert first).
    """

    async def connect(self) -> None:
        """Establish the underlying connection."""

    async def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def append(self, record: MeasurementRecord) -> MeasurementRecord:
        """
        Persist one record.

        Returns:
            The stored record, with its store-assigned id

        Raises:
            PersistenceError: If the record could not be written
        """

    @abstractmethod
    async def recent(self, limit: int) -> list[MeasurementRecord]:
        """
        Read at most `limit` records, newest first.

        Raises:
            PersistenceError: If the records could not be read
        """


class InMemoryMeasurementStore(MeasurementStore):
    """Store backed by a process-local list; contents are lost on restart."""

    def __init__(self):
        self._records: list[MeasurementRecord] = []
        self._lock = asyncio.Lock()
        self._closed = False

    async def close(self) -> None:
        self._closed = True

    async def append(self, record: MeasurementRecord) -> MeasurementRecord:
        async with self._lock:
            if self._closed:
                raise PersistenceError("Measurement store is closed")
            stored = record.model_copy(update={"id": len(self._records) + 1})
            self._records.append(stored)
        return stored

    async def recent(self, limit: int) -> list[MeasurementRecord]:
        async with self._lock:
            if self._closed:
                raise PersistenceError("Measurement store is closed")
            snapshot = list(self._records)
        # ids grow with insertion order
        snapshot.sort(key=lambda r: (r.timestamp, r.id), reverse=True)
        return snapshot[:limit]

    def __len__(self) -> int:
        return len(self._records)


def build_store(config: Settings) -> MeasurementStore:
    """
    Create the store selected by configuration.

    Args:
        config: Application settings

    Returns:
        An unconnected MeasurementStore

    Raises:
        ValueError: If the configured backend is unknown
    """
    backend = config.store_backend.lower()
    if backend == "memory":
        return InMemoryMeasurementStore()
    if backend == "sql":
        from land_measure.infrastructure.sql_measurement_store import SQLMeasurementStore
        return SQLMeasurementStore(config.database_url, config=config)
    raise ValueError(f"Unknown store backend: {config.store_backend}")
