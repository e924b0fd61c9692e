"""
Infrastructure layer: SQL-backed measurement store with connection retry.
"""
from datetime import datetime, timezone
from typing import Optional
import asyncio
import logging

from sqlalchemy import JSON, DateTime, Float, Integer, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from land_measure.config import Settings, settings
from land_measure.domain.errors import PersistenceError
from land_measure.domain.models import MeasurementRecord
from land_measure.infrastructure.measurement_store import MeasurementStore

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class MeasurementRow(Base):
    """Table row for one measurement."""
    __tablename__ = "measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coordinates: Mapped[list] = mapped_column(JSON, nullable=False)
    area_hectares: Mapped[float] = mapped_column(Float, nullable=False)
    perimeter_meters: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    @classmethod
    def from_record(cls, record: MeasurementRecord) -> "MeasurementRow":
        return cls(
            coordinates=[[list(pair) for pair in ring] for ring in record.coordinates],
            area_hectares=record.area_hectares,
            perimeter_meters=record.perimeter_meters,
            timestamp=record.timestamp,
        )

    def to_record(self) -> MeasurementRecord:
        timestamp = self.timestamp
        # SQLite drops tzinfo on the way back
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return MeasurementRecord(
            id=self.id,
            coordinates=self.coordinates,
            area_hectares=self.area_hectares,
            perimeter_meters=self.perimeter_meters,
            timestamp=timestamp,
        )


class SQLMeasurementStore(MeasurementStore):
    """
    Store backed by a relational database through SQLAlchemy.

    Blocking database calls run in a worker thread so the event loop is
    never held by I/O. Each append is its own transaction.
    """

    def __init__(self, database_url: str, config: Optional[Settings] = None):
        self.database_url = database_url
        self.config = config or settings
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise PersistenceError("Measurement store is not connected")
        return self._engine

    def _connect_policy(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.config.store_connect_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=self.config.store_connect_min_wait,
                max=self.config.store_connect_max_wait,
            ),
            retry=retry_if_exception_type(OperationalError),
            reraise=True,
        )

    def _create_engine(self) -> Engine:
        connect_args = {}
        if self.database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        engine = create_engine(self.database_url, connect_args=connect_args)
        try:
            Base.metadata.create_all(engine)
        except OperationalError:
            engine.dispose()
            raise
        return engine

    async def connect(self) -> None:
        """
        Create the engine and schema, retrying transient connection failures.

        Raises:
            PersistenceError: If the database is still unreachable after retries
        """
        if self._engine is not None:
            return
        try:
            self._engine = await asyncio.to_thread(self._connect_policy(), self._create_engine)
        except SQLAlchemyError as e:
            logger.error(f"Could not connect to measurement database: {e}")
            raise PersistenceError(f"Could not connect to measurement database: {e}") from e
        logger.info(f"Connected to measurement database ({self.engine.url.get_backend_name()})")

    async def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def _append_sync(self, record: MeasurementRecord) -> MeasurementRecord:
        with Session(self.engine) as session, session.begin():
            row = MeasurementRow.from_record(record)
            session.add(row)
            session.flush()
            return row.to_record()

    def _recent_sync(self, limit: int) -> list[MeasurementRecord]:
        statement = (
            select(MeasurementRow)
            .order_by(MeasurementRow.timestamp.desc(), MeasurementRow.id.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            return [row.to_record() for row in session.scalars(statement)]

    async def append(self, record: MeasurementRecord) -> MeasurementRecord:
        try:
            return await asyncio.to_thread(self._append_sync, record)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save measurement: {e}") from e

    async def recent(self, limit: int) -> list[MeasurementRecord]:
        try:
            return await asyncio.to_thread(self._recent_sync, limit)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch measurement history: {e}") from e
