"""SQLite-backed record store for local development and tests.

Rows are exposed through the same ``StoreRecord`` shape as Airtable, using
the Airtable field names, so the gateways cannot tell the backends apart.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import Boolean, Date, DateTime, Float, Integer, and_, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.services.filters import All, AtLeast, Contains, Equals, Filter, Sort
from app.services.record_store import (
    AVERAGE_FIELD,
    COUNT_FIELD,
    LAST_RATED_FIELD,
    RecordStoreError,
    StoreRecord,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Local-only column holding the unrounded sum of scores
SUM_ATTR = "rating_sum"


class LocalRecordStore:
    """Record store over SQLAlchemy models that mirror the Airtable tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], tables: dict[str, type]):
        self._session_factory = session_factory
        self._tables = tables

    def _model(self, table: str) -> type:
        try:
            return self._tables[table]
        except KeyError:
            raise RecordStoreError(f"Unknown table: {table}") from None

    @staticmethod
    def _attr(model: type, field: str) -> str:
        if field not in model.record_fields:
            raise RecordStoreError(f"Unknown field {field} on {model.__tablename__}")
        return field.lower()

    @staticmethod
    def _coerce(model: type, attr: str, value: Any) -> Any:
        """Convert an Airtable-style value into the column's Python type."""
        if value is None:
            return None
        column_type = model.__table__.columns[attr].type
        if isinstance(column_type, DateTime):
            if isinstance(value, str):
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
                if parsed.tzinfo is not None:
                    parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
                return parsed
            return value
        if isinstance(column_type, Date):
            if isinstance(value, str):
                return date.fromisoformat(value[:10])
            return value
        if isinstance(column_type, Boolean):
            return bool(value)
        if isinstance(column_type, Integer):
            return int(value)
        if isinstance(column_type, Float):
            return float(value)
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)

    @staticmethod
    def _export(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat() + "Z"
        if isinstance(value, date):
            return value.isoformat()
        return value

    def _to_record(self, model: type, row: Any) -> StoreRecord:
        fields = {}
        for field in model.record_fields:
            value = getattr(row, field.lower())
            if value is not None:
                fields[field] = self._export(value)
        return StoreRecord(id=row.record_id, fields=fields)

    def _clause(self, model: type, filter: Filter):
        if isinstance(filter, All):
            return and_(*(self._clause(model, f) for f in filter.filters))

        attr = self._attr(model, filter.field)
        column = getattr(model, attr)
        value = self._coerce(model, attr, filter.value)
        if isinstance(filter, Equals):
            return column == value
        if isinstance(filter, AtLeast):
            return column >= value
        if isinstance(filter, Contains):
            return column.contains(value)
        raise RecordStoreError(f"Unsupported filter: {filter!r}")

    async def select(
        self,
        table: str,
        filter: Optional[Filter] = None,
        max_records: Optional[int] = None,
        sort: Sequence[Sort] = (),
    ) -> list[StoreRecord]:
        model = self._model(table)
        query = select(model)
        if filter is not None:
            query = query.where(self._clause(model, filter))
        for order in sort:
            column = getattr(model, self._attr(model, order.field))
            query = query.order_by(column.desc() if order.descending else column.asc())
        # Stable order for ties
        query = query.order_by(model.id)
        if max_records:
            query = query.limit(max_records)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.warning("Local select on %s failed: %s", table, exc)
            raise RecordStoreError(f"Failed to read from {table}") from exc

        return [self._to_record(model, row) for row in rows]

    async def create(self, table: str, fields: dict[str, Any]) -> StoreRecord:
        model = self._model(table)
        values = {}
        for field, value in fields.items():
            attr = self._attr(model, field)
            values[attr] = self._coerce(model, attr, value)

        try:
            async with self._session_factory() as session:
                row = model(**values)
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except (SQLAlchemyError, ValueError) as exc:
            logger.warning("Local create on %s failed: %s", table, exc)
            raise RecordStoreError(f"Failed to write to {table}") from exc

        return self._to_record(model, row)

    async def update(self, table: str, record_id: str, fields: dict[str, Any]) -> StoreRecord:
        model = self._model(table)
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(model).where(model.record_id == record_id))
                row = result.scalar_one_or_none()
                if row is None:
                    raise RecordStoreError(f"No record {record_id} in {table}")
                for field, value in fields.items():
                    attr = self._attr(model, field)
                    setattr(row, attr, self._coerce(model, attr, value))
                # An overwritten aggregate is rebuilt from average times count
                if hasattr(model, SUM_ATTR) and fields.keys() & {AVERAGE_FIELD, COUNT_FIELD}:
                    setattr(row, SUM_ATTR, None)
                await session.commit()
                await session.refresh(row)
        except (SQLAlchemyError, ValueError) as exc:
            logger.warning("Local update on %s failed: %s", table, exc)
            raise RecordStoreError(f"Failed to write to {table}") from exc

        return self._to_record(model, row)

    async def record_rating(
        self, table: str, record: StoreRecord, score: float, rated_on: date
    ) -> StoreRecord:
        """Fold a score into the aggregate inside one transaction.

        The snapshot in ``record`` is only used for its id. The sum and count
        are incremented in the database, and the stored average is the
        exact sum over the count rounded to one decimal, so rounding never
        accumulates across ratings. A record without a sum yet starts from
        its stored average times its count.
        """
        model = self._model(table)
        if not hasattr(model, SUM_ATTR):
            raise RecordStoreError(f"{table} does not hold rating aggregates")
        average_attr = self._attr(model, AVERAGE_FIELD)
        average = getattr(model, average_attr)
        count_attr = self._attr(model, COUNT_FIELD)
        count = getattr(model, count_attr)
        total = getattr(model, SUM_ATTR)
        last_rated = self._attr(model, LAST_RATED_FIELD)

        statement = (
            update(model)
            .where(model.record_id == record.id)
            .values(
                {
                    total: func.coalesce(
                        total, func.coalesce(average, 0) * func.coalesce(count, 0)
                    )
                    + score,
                    count: func.coalesce(count, 0) + 1,
                    getattr(model, last_rated): rated_on,
                }
            )
            .execution_options(synchronize_session=False)
        )

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                if result.rowcount == 0:
                    await session.rollback()
                    raise RecordStoreError(f"No record {record.id} in {table}")
                refreshed = await session.execute(
                    select(model).where(model.record_id == record.id)
                )
                row = refreshed.scalar_one()
                exact = getattr(row, SUM_ATTR) / getattr(row, count_attr)
                setattr(row, average_attr, round_half_up(exact, 1))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.warning("Local aggregate update on %s failed: %s", table, exc)
            raise RecordStoreError(f"Failed to update {table}") from exc

        return self._to_record(model, row)

    async def is_empty(self, table: str) -> bool:
        model = self._model(table)
        async with self._session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one() == 0

    async def aclose(self) -> None:
        """Sessions are closed per call; the engine is disposed by the app."""
