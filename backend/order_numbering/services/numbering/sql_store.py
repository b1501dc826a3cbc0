"""SQLModel-backed record store."""

from typing import Any

import structlog
from sqlalchemy import case
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from order_numbering.models.order_number_counter import OrderNumberCounter
from order_numbering.services.numbering.exceptions import ConfigurationError, StoreError

logger = structlog.get_logger(__name__)

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the prefix matches literally."""
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def latest_by_prefix_statement(column: Any, prefix: str, dialect: str) -> Any:
    """Select the greatest ``column`` value starting with ``prefix``.

    Values compare byte by byte. PostgreSQL locale collations skip
    punctuation, so the ordering there is pinned to the "C" collation.
    """
    order_column = column.collate("C") if dialect == "postgresql" else column
    return (
        select(column)
        .where(column.like(f"{_escape_like(prefix)}%", escape=_LIKE_ESCAPE))
        .order_by(order_column.desc())
        .limit(1)
    )


class SQLModelRecordStore:
    """Record store over one SQLModel table.

    The session is owned by the caller and this store never commits. The
    counter upsert runs inside whatever transaction is open.
    """

    def __init__(self, session: AsyncSession, model_class: type[SQLModel]):
        if session is None:
            raise ConfigurationError("SQLModelRecordStore requires a session")
        self.session = session
        self.model_class = model_class

    def _column(self, field: str) -> Any:
        column = getattr(self.model_class, field, None)
        if column is None:
            raise ConfigurationError(f"{self.model_class.__name__} has no field {field!r}")
        return column

    def _dialect(self) -> str:
        return self.session.get_bind().dialect.name

    async def find_latest_by_prefix(self, field: str, prefix: str) -> str | None:
        statement = latest_by_prefix_statement(self._column(field), prefix, self._dialect())
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise StoreError(f"Latest {self.model_class.__name__}.{field} lookup failed: {e}") from e
        latest: str | None = result.scalars().first()
        return latest

    async def exists_by_exact_field(self, field: str, value: str) -> bool:
        column = self._column(field)
        statement = select(column).where(column == value).limit(1)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise StoreError(f"{self.model_class.__name__}.{field} existence check failed: {e}") from e
        return result.first() is not None

    async def increment_counter(self, scope: str, date_prefix: str, floor: int) -> int:
        dialect = self._dialect()
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise StoreError(f"Atomic counters are not supported on {dialect}")

        table = OrderNumberCounter.__table__  # type: ignore[attr-defined]
        statement = insert(table).values(scope=scope, date_prefix=date_prefix, value=floor)
        bumped = table.c.value + 1
        statement = statement.on_conflict_do_update(
            index_elements=[table.c.scope, table.c.date_prefix],
            set_={"value": case((bumped >= statement.excluded.value, bumped), else_=statement.excluded.value)},
        ).returning(table.c.value)

        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise StoreError(f"Counter update for {scope}/{date_prefix} failed: {e}") from e
        value: int = result.scalar_one()
        logger.debug("Order number counter advanced", scope=scope, date_prefix=date_prefix, value=value)
        return value
