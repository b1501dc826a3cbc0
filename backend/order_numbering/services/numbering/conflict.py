"""Race-condition-safe order number insertion using savepoints."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import structlog
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from order_numbering.services.numbering.exceptions import AllocationRetriesExhausted, ConfigurationError

logger = structlog.get_logger(__name__)


class OrderNumberOnConflict:
    """Async iterator with savepoint-based retry on order number conflicts.

    Each iteration allocates a fresh order number and opens a savepoint.
    If the insert inside the attempt violates the order number's unique
    constraint, the savepoint is rolled back and the next iteration
    allocates again against current data.

    Usage:
        async for attempt in OrderNumberOnConflict(
            session=self.session,
            allocate=lambda: allocator.allocate(now),
            constraint=PURCHASE_ORDER_POID_CONSTRAINT,
        ):
            async with attempt:
                order = PurchaseOrder(poid=attempt.value, ...)
                session.add(order)
                await session.flush()
    """

    def __init__(
        self,
        session: AsyncSession,
        allocate: Callable[[], Awaitable[str]],
        constraint: UniqueConstraint,
        max_retries: int = 5,
    ):
        self.session = session
        self.allocate = allocate
        self.constraint = constraint
        self.max_retries = max_retries
        self.current_attempt = 0
        self._value: str | None = None
        self._savepoint: AsyncSessionTransaction | None = None
        self._success = False

        if not self.constraint.name:
            raise ConfigurationError("UniqueConstraint must have a name for conflict detection.")
        if max_retries < 1:
            raise ConfigurationError(f"max_retries must be at least 1, got {max_retries}")

    async def __aiter__(self) -> AsyncIterator["OrderNumberOnConflict"]:
        while self.current_attempt < self.max_retries and not self._success:
            self.current_attempt += 1
            self._value = await self.allocate()
            yield self
        if not self._success:
            logger.error(
                "Order number conflicts exhausted retries",
                max_retries=self.max_retries,
                constraint=self.constraint.name,
                last_value=self._value,
            )
            raise AllocationRetriesExhausted(self._value or "", self.max_retries, str(self.constraint.name))

    @property
    def value(self) -> str:
        if self._value is None:
            raise RuntimeError("Value not yet allocated for this attempt.")
        return self._value

    def _is_number_conflict(self, exc: IntegrityError) -> bool:
        """Whether the IntegrityError comes from this attempt's unique constraint."""
        error_str = str(exc.orig if exc.orig is not None else exc).lower()
        name = str(self.constraint.name).lower()
        # PostgreSQL reports the constraint name, SQLite reports table.column
        if f'"{name}"' in error_str:
            return True
        table = self.constraint.table
        if table is None:
            return False
        return any(f"{table.name}.{column.name}".lower() in error_str for column in self.constraint.columns)

    async def __aenter__(self) -> "OrderNumberOnConflict":
        self._savepoint = await self.session.begin_nested()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> bool:
        savepoint, self._savepoint = self._savepoint, None
        assert savepoint is not None

        if exc_type is None:
            await savepoint.commit()
            await self.session.commit()
            self._success = True
            return False

        await savepoint.rollback()
        if isinstance(exc_val, IntegrityError) and self._is_number_conflict(exc_val):
            logger.warning(
                "Order number conflict, retrying",
                attempt=self.current_attempt,
                max_retries=self.max_retries,
                constraint=self.constraint.name,
                order_number=self._value,
            )
            return True  # Suppress exception, allow retry
        return False  # Re-raise other exceptions
