"""Order creation workflow.

Persists a new purchase order, shipping order or sale together with its
order number in one transaction, re-allocating the number when a
concurrent request inserted the same one first.
"""

from datetime import date, datetime
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from order_numbering.config import Settings, settings
from order_numbering.models.enums import OrderType
from order_numbering.services.numbering.conflict import OrderNumberOnConflict
from order_numbering.services.numbering.order_number_service import OrderNumberService

logger = structlog.get_logger(__name__)


class OrderCreationService:
    """Service for creating orders with unique order numbers."""

    def __init__(self, session: AsyncSession, config: Settings | None = None):
        self.session = session
        self.config = config or settings
        self.numbers = OrderNumberService.for_session(session, self.config)

    async def create(
        self,
        order_type: OrderType | str,
        order_number: str | None = None,
        *,
        now: date | datetime | None = None,
        **fields: Any,
    ) -> SQLModel:
        """Create and commit an order record.

        Without ``order_number`` the next number for the business day is
        generated; a caller-supplied number is kept when free, otherwise
        suffixed (``-1``, ``-2``, ...).
        """
        parsed, route = self.numbers.route(order_type)

        async def allocate() -> str:
            return await self.numbers.resolve(parsed, order_number, now=now)

        record: SQLModel | None = None
        async for attempt in OrderNumberOnConflict(
            session=self.session,
            allocate=allocate,
            constraint=route.constraint,
            max_retries=self.config.order_number_max_insert_retries,
        ):
            async with attempt:
                record = route.model_class(**{route.field: attempt.value}, **fields)
                self.session.add(record)
                await self.session.flush()

        assert record is not None
        logger.info(
            "Created order",
            order_type=parsed.value,
            order_number=getattr(record, route.field),
            attempts=attempt.current_attempt,
        )
        return record
