"""FastAPI dependencies for service injection."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from order_numbering.db import get_session
from order_numbering.services.numbering.order_number_service import OrderNumberService


async def get_order_number_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> OrderNumberService:
    """Get an OrderNumberService bound to the current session."""
    return OrderNumberService.for_session(session)


# Type aliases for cleaner endpoint signatures
SessionDep = Annotated[AsyncSession, Depends(get_session)]
OrderNumberServiceDep = Annotated[OrderNumberService, Depends(get_order_number_service)]
