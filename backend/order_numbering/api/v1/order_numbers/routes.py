"""Order number API endpoints."""

from datetime import date

import structlog
from fastapi import APIRouter, HTTPException, Query

from order_numbering.api.v1.order_numbers.dependencies import OrderNumberServiceDep, SessionDep
from order_numbering.api.v1.order_numbers.schemas import OrderNumberResponse, UniquenessResponse
from order_numbering.models.enums import OrderType
from order_numbering.services.numbering.exceptions import (
    StoreError,
    UniquenessExhausted,
    UnsupportedOrderType,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/order-numbers", tags=["order-numbers"])


@router.post("/{order_type}/next", response_model=OrderNumberResponse, operation_id="generateOrderNumber")
async def generate_order_number(
    order_type: str,
    service: OrderNumberServiceDep,
    session: SessionDep,
    business_date: date | None = Query(default=None, alias="date"),
) -> OrderNumberResponse:
    """Issue the next order number for today, or for the given business date.

    Advances and commits the per-day counter, so every call consumes a
    number even if no order is saved with it.
    """
    try:
        if business_date is not None:
            order_number = await service.generate_for_date(order_type, business_date)
        else:
            order_number = await service.generate(order_type)
        # Keep the counter advance so the number is not handed out twice
        await session.commit()
    except UnsupportedOrderType:
        raise HTTPException(status_code=404, detail="Unsupported order type")
    except StoreError:
        logger.exception("Order number generation failed", order_type=order_type)
        raise HTTPException(status_code=503, detail="Order number store unavailable")

    return OrderNumberResponse(order_type=OrderType.parse(order_type), order_number=order_number)


@router.get("/{order_type}/unique", response_model=OrderNumberResponse, operation_id="generateUniqueOrderNumber")
async def generate_unique_order_number(
    order_type: str,
    service: OrderNumberServiceDep,
    base: str = Query(min_length=1),
) -> OrderNumberResponse:
    """Return ``base`` or the first free ``base-N`` variant."""
    try:
        order_number = await service.generate_unique(order_type, base)
    except UnsupportedOrderType:
        raise HTTPException(status_code=404, detail="Unsupported order type")
    except UniquenessExhausted:
        raise HTTPException(status_code=409, detail="No unique order number available")
    except StoreError:
        logger.exception("Unique order number lookup failed", order_type=order_type, base=base)
        raise HTTPException(status_code=503, detail="Order number store unavailable")

    return OrderNumberResponse(order_type=OrderType.parse(order_type), order_number=order_number)


@router.get("/{order_type}/check", response_model=UniquenessResponse, operation_id="checkOrderNumber")
async def check_order_number(
    order_type: str,
    service: OrderNumberServiceDep,
    candidate: str = Query(min_length=1),
) -> UniquenessResponse:
    """Check whether a candidate order number is unused."""
    try:
        unique = await service.is_unique(order_type, candidate)
    except UnsupportedOrderType:
        raise HTTPException(status_code=404, detail="Unsupported order type")
    except StoreError:
        logger.exception("Order number check failed", order_type=order_type, candidate=candidate)
        raise HTTPException(status_code=503, detail="Order number store unavailable")

    return UniquenessResponse(order_type=OrderType.parse(order_type), candidate=candidate, unique=unique)
