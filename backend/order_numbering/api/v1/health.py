"""Health check endpoint for the order number API."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", operation_id="healthCheck")
async def health_check() -> dict[str, str]:
    """Report that the order number service is up.

    Does not touch the database; a failing store surfaces as 503 on the
    order number routes instead.
    """
    return {"status": "healthy", "service": "order-numbering"}
