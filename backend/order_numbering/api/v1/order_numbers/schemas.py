"""API schemas for order number endpoints."""

from pydantic import BaseModel

from order_numbering.models.enums import OrderType


class OrderNumberResponse(BaseModel):
    """A generated or disambiguated order number."""

    order_type: OrderType
    order_number: str


class UniquenessResponse(BaseModel):
    """Whether a candidate order number is still free."""

    order_type: OrderType
    candidate: str
    unique: bool
