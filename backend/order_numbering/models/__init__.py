"""Database models."""

from sqlmodel import SQLModel

from order_numbering.models.enums import OrderType
from order_numbering.models.order_number_counter import OrderNumberCounter
from order_numbering.models.orders import PurchaseOrder, Sale, ShippingOrder

__all__ = [
    "SQLModel",
    "OrderType",
    "OrderNumberCounter",
    "PurchaseOrder",
    "Sale",
    "ShippingOrder",
]
