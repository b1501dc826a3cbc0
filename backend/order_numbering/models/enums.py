"""Enum definitions for database models."""

from enum import StrEnum

from order_numbering.services.numbering.exceptions import UnsupportedOrderType


class OrderType(StrEnum):
    """Kind of order that receives a date-scoped order number."""

    PURCHASE = "purchase"
    SHIPPING = "shipping"
    SALE = "sale"

    @classmethod
    def parse(cls, value: "OrderType | str") -> "OrderType":
        """Normalize case and whitespace, reject anything outside the allow-list."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedOrderType(value)
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnsupportedOrderType(value) from None
