"""Purchase order, shipping order and sale database models.

Only the fields needed to persist an order together with its number are
modelled here.
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


PURCHASE_ORDER_POID_CONSTRAINT = UniqueConstraint("poid", name="uq_purchase_orders_poid")
SHIPPING_ORDER_SOID_CONSTRAINT = UniqueConstraint("soid", name="uq_shipping_orders_soid")
SALE_NUMBER_CONSTRAINT = UniqueConstraint("saleNumber", name="uq_sales_sale_number")


class PurchaseOrder(SQLModel, table=True):
    """Purchase order (進貨單) identified by its poid."""

    __tablename__ = "purchase_orders"
    __table_args__ = (PURCHASE_ORDER_POID_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    poid: str = Field(index=True)
    supplier_name: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))


class ShippingOrder(SQLModel, table=True):
    """Shipping order (出貨單) identified by its soid."""

    __tablename__ = "shipping_orders"
    __table_args__ = (SHIPPING_ORDER_SOID_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    soid: str = Field(index=True)
    customer_name: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))


class Sale(SQLModel, table=True):
    """Point-of-sale transaction identified by its sale number."""

    __tablename__ = "sales"
    __table_args__ = (SALE_NUMBER_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    # Column keeps the historical "saleNumber" name
    sale_number: str = Field(sa_column=Column("saleNumber", String, nullable=False, index=True))
    total: int = 0  # Minor currency units
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
