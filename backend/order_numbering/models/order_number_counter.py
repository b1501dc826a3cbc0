"""Per-day order number counter model."""

from sqlmodel import Field, SQLModel


class OrderNumberCounter(SQLModel, table=True):
    """Last issued sequence value per (order type, date prefix).

    Updated with a single INSERT ... ON CONFLICT DO UPDATE ... RETURNING
    so concurrent allocations for the same day never observe the same value.
    Values are stored before wraparound.
    """

    __tablename__ = "order_number_counters"

    scope: str = Field(primary_key=True, max_length=32)
    date_prefix: str = Field(primary_key=True, max_length=64)
    value: int = Field(default=0)
