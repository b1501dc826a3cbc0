"""Datetime utility functions."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from order_numbering.config import Settings, settings


def business_timezone(config: Settings | None = None) -> ZoneInfo:
    """Timezone whose calendar day scopes order number sequences."""
    return ZoneInfo((config or settings).timezone)


def business_now(config: Settings | None = None) -> datetime:
    """Current time in the business timezone (from config)."""
    return datetime.now(UTC).astimezone(business_timezone(config))
