"""Disambiguation of caller-supplied order numbers."""

import structlog

from order_numbering.services.numbering.exceptions import ConfigurationError, UniquenessExhausted
from order_numbering.services.numbering.store import RecordStore

logger = structlog.get_logger(__name__)


class UniquenessGuarantor:
    """Turn a caller-chosen order number into one absent from the store.

    ``base`` is returned unchanged when unused, otherwise ``base-1``,
    ``base-2``, ... are tried in order. ``max_attempts`` bounds the number of
    suffixed variants checked.
    """

    def __init__(self, store: RecordStore, field: str, max_attempts: int = 100):
        if store is None or not field:
            raise ConfigurationError("UniquenessGuarantor requires a record store and a field name")
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        self.store = store
        self.field = field
        self.max_attempts = max_attempts

    async def ensure_unique(self, base: str) -> str:
        if not await self.store.exists_by_exact_field(self.field, base):
            return base

        for suffix in range(1, self.max_attempts + 1):
            candidate = f"{base}-{suffix}"
            if not await self.store.exists_by_exact_field(self.field, candidate):
                logger.info("Order number taken, using suffixed variant", base=base, order_number=candidate)
                return candidate

        logger.error("Order number suffixes exhausted", base=base, max_attempts=self.max_attempts)
        raise UniquenessExhausted(base, self.max_attempts)
