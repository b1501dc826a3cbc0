"""Record store interface consumed by the order number services."""

from typing import Protocol


class RecordStore(Protocol):
    """Persistence operations the numbering services need.

    Implementations raise ``StoreError`` when the backing store fails.
    """

    async def find_latest_by_prefix(self, field: str, prefix: str) -> str | None:
        """Return the greatest ``field`` value starting with ``prefix``, if any."""
        ...

    async def exists_by_exact_field(self, field: str, value: str) -> bool:
        """Return True if a record has exactly ``value`` in ``field``."""
        ...

    async def increment_counter(self, scope: str, date_prefix: str, floor: int) -> int:
        """Atomically advance the counter for ``(scope, date_prefix)``.

        Stores and returns ``max(current + 1, floor)``, or ``floor`` when the
        counter does not exist yet.
        """
        ...
