"""Order numbering exceptions."""

from order_numbering.services.exceptions import NotFoundError, ServiceError, ValidationError


class NumberingError(ServiceError):
    """Base exception for order number generation."""

    pass


class ConfigurationError(NumberingError, ValidationError):
    """Invalid sequence configuration or missing store/field.

    Raised at construction time, never retried.
    """

    pass


class UnsupportedOrderType(NumberingError, NotFoundError):
    """Order type is not one of the known order kinds."""

    def __init__(self, order_type: object):
        self.order_type = order_type
        super().__init__(f"Unsupported order type: {order_type!r}")


class StoreError(NumberingError):
    """Record store query, insert or counter update failed."""

    pass


class UniquenessExhausted(NumberingError):
    """No unused order number found within the attempt limit."""

    def __init__(self, base: str, attempts: int, message: str | None = None):
        self.base = base
        self.attempts = attempts
        super().__init__(message or f"Could not find a unique order number for {base!r} after {attempts} attempts")


class AllocationRetriesExhausted(UniquenessExhausted):
    """Insert kept conflicting on the order number unique constraint."""

    def __init__(self, last_value: str, attempts: int, constraint: str):
        self.constraint = constraint
        super().__init__(
            last_value,
            attempts,
            f"Failed to allocate unique order number after {attempts} retries (constraint: {constraint})",
        )
