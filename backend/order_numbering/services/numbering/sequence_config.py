"""Sequence configuration for one order type."""

from dataclasses import dataclass, replace
from typing import Any

from order_numbering.services.numbering.exceptions import ConfigurationError


@dataclass(frozen=True)
class SequenceConfig:
    """How order numbers of one order type are formatted.

    Numbers look like ``prefix + YYYYMMDD (or YYMMDD) + zero-padded sequence``,
    e.g. ``SO20240315001`` for ``prefix="SO"`` and 3 sequence digits.
    """

    prefix: str = ""
    use_short_year: bool = False
    sequence_digits: int = 3
    sequence_start: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.sequence_digits, bool) or not isinstance(self.sequence_digits, int):
            raise ConfigurationError(f"sequence_digits must be an integer, got {self.sequence_digits!r}")
        if self.sequence_digits < 1:
            raise ConfigurationError(f"sequence_digits must be at least 1, got {self.sequence_digits}")
        if isinstance(self.sequence_start, bool) or not isinstance(self.sequence_start, int):
            raise ConfigurationError(f"sequence_start must be an integer, got {self.sequence_start!r}")
        if self.sequence_start < 0:
            raise ConfigurationError(f"sequence_start must not be negative, got {self.sequence_start}")
        if self.sequence_start >= self.capacity:
            raise ConfigurationError(
                f"sequence_start {self.sequence_start} does not fit in {self.sequence_digits} digits"
            )

    @property
    def capacity(self) -> int:
        """Number of distinct sequence strings (10 ** sequence_digits)."""
        return 10**self.sequence_digits

    def with_overrides(self, **overrides: Any) -> "SequenceConfig":
        """Return a validated copy with the given fields replaced."""
        unknown = set(overrides) - {"prefix", "use_short_year", "sequence_digits", "sequence_start"}
        if unknown:
            raise ConfigurationError(f"Unknown sequence config fields: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)
