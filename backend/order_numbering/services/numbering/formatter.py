"""Pure functions for building and parsing order numbers.

No I/O and no time zone handling: callers pass a timestamp that is already
in the business day they want numbered.
"""

import re
from datetime import date, datetime

from order_numbering.services.numbering.sequence_config import SequenceConfig


def date_prefix(now: date | datetime, config: SequenceConfig) -> str:
    """Return ``prefix + year + month + day`` for the given day.

    >>> date_prefix(date(2024, 3, 15), SequenceConfig(prefix="SO"))
    'SO20240315'
    >>> date_prefix(date(2024, 3, 15), SequenceConfig(prefix="SO", use_short_year=True))
    'SO240315'
    """
    year = f"{now.year:04d}"
    if config.use_short_year:
        year = year[-2:]
    return f"{config.prefix}{year}{now.month:02d}{now.day:02d}"


def extract_sequence(identifier: str, prefix: str, digits: int) -> int | None:
    """Extract the trailing ``digits``-wide sequence from an order number.

    The date prefix is stripped when present, then the last ``digits``
    decimal digits of the remainder are parsed. Legacy numbers with extra
    characters still yield a sequence as long as the tail is numeric:

    >>> extract_sequence("SO20240315-ABC-010", "SO20240315", 3)
    10
    >>> extract_sequence("SO20240315ABC", "SO20240315", 3) is None
    True
    """
    if digits < 1:
        return None
    remainder = identifier[len(prefix) :] if prefix and identifier.startswith(prefix) else identifier
    match = re.search(rf"([0-9]{{{digits}}})\Z", remainder)
    if match is None:
        return None
    return int(match.group(1))


def format_sequence(n: int, digits: int) -> str:
    """Zero-pad ``n`` to ``digits`` characters.

    Wraparound must already be applied so that ``n < 10 ** digits``.
    """
    return f"{n:0{digits}d}"


def wrap_sequence(n: int, config: SequenceConfig) -> int:
    """Fold ``n`` into the configured digit width.

    ``0`` is never emitted as a restart value; it becomes ``sequence_start``.
    """
    wrapped = n % config.capacity
    if wrapped == 0:
        return config.sequence_start
    return wrapped


def fold_counter(n: int, config: SequenceConfig) -> int:
    """Map a raw counter value onto ``[sequence_start, capacity)``.

    Unlike :func:`wrap_sequence`, consecutive counter values always map to
    different sequences, so the number after ``999`` is ``sequence_start``
    and the one after that is ``sequence_start + 1``:

    >>> [fold_counter(n, SequenceConfig()) for n in (999, 1000, 1001)]
    [999, 1, 2]
    """
    start = config.sequence_start
    if n < start:
        return n
    return start + (n - start) % (config.capacity - start)
