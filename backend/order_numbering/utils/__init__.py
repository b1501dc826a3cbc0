"""Utility functions and helpers."""

from order_numbering.utils.datetime_utils import business_now, business_timezone

__all__ = [
    "business_now",
    "business_timezone",
]
