"""Shared test constants and helpers."""

from datetime import date

BUSINESS_DATE = date(2024, 3, 15)
