"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- numbering: Order number formatting, allocation, uniqueness and routing
- orders: Order creation workflow that persists records with their numbers
"""
