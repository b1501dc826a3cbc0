"""Order numbers API package.

Endpoints for generating and checking purchase, shipping and sale order
numbers. Order creation itself lives with the order workflows.
"""

from order_numbering.api.v1.order_numbers.routes import router

__all__ = ["router"]
